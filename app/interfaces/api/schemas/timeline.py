"""Pydantic models describing complaint timeline entries."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class TimelineActorRead(BaseModel):
    user_id: str | None = None
    role: str | None = None
    name: str | None = None


class TimelineEventRead(BaseModel):
    """One entry of a complaint's audit trail."""

    id: str
    complaint_id: str
    event_type: str
    occurred_at: datetime
    actor: TimelineActorRead | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
    idempotency_key: str | None = None


class TimelineResponse(BaseModel):
    complaint_id: str
    events: list[TimelineEventRead]


__all__ = ["TimelineActorRead", "TimelineEventRead", "TimelineResponse"]
