"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Notification:
    """In-app message delivered to one user about one complaint event.

    Everything except ``read_at`` is fixed at creation; ``read_at`` moves from
    ``None`` (unread) to a timestamp exactly once.
    """

    id: str | None
    user_id: str
    event_type: str
    complaint_id: str
    title: str
    body: str
    payload: dict[str, Any] = field(default_factory=dict)
    timeline_event_id: str | None = None
    created_at: datetime | None = None
    read_at: datetime | None = None

    @property
    def is_read(self) -> bool:
        return self.read_at is not None


__all__ = ["Notification"]
