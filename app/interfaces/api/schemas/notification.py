"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: str
    user_id: str
    event_type: str
    complaint_id: str
    title: str
    body: str
    payload: dict[str, Any] = Field(default_factory=dict)
    timeline_event_id: str | None = None
    created_at: datetime
    read_at: datetime | None = None


class PaginationMeta(BaseModel):
    total: int
    limit: int
    skip: int
    page: int
    total_pages: int


class NotificationListResponse(BaseModel):
    notifications: list[NotificationRead]
    pagination: PaginationMeta


class UnreadCountResponse(BaseModel):
    count: int


class NotificationMarkReadResponse(BaseModel):
    id: str
    read: bool = True
    read_at: datetime | None = None


class NotificationMarkAllReadResponse(BaseModel):
    modified_count: int


class NotificationSettingRead(BaseModel):
    event_type: str
    enabled: bool
    updated_at: datetime | None = None


class NotificationSettingUpdate(BaseModel):
    event_type: str = Field(..., min_length=1)
    enabled: bool


class NotificationSettingsUpdateRequest(BaseModel):
    """Payload used to switch one or more event types on or off."""

    settings: list[NotificationSettingUpdate]

    def as_mapping(self) -> dict[str, bool]:
        """Return ``event_type -> enabled``; later entries win."""

        return {item.event_type: item.enabled for item in self.settings}


class NotificationSettingsResponse(BaseModel):
    settings: list[NotificationSettingRead]


__all__ = [
    "NotificationRead",
    "PaginationMeta",
    "NotificationListResponse",
    "UnreadCountResponse",
    "NotificationMarkReadResponse",
    "NotificationMarkAllReadResponse",
    "NotificationSettingRead",
    "NotificationSettingUpdate",
    "NotificationSettingsUpdateRequest",
    "NotificationSettingsResponse",
]
