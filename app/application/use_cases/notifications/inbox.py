"""Per-user read side of the notification store."""

from __future__ import annotations

import math
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import Notification
from app.domain.exceptions import NotFoundError, ValidationError
from app.infrastructure.repositories import NotificationRepository


@dataclass(frozen=True)
class NotificationPage:
    items: list[Notification]
    total: int
    limit: int
    skip: int

    @property
    def page(self) -> int:
        return self.skip // self.limit + 1

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)


def list_notifications(
    session: Session,
    user_id: str,
    *,
    complaint_id: str | None = None,
    event_type: str | None = None,
    unread_only: bool = False,
    limit: int | None = None,
    skip: int = 0,
) -> NotificationPage:
    """Return one newest-first page of ``user_id``'s notifications.

    ``limit`` defaults to the configured page size and is clamped to the
    configured maximum.
    """

    settings = get_settings()
    if limit is None:
        limit = settings.notification_page_default
    if limit < 1:
        raise ValidationError("limit must be greater than zero")
    if skip < 0:
        raise ValidationError("skip must be zero or greater")
    limit = min(limit, settings.notification_page_max)

    items, total = NotificationRepository(session).list_for_user(
        user_id,
        complaint_id=complaint_id,
        event_type=event_type,
        unread_only=unread_only,
        skip=skip,
        limit=limit,
    )
    return NotificationPage(items=items, total=total, limit=limit, skip=skip)


def get_unread_count(session: Session, user_id: str) -> int:
    return NotificationRepository(session).count_unread(user_id)


def mark_notification_read(
    session: Session, notification_id: str, user_id: str
) -> Notification:
    """Mark one of ``user_id``'s notifications as read.

    A notification owned by someone else is reported as missing.
    """

    notification = NotificationRepository(session).mark_as_read(
        notification_id, user_id=user_id
    )
    if notification is None:
        raise NotFoundError("Notification")
    return notification


def mark_all_notifications_read(session: Session, user_id: str) -> int:
    return NotificationRepository(session).mark_all_as_read(user_id)


__all__ = [
    "NotificationPage",
    "list_notifications",
    "get_unread_count",
    "mark_notification_read",
    "mark_all_notifications_read",
]
