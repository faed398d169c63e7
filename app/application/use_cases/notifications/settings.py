"""Admin-controlled on/off switches for notifiable event types."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import (
    NOTIFIABLE_EVENT_TYPES,
    NotificationSetting,
    TimelineEventType,
)
from app.domain.exceptions import ValidationError
from app.infrastructure.repositories import NotificationSettingRepository

logger = logging.getLogger(__name__)


def _require_notifiable(event_type: TimelineEventType | str) -> TimelineEventType:
    parsed = TimelineEventType.parse(event_type)
    if parsed is None or parsed not in NOTIFIABLE_EVENT_TYPES:
        raise ValidationError(f"Event type {event_type!r} is not notifiable")
    return parsed


def get_notification_settings(session: Session) -> list[NotificationSetting]:
    """Return every notifiable type with its flag; missing rows read as enabled."""

    stored = {
        setting.event_type: setting
        for setting in NotificationSettingRepository(session).list()
    }
    return [
        stored.get(event_type.value)
        or NotificationSetting(event_type=event_type.value, enabled=True)
        for event_type in NOTIFIABLE_EVENT_TYPES
    ]


def set_notification_enabled(
    session: Session, event_type: TimelineEventType | str, enabled: bool
) -> NotificationSetting:
    parsed = _require_notifiable(event_type)
    setting = NotificationSettingRepository(session).upsert(parsed.value, enabled=bool(enabled))
    logger.info(
        "Notification setting changed: %s enabled=%s", setting.event_type, setting.enabled
    )
    return setting


def update_notification_settings(
    session: Session, updates: Mapping[TimelineEventType | str, bool]
) -> list[NotificationSetting]:
    """Apply several switches at once and return the full settings list."""

    if not updates:
        raise ValidationError("At least one setting must be provided")

    # Validate everything before writing anything.
    parsed = [
        (_require_notifiable(event_type), bool(enabled))
        for event_type, enabled in updates.items()
    ]
    for event_type, enabled in parsed:
        set_notification_enabled(session, event_type, enabled)
    return get_notification_settings(session)


def is_notification_enabled(session: Session, event_type: TimelineEventType | str) -> bool:
    """Return the switch for ``event_type``; ``True`` when it cannot be read."""

    key = event_type.value if isinstance(event_type, TimelineEventType) else str(event_type)
    try:
        setting = NotificationSettingRepository(session).get(key)
    except Exception as exc:
        if isinstance(exc, SQLAlchemyError):
            session.rollback()
        logger.warning(
            "Notification setting lookup failed for %s; defaulting to enabled",
            key,
            exc_info=True,
        )
        return True
    return True if setting is None else setting.enabled


def seed_notification_settings(session: Session) -> list[str]:
    """Create enabled rows for notifiable types that have none yet."""

    created = NotificationSettingRepository(session).create_missing(
        event_type.value for event_type in NOTIFIABLE_EVENT_TYPES
    )
    if created:
        logger.info("Seeded notification settings: %s", ", ".join(created))
    return created


__all__ = [
    "get_notification_settings",
    "set_notification_enabled",
    "update_notification_settings",
    "is_notification_enabled",
    "seed_notification_settings",
]
