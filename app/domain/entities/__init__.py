"""Domain entities exposed by the application."""

from .notification import Notification
from .notification_setting import NotificationSetting
from .timeline_event import (
    ACTOR_NAME_MAX_LENGTH,
    ACTOR_ROLES,
    ASSIGNMENT_EVENT_TYPES,
    NOTIFIABLE_EVENT_TYPES,
    TimelineActor,
    TimelineEvent,
    TimelineEventType,
    is_notifiable_event_type,
)
from .timeline_payloads import PAYLOAD_SCHEMAS, TimelinePayload, payload_schema_for
from .user import ADMIN_ROLE, User

__all__ = [
    "Notification",
    "NotificationSetting",
    "TimelineActor",
    "TimelineEvent",
    "TimelineEventType",
    "TimelinePayload",
    "NOTIFIABLE_EVENT_TYPES",
    "ASSIGNMENT_EVENT_TYPES",
    "ACTOR_ROLES",
    "ACTOR_NAME_MAX_LENGTH",
    "PAYLOAD_SCHEMAS",
    "payload_schema_for",
    "is_notifiable_event_type",
    "ADMIN_ROLE",
    "User",
]
