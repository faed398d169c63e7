"""Use cases for the notification pipeline and the per-user inbox."""

from .dispatcher import NotificationDispatcher, get_notification_dispatcher, handle_timeline_event
from .handlers import (
    EVENT_HANDLERS,
    RecipientResolution,
    build_notifications,
    resolve_for_event,
)
from .inbox import (
    NotificationPage,
    get_unread_count,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from .settings import (
    get_notification_settings,
    is_notification_enabled,
    seed_notification_settings,
    set_notification_enabled,
    update_notification_settings,
)

__all__ = [
    "NotificationDispatcher",
    "get_notification_dispatcher",
    "handle_timeline_event",
    "EVENT_HANDLERS",
    "RecipientResolution",
    "build_notifications",
    "resolve_for_event",
    "NotificationPage",
    "get_unread_count",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "get_notification_settings",
    "is_notification_enabled",
    "seed_notification_settings",
    "set_notification_enabled",
    "update_notification_settings",
]
