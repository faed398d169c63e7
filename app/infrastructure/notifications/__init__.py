"""Realtime and background helpers for the notification pipeline."""

from .manager import NotificationConnectionManager, notification_manager
from .realtime import (
    NEW_NOTIFICATION_EVENT,
    RealtimeEventPublisher,
    emit_new_notifications_to_users,
    realtime_event_publisher,
)
from .tasks import BackgroundTaskRunner, InlineTaskRunner, TaskRunner

__all__ = [
    "NotificationConnectionManager",
    "notification_manager",
    "NEW_NOTIFICATION_EVENT",
    "RealtimeEventPublisher",
    "realtime_event_publisher",
    "emit_new_notifications_to_users",
    "BackgroundTaskRunner",
    "InlineTaskRunner",
    "TaskRunner",
]
