"""Repository implementations for infrastructure layer."""

from .directory_repository import DirectoryRepository
from .notification_repository import NotificationRepository
from .notification_setting_repository import NotificationSettingRepository
from .timeline_event_repository import TimelineEventRepository

__all__ = [
    "DirectoryRepository",
    "NotificationRepository",
    "NotificationSettingRepository",
    "TimelineEventRepository",
]
