"""ORM models used by the application infrastructure."""

from .directory import ComplaintExtensionRequestModel, ComplaintModel, UserModel
from .notification import NotificationModel
from .notification_setting import NotificationSettingModel
from .timeline_event import TimelineEventModel

__all__ = [
    "ComplaintExtensionRequestModel",
    "ComplaintModel",
    "NotificationModel",
    "NotificationSettingModel",
    "TimelineEventModel",
    "UserModel",
]
