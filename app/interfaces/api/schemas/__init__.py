from .notification import (
    NotificationListResponse,
    NotificationMarkAllReadResponse,
    NotificationMarkReadResponse,
    NotificationRead,
    NotificationSettingRead,
    NotificationSettingsResponse,
    NotificationSettingsUpdateRequest,
    NotificationSettingUpdate,
    PaginationMeta,
    UnreadCountResponse,
)
from .timeline import TimelineActorRead, TimelineEventRead, TimelineResponse

__all__ = [
    "NotificationListResponse",
    "NotificationMarkAllReadResponse",
    "NotificationMarkReadResponse",
    "NotificationRead",
    "NotificationSettingRead",
    "NotificationSettingsResponse",
    "NotificationSettingsUpdateRequest",
    "NotificationSettingUpdate",
    "PaginationMeta",
    "UnreadCountResponse",
    "TimelineActorRead",
    "TimelineEventRead",
    "TimelineResponse",
]
