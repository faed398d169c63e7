"""Domain entity describing the on/off switch for one notifiable event type."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class NotificationSetting:
    """Whether events of ``event_type`` produce notifications."""

    event_type: str
    enabled: bool = True
    updated_at: datetime | None = None


__all__ = ["NotificationSetting"]
