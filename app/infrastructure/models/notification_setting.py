"""SQLAlchemy model for the per event type notification switches."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationSettingModel(Base):
    """Database representation of one on/off switch."""

    __tablename__ = "notification_setting"

    id = Column(Integer, primary_key=True, index=True)
    event_type = Column(String(50), nullable=False, unique=True)
    enabled = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["NotificationSettingModel"]
