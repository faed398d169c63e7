"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"

    sequence = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), nullable=False, unique=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    event_type = Column(String(50), nullable=False, index=True)
    complaint_id = Column(String(64), nullable=False, index=True)
    title = Column(String(300), nullable=False)
    body = Column(Text, nullable=False, default="")
    payload = Column(JSON, nullable=False, default=dict)
    # Weak reference to the timeline event; no foreign key, no cascade.
    timeline_event_id = Column(String(36), nullable=True, index=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    read_at = Column(DateTime(), nullable=True)

    __table_args__ = (
        Index("ix_notification_user_created", "user_id", "created_at"),
        Index("ix_notification_user_read", "user_id", "read_at"),
        Index(
            "ix_notification_user_complaint_created",
            "user_id",
            "complaint_id",
            "created_at",
        ),
    )


__all__ = ["NotificationModel"]
