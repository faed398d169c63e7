"""SQLAlchemy model for the append-only complaint timeline."""

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String, and_

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class TimelineEventModel(Base):
    """Database representation of one action taken on a complaint."""

    __tablename__ = "complaint_timeline_event"

    # Surrogate key keeps insertion order for events sharing a timestamp.
    sequence = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), nullable=False, unique=True, index=True)
    complaint_id = Column(String(64), nullable=False, index=True)
    event_type = Column(String(50), nullable=False, index=True)
    occurred_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    actor_user_id = Column(String(64), nullable=True)
    actor_role = Column(String(20), nullable=True)
    actor_name = Column(String(200), nullable=True)
    payload = Column(JSON, nullable=False, default=dict)
    idempotency_key = Column(String(200), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    __table_args__ = (
        Index("ix_timeline_complaint_occurred", "complaint_id", "occurred_at"),
        Index("ix_timeline_actor_occurred", "actor_user_id", "occurred_at"),
        Index("ix_timeline_type_occurred", "event_type", "occurred_at"),
        Index(
            "uq_timeline_complaint_idempotency_key",
            "complaint_id",
            "idempotency_key",
            unique=True,
            sqlite_where=and_(
                idempotency_key.isnot(None), idempotency_key != ""
            ),
            postgresql_where=and_(
                idempotency_key.isnot(None), idempotency_key != ""
            ),
        ),
    )


__all__ = ["TimelineEventModel"]
