"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from app.domain.entities import Notification
from app.domain.exceptions import TransientStoreError
from app.infrastructure.models import NotificationModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide write and per-user read operations for :class:`Notification`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def bulk_create(self, notifications: Sequence[Notification]) -> list[Notification]:
        """Insert every notification in a single transaction.

        Raises :class:`TransientStoreError` after rolling back when the
        database rejects the batch.
        """

        if not notifications:
            return []
        models = []
        for notification in notifications:
            model = NotificationModel()
            self._apply_entity_to_model(model, notification)
            models.append(model)
        self.session.add_all(models)
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise TransientStoreError("Notification insert failed") from exc
        for model in models:
            self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def get_for_user(self, notification_id: str, *, user_id: str) -> Notification | None:
        model = self._owned_query(notification_id, user_id=user_id).one_or_none()
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: str,
        *,
        complaint_id: str | None = None,
        event_type: str | None = None,
        unread_only: bool = False,
        skip: int = 0,
        limit: int | None = 50,
    ) -> tuple[list[Notification], int]:
        """Return one page of ``user_id``'s notifications and the total count."""

        query = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )
        if complaint_id:
            query = query.filter(NotificationModel.complaint_id == complaint_id)
        if event_type:
            query = query.filter(NotificationModel.event_type == event_type)
        if unread_only:
            query = query.filter(NotificationModel.read_at.is_(None))

        total = query.count()
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.sequence.desc()
        )
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()], total

    def count_unread(self, user_id: str) -> int:
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.read_at.is_(None))
            .count()
        )

    def mark_as_read(self, notification_id: str, *, user_id: str) -> Notification | None:
        """Set ``read_at`` on an unread notification owned by ``user_id``.

        Returns ``None`` when no row matches the ``(id, user_id)`` pair. Rows
        that are already read are returned untouched.
        """

        model = self._owned_query(notification_id, user_id=user_id).one_or_none()
        if model is None:
            return None
        if model.read_at is None:
            model.read_at = ensure_app_naive_datetime(now_in_app_timezone())
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def mark_all_as_read(self, user_id: str) -> int:
        """Mark every unread notification of ``user_id``; return how many changed."""

        modified = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.read_at.is_(None))
            .update(
                {
                    NotificationModel.read_at: ensure_app_naive_datetime(
                        now_in_app_timezone()
                    )
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return int(modified or 0)

    def _owned_query(self, notification_id: str, *, user_id: str) -> Query:
        return self.session.query(NotificationModel).filter(
            NotificationModel.id == notification_id,
            NotificationModel.user_id == user_id,
        )

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.id = notification.id or str(uuid4())
        model.user_id = notification.user_id
        model.event_type = notification.event_type
        model.complaint_id = notification.complaint_id
        model.title = notification.title
        model.body = notification.body
        model.payload = dict(notification.payload or {})
        model.timeline_event_id = notification.timeline_event_id
        model.created_at = ensure_app_naive_datetime(
            notification.created_at or now_in_app_timezone()
        )
        model.read_at = ensure_app_naive_datetime(notification.read_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            event_type=model.event_type,
            complaint_id=model.complaint_id,
            title=model.title,
            body=model.body,
            payload=dict(model.payload or {}),
            timeline_event_id=model.timeline_event_id,
            created_at=ensure_app_timezone(model.created_at),
            read_at=ensure_app_timezone(model.read_at),
        )


__all__ = ["NotificationRepository"]
