"""Persistence layer for the append-only complaint timeline."""

from __future__ import annotations

from collections.abc import Sequence
from uuid import uuid4

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import TimelineActor, TimelineEvent, TimelineEventType
from app.domain.exceptions import DuplicateEventError, TransientStoreError
from app.infrastructure.models import TimelineEventModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class TimelineEventRepository:
    """Store and query :class:`TimelineEvent` records.

    There is no update or delete operation.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, event: TimelineEvent) -> TimelineEvent:
        """Insert ``event`` and return the stored record.

        Raises :class:`DuplicateEventError` when the partial unique index on
        ``(complaint_id, idempotency_key)`` rejects the row and
        :class:`TransientStoreError` for any other database failure. The
        session is rolled back in both cases.
        """

        model = TimelineEventModel()
        self._apply_entity_to_model(model, event)
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            self._raise_if_duplicate(event)
            raise TransientStoreError("Timeline event insert failed") from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise TransientStoreError("Timeline event insert failed") from exc
        self.session.refresh(model)
        return self._to_entity(model)

    def find_by_idempotency_key(
        self, complaint_id: str, idempotency_key: str
    ) -> TimelineEvent | None:
        model = (
            self.session.query(TimelineEventModel)
            .filter(TimelineEventModel.complaint_id == complaint_id)
            .filter(TimelineEventModel.idempotency_key == idempotency_key)
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def list_by_complaint(
        self,
        complaint_id: str,
        *,
        event_types: Sequence[TimelineEventType] | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[TimelineEvent]:
        """Return the complaint's events in the order they occurred."""

        query = self.session.query(TimelineEventModel).filter(
            TimelineEventModel.complaint_id == complaint_id
        )
        if event_types:
            query = query.filter(
                TimelineEventModel.event_type.in_([t.value for t in event_types])
            )
        query = query.order_by(
            TimelineEventModel.occurred_at.asc(), TimelineEventModel.sequence.asc()
        )
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_by_actor(
        self, user_id: str, *, skip: int = 0, limit: int | None = 100
    ) -> list[TimelineEvent]:
        query = self.session.query(TimelineEventModel).filter(
            TimelineEventModel.actor_user_id == user_id
        )
        return self._newest_first(query, skip=skip, limit=limit)

    def list_by_type(
        self, event_type: TimelineEventType, *, skip: int = 0, limit: int | None = 100
    ) -> list[TimelineEvent]:
        query = self.session.query(TimelineEventModel).filter(
            TimelineEventModel.event_type == event_type.value
        )
        return self._newest_first(query, skip=skip, limit=limit)

    def _newest_first(self, query, *, skip: int, limit: int | None) -> list[TimelineEvent]:
        query = query.order_by(
            TimelineEventModel.occurred_at.desc(), TimelineEventModel.sequence.desc()
        )
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def _raise_if_duplicate(self, event: TimelineEvent) -> None:
        """Translate an integrity failure into :class:`DuplicateEventError`.

        The conflict is confirmed by looking the pair up again instead of
        inspecting driver specific error codes.
        """

        key = event.idempotency_key
        if not key:
            return
        if self.find_by_idempotency_key(event.complaint_id, key) is not None:
            raise DuplicateEventError(event.complaint_id, key)

    @staticmethod
    def _apply_entity_to_model(model: TimelineEventModel, event: TimelineEvent) -> None:
        now = now_in_app_timezone()
        actor = event.actor or TimelineActor()
        model.id = event.id or str(uuid4())
        model.complaint_id = event.complaint_id
        model.event_type = event.event_type.value
        model.occurred_at = ensure_app_naive_datetime(event.occurred_at or now)
        model.actor_user_id = actor.user_id
        model.actor_role = actor.role
        model.actor_name = actor.name
        model.payload = dict(event.payload or {})
        model.idempotency_key = event.idempotency_key or None
        model.created_at = ensure_app_naive_datetime(event.created_at or now)

    @staticmethod
    def _to_entity(model: TimelineEventModel) -> TimelineEvent:
        actor = None
        if model.actor_user_id or model.actor_role or model.actor_name:
            actor = TimelineActor(
                user_id=model.actor_user_id,
                role=model.actor_role,
                name=model.actor_name,
            )
        return TimelineEvent(
            id=model.id,
            complaint_id=model.complaint_id,
            event_type=TimelineEventType(model.event_type),
            occurred_at=ensure_app_timezone(model.occurred_at),
            actor=actor,
            payload=dict(model.payload or {}),
            idempotency_key=model.idempotency_key,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["TimelineEventRepository"]
