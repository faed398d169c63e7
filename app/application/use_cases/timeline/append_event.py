"""Use case for recording an action on a complaint's timeline."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import uuid4

from pydantic import ValidationError as PayloadValidationError
from pydantic_core import PydanticSerializationError
from sqlalchemy.orm import Session

from app.application.use_cases.notifications.dispatcher import (
    NotificationDispatcher,
    get_notification_dispatcher,
)
from app.domain.entities import (
    ACTOR_NAME_MAX_LENGTH,
    ACTOR_ROLES,
    TimelineActor,
    TimelineEvent,
    TimelineEventType,
    payload_schema_for,
)
from app.domain.exceptions import DuplicateEventError, ValidationError
from app.infrastructure.repositories import TimelineEventRepository
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppendResult:
    """Outcome of :func:`append_event`.

    ``duplicate`` is ``True`` when the idempotency key had already been used
    for the complaint; ``event`` is then the previously stored record.
    """

    event: TimelineEvent
    duplicate: bool = False


def _normalize_key(idempotency_key: str | None) -> str | None:
    if idempotency_key is None:
        return None
    key = str(idempotency_key).strip()
    return key or None


def _validate_actor(actor: TimelineActor | None) -> None:
    if actor is None:
        return
    if actor.role is not None and actor.role not in ACTOR_ROLES:
        raise ValidationError(f"Unknown actor role: {actor.role!r}")
    if actor.name is not None and len(actor.name) > ACTOR_NAME_MAX_LENGTH:
        raise ValidationError(
            f"Actor name must be at most {ACTOR_NAME_MAX_LENGTH} characters"
        )


def _validate_payload(
    event_type: TimelineEventType, payload: Mapping[str, Any] | None
) -> dict[str, Any]:
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ValidationError("Timeline payload must be a mapping")
    schema = payload_schema_for(event_type)
    try:
        parsed = schema.model_validate(dict(payload))
    except PayloadValidationError as exc:
        raise ValidationError(
            f"Invalid payload for {event_type.value}: {exc.errors()[0].get('msg')}"
        ) from exc
    try:
        return parsed.model_dump(mode="json", exclude_unset=True)
    except PydanticSerializationError as exc:
        raise ValidationError(
            f"Payload for {event_type.value} is not JSON serializable"
        ) from exc


def append_event(
    session: Session,
    complaint_id: str,
    event_type: TimelineEventType | str,
    *,
    payload: Mapping[str, Any] | None = None,
    actor: TimelineActor | None = None,
    idempotency_key: str | None = None,
    occurred_at: datetime | None = None,
    skip_notification: bool = False,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    """Store a timeline event and hand it to the notification dispatcher.

    A second append with the same non-empty ``idempotency_key`` for the same
    complaint stores nothing and returns the first event flagged as a
    duplicate. Notification fan-out never runs for duplicates and never
    blocks this call.
    """

    if not complaint_id or not str(complaint_id).strip():
        raise ValidationError("complaint_id is required")

    parsed_type = TimelineEventType.parse(event_type)
    if parsed_type is None:
        raise ValidationError(f"Unknown timeline event type: {event_type!r}")

    _validate_actor(actor)
    clean_payload = _validate_payload(parsed_type, payload)
    key = _normalize_key(idempotency_key)

    repository = TimelineEventRepository(session)

    if key is not None:
        existing = repository.find_by_idempotency_key(complaint_id, key)
        if existing is not None:
            logger.debug(
                "Timeline idempotency: skip duplicate %s key=%s complaint=%s",
                parsed_type.value,
                key,
                complaint_id,
            )
            return AppendResult(event=existing, duplicate=True)

    now = now_in_app_timezone()
    event = TimelineEvent(
        id=str(uuid4()),
        complaint_id=complaint_id,
        event_type=parsed_type,
        occurred_at=occurred_at or now,
        actor=actor,
        payload=clean_payload,
        idempotency_key=key,
        created_at=now,
    )

    try:
        stored = repository.add(event)
    except DuplicateEventError:
        existing = repository.find_by_idempotency_key(complaint_id, key or "")
        if existing is None:
            raise
        logger.debug(
            "Timeline duplicate key on insert (treating as skip): %s complaint=%s",
            parsed_type.value,
            complaint_id,
        )
        return AppendResult(event=existing, duplicate=True)

    logger.debug(
        "Timeline event appended: %s complaint=%s id=%s",
        stored.event_type.value,
        stored.complaint_id,
        stored.id,
    )

    if not skip_notification:
        (dispatcher or get_notification_dispatcher()).notify(stored)

    return AppendResult(event=stored, duplicate=False)


__all__ = ["AppendResult", "append_event"]
