"""Read-side use cases for complaint timelines."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import ASSIGNMENT_EVENT_TYPES, TimelineEvent, TimelineEventType
from app.domain.exceptions import ValidationError
from app.infrastructure.repositories import TimelineEventRepository


def _parse_types(
    event_types: Sequence[TimelineEventType | str] | None,
) -> list[TimelineEventType] | None:
    if not event_types:
        return None
    parsed: list[TimelineEventType] = []
    for value in event_types:
        event_type = TimelineEventType.parse(value)
        if event_type is None:
            raise ValidationError(f"Unknown timeline event type: {value!r}")
        parsed.append(event_type)
    return parsed


def _check_window(skip: int, limit: int | None) -> None:
    if skip < 0:
        raise ValidationError("skip must be zero or greater")
    if limit is not None and limit < 1:
        raise ValidationError("limit must be greater than zero")


def get_timeline_for_complaint(
    session: Session,
    complaint_id: str,
    *,
    event_types: Sequence[TimelineEventType | str] | None = None,
    skip: int = 0,
    limit: int | None = None,
) -> list[TimelineEvent]:
    """Return the events of ``complaint_id`` in chronological order."""

    _check_window(skip, limit)
    return TimelineEventRepository(session).list_by_complaint(
        complaint_id,
        event_types=_parse_types(event_types),
        skip=skip,
        limit=limit,
    )


def get_assignment_history(session: Session, complaint_id: str) -> list[TimelineEvent]:
    """Return only the assign, reassign and unassign events of a complaint."""

    return TimelineEventRepository(session).list_by_complaint(
        complaint_id, event_types=ASSIGNMENT_EVENT_TYPES
    )


def list_events_by_actor(
    session: Session, user_id: str, *, skip: int = 0, limit: int = 100
) -> list[TimelineEvent]:
    _check_window(skip, limit)
    return TimelineEventRepository(session).list_by_actor(user_id, skip=skip, limit=limit)


def list_events_by_type(
    session: Session,
    event_type: TimelineEventType | str,
    *,
    skip: int = 0,
    limit: int = 100,
) -> list[TimelineEvent]:
    _check_window(skip, limit)
    parsed = TimelineEventType.parse(event_type)
    if parsed is None:
        raise ValidationError(f"Unknown timeline event type: {event_type!r}")
    return TimelineEventRepository(session).list_by_type(parsed, skip=skip, limit=limit)


__all__ = [
    "get_timeline_for_complaint",
    "get_assignment_history",
    "list_events_by_actor",
    "list_events_by_type",
]
