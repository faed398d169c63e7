"""Typed helpers used by domain services to record timeline events.

Each helper fixes the event type and, where a logical action can be retried,
derives the idempotency key from the payload so repeated calls record the
action once.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from app.application.use_cases.notifications.dispatcher import NotificationDispatcher
from app.domain.entities import TimelineActor, TimelineEventType

from .append_event import AppendResult, append_event

Payload = Mapping[str, Any]


def _key_from(payload: Payload, prefix: str, field: str) -> str | None:
    value = payload.get(field)
    if value is None or value == "":
        return None
    return f"{prefix}-{value}"


def _append(
    session: Session,
    complaint_id: str,
    event_type: TimelineEventType,
    payload: Payload | None,
    *,
    actor: TimelineActor | None,
    idempotency_key: str | None = None,
    skip_notification: bool = False,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return append_event(
        session,
        complaint_id,
        event_type,
        payload=payload,
        actor=actor,
        idempotency_key=idempotency_key,
        skip_notification=skip_notification,
        dispatcher=dispatcher,
    )


def append_complaint_created(
    session: Session,
    complaint_id: str,
    payload: Payload | None = None,
    *,
    actor: TimelineActor | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.COMPLAINT_CREATED,
        payload or {},
        actor=actor,
        idempotency_key=f"created-{complaint_id}",
        dispatcher=dispatcher,
    )


def append_complaint_updated(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.COMPLAINT_UPDATED,
        payload,
        actor=actor,
        dispatcher=dispatcher,
    )


def append_status_changed(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.STATUS_CHANGED,
        payload,
        actor=actor,
        dispatcher=dispatcher,
    )


def append_priority_changed(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.PRIORITY_CHANGED,
        payload,
        actor=actor,
        dispatcher=dispatcher,
    )


def append_note_added(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    idempotency_key: str | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.NOTE_ADDED,
        payload,
        actor=actor,
        idempotency_key=idempotency_key or _key_from(payload, "note", "note_id"),
        dispatcher=dispatcher,
    )


def append_document_added(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    idempotency_key: str | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.DOCUMENT_ADDED,
        payload,
        actor=actor,
        idempotency_key=idempotency_key or _key_from(payload, "doc", "document_id"),
        dispatcher=dispatcher,
    )


def append_officer_selected(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.OFFICER_SELECTED,
        payload,
        actor=actor,
        dispatcher=dispatcher,
    )


def append_letter_drafted(
    session: Session,
    complaint_id: str,
    payload: Payload | None = None,
    *,
    actor: TimelineActor | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.LETTER_DRAFTED,
        payload,
        actor=actor,
        dispatcher=dispatcher,
    )


def append_letter_redrafted(
    session: Session,
    complaint_id: str,
    payload: Payload | None = None,
    *,
    actor: TimelineActor | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.LETTER_REDRAFTED,
        payload,
        actor=actor,
        dispatcher=dispatcher,
    )


def append_letter_saved(
    session: Session,
    complaint_id: str,
    payload: Payload | None = None,
    *,
    actor: TimelineActor | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.LETTER_SAVED,
        payload,
        actor=actor,
        dispatcher=dispatcher,
    )


def append_recipient_updated(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.RECIPIENT_UPDATED,
        payload,
        actor=actor,
        dispatcher=dispatcher,
    )


def append_officer_assigned(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    idempotency_key: str | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.OFFICER_ASSIGNED,
        payload,
        actor=actor,
        idempotency_key=idempotency_key,
        dispatcher=dispatcher,
    )


def append_officer_reassigned(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    idempotency_key: str | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.OFFICER_REASSIGNED,
        payload,
        actor=actor,
        idempotency_key=idempotency_key,
        dispatcher=dispatcher,
    )


def append_officer_unassigned(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    idempotency_key: str | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.OFFICER_UNASSIGNED,
        payload,
        actor=actor,
        idempotency_key=idempotency_key,
        dispatcher=dispatcher,
    )


def append_officer_note_added(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    idempotency_key: str | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.OFFICER_NOTE_ADDED,
        payload,
        actor=actor,
        idempotency_key=idempotency_key or _key_from(payload, "officer-note", "note_id"),
        dispatcher=dispatcher,
    )


def append_officer_document_added(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    idempotency_key: str | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.OFFICER_DOCUMENT_ADDED,
        payload,
        actor=actor,
        idempotency_key=idempotency_key
        or _key_from(payload, "officer-doc", "attachment_id"),
        dispatcher=dispatcher,
    )


def append_extension_requested(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    idempotency_key: str | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.EXTENSION_REQUESTED,
        payload,
        actor=actor,
        idempotency_key=idempotency_key or _key_from(payload, "ext-req", "request_id"),
        dispatcher=dispatcher,
    )


def append_extension_approved(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.EXTENSION_APPROVED,
        payload,
        actor=actor,
        idempotency_key=_key_from(payload, "ext-approved", "request_id"),
        dispatcher=dispatcher,
    )


def append_extension_rejected(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.EXTENSION_REJECTED,
        payload,
        actor=actor,
        idempotency_key=_key_from(payload, "ext-rejected", "request_id"),
        dispatcher=dispatcher,
    )


def append_officer_demand_created(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    idempotency_key: str | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.OFFICER_DEMAND_CREATED,
        payload,
        actor=actor,
        idempotency_key=idempotency_key,
        dispatcher=dispatcher,
    )


def append_officer_demand_fulfilled(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.OFFICER_DEMAND_FULFILLED,
        payload,
        actor=actor,
        dispatcher=dispatcher,
    )


def append_complaint_closed(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.COMPLAINT_CLOSED,
        payload,
        actor=actor,
        dispatcher=dispatcher,
    )


def append_complaint_reopened(
    session: Session,
    complaint_id: str,
    payload: Payload | None = None,
    *,
    actor: TimelineActor | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.COMPLAINT_REOPENED,
        payload,
        actor=actor,
        dispatcher=dispatcher,
    )


def append_research_completed(
    session: Session,
    complaint_id: str,
    payload: Payload | None = None,
    *,
    actor: TimelineActor | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.RESEARCH_COMPLETED,
        payload,
        actor=actor,
        dispatcher=dispatcher,
    )


def append_actions_generated(
    session: Session,
    complaint_id: str,
    payload: Payload | None = None,
    *,
    actor: TimelineActor | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> AppendResult:
    return _append(
        session,
        complaint_id,
        TimelineEventType.ACTIONS_GENERATED,
        payload,
        actor=actor,
        dispatcher=dispatcher,
    )


def append_documents_summarized(
    session: Session,
    complaint_id: str,
    payload: Payload,
    *,
    actor: TimelineActor | None = None,
) -> AppendResult:
    """Record an attachment summary; timeline only, never notifies."""

    return _append(
        session,
        complaint_id,
        TimelineEventType.DOCUMENTS_SUMMARIZED,
        payload,
        actor=actor,
        idempotency_key=_key_from(payload, "summary", "summary_id"),
        skip_notification=True,
    )


__all__ = [
    "append_complaint_created",
    "append_complaint_updated",
    "append_status_changed",
    "append_priority_changed",
    "append_note_added",
    "append_document_added",
    "append_officer_selected",
    "append_letter_drafted",
    "append_letter_redrafted",
    "append_letter_saved",
    "append_recipient_updated",
    "append_officer_assigned",
    "append_officer_reassigned",
    "append_officer_unassigned",
    "append_officer_note_added",
    "append_officer_document_added",
    "append_extension_requested",
    "append_extension_approved",
    "append_extension_rejected",
    "append_officer_demand_created",
    "append_officer_demand_fulfilled",
    "append_complaint_closed",
    "append_complaint_reopened",
    "append_research_completed",
    "append_actions_generated",
    "append_documents_summarized",
]
