"""Recipient resolution and display text for notifiable timeline events.

Recipients come from two independent strategies. Admins always receive a
broadcast; officers are targeted by the strategies registered for the event
type in :data:`EVENT_HANDLERS`. Adding an event type means adding one entry.

Strategies and body builders receive the event payload already parsed into
the model registered for its type in
:data:`~app.domain.entities.timeline_payloads.PAYLOAD_SCHEMAS`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from pydantic import ValidationError as PayloadValidationError

from app.domain.entities import (
    Notification,
    TimelineEvent,
    TimelineEventType,
    TimelinePayload,
    payload_schema_for,
)
from app.domain.entities.timeline_payloads import (
    ComplaintClosedPayload,
    ComplaintCreatedPayload,
    DocumentAddedPayload,
    NoteAddedPayload,
    OfficerAssignedPayload,
    OfficerDocumentAddedPayload,
    OfficerNoteAddedPayload,
    OfficerReassignedPayload,
)
from app.domain.exceptions import ResolutionError
from app.utils import now_in_app_timezone

EXCERPT_MAX_LENGTH = 120
FALLBACK_TITLE = "Complaint update"


class RecipientDirectory(Protocol):
    """Read-only lookups needed to resolve recipients."""

    def get_all_admin_user_ids(self) -> list[str]: ...

    def get_assigned_officer_user_id(self, complaint_id: str) -> str | None: ...

    def get_extension_requester_user_id(self, request_id: str) -> str | None: ...


OfficerStrategy = Callable[[str, TimelinePayload, RecipientDirectory], Iterable[str | None]]


def _dedupe(user_ids: Iterable[str | None]) -> list[str]:
    seen: dict[str, None] = {}
    for user_id in user_ids:
        if user_id:
            seen.setdefault(str(user_id), None)
    return list(seen)


def _text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _excerpt(value: str | None) -> str | None:
    text = _text(value)
    return text[:EXCERPT_MAX_LENGTH] if text else None


# Officer strategies -------------------------------------------------------


def from_payload(*fields: str) -> OfficerStrategy:
    """Target the user ids held by ``fields`` of the parsed payload."""

    def strategy(complaint_id: str, payload: TimelinePayload, directory: RecipientDirectory):
        return [_text(getattr(payload, name, None)) for name in fields]

    return strategy


def assigned_officer(*, except_field: str | None = None) -> OfficerStrategy:
    """Target the officer currently assigned to the complaint.

    With ``except_field`` the officer is skipped when they are the user named
    by that payload field (for example the one who closed the complaint).
    """

    def strategy(complaint_id: str, payload: TimelinePayload, directory: RecipientDirectory):
        officer_id = directory.get_assigned_officer_user_id(complaint_id)
        if (
            officer_id
            and except_field
            and officer_id == _text(getattr(payload, except_field, None))
        ):
            return []
        return [officer_id]

    return strategy


def extension_requester() -> OfficerStrategy:
    """Target whoever filed the extension request named by ``request_id``."""

    def strategy(complaint_id: str, payload: TimelinePayload, directory: RecipientDirectory):
        request_id = _text(getattr(payload, "request_id", None))
        if request_id is None:
            return []
        return [directory.get_extension_requester_user_id(request_id)]

    return strategy


def admin_broadcast(directory: RecipientDirectory) -> list[str]:
    """Every active admin receives every enabled notifiable event."""

    return _dedupe(directory.get_all_admin_user_ids())


# Registry -----------------------------------------------------------------


@dataclass(frozen=True)
class EventHandler:
    title: str
    body: Callable[[Any], str]
    officers: Sequence[OfficerStrategy] = field(default_factory=tuple)


def _complaint_created_body(payload: ComplaintCreatedPayload) -> str:
    return _text(payload.title) or "A new complaint was created."


def _officer_assigned_body(payload: OfficerAssignedPayload) -> str:
    if _text(payload.officer_name):
        return "You have been assigned to a complaint."
    return "Complaint assigned."


def _officer_reassigned_body(payload: OfficerReassignedPayload) -> str:
    name = _text(payload.new_officer_name)
    return f"Complaint reassigned to {name}." if name else "Complaint reassigned."


def _complaint_closed_body(payload: ComplaintClosedPayload) -> str:
    name = _text(payload.closed_by_name)
    return f"Closed by {name}." if name else "Complaint has been closed."


def _note_added_body(payload: NoteAddedPayload) -> str:
    return _excerpt(payload.excerpt) or "A note was added."


def _document_added_body(payload: DocumentAddedPayload) -> str:
    file_name = _text(payload.file_name)
    if not file_name:
        return "A document was added."
    return f"Document: {file_name} ({(payload.file_type or '').lower()})"


def _officer_note_added_body(payload: OfficerNoteAddedPayload) -> str:
    return _excerpt(payload.excerpt) or "An officer added a note."


def _officer_document_added_body(payload: OfficerDocumentAddedPayload) -> str:
    file_name = _text(payload.file_name)
    return f"Document: {file_name}" if file_name else "An officer added a document."


def _constant(body: str) -> Callable[[Any], str]:
    return lambda payload: body


EVENT_HANDLERS: Mapping[TimelineEventType, EventHandler] = {
    TimelineEventType.COMPLAINT_CREATED: EventHandler(
        title="New complaint created",
        body=_complaint_created_body,
    ),
    TimelineEventType.OFFICER_ASSIGNED: EventHandler(
        title="Complaint assigned to you",
        body=_officer_assigned_body,
        officers=(from_payload("assigned_to_user_id"),),
    ),
    TimelineEventType.OFFICER_REASSIGNED: EventHandler(
        title="Complaint reassigned",
        body=_officer_reassigned_body,
        officers=(from_payload("previous_officer_id", "new_officer_id"),),
    ),
    TimelineEventType.OFFICER_UNASSIGNED: EventHandler(
        title="Complaint unassigned from you",
        body=_constant("The complaint has been unassigned from you."),
        officers=(from_payload("previous_officer_id"),),
    ),
    TimelineEventType.EXTENSION_REQUESTED: EventHandler(
        title="Extension requested",
        body=_constant("An officer has requested a time extension for a complaint."),
    ),
    TimelineEventType.EXTENSION_APPROVED: EventHandler(
        title="Extension approved",
        body=_constant("Your time extension request has been approved."),
        officers=(extension_requester(),),
    ),
    TimelineEventType.EXTENSION_REJECTED: EventHandler(
        title="Extension rejected",
        body=_constant("Your time extension request has been rejected."),
        officers=(extension_requester(),),
    ),
    TimelineEventType.COMPLAINT_CLOSED: EventHandler(
        title="Complaint closed",
        body=_complaint_closed_body,
        officers=(assigned_officer(except_field="closed_by_user_id"),),
    ),
    TimelineEventType.NOTE_ADDED: EventHandler(
        title="Note added to complaint",
        body=_note_added_body,
        officers=(assigned_officer(),),
    ),
    TimelineEventType.DOCUMENT_ADDED: EventHandler(
        title="Document added to complaint",
        body=_document_added_body,
        officers=(assigned_officer(),),
    ),
    TimelineEventType.OFFICER_NOTE_ADDED: EventHandler(
        title="Officer added a note",
        body=_officer_note_added_body,
    ),
    TimelineEventType.OFFICER_DOCUMENT_ADDED: EventHandler(
        title="Officer added a document",
        body=_officer_document_added_body,
    ),
}


def _fallback_handler(event_type: str) -> EventHandler:
    return EventHandler(title=FALLBACK_TITLE, body=_constant(f"Event: {event_type}"))


@dataclass(frozen=True)
class RecipientResolution:
    """Who should be told about an event and what they should read."""

    admin_user_ids: list[str]
    officer_user_ids: list[str]
    title: str
    body: str

    @property
    def recipient_ids(self) -> list[str]:
        """Admins then officers, each user at most once."""

        return _dedupe([*self.admin_user_ids, *self.officer_user_ids])


def resolve_for_event(
    event_type: TimelineEventType | str,
    complaint_id: str,
    payload: Mapping[str, Any] | None,
    *,
    directory: RecipientDirectory,
) -> RecipientResolution:
    """Compute recipients and text for one event.

    Raises :class:`ResolutionError` when the payload does not fit its schema
    or a directory lookup fails.
    """

    parsed_type = TimelineEventType.parse(event_type)
    type_name = parsed_type.value if parsed_type else str(event_type)
    schema = payload_schema_for(parsed_type) if parsed_type else TimelinePayload

    try:
        parsed_payload = schema.model_validate(dict(payload or {}))
    except PayloadValidationError as exc:
        raise ResolutionError(f"Payload for {type_name} is malformed") from exc

    handler = EVENT_HANDLERS.get(parsed_type) if parsed_type else None
    if handler is None:
        handler = _fallback_handler(type_name)

    try:
        admin_ids = admin_broadcast(directory)
        officer_ids = _dedupe(
            user_id
            for strategy in handler.officers
            for user_id in strategy(complaint_id, parsed_payload, directory)
        )
        body = handler.body(parsed_payload)
    except Exception as exc:
        raise ResolutionError(
            f"Could not resolve recipients for {type_name} complaint={complaint_id}"
        ) from exc

    return RecipientResolution(
        admin_user_ids=admin_ids,
        officer_user_ids=officer_ids,
        title=handler.title,
        body=body,
    )


def build_notifications(
    event: TimelineEvent, resolution: RecipientResolution
) -> list[Notification]:
    """One unread :class:`Notification` per distinct recipient of ``event``."""

    created_at = now_in_app_timezone()
    return [
        Notification(
            id=None,
            user_id=user_id,
            event_type=event.event_type.value,
            complaint_id=event.complaint_id,
            title=resolution.title,
            body=resolution.body,
            payload=dict(event.payload or {}),
            timeline_event_id=event.id,
            created_at=created_at,
            read_at=None,
        )
        for user_id in resolution.recipient_ids
    ]


__all__ = [
    "EXCERPT_MAX_LENGTH",
    "FALLBACK_TITLE",
    "EVENT_HANDLERS",
    "EventHandler",
    "RecipientDirectory",
    "RecipientResolution",
    "admin_broadcast",
    "assigned_officer",
    "extension_requester",
    "from_payload",
    "resolve_for_event",
    "build_notifications",
]
