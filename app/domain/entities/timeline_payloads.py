"""Payload shapes attached to timeline events, keyed by event type.

Each model documents the keys a domain operation records for one event type.
Fields are optional so that partial payloads are still accepted, extra keys
are kept verbatim, and a present key with the wrong type is rejected.
"""

from __future__ import annotations

from typing import Any, Final, Literal

from pydantic import BaseModel, ConfigDict

from .timeline_event import TimelineEventType


class TimelinePayload(BaseModel):
    """Base class for event payloads."""

    model_config = ConfigDict(extra="allow")


class ComplaintCreatedPayload(TimelinePayload):
    title: str | None = None
    category: str | None = None
    created_by: str | None = None
    created_by_user_id: str | None = None


class ComplaintUpdatedPayload(TimelinePayload):
    field: str | None = None
    old_value: Any = None
    new_value: Any = None


class StatusChangedPayload(TimelinePayload):
    old_status: str | None = None
    new_status: str | None = None


class PriorityChangedPayload(TimelinePayload):
    old_priority: str | None = None
    new_priority: str | None = None


class NoteAddedPayload(TimelinePayload):
    note_id: str | None = None
    excerpt: str | None = None


class DocumentAddedPayload(TimelinePayload):
    document_id: str | None = None
    file_name: str | None = None
    file_type: str | None = None


class OfficerAssignedPayload(TimelinePayload):
    assigned_to_user_id: str | None = None
    officer_id: str | None = None
    officer_name: str | None = None
    officer_email: str | None = None
    time_deadline_days: int | None = None
    is_new_officer: bool | None = None


class OfficerReassignedPayload(TimelinePayload):
    previous_officer_id: str | None = None
    previous_officer_name: str | None = None
    previous_officer_email: str | None = None
    new_officer_id: str | None = None
    new_officer_name: str | None = None
    new_officer_email: str | None = None
    new_time_deadline_days: int | None = None


class OfficerUnassignedPayload(TimelinePayload):
    previous_officer_id: str | None = None
    previous_officer_name: str | None = None
    previous_officer_email: str | None = None


class OfficerNoteAddedPayload(TimelinePayload):
    note_id: str | None = None
    officer_id: str | None = None
    type: Literal["inward", "outward"] | None = None
    excerpt: str | None = None


class OfficerDocumentAddedPayload(TimelinePayload):
    attachment_id: str | None = None
    officer_id: str | None = None
    file_name: str | None = None
    attachment_type: Literal["inward", "outward"] | None = None


class ExtensionRequestedPayload(TimelinePayload):
    request_id: str | None = None
    requested_by: str | None = None
    requested_by_role: Literal["officer", "admin"] | None = None
    days_requested: int | None = None
    reason: str | None = None


class ExtensionDecisionPayload(TimelinePayload):
    request_id: str | None = None
    decided_by: str | None = None
    new_deadline_days: int | None = None
    notes: str | None = None


class ComplaintClosedPayload(TimelinePayload):
    closed_by_user_id: str | None = None
    closed_by_name: str | None = None
    closed_by_email: str | None = None
    remarks_excerpt: str | None = None
    closed_at: str | None = None


class ComplaintReopenedPayload(TimelinePayload):
    reason: str | None = None
    previous_closed_at: str | None = None


class OfficerSelectedPayload(TimelinePayload):
    officer_name: str | None = None
    officer_email: str | None = None
    officer_designation: str | None = None


class LetterDraftedPayload(TimelinePayload):
    to_name: str | None = None
    to_designation: str | None = None


class RecipientUpdatedPayload(TimelinePayload):
    previous_officer_name: str | None = None
    new_officer_name: str | None = None
    new_officer_email: str | None = None


class OfficerDemandCreatedPayload(TimelinePayload):
    demand_id: str | None = None
    type: Literal["text", "docs", "images"] | None = None
    message: str | None = None
    attachment_urls: list[str] | None = None
    officer_id: str | None = None


class OfficerDemandFulfilledPayload(TimelinePayload):
    demand_id: str | None = None
    fulfilled_by: str | None = None


class ActionsGeneratedPayload(TimelinePayload):
    action_count: int | None = None


class DocumentsSummarizedPayload(TimelinePayload):
    summary_id: str | None = None
    document_count: int | None = None
    use_complaint_context: bool | None = None
    user_prompt_excerpt: str | None = None


PAYLOAD_SCHEMAS: Final[dict[TimelineEventType, type[TimelinePayload]]] = {
    TimelineEventType.COMPLAINT_CREATED: ComplaintCreatedPayload,
    TimelineEventType.COMPLAINT_UPDATED: ComplaintUpdatedPayload,
    TimelineEventType.COMPLAINT_CLOSED: ComplaintClosedPayload,
    TimelineEventType.COMPLAINT_REOPENED: ComplaintReopenedPayload,
    TimelineEventType.STATUS_CHANGED: StatusChangedPayload,
    TimelineEventType.PRIORITY_CHANGED: PriorityChangedPayload,
    TimelineEventType.NOTE_ADDED: NoteAddedPayload,
    TimelineEventType.DOCUMENT_ADDED: DocumentAddedPayload,
    TimelineEventType.OFFICER_SELECTED: OfficerSelectedPayload,
    TimelineEventType.LETTER_DRAFTED: LetterDraftedPayload,
    TimelineEventType.LETTER_REDRAFTED: LetterDraftedPayload,
    TimelineEventType.LETTER_SAVED: TimelinePayload,
    TimelineEventType.RECIPIENT_UPDATED: RecipientUpdatedPayload,
    TimelineEventType.OFFICER_ASSIGNED: OfficerAssignedPayload,
    TimelineEventType.OFFICER_REASSIGNED: OfficerReassignedPayload,
    TimelineEventType.OFFICER_UNASSIGNED: OfficerUnassignedPayload,
    TimelineEventType.OFFICER_NOTE_ADDED: OfficerNoteAddedPayload,
    TimelineEventType.OFFICER_DOCUMENT_ADDED: OfficerDocumentAddedPayload,
    TimelineEventType.EXTENSION_REQUESTED: ExtensionRequestedPayload,
    TimelineEventType.EXTENSION_APPROVED: ExtensionDecisionPayload,
    TimelineEventType.EXTENSION_REJECTED: ExtensionDecisionPayload,
    TimelineEventType.OFFICER_DEMAND_CREATED: OfficerDemandCreatedPayload,
    TimelineEventType.OFFICER_DEMAND_FULFILLED: OfficerDemandFulfilledPayload,
    TimelineEventType.RESEARCH_COMPLETED: TimelinePayload,
    TimelineEventType.ACTIONS_GENERATED: ActionsGeneratedPayload,
    TimelineEventType.DOCUMENTS_SUMMARIZED: DocumentsSummarizedPayload,
}


def payload_schema_for(event_type: TimelineEventType) -> type[TimelinePayload]:
    """Return the payload model registered for ``event_type``."""

    return PAYLOAD_SCHEMAS.get(event_type, TimelinePayload)


__all__ = [
    "TimelinePayload",
    "ComplaintCreatedPayload",
    "ComplaintUpdatedPayload",
    "StatusChangedPayload",
    "PriorityChangedPayload",
    "NoteAddedPayload",
    "DocumentAddedPayload",
    "OfficerAssignedPayload",
    "OfficerReassignedPayload",
    "OfficerUnassignedPayload",
    "OfficerNoteAddedPayload",
    "OfficerDocumentAddedPayload",
    "ExtensionRequestedPayload",
    "ExtensionDecisionPayload",
    "ComplaintClosedPayload",
    "ComplaintReopenedPayload",
    "OfficerSelectedPayload",
    "LetterDraftedPayload",
    "RecipientUpdatedPayload",
    "OfficerDemandCreatedPayload",
    "OfficerDemandFulfilledPayload",
    "ActionsGeneratedPayload",
    "DocumentsSummarizedPayload",
    "PAYLOAD_SCHEMAS",
    "payload_schema_for",
]
