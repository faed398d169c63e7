"""Domain entities describing the append-only complaint timeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Final


class TimelineEventType(str, Enum):
    """Every action that can be recorded against a complaint."""

    # Lifecycle
    COMPLAINT_CREATED = "complaint_created"
    COMPLAINT_UPDATED = "complaint_updated"
    COMPLAINT_CLOSED = "complaint_closed"
    COMPLAINT_REOPENED = "complaint_reopened"

    # Status / priority
    STATUS_CHANGED = "status_changed"
    PRIORITY_CHANGED = "priority_changed"

    # Admin notes & documents
    NOTE_ADDED = "note_added"
    DOCUMENT_ADDED = "document_added"

    # Draft letter & officer selection
    OFFICER_SELECTED = "officer_selected"
    LETTER_DRAFTED = "letter_drafted"
    LETTER_REDRAFTED = "letter_redrafted"
    LETTER_SAVED = "letter_saved"
    RECIPIENT_UPDATED = "recipient_updated"

    # Assignment
    OFFICER_ASSIGNED = "officer_assigned"
    OFFICER_REASSIGNED = "officer_reassigned"
    OFFICER_UNASSIGNED = "officer_unassigned"

    # Officer notes & documents
    OFFICER_NOTE_ADDED = "officer_note_added"
    OFFICER_DOCUMENT_ADDED = "officer_document_added"

    # Extension
    EXTENSION_REQUESTED = "extension_requested"
    EXTENSION_APPROVED = "extension_approved"
    EXTENSION_REJECTED = "extension_rejected"

    # Officer demands for more context
    OFFICER_DEMAND_CREATED = "officer_demand_created"
    OFFICER_DEMAND_FULFILLED = "officer_demand_fulfilled"

    RESEARCH_COMPLETED = "research_completed"
    ACTIONS_GENERATED = "actions_generated"
    DOCUMENTS_SUMMARIZED = "documents_summarized"

    @classmethod
    def parse(cls, value: "TimelineEventType | str") -> "TimelineEventType | None":
        """Return the member for ``value`` or ``None`` when it is unknown."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return None


NOTIFIABLE_EVENT_TYPES: Final[tuple[TimelineEventType, ...]] = (
    TimelineEventType.COMPLAINT_CREATED,
    TimelineEventType.OFFICER_ASSIGNED,
    TimelineEventType.OFFICER_REASSIGNED,
    TimelineEventType.OFFICER_UNASSIGNED,
    TimelineEventType.EXTENSION_REQUESTED,
    TimelineEventType.EXTENSION_APPROVED,
    TimelineEventType.EXTENSION_REJECTED,
    TimelineEventType.COMPLAINT_CLOSED,
    TimelineEventType.NOTE_ADDED,
    TimelineEventType.DOCUMENT_ADDED,
    TimelineEventType.OFFICER_NOTE_ADDED,
    TimelineEventType.OFFICER_DOCUMENT_ADDED,
)

ASSIGNMENT_EVENT_TYPES: Final[tuple[TimelineEventType, ...]] = (
    TimelineEventType.OFFICER_ASSIGNED,
    TimelineEventType.OFFICER_REASSIGNED,
    TimelineEventType.OFFICER_UNASSIGNED,
)

ACTOR_ROLES: Final[frozenset[str]] = frozenset({"admin", "officer", "system", "citizen"})
ACTOR_NAME_MAX_LENGTH: Final[int] = 200


def is_notifiable_event_type(event_type: TimelineEventType | str) -> bool:
    """Return ``True`` when ``event_type`` may produce notifications."""

    return TimelineEventType.parse(event_type) in NOTIFIABLE_EVENT_TYPES


@dataclass(frozen=True)
class TimelineActor:
    """Who performed the recorded action."""

    user_id: str | None = None
    role: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class TimelineEvent:
    """Immutable audit record of one action taken on a complaint."""

    id: str
    complaint_id: str
    event_type: TimelineEventType
    occurred_at: datetime | None
    actor: TimelineActor | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    idempotency_key: str | None = None
    created_at: datetime | None = None


__all__ = [
    "TimelineEventType",
    "TimelineActor",
    "TimelineEvent",
    "NOTIFIABLE_EVENT_TYPES",
    "ASSIGNMENT_EVENT_TYPES",
    "ACTOR_ROLES",
    "ACTOR_NAME_MAX_LENGTH",
    "is_notifiable_event_type",
]
