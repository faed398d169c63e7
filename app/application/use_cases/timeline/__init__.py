"""Use cases for the append-only complaint timeline."""

from .append_event import AppendResult, append_event
from .events import (
    append_actions_generated,
    append_complaint_closed,
    append_complaint_created,
    append_complaint_reopened,
    append_complaint_updated,
    append_document_added,
    append_documents_summarized,
    append_extension_approved,
    append_extension_rejected,
    append_extension_requested,
    append_letter_drafted,
    append_letter_redrafted,
    append_letter_saved,
    append_note_added,
    append_officer_assigned,
    append_officer_demand_created,
    append_officer_demand_fulfilled,
    append_officer_document_added,
    append_officer_note_added,
    append_officer_reassigned,
    append_officer_selected,
    append_officer_unassigned,
    append_priority_changed,
    append_recipient_updated,
    append_research_completed,
    append_status_changed,
)
from .queries import (
    get_assignment_history,
    get_timeline_for_complaint,
    list_events_by_actor,
    list_events_by_type,
)

__all__ = [
    "AppendResult",
    "append_event",
    "append_actions_generated",
    "append_complaint_closed",
    "append_complaint_created",
    "append_complaint_reopened",
    "append_complaint_updated",
    "append_document_added",
    "append_documents_summarized",
    "append_extension_approved",
    "append_extension_rejected",
    "append_extension_requested",
    "append_letter_drafted",
    "append_letter_redrafted",
    "append_letter_saved",
    "append_note_added",
    "append_officer_assigned",
    "append_officer_demand_created",
    "append_officer_demand_fulfilled",
    "append_officer_document_added",
    "append_officer_note_added",
    "append_officer_reassigned",
    "append_officer_selected",
    "append_officer_unassigned",
    "append_priority_changed",
    "append_recipient_updated",
    "append_research_completed",
    "append_status_changed",
    "get_assignment_history",
    "get_timeline_for_complaint",
    "list_events_by_actor",
    "list_events_by_type",
]
