"""Read-only endpoints over the complaint timeline."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.timeline import (
    get_assignment_history as get_assignment_history_uc,
    get_timeline_for_complaint as get_timeline_for_complaint_uc,
    list_events_by_actor as list_events_by_actor_uc,
    list_events_by_type as list_events_by_type_uc,
)
from app.domain.entities import TimelineEvent, User
from app.domain.exceptions import ValidationError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_user, require_admin
from app.interfaces.api.schemas import TimelineActorRead, TimelineEventRead, TimelineResponse

router = APIRouter(tags=["timeline"])


def _event_to_schema(event: TimelineEvent) -> TimelineEventRead:
    actor = None
    if event.actor is not None:
        actor = TimelineActorRead(
            user_id=event.actor.user_id,
            role=event.actor.role,
            name=event.actor.name,
        )
    return TimelineEventRead(
        id=event.id,
        complaint_id=event.complaint_id,
        event_type=event.event_type.value,
        occurred_at=event.occurred_at,
        actor=actor,
        payload=event.payload or {},
        idempotency_key=event.idempotency_key,
    )


@router.get("/complaints/{complaint_id}/timeline", response_model=TimelineResponse)
def get_complaint_timeline(
    complaint_id: str,
    event_type: list[str] | None = Query(default=None),
    skip: int = Query(0, ge=0),
    limit: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> TimelineResponse:
    """Return the complaint's audit trail in the order actions happened."""

    try:
        events = get_timeline_for_complaint_uc(
            db, complaint_id, event_types=event_type, skip=skip, limit=limit
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return TimelineResponse(
        complaint_id=complaint_id, events=[_event_to_schema(e) for e in events]
    )


@router.get(
    "/complaints/{complaint_id}/timeline/assignments", response_model=TimelineResponse
)
def get_assignment_history(
    complaint_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> TimelineResponse:
    events = get_assignment_history_uc(db, complaint_id)
    return TimelineResponse(
        complaint_id=complaint_id, events=[_event_to_schema(e) for e in events]
    )


@router.get("/timeline/events", response_model=list[TimelineEventRead])
def list_timeline_events(
    actor_user_id: str | None = Query(default=None),
    event_type: str | None = Query(default=None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[TimelineEventRead]:
    """Newest-first reporting query filtered by actor or by event type."""

    if bool(actor_user_id) == bool(event_type):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide exactly one of actor_user_id or event_type",
        )

    try:
        if actor_user_id:
            events = list_events_by_actor_uc(db, actor_user_id, skip=skip, limit=limit)
        else:
            events = list_events_by_type_uc(db, event_type, skip=skip, limit=limit)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return [_event_to_schema(e) for e in events]
