"""Tests for turning timeline events into notifications."""

from __future__ import annotations

import threading

import pytest

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    get_unread_count,
    handle_timeline_event,
    set_notification_enabled,
)
from app.application.use_cases.timeline import append_event
from app.domain.entities import TimelineEvent, TimelineEventType
from app.domain.exceptions import TransientStoreError
from app.infrastructure.database import SessionLocal
from app.infrastructure.models import NotificationModel
from app.infrastructure.notifications import BackgroundTaskRunner, InlineTaskRunner
from app.infrastructure.repositories import NotificationRepository


def _notifications(session) -> list[NotificationModel]:
    session.expire_all()
    return session.query(NotificationModel).order_by(NotificationModel.user_id).all()


def _event(event_type, payload=None, complaint_id="C1") -> TimelineEvent:
    return TimelineEvent(
        id="E1",
        complaint_id=complaint_id,
        event_type=TimelineEventType(event_type),
        occurred_at=None,
        payload=payload or {},
    )


def test_officer_assignment_notifies_admins_and_officer(
    session, directory_rows, inline_dispatcher, emitter
):
    result = append_event(
        session,
        "C1",
        TimelineEventType.OFFICER_ASSIGNED,
        payload={"assigned_to_user_id": "U7"},
        dispatcher=inline_dispatcher,
    )

    rows = _notifications(session)
    assert [row.user_id for row in rows] == ["A1", "A2", "U7"]
    for row in rows:
        assert row.event_type == "officer_assigned"
        assert row.complaint_id == "C1"
        assert row.timeline_event_id == result.event.id
        assert row.read_at is None
    assert sorted(emitter.calls[0]) == ["A1", "A2", "U7"]


def test_disabled_event_type_produces_nothing(session, directory_rows, inline_dispatcher, emitter):
    set_notification_enabled(session, "note_added", False)
    before = {user: get_unread_count(session, user) for user in ("A1", "A2", "O1")}

    append_event(
        session, "C1", "note_added", payload={"note_id": "N1"}, dispatcher=inline_dispatcher
    )

    assert _notifications(session) == []
    assert {user: get_unread_count(session, user) for user in before} == before
    assert emitter.calls == []


def test_non_notifiable_event_produces_nothing(session, directory_rows, emitter):
    stored = handle_timeline_event(session, _event("status_changed"), emit=emitter)

    assert stored == []
    assert _notifications(session) == []


def test_duplicate_append_does_not_notify_twice(session, directory_rows, inline_dispatcher):
    for _ in range(2):
        append_event(
            session,
            "C1",
            "note_added",
            payload={"note_id": "N1"},
            idempotency_key="note-N1",
            dispatcher=inline_dispatcher,
        )

    assert [row.user_id for row in _notifications(session)] == ["A1", "A2", "O1"]


def test_inactive_admins_are_not_notified(session, directory_rows, emitter):
    stored = handle_timeline_event(session, _event("complaint_created"), emit=emitter)

    assert sorted(n.user_id for n in stored) == ["A1", "A2"]


def test_overlapping_admin_and_officer_gets_one_notification(session, directory_rows, emitter):
    stored = handle_timeline_event(
        session, _event("officer_assigned", {"assigned_to_user_id": "A2"}), emit=emitter
    )

    assert sorted(n.user_id for n in stored) == ["A1", "A2"]


def test_no_recipients_means_no_rows(session, make_directory, emitter):
    stored = handle_timeline_event(
        session,
        _event("complaint_created"),
        directory=make_directory(admins=[]),
        emit=emitter,
    )

    assert stored == []
    assert emitter.calls == []


def test_resolution_failure_drops_the_event(session, make_directory, emitter):
    stored = handle_timeline_event(
        session,
        _event("note_added"),
        directory=make_directory(fail=True),
        emit=emitter,
    )

    assert stored == []
    assert _notifications(session) == []


def test_insert_failure_is_logged_and_dropped(session, directory_rows, emitter, monkeypatch, caplog):
    def _fail(self, notifications):
        raise TransientStoreError("Notification insert failed")

    monkeypatch.setattr(NotificationRepository, "bulk_create", _fail)

    with caplog.at_level("ERROR"):
        stored = handle_timeline_event(session, _event("complaint_created"), emit=emitter)

    assert stored == []
    assert emitter.calls == []
    assert "Notification insert failed" in caplog.text


def test_emit_failure_keeps_committed_notifications(session, directory_rows, failing_emitter):
    stored = handle_timeline_event(session, _event("complaint_created"), emit=failing_emitter)

    assert len(stored) == 2
    assert len(_notifications(session)) == 2
    assert len(failing_emitter.calls) == 1


def test_dispatcher_swallows_processing_errors(emitter, caplog):
    def _broken_session():
        raise RuntimeError("no database")

    dispatcher = NotificationDispatcher(_broken_session, InlineTaskRunner(), emit=emitter)

    with caplog.at_level("ERROR"):
        dispatcher.notify(_event("note_added"))

    assert emitter.calls == []
    assert "E1" in caplog.text


def test_dispatcher_swallows_scheduling_errors(caplog):
    class _RejectingRunner:
        def submit(self, fn, *args, **kwargs):
            raise RuntimeError("queue full")

    dispatcher = NotificationDispatcher(SessionLocal, _RejectingRunner())

    with caplog.at_level("ERROR"):
        dispatcher.notify(_event("note_added"))

    assert "Could not schedule notifications" in caplog.text


def test_background_dispatch_does_not_block_the_caller(session, directory_rows):
    started = threading.Event()
    release = threading.Event()
    finished = threading.Event()

    def _emit(user_ids):
        finished.set()

    class _GatedRunner(BackgroundTaskRunner):
        def submit(self, fn, *args, **kwargs):
            def gated(*inner_args, **inner_kwargs):
                started.set()
                release.wait(timeout=5)
                fn(*inner_args, **inner_kwargs)

            return super().submit(gated, *args, **kwargs)

    runner = _GatedRunner(max_workers=1)
    dispatcher = NotificationDispatcher(SessionLocal, runner, emit=_emit)
    try:
        append_event(
            session,
            "C1",
            "officer_assigned",
            payload={"assigned_to_user_id": "U7"},
            dispatcher=dispatcher,
        )
        assert started.wait(timeout=5)
        # The append returned while the worker is still parked.
        assert _notifications(session) == []

        release.set()
        assert finished.wait(timeout=5)
    finally:
        runner.shutdown(wait=True)

    assert [row.user_id for row in _notifications(session)] == ["A1", "A2", "U7"]


@pytest.mark.parametrize("event_type", ["letter_saved", "research_completed"])
def test_audit_only_events_are_not_notified(session, directory_rows, inline_dispatcher, event_type):
    append_event(session, "C1", event_type, dispatcher=inline_dispatcher)

    assert _notifications(session) == []
