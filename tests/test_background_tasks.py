"""Tests for the background task runners and the realtime publisher."""

from __future__ import annotations

import asyncio
import threading

from app.infrastructure.notifications import (
    BackgroundTaskRunner,
    InlineTaskRunner,
    NotificationConnectionManager,
    RealtimeEventPublisher,
)


def test_background_runner_executes_work():
    done = threading.Event()
    received = []

    def work(value, *, flag):
        received.append((value, flag, threading.current_thread().name))
        done.set()

    runner = BackgroundTaskRunner(max_workers=2)
    try:
        runner.submit(work, 1, flag=True)
        assert done.wait(timeout=5)
    finally:
        runner.shutdown()

    value, flag, thread_name = received[0]
    assert (value, flag) == (1, True)
    assert thread_name.startswith("notify")


def test_background_runner_logs_failures(caplog):
    def boom():
        raise ValueError("kaput")

    runner = BackgroundTaskRunner(max_workers=1)
    with caplog.at_level("ERROR"):
        future = runner.submit(boom)
        future.result(timeout=5)
        runner.shutdown()

    assert "Background task" in caplog.text


def test_background_runner_restarts_after_shutdown():
    runner = BackgroundTaskRunner(max_workers=1)
    runner.shutdown()

    future = runner.submit(lambda: None)

    assert future is not None
    future.result(timeout=5)
    runner.shutdown()


def test_inline_runner_runs_immediately_and_contains_errors():
    calls = []
    runner = InlineTaskRunner()

    runner.submit(calls.append, "ran")
    runner.submit(lambda: 1 / 0)

    assert calls == ["ran"]


def test_publisher_without_loop_or_portal_skips_quietly():
    publisher = RealtimeEventPublisher(NotificationConnectionManager())

    count = publisher.dispatch_many(
        ["U1", "U1", "", "U2"], event_type="new_notification", payload={"message": "x"}
    )

    assert count == 2


def test_inline_runner_matches_runner_interface():
    runner = InlineTaskRunner()

    assert runner.submit(lambda: None) is None
    runner.shutdown(wait=True)


class _RecordingPortal:
    def __init__(self):
        self.calls = []

    def start_task_soon(self, func, *args):
        self.calls.append(args)


class _FakeSocket:
    async def accept(self):
        return None

    async def send_json(self, message):
        return None


def test_publisher_only_signals_connected_users():
    manager = NotificationConnectionManager()
    asyncio.run(manager.connect("U1", _FakeSocket()))
    portal = _RecordingPortal()
    publisher = RealtimeEventPublisher(manager)
    publisher.attach_portal(portal)

    publisher.dispatch_many(["U1", "U2"], event_type="new_notification", payload={"message": "x"})

    assert manager.is_connected("U1")
    assert not manager.is_connected("U2")
    assert [user_id for user_id, _message in portal.calls] == ["U1"]
