"""Tests for application start-up and shutdown."""

from __future__ import annotations

import asyncio

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from app.application.use_cases.notifications import get_notification_dispatcher
from app.infrastructure.notifications import realtime_event_publisher
from main import create_app


def _loop_is_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def test_shutdown_drains_runner_off_the_event_loop(monkeypatch):
    runner = get_notification_dispatcher().runner
    calls = []
    monkeypatch.setattr(runner, "shutdown", lambda **kwargs: calls.append(_loop_is_running()))

    with TestClient(create_app()):
        assert calls == []

    assert calls == [False]
    assert realtime_event_publisher._portal is None
