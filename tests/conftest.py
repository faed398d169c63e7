"""Shared fixtures: a throwaway SQLite database and stub collaborators."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "grievance_notifications_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["APP_TIMEZONE"] = "Asia/Kolkata"

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.application.use_cases.notifications import NotificationDispatcher  # noqa: E402
from app.domain.entities import TimelineEvent  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.models import (  # noqa: E402
    ComplaintExtensionRequestModel,
    ComplaintModel,
    UserModel,
)
from app.infrastructure.notifications import InlineTaskRunner  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure every test starts from empty tables."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def directory_rows(session):
    """Two admins, one officer assigned to C1 and one pending extension request."""

    session.add_all(
        [
            UserModel(id="A1", name="Admin One", role="admin", is_active=True),
            UserModel(id="A2", name="Admin Two", role="admin", is_active=True),
            UserModel(id="A3", name="Former Admin", role="admin", is_active=False),
            UserModel(id="O1", name="Officer One", role="officer", is_active=True),
            UserModel(id="U7", name="Officer Seven", role="officer", is_active=True),
            ComplaintModel(id="C1", assigned_to_user_id="O1"),
            ComplaintModel(id="C2", assigned_to_user_id=None),
            ComplaintExtensionRequestModel(id="R1", complaint_id="C1", requested_by="O1"),
        ]
    )
    session.commit()


class RecordingEmitter:
    """Collects the user ids passed to the realtime signal."""

    def __init__(self, *, fail: bool = False) -> None:
        self.calls: list[list[str]] = []
        self.fail = fail

    def __call__(self, user_ids) -> None:
        self.calls.append(list(user_ids))
        if self.fail:
            raise RuntimeError("socket layer unavailable")


class RecordingDispatcher:
    """Stands in for the dispatcher when only the hand-off matters."""

    def __init__(self) -> None:
        self.events: list[TimelineEvent] = []

    def notify(self, event: TimelineEvent) -> None:
        self.events.append(event)


class StubDirectory:
    def __init__(
        self,
        *,
        admins: list[str] | None = None,
        assigned: dict[str, str] | None = None,
        requesters: dict[str, str] | None = None,
        fail: bool = False,
    ) -> None:
        self.admins = admins or []
        self.assigned = assigned or {}
        self.requesters = requesters or {}
        self.fail = fail

    def get_all_admin_user_ids(self) -> list[str]:
        if self.fail:
            raise RuntimeError("directory offline")
        return list(self.admins)

    def get_assigned_officer_user_id(self, complaint_id: str) -> str | None:
        return self.assigned.get(complaint_id)

    def get_extension_requester_user_id(self, request_id: str) -> str | None:
        return self.requesters.get(request_id)


@pytest.fixture()
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture()
def inline_dispatcher(emitter) -> NotificationDispatcher:
    """Dispatcher that fans out synchronously on the test thread."""

    return NotificationDispatcher(SessionLocal, InlineTaskRunner(), emit=emitter)


@pytest.fixture()
def recording_dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture()
def failing_emitter() -> RecordingEmitter:
    return RecordingEmitter(fail=True)


@pytest.fixture()
def make_directory():
    return StubDirectory
