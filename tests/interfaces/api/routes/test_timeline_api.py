"""Integration tests for the complaint timeline endpoints."""

from __future__ import annotations

from datetime import timedelta

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from app.application.use_cases.timeline import append_event
from app.domain.entities import TimelineActor
from app.infrastructure.database import SessionLocal
from app.infrastructure.security import create_access_token
from app.utils import now_in_app_timezone
from main import create_app


class _NoopDispatcher:
    def notify(self, event) -> None:
        return None


def _auth(user_id: str, role: str) -> dict[str, str]:
    token = create_access_token({"sub": user_id, "role": role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture()
def timeline():
    base = now_in_app_timezone()
    officer = TimelineActor(user_id="O1", role="officer", name="Officer One")
    entries = [
        ("complaint_created", {"title": "Pothole"}, None),
        ("officer_assigned", {"assigned_to_user_id": "O1"}, None),
        ("note_added", {"note_id": "N1", "excerpt": "Visited site"}, officer),
        ("officer_unassigned", {"previous_officer_id": "O1"}, None),
    ]
    with SessionLocal() as session:
        for offset, (event_type, payload, actor) in enumerate(entries):
            append_event(
                session,
                "C1",
                event_type,
                payload=payload,
                actor=actor,
                occurred_at=base + timedelta(minutes=offset),
                dispatcher=_NoopDispatcher(),
            )


def test_complaint_timeline_is_chronological(client: TestClient, timeline) -> None:
    response = client.get("/complaints/C1/timeline", headers=_auth("O1", "officer"))

    assert response.status_code == 200
    body = response.json()
    assert body["complaint_id"] == "C1"
    assert [event["event_type"] for event in body["events"]] == [
        "complaint_created",
        "officer_assigned",
        "note_added",
        "officer_unassigned",
    ]
    assert body["events"][2]["actor"] == {
        "user_id": "O1",
        "role": "officer",
        "name": "Officer One",
    }


def test_complaint_timeline_filter_by_type(client: TestClient, timeline) -> None:
    response = client.get(
        "/complaints/C1/timeline",
        params={"event_type": "note_added"},
        headers=_auth("A1", "admin"),
    )

    assert [event["payload"]["note_id"] for event in response.json()["events"]] == ["N1"]

    bad = client.get(
        "/complaints/C1/timeline", params={"event_type": "bogus"}, headers=_auth("A1", "admin")
    )
    assert bad.status_code == 400


def test_assignment_history(client: TestClient, timeline) -> None:
    response = client.get("/complaints/C1/timeline/assignments", headers=_auth("A1", "admin"))

    assert [event["event_type"] for event in response.json()["events"]] == [
        "officer_assigned",
        "officer_unassigned",
    ]


def test_reporting_endpoint_requires_admin_and_one_filter(client: TestClient, timeline) -> None:
    assert client.get(
        "/timeline/events", params={"actor_user_id": "O1"}, headers=_auth("O1", "officer")
    ).status_code == 403
    assert client.get("/timeline/events", headers=_auth("A1", "admin")).status_code == 400

    by_actor = client.get(
        "/timeline/events", params={"actor_user_id": "O1"}, headers=_auth("A1", "admin")
    )
    by_type = client.get(
        "/timeline/events", params={"event_type": "officer_assigned"}, headers=_auth("A1", "admin")
    )

    assert [event["event_type"] for event in by_actor.json()] == ["note_added"]
    assert [event["complaint_id"] for event in by_type.json()] == ["C1"]
