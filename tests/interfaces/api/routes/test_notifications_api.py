"""Integration tests for the notification endpoints."""

from __future__ import annotations

from datetime import timedelta

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from app.domain.entities import Notification
from app.infrastructure.database import SessionLocal
from app.infrastructure.notifications import emit_new_notifications_to_users
from app.infrastructure.repositories import NotificationRepository
from app.infrastructure.security import create_access_token
from app.utils import now_in_app_timezone
from main import create_app


def _auth(user_id: str, role: str) -> dict[str, str]:
    token = create_access_token({"sub": user_id, "role": role})
    return {"Authorization": f"Bearer {token}"}


ADMIN = _auth("A1", "admin")
OFFICER = _auth("O1", "officer")


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


def _seed(user_id: str, count: int, *, complaint_id: str = "C1") -> list[Notification]:
    base = now_in_app_timezone()
    with SessionLocal() as session:
        return NotificationRepository(session).bulk_create(
            [
                Notification(
                    id=None,
                    user_id=user_id,
                    event_type="note_added",
                    complaint_id=complaint_id,
                    title="Note added to complaint",
                    body=f"note {index}",
                    payload={"note_id": str(index)},
                    created_at=base + timedelta(seconds=index),
                )
                for index in range(count)
            ]
        )


def test_requests_without_token_are_rejected(client: TestClient) -> None:
    assert client.get("/notifications/").status_code == 401
    bad = client.get("/notifications/", headers={"Authorization": "Bearer not-a-jwt"})
    assert bad.status_code == 401


def test_list_notifications_returns_page_and_meta(client: TestClient) -> None:
    _seed("O1", 3)
    _seed("A1", 1)

    response = client.get("/notifications/", params={"limit": 2}, headers=OFFICER)

    assert response.status_code == 200
    body = response.json()
    assert [item["body"] for item in body["notifications"]] == ["note 2", "note 1"]
    assert body["notifications"][0]["complaint_id"] == "C1"
    assert body["notifications"][0]["payload"] == {"note_id": "2"}
    assert body["pagination"] == {
        "total": 3,
        "limit": 2,
        "skip": 0,
        "page": 1,
        "total_pages": 2,
    }


def test_list_rejects_invalid_limit(client: TestClient) -> None:
    response = client.get("/notifications/", params={"limit": 0}, headers=OFFICER)

    assert response.status_code == 400


def test_unread_count_and_mark_read(client: TestClient) -> None:
    first, _ = _seed("O1", 2)

    assert client.get("/notifications/unread-count", headers=OFFICER).json() == {"count": 2}

    response = client.patch(f"/notifications/{first.id}/read", headers=OFFICER)
    assert response.status_code == 200
    assert response.json()["id"] == first.id
    assert response.json()["read"] is True

    assert client.get("/notifications/unread-count", headers=OFFICER).json() == {"count": 1}


def test_mark_read_of_someone_elses_notification_is_404(client: TestClient) -> None:
    (notification,) = _seed("O1", 1)

    response = client.patch(f"/notifications/{notification.id}/read", headers=ADMIN)

    assert response.status_code == 404
    assert client.get("/notifications/unread-count", headers=OFFICER).json() == {"count": 1}


def test_mark_all_read(client: TestClient) -> None:
    _seed("O1", 3)

    first = client.patch("/notifications/read-all", headers=OFFICER)
    second = client.patch("/notifications/read-all", headers=OFFICER)

    assert first.json() == {"modified_count": 3}
    assert second.json() == {"modified_count": 0}


def test_settings_are_admin_only(client: TestClient) -> None:
    assert client.get("/notifications/settings", headers=OFFICER).status_code == 403

    response = client.get("/notifications/settings", headers=ADMIN)

    assert response.status_code == 200
    settings = response.json()["settings"]
    assert len(settings) == 12
    assert all(item["enabled"] for item in settings)


def test_update_settings(client: TestClient) -> None:
    response = client.patch(
        "/notifications/settings",
        json={"settings": [{"event_type": "note_added", "enabled": False}]},
        headers=ADMIN,
    )

    assert response.status_code == 200
    flags = {item["event_type"]: item["enabled"] for item in response.json()["settings"]}
    assert flags["note_added"] is False
    assert flags["document_added"] is True


@pytest.mark.parametrize(
    "payload",
    [
        {"settings": []},
        {"settings": [{"event_type": "status_changed", "enabled": False}]},
    ],
)
def test_update_settings_rejects_bad_input(client: TestClient, payload) -> None:
    response = client.patch("/notifications/settings", json=payload, headers=ADMIN)

    assert response.status_code == 400


def test_websocket_ping_and_push(client: TestClient) -> None:
    token = create_access_token({"sub": "U7", "role": "officer"})

    with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

        emit_new_notifications_to_users(["U7"])

        assert websocket.receive_json() == {
            "type": "new_notification",
            "data": {"message": "New notification"},
        }


def test_websocket_rejects_missing_or_invalid_token(client: TestClient) -> None:
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/notifications/ws") as websocket:
            websocket.receive_json()

    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/notifications/ws?token=garbage") as websocket:
            websocket.receive_json()
