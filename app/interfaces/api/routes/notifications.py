"""Endpoints and websocket handler for in-app notifications."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    get_notification_settings as get_notification_settings_uc,
    get_unread_count as get_unread_count_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read as mark_all_notifications_read_uc,
    mark_notification_read as mark_notification_read_uc,
    update_notification_settings as update_notification_settings_uc,
)
from app.domain.entities import Notification, NotificationSetting, User
from app.domain.exceptions import NotFoundError, ValidationError
from app.infrastructure.database import get_db
from app.infrastructure.notifications import notification_manager
from app.interfaces.api.dependencies import get_current_user, require_admin, resolve_current_user
from app.interfaces.api.schemas import (
    NotificationListResponse,
    NotificationMarkAllReadResponse,
    NotificationMarkReadResponse,
    NotificationRead,
    NotificationSettingRead,
    NotificationSettingsResponse,
    NotificationSettingsUpdateRequest,
    PaginationMeta,
    UnreadCountResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or "",
        user_id=notification.user_id,
        event_type=notification.event_type,
        complaint_id=notification.complaint_id,
        title=notification.title,
        body=notification.body,
        payload=notification.payload or {},
        timeline_event_id=notification.timeline_event_id,
        created_at=notification.created_at,
        read_at=notification.read_at,
    )


def _setting_to_schema(setting: NotificationSetting) -> NotificationSettingRead:
    return NotificationSettingRead(
        event_type=setting.event_type,
        enabled=setting.enabled,
        updated_at=setting.updated_at,
    )


@router.get("/", response_model=NotificationListResponse)
def list_notifications(
    complaint_id: str | None = Query(default=None),
    event_type: str | None = Query(default=None),
    unread_only: bool = Query(default=False),
    limit: int | None = Query(default=None),
    skip: int = Query(default=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationListResponse:
    """Return one page of the caller's notifications, newest first."""

    try:
        page = list_notifications_uc(
            db,
            current_user.id,
            complaint_id=complaint_id,
            event_type=event_type,
            unread_only=unread_only,
            limit=limit,
            skip=skip,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return NotificationListResponse(
        notifications=[_notification_to_schema(item) for item in page.items],
        pagination=PaginationMeta(
            total=page.total,
            limit=page.limit,
            skip=page.skip,
            page=page.page,
            total_pages=page.total_pages,
        ),
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
def get_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UnreadCountResponse:
    return UnreadCountResponse(count=get_unread_count_uc(db, current_user.id))


@router.patch("/read-all", response_model=NotificationMarkAllReadResponse)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationMarkAllReadResponse:
    modified = mark_all_notifications_read_uc(db, current_user.id)
    return NotificationMarkAllReadResponse(modified_count=modified)


@router.get("/settings", response_model=NotificationSettingsResponse)
def get_settings(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> NotificationSettingsResponse:
    """List which event types currently produce notifications."""

    settings = get_notification_settings_uc(db)
    return NotificationSettingsResponse(settings=[_setting_to_schema(s) for s in settings])


@router.patch("/settings", response_model=NotificationSettingsResponse)
def update_settings(
    request: NotificationSettingsUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> NotificationSettingsResponse:
    """Switch one or more event types on or off."""

    try:
        settings = update_notification_settings_uc(db, request.as_mapping())
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logger.info("Notification settings updated by admin %s", current_user.id)
    return NotificationSettingsResponse(settings=[_setting_to_schema(s) for s in settings])


@router.patch("/{notification_id}/read", response_model=NotificationMarkReadResponse)
def mark_read(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationMarkReadResponse:
    try:
        notification = mark_notification_read_uc(db, notification_id, current_user.id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    return NotificationMarkReadResponse(
        id=notification.id or notification_id,
        read=True,
        read_at=notification.read_at,
    )


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket that tells the authenticated user when new notifications exist."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    try:
        user = resolve_current_user(token)
    except HTTPException:
        await websocket.close(code=1008)
        return

    await notification_manager.connect(user.id, websocket)
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        notification_manager.disconnect(user.id, websocket)
    except Exception:
        notification_manager.disconnect(user.id, websocket)
        raise
