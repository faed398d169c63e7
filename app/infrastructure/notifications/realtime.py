"""Push realtime "new notification" signals to connected clients."""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Iterable

from anyio.from_thread import BlockingPortal

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)

NEW_NOTIFICATION_EVENT = "new_notification"


class RealtimeEventPublisher:
    """Dispatch structured realtime events to websocket subscribers.

    Calls made on the event loop thread schedule a task directly. Calls made
    from worker threads go through the :class:`BlockingPortal` attached during
    application start-up; without a portal the signal is dropped.
    """

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager
        self._portal: BlockingPortal | None = None

    def attach_portal(self, portal: BlockingPortal | None) -> None:
        self._portal = portal

    def dispatch(self, user_id: str, *, event_type: str, payload: Any) -> None:
        """Schedule a realtime ``event_type`` event for ``user_id`` if they are online."""

        if not user_id or not self._manager.is_connected(user_id):
            return

        message = {"type": event_type, "data": copy.deepcopy(payload)}
        self._schedule_send(user_id, message)

    def dispatch_many(
        self,
        user_ids: Iterable[str],
        *,
        event_type: str,
        payload: Any,
    ) -> int:
        """Broadcast an event to the distinct ``user_ids``; return how many."""

        seen: set[str] = set()
        for user_id in user_ids:
            if not user_id or user_id in seen:
                continue
            seen.add(user_id)
            self.dispatch(user_id, event_type=event_type, payload=payload)
        return len(seen)

    def _schedule_send(self, user_id: str, message: dict[str, Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            portal = self._portal
            if portal is None:
                logger.debug("No realtime portal attached; skipping push to %s", user_id)
                return
            portal.start_task_soon(self._manager.send_to_user, user_id, message)
        else:
            loop.create_task(self._manager.send_to_user(user_id, message))


realtime_event_publisher = RealtimeEventPublisher(notification_manager)


def emit_new_notifications_to_users(user_ids: Iterable[str]) -> None:
    """Tell each user's clients that new notifications are available.

    Fire-and-forget: delivery problems are logged and never raised.
    """

    try:
        count = realtime_event_publisher.dispatch_many(
            user_ids,
            event_type=NEW_NOTIFICATION_EVENT,
            payload={"message": "New notification"},
        )
    except Exception:
        logger.warning("Realtime notification signal failed", exc_info=True)
        return
    logger.debug("Notification socket: emitted to %s user(s)", count)


__all__ = [
    "NEW_NOTIFICATION_EVENT",
    "RealtimeEventPublisher",
    "realtime_event_publisher",
    "emit_new_notifications_to_users",
]
