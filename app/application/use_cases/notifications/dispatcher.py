"""Turn stored timeline events into per-user notifications in the background."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from functools import lru_cache

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import Notification, TimelineEvent, is_notifiable_event_type
from app.domain.exceptions import ResolutionError, TransientStoreError
from app.infrastructure.database import SessionLocal
from app.infrastructure.notifications import (
    BackgroundTaskRunner,
    TaskRunner,
    emit_new_notifications_to_users,
)
from app.infrastructure.repositories import DirectoryRepository, NotificationRepository

from .handlers import RecipientDirectory, build_notifications, resolve_for_event
from .settings import is_notification_enabled

logger = logging.getLogger(__name__)

Emitter = Callable[[Iterable[str]], None]


def handle_timeline_event(
    session: Session,
    event: TimelineEvent,
    *,
    directory: RecipientDirectory | None = None,
    emit: Emitter = emit_new_notifications_to_users,
) -> list[Notification]:
    """Create the notifications owed for ``event`` and signal the recipients.

    Returns the stored notifications. An empty list means nothing was sent:
    the event was skipped or a step failed and was logged.
    """

    event_type = event.event_type.value

    if not is_notifiable_event_type(event.event_type):
        logger.debug("Notification skip: event type %s not notifiable", event_type)
        return []

    if not is_notification_enabled(session, event.event_type):
        logger.debug("Notification skip: event type %s disabled by settings", event_type)
        return []

    try:
        resolution = resolve_for_event(
            event.event_type,
            event.complaint_id,
            event.payload,
            directory=directory or DirectoryRepository(session),
        )
    except ResolutionError:
        logger.error(
            "Recipient resolution failed for %s complaint=%s event=%s",
            event_type,
            event.complaint_id,
            event.id,
            exc_info=True,
        )
        return []

    notifications = build_notifications(event, resolution)
    if not notifications:
        logger.debug(
            "Notification skip: no recipients for %s complaint=%s",
            event_type,
            event.complaint_id,
        )
        return []

    try:
        stored = NotificationRepository(session).bulk_create(notifications)
    except TransientStoreError:
        logger.error(
            "Notification insert failed for %s complaint=%s count=%s",
            event_type,
            event.complaint_id,
            len(notifications),
            exc_info=True,
        )
        return []

    logger.debug(
        "Notifications created: %s for %s complaint=%s",
        len(stored),
        event_type,
        event.complaint_id,
    )

    try:
        emit([notification.user_id for notification in stored])
    except Exception:
        logger.warning("Realtime emit failed for event %s", event.id, exc_info=True)

    return stored


class NotificationDispatcher:
    """Schedule :func:`handle_timeline_event` without blocking the caller."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        runner: TaskRunner,
        *,
        emit: Emitter = emit_new_notifications_to_users,
        directory_factory: Callable[[Session], RecipientDirectory] | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._runner = runner
        self._emit = emit
        self._directory_factory = directory_factory

    @property
    def runner(self) -> TaskRunner:
        return self._runner

    def notify(self, event: TimelineEvent) -> None:
        """Submit ``event`` for fan-out; errors are logged, never raised."""

        try:
            self._runner.submit(self._process, event)
        except Exception:
            logger.exception(
                "Could not schedule notifications for event %s complaint=%s type=%s",
                event.id,
                event.complaint_id,
                event.event_type.value,
            )

    def _process(self, event: TimelineEvent) -> None:
        session: Session | None = None
        try:
            session = self._session_factory()
            directory = self._directory_factory(session) if self._directory_factory else None
            handle_timeline_event(session, event, directory=directory, emit=self._emit)
        except Exception:
            logger.exception(
                "Notification dispatch failed for event %s complaint=%s type=%s",
                event.id,
                event.complaint_id,
                event.event_type.value,
            )
        finally:
            if session is not None:
                session.close()


@lru_cache
def get_notification_dispatcher() -> NotificationDispatcher:
    """Return the process-wide dispatcher backed by a worker thread pool."""

    settings = get_settings()
    return NotificationDispatcher(
        SessionLocal,
        BackgroundTaskRunner(max_workers=settings.notification_workers),
    )


__all__ = [
    "Emitter",
    "NotificationDispatcher",
    "get_notification_dispatcher",
    "handle_timeline_event",
]
