"""Persistence layer for notification on/off switches."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.entities import NotificationSetting
from app.infrastructure.models import NotificationSettingModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class NotificationSettingRepository:
    """Read and upsert :class:`NotificationSetting` rows keyed by event type."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, event_type: str) -> NotificationSetting | None:
        model = self._get_model(event_type)
        return self._to_entity(model) if model else None

    def list(self) -> list[NotificationSetting]:
        models = (
            self.session.query(NotificationSettingModel)
            .order_by(NotificationSettingModel.event_type)
            .all()
        )
        return [self._to_entity(model) for model in models]

    def upsert(self, event_type: str, *, enabled: bool) -> NotificationSetting:
        model = self._get_model(event_type)
        if model is None:
            model = NotificationSettingModel(event_type=event_type)
        model.enabled = enabled
        model.updated_at = ensure_app_naive_datetime(now_in_app_timezone())
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            # Another writer created the row first; apply the flag to it.
            self.session.rollback()
            model = self._get_model(event_type)
            if model is None:
                raise
            model.enabled = enabled
            model.updated_at = ensure_app_naive_datetime(now_in_app_timezone())
            self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def create_missing(self, event_types: Iterable[str]) -> list[str]:
        """Insert enabled rows for ``event_types`` that have none; return them."""

        existing = {
            event_type
            for (event_type,) in self.session.query(NotificationSettingModel.event_type).all()
        }
        created: list[str] = []
        for event_type in event_types:
            if event_type in existing or event_type in created:
                continue
            self.session.add(
                NotificationSettingModel(
                    event_type=event_type,
                    enabled=True,
                    updated_at=ensure_app_naive_datetime(now_in_app_timezone()),
                )
            )
            created.append(event_type)
        if created:
            self.session.commit()
        return created

    def _get_model(self, event_type: str) -> NotificationSettingModel | None:
        return (
            self.session.query(NotificationSettingModel)
            .filter(NotificationSettingModel.event_type == event_type)
            .one_or_none()
        )

    @staticmethod
    def _to_entity(model: NotificationSettingModel) -> NotificationSetting:
        return NotificationSetting(
            event_type=model.event_type,
            enabled=bool(model.enabled),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationSettingRepository"]
