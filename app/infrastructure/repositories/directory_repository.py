"""Read-only lookups against the portal's user and complaint tables."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import ADMIN_ROLE
from app.infrastructure.models import (
    ComplaintExtensionRequestModel,
    ComplaintModel,
    UserModel,
)


class DirectoryRepository:
    """Answer the three questions recipient resolution needs."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_all_admin_user_ids(self) -> list[str]:
        query = (
            self.session.query(UserModel.id)
            .filter(UserModel.role == ADMIN_ROLE)
            .filter(UserModel.is_active.is_(True))
            .order_by(UserModel.id)
        )
        return [user_id for (user_id,) in query.all() if user_id]

    def get_assigned_officer_user_id(self, complaint_id: str) -> str | None:
        row = (
            self.session.query(ComplaintModel.assigned_to_user_id)
            .filter(ComplaintModel.id == complaint_id)
            .one_or_none()
        )
        return row[0] if row and row[0] else None

    def get_extension_requester_user_id(self, request_id: str) -> str | None:
        row = (
            self.session.query(ComplaintExtensionRequestModel.requested_by)
            .filter(ComplaintExtensionRequestModel.id == request_id)
            .one_or_none()
        )
        return row[0] if row and row[0] else None


__all__ = ["DirectoryRepository"]
