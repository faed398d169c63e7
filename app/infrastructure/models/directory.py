"""Read-only mappings of the portal tables used to resolve recipients.

Users, complaints and extension requests are created and edited by the
portal's CRUD services; this service only reads the columns it needs.
"""

from sqlalchemy import Boolean, Column, String
from sqlalchemy.sql import expression

from app.infrastructure.database import Base


class UserModel(Base):
    """Portal user with the role used for admin broadcast."""

    __tablename__ = "user"

    id = Column(String(64), primary_key=True)
    name = Column(String(120), nullable=True)
    role = Column(String(20), nullable=False, index=True)
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )


class ComplaintModel(Base):
    """Complaint row; only the current assignment is relevant here."""

    __tablename__ = "complaint"

    id = Column(String(64), primary_key=True)
    assigned_to_user_id = Column(String(64), nullable=True, index=True)


class ComplaintExtensionRequestModel(Base):
    """Officer request for more time on a complaint."""

    __tablename__ = "complaint_extension_request"

    id = Column(String(64), primary_key=True)
    complaint_id = Column(String(64), nullable=False, index=True)
    requested_by = Column(String(64), nullable=False, index=True)


__all__ = ["UserModel", "ComplaintModel", "ComplaintExtensionRequestModel"]
