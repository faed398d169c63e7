"""Domain entity representing the authenticated caller."""

from dataclasses import dataclass

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class User:
    """Identity asserted by the access token of the current request."""

    id: str
    role: str
    name: str | None = None

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return self.role.lower() == role.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ADMIN_ROLE)


__all__ = ["ADMIN_ROLE", "User"]
