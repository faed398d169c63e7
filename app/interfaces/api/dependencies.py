"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from app.domain.entities import User
from app.infrastructure.security import decode_access_token

# Tokens are issued by the portal's auth service; this URL only feeds the docs.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_error(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or not isinstance(role, str) or not role:
        raise _credentials_error()

    name = payload.get("name")
    return User(id=str(user_id), role=role, name=name if isinstance(name, str) else None)


def get_current_user(token: str = Depends(oauth2_scheme)) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token)


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return current_user
