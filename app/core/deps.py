"""
FastAPI dependencies for authentication and authorization.

Identity comes from the signed token alone; no database round-trip is made
to authorize a request.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import BaseModel

from app.core.exceptions import ForbiddenError, UnauthorizedError
from app.core.security import decode_token

# HTTP Bearer token scheme (Authorization: Bearer <token>)
# auto_error=False so a missing header is reported as 401, not FastAPI's default
security = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    """Claims carried by a valid access token."""
    username: str
    is_admin: bool = False


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """
    Extract and validate the current user from the Bearer token.

    Raises:
        UnauthorizedError: If the header is missing or the token is invalid
    """
    if credentials is None:
        raise UnauthorizedError("Authentication required")

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise UnauthorizedError("Could not validate credentials")

    username = payload.get("sub")
    if username is None:
        raise UnauthorizedError("Could not validate credentials")

    return CurrentUser(username=username, is_admin=bool(payload.get("is_admin", False)))


def get_admin_user(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Require an admin token."""
    if not user.is_admin:
        raise ForbiddenError("Admin privileges required")
    return user


def get_user_or_admin(
    username: str,
    user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """
    Require that the token belongs to the `{username}` in the path, or to an admin.

    Only usable on routes with a `username` path parameter.
    """
    if not (user.is_admin or user.username == username):
        raise ForbiddenError("Not allowed to act on this user")
    return user
