"""Shared FastAPI dependencies for host and pack routes."""

from __future__ import annotations

from fastapi import Cookie, Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from packhost.db.session import get_db  # re-export
from packhost.models.user import User
from packhost.packs.state import PackHostState, get_pack_state
from packhost.services.auth import extract_token, get_user_from_token

__all__ = [
    "AUTH_COOKIE",
    "get_db",
    "get_current_user",
    "get_packs",
    "require_auth",
]

# Cookie name for browser sessions
AUTH_COOKIE = "access_token"


def get_current_user(
    db: Session = Depends(get_db),
    authorization: str | None = Header(None),
    access_token: str | None = Cookie(None),
) -> User | None:
    """Return the authenticated user or None.

    Checks the Authorization: Bearer header first, then the access_token cookie.
    """
    token = extract_token(authorization, access_token)
    if token is None:
        return None
    return get_user_from_token(db, token)


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """Dependency that requires an authenticated operator (401 otherwise)."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user


def get_packs(request: Request) -> PackHostState:
    """Mounted-pack state of the running app."""
    return get_pack_state(request.app)
