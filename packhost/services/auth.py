"""Authentication service: operator accounts and JWT session tokens.

The auth gate only needs ``token_subject``; host routes that need the full
``User`` row resolve it with ``get_user_from_token``.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from sqlalchemy.orm import Session

from packhost.config import get_settings
from packhost.models.user import User

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_HOURS = 24
BEARER = "Bearer "


def create_user(db: Session, username: str, password: str) -> User:
    """Create an operator account with a bcrypt-hashed password."""
    user = User(username=username)
    user.set_password(password)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def find_user(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    """Return the user when the credentials match, else None."""
    user = find_user(db, username)
    if user is None or not user.verify_password(password):
        return None
    return user


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token whose ``sub`` claim is the username."""
    expires_at = datetime.now(timezone.utc) + (
        expires_delta or timedelta(hours=ACCESS_TOKEN_EXPIRE_HOURS)
    )
    claims = {"sub": subject, "exp": expires_at}
    return jwt.encode(claims, get_settings().secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Verified claims, or None for a bad signature, malformed or expired token."""
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None


def token_subject(token: str) -> Optional[str]:
    """Username carried by a valid token."""
    claims = decode_access_token(token)
    if claims is None:
        return None
    sub = claims.get("sub")
    return sub if isinstance(sub, str) and sub else None


def extract_token(authorization: Optional[str], cookie_token: Optional[str]) -> Optional[str]:
    """Bearer token from the Authorization header, else the session cookie."""
    if authorization and authorization.startswith(BEARER):
        return authorization[len(BEARER) :]
    return cookie_token or None


def get_user_from_token(db: Session, token: str) -> Optional[User]:
    """User for a valid token, or None (bad token or unknown user)."""
    username = token_subject(token)
    if username is None:
        return None
    return find_user(db, username)
