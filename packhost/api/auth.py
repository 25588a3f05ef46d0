"""Authentication API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from packhost.api.deps import AUTH_COOKIE, get_db, require_auth
from packhost.models.user import User
from packhost.schemas.auth import LoginRequest, OperatorRead, TokenResponse
from packhost.services.auth import (
    ACCESS_TOKEN_EXPIRE_HOURS,
    authenticate_user,
    create_access_token,
)

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
) -> TokenResponse:
    """Authenticate an operator and return a JWT.

    Also sets an httponly cookie so browser requests to protected pack
    routes carry the session.
    """
    user = authenticate_user(db, body.username, body.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    max_age = ACCESS_TOKEN_EXPIRE_HOURS * 60 * 60
    token = create_access_token(user.username)
    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        httponly=True,
        samesite="lax",
        max_age=max_age,
        path="/",
    )
    return TokenResponse(access_token=token, expires_in=max_age)


@router.post("/logout")
def logout(response: Response) -> dict:
    """Clear the authentication cookie."""
    response.delete_cookie(key=AUTH_COOKIE, path="/")
    return {"detail": "Logged out"}


@router.get("/me", response_model=OperatorRead)
def me(current_user: User = Depends(require_auth)) -> OperatorRead:
    """Return the currently authenticated operator."""
    return OperatorRead.model_validate(current_user)
