"""Request and response bodies for /api/auth."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)

    @field_validator("username")
    @classmethod
    def _strip_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("username must not be blank")
        return value


class TokenResponse(BaseModel):
    """Issued session token; the same value is set as the access_token cookie."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class OperatorRead(BaseModel):
    """The signed-in operator, as returned by /api/auth/me."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    created_at: datetime | None = None
