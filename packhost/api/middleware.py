"""Authentication gate in front of the host and its packs.

Requests under the protected prefix (``/api`` by default) need a valid
session token unless the path is a host public path or falls under one of
the public prefixes aggregated from mounted packs. Everything outside the
protected prefix (``/health``, docs) passes through.
"""

from __future__ import annotations

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from packhost.api.deps import AUTH_COOKIE
from packhost.config import get_settings
from packhost.packs.state import get_pack_state
from packhost.services.auth import extract_token, token_subject

logger = logging.getLogger(__name__)


def _under(path: str, prefix: str) -> bool:
    if not prefix:
        return True
    return path == prefix or path.startswith(prefix + "/")


def is_public_request(request: Request) -> bool:
    """True when the request may skip the credential check."""
    settings = get_settings()
    path = request.url.path
    if not _under(path, settings.auth_protected_prefix):
        return True
    if path in settings.auth_public_paths:
        return True
    return get_pack_state(request.app).public_prefixes.matches(path)


class AuthGateMiddleware(BaseHTTPMiddleware):
    """Reject unauthenticated requests to protected paths with 401."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        # CORS preflight never carries credentials
        if request.method == "OPTIONS" or is_public_request(request):
            return await call_next(request)

        token = extract_token(
            request.headers.get("authorization"), request.cookies.get(AUTH_COOKIE)
        )
        username = token_subject(token) if token else None
        if username is None:
            logger.debug("Auth gate rejected %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Not authenticated"},
                headers={"WWW-Authenticate": "Bearer"},
            )

        request.state.username = username
        return await call_next(request)
