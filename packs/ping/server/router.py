"""Routes for the ping pack."""

from __future__ import annotations

import time

from fastapi import APIRouter, Request

SLUG = "ping"

router = APIRouter()


@router.get("/public/ping")
def public_ping() -> dict:
    """Unauthenticated liveness probe (conventional public sub-namespace)."""
    return {"ok": True, "pack": SLUG, "scope": "public", "ts": int(time.time())}


@router.get("/health")
def pack_health() -> dict:
    """Declared public prefix outside /public."""
    return {"ok": True, "pack": SLUG}


@router.get("/status")
def status(request: Request) -> dict:
    """Protected: requires an operator session."""
    return {
        "ok": True,
        "pack": SLUG,
        "operator": getattr(request.state, "username", None),
    }
