"""Ping pack: smallest working example of the pack contract.

Mounts:
    GET /api/packs/ping/public/ping   (public by convention)
    GET /api/packs/ping/health        (public, declared below)
    GET /api/packs/ping/status        (behind the auth gate)
"""

from fastapi import FastAPI

from packhost.packs import PackAuth, PackManifest, get_pack_state

from .router import SLUG, router


def register(app: FastAPI) -> None:
    base = f"{get_pack_state(app).namespace}/{SLUG}"
    app.include_router(router, prefix=base, tags=[f"pack:{SLUG}"])


pack = PackManifest(
    slug=SLUG,
    register=register,
    auth=PackAuth(public_prefixes=["/api/packs/ping/health"]),
)
