"""
PackHost FastAPI application entry point.

Startup: settings → host routes → auth gate → pack discovery and mounting.
Packs are mounted while the app is built (not in the lifespan) so that their
register() hooks may still add routers and middleware.
"""

import logging
from collections.abc import Iterable
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from packhost import __version__
from packhost.config import get_settings
from packhost.db.session import check_db_connection, engine
from packhost.packs import get_pack_state, mount_packs

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    logger.info("PackHost starting")
    try:
        try:
            check_db_connection()
            logger.info("Database connection verified")
        except Exception as e:
            logger.critical("Database unreachable: %s", e)
            raise

        packs = get_pack_state(app)
        logger.info(
            "Serving %d pack(s) %s; %d failed; public prefixes: %s",
            len(packs.mount_records),
            packs.mounted,
            len(packs.failures),
            packs.public_prefixes.as_list(),
        )
        yield
    finally:
        logger.info("PackHost shutting down")
        engine.dispose()
        logger.info("Database connection pool closed")


def create_app(pack_roots: Iterable[Path] | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        pack_roots: Override settings.pack_roots (scan roots, in priority order).
    """
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    from packhost.api.middleware import AuthGateMiddleware

    app.add_middleware(AuthGateMiddleware)

    # Host routes
    from packhost.api.admin import router as admin_router
    from packhost.api.auth import router as auth_router

    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(admin_router, prefix="/api/admin", tags=["admin"])

    @app.get("/health")
    def health() -> dict:
        """Health check endpoint. Confirms DB connectivity and reports mounted packs."""
        from sqlalchemy import text

        packs = get_pack_state(app).mounted
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {
                "status": "ok",
                "version": __version__,
                "database": "connected",
                "packs": packs,
            }
        except Exception:
            from fastapi.responses import JSONResponse

            return JSONResponse(
                status_code=503,
                content={
                    "status": "unhealthy",
                    "version": __version__,
                    "database": "disconnected",
                    "packs": packs,
                },
            )

    # Packs last: their routes must not shadow host routes
    mount_packs(
        app,
        roots=pack_roots if pack_roots is not None else settings.pack_roots,
        namespace=settings.pack_namespace,
    )
    return app


app = create_app()
