"""
Application configuration. Loads from environment variables.
Secrets and sensitive config must never be hardcoded.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()
from functools import lru_cache

# Searched in this order; first successful mount of a slug wins.
# Several layouts are listed because some installs run from the repo root
# and some run with api/ as the working directory.
DEFAULT_PACK_ROOTS: tuple[str, ...] = (
    "api/src/packs",
    "api/packs",
    "src/packs",
    "packs",
)


@lru_cache(maxsize=1)
def get_settings() -> "Settings":
    """Return cached settings instance."""
    return Settings()


def _split_paths(raw: str) -> list[str]:
    return [p.strip() for p in raw.split(os.pathsep) if p.strip()]


class Settings:
    """Application settings loaded from environment."""

    # App
    app_name: str = "PackHost"
    debug: bool = False
    log_level: str = "INFO"

    # Database (postgresql+psycopg for psycopg3; use postgresql:// for psycopg2)
    database_url: str = "postgresql+psycopg://localhost:5432/packhost_dev"
    db_connect_timeout: int = 10  # seconds

    # Security
    secret_key: str = ""
    # Requests under this prefix need a bearer token unless exempt
    auth_protected_prefix: str = "/api"
    auth_public_paths: tuple[str, ...] = ("/api/auth/login", "/api/auth/logout")

    # Packs
    pack_roots: list[Path] = []
    pack_namespace: str = "/api/packs"

    def __init__(self) -> None:
        self.app_name = os.getenv("APP_NAME", self.app_name)
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", self.log_level).upper()

        default_user = os.getenv("PGUSER") or os.getenv("USER") or "postgres"
        default_url = (
            f"postgresql+psycopg://{default_user}:"
            f"{os.getenv('PGPASSWORD', '')}@"
            f"{os.getenv('PGHOST', 'localhost')}:"
            f"{os.getenv('PGPORT', '5432')}/"
            f"{os.getenv('PGDATABASE', 'packhost_dev')}"
        )
        raw_url = os.getenv("DATABASE_URL", default_url)
        # Ensure psycopg3 driver if URL uses generic postgresql://
        if raw_url.startswith("postgresql://") and not raw_url.startswith("postgresql+psycopg"):
            raw_url = raw_url.replace("postgresql://", "postgresql+psycopg://", 1)
        self.database_url = raw_url
        self.db_connect_timeout = int(os.getenv("DB_CONNECT_TIMEOUT", str(self.db_connect_timeout)))

        self.secret_key = os.getenv("SECRET_KEY", "")
        self.auth_protected_prefix = os.getenv(
            "AUTH_PROTECTED_PREFIX", self.auth_protected_prefix
        ).rstrip("/")
        # Comma-separated extra host paths that skip the token check
        _extra_public = os.getenv("AUTH_PUBLIC_PATHS", "").strip()
        self.auth_public_paths = tuple(self.auth_public_paths) + tuple(
            p.strip() for p in _extra_public.split(",") if p.strip()
        )

        # PACK_ROOTS: os.pathsep-separated; relative entries resolve against the cwd
        cwd = Path.cwd()
        raw_roots = os.getenv("PACK_ROOTS")
        roots = _split_paths(raw_roots) if raw_roots is not None else list(DEFAULT_PACK_ROOTS)
        self.pack_roots = [(cwd / r).resolve() for r in roots]
        self.pack_namespace = os.getenv("PACK_NAMESPACE", self.pack_namespace)
