"""
Pytest configuration and fixtures.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tests.test_constants import TEST_SECRET_KEY

# Force test DB when pytest runs; don't inherit from .env (avoids polluting packhost_dev)
_test_user = os.getenv("PGUSER") or os.getenv("USER") or "postgres"
_test_url = f"postgresql+psycopg://{_test_user}@localhost:5432/packhost_test"
os.environ["DATABASE_URL"] = _test_url
os.environ.setdefault("SECRET_KEY", TEST_SECRET_KEY)
# The module-level app mounts nothing; tests build apps with explicit roots.
os.environ["PACK_ROOTS"] = ""
os.environ["PACK_NAMESPACE"] = "/api/packs"


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client."""
    from packhost.main import app

    return TestClient(app)


@pytest.fixture
def bare_app() -> FastAPI:
    """Plain FastAPI app that records register() calls made by test packs."""
    app = FastAPI()
    app.state.register_calls = []
    return app


@pytest.fixture
def write_pack(tmp_path: Path) -> Callable[..., Path]:
    """Write a pack under tmp_path/<root>/<slug>/ and return the entry file.

    layout="package" writes server/__init__.py, layout="flat" writes server.py.
    """

    def _write(root: str, slug: str, source: str, layout: str = "package") -> Path:
        pack_dir = tmp_path / root / slug
        if layout == "package":
            entry = pack_dir / "server" / "__init__.py"
        elif layout == "flat":
            entry = pack_dir / "server.py"
        else:
            raise ValueError(f"unknown layout {layout!r}")
        entry.parent.mkdir(parents=True, exist_ok=True)
        entry.write_text(source, encoding="utf-8")
        return entry

    return _write


@pytest.fixture(autouse=True)
def _forget_pack_modules() -> None:
    """Drop pack modules imported by a test so slugs can be reused across tests."""
    yield
    from packhost.packs.loader import MODULE_PREFIX

    for name in [n for n in sys.modules if n.startswith(MODULE_PREFIX)]:
        sys.modules.pop(name, None)
