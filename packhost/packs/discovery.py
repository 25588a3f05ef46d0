"""Pack discovery: scan roots for pack directories and resolve their entry points."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

# Relative to <root>/<slug>/, in priority order. Only the first match is loaded.
ENTRY_CANDIDATES: tuple[tuple[str, ...], ...] = (
    ("server", "__init__.py"),  # package-directory index
    ("server.py",),  # flat module
)


def _is_pack_dir_name(name: str) -> bool:
    # Hidden directories and __pycache__ are never packs.
    return not name.startswith((".", "_"))


def _is_pack_dir(child: Path) -> bool:
    if not _is_pack_dir_name(child.name):
        return False
    try:
        return child.is_dir()
    except OSError as e:
        logger.warning("Cannot stat %s (skipping): %s", child, e)
        return False


def list_pack_dirs(root: Path) -> list[str]:
    """Return sorted immediate subdirectory names of root that may hold packs."""
    return sorted(child.name for child in root.iterdir() if _is_pack_dir(child))


def scan_roots(roots: Iterable[Path]) -> list[tuple[Path, str]]:
    """Enumerate (root, slug) candidates across roots, preserving root order.

    Roots that do not exist are skipped: not every deployment uses every layout.
    Unreadable roots are skipped with a warning.
    """
    found: list[tuple[Path, str]] = []
    for root in roots:
        root = Path(root)
        try:
            if not root.is_dir():
                logger.info("No pack directory: %s", root)
                continue
            slugs = list_pack_dirs(root)
        except OSError as e:
            logger.warning("Cannot read pack directory %s (skipping): %s", root, e)
            continue
        if slugs:
            logger.info("Found packs in %s: %s", root, slugs)
        found.extend((root, slug) for slug in slugs)
    return found


def resolve_entry(root: Path, slug: str) -> Path | None:
    """Return the entry file for root/slug, or None when no convention matches.

    Raises:
        OSError: A candidate exists but cannot be inspected (e.g. EACCES).
    """
    pack_dir = Path(root) / slug
    for parts in ENTRY_CANDIDATES:
        candidate = pack_dir.joinpath(*parts)
        if candidate.is_file():
            return candidate
    return None
