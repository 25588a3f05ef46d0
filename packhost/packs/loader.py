"""Pack loader: import a pack entry file and extract its manifest.

``load_pack`` never raises. Every fault (import error, syntax error, error
raised while the module initialises, invalid manifest) comes back as a
``PackFailure`` attributed to the slug, so one broken pack cannot stop the
scan.
"""

from __future__ import annotations

import hashlib
import importlib.util
import logging
import re
import sys
import traceback
from pathlib import Path
from types import ModuleType

from packhost.packs.manifest import ManifestError, PackManifest, manifest_from_module
from packhost.packs.state import PackFailure

logger = logging.getLogger(__name__)

MODULE_PREFIX = "packhost_pack_"


class PackImportError(Exception):
    """Raised when an entry file cannot be turned into an import spec."""

    pass


def module_name_for(slug: str, entry_path: Path) -> str:
    """Private sys.modules key for a pack: packhost_pack_<slug>_<digest>.

    The digest of the resolved entry path keeps the name unique per file, so
    slugs that sanitize alike ("a-b", "a_b") or the same slug under two roots
    never share a module or its submodules.
    """
    digest = hashlib.sha1(str(Path(entry_path).resolve()).encode("utf-8")).hexdigest()[:10]
    safe_slug = re.sub(r'\W', '_', slug)
    return f"{MODULE_PREFIX}{safe_slug}_{digest}"


def _forget_module(module_name: str) -> None:
    """Drop a module and its submodules from sys.modules."""
    for name in [n for n in sys.modules if n == module_name or n.startswith(module_name + ".")]:
        sys.modules.pop(name, None)


def import_entry(module_name: str, entry_path: Path) -> ModuleType:
    """Execute entry_path as module_name.

    A package index (``__init__.py``) is imported as a package so the pack
    can use relative imports for its own submodules.
    """
    search_locations = None
    if entry_path.name == "__init__.py":
        search_locations = [str(entry_path.parent)]

    spec = importlib.util.spec_from_file_location(
        module_name, entry_path, submodule_search_locations=search_locations
    )
    if spec is None or spec.loader is None:
        raise PackImportError(f"Could not load module spec from {entry_path}")

    module = importlib.util.module_from_spec(spec)
    # Drop leftovers of an earlier import of this file (a second mount pass)
    _forget_module(module_name)
    # Register before executing so relative imports inside the pack resolve
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        _forget_module(module_name)
        raise
    return module


def load_pack(slug: str, entry_path: Path, root_path: Path | None = None) -> PackManifest | PackFailure:
    """Load the pack at entry_path and return its manifest, or a PackFailure."""
    entry_path = Path(entry_path)
    module_name = module_name_for(slug, entry_path)
    logger.info("Pack %s: importing %s", slug, entry_path)

    try:
        module = import_entry(module_name, entry_path)
    # SystemExit included: a pack calling sys.exit() at import must not stop the host
    except (Exception, SystemExit) as e:
        logger.error(
            "Failed to load pack %s (entry=%s): %s: %s",
            slug,
            entry_path,
            type(e).__name__,
            e,
            exc_info=True,
        )
        return PackFailure(
            slug=slug,
            entry_path=entry_path,
            root_path=root_path,
            stage="load",
            error_type=type(e).__name__,
            message=str(e),
            traceback=traceback.format_exc(),
        )

    try:
        manifest = manifest_from_module(module)
    except ManifestError as e:
        logger.warning("Pack %s: invalid manifest in %s (skipping): %s", slug, entry_path, e)
        _forget_module(module_name)
        return PackFailure(
            slug=slug,
            entry_path=entry_path,
            root_path=root_path,
            stage="manifest",
            error_type=type(e).__name__,
            message=str(e),
        )

    return manifest


def unload_pack(slug: str, entry_path: Path) -> None:
    """Forget the module loaded from entry_path and its submodules."""
    _forget_module(module_name_for(slug, entry_path))
