"""Mount coordinator: discover, load and register packs against the host app.

Packs are processed one at a time in scan order (root order, then directory
order). The first *successful* mount of a directory slug wins; a failed
attempt leaves the slug free for a same-named directory under a later root.
Nothing a pack does at load or register time escapes ``mount_packs``.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import traceback
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from fastapi import FastAPI

from packhost.packs.discovery import resolve_entry, scan_roots
from packhost.packs.loader import load_pack, unload_pack
from packhost.packs.manifest import PackManifest
from packhost.packs.prefixes import pack_public_prefixes
from packhost.packs.state import MountRecord, PackFailure, PackHostState, get_pack_state

logger = logging.getLogger(__name__)


async def _await(awaitable: Any) -> Any:
    return await awaitable


def settle(result: Any) -> Any:
    """Wait for an awaitable returned by register() before the next pack runs.

    Runs on a fresh event loop, or on a worker thread when the caller is
    already inside a running loop (e.g. the app is created during server
    import).
    """
    if not inspect.isawaitable(result):
        return result
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(_await(result))
    with ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(asyncio.run, _await(result)).result()


def _register(app: FastAPI, manifest: PackManifest) -> None:
    settle(manifest.register_hook(app))


def mount_pack(
    app: FastAPI,
    state: PackHostState,
    root: Path,
    slug: str,
) -> MountRecord | PackFailure | None:
    """Attempt one (root, slug) candidate.

    Returns the MountRecord on success, the PackFailure on failure, or None
    when the candidate was skipped (already mounted, or no entry point).
    """
    if state.is_mounted(slug):
        logger.info("Pack %s: already mounted, ignoring %s", slug, root / slug)
        return None

    try:
        entry = resolve_entry(root, slug)
    except OSError as e:
        logger.error("Failed to inspect pack %s in %s: %s", slug, root / slug, e)
        failure = PackFailure(
            slug=slug,
            entry_path=root / slug,
            root_path=root,
            stage="load",
            error_type=type(e).__name__,
            message=str(e),
        )
        state.record_failure(failure)
        return failure
    if entry is None:
        logger.info("Pack %s: no server entry in %s (skipping)", slug, root / slug)
        return None

    loaded = load_pack(slug, entry, root_path=root)
    if isinstance(loaded, PackFailure):
        state.record_failure(loaded)
        return loaded

    declared_slug = loaded.resolved_slug(slug)
    try:
        _register(app, loaded)
    except (Exception, SystemExit) as e:
        logger.error(
            "Failed to mount pack %s (entry=%s): register() raised %s: %s",
            declared_slug,
            entry,
            type(e).__name__,
            e,
            exc_info=True,
        )
        unload_pack(slug, entry)
        failure = PackFailure(
            slug=declared_slug,
            entry_path=entry,
            root_path=root,
            stage="register",
            error_type=type(e).__name__,
            message=str(e),
            traceback=traceback.format_exc(),
        )
        state.record_failure(failure)
        return failure

    prefixes = pack_public_prefixes(state.namespace, declared_slug, loaded.public_prefixes)
    record = MountRecord(
        slug=declared_slug,
        directory=slug,
        entry_path=entry,
        root_path=root,
        # dict.fromkeys: drop repeats within the pack, keep order
        public_prefixes=tuple(dict.fromkeys(prefixes)),
    )
    state.record_mount(record)
    logger.info("Mounted pack %s (%s)", declared_slug, entry)
    logger.info("Public prefixes for %s: %s", declared_slug, list(record.public_prefixes))
    return record


def mount_packs(
    app: FastAPI,
    roots: Iterable[Path] | None = None,
    namespace: str | None = None,
) -> PackHostState:
    """Discover and mount every pack under roots onto app.

    Args:
        app: Shared application passed to each pack's register().
        roots: Scan roots in priority order (default: settings.pack_roots).
        namespace: Mount namespace for conventional public prefixes
            (default: settings.pack_namespace). Only used when the app has
            no pack state yet.

    Returns:
        The app's PackHostState (also available as ``app.state.packs``).
    """
    if roots is None:
        from packhost.config import get_settings

        roots = get_settings().pack_roots
    roots = [Path(r) for r in roots]

    state = get_pack_state(app, namespace)
    logger.info("Mounting packs from roots=%s namespace=%s", [str(r) for r in roots], state.namespace)

    for root, slug in scan_roots(roots):
        mount_pack(app, state, root, slug)

    if not state.mount_records:
        logger.warning("No packs mounted.")
    else:
        logger.info("Mounted packs: %s", state.mounted)
    if state.failures:
        logger.warning(
            "Pack failures: %s",
            [f"{f.slug} ({f.stage}: {f.error_type})" for f in state.failures],
        )
    logger.info("All public prefixes: %s", state.public_prefixes.as_list())
    return state
