"""Pack discovery, loading and mounting."""

from __future__ import annotations

from packhost.packs.discovery import resolve_entry, scan_roots
from packhost.packs.loader import load_pack
from packhost.packs.manifest import ManifestError, PackAuth, PackManifest
from packhost.packs.mount import mount_packs
from packhost.packs.prefixes import PublicPrefixSet
from packhost.packs.state import MountRecord, PackFailure, PackHostState, get_pack_state

__all__ = [
    "ManifestError",
    "MountRecord",
    "PackAuth",
    "PackFailure",
    "PackHostState",
    "PackManifest",
    "PublicPrefixSet",
    "get_pack_state",
    "load_pack",
    "mount_packs",
    "resolve_entry",
    "scan_roots",
]
