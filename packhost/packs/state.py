"""Host context shared between the mount coordinator, packs and admin surfaces."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from fastapi import FastAPI

from packhost.packs.prefixes import PublicPrefixSet, normalize_namespace

FailureStage = Literal["load", "manifest", "register"]

# app.state attribute holding the PackHostState
STATE_ATTR = "packs"


@dataclass(frozen=True)
class MountRecord:
    """One successfully mounted pack."""

    slug: str
    directory: str
    entry_path: Path
    root_path: Path
    public_prefixes: tuple[str, ...] = ()


@dataclass(frozen=True)
class PackFailure:
    """Why a (root, slug) attempt did not end in a mount."""

    slug: str
    entry_path: Path
    stage: FailureStage
    error_type: str
    message: str
    root_path: Path | None = None
    traceback: str | None = None


@dataclass
class PackHostState:
    """Mutable during mounting, read-only once the app serves traffic."""

    namespace: str
    mounted_slugs: set[str] = field(default_factory=set)
    mount_records: list[MountRecord] = field(default_factory=list)
    public_prefixes: PublicPrefixSet = field(default_factory=PublicPrefixSet)
    failures: list[PackFailure] = field(default_factory=list)

    def is_mounted(self, slug: str) -> bool:
        return slug in self.mounted_slugs

    def record_mount(self, record: MountRecord) -> None:
        self.mounted_slugs.add(record.directory)
        self.mount_records.append(record)
        self.public_prefixes.extend(record.public_prefixes)

    def record_failure(self, failure: PackFailure) -> None:
        self.failures.append(failure)

    @property
    def mounted(self) -> list[str]:
        """Declared slugs of mounted packs, in mount order."""
        return [r.slug for r in self.mount_records]


def get_pack_state(app: FastAPI, namespace: str | None = None) -> PackHostState:
    """Return the app's PackHostState, creating it on first use."""
    state = getattr(app.state, STATE_ATTR, None)
    if state is None:
        if namespace is None:
            from packhost.config import get_settings

            namespace = get_settings().pack_namespace
        state = PackHostState(namespace=normalize_namespace(namespace))
        setattr(app.state, STATE_ATTR, state)
    return state
