"""Admin schemas for mounted-pack introspection."""

from __future__ import annotations

from pydantic import BaseModel


class MountRecordRead(BaseModel):
    """A mounted pack as exposed to operators."""

    slug: str
    directory: str
    entry_path: str
    root_path: str
    public_prefixes: list[str]


class PackFailureRead(BaseModel):
    """A pack that was found but not mounted. Tracebacks stay in the logs."""

    slug: str
    stage: str
    error_type: str
    message: str
    entry_path: str
    root_path: str | None = None


class PackStateRead(BaseModel):
    namespace: str
    mounted: list[MountRecordRead]
    failures: list[PackFailureRead]
    public_prefixes: list[str]
