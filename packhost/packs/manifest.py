"""Pack manifest contract.

A pack entry module satisfies the contract in one of two ways:

1. It exposes a module-level ``pack`` object: a ``PackManifest`` or any
   object (or dict) carrying ``register``, and optionally ``slug`` and
   ``auth``.
2. It has no ``pack`` attribute but defines a module-level ``register``
   function (and optionally module-level ``slug`` / ``auth``).

Example::

    from packhost.packs import PackAuth, PackManifest

    def register(app):
        app.include_router(router, prefix="/api/packs/stripe")

    pack = PackManifest(
        slug="stripe",
        register=register,
        auth=PackAuth(public_prefixes=["/api/packs/stripe/webhook"]),
    )

Malformed declarations are rejected here so the loader can skip the pack
with a diagnostic instead of failing later.
"""

from __future__ import annotations

from collections.abc import Callable
from types import ModuleType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# Same charset as directory-derived slugs; keeps slugs safe inside URL paths.
SLUG_PATTERN = r"^[a-zA-Z0-9_-]+$"

# Module attribute holding the manifest (the "default export").
MANIFEST_ATTR = "pack"


class ManifestError(Exception):
    """Raised when a loaded module does not satisfy the pack manifest contract."""

    pass


class PackAuth(BaseModel):
    """Authentication exemptions declared by a pack."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    # Absolute path prefixes reachable without credentials. Entries that do
    # not start with "/" are dropped when prefixes are aggregated.
    public_prefixes: tuple[str, ...] = ()


class PackManifest(BaseModel):
    """Structural contract every pack must satisfy."""

    # Packs declare the hook as "register"; a field of that name would shadow
    # ABCMeta.register on the model class.
    model_config = ConfigDict(from_attributes=True, frozen=True, populate_by_name=True)

    register_hook: Callable[[Any], Any] = Field(alias="register")
    slug: str | None = Field(default=None, pattern=SLUG_PATTERN)
    auth: PackAuth | None = None

    @field_validator("slug", mode="before")
    @classmethod
    def _blank_slug_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        return value

    def resolved_slug(self, directory_slug: str) -> str:
        """Declared slug when present, else the directory name."""
        return self.slug or directory_slug

    @property
    def public_prefixes(self) -> tuple[str, ...]:
        return self.auth.public_prefixes if self.auth is not None else ()


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "manifest"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def manifest_from_module(module: ModuleType) -> PackManifest:
    """Extract and validate the manifest exported by a pack module.

    Raises:
        ManifestError: No manifest, ``register`` missing or not callable,
            or a malformed ``slug`` / ``auth`` declaration.
    """
    candidate = getattr(module, MANIFEST_ATTR, module)
    if isinstance(candidate, PackManifest):
        return candidate
    if candidate is None:
        raise ManifestError(f"module-level {MANIFEST_ATTR!r} is None")
    try:
        return PackManifest.model_validate(candidate, from_attributes=True)
    except ValidationError as e:
        raise ManifestError(_describe(e)) from e
