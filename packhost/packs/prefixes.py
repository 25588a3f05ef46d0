"""Public (authentication-exempt) route prefixes contributed by mounted packs."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


def normalize_namespace(namespace: str) -> str:
    """'api/packs/' -> '/api/packs'. An empty namespace maps to ''."""
    stripped = namespace.strip().strip("/")
    return f"/{stripped}" if stripped else ""


def conventional_public_prefix(namespace: str, slug: str) -> str:
    """Prefix every mounted pack gets by convention: /<namespace>/<slug>/public."""
    return f"{normalize_namespace(namespace)}/{slug}/public"


def declared_public_prefixes(prefixes: Iterable[str]) -> list[str]:
    """Trim declared prefixes and drop the ones that are not absolute paths."""
    cleaned: list[str] = []
    for raw in prefixes:
        p = raw.strip()
        if p.startswith("/"):
            cleaned.append(p)
    return cleaned


def pack_public_prefixes(namespace: str, slug: str, declared: Iterable[str]) -> list[str]:
    """Conventional prefix followed by the valid declared ones, in order."""
    return [conventional_public_prefix(namespace, slug), *declared_public_prefixes(declared)]


class PublicPrefixSet:
    """Insertion-ordered set of path prefixes, deduplicated by exact match.

    Grows while packs are mounted; the auth gate only reads it afterwards.
    """

    def __init__(self, prefixes: Iterable[str] = ()) -> None:
        self._prefixes: dict[str, None] = {}
        self.extend(prefixes)

    def add(self, prefix: str) -> bool:
        """Add prefix; return False when it was already present."""
        if prefix in self._prefixes:
            return False
        self._prefixes[prefix] = None
        return True

    def extend(self, prefixes: Iterable[str]) -> list[str]:
        """Add each prefix; return the ones that were new."""
        return [p for p in prefixes if self.add(p)]

    def matches(self, path: str) -> bool:
        """True when path equals a prefix or continues it at a '/' boundary."""
        for prefix in self._prefixes:
            base = prefix.rstrip("/")
            if not base:
                return True
            if path == base or path.startswith(base + "/"):
                return True
        return False

    def as_list(self) -> list[str]:
        return list(self._prefixes)

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._prefixes

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._prefixes))

    def __len__(self) -> int:
        return len(self._prefixes)

    def __repr__(self) -> str:
        return f"PublicPrefixSet({self.as_list()!r})"
