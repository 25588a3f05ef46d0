"""Public-prefix registry tests."""

from __future__ import annotations

import pytest

from packhost.packs.prefixes import (
    PublicPrefixSet,
    conventional_public_prefix,
    declared_public_prefixes,
    normalize_namespace,
    pack_public_prefixes,
)


class TestPrefixConstruction:
    @pytest.mark.parametrize(
        ("namespace", "expected"),
        [
            ("ns", "/ns"),
            ("/ns", "/ns"),
            ("/ns/", "/ns"),
            ("api/packs", "/api/packs"),
            (" /api/packs/ ", "/api/packs"),
            ("", ""),
        ],
    )
    def test_normalize_namespace(self, namespace: str, expected: str) -> None:
        assert normalize_namespace(namespace) == expected

    def test_conventional_prefix_shape(self) -> None:
        assert conventional_public_prefix("ns", "x") == "/ns/x/public"
        assert conventional_public_prefix("/api/packs/", "stripe") == "/api/packs/stripe/public"

    def test_declared_prefixes_trimmed_and_filtered(self) -> None:
        assert declared_public_prefixes(["/foo", "bar", "  /baz  ", "", "   "]) == ["/foo", "/baz"]

    def test_pack_prefixes_start_with_conventional(self) -> None:
        assert pack_public_prefixes("ns", "x", []) == ["/ns/x/public"]
        assert pack_public_prefixes("ns", "x", ["/x/webhook"]) == ["/ns/x/public", "/x/webhook"]


class TestPublicPrefixSet:
    def test_insertion_order_and_dedup(self) -> None:
        prefixes = PublicPrefixSet()
        added = prefixes.extend(["/a", "/b", "/a", "/c", "/b"])

        assert added == ["/a", "/b", "/c"]
        assert prefixes.as_list() == ["/a", "/b", "/c"]
        assert len(prefixes) == 3
        assert "/b" in prefixes
        assert "/d" not in prefixes

    def test_add_reports_duplicates(self) -> None:
        prefixes = PublicPrefixSet(["/a"])
        assert prefixes.add("/a") is False
        assert prefixes.add("/a/") is True  # exact-string dedup only

    def test_matches_on_segment_boundary(self) -> None:
        prefixes = PublicPrefixSet(["/api/packs/x/public", "/x/webhook"])

        assert prefixes.matches("/api/packs/x/public")
        assert prefixes.matches("/api/packs/x/public/checkout")
        assert prefixes.matches("/x/webhook")
        assert prefixes.matches("/x/webhook/stripe")
        assert not prefixes.matches("/x/webhooks")
        assert not prefixes.matches("/api/packs/x/publicity")
        assert not prefixes.matches("/api/packs/x/private")

    def test_trailing_slash_prefix_matches_subpaths(self) -> None:
        prefixes = PublicPrefixSet(["/hooks/"])
        assert prefixes.matches("/hooks")
        assert prefixes.matches("/hooks/a")

    def test_empty_set_matches_nothing(self) -> None:
        assert not PublicPrefixSet().matches("/anything")
