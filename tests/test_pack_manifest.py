"""Pack manifest contract tests."""

from __future__ import annotations

from types import ModuleType, SimpleNamespace

import pytest
from pydantic import BaseModel

from packhost.packs.manifest import (
    ManifestError,
    PackAuth,
    PackManifest,
    manifest_from_module,
)


def _module(**attrs) -> ModuleType:
    mod = ModuleType("packhost_pack_manifest_test")
    for k, v in attrs.items():
        setattr(mod, k, v)
    return mod


def _register(app) -> None:
    pass


class TestManifestFromModule:
    def test_pack_attribute_manifest_instance_is_returned_as_is(self) -> None:
        manifest = PackManifest(register=_register, slug="stripe")
        assert manifest_from_module(_module(pack=manifest)) is manifest

    def test_pack_attribute_dict(self) -> None:
        mod = _module(pack={"register": _register, "auth": {"public_prefixes": ["/hook"]}})
        manifest = manifest_from_module(mod)
        assert manifest.register_hook is _register
        assert manifest.slug is None
        assert manifest.public_prefixes == ("/hook",)

    def test_pack_attribute_plain_object(self) -> None:
        obj = SimpleNamespace(
            register=_register,
            slug="fitdegree",
            auth=SimpleNamespace(public_prefixes=["/a", "/b"]),
        )
        manifest = manifest_from_module(_module(pack=obj))
        assert manifest.slug == "fitdegree"
        assert manifest.public_prefixes == ("/a", "/b")

    def test_module_level_register_without_pack_attribute(self) -> None:
        mod = _module(register=_register, slug="modlevel", auth={"public_prefixes": ["/m"]})
        manifest = manifest_from_module(mod)
        assert manifest.slug == "modlevel"
        assert manifest.public_prefixes == ("/m",)

    def test_missing_register_rejected(self) -> None:
        with pytest.raises(ManifestError, match="register"):
            manifest_from_module(_module(pack={"slug": "nope"}))

    def test_empty_module_rejected(self) -> None:
        with pytest.raises(ManifestError, match="register"):
            manifest_from_module(_module())

    def test_non_callable_register_rejected(self) -> None:
        with pytest.raises(ManifestError, match="register"):
            manifest_from_module(_module(register="not callable"))

    def test_pack_none_rejected(self) -> None:
        with pytest.raises(ManifestError):
            manifest_from_module(_module(pack=None, register=_register))

    def test_public_prefixes_must_be_a_sequence_of_strings(self) -> None:
        with pytest.raises(ManifestError, match="public_prefixes"):
            manifest_from_module(
                _module(register=_register, auth={"public_prefixes": "/not-a-list"})
            )
        with pytest.raises(ManifestError, match="public_prefixes"):
            manifest_from_module(_module(register=_register, auth={"public_prefixes": [1, 2]}))

    def test_slug_with_path_separator_rejected(self) -> None:
        with pytest.raises(ManifestError, match="slug"):
            manifest_from_module(_module(register=_register, slug="../etc"))


class TestPackManifest:
    def test_blank_slug_falls_back_to_directory(self) -> None:
        manifest = PackManifest(register=_register, slug="   ")
        assert manifest.slug is None
        assert manifest.resolved_slug("dirname") == "dirname"

    def test_declared_slug_is_trimmed_and_authoritative(self) -> None:
        manifest = PackManifest(register=_register, slug=" stripe ")
        assert manifest.resolved_slug("stripe-v2") == "stripe"

    def test_no_auth_means_no_declared_prefixes(self) -> None:
        assert PackManifest(register=_register).public_prefixes == ()
        assert PackManifest(register=_register, auth=None).public_prefixes == ()
        assert PackManifest(register=_register, auth=PackAuth()).public_prefixes == ()

    def test_manifest_is_frozen(self) -> None:
        manifest = PackManifest(register=_register)
        with pytest.raises(Exception):
            manifest.slug = "changed"

    def test_fields_do_not_shadow_model_attributes(self) -> None:
        assert not [name for name in PackManifest.model_fields if hasattr(BaseModel, name)]
        assert PackManifest.model_fields["register_hook"].alias == "register"

    def test_hook_accepts_field_name_too(self) -> None:
        assert PackManifest(register_hook=_register).register_hook is _register
