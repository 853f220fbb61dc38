"""VendorService 测试"""

from __future__ import annotations

import json

import pytest

from vendorctl.core.exceptions import ConfigError, PackageNotFoundError
from vendorctl.core.vendor.reconciler import Reconciler
from vendorctl.services.vendor_service import VendorService

PKG = "example.com/lib"
FILES = {
    "lib.go": "package lib\n",
    "a/a.go": "package a\n",
    "b/b.go": "package b\n",
}


@pytest.fixture
def service(project, fetcher, resolver, add_remote) -> VendorService:
    add_remote(f"https://{PKG}", {"v1.0.0": FILES, "deadbeef": FILES}, latest="deadbeef")
    return VendorService(project, fetcher, Reconciler(project, fetcher), resolver)


class TestGet:
    def test_pins_concrete_version(self, service, project) -> None:
        locked = service.get(PKG)
        assert locked.version == "deadbeef"
        assert project.load_manifest().get(PKG).version == "deadbeef"
        assert project.load_lock().get(PKG).version == "deadbeef"

    def test_vendor_after_get_is_noop(self, service) -> None:
        service.get(PKG, version="v1.0.0", subpackages=["a"])
        assert not service.vendor().changed

    def test_vendor_after_unpinned_get_is_noop(self, service, project) -> None:
        service.get(PKG)
        assert project.load_lock().get(PKG).requested is None
        assert not service.vendor().changed

    def test_reuses_previous_subpackages(self, service, project) -> None:
        service.get(PKG, version="v1.0.0", subpackages=["a"])
        locked = service.get(PKG, version="deadbeef")
        assert locked.declared == ["a"]
        assert project.load_manifest().get(PKG).subpackages == ["a"]

    def test_requires_manifest(self, service, project) -> None:
        project.manifest_path.unlink()
        with pytest.raises(ConfigError, match="vendorctl init"):
            service.get(PKG)


class TestRemove:
    def test_remove(self, service, project) -> None:
        service.get(PKG)
        service.remove(PKG)
        assert project.load_manifest().get(PKG) is None
        assert project.load_lock().get(PKG) is None
        assert not project.vendor_path.exists()

    def test_remove_unknown(self, service) -> None:
        with pytest.raises(PackageNotFoundError, match=PKG):
            service.remove(PKG)


class TestQueries:
    def test_verify_and_list(self, service, project) -> None:
        service.get(PKG)
        assert service.verify().ok
        assert [p.package for p in service.list_locked()] == [PKG]
        (project.package_path(PKG) / "lib.go").write_text("package hacked\n")
        assert service.verify().mismatched == [PKG]

    def test_import_legacy_requires_no_manifest(self, service, tmp_path) -> None:
        godeps = tmp_path / "Godeps.json"
        godeps.write_text(json.dumps({"Deps": [{"ImportPath": PKG, "Rev": "abc"}]}))
        with pytest.raises(ConfigError, match="已存在"):
            service.import_legacy(godeps)

    def test_import_legacy(self, service, project, resolver, tmp_path) -> None:
        project.manifest_path.unlink()
        resolver.roots[PKG] = PKG
        godeps = tmp_path / "Godeps.json"
        godeps.write_text(json.dumps({"Deps": [
            {"ImportPath": f"{PKG}/a", "Rev": "abc"},
            {"ImportPath": f"{PKG}/b", "Rev": "abc"},
        ]}))
        service.import_legacy(godeps)
        entry = project.load_manifest().get(PKG)
        assert entry.version == "abc"
        assert entry.subpackages == ["a", "b"]

    def test_clear_cache(self, service, project) -> None:
        service.get(PKG)
        service.clear_cache()
        assert not project.cache.base.exists()
