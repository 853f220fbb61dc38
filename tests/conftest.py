"""共享测试夹具: 内存中的假远端代码仓、假根包解析器、临时项目"""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from vendorctl.core.config import Config
from vendorctl.core.exceptions import RepositoryError
from vendorctl.core.project import Project
from vendorctl.core.vendor.cache import CacheDir
from vendorctl.core.vendor.fetcher import PackageFetcher

_MARKER = ".fake"


class FakeRemote:
    """假远端: 版本 -> {相对路径: 内容}

    hidden 中的版本只有在 update_to_latest 之后才可见（模拟远端新推送的 tag）。
    """

    def __init__(self, versions: dict[str, dict[str, str]], latest: str) -> None:
        self.versions = dict(versions)
        self.latest = latest
        self.hidden: dict[str, dict[str, str]] = {}


class FakeRepo:
    def __init__(self, remote: FakeRemote, local: Path, calls: list[str]) -> None:
        self.remote_data = remote
        self.remote = "fake"
        self.local = Path(local)
        self.calls = calls
        self.current = ""

    def check_local(self) -> bool:
        return (self.local / _MARKER).exists()

    def fetch(self) -> None:
        self.calls.append("fetch")
        self.local.mkdir(parents=True, exist_ok=True)
        (self.local / _MARKER).write_text("")

    def update_to_version(self, version: str) -> None:
        self.calls.append(f"checkout:{version}")
        if version not in self.remote_data.versions:
            raise RepositoryError(f"未知版本 {version}")
        self._checkout(version)

    def update_to_latest(self) -> None:
        self.calls.append("latest")
        self.remote_data.versions.update(self.remote_data.hidden)
        self._checkout(self.remote_data.latest)

    def current_version(self) -> str:
        return self.current

    def _checkout(self, version: str) -> None:
        for child in self.local.iterdir():
            if child.name == _MARKER:
                continue
            if child.is_dir():
                shutil.rmtree(child)
            else:
                child.unlink()
        for rel, content in self.remote_data.versions[version].items():
            path = self.local / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        self.current = version


class FakeResolver:
    """按前缀表解析根包，未登记的路径视为自身即根包"""

    def __init__(self) -> None:
        self.roots: dict[str, str] = {}

    def root_of(self, import_path: str) -> str:
        for prefix, root in self.roots.items():
            if import_path == prefix or import_path.startswith(prefix + "/"):
                return root
        return import_path


@pytest.fixture
def remotes() -> dict[str, FakeRemote]:
    return {}


@pytest.fixture
def add_remote(remotes):
    """登记假远端: add_remote(url, {版本: 文件表}, latest=...)"""

    def add(url: str, versions: dict[str, dict[str, str]], latest: str = "") -> FakeRemote:
        remote = FakeRemote(versions, latest or next(iter(versions)))
        remotes[url] = remote
        return remote

    return add


@pytest.fixture
def repo_calls() -> list[str]:
    return []


@pytest.fixture
def opened_remotes() -> list[str]:
    """按顺序记录构造过代码仓的远端地址"""
    return []


@pytest.fixture
def repo_factory(remotes, repo_calls, opened_remotes):
    def factory(remote: str, local: Path) -> FakeRepo:
        opened_remotes.append(remote)
        if remote not in remotes:
            raise RepositoryError(f"{remote}: 仓库不存在")
        return FakeRepo(remotes[remote], local, repo_calls)

    return factory


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def project(tmp_path) -> Project:
    proj_dir = tmp_path / "proj"
    proj_dir.mkdir()
    p = Project(proj_dir, cache=CacheDir(tmp_path / "cache"), config=Config())
    p.init_manifest()
    return p


@pytest.fixture
def fetcher(project, resolver, repo_factory) -> PackageFetcher:
    return PackageFetcher(project, resolver, repo_factory)
