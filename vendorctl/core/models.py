"""核心数据模型

清单（期望状态）与 lock（实际状态）的内存表示及其 YAML 字典映射。
字段名与文件中的键名不完全一致，映射集中在 to_dict / from_dict。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from vendorctl.core.exceptions import ConfigError

# 当前支持的清单格式版本
MANIFEST_VERSION = 1


def _str_list(value: Any, *, key: str, package: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"包 {package} 的 {key} 必须是字符串列表")
    return list(value)


def _require_package(data: Any, key: str) -> str:
    if not isinstance(data, dict):
        raise ConfigError(f"条目必须是字典，实际: {type(data).__name__}")
    name = data.get(key)
    if not isinstance(name, str) or not name:
        raise ConfigError(f"条目缺少 '{key}' 字段: {data}")
    return name


# =========================================================================
# 清单
# =========================================================================


@dataclass
class ManifestPackage:
    """清单中的单个依赖（由使用者编辑）"""

    package: str
    version: str = ""   # 空表示默认分支最新版本
    remote: str = ""    # 空表示 https://<package>
    subpackages: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"package": self.package, "version": self.version}
        if self.remote:
            data["remote"] = self.remote
        if self.subpackages:
            data["subpackages"] = list(self.subpackages)
        return data

    @classmethod
    def from_dict(cls, data: Any) -> ManifestPackage:
        name = _require_package(data, "package")
        return cls(
            package=name,
            version=str(data.get("version") or ""),
            remote=str(data.get("remote") or ""),
            subpackages=_str_list(data.get("subpackages"), key="subpackages", package=name),
        )


@dataclass
class Manifest:
    """清单文件"""

    version: int = MANIFEST_VERSION
    packages: list[ManifestPackage] = field(default_factory=list)

    def get(self, package: str) -> ManifestPackage | None:
        for p in self.packages:
            if p.package == package:
                return p
        return None

    def upsert(self, pkg: ManifestPackage) -> None:
        """按包名替换已有条目，不存在则追加"""
        for i, p in enumerate(self.packages):
            if p.package == pkg.package:
                self.packages[i] = pkg
                return
        self.packages.append(pkg)

    def remove(self, package: str) -> bool:
        before = len(self.packages)
        self.packages = [p for p in self.packages if p.package != package]
        return len(self.packages) != before

    def to_dict(self) -> dict[str, Any]:
        packages = sorted(self.packages, key=lambda p: p.package)
        return {
            "version": self.version,
            "import": [p.to_dict() for p in packages],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Manifest:
        version = data.get("version", MANIFEST_VERSION)
        if not isinstance(version, int):
            raise ConfigError(f"清单版本必须是整数，实际: {version!r}")
        items = data.get("import") or []
        if not isinstance(items, list):
            raise ConfigError("清单的 import 字段必须是列表")
        return cls(
            version=version,
            packages=[ManifestPackage.from_dict(item) for item in items],
        )


# =========================================================================
# Lock
# =========================================================================


@dataclass
class LockPackage:
    """lock 中的单个依赖（仅由引擎写入）

    subpackages 是导入图遍历实际复制的子包闭包，可能是清单声明的超集；
    declared 记录拉取时清单声明的子包，requested 记录拉取时清单请求的版本
    （空串表示最新），二者用于判断 lock 是否已满足清单。
    """

    package: str
    version: str = ""
    remote: str = ""
    subpackages: list[str] = field(default_factory=list)
    declared: list[str] | None = None
    requested: str | None = None
    checksum: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.package, "version": self.version}
        if self.remote:
            data["remote"] = self.remote
        if self.subpackages:
            data["subpackages"] = sorted(self.subpackages)
        if self.declared:
            data["declared"] = sorted(self.declared)
        if self.requested is not None and self.requested != self.version:
            data["requested"] = self.requested
        if self.checksum:
            data["checksum"] = self.checksum
        return data

    @classmethod
    def from_dict(cls, data: Any) -> LockPackage:
        name = _require_package(data, "name")
        declared = data.get("declared")
        requested = data.get("requested")
        return cls(
            package=name,
            version=str(data.get("version") or ""),
            remote=str(data.get("remote") or ""),
            subpackages=_str_list(data.get("subpackages"), key="subpackages", package=name),
            declared=(
                None if declared is None
                else _str_list(declared, key="declared", package=name)
            ),
            requested=None if requested is None else str(requested),
            checksum=str(data.get("checksum") or ""),
        )


@dataclass
class Lock:
    """lock 文件"""

    packages: list[LockPackage] = field(default_factory=list)

    def get(self, package: str) -> LockPackage | None:
        for p in self.packages:
            if p.package == package:
                return p
        return None

    def upsert(self, pkg: LockPackage) -> None:
        """按包名替换已有条目，不存在则追加"""
        for i, p in enumerate(self.packages):
            if p.package == pkg.package:
                self.packages[i] = pkg
                return
        self.packages.append(pkg)

    def remove(self, package: str) -> bool:
        before = len(self.packages)
        self.packages = [p for p in self.packages if p.package != package]
        return len(self.packages) != before

    def normalize(self) -> None:
        """按包名排序，并排序每个条目的子包列表（保证 diff 稳定）"""
        for p in self.packages:
            p.subpackages.sort()
            if p.declared is not None:
                p.declared.sort()
        self.packages.sort(key=lambda p: p.package)

    def to_dict(self) -> dict[str, Any]:
        return {"import": [p.to_dict() for p in self.packages]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Lock:
        items = data.get("import") or []
        if not isinstance(items, list):
            raise ConfigError("lock 文件的 import 字段必须是列表")
        return cls(packages=[LockPackage.from_dict(item) for item in items])
