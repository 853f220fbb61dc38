"""vendor 服务：CLI 使用的高层操作

在引擎（拉取编排器、收敛器、校验器）之上提供面向用户的命令语义:
  - get: 新增或更新单个依赖，并把清单条目固定到实际拉取的版本
  - remove: 删除单个依赖及其 vendor 子树
  - vendor: 按清单收敛
  - verify / list: 只读查询
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from vendorctl.core.exceptions import PackageNotFoundError
from vendorctl.core.models import LockPackage, Manifest, ManifestPackage

if TYPE_CHECKING:
    from vendorctl.core.project import Project
    from vendorctl.core.vendor.checksum import VerifyReport
    from vendorctl.core.vendor.fetcher import PackageFetcher
    from vendorctl.core.vendor.reconciler import ReconcileResult, Reconciler
    from vendorctl.core.vendor.rootpath import RootResolver

logger = logging.getLogger(__name__)


class VendorService:
    """单个项目的依赖管理"""

    def __init__(
        self,
        project: Project,
        fetcher: PackageFetcher,
        reconciler: Reconciler,
        resolver: RootResolver,
    ) -> None:
        self.project = project
        self.fetcher = fetcher
        self.reconciler = reconciler
        self.resolver = resolver

    def init(self) -> Path:
        """创建空清单，返回清单路径"""
        self.project.init_manifest()
        return self.project.manifest_path

    def get(
        self,
        package: str,
        version: str = "",
        remote: str = "",
        subpackages: Iterable[str] = (),
    ) -> LockPackage:
        """拉取单个包并写入清单和 lock

        remote / subpackages 省略时沿用清单中已有的值。
        清单条目的版本固定为实际拉取到的版本。
        """
        manifest = self.project.load_manifest()
        prev = manifest.get(package)
        wanted = ManifestPackage(
            package=package,
            version=version,
            remote=remote or (prev.remote if prev else ""),
            subpackages=list(subpackages) or (list(prev.subpackages) if prev else []),
        )

        lock_pkg = self.fetcher.fetch(wanted)

        wanted.version = lock_pkg.version
        lock_pkg.requested = lock_pkg.version
        self.project.update_manifest(lambda m: m.upsert(wanted))
        self.project.update_lock(lambda lk: lk.upsert(lock_pkg))
        return lock_pkg

    def remove(self, package: str) -> None:
        """删除依赖

        Raises:
            PackageNotFoundError: 清单中没有该包
        """
        manifest = self.project.load_manifest()
        if manifest.get(package) is None:
            raise PackageNotFoundError(f"清单中没有依赖包: {package}")

        self.project.remove_vendored(package)
        self.project.update_manifest(lambda m: m.remove(package))
        self.project.update_lock(lambda lk: lk.remove(package))
        logger.info("已删除依赖 %s", package)

    def vendor(self) -> ReconcileResult:
        return self.reconciler.reconcile()

    def verify(self) -> VerifyReport:
        from vendorctl.core.vendor.checksum import verify
        return verify(self.project)

    def list_locked(self) -> list[LockPackage]:
        return self.project.load_lock().packages

    def import_legacy(self, path: str | Path) -> Manifest:
        """从 Godeps.json 生成清单（清单文件必须不存在）"""
        from vendorctl.core.legacy import import_godeps
        manifest = import_godeps(path, self.resolver)
        self.project.import_manifest(manifest)
        logger.info("已导入 %d 个依赖到 %s", len(manifest.packages), self.project.manifest_path)
        return manifest

    def clear_cache(self) -> None:
        self.project.cache.clear()
