"""服务容器：按项目目录懒加载引擎各组件

同一容器内的实例共享状态（根包缓存、拉取缓存等）。

依赖关系图（→ 表示依赖）:
  vendor     → project, fetcher, reconciler, resolver
  reconciler → project, fetcher
  fetcher    → project, resolver
  project    → cache, config

用法:
    container = ServiceContainer(directory="path/to/project")
    container.vendor.vendor()
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vendorctl.core.config import Config
    from vendorctl.core.project import Project
    from vendorctl.core.vendor.cache import FetchCache
    from vendorctl.core.vendor.fetcher import PackageFetcher
    from vendorctl.core.vendor.reconciler import Reconciler
    from vendorctl.core.vendor.rootpath import RootResolver
    from vendorctl.services.vendor_service import VendorService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """懒加载服务容器"""

    def __init__(self, config: Config | None = None, directory: str | Path = ".") -> None:
        self._instances: dict[str, object] = {}
        if config is None:
            from vendorctl.core.config import get_config
            config = get_config()
        self._config = config
        self._directory = Path(directory)

    @property
    def config(self) -> Config:
        return self._config

    @property
    def cache(self) -> FetchCache:
        if "cache" not in self._instances:
            from vendorctl.core.vendor.cache import NO_CACHE, CacheDir
            if self._config.disable_cache:
                logger.debug("已禁用拉取缓存")
                self._instances["cache"] = NO_CACHE
            else:
                self._instances["cache"] = CacheDir(self._config.cache_path)
        return self._instances["cache"]  # type: ignore[return-value]

    @property
    def resolver(self) -> RootResolver:
        if "resolver" not in self._instances:
            from vendorctl.core.vendor.rootpath import RootCache, RootResolver
            self._instances["resolver"] = RootResolver(
                RootCache(), timeout=self._config.go_get_timeout,
            )
        return self._instances["resolver"]  # type: ignore[return-value]

    @property
    def project(self) -> Project:
        if "project" not in self._instances:
            from vendorctl.core.project import Project
            self._instances["project"] = Project(
                self._directory, cache=self.cache, config=self._config,
            )
        return self._instances["project"]  # type: ignore[return-value]

    @property
    def fetcher(self) -> PackageFetcher:
        if "fetcher" not in self._instances:
            from vendorctl.core.vendor.fetcher import PackageFetcher
            self._instances["fetcher"] = PackageFetcher(self.project, self.resolver)
        return self._instances["fetcher"]  # type: ignore[return-value]

    @property
    def reconciler(self) -> Reconciler:
        if "reconciler" not in self._instances:
            from vendorctl.core.vendor.reconciler import Reconciler
            self._instances["reconciler"] = Reconciler(self.project, self.fetcher)
        return self._instances["reconciler"]  # type: ignore[return-value]

    @property
    def vendor(self) -> VendorService:
        if "vendor" not in self._instances:
            from vendorctl.services.vendor_service import VendorService
            self._instances["vendor"] = VendorService(
                self.project, self.fetcher, self.reconciler, self.resolver,
            )
        return self._instances["vendor"]  # type: ignore[return-value]
