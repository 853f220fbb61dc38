"""项目目录：清单 / lock 文件读写与 vendor 路径

lock 文件的每次写入都是完整的 读取-修改-写入，写入前统一排序，
保证 diff 稳定；配合原子写入，中途崩溃不会留下损坏的 lock。
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from pathlib import Path

import yaml

from vendorctl.core.config import Config
from vendorctl.core.exceptions import ConfigError, VendorFileError
from vendorctl.core.models import MANIFEST_VERSION, Lock, Manifest
from vendorctl.core.vendor.cache import NO_CACHE, FetchCache
from vendorctl.utils.yaml_io import load_yaml, save_yaml

logger = logging.getLogger(__name__)


def _read(path: Path) -> dict:
    try:
        return load_yaml(path)
    except (yaml.YAMLError, ValueError) as e:
        raise ConfigError(f"文件格式错误 {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"读取文件失败 {path}: {e}") from e


def is_empty_dir(path: Path) -> bool:
    with os.scandir(path) as it:
        return next(it, None) is None


class Project:
    """单个项目目录"""

    def __init__(
        self,
        directory: str | Path,
        cache: FetchCache | None = None,
        config: Config | None = None,
    ) -> None:
        self.dir = Path(directory)
        self.cache = cache if cache is not None else NO_CACHE
        self.config = config or Config()

    @property
    def manifest_path(self) -> Path:
        return self.dir / self.config.manifest_file

    @property
    def lock_path(self) -> Path:
        return self.dir / self.config.lock_file

    @property
    def vendor_path(self) -> Path:
        return self.dir / self.config.vendor_dir

    def package_path(self, import_path: str) -> Path:
        """包在 vendor 目录下的路径（导入路径的 "/" 映射为目录分隔）"""
        return self.vendor_path.joinpath(*import_path.split("/"))

    # ------------------------------------------------------------------
    # 清单
    # ------------------------------------------------------------------

    def init_manifest(self) -> None:
        if self.manifest_path.exists():
            raise ConfigError(f"清单文件已存在: {self.manifest_path}")
        self.save_manifest(Manifest())
        logger.info("已创建清单: %s", self.manifest_path)

    def import_manifest(self, manifest: Manifest) -> None:
        """写入导入得到的清单，清单文件必须不存在"""
        if self.manifest_path.exists():
            raise ConfigError(f"清单文件已存在: {self.manifest_path}")
        self.save_manifest(manifest)

    def load_manifest(self) -> Manifest:
        """读取清单

        Raises:
            ConfigError: 清单不存在、格式错误或版本高于当前支持的版本
        """
        if not self.manifest_path.exists():
            raise ConfigError(
                f"清单文件不存在: {self.manifest_path}，请先运行 'vendorctl init'"
            )
        manifest = Manifest.from_dict(_read(self.manifest_path))
        if manifest.version > MANIFEST_VERSION:
            raise ConfigError(
                f"清单版本 ({manifest.version}) 高于 vendorctl 支持的版本 "
                f"({MANIFEST_VERSION})，请升级"
            )
        return manifest

    def save_manifest(self, manifest: Manifest) -> None:
        manifest.version = MANIFEST_VERSION
        save_yaml(self.manifest_path, manifest.to_dict())

    def update_manifest(self, fn: Callable[[Manifest], None]) -> Manifest:
        manifest = self.load_manifest()
        fn(manifest)
        self.save_manifest(manifest)
        return manifest

    # ------------------------------------------------------------------
    # Lock
    # ------------------------------------------------------------------

    def load_lock(self) -> Lock:
        """读取 lock 文件，不存在时返回空 lock"""
        if not self.lock_path.exists():
            return Lock()
        return Lock.from_dict(_read(self.lock_path))

    def save_lock(self, lock: Lock) -> None:
        lock.normalize()
        save_yaml(self.lock_path, lock.to_dict())

    def update_lock(self, fn: Callable[[Lock], None]) -> Lock:
        """读取 lock、应用修改、排序后写回"""
        lock = self.load_lock()
        fn(lock)
        self.save_lock(lock)
        return lock

    # ------------------------------------------------------------------
    # vendor 目录
    # ------------------------------------------------------------------

    def remove_vendored(self, import_path: str) -> None:
        """删除包的 vendor 子树，并向上清理变空的祖先目录（不含项目目录本身）"""
        path = self.package_path(import_path)
        try:
            if path.exists():
                shutil.rmtree(path)
            parent = path.parent
            project = self.dir.resolve()
            while parent.resolve() != project and project in parent.resolve().parents:
                if not parent.is_dir() or not is_empty_dir(parent):
                    break
                parent.rmdir()
                parent = parent.parent
        except OSError as e:
            raise VendorFileError(f"删除 {path} 失败: {e}") from e
        logger.debug("已删除 vendor 子树: %s", path)
