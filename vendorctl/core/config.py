"""集中配置管理

提供统一的配置入口：YAML 配置文件 + 命令行/编程式覆盖。
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path

import yaml

from vendorctl.core.exceptions import ConfigError
from vendorctl.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "VENDORCTL_CONFIG"
DEFAULT_CONFIG_PATH = "~/.vendorctl/config.yml"


@dataclass
class Config:
    """vendorctl 全局配置"""

    # 目录与文件名
    cache_dir: str = "~/.vendorctl"
    manifest_file: str = "vendorctl.yml"
    lock_file: str = "vendorctl.lock"
    vendor_dir: str = "vendor"

    # 行为
    disable_cache: bool = False
    vcs_timeout: int = 600
    go_get_timeout: int = 10

    # 放不到字段里的配置项
    extra: dict = field(default_factory=dict)

    @property
    def cache_path(self) -> Path:
        return Path(os.path.expanduser(self.cache_dir))

    @classmethod
    def from_file(cls, path: str | Path) -> Config:
        """从 YAML 文件加载配置，文件不存在则返回默认"""
        try:
            data = load_yaml(Path(os.path.expanduser(str(path))))
        except (yaml.YAMLError, ValueError, OSError) as e:
            raise ConfigError(f"配置文件无效: {path} ({e})") from e
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()} - {"extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        try:
            cfg = cls(**matched)
        except TypeError as e:
            raise ConfigError(f"配置文件无效: {path} ({e})") from e
        cfg.extra = extra
        return cfg

    def to_dict(self) -> dict:
        return asdict(self)


_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = "") -> Config:
    """从文件初始化全局配置

    路径优先级: 参数 > VENDORCTL_CONFIG 环境变量 > ~/.vendorctl/config.yml
    """
    global _current  # noqa: PLW0603
    path = path or os.getenv(CONFIG_ENV_VAR, "") or DEFAULT_CONFIG_PATH
    _current = Config.from_file(path)
    logger.debug("配置已加载: %s", path)
    return _current
