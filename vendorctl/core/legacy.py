"""旧清单格式导入

支持 Godeps/Godeps.json：按根包合并依赖条目，收集子包；
注释形如 v1.2.3 时视为版本 tag，否则使用提交号。
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from vendorctl.core.exceptions import ConfigError
from vendorctl.core.models import Manifest, ManifestPackage

if TYPE_CHECKING:
    from vendorctl.core.vendor.rootpath import RootResolver

logger = logging.getLogger(__name__)


def import_godeps(path: str | Path, resolver: RootResolver) -> Manifest:
    """把 Godeps.json 转换为清单"""
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"读取 {p} 失败: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"解析 {p} 失败: {e}") from e

    deps = data.get("Deps") if isinstance(data, dict) else None
    if not isinstance(deps, list):
        raise ConfigError(f"{p} 不是有效的 Godeps 文件: 缺少 Deps 列表")

    manifest = Manifest()
    for dep in deps:
        import_path = dep.get("ImportPath", "") if isinstance(dep, dict) else ""
        if not import_path:
            raise ConfigError(f"{p} 中存在缺少 ImportPath 的条目: {dep}")

        root = resolver.root_of(import_path)
        sub = import_path[len(root):].lstrip("/")

        existing = manifest.get(root)
        if existing is not None:
            if sub and sub not in existing.subpackages:
                existing.subpackages.append(sub)
            continue

        comment = dep.get("Comment", "") or ""
        version = comment if comment.startswith("v") else dep.get("Rev", "")
        pkg = ManifestPackage(package=root, version=version)
        if sub:
            pkg.subpackages.append(sub)
        logger.info("发现依赖 %s，版本 %s", pkg.package, pkg.version)
        manifest.packages.append(pkg)

    return manifest
