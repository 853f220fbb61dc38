"""网络工具：导入路径与 go-get 请求地址校验"""

from __future__ import annotations

from urllib.parse import urlparse

from vendorctl.core.exceptions import ValidationError


def reject_url_scheme(import_path: str) -> None:
    """导入路径不允许带协议前缀（如 https://github.com/x/y）

    Raises:
        ValidationError: 导入路径包含 URL scheme
    """
    scheme = urlparse(import_path).scheme
    if scheme:
        raise ValidationError(f"导入路径中不允许出现 \"{scheme}\": {import_path}")


def validate_url_scheme(url: str, *, context: str = "") -> None:
    """go-get 请求地址只允许 http / https"""
    scheme = urlparse(url).scheme
    if scheme in ("http", "https"):
        return
    where = f" ({context})" if context else ""
    raise ValidationError(f"请求地址协议 '{scheme}' 不受支持{where}: {url}")
