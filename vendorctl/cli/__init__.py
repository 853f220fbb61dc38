"""vendorctl 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager

import click

from vendorctl import __version__
from vendorctl.core.exceptions import VendorError
from vendorctl.services.container import ServiceContainer
from vendorctl.utils.logger import setup_logging


def _svc() -> ServiceContainer:
    """获取当前命令的服务容器"""
    return click.get_current_context().find_object(ServiceContainer)


@contextmanager
def _handle_errors() -> Iterator[None]:
    """把 VendorError 转为 click 错误输出（退出码 1）"""
    try:
        yield
    except VendorError as e:
        raise click.ClickException(f"[{e.code}] {e}") from e


@click.group()
@click.version_option(version=__version__)
@click.option("--dir", "directory", default=".", type=click.Path(file_okay=False),
              help="项目目录")
@click.option("--disable-cache", is_flag=True, help="不使用拉取缓存")
@click.option("--config", "config_path", default="", help="配置文件路径")
@click.option("-v", "--verbose", is_flag=True, help="输出调试日志")
@click.pass_context
def main(
    ctx: click.Context,
    directory: str,
    disable_cache: bool,
    config_path: str,
    verbose: bool,
) -> None:
    """vendorctl - Go 依赖 vendor 管理工具"""
    setup_logging(
        level="DEBUG" if verbose else os.getenv("VENDORCTL_LOG_LEVEL", "INFO"),
        json_output=os.getenv("VENDORCTL_LOG_JSON", "") == "1",
    )
    from vendorctl.core.config import init_config
    with _handle_errors():
        config = init_config(config_path)
    if disable_cache:
        config.disable_cache = True
    ctx.obj = ServiceContainer(config=config, directory=directory)


# 注册各领域子命令
from vendorctl.cli.cmd_vendor import register as _reg_vendor  # noqa: E402
from vendorctl.cli.cmd_misc import register as _reg_misc  # noqa: E402

_reg_vendor(main)
_reg_misc(main)
