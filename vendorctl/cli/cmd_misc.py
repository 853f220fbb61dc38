"""CLI：杂项命令（旧清单导入、缓存清理）"""

from __future__ import annotations

import click

from vendorctl.cli import _handle_errors, _svc


def register(group: click.Group) -> None:
    group.add_command(import_legacy)
    group.add_command(clear_cache)


@click.command(name="import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def import_legacy(file: str) -> None:
    """从 Godeps.json 生成清单"""
    with _handle_errors():
        manifest = _svc().vendor.import_legacy(file)
    for p in manifest.packages:
        click.echo(f"  {p.package:40s} {p.version}")
    click.echo(f"已导入 {len(manifest.packages)} 个依赖")


@click.command(name="clear-cache")
def clear_cache() -> None:
    """删除拉取缓存"""
    with _handle_errors():
        _svc().vendor.clear_cache()
    click.echo("缓存已清理")
