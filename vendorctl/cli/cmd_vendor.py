"""CLI：依赖管理命令"""

from __future__ import annotations

import click

from vendorctl.cli import _handle_errors, _svc


def register(group: click.Group) -> None:
    group.add_command(init)
    group.add_command(get)
    group.add_command(remove)
    group.add_command(vendor)
    group.add_command(verify)
    group.add_command(list_locked)


@click.command()
def init() -> None:
    """创建空清单"""
    with _handle_errors():
        path = _svc().vendor.init()
    click.echo(f"已创建: {path}")


@click.command()
@click.argument("package")
@click.option("--version", default="", help="版本（tag/分支/提交），默认取最新")
@click.option("--remote", default="", help="远端地址，默认 https://<package>")
@click.option("--subpackage", "subpackages", multiple=True, help="只 vendor 指定子包（可重复）")
def get(package: str, version: str, remote: str, subpackages: tuple[str, ...]) -> None:
    """新增或更新依赖"""
    with _handle_errors():
        pkg = _svc().vendor.get(
            package, version=version, remote=remote, subpackages=subpackages,
        )
    click.echo(f"就绪: {pkg.package}@{pkg.version}")


@click.command()
@click.argument("package")
def remove(package: str) -> None:
    """删除依赖及其 vendor 目录"""
    with _handle_errors():
        _svc().vendor.remove(package)
    click.echo(f"已删除: {package}")


@click.command()
def vendor() -> None:
    """按清单收敛 vendor 目录"""
    with _handle_errors():
        result = _svc().vendor.vendor()
    for name in result.fetched:
        click.echo(f"  拉取  {name}")
    for name in result.removed:
        click.echo(f"  删除  {name}")
    if not result.changed:
        click.echo("依赖已是最新。")


@click.command()
@click.pass_context
def verify(ctx: click.Context) -> None:
    """按 lock 校验 vendor 目录是否被修改"""
    with _handle_errors():
        report = _svc().vendor.verify()
    for name in report.skipped:
        click.echo(f"  跳过  {name}（未记录校验和）")
    for name in report.mismatched:
        click.echo(f"  不一致  {name}")
    if not report.ok:
        click.echo(f"校验失败: {len(report.mismatched)} 个包被修改", err=True)
        ctx.exit(2)
    click.echo(f"校验通过: {report.checked} 个包")


@click.command(name="list")
def list_locked() -> None:
    """列出 lock 中的依赖"""
    with _handle_errors():
        packages = _svc().vendor.list_locked()
    if not packages:
        click.echo("没有已 vendor 的依赖。")
        return
    for p in packages:
        subs = f"  [{', '.join(p.subpackages)}]" if p.subpackages else ""
        click.echo(f"  {p.package:40s} {p.version}{subs}")
