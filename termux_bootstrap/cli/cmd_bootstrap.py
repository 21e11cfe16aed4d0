"""CLI — 包变体 / 包管理器解析命令"""

from __future__ import annotations

import click

from termux_bootstrap.cli import _svc
from termux_bootstrap.core.exceptions import BootstrapError
from termux_bootstrap.core.models import BootstrapInfo


def register(group: click.Group) -> None:
    group.add_command(taxonomy)
    group.add_command(check)
    group.add_command(resolve)
    group.add_command(from_host)
    group.add_command(show)


def _echo_info(info: BootstrapInfo) -> None:
    click.echo(f"package_manager: {info.package_manager.value}")
    click.echo(f"package_variant: {info.package_variant.value}")


@click.command()
def taxonomy() -> None:
    """列出所有已注册的包变体及其包管理器"""
    from termux_bootstrap.core.registry import list_taxonomy
    for row in list_taxonomy():
        click.echo(f"  {row['variant']:20s} -> {row['manager']}")


@click.command()
def check() -> None:
    """校验包变体分类表自洽性"""
    from termux_bootstrap.core.registry import verify_taxonomy
    try:
        verify_taxonomy()
    except BootstrapError as e:
        for detail in getattr(e, "details", []):
            click.echo(f"  - {detail}", err=True)
        raise click.ClickException(f"[{e.code}] {e}") from e
    click.echo("分类表校验通过")


@click.command()
@click.argument("variant")
def resolve(variant: str) -> None:
    """按变体名解析包管理器（不受支持时失败）"""
    try:
        info = _svc().bootstrap.set_package_manager_and_variant(variant)
    except BootstrapError as e:
        raise click.ClickException(f"[{e.code}] {e}") from e
    _echo_info(info)


@click.command(name="from-host")
@click.option(
    "--source", default=None,
    help="宿主来源: module:<模块名> | yaml:<路径> | env[:<前缀>]（默认取配置 host_source）",
)
def from_host(source: str | None) -> None:
    """从宿主应用构建常量解析（宿主不可用时不失败）"""
    svc = _svc()
    try:
        if source:
            from termux_bootstrap.core.host import create_host_source
            host = create_host_source(source)
        else:
            host = svc.host_source
    except BootstrapError as e:
        raise click.ClickException(f"[{e.code}] {e}") from e
    if host is None:
        raise click.ClickException("未指定 --source，且配置中没有 host_source")

    info = svc.bootstrap.set_from_host(host, field_name=svc.config.build_config_field)
    if info is None:
        click.echo("引导元数据不可用")
        return
    _echo_info(info)


@click.command()
def show() -> None:
    """按配置初始化并显示当前引导元数据"""
    try:
        info = _svc().initialize()
    except BootstrapError as e:
        raise click.ClickException(f"[{e.code}] {e}") from e
    if info is None:
        click.echo("引导元数据不可用")
        return
    _echo_info(info)
