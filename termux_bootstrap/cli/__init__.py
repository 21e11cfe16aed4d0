"""termux-bootstrap 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

from typing import Any

import click

from termux_bootstrap import __version__
from termux_bootstrap.core.config import init_config
from termux_bootstrap.core.exceptions import BootstrapError
from termux_bootstrap.services.container import get_container, reset_container
from termux_bootstrap.utils.logger import setup_logging


def _svc() -> Any:
    """获取全局服务容器的快捷方式"""
    return get_container()


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config", "config_path", default="configs/bootstrap.yml",
    help="配置文件路径（不存在则使用默认值）",
)
def main(config_path: str) -> None:
    """termux-bootstrap - 宿主应用包变体 / 包管理器元数据工具"""
    try:
        cfg = init_config(config_path)
    except BootstrapError as e:
        raise click.ClickException(f"[{e.code}] {e}") from e
    setup_logging(level=cfg.log_level, json_output=cfg.log_json)
    reset_container()


from termux_bootstrap.cli.cmd_bootstrap import register as _reg_bootstrap  # noqa: E402

_reg_bootstrap(main)
