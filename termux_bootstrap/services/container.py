"""服务容器 — 进程内共享的引导状态与宿主来源

BootstrapResolver 在进程启动时构造一次，之后通过容器传递给各消费者，
而不是在各处 import 全局变量。

用法:
    container = ServiceContainer(config=Config(package_variant="nix-android-8"))
    container.initialize()
    container.bootstrap.package_manager    # PackageManager.NIX

    # 全局单例（CLI / 多模块共享）
    from termux_bootstrap.services.container import get_container
    info = get_container().bootstrap.info
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from termux_bootstrap.core.bootstrap import BootstrapResolver
    from termux_bootstrap.core.config import Config
    from termux_bootstrap.core.models import BootstrapInfo
    from termux_bootstrap.core.protocols import HostVariantSource

logger = logging.getLogger(__name__)


class ServiceContainer:
    """懒加载服务容器"""

    def __init__(self, config: Config | None = None) -> None:
        self._instances: dict[str, object] = {}
        self._lock = threading.Lock()
        if config is None:
            from termux_bootstrap.core.config import get_config
            config = get_config()
        self._config = config

    @property
    def config(self) -> Config:
        return self._config

    @property
    def bootstrap(self) -> BootstrapResolver:
        if "bootstrap" not in self._instances:
            with self._lock:
                if "bootstrap" not in self._instances:
                    from termux_bootstrap.core.bootstrap import BootstrapResolver
                    self._instances["bootstrap"] = BootstrapResolver()
        return self._instances["bootstrap"]  # type: ignore[return-value]

    @property
    def host_source(self) -> HostVariantSource | None:
        """按 config.host_source 创建的宿主来源，未配置时为 None"""
        if "host_source" not in self._instances:
            source = None
            if self._config.host_source:
                from termux_bootstrap.core.host import create_host_source
                source = create_host_source(self._config.host_source)
            self._instances["host_source"] = source
        return self._instances["host_source"]  # type: ignore[return-value]

    def initialize(self) -> BootstrapInfo | None:
        """启动时解析引导元数据

        顺序:
          1. config.package_variant 非空: 直接解析，配置错误向上抛出
          2. config.host_source 非空: 从宿主读取，失败仅记录日志
          3. 均未配置: 记录警告，状态保持未设置
        """
        if self._config.package_variant:
            return self.bootstrap.set_package_manager_and_variant(
                self._config.package_variant,
            )
        source = self.host_source
        if source is not None:
            return self.bootstrap.set_from_host(
                source, field_name=self._config.build_config_field,
            )
        logger.warning("未配置 package_variant 或 host_source，引导元数据不可用")
        return None


# ---- 全局单例 ----

_global: ServiceContainer | None = None
_global_lock = threading.Lock()


def get_container() -> ServiceContainer:
    """获取全局 ServiceContainer 单例（线程安全）"""
    global _global  # noqa: PLW0603
    if _global is not None:
        return _global
    with _global_lock:
        if _global is None:
            _global = ServiceContainer()
        return _global


def reset_container() -> None:
    """重置全局容器（仅用于测试）"""
    global _global  # noqa: PLW0603
    with _global_lock:
        _global = None
