"""引导元数据解析器

从变体名解析出 (PackageVariant, PackageManager) 对，并在进程内保存。

两个入口的失败语义不同:
  - set_package_manager_and_variant(): 调用方直接控制变体名，
    变体或包管理器不受支持即抛 ConfigurationError，不做捕获
  - set_from_host(): 观察另一个进程的状态，宿主缺失属预期情况，
    任何失败都记录日志并返回 None，永不抛出

状态以不可变的 BootstrapInfo 整体替换，读者不会看到新旧混合的一对值。
进程内唯一实例由 ServiceContainer 持有（get_container().bootstrap）。

用法:
    resolver = BootstrapResolver()
    resolver.set_package_manager_and_variant("nix-android-8")
    resolver.package_manager        # PackageManager.NIX
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from termux_bootstrap.core.exceptions import (
    ConfigurationError,
    UnsupportedManagerError,
    UnsupportedVariantError,
)
from termux_bootstrap.core.host import (
    BUILD_CONFIG_FIELD_TERMUX_PACKAGE_VARIANT,
    get_host_package_variant,
)
from termux_bootstrap.core.models import BootstrapInfo, PackageManager, PackageVariant
from termux_bootstrap.core.protocols import HostVariantSource
from termux_bootstrap.core.registry import (
    manager_name_of,
    manager_of,
    variant_of,
    verify_taxonomy,
)

logger = logging.getLogger(__name__)


class BootstrapResolver:
    """宿主应用包变体 / 包管理器解析与持有"""

    def __init__(self, *, verify: bool = True) -> None:
        if verify:
            verify_taxonomy()
        self._info: BootstrapInfo | None = None
        self._lock = threading.Lock()

    @property
    def info(self) -> BootstrapInfo | None:
        return self._info

    @property
    def package_manager(self) -> PackageManager | None:
        info = self._info
        return info.package_manager if info else None

    @property
    def package_variant(self) -> PackageVariant | None:
        info = self._info
        return info.package_variant if info else None

    @property
    def is_resolved(self) -> bool:
        return self._info is not None

    def set_package_manager_and_variant(self, variant_name: str | None) -> BootstrapInfo:
        """按变体名解析并保存包变体与包管理器

        异常:
            UnsupportedVariantError: 变体名未注册
            UnsupportedManagerError: 变体名前缀推导出的包管理器未注册
        """
        variant = variant_of(variant_name)
        if variant is None:
            raise UnsupportedVariantError(variant_name)

        manager_name = manager_name_of(variant_name)
        manager = manager_of(manager_name)
        if manager is None:
            raise UnsupportedManagerError(manager_name, variant_name)

        info = BootstrapInfo(package_manager=manager, package_variant=variant)
        with self._lock:
            self._info = info
        logger.debug('TERMUX_APP_PACKAGE_VARIANT 已设置为 "%s"', variant.value)
        logger.debug('TERMUX_APP_PACKAGE_MANAGER 已设置为 "%s"', manager.value)
        return info

    def set_from_host(
        self,
        source: HostVariantSource,
        context: Any = None,
        field_name: str = BUILD_CONFIG_FIELD_TERMUX_PACKAGE_VARIANT,
    ) -> BootstrapInfo | None:
        """从宿主应用构建常量解析并保存，失败时保持原状态并返回 None"""
        variant_name = get_host_package_variant(source, context, field_name)
        if variant_name is None:
            logger.error(
                "无法从宿主应用设置 TERMUX_APP_PACKAGE_VARIANT 和 TERMUX_APP_PACKAGE_MANAGER"
            )
            return None
        try:
            return self.set_package_manager_and_variant(variant_name)
        except ConfigurationError:
            logger.exception("宿主应用的包变体 \"%s\" 无效", variant_name)
            return None

    def reset(self) -> None:
        """清空已解析状态（仅用于测试）"""
        with self._lock:
            self._info = None
