"""包管理器 / 包变体领域模型

两级封闭分类:
  PackageManager  ← 叶子枚举，值为规范名（小写，不含分隔符）
  PackageVariant  ← 构建变体，规范名形如 "<manager>-<suffix>"，
                    第一个 "-" 之前的子串必须是某个 PackageManager 的规范名

变体到包管理器的关联由名字前缀推导，而非显式外键。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique

from termux_bootstrap.core.exceptions import UnsupportedManagerError

PACKAGE_NAME_DELIMITER = "-"


@unique
class PackageManager(str, Enum):
    """宿主应用引导环境使用的包管理器"""

    # https://wiki.nixos.org/wiki/Nix
    NIX = "nix"

    @property
    def display_name(self) -> str:
        return self.value


@unique
class PackageVariant(str, Enum):
    """宿主应用的构建变体"""

    NIX_ANDROID_8 = "nix-android-8"  # NIX, Android 8+

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def manager_name(self) -> str:
        """规范名中第一个分隔符之前的包管理器名"""
        return self.value.split(PACKAGE_NAME_DELIMITER, 1)[0]

    @property
    def manager(self) -> PackageManager:
        """所属包管理器

        异常:
            UnsupportedManagerError: 前缀未注册为 PackageManager
        """
        try:
            return PackageManager(self.manager_name)
        except ValueError:
            raise UnsupportedManagerError(self.manager_name, self.value) from None


@dataclass(frozen=True)
class BootstrapInfo:
    """已解析的 (包管理器, 包变体) 对，整体原子发布"""

    package_manager: PackageManager
    package_variant: PackageVariant

    def to_dict(self) -> dict[str, str]:
        return {
            "package_manager": self.package_manager.value,
            "package_variant": self.package_variant.value,
        }
