"""领域协议定义

使用 typing.Protocol 而非 ABC，使得现有类无需修改继承关系即可满足协议。
"""

from __future__ import annotations

from typing import Any, Protocol


# =========================================================================
# 宿主构建常量协议
# =========================================================================

class HostVariantSource(Protocol):
    """宿主应用构建常量读取协议

    抽象"读取另一个应用编译期常量"这一平台相关机制，
    使解析器不依赖具体的读取方式（模块导入、导出文件、环境变量等）。
    宿主不存在或字段缺失时应抛出异常（推荐 HostUnavailableError）。
    """

    def fetch_build_config_field(self, field_name: str, context: Any = None) -> Any:
        """读取宿主构建配置中的字段值"""
        ...
