"""统一异常体系

所有业务异常继承 BootstrapError，调用方可按 code 区分失败类型。
CLI 层据此输出友好提示。

分两类:
  - ConfigurationError 及其子类: 本地配置损坏（变体/包管理器不受支持），
    直接解析路径上必须向上抛出，中止启动
  - HostUnavailableError: 宿主应用不可达，在宿主读取边界内被吸收并记录日志
"""

from __future__ import annotations


class BootstrapError(Exception):
    """基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(BootstrapError):
    """配置文件或宿主来源描述无效"""

    code = "CONFIG_ERROR"


class ConfigurationError(BootstrapError):
    """包变体 / 包管理器分类配置无效"""

    code = "CONFIGURATION_ERROR"


class UnsupportedVariantError(ConfigurationError):
    """变体名不在已注册的 PackageVariant 中"""

    code = "UNSUPPORTED_VARIANT"

    def __init__(self, variant_name: str | None) -> None:
        super().__init__(f'Unsupported TERMUX_APP_PACKAGE_VARIANT "{variant_name}"')
        self.variant_name = variant_name


class UnsupportedManagerError(ConfigurationError):
    """变体名前缀推导出的包管理器未注册"""

    code = "UNSUPPORTED_MANAGER"

    def __init__(self, manager_name: str | None, variant_name: str | None) -> None:
        super().__init__(
            f'Unsupported TERMUX_APP_PACKAGE_MANAGER "{manager_name}" '
            f'with variant "{variant_name}"'
        )
        self.manager_name = manager_name
        self.variant_name = variant_name


class TaxonomyError(ConfigurationError):
    """分类表自洽性检查失败"""

    code = "TAXONOMY_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class HostUnavailableError(BootstrapError):
    """无法从宿主应用读取构建常量"""

    code = "HOST_UNAVAILABLE"
