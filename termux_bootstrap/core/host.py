"""宿主应用构建常量读取

插件进程与宿主应用共享身份域，但运行在独立进程中，需要从宿主的
构建常量中读取 TERMUX_PACKAGE_VARIANT。

读取来源（均满足 HostVariantSource 协议）:
  - module:<dotted.name>  导入宿主构建配置模块并读取属性
  - yaml:<path>           读取宿主构建导出的 YAML 常量文件
  - env[:<prefix>]        读取环境变量 <prefix>TERMUX_PACKAGE_VARIANT

用法:
    source = create_host_source("module:termux_app.build_config")
    name = get_host_package_variant(source)   # 任何失败均返回 None
"""

from __future__ import annotations

import importlib
import logging
import os
from pathlib import Path
from typing import Any

from termux_bootstrap.core.exceptions import ConfigError, HostUnavailableError
from termux_bootstrap.core.protocols import HostVariantSource
from termux_bootstrap.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

BUILD_CONFIG_FIELD_TERMUX_PACKAGE_VARIANT = "TERMUX_PACKAGE_VARIANT"


class ModuleBuildConfigSource:
    """从宿主应用的构建配置模块读取常量"""

    def __init__(self, module_name: str) -> None:
        self.module_name = module_name

    def fetch_build_config_field(self, field_name: str, context: Any = None) -> Any:
        try:
            module = importlib.import_module(self.module_name)
        except ImportError as e:
            raise HostUnavailableError(
                f"无法导入宿主构建配置模块 {self.module_name}: {e}"
            ) from e
        if not hasattr(module, field_name):
            raise HostUnavailableError(
                f"宿主构建配置模块 {self.module_name} 中不存在字段 {field_name}"
            )
        return getattr(module, field_name)

    def __repr__(self) -> str:
        return f"ModuleBuildConfigSource({self.module_name!r})"


class YamlBuildConfigSource:
    """从宿主构建导出的 YAML 常量文件读取"""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def fetch_build_config_field(self, field_name: str, context: Any = None) -> Any:
        if not self.path.exists():
            raise HostUnavailableError(f"宿主构建常量文件不存在: {self.path}")
        data = load_yaml(self.path)
        if field_name not in data:
            raise HostUnavailableError(f"{self.path} 中不存在字段 {field_name}")
        return data[field_name]

    def __repr__(self) -> str:
        return f"YamlBuildConfigSource({str(self.path)!r})"


class EnvBuildConfigSource:
    """从环境变量读取（宿主启动插件时导出）"""

    def __init__(self, prefix: str = "") -> None:
        self.prefix = prefix

    def fetch_build_config_field(self, field_name: str, context: Any = None) -> Any:
        key = f"{self.prefix}{field_name}"
        # context 为映射时优先于进程环境，便于在调用方注入宿主环境
        env = context if isinstance(context, dict) else os.environ
        if key not in env:
            raise HostUnavailableError(f"环境变量未设置: {key}")
        return env[key]

    def __repr__(self) -> str:
        return f"EnvBuildConfigSource({self.prefix!r})"


def create_host_source(spec: str) -> HostVariantSource:
    """按描述串创建宿主常量读取来源

    异常:
        ConfigError: 描述串为空或协议不受支持
    """
    if not isinstance(spec, str):
        raise ConfigError(f"宿主来源描述应为字符串: {spec!r}")
    if not spec:
        raise ConfigError("宿主来源描述为空")
    scheme, _, target = spec.partition(":")
    scheme = scheme.strip().lower()
    target = target.strip()
    if scheme == "module":
        if not target:
            raise ConfigError(f"宿主来源缺少模块名: {spec}")
        return ModuleBuildConfigSource(target)
    if scheme == "yaml":
        if not target:
            raise ConfigError(f"宿主来源缺少文件路径: {spec}")
        return YamlBuildConfigSource(target)
    if scheme == "env":
        return EnvBuildConfigSource(target)
    raise ConfigError(
        f"不支持的宿主来源 '{scheme}'，仅支持 module/yaml/env: {spec}"
    )


def get_host_package_variant(
    source: HostVariantSource,
    context: Any = None,
    field_name: str = BUILD_CONFIG_FIELD_TERMUX_PACKAGE_VARIANT,
) -> str | None:
    """从宿主构建常量读取包变体名

    返回:
        字段值；宿主不可达、字段缺失、读取异常或值不是字符串时返回 None
    """
    try:
        value = source.fetch_build_config_field(field_name, context)
    except Exception:
        logger.exception("从宿主 %r 读取 \"%s\" 失败", source, field_name)
        return None
    if value is None:
        return None
    if not isinstance(value, str):
        logger.error(
            "宿主 %r 的 \"%s\" 不是字符串 (实际类型: %s)",
            source, field_name, type(value).__name__,
        )
        return None
    return value
