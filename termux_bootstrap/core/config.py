"""集中配置管理

支持从 YAML 文件加载 + 环境变量覆盖 + 编程式覆盖。
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, field
from typing import Any

from termux_bootstrap.core.exceptions import ConfigError
from termux_bootstrap.core.host import BUILD_CONFIG_FIELD_TERMUX_PACKAGE_VARIANT
from termux_bootstrap.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "TERMUX_BOOTSTRAP_"

_TRUE_VALUES = frozenset(("1", "true", "yes", "on"))
_FALSE_VALUES = frozenset(("0", "false", "no", "off", ""))

_STR_FIELDS = frozenset(("package_variant", "host_source", "build_config_field", "log_level"))


def _check_field(name: str, value: Any, path: str) -> Any:
    """校验 YAML 中已知字段的类型，log_json 允许字符串形式的布尔值

    异常:
        ConfigError: 类型不匹配
    """
    if name in _STR_FIELDS:
        if not isinstance(value, str):
            raise ConfigError(
                f"{path}: {name} 应为字符串 (实际类型: {type(value).__name__})"
            )
        return value
    if name == "log_json":
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            if text in _TRUE_VALUES:
                return True
            if text in _FALSE_VALUES:
                return False
        raise ConfigError(f"{path}: log_json 应为布尔值，实际为 {value!r}")
    return value


@dataclass
class Config:
    """全局配置"""

    # 引导来源: package_variant 优先于 host_source
    package_variant: str = ""
    host_source: str = ""          # module:<name> | yaml:<path> | env[:<prefix>]
    build_config_field: str = BUILD_CONFIG_FIELD_TERMUX_PACKAGE_VARIANT

    # 日志
    log_level: str = "INFO"
    log_json: bool = False

    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = "configs/bootstrap.yml") -> Config:
        """从 YAML 文件加载配置，不存在则返回默认

        值为 null 的已知字段保留默认值。

        异常:
            ConfigError: 已知字段类型不匹配
        """
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()} - {"extra"}
        matched = {
            k: _check_field(k, v, path)
            for k, v in data.items() if k in known and v is not None
        }
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def apply_env(self, environ: dict[str, str] | None = None) -> Config:
        """用 TERMUX_BOOTSTRAP_* 环境变量覆盖对应字段"""
        env = os.environ if environ is None else environ
        for name in ("package_variant", "host_source", "build_config_field", "log_level"):
            value = env.get(ENV_PREFIX + name.upper())
            if value is not None:
                setattr(self, name, value)
        log_json = env.get(ENV_PREFIX + "LOG_JSON")
        if log_json is not None:
            self.log_json = log_json.strip().lower() in _TRUE_VALUES
        return self

    def to_dict(self) -> dict:
        return asdict(self)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = "configs/bootstrap.yml") -> Config:
    """从文件和环境变量初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path).apply_env()
    logger.info("配置已加载: %s", path)
    return _current
