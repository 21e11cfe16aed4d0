"""包管理器 / 包变体查找

职责:
- 按规范名精确查找 PackageManager / PackageVariant（区分大小写）
- 从变体名推导包管理器名（第一个 "-" 之前的子串）
- 启动时校验分类表自洽性

查找失败统一返回 None，不抛异常；是否视为错误由调用方决定。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum

from termux_bootstrap.core.exceptions import TaxonomyError
from termux_bootstrap.core.models import (
    PACKAGE_NAME_DELIMITER,
    PackageManager,
    PackageVariant,
)

logger = logging.getLogger(__name__)


def _lookup(members: Iterable[Enum], name: str | None) -> Enum | None:
    if not name:
        return None
    for m in members:
        if m.value == name:
            return m
    return None


def manager_of(name: str | None) -> PackageManager | None:
    """按规范名获取 PackageManager，空值或未找到返回 None"""
    return _lookup(PackageManager, name)  # type: ignore[return-value]


def variant_of(name: str | None) -> PackageVariant | None:
    """按规范名获取 PackageVariant，空值或未找到返回 None"""
    return _lookup(PackageVariant, name)  # type: ignore[return-value]


def manager_name_of(variant_name: str | None) -> str | None:
    """变体名中第一个 "-" 之前的子串，不含分隔符时返回 None"""
    if not variant_name:
        return None
    index = variant_name.find(PACKAGE_NAME_DELIMITER)
    if index == -1:
        return None
    return variant_name[:index]


def _all_members(members: Iterable[Enum]) -> list[Enum]:
    """展开枚举成员，包含值重复产生的别名"""
    if isinstance(members, type) and issubclass(members, Enum):
        return list(members.__members__.values())
    return list(members)


def verify_taxonomy(
    managers: Iterable[Enum] = PackageManager,
    variants: Iterable[Enum] = PackageVariant,
) -> None:
    """校验分类表自洽性

    规则:
      - 包管理器名为小写、不含分隔符、互不重复
      - 变体名互不重复
      - 每个变体推导出的包管理器名都能匹配到已注册的包管理器

    异常:
        TaxonomyError: 存在任何违规项，details 中列出全部
    """
    managers = _all_members(managers)
    variants = _all_members(variants)
    problems: list[str] = []

    seen: set[str] = set()
    for m in managers:
        name = m.value
        if not name or name != name.lower() or PACKAGE_NAME_DELIMITER in name:
            problems.append(f"包管理器名不合法: {m.name}={name!r}")
        if name in seen:
            problems.append(f"包管理器名重复: {name!r}")
        seen.add(name)

    manager_names = {m.value for m in managers}
    seen = set()
    for v in variants:
        name = v.value
        if name in seen:
            problems.append(f"变体名重复: {name!r}")
        seen.add(name)
        token = manager_name_of(name)
        if token not in manager_names:
            problems.append(f"变体 {v.name}={name!r} 的包管理器 {token!r} 未注册")

    if problems:
        raise TaxonomyError(
            f"包变体分类表校验失败 ({len(problems)} 项)", details=problems,
        )
    logger.debug(
        "分类表校验通过: %d 个包管理器, %d 个变体", len(managers), len(variants),
    )


def list_taxonomy() -> list[dict[str, str]]:
    """按声明顺序列出变体及其包管理器，用于展示"""
    return [
        {"variant": v.value, "manager": manager_name_of(v.value) or ""}
        for v in PackageVariant
    ]
