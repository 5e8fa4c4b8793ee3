"""
常用配置 key
"""

from __future__ import annotations

from enum import Enum


class PropertyKeys(str, Enum):
    """约定的属性名"""
    SOURCE = "propresolver.properties.source"   # 标记值来自哪个配置层
    CONFIG_FILE = "propresolver.config.file"    # 外部配置文件路径（系统属性）

    def __str__(self) -> str:
        return self.value
