"""
数据模型层 - 定义解析器核心数据结构

- ResolvedView: 合并后的只读配置视图
- SourceLayer: 单次重建中读取到的一个配置层
"""

from .view import LayerKind, Profile, ResolvedView, SourceLayer

__all__ = [
    "LayerKind",
    "Profile",
    "ResolvedView",
    "SourceLayer",
]
