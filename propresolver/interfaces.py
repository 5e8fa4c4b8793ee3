"""
模块接口契约 - 定义解析器依赖的外部协作者

设计原则：
1. 解析器只通过接口读取资源字节与系统属性，不直接依赖具体实现
2. "资源不存在"与"资源损坏"是两种不同信号
3. 便于单元测试和mock替换

使用方式：
    from propresolver.interfaces import IPropertyStore

    class MyStore(IPropertyStore):
        def get(self, name: str) -> str | None:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# ============================================================================
# 协作者接口
# ============================================================================

class IResourceProvider(ABC):
    """资源提供者接口 - 按逻辑资源名读取字节"""

    @abstractmethod
    def read_bytes(self, name: str) -> bytes | None:
        """
        读取资源内容

        Args:
            name: 逻辑资源名（如 config.default.properties）

        Returns:
            资源字节；资源不存在时返回 None

        Raises:
            ConfigSourceError: 资源存在但无法读取
        """
        ...

    def exists(self, name: str) -> bool:
        """资源是否存在"""
        return self.read_bytes(name) is not None


class IPropertyStore(ABC):
    """系统属性接口 - 进程内全局可见的命名字符串"""

    @abstractmethod
    def get(self, name: str) -> str | None:
        """获取属性值，未设置返回 None"""
        ...

    @abstractmethod
    def set(self, name: str, value: str) -> None:
        """设置属性值"""
        ...

    @abstractmethod
    def clear(self, name: str) -> None:
        """清除属性（未设置时静默）"""
        ...


# ============================================================================
# 异常定义
# ============================================================================

class PropResolverError(Exception):
    """基础异常"""
    pass


class ConfigSourceError(PropResolverError):
    """配置源错误（存在但无法读取/解码/解析）"""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class InvalidArgumentError(PropResolverError, ValueError):
    """非法参数"""
    pass
