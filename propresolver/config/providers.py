"""
协作者实现 - 资源提供者与系统属性存储

- DirectoryResourceProvider: 从目录读取资源
- PackageResourceProvider: 从已安装包内读取资源（默认 propresolver.resources）
- EnvironPropertyStore: 以 os.environ 作为进程级系统属性
- InMemoryPropertyStore: 内存实现（测试用）
"""

from __future__ import annotations

import os
import threading
from importlib import resources
from pathlib import Path

from ..interfaces import ConfigSourceError, IPropertyStore, IResourceProvider

DEFAULT_RESOURCE_PACKAGE = "propresolver.resources"


class DirectoryResourceProvider(IResourceProvider):
    """目录资源提供者"""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def read_bytes(self, name: str) -> bytes | None:
        path = self.root / name
        if not path.is_file():
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            raise ConfigSourceError(f"资源读取失败: {path}: {e}", str(path)) from e

    def __repr__(self) -> str:
        return f"DirectoryResourceProvider({str(self.root)!r})"


class PackageResourceProvider(IResourceProvider):
    """包内资源提供者"""

    def __init__(self, package: str = DEFAULT_RESOURCE_PACKAGE):
        self.package = package

    def read_bytes(self, name: str) -> bytes | None:
        resource = resources.files(self.package).joinpath(name)
        if not resource.is_file():
            return None
        try:
            return resource.read_bytes()
        except OSError as e:
            raise ConfigSourceError(f"资源读取失败: {self.package}/{name}: {e}", name) from e

    def __repr__(self) -> str:
        return f"PackageResourceProvider({self.package!r})"


class EnvironPropertyStore(IPropertyStore):
    """基于环境变量的系统属性"""

    def get(self, name: str) -> str | None:
        return os.environ.get(name)

    def set(self, name: str, value: str) -> None:
        os.environ[name] = value

    def clear(self, name: str) -> None:
        os.environ.pop(name, None)


class InMemoryPropertyStore(IPropertyStore):
    """内存系统属性（线程安全）"""

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, name: str) -> str | None:
        with self._lock:
            return self._values.get(name)

    def set(self, name: str, value: str) -> None:
        with self._lock:
            self._values[name] = value

    def clear(self, name: str) -> None:
        with self._lock:
            self._values.pop(name, None)

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._values)
