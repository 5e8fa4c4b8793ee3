"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(resolver, redefine_property):
        redefine_property("some.key", "value")   # 测试结束自动清除
        assert resolver.get("some.key") == "value"
"""

from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generator

import pytest

from propresolver.config import (
    ConfigResolver,
    DirectoryResourceProvider,
    InMemoryPropertyStore,
    reset_resolver,
)

RESOURCES_DIR = Path(__file__).parent / "resources"


# ============================================================================
# 解析器 Fixtures
# ============================================================================

@pytest.fixture
def property_store() -> InMemoryPropertyStore:
    """内存系统属性（不污染真实进程环境）"""
    return InMemoryPropertyStore()


@pytest.fixture
def resource_provider() -> DirectoryResourceProvider:
    """tests/resources 下的四个属性文件"""
    return DirectoryResourceProvider(RESOURCES_DIR)


@pytest.fixture
def resolver(
    resource_provider: DirectoryResourceProvider,
    property_store: InMemoryPropertyStore,
) -> ConfigResolver:
    """已完成首次加载的解析器"""
    return ConfigResolver(resources=resource_provider, properties=property_store)


@pytest.fixture(autouse=True)
def _reset_global_resolver() -> Generator[None, None, None]:
    """每个测试后丢弃全局解析器"""
    yield
    reset_resolver()


# ============================================================================
# 系统属性 Fixtures
# ============================================================================

@pytest.fixture
def redefine_property(
    property_store: InMemoryPropertyStore,
) -> Generator[Callable[[str, str], None], None, None]:
    """重定义系统属性，测试结束后自动清除"""
    redefined: set[str] = set()

    def _redefine(name: str, value: str) -> None:
        property_store.set(name, value)
        redefined.add(name)

    yield _redefine

    for name in redefined:
        property_store.clear(name)


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_properties(temp_dir: Path) -> Callable[[str, str], Path]:
    """在临时目录写入属性文件"""

    def _write(name: str, content: str) -> Path:
        path = temp_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
