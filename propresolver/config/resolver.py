"""
配置解析器 - 多来源分层合并的进程级配置视图

合并顺序（优先级从低到高）：
1. 随包默认属性 config.default.properties（总是读取）
2. 随包自定义属性 config.properties（可缺失）
3. 系统属性 propresolver.config.file 指向的外部文件（未设置或文件不存在则跳过）
4. 与 key 同名的系统属性（每次 get 时实时检查，不参与合并）

测试档：load_test_properties() 用测试默认/测试自定义两层替换 1、2，
不检查第 3 层；需要文件覆盖时由调用方随后显式 reload()。

并发：新视图在锁外构建完成后，在锁内一次性替换，读取方不会看到半合并状态；
构建失败时旧视图保持不变。

使用方式：
    resolver = get_resolver()
    value = resolver.get("propresolver.properties.source")
    timeout = resolver.get("http.timeout", "30")
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from enum import Enum
from pathlib import Path

from ..interfaces import (
    ConfigSourceError,
    InvalidArgumentError,
    IPropertyStore,
    IResourceProvider,
)
from ..models import LayerKind, Profile, ResolvedView, SourceLayer
from .properties import load_properties_bytes, read_properties_file
from .providers import DirectoryResourceProvider, EnvironPropertyStore, PackageResourceProvider
from .settings import ResolverSettings

logger = logging.getLogger(__name__)


class ConfigResolver:
    """配置解析器"""

    def __init__(
        self,
        resources: IResourceProvider | None = None,
        properties: IPropertyStore | None = None,
        settings: ResolverSettings | None = None,
    ):
        self.settings = settings or ResolverSettings()
        self.resources = resources or self._default_resources(self.settings)
        self.properties = properties or EnvironPropertyStore()

        self._view_lock = threading.Lock()      # 保护视图发布/读取
        self._rebuild_lock = threading.Lock()   # 串行化 reload / load_test_properties
        self._view = ResolvedView()

        # 构造即就绪
        self.reload()

    @staticmethod
    def _default_resources(settings: ResolverSettings) -> IResourceProvider:
        if settings.resource_dir is not None:
            return DirectoryResourceProvider(settings.resource_dir)
        return PackageResourceProvider()

    # ------------------------------------------------------------------
    # 重建
    # ------------------------------------------------------------------

    def reload(self) -> ResolvedView:
        """
        从零重建生产档视图

        Returns:
            新发布的视图

        Raises:
            ConfigSourceError: 某个存在的配置源无法读取/解码，旧视图保持不变
        """
        return self._rebuild(
            Profile.PRODUCTION,
            [self._default_layer, self._custom_layer, self._file_layer],
        )

    def load_test_properties(self) -> ResolvedView:
        """用测试默认/测试自定义两层重建视图（不检查外部文件层）"""
        return self._rebuild(
            Profile.TEST,
            [self._test_default_layer, self._test_custom_layer],
        )

    def _rebuild(
        self,
        profile: Profile,
        readers: list[Callable[[], SourceLayer | None]],
    ) -> ResolvedView:
        with self._rebuild_lock:
            try:
                layers = [layer for layer in (read() for read in readers) if layer is not None]
            except ConfigSourceError as e:
                logger.error(f"配置重建失败({profile.value})，保留原视图: {e}")
                raise

            view = ResolvedView.merge(layers, profile)
            with self._view_lock:
                self._view = view

        logger.info(
            f"配置已加载({profile.value}): 层={list(view.layers)}, 共 {len(view)} 项"
        )
        return view

    # ------------------------------------------------------------------
    # 读取
    # ------------------------------------------------------------------

    def get(self, key: str, default: str | None = None) -> str | None:
        """
        获取配置值

        顺序：同名系统属性 > 已解析视图 > default（缺省为 None）
        """
        key = _check_key(key)

        override = self.properties.get(key)
        if override is not None:
            return override

        value = self.view.lookup(key)
        if value is not None:
            return value
        return default

    @property
    def view(self) -> ResolvedView:
        """当前发布的视图"""
        with self._view_lock:
            return self._view

    @property
    def profile(self) -> Profile:
        return self.view.profile

    def keys(self) -> list[str]:
        """已解析视图中的 key（不含仅由系统属性提供的 key）"""
        return sorted(self.view.mapping())

    def as_dict(self) -> dict[str, str]:
        """已解析视图的副本（不应用系统属性覆盖）"""
        return dict(self.view.mapping())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return self.get(key) is not None

    # ------------------------------------------------------------------
    # 单层加载（合并到调用方提供的 dict）
    # ------------------------------------------------------------------

    def load_default_properties(self, target: dict[str, str]) -> bool:
        """合并随包默认属性，返回该层是否存在"""
        return _merge_into(target, self._default_layer())

    def load_custom_properties(self, target: dict[str, str]) -> bool:
        """合并随包自定义属性"""
        return _merge_into(target, self._custom_layer())

    def load_file_override_properties(self, target: dict[str, str]) -> bool:
        """合并系统属性指定的外部文件"""
        return _merge_into(target, self._file_layer())

    def load_test_default_properties(self, target: dict[str, str]) -> bool:
        return _merge_into(target, self._test_default_layer())

    def load_test_custom_properties(self, target: dict[str, str]) -> bool:
        return _merge_into(target, self._test_custom_layer())

    # ------------------------------------------------------------------
    # 配置层读取
    # ------------------------------------------------------------------

    def _default_layer(self) -> SourceLayer | None:
        layer = self._resource_layer(LayerKind.DEFAULT, self.settings.default_resource)
        if layer is None:
            logger.warning(f"默认属性资源不存在: {self.settings.default_resource}")
        return layer

    def _custom_layer(self) -> SourceLayer | None:
        return self._resource_layer(LayerKind.CUSTOM, self.settings.custom_resource)

    def _test_default_layer(self) -> SourceLayer | None:
        layer = self._resource_layer(LayerKind.TEST_DEFAULT, self.settings.test_default_resource)
        if layer is None:
            logger.warning(f"测试默认属性资源不存在: {self.settings.test_default_resource}")
        return layer

    def _test_custom_layer(self) -> SourceLayer | None:
        return self._resource_layer(LayerKind.TEST_CUSTOM, self.settings.test_custom_resource)

    def _resource_layer(self, kind: LayerKind, name: str) -> SourceLayer | None:
        data = self.resources.read_bytes(name)
        if data is None:
            logger.debug(f"跳过配置层 {kind.value}: 资源不存在 {name}")
            return None

        entries = load_properties_bytes(data, name, self.settings.encoding)
        logger.debug(f"读取配置层 {kind.value}: {name} ({len(entries)} 项)")
        return SourceLayer(kind=kind, name=name, entries=entries)

    def _file_layer(self) -> SourceLayer | None:
        key = self.settings.override_path_key
        path_value = self.properties.get(key)
        if not path_value:
            return None

        path = Path(path_value)
        if not path.exists():
            logger.info(f"系统属性 {key} 指向的文件不存在，跳过: {path}")
            return None

        entries = read_properties_file(path, self.settings.encoding)
        logger.debug(f"读取配置层 {LayerKind.FILE.value}: {path} ({len(entries)} 项)")
        return SourceLayer(kind=LayerKind.FILE, name=str(path), entries=entries)


def _check_key(key: object) -> str:
    if isinstance(key, Enum):
        key = key.value
    if key is None or not isinstance(key, str):
        raise InvalidArgumentError(f"配置 key 必须是字符串: {key!r}")
    return key


def _merge_into(target: dict[str, str], layer: SourceLayer | None) -> bool:
    if layer is None:
        return False
    target.update(layer.entries)
    return True


# ============================================================================
# 进程级实例
# ============================================================================

_resolver: ConfigResolver | None = None
_resolver_lock = threading.Lock()


def get_resolver() -> ConfigResolver:
    """获取全局解析器（惰性创建，创建时完成首次加载）"""
    global _resolver
    if _resolver is None:
        with _resolver_lock:
            if _resolver is None:
                _resolver = ConfigResolver()
    return _resolver


def reload_resolver() -> ResolvedView:
    """重新加载全局解析器"""
    return get_resolver().reload()


def set_resolver(resolver: ConfigResolver) -> ConfigResolver:
    """替换全局解析器（组合根/测试使用）"""
    global _resolver
    with _resolver_lock:
        _resolver = resolver
    return resolver


def reset_resolver() -> None:
    """丢弃全局解析器，下次访问时重新创建"""
    global _resolver
    with _resolver_lock:
        _resolver = None


def get_property(key: str, default: str | None = None) -> str | None:
    """便捷函数：从全局解析器读取配置"""
    return get_resolver().get(key, default)
