"""
解析视图模型 - 定义配置层与合并结果

合并规则：按层顺序依次覆盖（后写入者胜出），
每次重建生成新的 ResolvedView，旧视图不会被原地修改。
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _read_only(value: Mapping[str, str]) -> Mapping[str, str]:
    """复制为只读映射，发布后不可原地修改"""
    return MappingProxyType(dict(value))


class Profile(str, Enum):
    """配置档"""
    PRODUCTION = "production"
    TEST = "test"


class LayerKind(str, Enum):
    """配置层类型（按生产档优先级从低到高）"""
    DEFAULT = "default"
    CUSTOM = "custom"
    FILE = "file"                   # 系统属性指定的外部文件
    TEST_DEFAULT = "test_default"
    TEST_CUSTOM = "test_custom"


class SourceLayer(BaseModel):
    """单个配置层"""
    kind: LayerKind
    name: str = Field(..., description="资源名或文件路径")
    entries: Mapping[str, str] = Field(default_factory=dict, validate_default=True)

    model_config = ConfigDict(frozen=True)

    @field_validator("entries")
    @classmethod
    def freeze_entries(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return _read_only(value)


class ResolvedView(BaseModel):
    """合并后的配置视图（只读）"""
    profile: Profile = Profile.PRODUCTION
    values: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    layers: tuple[str, ...] = ()
    loaded_at: datetime = Field(default_factory=datetime.now)

    model_config = ConfigDict(frozen=True)

    @field_validator("values")
    @classmethod
    def freeze_values(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return _read_only(value)

    @classmethod
    def merge(cls, layers: Iterable[SourceLayer], profile: Profile) -> ResolvedView:
        """按顺序合并配置层，后者覆盖前者"""
        values: dict[str, str] = {}
        names: list[str] = []
        for layer in layers:
            values.update(layer.entries)
            names.append(layer.kind.value)
        return cls(profile=profile, values=values, layers=tuple(names))

    def lookup(self, key: str) -> str | None:
        return self.values.get(key)

    def mapping(self) -> Mapping[str, str]:
        """只读映射"""
        return self.values

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def __len__(self) -> int:
        return len(self.values)
