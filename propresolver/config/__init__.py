"""
配置层 - 分层合并的进程级配置解析

职责：
- 合并随包默认/自定义属性、外部文件、系统属性覆盖
- 提供测试档（测试默认/测试自定义属性）
- 运行期安全重载
"""

from .keys import PropertyKeys
from .properties import (
    load_properties_bytes,
    parse_properties,
    parse_yaml_properties,
    read_properties_file,
)
from .providers import (
    DirectoryResourceProvider,
    EnvironPropertyStore,
    InMemoryPropertyStore,
    PackageResourceProvider,
)
from .resolver import (
    ConfigResolver,
    get_property,
    get_resolver,
    reload_resolver,
    reset_resolver,
    set_resolver,
)
from .settings import LoggingConfig, ResolverSettings

__all__ = [
    "ConfigResolver",
    "get_resolver",
    "reload_resolver",
    "set_resolver",
    "reset_resolver",
    "get_property",
    "PropertyKeys",
    "ResolverSettings",
    "LoggingConfig",
    "DirectoryResourceProvider",
    "PackageResourceProvider",
    "EnvironPropertyStore",
    "InMemoryPropertyStore",
    "parse_properties",
    "parse_yaml_properties",
    "load_properties_bytes",
    "read_properties_file",
]
