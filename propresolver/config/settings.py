"""
解析器设置 - 资源名、覆盖路径属性名、日志等

职责：
- 定义四个（测试档两个）随包资源的逻辑名
- 提供环境变量覆盖机制（PROPRESOLVER_ 前缀）
- 可从 YAML 文件加载
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from .keys import PropertyKeys


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class ResolverSettings(BaseSettings):
    """解析器设置（支持环境变量覆盖）"""

    # 生产档资源
    default_resource: str = "config.default.properties"
    custom_resource: str = "config.properties"

    # 测试档资源
    test_default_resource: str = "config.test.default.properties"
    test_custom_resource: str = "config.test.properties"

    # 指向外部配置文件路径的系统属性名
    override_path_key: str = PropertyKeys.CONFIG_FILE.value

    # 资源目录，未设置时读取随包资源
    resource_dir: Path | None = None
    encoding: str = "utf-8"

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "PROPRESOLVER_",
        "env_nested_delimiter": "__",
        "arbitrary_types_allowed": True,
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> ResolverSettings:
        """从YAML文件加载设置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        options: dict[str, Any] = data.get("resolver") or {}
        settings = cls(**options)
        settings._resolve_paths(base_dir=path.parent)
        return settings

    def _resolve_paths(self, base_dir: Path) -> None:
        """相对资源目录按设置文件所在目录解析"""
        if self.resource_dir and not self.resource_dir.is_absolute():
            self.resource_dir = (base_dir / self.resource_dir).resolve()
