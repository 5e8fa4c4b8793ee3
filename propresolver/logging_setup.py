"""
日志初始化 - 按 LoggingConfig 配置根 logger
"""

from __future__ import annotations

import logging

from .config.settings import LoggingConfig


def setup_logging(config: LoggingConfig | None = None) -> None:
    """配置控制台日志（重复调用不会叠加 handler）"""
    config = config or LoggingConfig()
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    for handler in list(root.handlers):
        if getattr(handler, "_propresolver", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(config.log_format))
    handler._propresolver = True  # type: ignore[attr-defined]
    root.addHandler(handler)
