"""Configuration management for the skill catalog."""

from .settings import (
    Settings,
    UISettings,
    LoggingSettings,
)
from .loader import load_config, resolve_config_path

__all__ = [
    "Settings",
    "UISettings",
    "LoggingSettings",
    "load_config",
    "resolve_config_path",
]
