"""Configuration for chronicle."""

from .settings import (
    DEFAULT_PRODUCTIVE_CATEGORIES,
    ConfigError,
    Settings,
    get_settings,
    load_settings,
)

__all__ = [
    "DEFAULT_PRODUCTIVE_CATEGORIES",
    "ConfigError",
    "Settings",
    "get_settings",
    "load_settings",
]
