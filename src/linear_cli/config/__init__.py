"""linear-cli Configuration Module

Configuration models and settings management:
- Settings: Main configuration facade
- Loader functions: SettingsLoader, load_settings, resolve_api_token
- ConfigStorage: TOML persistence with backup
"""

from __future__ import annotations

from .models import (
    APISettings,
    CacheSettings,
    LoggingSettings,
    Settings,
    ValidationSettings,
)
from .loader import (
    SettingsLoader,
    default_config_path,
    load_settings,
    resolve_api_token,
)
from .storage import ConfigStorage

__all__ = [
    "APISettings",
    "CacheSettings",
    "ConfigStorage",
    "LoggingSettings",
    "Settings",
    "SettingsLoader",
    "ValidationSettings",
    "default_config_path",
    "load_settings",
    "resolve_api_token",
]
