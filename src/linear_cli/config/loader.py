"""Settings loader and cached settings manager.

This module handles:
- Environment variable loading from .env files
- Configuration file loading from TOML
- Thread-safe caching of the Settings instance
- Persisting single values set from the CLI
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from linear_cli.config.models.settings import Settings
from linear_cli.config.storage import ConfigStorage
from linear_cli.shared.constants import FileSystem, LinearAPI
from linear_cli.shared.errors import ErrorCode, ErrorContext, InfrastructureError

logger = logging.getLogger(__name__)


def default_config_path() -> Path:
    """Config file location: $LINEAR_CLI_CONFIG, else ~/.config/linear-cli/config.toml."""
    override = os.getenv(FileSystem.CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / FileSystem.CONFIG_DIRECTORY / FileSystem.CONFIG_FILENAME


def _load_env_file(env_file: Path | None = None) -> None:
    """Load variables from a .env file in the working directory, if present.

    Values already set in the environment win over the file.
    """
    env_file = env_file or Path(FileSystem.ENV_FILE)
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug("Loaded environment from %s", env_file)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from the TOML configuration file or environment.

    Args:
        config_path: Optional path to the TOML file. Defaults to
            ``default_config_path()``. A missing file is not an error.

    Raises:
        InfrastructureError: If the file exists but is not valid TOML
    """
    path = Path(config_path) if config_path else default_config_path()
    if not path.exists():
        return Settings()

    try:
        return Settings.from_toml_file(path)
    except ValueError as e:
        # toml.TomlDecodeError and pydantic.ValidationError are both ValueErrors
        raise InfrastructureError(
            ErrorCode.INVALID_CONFIG,
            f"Invalid configuration file {path}: {e}",
            ErrorContext(file_path=str(path), operation="load_settings"),
            original_error=e,
        ) from e


def resolve_api_token(settings: Settings) -> str | None:
    """API token from settings, falling back to the LINEAR_API_KEY variable."""
    return settings.api.api_token or os.getenv(LinearAPI.TOKEN_ENV_VAR) or None


class SettingsLoader:
    """Thread-safe cached Settings manager bound to one config file.

    Uses double-checked locking to load the file once.
    """

    def __init__(self, config_path: str | Path | None = None) -> None:
        self._config_path = Path(config_path) if config_path else None
        self._instance: Settings | None = None
        self._lock = threading.RLock()

    @property
    def config_path(self) -> Path:
        return self._config_path or default_config_path()

    def get_config(self) -> Settings:
        """Return the cached Settings, loading them on first use."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    _load_env_file()
                    self._instance = load_settings(self.config_path)

        return self._instance

    def reload_config(self) -> Settings:
        """Drop the cached Settings and load them again from disk."""
        with self._lock:
            _load_env_file()
            self._instance = load_settings(self.config_path)

        return self._instance

    def set_value(self, key: str, value: Any) -> Settings:
        """Persist a single dotted key to the config file and reload.

        Args:
            key: Dotted settings key, e.g. ``api.api_token``
            value: New value

        Returns:
            The reloaded Settings instance.

        Raises:
            ApplicationError: If the file cannot be written
        """
        with self._lock:
            ConfigStorage(self.config_path).set_nested_value(key, value)
            logger.info("Configuration key '%s' updated in %s", key, self.config_path)
            return self.reload_config()


__all__ = [
    "SettingsLoader",
    "default_config_path",
    "load_settings",
    "resolve_api_token",
]
