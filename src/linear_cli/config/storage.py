"""
Configuration Storage for linear-cli

This module provides the ConfigStorage class for reading and writing the
TOML configuration file with backup and rollback capabilities.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any

import toml

from linear_cli.shared.constants import Encoding
from linear_cli.shared.errors import (
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    create_config_error,
)
from linear_cli.shared.logging import log_operation_error

logger = logging.getLogger(__name__)

CONFIG_FILE_MODE = 0o600


class ConfigStorage:
    """Handles configuration persistence with backup and rollback capabilities."""

    def __init__(self, config_path: Path) -> None:
        """Initialize the ConfigStorage.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self.backup_path = self.config_path.with_suffix(".toml.backup")

    def load_config_dict(self) -> dict[str, Any]:
        """Read the raw TOML document, or an empty dict when there is no file.

        Raises:
            InfrastructureError: If the file exists but cannot be parsed or read
        """
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path, encoding=Encoding.DEFAULT) as f:
                return toml.load(f)
        except toml.TomlDecodeError as e:
            raise InfrastructureError(
                ErrorCode.INVALID_CONFIG,
                f"Configuration file is not valid TOML: {e}",
                ErrorContext(file_path=str(self.config_path), operation="load_config"),
                original_error=e,
            ) from e
        except OSError as e:
            raise InfrastructureError(
                ErrorCode.FILE_READ_ERROR,
                f"Failed to read configuration file: {e}",
                ErrorContext(file_path=str(self.config_path), operation="load_config"),
                original_error=e,
            ) from e

    def save_config_dict(self, config_dict: dict[str, Any]) -> None:
        """Save configuration dictionary to TOML file.

        The file holds the API token, so it is written owner-readable only.

        Args:
            config_dict: Configuration dictionary to save

        Raises:
            ApplicationError: If saving fails
        """
        try:
            if self.config_path.exists():
                self._create_backup()

            self.config_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.config_path, "w", encoding=Encoding.DEFAULT) as f:
                toml.dump(config_dict, f)
            self.config_path.chmod(CONFIG_FILE_MODE)

            logger.info("Configuration saved to: %s", self.config_path)

        except (OSError, TypeError, ValueError) as e:
            error = create_config_error(
                f"Failed to save configuration: {e}",
                operation="save_config",
                original_error=e,
            )
            log_operation_error(logger, error)
            self._restore_backup()
            raise error from e

    def set_nested_value(self, key: str, value: Any) -> None:
        """Set a configuration value by key with dot notation support.

        Only the file's own content is rewritten; environment overrides
        are never persisted.

        Args:
            key: Configuration key, e.g. ``api.default_team_id``
            value: Value to set

        Raises:
            ApplicationError: If the existing file is unusable or saving fails
        """
        config = self.load_config_dict()

        keys = key.split(".")
        current = config
        for k in keys[:-1]:
            section = current.setdefault(k, {})
            if not isinstance(section, dict):
                raise create_config_error(
                    f"Cannot set '{key}': '{k}' is not a table",
                    config_key=key,
                    operation="set_config_value",
                    code=ErrorCode.INVALID_CONFIG,
                )
            current = section

        current[keys[-1]] = value
        self.save_config_dict(config)

        # Never log the token value itself
        logger.debug("Set config value: %s", key)

    def _create_backup(self) -> None:
        """Create a backup of the current configuration file."""
        try:
            shutil.copy2(self.config_path, self.backup_path)
            logger.debug("Created backup: %s", self.backup_path)
        except OSError as e:
            logger.warning("Failed to create backup: %s", e)

    def _restore_backup(self) -> None:
        """Restore configuration from backup if available."""
        try:
            if self.backup_path.exists():
                shutil.copy2(self.backup_path, self.config_path)
                logger.info("Restored configuration from backup")
        except OSError as e:
            logger.warning("Failed to restore backup: %s", e)

    def rollback_to_backup(self) -> bool:
        """Rollback to backup configuration if available.

        Returns:
            True if rollback was successful, False if no backup available
        """
        if not self.backup_path.exists():
            logger.warning("No backup available for rollback")
            return False
        self._restore_backup()
        return True
