"""
System Configuration Constants

This module contains constants related to application metadata,
file system locations and time units.
"""

# =============================================================================
# BASE CONSTANTS (Foundation values used by other constants)
# =============================================================================

BASE_MILLISECOND = 1
BASE_SECOND_MS = 1000 * BASE_MILLISECOND
BASE_MINUTE_MS = 60 * BASE_SECOND_MS

# =============================================================================
# APPLICATION METADATA
# =============================================================================


class Application:
    """Application metadata constants."""

    NAME = "linear-cli"
    VERSION = "0.1.0"
    DESCRIPTION = "Linear CLI - manage Linear issues from the terminal"


# =============================================================================
# FILE AND PATH CONFIGURATION
# =============================================================================


class FileSystem:
    """File system related constants."""

    CONFIG_DIRECTORY = "linear-cli"
    CONFIG_FILENAME = "config.toml"
    CONFIG_ENV_VAR = "LINEAR_CLI_CONFIG"
    ENV_FILE = ".env"
    ENVIRONMENT_ENV_VAR = "LINEAR_CLI_ENV"
    DEVELOPMENT_ENVIRONMENT = "development"


class Encoding:
    """Text encoding constants."""

    DEFAULT = "utf-8"


class Cache:
    """In-memory cache constants."""

    # 5 minutes
    DEFAULT_TTL_MS = 5 * BASE_MINUTE_MS
