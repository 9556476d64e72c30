"""Per-invocation wiring: settings, logging and the Linear service."""

from __future__ import annotations

import contextvars
import logging

from linear_cli.cli.common.context import CliContext, LogLevel
from linear_cli.config import Settings, SettingsLoader, resolve_api_token
from linear_cli.services import LinearService
from linear_cli.shared.constants import CLIMessages
from linear_cli.shared.errors import ErrorCode, ErrorContext, SecurityError
from linear_cli.shared.logging import ROOT_LOGGER_NAME, setup_structured_logger

logger = logging.getLogger(__name__)

settings_loader_var: contextvars.ContextVar[SettingsLoader | None] = contextvars.ContextVar(
    "settings_loader",
    default=None,
)


def init_settings_loader() -> SettingsLoader:
    """Start a fresh loader for this invocation (config path read from env)."""
    loader = SettingsLoader()
    settings_loader_var.set(loader)
    return loader


def get_settings_loader() -> SettingsLoader:
    loader = settings_loader_var.get()
    if loader is None:
        loader = init_settings_loader()
    return loader


def effective_log_level(context: CliContext, settings: Settings) -> str:
    """``-v`` wins, then an explicit ``--log-level``, then the config file."""
    if context.is_verbose() or context.log_level is not LogLevel.WARNING:
        return context.get_effective_log_level()
    return settings.logging.level


def configure_logging(context: CliContext, settings: Settings) -> logging.Logger:
    # JSON mode keeps stderr machine-readable too
    return setup_structured_logger(
        ROOT_LOGGER_NAME,
        level=effective_log_level(context, settings),
        log_file=settings.logging.file,
        use_rich_console=not context.is_json_output_enabled(),
    )


def create_linear_service(settings: Settings | None = None) -> LinearService:
    """Build the service from settings.

    Raises:
        SecurityError: no API token in the config file or LINEAR_API_KEY
    """
    settings = settings or get_settings_loader().get_config()
    token = resolve_api_token(settings)
    if not token:
        raise SecurityError(
            ErrorCode.MISSING_CONFIG,
            CLIMessages.Error.TOKEN_NOT_CONFIGURED,
            ErrorContext(operation="create_linear_service"),
        )
    return LinearService.from_settings(settings, token)
