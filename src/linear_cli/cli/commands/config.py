"""Configuration commands: set-token, show, set-team and set-project."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from linear_cli.cli.common.context import is_json_output
from linear_cli.cli.common.error_handler import handle_cli_errors
from linear_cli.cli.common.setup import get_settings_loader
from linear_cli.cli.json_formatter import format_json_output, write_json_output
from linear_cli.config import Settings, resolve_api_token
from linear_cli.shared.constants import CLICommands, CLIDefaults, CLIHelp, CLIMessages
from linear_cli.shared.errors import create_validation_error

console = Console()

config_app = typer.Typer(
    name=CLICommands.CONFIG,
    help=CLIHelp.CONFIG_HELP,
    no_args_is_help=True,
)


def mask_token(token: str | None) -> str | None:
    """``****`` plus the last four characters, None when there is no token."""
    if not token:
        return None
    return "****" + token[-CLIDefaults.TOKEN_VISIBLE_CHARS :]


def _require_value(value: str, field: str) -> str:
    value = value.strip()
    if not value:
        raise create_validation_error(
            f"{field} must not be empty",
            field=field,
            operation="config",
        )
    return value


def _report(command: str, message: str, data: dict[str, object]) -> None:
    if is_json_output():
        write_json_output(format_json_output(success=True, command=command, data=data))
    else:
        console.print(message)


@config_app.command(CLICommands.SET_TOKEN, help=CLIHelp.SET_TOKEN_HELP)
@handle_cli_errors("config set-token")
def set_token_command(
    token: Optional[str] = typer.Argument(None, help=CLIHelp.SET_TOKEN_ARG_HELP),
) -> None:
    """Save the API token to the config file (prompted for when omitted)."""
    if token is None:
        token = typer.prompt(CLIHelp.SET_TOKEN_ARG_HELP, hide_input=True)
    token = _require_value(token, "api_token")

    get_settings_loader().set_value("api.api_token", token)
    _report(
        "config set-token",
        CLIMessages.Success.TOKEN_SAVED,
        {"api_token": mask_token(token)},
    )


@config_app.command(CLICommands.SET_TEAM, help=CLIHelp.SET_TEAM_HELP)
@handle_cli_errors("config set-team")
def set_team_command(
    team_id: str = typer.Argument(..., help=CLIHelp.SET_TEAM_HELP),
) -> None:
    team_id = _require_value(team_id, "default_team_id")
    get_settings_loader().set_value("api.default_team_id", team_id)
    _report(
        "config set-team",
        CLIMessages.Success.TEAM_SAVED.format(team_id=team_id),
        {"default_team_id": team_id},
    )


@config_app.command(CLICommands.SET_PROJECT, help=CLIHelp.SET_PROJECT_HELP)
@handle_cli_errors("config set-project")
def set_project_command(
    project_id: str = typer.Argument(..., help=CLIHelp.SET_PROJECT_HELP),
) -> None:
    project_id = _require_value(project_id, "default_project_id")
    get_settings_loader().set_value("api.default_project_id", project_id)
    _report(
        "config set-project",
        CLIMessages.Success.PROJECT_SAVED.format(project_id=project_id),
        {"default_project_id": project_id},
    )


def _config_summary(settings: Settings) -> dict[str, object]:
    return {
        "api_token": mask_token(resolve_api_token(settings)),
        "default_team_id": settings.api.default_team_id,
        "default_project_id": settings.api.default_project_id,
        "endpoint": settings.api.endpoint,
        "cache_enabled": settings.cache.enabled,
        "cache_ttl_ms": settings.cache.ttl_ms,
        "strict_validation": settings.validation.strict,
        "log_level": settings.logging.level,
    }


@config_app.command(CLICommands.SHOW, help=CLIHelp.SHOW_HELP)
@handle_cli_errors("config show")
def show_command() -> None:
    """Show the effective configuration. The token is never printed in full."""
    loader = get_settings_loader()
    settings = loader.get_config()
    summary = _config_summary(settings)

    if is_json_output():
        summary["config_path"] = str(loader.config_path)
        write_json_output(format_json_output(success=True, command="config show", data=summary))
        return

    summary.pop("api_token")
    token = resolve_api_token(settings)
    if token:
        suffix = token[-CLIDefaults.TOKEN_VISIBLE_CHARS :]
        console.print(CLIMessages.Info.TOKEN_MASKED.format(suffix=suffix))
    else:
        console.print(CLIMessages.Info.TOKEN_MISSING)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    for key, value in summary.items():
        table.add_row(key, "" if value is None else str(value))
    table.add_row("config_path", str(loader.config_path))
    console.print(table)
