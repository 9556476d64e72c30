"""
linear-cli Typer CLI Application

The ``linear`` command: issue and config sub-commands, the query
validator, and an interactive mode when started without a command.
"""

from __future__ import annotations

import sys
from typing import Annotated

import typer

from linear_cli.cli.commands.config import config_app
from linear_cli.cli.commands.issue import issue_app
from linear_cli.cli.commands.validate import validate_queries_command
from linear_cli.cli.common.context import CliContext, LogLevel, set_cli_context
from linear_cli.cli.common.error_handler import handle_cli_error
from linear_cli.cli.common.options import (
    json_output_option,
    log_level_option,
    verbose_option,
    version_option,
)
from linear_cli.cli.common.setup import (
    configure_logging,
    create_linear_service,
    init_settings_loader,
)
from linear_cli.shared.constants import CLICommands, CLIDefaults, CLIHelp, CLIMessages

# Version information
__version__ = CLIDefaults.VERSION


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=__version__))
        raise typer.Exit


def main_callback(
    verbose: int,
    log_level: LogLevel,
    json_output: bool,
    version: bool,
) -> CliContext:
    """
    Process the common options before any command runs.

    Sets the CLI context, starts a fresh settings loader and configures
    logging from the options and the config file.
    """
    if version:
        version_callback(value=True)

    context = CliContext(
        verbose=verbose,
        log_level=log_level,
        json_output=json_output,
    )
    set_cli_context(context)

    loader = init_settings_loader()
    configure_logging(context, loader.get_config())
    return context


def stdin_is_tty() -> bool:
    return sys.stdin.isatty()


def run_interactive() -> None:
    """Start the interactive mode with a service built from settings."""
    from linear_cli.cli.interactive import InteractiveApp

    InteractiveApp(create_linear_service()).run()


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=True,
    rich_markup_mode=CLIHelp.APP_STYLE,
    invoke_without_command=True,
)

app.add_typer(issue_app, name=CLICommands.ISSUE)
app.add_typer(config_app, name=CLICommands.CONFIG)
app.command(CLICommands.VALIDATE_QUERIES, help=CLIHelp.VALIDATE_QUERIES_HELP)(
    validate_queries_command
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[int, verbose_option] = 0,
    log_level: Annotated[LogLevel, log_level_option] = LogLevel.WARNING,
    json_output: Annotated[bool, json_output_option] = False,
    version: Annotated[bool, version_option] = False,
) -> None:
    """Main CLI callback with error handling."""
    try:
        main_callback(verbose, log_level, json_output, version)
    except typer.Exit:
        raise
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, "main-callback", json_output=json_output)
        raise typer.Exit(exit_code) from e

    if ctx.invoked_subcommand is not None:
        return

    if not stdin_is_tty():
        typer.echo(CLIMessages.Error.INTERACTIVE_REQUIRES_TTY)
        typer.echo(ctx.get_help())
        raise typer.Exit(CLIDefaults.EXIT_SUCCESS)

    try:
        run_interactive()
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, "interactive", json_output=json_output)
        raise typer.Exit(exit_code) from e
