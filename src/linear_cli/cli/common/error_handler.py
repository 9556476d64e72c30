"""
CLI Error Handling Utilities

Consistent error output for every command: the exception is mapped to a
CliError, logged with structured context and reported either on stderr or
as a JSON envelope on stdout.
"""

from __future__ import annotations

import functools
import logging
import sys
from typing import Any, Callable, TypeVar

import click
import typer

from linear_cli.cli.common.context import is_json_output
from linear_cli.cli.json_formatter import format_json_output
from linear_cli.shared.constants import CLIDefaults
from linear_cli.shared.errors import (
    CliError,
    ErrorCode,
    ErrorContext,
    LinearCliError,
    create_cli_error,
    create_cli_output_error,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_cli_error(
    error: BaseException,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Handle CLI errors with consistent formatting and logging.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    error_context = _create_error_context(error, command, json_output=json_output)
    cli_error = _map_error_to_cli_error(error, command, error_context)
    _log_error(error, command, cli_error, error_context)
    _output_error(cli_error, error, command, error_context, json_output=json_output)

    return cli_error.exit_code


def _create_error_context(
    error: BaseException,
    command: str,
    *,
    json_output: bool,
) -> dict[str, Any]:
    return {
        "command": command,
        "error_type": type(error).__name__,
        "json_output": json_output,
    }


def _map_error_to_cli_error(
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
) -> CliError:
    """Map specific exception types to CLI errors."""
    if isinstance(error, CliError):
        error_context["error_code"] = error.code.value
        return error

    # Domain, infrastructure, application and security errors carry
    # messages written for the user already
    if isinstance(error, LinearCliError):
        error_context["error_code"] = error.code.value
        return CliError(
            error.code,
            error.message,
            error.context,
            original_error=error,
            command=command,
        )

    if isinstance(error, KeyboardInterrupt):
        error_context["interrupt_type"] = "user_interrupt"
        return CliError(
            ErrorCode.CLI_COMMAND_INTERRUPTED,
            "Command interrupted by user",
            ErrorContext(operation=command),
            command=command,
            exit_code=CLIDefaults.EXIT_INTERRUPTED,
        )

    if isinstance(error, OSError):
        error_context["error_category"] = "file_system"
        return create_cli_error(
            message=f"File system error: {error}",
            command=command,
            original_error=error,
        )

    error_context["error_category"] = "unexpected"
    return create_cli_error(
        message=f"Unexpected error: {error}",
        command=command,
        original_error=error if isinstance(error, Exception) else None,
    )


def _log_error(
    error: BaseException,
    command: str,
    cli_error: CliError,
    error_context: dict[str, Any],
) -> None:
    if isinstance(error, KeyboardInterrupt):
        logger.warning(
            "Command interrupted: %s",
            cli_error.message,
            extra={"context": error_context},
        )
    elif isinstance(error, LinearCliError):
        logger.info(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"error_code": error.code.name, "context": error_context},
        )
    else:
        logger.exception(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"context": error_context},
        )


def _output_error(
    cli_error: CliError,
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
    *,
    json_output: bool,
) -> None:
    """Output error message in appropriate format."""
    if json_output:
        _output_json_error(cli_error, error, command, error_context)
    else:
        sys.stderr.write(f"Error: {cli_error.message}\n")


def _output_json_error(
    cli_error: CliError,
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
) -> None:
    try:
        error_output = format_json_output(
            success=False,
            command=command,
            errors=[cli_error.message],
            data={
                "error_code": cli_error.code.value,
                "error_type": type(error).__name__,
                "exit_code": cli_error.exit_code,
            },
        )
        sys.stdout.buffer.write(error_output)
        sys.stdout.buffer.write(b"\n")
        sys.stdout.buffer.flush()
    except (OSError, UnicodeEncodeError) as output_error:
        cli_output_error = create_cli_output_error(
            message=f"Failed to format JSON output: {output_error}",
            command=command,
            output_type="json",
            original_error=output_error,
        )
        logger.exception(
            "JSON output error: %s",
            cli_output_error.message,
            extra={"context": error_context},
        )
        sys.stderr.write(f"Error: {cli_error.message}\n")


def handle_cli_errors(command: str) -> Callable[[F], F]:
    """Decorator turning exceptions from a command into an exit code.

    Typer and click control-flow exceptions pass through untouched.

    Example:
        >>> @issue_app.command("mine")
        ... @handle_cli_errors("issue mine")
        ... def mine_command(...) -> None:
        ...     ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except (typer.Exit, click.exceptions.Exit, click.exceptions.Abort, click.ClickException):
                raise
            except (Exception, KeyboardInterrupt) as e:  # noqa: BLE001
                exit_code = handle_cli_error(e, command, json_output=is_json_output())
                raise typer.Exit(exit_code) from e

        return wrapper  # type: ignore[return-value]

    return decorator
