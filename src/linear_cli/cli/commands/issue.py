"""Issue commands: list, mine, cycle, search and create."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from linear_cli.cli.common.context import is_json_output
from linear_cli.cli.common.error_handler import handle_cli_errors
from linear_cli.cli.common.setup import create_linear_service
from linear_cli.cli.json_formatter import format_json_output, write_json_output
from linear_cli.cli.rendering import print_issues
from linear_cli.services.models import Issue
from linear_cli.shared.constants import CLICommands, CLIHelp, CLIMessages, Priority
from linear_cli.utils.sort import sort_issues_by_status

logger = logging.getLogger(__name__)
console = Console()

issue_app = typer.Typer(
    name=CLICommands.ISSUE,
    help=CLIHelp.ISSUE_HELP,
    no_args_is_help=True,
)


def _output_issues(command: str, issues: list[Issue], title: str | None = None) -> None:
    ordered = sort_issues_by_status(issues)
    if is_json_output():
        write_json_output(
            format_json_output(
                success=True,
                command=command,
                data={"count": len(ordered), "issues": ordered},
            )
        )
        return
    print_issues(console, ordered, title)


@issue_app.command(CLICommands.LIST, help=CLIHelp.LIST_HELP)
@handle_cli_errors("issue list")
def list_command(
    status: Optional[str] = typer.Option(None, "--status", "-s", help=CLIHelp.LIST_STATUS_HELP),
    assignee: Optional[str] = typer.Option(
        None, "--assignee", "-a", help=CLIHelp.LIST_ASSIGNEE_HELP
    ),
    project: Optional[str] = typer.Option(None, "--project", "-p", help=CLIHelp.LIST_PROJECT_HELP),
) -> None:
    service = create_linear_service()
    with console.status(CLIMessages.Info.LOADING, spinner="dots"):
        issues = service.get_issues(status=status, assignee_id=assignee, project_id=project)
    _output_issues("issue list", issues)


@issue_app.command(CLICommands.MINE, help=CLIHelp.MINE_HELP)
@handle_cli_errors("issue mine")
def mine_command(
    cycle: bool = typer.Option(False, "--cycle", "-c", help=CLIHelp.MINE_CYCLE_HELP),
    include_completed: bool = typer.Option(
        False, "--include-completed", help=CLIHelp.MINE_COMPLETED_HELP
    ),
) -> None:
    """
    Display issues assigned to you, in-progress work first.

    Examples:
        # Everything not completed
        linear issue mine

        # Only the current cycle, done issues included
        linear issue mine --cycle --include-completed
    """
    service = create_linear_service()
    with console.status(CLIMessages.Info.LOADING, spinner="dots"):
        issues = service.get_my_issues(
            in_current_cycle=cycle,
            include_completed=include_completed,
        )
    _output_issues("issue mine", issues)


@issue_app.command(CLICommands.CYCLE, help=CLIHelp.CYCLE_HELP)
@handle_cli_errors("issue cycle")
def cycle_command() -> None:
    service = create_linear_service()
    with console.status(CLIMessages.Info.LOADING, spinner="dots"):
        current = service.get_current_cycle()
        issues = service.get_cycle_issues() if current else []

    if current is None and not is_json_output():
        console.print(f"[dim]{CLIMessages.Info.NO_CYCLE}[/dim]")
        return
    _output_issues("issue cycle", issues, title=escape(current.label) if current else None)


@issue_app.command(CLICommands.SEARCH, help=CLIHelp.SEARCH_HELP)
@handle_cli_errors("issue search")
def search_command(
    query: str = typer.Argument(..., help=CLIHelp.SEARCH_QUERY_HELP),
) -> None:
    service = create_linear_service()
    with console.status(CLIMessages.Info.SEARCHING, spinner="dots"):
        issues = service.search_issues(query)
    _output_issues("issue search", issues, title=f"Search: {escape(query)}")


@issue_app.command(CLICommands.CREATE, help=CLIHelp.CREATE_HELP)
@handle_cli_errors("issue create")
def create_command(
    title: str = typer.Option(..., "--title", "-t", help=CLIHelp.CREATE_TITLE_HELP),
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help=CLIHelp.CREATE_DESCRIPTION_HELP
    ),
    priority: Optional[int] = typer.Option(
        None,
        "--priority",
        min=Priority.URGENT,
        max=Priority.NONE,
        help=CLIHelp.CREATE_PRIORITY_HELP,
    ),
    project: Optional[str] = typer.Option(None, "--project", "-p", help=CLIHelp.CREATE_PROJECT_HELP),
    team: Optional[str] = typer.Option(None, "--team", help=CLIHelp.CREATE_TEAM_HELP),
) -> None:
    service = create_linear_service()
    with console.status(CLIMessages.Info.CREATING, spinner="dots"):
        issue = service.create_issue(
            title,
            description=description,
            priority=priority,
            project_id=project,
            team_id=team,
        )

    if is_json_output():
        write_json_output(format_json_output(success=True, command="issue create", data=issue))
        return
    console.print(
        CLIMessages.Success.ISSUE_CREATED.format(identifier=issue.identifier, title=escape(issue.title))
    )
    if issue.url:
        console.print(f"[blue]{issue.url}[/blue]")
