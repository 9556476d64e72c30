"""Rich renderables for issue lists and issue details."""

from __future__ import annotations

from typing import Sequence

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from linear_cli.services.models import Issue
from linear_cli.shared.constants import CLIMessages, IssueDetail, InteractiveLabels
from linear_cli.utils.format import (
    GITHUB_SOURCE,
    issue_links,
    priority_label,
    status_color,
    status_emoji,
)


def issue_table(issues: Sequence[Issue], title: str | None = None, *, numbered: bool = False) -> Table:
    """Table of issues in the given order.

    With ``numbered`` a leading ``#`` column holds 1-based row numbers for
    selection in the interactive mode.
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")
    if numbered:
        table.add_column("#", style="dim", justify="right")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Priority", no_wrap=True)
    table.add_column("Title")
    table.add_column("Assignee", style="yellow")

    for index, issue in enumerate(issues, start=1):
        status = issue.status_name
        row = [
            issue.identifier,
            Text(f"{status_emoji(status)} {status}", style=status_color(status)),
            priority_label(issue.priority),
            issue.title,
            issue.assignee.label if issue.assignee else "",
        ]
        if numbered:
            row.insert(0, str(index))
        table.add_row(*row)

    return table


def print_issues(console: Console, issues: Sequence[Issue], title: str | None = None) -> None:
    if not issues:
        console.print(f"[dim]{CLIMessages.Info.NO_ISSUES}[/dim]")
        return
    console.print(issue_table(issues, title))


def issue_detail(issue: Issue) -> Panel:
    """Detail panel: status line, description preview and numbered links."""
    status = issue.status_name
    header = Text()
    header.append("Status: ")
    header.append(status or "Unknown", style=status_color(status))
    if issue.assignee:
        header.append(" | Assignee: ")
        header.append(issue.assignee.label, style="yellow")
    label = priority_label(issue.priority)
    if label:
        header.append(f" | {label}")

    parts: list[Text] = [header]

    if issue.description:
        limit = IssueDetail.DESCRIPTION_PREVIEW_CHARS
        preview = issue.description[:limit]
        parts.append(Text(""))
        parts.append(Text(InteractiveLabels.DESCRIPTION_TITLE, style="dim"))
        parts.append(Text(preview))
        if len(issue.description) > limit:
            parts.append(Text("...", style="dim"))

    parts.append(Text(""))
    parts.append(Text(InteractiveLabels.LINKS_TITLE, style="bold dim"))
    for number, link in enumerate(issue_links(issue), start=1):
        line = Text("  ")
        line.append(f"[{number}]", style="cyan")
        line.append(" ")
        line.append(link.title, style="green" if link.source == GITHUB_SOURCE else "blue")
        parts.append(line)

    parts.append(Text(""))
    parts.append(Text(InteractiveLabels.DETAIL_HINT, style="dim"))

    title = Text()
    title.append(issue.identifier, style="bold cyan")
    title.append(" - ")
    title.append(issue.title, style="bold")
    return Panel(Group(*parts), title=title, title_align="left")
