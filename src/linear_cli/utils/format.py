"""Display helpers for issues: status badges, priority labels, links."""

from __future__ import annotations

import re
from dataclasses import dataclass

from linear_cli.services.models import Issue
from linear_cli.shared.constants import Priority, StatusStyle

_GITHUB_PR_RE = re.compile(r"pull/(\d+)")

GITHUB_SOURCE = "github"
LINEAR_SOURCE = "linear"
UNKNOWN_STATUS = "Unknown"


def status_color(status: str | None) -> str:
    """Rich color name for a status (case-insensitive), "white" when unknown."""
    if not status:
        return StatusStyle.DEFAULT_COLOR
    return StatusStyle.COLORS.get(status.lower(), StatusStyle.DEFAULT_COLOR)


def status_emoji(status: str | None) -> str:
    if not status:
        return StatusStyle.DEFAULT_EMOJI
    return StatusStyle.EMOJI.get(status.lower(), StatusStyle.DEFAULT_EMOJI)


def priority_label(priority: int | None) -> str:
    """Label for Linear priorities 0-4, "" for anything else."""
    if priority is None:
        return ""
    return Priority.LABELS.get(priority, "")


def format_issue_label(issue: Issue) -> str:
    """One-line label: ``ENG-1 🟡 P2 Title``."""
    status = issue.status_name or UNKNOWN_STATUS
    priority = f" P{issue.priority}" if issue.priority is not None else ""
    return f"{issue.identifier} {status_emoji(status)}{priority} {issue.title}"


@dataclass(frozen=True)
class IssueLink:
    title: str
    url: str
    source: str


def issue_links(issue: Issue) -> list[IssueLink]:
    """Links shown in the detail view, Linear's own URL first.

    GitHub pull request attachments are titled ``PR #<n> (GitHub)``; other
    GitHub attachments get a ``(GitHub)`` suffix.
    """
    links = [IssueLink(f"{issue.identifier} (Linear)", issue.url, LINEAR_SOURCE)]

    for attachment in issue.attachments:
        title = attachment.title or "Link"
        source = attachment.source_type or "other"
        if source == GITHUB_SOURCE:
            pr_match = _GITHUB_PR_RE.search(attachment.url)
            if "/pull/" in attachment.url and pr_match:
                title = f"PR #{pr_match.group(1)} (GitHub)"
            else:
                title = f"{title} (GitHub)"
        links.append(IssueLink(title, attachment.url, source))

    return links


def format_issue_for_clipboard(issue: Issue) -> str:
    """Plain-text summary of an issue for pasting into another tool."""
    parts = [
        f"Linear Issue: {issue.identifier}",
        f"Title: {issue.title}",
        f"Status: {issue.status_name or UNKNOWN_STATUS}",
    ]

    if issue.assignee:
        parts.append(f"Assignee: {issue.assignee.label}")

    if issue.description:
        parts.extend(["", "Description:", issue.description])

    parts.extend(["", f"URL: {issue.url}"])
    parts.extend(["", "---", "Please work on the task described in this issue."])

    return "\n".join(parts)
