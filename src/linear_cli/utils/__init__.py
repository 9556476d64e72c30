"""Utility helpers for sorting and displaying issues."""

from .format import (
    IssueLink,
    format_issue_for_clipboard,
    format_issue_label,
    issue_links,
    priority_label,
    status_color,
    status_emoji,
)
from .sort import sort_issues_by_status, status_rank

__all__ = [
    "IssueLink",
    "format_issue_for_clipboard",
    "format_issue_label",
    "issue_links",
    "priority_label",
    "sort_issues_by_status",
    "status_color",
    "status_emoji",
    "status_rank",
]
