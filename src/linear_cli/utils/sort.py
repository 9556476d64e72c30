"""Status and priority ordering for issue lists."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from linear_cli.shared.constants import Priority, StatusRank


def status_rank(status_name: str | None) -> int:
    """Rank a workflow status name (case-insensitive).

    In progress 1, in review 2, todo/backlog 3, done/completed 4,
    canceled/cancelled 5, anything else (including None) 6.
    """
    if not status_name:
        return StatusRank.OTHER
    return StatusRank.BY_STATUS.get(str(status_name).lower(), StatusRank.OTHER)


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def issue_status_name(issue: Any) -> str:
    """Status name of an issue model or mapping, "" when it has none.

    Reads ``state.name`` (Linear's shape) and falls back to a flat
    ``status`` field.
    """
    state = _field(issue, "state")
    name = _field(state, "name") if state is not None else None
    if name is None:
        name = _field(issue, "status")
    if isinstance(name, str):
        return name
    return ""


def issue_priority(issue: Any) -> int | float:
    """Priority of an issue, or the missing-priority sort value."""
    priority = _field(issue, "priority")
    if isinstance(priority, bool) or not isinstance(priority, (int, float)):
        return Priority.MISSING_SORT_VALUE
    return priority


def issue_sort_key(issue: Any) -> tuple[int, int | float]:
    return status_rank(issue_status_name(issue)), issue_priority(issue)


def sort_issues_by_status(issues: Iterable[Any]) -> list[Any]:
    """Return issues ordered by status rank, then priority (lowest first).

    Issues without a priority sort last in their status group. The input is
    not modified and ties keep their input order.
    """
    return sorted(issues, key=issue_sort_key)
