"""
Issue Display Constants

Status ranking, colors, emoji and priority labels for issue rows.
Status keys are lowercase; lookups lowercase the incoming status name.
"""

from typing import ClassVar


class StatusRank:
    """Workflow-stage rank used to order issue lists."""

    IN_PROGRESS = 1
    IN_REVIEW = 2
    PLANNED = 3
    FINISHED = 4
    CANCELED = 5
    OTHER = 6

    BY_STATUS: ClassVar[dict[str, int]] = {
        "in progress": IN_PROGRESS,
        "in_progress": IN_PROGRESS,
        "in review": IN_REVIEW,
        "in_review": IN_REVIEW,
        "todo": PLANNED,
        "backlog": PLANNED,
        "done": FINISHED,
        "completed": FINISHED,
        "canceled": CANCELED,
        "cancelled": CANCELED,
    }


class Priority:
    """Linear priority values (0 urgent .. 4 none)."""

    URGENT = 0
    HIGH = 1
    MEDIUM = 2
    LOW = 3
    NONE = 4

    # Sort key for issues without a priority
    MISSING_SORT_VALUE = 999

    LABELS: ClassVar[dict[int, str]] = {
        URGENT: "🔴 Urgent",
        HIGH: "🟠 High",
        MEDIUM: "🟡 Medium",
        LOW: "🔵 Low",
        NONE: "⚪ None",
    }


class StatusStyle:
    """Rich colors and emoji per status."""

    DEFAULT_COLOR = "white"
    DEFAULT_EMOJI = "⚪"

    COLORS: ClassVar[dict[str, str]] = {
        "todo": "grey50",
        "backlog": "grey50",
        "in progress": "yellow",
        "in_progress": "yellow",
        "in review": "cyan",
        "in_review": "cyan",
        "done": "green",
        "completed": "green",
        "canceled": "green",
        "cancelled": "green",
    }

    EMOJI: ClassVar[dict[str, str]] = {
        "todo": "⚪",
        "backlog": "⚪",
        "in progress": "🟡",
        "in_progress": "🟡",
        "in review": "🔵",
        "in_review": "🔵",
        "done": "🟣",
        "completed": "🟣",
        "canceled": "⚫",
        "cancelled": "⚫",
    }


class StateType:
    """Linear workflow state types."""

    COMPLETED = "completed"
    CANCELED = "canceled"
    STARTED = "started"
    UNSTARTED = "unstarted"
    BACKLOG = "backlog"


class IssueDetail:
    """Issue detail view limits."""

    DESCRIPTION_PREVIEW_CHARS = 500
    MAX_LINK_SHORTCUTS = 9
