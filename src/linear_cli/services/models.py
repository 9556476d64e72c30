"""Linear API Response Models.

Pydantic models for the parts of Linear's GraphQL responses the CLI reads.
Fields use snake_case in Python and accept Linear's camelCase keys.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LinearModel(BaseModel):
    """Base model: camelCase aliases, unknown fields ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class IssueState(LinearModel):
    """Workflow state of an issue."""

    id: str | None = None
    name: str = ""
    type: str | None = None
    color: str | None = None


class User(LinearModel):
    """Linear user (assignee or viewer)."""

    id: str
    name: str | None = None
    display_name: str | None = None
    email: str | None = None

    @property
    def label(self) -> str:
        return self.display_name or self.name or self.id


class Team(LinearModel):
    """Linear team."""

    id: str
    key: str | None = None
    name: str = ""


class Cycle(LinearModel):
    """Linear cycle (sprint)."""

    id: str
    number: int | None = None
    name: str | None = None
    starts_at: str | None = None
    ends_at: str | None = None

    @property
    def label(self) -> str:
        if self.name:
            return self.name
        if self.number is not None:
            return f"Cycle {self.number}"
        return "Current cycle"


class Attachment(LinearModel):
    """Link attached to an issue (GitHub PRs and the like)."""

    id: str | None = None
    title: str | None = None
    url: str
    source_type: str | None = None


class Issue(LinearModel):
    """Linear issue."""

    id: str
    identifier: str
    title: str
    description: str | None = None
    priority: int | None = None
    url: str = ""
    created_at: str | None = None
    updated_at: str | None = None
    state: IssueState | None = None
    assignee: User | None = None
    cycle: Cycle | None = None
    attachments: list[Attachment] = Field(default_factory=list)

    @classmethod
    def from_api(cls, node: dict[str, Any]) -> Issue:
        """Build an Issue from a GraphQL node.

        Connection fields arrive as ``{"nodes": [...]}`` and are flattened.
        """
        data = dict(node)
        attachments = data.get("attachments")
        if isinstance(attachments, dict):
            data["attachments"] = attachments.get("nodes") or []
        elif attachments is None:
            data.pop("attachments", None)
        return cls.model_validate(data)

    @property
    def status_name(self) -> str:
        return self.state.name if self.state else ""
