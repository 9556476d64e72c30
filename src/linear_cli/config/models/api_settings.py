"""Linear API configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from linear_cli.shared.constants import LinearAPI


class APISettings(BaseModel):
    """Linear API configuration.

    The token is excluded from repr so settings can be logged safely.
    """

    api_token: str | None = Field(
        default=None,
        repr=False,
        description="Linear personal API key",
    )
    default_team_id: str | None = Field(
        default=None,
        description="Team used for new issues and the current cycle",
    )
    default_project_id: str | None = Field(
        default=None,
        description="Project assigned to new issues",
    )
    endpoint: str = Field(
        default=LinearAPI.ENDPOINT,
        description="GraphQL endpoint URL",
    )
    timeout: float = Field(
        default=LinearAPI.DEFAULT_TIMEOUT,
        gt=0,
        description="Request timeout in seconds",
    )


__all__ = ["APISettings"]
