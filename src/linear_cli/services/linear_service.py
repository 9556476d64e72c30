"""High-level Linear operations used by the CLI.

LinearService turns GraphQL responses into models, builds the issue
filters and caches read results in an injected EphemeralCache. Any write
clears the cache so the next read sees the change.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, TypeVar

from linear_cli.config.models.settings import Settings
from linear_cli.services import queries
from linear_cli.services.cache import EphemeralCache, make_cache_key
from linear_cli.services.graphql_validator import apply_defaults
from linear_cli.services.linear_client import LinearGraphQLClient
from linear_cli.services.models import Cycle, Issue, Team, User
from linear_cli.shared.constants import CacheKeys, LinearAPI, StateType
from linear_cli.shared.errors import (
    ApplicationError,
    ErrorCode,
    ErrorContext,
    LinearAPIError,
    create_api_error,
    create_validation_error,
)
from linear_cli.shared.logging import log_operation_success

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


def _connection_nodes(data: dict[str, Any], field: str, operation: str) -> list[dict[str, Any]]:
    connection = data.get(field)
    nodes = connection.get("nodes") if isinstance(connection, dict) else None
    if not isinstance(nodes, list):
        raise create_api_error(
            f"Unexpected response shape: '{field}.nodes' is missing",
            operation=operation,
            code=ErrorCode.API_INVALID_RESPONSE,
        )
    return nodes


class LinearService:
    """Issue, cycle and team operations on top of LinearGraphQLClient.

    Args:
        client: GraphQL client used for every request
        cache: Read cache; ``None`` disables caching
        settings: Settings supplying the default team and project
    """

    def __init__(
        self,
        client: LinearGraphQLClient,
        cache: EphemeralCache | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.client = client
        self.cache = cache
        self.settings = settings or Settings()

    @classmethod
    def from_settings(cls, settings: Settings, api_token: str) -> LinearService:
        """Build a service with a client and cache configured from settings."""
        client = LinearGraphQLClient(
            api_token,
            endpoint=settings.api.endpoint,
            timeout=settings.api.timeout,
            strict=settings.validation.strict,
            validate_queries=settings.validation.enabled,
            dev_mode=settings.validation.dev_mode,
        )
        cache = (
            EphemeralCache(default_ttl_ms=settings.cache.ttl_ms)
            if settings.cache.enabled
            else None
        )
        return cls(client, cache, settings)

    def _cached(self, key: str, loader: Callable[[], T]) -> T:
        if self.cache is None:
            return loader()

        value = self.cache.get(key, _MISSING)
        if value is not _MISSING:
            logger.debug("Cache hit: %s", key)
            return value

        started = time.monotonic()
        value = loader()
        self.cache.set(key, value)
        log_operation_success(
            logger,
            key,
            (time.monotonic() - started) * 1000,
            result_info={"cached": True},
        )
        return value

    def _query_issues(self, issue_filter: dict[str, Any], operation: str) -> list[Issue]:
        variables = apply_defaults(
            {
                "filter": issue_filter,
                "includeArchived": False,
                "first": LinearAPI.DEFAULT_PAGE_SIZE,
            }
        )
        data = self.client.raw_request(queries.ISSUES_QUERY, variables)
        return [Issue.from_api(node) for node in _connection_nodes(data, "issues", operation)]

    def viewer(self) -> User:
        """The user the API token belongs to."""

        def load() -> User:
            data = self.client.raw_request(queries.VIEWER_QUERY)
            viewer = data.get("viewer")
            if not isinstance(viewer, dict):
                raise create_api_error(
                    "Unexpected response shape: 'viewer' is missing",
                    operation="viewer",
                    code=ErrorCode.API_INVALID_RESPONSE,
                )
            return User.model_validate(viewer)

        return self._cached(CacheKeys.VIEWER, load)

    def validate_token(self, token: str) -> bool:
        """Check a token against the API with a one-off client.

        API and network failures mean "not valid"; they are logged, not raised.
        """
        probe = LinearGraphQLClient(
            token,
            endpoint=self.client.endpoint,
            timeout=self.client.timeout,
        )
        try:
            probe.raw_request(queries.VIEWER_QUERY)
        except LinearAPIError as e:
            logger.info("Token validation failed: %s", e)
            return False
        finally:
            probe.close()
        return True

    def get_issues(
        self,
        status: str | None = None,
        assignee_id: str | None = None,
        project_id: str | None = None,
    ) -> list[Issue]:
        """Issues matching an optional status name, assignee and project."""
        issue_filter: dict[str, Any] = {}
        if status:
            issue_filter["state"] = {"name": {"eq": status}}
        if assignee_id:
            issue_filter["assignee"] = {"id": {"eq": assignee_id}}
        if project_id:
            issue_filter["project"] = {"id": {"eq": project_id}}

        key = make_cache_key(
            CacheKeys.ISSUES,
            status=status,
            assignee_id=assignee_id,
            project_id=project_id,
        )
        return self._cached(key, lambda: self._query_issues(issue_filter, "get_issues"))

    def get_my_issues(
        self,
        in_current_cycle: bool = False,
        include_completed: bool = False,
    ) -> list[Issue]:
        """Issues assigned to the viewer.

        Completed issues are left out unless ``include_completed``. With
        ``in_current_cycle`` the list is limited to the active cycle when
        there is one.
        """

        def load() -> list[Issue]:
            viewer = self.viewer()
            issue_filter: dict[str, Any] = {"assignee": {"id": {"eq": viewer.id}}}
            if not include_completed:
                issue_filter["state"] = {"type": {"neq": StateType.COMPLETED}}
            if in_current_cycle:
                cycle = self.get_current_cycle()
                if cycle is not None:
                    issue_filter["cycle"] = {"id": {"eq": cycle.id}}
            return self._query_issues(issue_filter, "get_my_issues")

        key = make_cache_key(
            CacheKeys.MY_ISSUES,
            in_current_cycle=in_current_cycle,
            include_completed=include_completed,
        )
        return self._cached(key, load)

    def get_current_cycle(self) -> Cycle | None:
        """Active cycle of the default team, or of the first team when unset."""
        team_id = self.settings.api.default_team_id

        def load() -> Cycle | None:
            if team_id:
                data = self.client.raw_request(
                    queries.TEAM_ACTIVE_CYCLE_QUERY, {"teamId": team_id}
                )
                team = data.get("team") or {}
                cycle = team.get("activeCycle")
            else:
                data = self.client.raw_request(
                    queries.FIRST_TEAM_ACTIVE_CYCLE_QUERY, {"first": 1}
                )
                teams = _connection_nodes(data, "teams", "get_current_cycle")
                cycle = teams[0].get("activeCycle") if teams else None
            return Cycle.model_validate(cycle) if cycle else None

        return self._cached(make_cache_key(CacheKeys.CURRENT_CYCLE, team_id=team_id), load)

    def get_cycle_issues(self) -> list[Issue]:
        """Issues in the current cycle; empty when there is no active cycle."""

        def load() -> list[Issue]:
            cycle = self.get_current_cycle()
            if cycle is None:
                return []
            return self._query_issues({"cycle": {"id": {"eq": cycle.id}}}, "get_cycle_issues")

        key = make_cache_key(CacheKeys.CYCLE_ISSUES, team_id=self.settings.api.default_team_id)
        return self._cached(key, load)

    def search_issues(self, query: str) -> list[Issue]:
        """Full-text issue search. Results are not cached."""
        term = query.strip()
        if not term:
            raise create_validation_error(
                "Search query must not be empty",
                field="query",
                operation="search_issues",
            )

        data = self.client.raw_request(
            queries.SEARCH_ISSUES_QUERY,
            {
                "term": term,
                "includeArchived": False,
                "first": LinearAPI.DEFAULT_PAGE_SIZE,
            },
        )
        return [
            Issue.from_api(node)
            for node in _connection_nodes(data, "searchIssues", "search_issues")
        ]

    def get_teams(self) -> list[Team]:
        def load() -> list[Team]:
            data = self.client.raw_request(queries.TEAMS_QUERY)
            return [Team.model_validate(node) for node in _connection_nodes(data, "teams", "get_teams")]

        return self._cached(CacheKeys.TEAMS, load)

    def create_issue(
        self,
        title: str,
        description: str | None = None,
        priority: int | None = None,
        project_id: str | None = None,
        team_id: str | None = None,
    ) -> Issue:
        """Create an issue and clear the read cache.

        Team and project fall back to the configured defaults.

        Raises:
            DomainError: empty title
            ApplicationError: no team given and no default team configured
            LinearAPIError: the API refused the mutation
        """
        if not title or not title.strip():
            raise create_validation_error(
                "Issue title is required",
                field="title",
                operation="create_issue",
            )

        team_id = team_id or self.settings.api.default_team_id
        if not team_id:
            raise ApplicationError(
                ErrorCode.MISSING_CONFIG,
                "Team ID is required",
                ErrorContext(
                    operation="create_issue",
                    additional_data={"config_key": "api.default_team_id"},
                ),
            )

        issue_input: dict[str, Any] = {"title": title.strip(), "teamId": team_id}
        if description:
            issue_input["description"] = description
        if priority is not None:
            issue_input["priority"] = priority
        project_id = project_id or self.settings.api.default_project_id
        if project_id:
            issue_input["projectId"] = project_id

        data = self.client.raw_request(queries.CREATE_ISSUE_MUTATION, {"input": issue_input})
        payload = data.get("issueCreate") or {}
        if not payload.get("success") or not isinstance(payload.get("issue"), dict):
            raise create_api_error(
                "Linear API did not create the issue",
                operation="create_issue",
                code=ErrorCode.API_REQUEST_FAILED,
            )

        if self.cache is not None:
            self.cache.clear()

        issue = Issue.from_api(payload["issue"])
        logger.info("Created issue %s", issue.identifier)
        return issue


__all__ = ["LinearService"]
