"""
Linear API Constants

Endpoint, header and GraphQL argument names used when talking to the
Linear GraphQL API.
"""

from typing import ClassVar


class LinearAPI:
    """Linear GraphQL API configuration."""

    ENDPOINT = "https://api.linear.app/graphql"
    DEFAULT_TIMEOUT = 30.0
    AUTH_HEADER = "Authorization"
    CONTENT_TYPE = "application/json"
    TOKEN_ENV_VAR = "LINEAR_API_KEY"
    DEFAULT_PAGE_SIZE = 50


class GraphQLArguments:
    """GraphQL argument names with project-wide pairing rules."""

    FILTER = "filter"
    INCLUDE_ARCHIVED = "includeArchived"
    UNKNOWN_QUERY_NAME = "Unknown"


class HTTPStatusCodes:
    """HTTP status codes the client reacts to."""

    UNAUTHORIZED = 401
    FORBIDDEN = 403
    TOO_MANY_REQUESTS = 429
    SERVER_ERROR = 500

    AUTH_FAILURES: ClassVar[tuple[int, ...]] = (UNAUTHORIZED, FORBIDDEN)


class CacheKeys:
    """Resource prefixes for cache keys."""

    MY_ISSUES = "my_issues"
    ISSUES = "issues"
    CURRENT_CYCLE = "current_cycle"
    CYCLE_ISSUES = "cycle_issues"
    TEAMS = "teams"
    VIEWER = "viewer"
