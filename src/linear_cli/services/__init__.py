"""Linear API access: GraphQL validation, caching, client and service."""

from .cache import EphemeralCache, make_cache_key
from .graphql_validator import (
    ValidationResult,
    apply_defaults,
    validate,
    validate_strict,
)
from .linear_client import LinearGraphQLClient
from .linear_service import LinearService
from .models import Attachment, Cycle, Issue, IssueState, Team, User
from .query_analyzer import Finding, QuerySourceAnalyzer, Severity

__all__ = [
    "Attachment",
    "Cycle",
    "EphemeralCache",
    "Finding",
    "Issue",
    "IssueState",
    "LinearGraphQLClient",
    "LinearService",
    "QuerySourceAnalyzer",
    "Severity",
    "Team",
    "User",
    "ValidationResult",
    "apply_defaults",
    "make_cache_key",
    "validate",
    "validate_strict",
]
