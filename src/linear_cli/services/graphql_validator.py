"""GraphQL query parameter validator.

Linear's collection queries accept a ``filter`` argument and an
``includeArchived`` argument. Every query or call that passes ``filter`` must
also pass ``includeArchived`` so archived issues are never pulled in by
accident. This module checks that pairing before a request leaves the
process, and reports declared parameters that the query body never uses.

The checks are regex based: the parameter list is read from the
``query Name(...)`` header and the body is everything after the first line.
This is not a GraphQL parser and trusts well-formed query text.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from linear_cli.shared.constants import FileSystem, GraphQLArguments
from linear_cli.shared.errors import GraphQLValidationError

logger = logging.getLogger(__name__)

_QUERY_HEADER_RE = re.compile(r"query\s+\w+\s*\(([^)]+)\)", re.IGNORECASE)
_QUERY_NAME_RE = re.compile(r"query\s+(\w+)", re.IGNORECASE)
_PARAMETER_RE = re.compile(r"\$(\w+):\s*([^,\s]+)(!)?")

LINEAR_GRAPHQL_DEFAULTS: dict[str, Any] = {
    GraphQLArguments.INCLUDE_ARCHIVED: False,
    GraphQLArguments.FILTER: {},
}


@dataclass
class ValidationResult:
    """Outcome of a validation run. Warnings never affect ``valid``."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _has_name(names: Any, target: str) -> bool:
    lowered = target.lower()
    return any(str(name).lower() == lowered for name in names)


def _lookup(variables: Mapping[str, Any], target: str) -> tuple[bool, Any]:
    lowered = target.lower()
    for key, value in variables.items():
        if str(key).lower() == lowered:
            return True, value
    return False, None


def is_dev_mode() -> bool:
    """Return True when LINEAR_CLI_ENV selects the development environment."""
    env = os.environ.get(FileSystem.ENVIRONMENT_ENV_VAR, "")
    return env.lower() == FileSystem.DEVELOPMENT_ENVIRONMENT


def extract_query_name(query_text: str) -> str:
    """Return the operation name after ``query``, or ``"Unknown"``."""
    match = _QUERY_NAME_RE.search(query_text)
    return match.group(1) if match else GraphQLArguments.UNKNOWN_QUERY_NAME


def extract_declared_parameters(query_text: str) -> dict[str, str]:
    """Collect ``$name: Type`` pairs from the query's parameter list.

    Args:
        query_text: Raw GraphQL text

    Returns:
        Mapping of parameter name to declared type (``!`` kept for required
        types). Empty when the query has no parameter list.
    """
    params: dict[str, str] = {}
    match = _QUERY_HEADER_RE.search(query_text)
    if not match:
        return params

    for param_match in _PARAMETER_RE.finditer(match.group(1)):
        name, param_type, required = param_match.groups()
        params[name] = param_type + (required or "")

    return params


def is_parameter_referenced(query_text: str, parameter_name: str) -> bool:
    """Check whether ``$parameter_name`` appears in the query body.

    The body is every line after the first one, taken literally: a query
    string that starts with a newline keeps its ``query Name(...)`` line in
    the body.
    """
    body = "\n".join(query_text.split("\n")[1:])
    pattern = re.compile(rf"\${re.escape(parameter_name)}\b", re.IGNORECASE)
    return pattern.search(body) is not None


def validate(
    query_name: str,
    query_text: str,
    variables: Mapping[str, Any] | None = None,
    *,
    dev_mode: bool | None = None,
) -> ValidationResult:
    """Validate a query and the variables it will be sent with.

    Args:
        query_name: Name used in messages
        query_text: Raw GraphQL text
        variables: Variables supplied for the request
        dev_mode: Log errors and warnings. Defaults to ``is_dev_mode()``.

    Returns:
        ValidationResult with ``valid`` set when there are no errors
    """
    variables = variables or {}
    errors: list[str] = []
    warnings: list[str] = []
    declared = extract_declared_parameters(query_text)

    filter_name = GraphQLArguments.FILTER
    archived_name = GraphQLArguments.INCLUDE_ARCHIVED

    if _has_name(declared, filter_name):
        if not _has_name(declared, archived_name):
            errors.append(
                f"Query '{query_name}': ${filter_name} parameter is defined "
                f"but ${archived_name} parameter is not defined",
            )
        # Variables are only checked against queries that accept a filter.
        if _has_name(variables, filter_name) and not _has_name(variables, archived_name):
            errors.append(
                f"Query '{query_name}': {filter_name} variable is provided "
                f"but {archived_name} variable is not provided",
            )

    for param_name in declared:
        if not is_parameter_referenced(query_text, param_name):
            warnings.append(
                f"Query '{query_name}': ${param_name} parameter is defined "
                "but not used in the query",
            )

    archived_present, archived_value = _lookup(variables, archived_name)
    if archived_present and archived_value is None:
        warnings.append(
            f"Query '{query_name}': {archived_name} value is not explicitly set. "
            "Default value (false) is recommended",
        )

    result = ValidationResult(valid=not errors, errors=errors, warnings=warnings)

    if dev_mode is None:
        dev_mode = is_dev_mode()

    if dev_mode:
        for message in result.errors:
            logger.error("GraphQL validation error: %s", message)
        for message in result.warnings:
            logger.warning("GraphQL validation warning: %s", message)

    return result


def validate_strict(
    query_name: str,
    query_text: str,
    variables: Mapping[str, Any] | None = None,
    *,
    dev_mode: bool | None = None,
) -> ValidationResult:
    """Validate and raise GraphQLValidationError when there are errors.

    Raises:
        GraphQLValidationError: message is the newline-joined error list
    """
    result = validate(query_name, query_text, variables, dev_mode=dev_mode)

    if not result.valid:
        raise GraphQLValidationError(
            "GraphQL Validation Failed:\n" + "\n".join(result.errors),
            errors=result.errors,
            warnings=result.warnings,
            query_name=query_name,
        )

    return result


def apply_defaults(variables: Mapping[str, Any]) -> dict[str, Any]:
    """Merge Linear defaults under the caller's variables.

    ``{"includeArchived": False, "filter": {}}`` is applied first, so a
    ``filter`` default is injected even for callers that never filter.
    When the caller passed ``filter``, ``includeArchived`` is always set
    explicitly: the caller's value, or False when missing or None.
    """
    merged: dict[str, Any] = {
        GraphQLArguments.INCLUDE_ARCHIVED: LINEAR_GRAPHQL_DEFAULTS[
            GraphQLArguments.INCLUDE_ARCHIVED
        ],
        GraphQLArguments.FILTER: {},
    }
    merged.update(variables)

    if GraphQLArguments.FILTER in variables:
        archived = variables.get(GraphQLArguments.INCLUDE_ARCHIVED)
        merged[GraphQLArguments.INCLUDE_ARCHIVED] = (
            archived if archived is not None else False
        )

    return merged
