"""Linear GraphQL client with pre-flight variable validation.

Every request goes through the GraphQL validator before it is sent. In
strict mode an invalid query/variables pair raises and never reaches the
network; otherwise the findings are only logged.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from linear_cli.services import graphql_validator
from linear_cli.shared.constants import HTTPStatusCodes, LinearAPI
from linear_cli.shared.errors import ErrorCode, create_api_error
from linear_cli.shared.logging import log_api_call

logger = logging.getLogger(__name__)


def _create_session() -> requests.Session:
    """Create a session that retries failed connections.

    Only connection errors are retried: a POST that reached the server may
    have been a mutation.
    """
    session = requests.Session()
    retry_strategy = Retry(
        total=3,
        connect=3,
        read=0,
        status=0,
        backoff_factor=0.5,
        allowed_methods=frozenset({"POST"}),
    )
    session.mount("https://", HTTPAdapter(max_retries=retry_strategy))
    return session


class LinearGraphQLClient:
    """Thin client for Linear's GraphQL endpoint.

    Args:
        api_key: Linear personal API key
        endpoint: GraphQL endpoint URL
        timeout: Request timeout in seconds
        session: requests session to reuse (a new one is created otherwise)
        strict: Raise GraphQLValidationError instead of logging findings
        validate_queries: Run the validator before each request
        dev_mode: Passed to the validator to log its findings
    """

    def __init__(
        self,
        api_key: str,
        endpoint: str = LinearAPI.ENDPOINT,
        timeout: float = LinearAPI.DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
        *,
        strict: bool = False,
        validate_queries: bool = True,
        dev_mode: bool | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self.strict = strict
        self.validate_queries = validate_queries
        self.dev_mode = dev_mode
        self._session = session or _create_session()
        self._session.headers.update(
            {
                LinearAPI.AUTH_HEADER: api_key,
                "Content-Type": LinearAPI.CONTENT_TYPE,
            }
        )

    def _validate(self, query: str, variables: Mapping[str, Any]) -> None:
        query_name = graphql_validator.extract_query_name(query)
        if self.strict:
            graphql_validator.validate_strict(
                query_name, query, variables, dev_mode=self.dev_mode
            )
        else:
            graphql_validator.validate(
                query_name, query, variables, dev_mode=self.dev_mode
            )

    def raw_request(
        self,
        query: str,
        variables: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a GraphQL document and return its ``data`` member.

        Raises:
            GraphQLValidationError: strict mode and the validator reported errors
            LinearAPIError: network failure, HTTP error or GraphQL errors
        """
        variables = dict(variables or {})
        if self.validate_queries:
            self._validate(query, variables)

        query_name = graphql_validator.extract_query_name(query)
        started = time.monotonic()

        try:
            response = self._session.post(
                self.endpoint,
                json={"query": query, "variables": variables},
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise create_api_error(
                f"Request to Linear API timed out after {self.timeout}s",
                operation=query_name,
                code=ErrorCode.API_TIMEOUT,
                original_error=e,
            ) from e
        except requests.exceptions.RequestException as e:
            raise create_api_error(
                f"Network error while calling Linear API: {e}",
                operation=query_name,
                code=ErrorCode.NETWORK_ERROR,
                original_error=e,
            ) from e

        duration_ms = (time.monotonic() - started) * 1000
        log_api_call(
            logger,
            self.endpoint,
            status_code=response.status_code,
            duration_ms=duration_ms,
            context={"query_name": query_name},
        )

        self._raise_for_status(response, query_name)
        return self._extract_data(response, query_name)

    def _raise_for_status(self, response: requests.Response, query_name: str) -> None:
        status = response.status_code
        if status < 400:
            return

        if status in HTTPStatusCodes.AUTH_FAILURES:
            code = ErrorCode.API_AUTHENTICATION_FAILED
            message = "Linear API rejected the API token"
        elif status == HTTPStatusCodes.TOO_MANY_REQUESTS:
            code = ErrorCode.API_RATE_LIMIT
            message = "Linear API rate limit exceeded"
        elif status >= HTTPStatusCodes.SERVER_ERROR:
            code = ErrorCode.API_SERVER_ERROR
            message = f"Linear API server error (HTTP {status})"
        else:
            code = ErrorCode.API_REQUEST_FAILED
            message = f"Linear API request failed (HTTP {status})"

        raise create_api_error(
            message,
            operation=query_name,
            status_code=status,
            code=code,
        )

    def _extract_data(self, response: requests.Response, query_name: str) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as e:
            raise create_api_error(
                "Linear API returned a non-JSON response",
                operation=query_name,
                status_code=response.status_code,
                code=ErrorCode.API_INVALID_RESPONSE,
                original_error=e,
            ) from e

        errors = payload.get("errors") if isinstance(payload, dict) else None
        if errors:
            messages = "; ".join(
                str(error.get("message", error)) if isinstance(error, dict) else str(error)
                for error in errors
            )
            raise create_api_error(
                f"GraphQL errors: {messages}",
                operation=query_name,
                status_code=response.status_code,
                code=ErrorCode.GRAPHQL_ERROR,
            )

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise create_api_error(
                "Linear API response has no data",
                operation=query_name,
                status_code=response.status_code,
                code=ErrorCode.API_INVALID_RESPONSE,
            )
        return data

    def close(self) -> None:
        self._session.close()
