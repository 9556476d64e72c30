"""Tests for LinearGraphQLClient."""

from __future__ import annotations

import pytest
import requests

from linear_cli.services import queries
from linear_cli.services.linear_client import LinearGraphQLClient
from linear_cli.shared.errors import ErrorCode, GraphQLValidationError, LinearAPIError


@pytest.fixture
def session(mocker):
    session = requests.Session()
    mocker.patch.object(session, "post")
    return session


@pytest.fixture
def client(session):
    return LinearGraphQLClient("lin_api_key", session=session)


def test_sends_query_with_auth_header(client, session, make_response):
    session.post.return_value = make_response({"data": {"viewer": {"id": "u1"}}})

    data = client.raw_request(queries.VIEWER_QUERY)

    assert data == {"viewer": {"id": "u1"}}
    assert session.headers["Authorization"] == "lin_api_key"
    _, kwargs = session.post.call_args
    assert kwargs["json"] == {"query": queries.VIEWER_QUERY, "variables": {}}
    assert kwargs["timeout"] == client.timeout


def test_strict_mode_blocks_invalid_request(session):
    client = LinearGraphQLClient("lin_api_key", session=session, strict=True)

    with pytest.raises(GraphQLValidationError) as exc_info:
        client.raw_request(queries.ISSUES_QUERY, {"filter": {}})

    assert exc_info.value.query_name == "Issues"
    session.post.assert_not_called()


def test_lenient_mode_sends_invalid_request(client, session, make_response):
    session.post.return_value = make_response({"data": {"issues": {"nodes": []}}})

    client.raw_request(queries.ISSUES_QUERY, {"filter": {}})

    session.post.assert_called_once()


def test_validation_can_be_disabled(session, make_response, mocker):
    validate = mocker.patch("linear_cli.services.graphql_validator.validate")
    session.post.return_value = make_response({"data": {}})
    client = LinearGraphQLClient("lin_api_key", session=session, validate_queries=False)

    client.raw_request(queries.VIEWER_QUERY)

    validate.assert_not_called()


@pytest.mark.parametrize(
    ("status_code", "code"),
    [
        (401, ErrorCode.API_AUTHENTICATION_FAILED),
        (403, ErrorCode.API_AUTHENTICATION_FAILED),
        (429, ErrorCode.API_RATE_LIMIT),
        (400, ErrorCode.API_REQUEST_FAILED),
        (502, ErrorCode.API_SERVER_ERROR),
    ],
)
def test_http_errors(client, session, make_response, status_code, code):
    session.post.return_value = make_response({}, status_code=status_code)

    with pytest.raises(LinearAPIError) as exc_info:
        client.raw_request(queries.VIEWER_QUERY)

    assert exc_info.value.code is code
    assert exc_info.value.status_code == status_code


def test_graphql_errors_are_raised(client, session, make_response):
    session.post.return_value = make_response(
        {"errors": [{"message": "Field 'x' not found"}, {"message": "Bad input"}]}
    )

    with pytest.raises(LinearAPIError) as exc_info:
        client.raw_request(queries.VIEWER_QUERY)

    assert exc_info.value.code is ErrorCode.GRAPHQL_ERROR
    assert exc_info.value.message == "GraphQL errors: Field 'x' not found; Bad input"


def test_non_json_response(client, session, make_response):
    session.post.return_value = make_response(json_error=True)

    with pytest.raises(LinearAPIError) as exc_info:
        client.raw_request(queries.VIEWER_QUERY)

    assert exc_info.value.code is ErrorCode.API_INVALID_RESPONSE
    assert isinstance(exc_info.value.original_error, ValueError)


def test_missing_data(client, session, make_response):
    session.post.return_value = make_response({"data": None})

    with pytest.raises(LinearAPIError) as exc_info:
        client.raw_request(queries.VIEWER_QUERY)

    assert exc_info.value.code is ErrorCode.API_INVALID_RESPONSE


def test_timeout(client, session):
    session.post.side_effect = requests.exceptions.Timeout("read timed out")

    with pytest.raises(LinearAPIError) as exc_info:
        client.raw_request(queries.VIEWER_QUERY)

    assert exc_info.value.code is ErrorCode.API_TIMEOUT


def test_connection_error(client, session):
    session.post.side_effect = requests.exceptions.ConnectionError("refused")

    with pytest.raises(LinearAPIError) as exc_info:
        client.raw_request(queries.VIEWER_QUERY)

    assert exc_info.value.code is ErrorCode.NETWORK_ERROR


def test_default_session_retries_connections_only():
    client = LinearGraphQLClient("lin_api_key")
    try:
        retries = client._session.get_adapter("https://api.linear.app/graphql").max_retries
    finally:
        client.close()

    assert retries.connect == 3
    assert retries.read == 0
    assert retries.status == 0
