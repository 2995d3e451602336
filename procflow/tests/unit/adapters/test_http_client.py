from __future__ import annotations

import json

import pytest
from requests import exceptions as req_exc

from procflow.adapters.api_errors import (
    ApiClientError,
    ApiConnectionError,
    ApiServerError,
    build_error_message,
)
from procflow.adapters.http_client import ApiResult, ApiSession, HttpConfig
from procflow.tests.stubs import ConnectionRefusedSession, ResponseStub, SessionStub


def _api(*responses) -> ApiSession:
    return ApiSession(HttpConfig(base_url="https://api.test/api/"), session=SessionStub(*responses))


def test_request_joins_base_url_and_sends_json_headers() -> None:
    api = _api(ResponseStub([{"id": 1, "name": "Finance"}]))

    result = api.request("/departments")

    assert result.ok
    assert result.value == [{"id": 1, "name": "Finance"}]
    call = api.session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "https://api.test/api/departments"
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["headers"]["Accept"] == "application/json"
    assert call["data"] is None
    assert call["timeout"] == 10


def test_request_serializes_body_for_post_and_put_only() -> None:
    api = _api(ResponseStub({"id": 7}), ResponseStub({}), ResponseStub(None, 204))

    api.request("/departments", "POST", {"name": "Finance"})
    api.request("/departments/7", "PUT", {"name": "Finance Ops"})
    api.request("/departments/7", "GET", {"ignored": True})

    posted, put, fetched = api.session.calls
    assert json.loads(posted["data"]) == {"name": "Finance"}
    assert json.loads(put["data"]) == {"name": "Finance Ops"}
    assert fetched["data"] is None


def test_delete_never_parses_the_body() -> None:
    response = ResponseStub(None, 204, reason="No Content", text="definitely not json")
    api = _api(response)

    result = api.request("/departments/3", "DELETE")

    assert result.ok
    assert result.value is None


def test_empty_or_invalid_success_body_becomes_empty_mapping() -> None:
    api = _api(ResponseStub(None, 204), ResponseStub(None, 200, text="<html>"))

    assert api.request("/departments/1", "PUT", {"name": "x"}).value == {}
    assert api.request("/departments/1").value == {}


def test_client_error_uses_server_message() -> None:
    api = _api(ResponseStub({"message": "Name already exists"}, 400, reason="Bad Request"))

    result = api.request("/departments", "POST", {"name": "Finance"})

    assert not result.ok
    assert isinstance(result.error, ApiClientError)
    assert result.error.status == 400
    assert result.error.message == "Name already exists"
    with pytest.raises(ApiClientError):
        result.unwrap()


def test_server_error_falls_back_to_status_and_reason() -> None:
    api = _api(ResponseStub(None, 503, reason="Service Unavailable", text=""))

    result = api.request("/processes")

    assert isinstance(result.error, ApiServerError)
    assert result.error.message == "Error: 503 Service Unavailable"


def test_network_failure_maps_to_connection_error() -> None:
    api = ApiSession(HttpConfig(base_url="https://api.test/api"), session=ConnectionRefusedSession())

    result = api.request("/departments")

    assert isinstance(result.error, ApiConnectionError)
    assert result.error.message == "Failed to connect to API server"
    assert result.error.context == "GET https://api.test/api/departments"


def test_retries_repeat_connection_failures_only() -> None:
    session = SessionStub(req_exc.ConnectionError("down"), ResponseStub([]))
    api = ApiSession(HttpConfig(base_url="https://api.test/api", retries=1), session=session)

    result = api.request("/departments")

    assert result.ok
    assert len(session.calls) == 2


def test_build_error_message_prefers_message_then_detail_then_title() -> None:
    assert build_error_message(400, "Bad Request", {"detail": "d", "title": "t"}) == "d"
    assert build_error_message(404, "Not Found", {"title": "Missing"}) == "Missing"
    assert build_error_message(500, "", "plain text") == "Error: 500"


def test_api_result_success_and_failure() -> None:
    ok = ApiResult.success(3)
    failed = ApiResult.failure(ApiConnectionError())

    assert ok.ok and ok.unwrap() == 3
    assert not failed.ok
    with pytest.raises(ApiConnectionError):
        failed.unwrap()
