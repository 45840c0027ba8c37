from __future__ import annotations

from typing import Any, Iterable, Optional

import pytest
import requests

from autobib.clients.base import (
    BaseHttpClient,
    NotFoundError,
    RateLimitedError,
    RequestRejectedError,
    UpstreamError,
)
from autobib.exceptions import SourceUnavailable


class _StubSession:
    def __init__(self, responses: Iterable[Any]):
        self._responses = list(responses)
        self.headers: dict[str, str] = {}
        self.calls = 0

    def request(self, method: str, url: str, timeout: float = 0, **_: Any):
        self.calls += 1
        outcome = self._responses[min(self.calls, len(self._responses)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class _DummyClient(BaseHttpClient):
    BASE_URL = "https://example.test/"

    def __init__(self, responses: Iterable[Any]):
        super().__init__(session=_StubSession(responses))

    @property
    def stub_session(self) -> _StubSession:
        return self.session  # type: ignore[return-value]


def _make_response(status: int, body: str = "", headers: Optional[dict[str, str]] = None):
    response = requests.Response()
    response.status_code = status
    response._content = body.encode()
    response.url = "https://example.test/resource"
    response.headers.update(headers or {})
    response.encoding = "utf-8"
    return response


def test_base_url_trailing_slash_is_removed():
    client = _DummyClient([_make_response(200)])

    assert client.base_url == "https://example.test"


def test_successful_response_is_returned_after_single_call():
    client = _DummyClient([_make_response(200, body="ok")])

    response = client._request("GET", "/resource")

    assert response.text == "ok"
    assert client.stub_session.calls == 1


def test_http_400_raises_request_rejected_error_with_excerpt():
    response = _make_response(400, body="Bad request details" + "!" * 500)
    client = _DummyClient([response])

    with pytest.raises(RequestRejectedError) as excinfo:
        client._handle_response(response)

    assert excinfo.value.status == 400
    assert excinfo.value.body_excerpt is not None
    assert len(excinfo.value.body_excerpt) <= 200
    assert "Bad request details" in excinfo.value.body_excerpt


def test_http_404_raises_not_found():
    response = _make_response(404)
    client = _DummyClient([response])

    with pytest.raises(NotFoundError):
        client._handle_response(response)


def test_http_429_is_not_retried_and_reports_retry_after():
    client = _DummyClient([_make_response(429, headers={"Retry-After": "7"})])

    with pytest.raises(RateLimitedError) as excinfo:
        client._request("GET", "/resource")

    assert excinfo.value.retry_after == 7
    assert excinfo.value.status == 429
    assert client.stub_session.calls == 1


def test_http_500_is_not_retried():
    client = _DummyClient([_make_response(503, body="maintenance")])

    with pytest.raises(UpstreamError) as excinfo:
        client._request("GET", "/resource")

    assert excinfo.value.status == 503
    assert "maintenance" in str(excinfo.value)
    assert client.stub_session.calls == 1


def test_transport_failure_surfaces_as_source_unavailable():
    client = _DummyClient([requests.ConnectionError("connection refused")])

    with pytest.raises(SourceUnavailable) as excinfo:
        client._request("GET", "/resource")

    assert isinstance(excinfo.value, UpstreamError)
    assert "connection refused" in str(excinfo.value)


def test_client_errors_are_source_unavailable():
    for error in (NotFoundError, RateLimitedError, RequestRejectedError, UpstreamError):
        assert issubclass(error, SourceUnavailable)
