"""Tests for github/http.py - HTTP client abstraction."""

from __future__ import annotations

import io
import json
import urllib.error
import urllib.request
from email.message import Message
from typing import Any

import pytest

from cr.core.result import Err, Ok
from cr.github.http import (
    HttpClient,
    HttpError,
    HttpResponse,
    MockHttpClient,
    RealHttpClient,
)


# =============================================================================
# HttpError tests
# =============================================================================


class TestHttpError:
    def test_str_with_status(self) -> None:
        error = HttpError(url="https://example.com/api", status=500, message="Internal Error")
        assert str(error) == "HTTP 500: Internal Error (https://example.com/api)"

    def test_str_without_status(self) -> None:
        error = HttpError(url="https://example.com", status=0, message="Timeout")
        assert str(error) == "Timeout (https://example.com)"


# =============================================================================
# MockHttpClient tests
# =============================================================================


class TestMockHttpClient:
    def test_isinstance_check(self) -> None:
        """MockHttpClient implements HttpClient protocol."""
        assert isinstance(MockHttpClient(), HttpClient)

    def test_canned_response(self) -> None:
        client = MockHttpClient()
        client.set_response("get", "https://x/y", HttpResponse(status=200, data={"a": 1}))

        result = client.request_json("GET", "https://x/y")

        assert result == Ok(HttpResponse(status=200, data={"a": 1}))

    def test_canned_error(self) -> None:
        client = MockHttpClient()
        error = HttpError(url="https://x/y", status=422, message="Validation Failed")
        client.set_response("POST", "https://x/y", error)

        assert client.request_json("POST", "https://x/y", {"k": "v"}) == Err(error)

    def test_unknown_url_is_404(self) -> None:
        result = MockHttpClient().request_json("GET", "https://x/missing")
        assert isinstance(result, Err)
        assert result.error.status == 404

    def test_records_calls(self) -> None:
        client = MockHttpClient()
        client.request_json("post", "https://x/y", {"k": "v"})
        assert len(client.calls) == 1
        assert client.calls[0].method == "POST"
        assert client.calls[0].body == {"k": "v"}


# =============================================================================
# RealHttpClient tests (urlopen patched)
# =============================================================================


class _FakeResponse:
    def __init__(self, status: int, body: bytes) -> None:
        self.status = status
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *exc: object) -> None:
        return None


def _http_error(url: str, code: int, reason: str, body: bytes) -> urllib.error.HTTPError:
    return urllib.error.HTTPError(url, code, reason, Message(), io.BytesIO(body))


class TestRealHttpClient:
    def test_isinstance_check(self) -> None:
        assert isinstance(RealHttpClient("t"), HttpClient)

    def test_sends_headers_and_body(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: dict[str, Any] = {}

        def fake_urlopen(req: urllib.request.Request, **kwargs: object) -> _FakeResponse:
            seen["req"] = req
            seen["timeout"] = kwargs.get("timeout")
            return _FakeResponse(201, b'{"id": 1}')

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

        client = RealHttpClient("secret", timeout=5.0, user_agent="test-agent")
        result = client.request_json("POST", "https://api.example.com/x", {"name": "n"})

        assert result == Ok(HttpResponse(status=201, data={"id": 1}))
        req: urllib.request.Request = seen["req"]
        assert req.get_method() == "POST"
        assert req.get_header("Authorization") == "token secret"
        assert req.get_header("User-agent") == "test-agent"
        assert req.get_header("Content-type") == "application/json"
        assert req.data is not None
        assert json.loads(req.data) == {"name": "n"}
        assert seen["timeout"] == 5.0

    def test_get_has_no_body(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: dict[str, Any] = {}

        def fake_urlopen(req: urllib.request.Request, **kwargs: object) -> _FakeResponse:
            seen["req"] = req
            return _FakeResponse(200, b"{}")

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

        RealHttpClient("t").request_json("GET", "https://api.example.com/x")

        req: urllib.request.Request = seen["req"]
        assert req.data is None
        assert req.get_header("Content-type") is None

    def test_http_error_uses_api_message(self, monkeypatch: pytest.MonkeyPatch) -> None:
        url = "https://api.example.com/x"

        def fake_urlopen(req: urllib.request.Request, **kwargs: object) -> _FakeResponse:
            raise _http_error(url, 422, "Unprocessable Entity", b'{"message": "Validation Failed"}')

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

        result = RealHttpClient("t").request_json("POST", url, {})

        assert result == Err(HttpError(url=url, status=422, message="Validation Failed"))

    def test_http_error_falls_back_to_reason(self, monkeypatch: pytest.MonkeyPatch) -> None:
        url = "https://api.example.com/x"

        def fake_urlopen(req: urllib.request.Request, **kwargs: object) -> _FakeResponse:
            raise _http_error(url, 404, "Not Found", b"<html>")

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

        result = RealHttpClient("t").request_json("GET", url)

        assert result == Err(HttpError(url=url, status=404, message="Not Found"))

    def test_network_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_urlopen(req: urllib.request.Request, **kwargs: object) -> _FakeResponse:
            raise urllib.error.URLError("Connection refused")

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

        result = RealHttpClient("t").request_json("GET", "https://api.example.com/x")

        assert isinstance(result, Err)
        assert result.error.status == 0
        assert result.error.message == "Connection refused"

    def test_non_object_reply(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_urlopen(req: urllib.request.Request, **kwargs: object) -> _FakeResponse:
            return _FakeResponse(200, b"[1, 2]")

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

        result = RealHttpClient("t").request_json("GET", "https://api.example.com/x")

        assert isinstance(result, Err)
        assert result.error.message == "Expected JSON object"
