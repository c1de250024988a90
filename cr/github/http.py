"""HTTP client abstraction for the release API.

This module provides:
- HttpClient: Protocol for JSON requests (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Canned responses for testing
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from cr.core.result import Err, Ok, Result
from cr.core.structured import StrDict, as_str_dict, get_str

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """A successful (2xx/3xx) reply with its decoded JSON object body."""

    status: int
    data: StrDict


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for JSON HTTP requests.

    Allows injecting a mock client so unit tests never reach the network.
    """

    def request_json(
        self,
        method: str,
        url: str,
        body: StrDict | None = None,
    ) -> Result[HttpResponse, HttpError]:
        """Send a request and decode the JSON object reply.

        Args:
            method: HTTP method ("GET", "POST", ...)
            url: Absolute URL
            body: Optional JSON object to send

        Returns:
            Ok with HttpResponse, or Err with HttpError for HTTP error
            statuses, network failures and non-object replies.
        """
        ...


def _error_message(raw: bytes, fallback: str) -> str:
    # GitHub error replies look like {"message": "...", "documentation_url": ...}
    try:
        obj: object = json.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return fallback
    data = as_str_dict(obj)
    if data is None:
        return fallback
    return get_str(data, "message") or fallback


class RealHttpClient:
    """Real HTTP client using urllib.

    Sends the token and the GitHub media type on every request.
    """

    def __init__(
        self,
        token: str,
        *,
        timeout: float = 30.0,
        user_agent: str = "create-release",
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._token = token
        self._ssl_context = ssl.create_default_context()

    def _headers(self, has_body: bool) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"token {self._token}",
            "User-Agent": self.user_agent,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    def request_json(
        self,
        method: str,
        url: str,
        body: StrDict | None = None,
    ) -> Result[HttpResponse, HttpError]:
        data = None if body is None else json.dumps(body).encode("utf-8")
        try:
            req = urllib.request.Request(
                url,
                data=data,
                method=method,
                headers=self._headers(data is not None),
            )
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                status: int = response.status
                raw: bytes = response.read()
        except urllib.error.HTTPError as e:
            message = _error_message(e.read(), e.reason)
            return Err(HttpError(url=url, status=e.code, message=message))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        try:
            obj: object = json.loads(raw.decode("utf-8")) if raw else {}
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=status, message=f"JSON parse error: {e}"))

        payload = as_str_dict(obj)
        if payload is None:
            return Err(HttpError(url=url, status=status, message="Expected JSON object"))
        return Ok(HttpResponse(status=status, data=payload))


@dataclass(frozen=True, slots=True)
class RecordedCall:
    method: str
    url: str
    body: StrDict | None


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_response("GET", url, HttpResponse(status=200, data={"id": 1}))
        client.set_response("POST", url, HttpError(url=url, status=422, message="bad"))

    Unknown (method, url) pairs answer HTTP 404.
    """

    def __init__(self) -> None:
        self._responses: dict[tuple[str, str], HttpResponse | HttpError] = {}
        self.calls: list[RecordedCall] = []

    def set_response(self, method: str, url: str, response: HttpResponse | HttpError) -> None:
        """Set the reply for a method/URL pair."""
        self._responses[(method.upper(), url)] = response

    def request_json(
        self,
        method: str,
        url: str,
        body: StrDict | None = None,
    ) -> Result[HttpResponse, HttpError]:
        self.calls.append(RecordedCall(method=method.upper(), url=url, body=body))

        response = self._responses.get((method.upper(), url))
        if response is None:
            return Err(HttpError(url=url, status=404, message="Not Found"))
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
