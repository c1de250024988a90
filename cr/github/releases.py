from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable
from urllib.parse import quote

from cr.core.result import Err, Ok, Result
from cr.github.http import HttpClient
from cr.github.model import DEFAULT_API_URL, Release, ReleaseLookup, ReleaseRequest

__all__ = [
    "GitHubReleaseClient",
    "ReleaseApiError",
    "ReleaseClient",
]


@dataclass(frozen=True, slots=True)
class ReleaseApiError:
    """A release API call that did not produce a release.

    ``message`` is what gets reported when the step fails, so it is kept
    verbatim from the API where possible.
    """

    status: int
    message: str

    def __str__(self) -> str:
        return self.message


@runtime_checkable
class ReleaseClient(Protocol):
    """The two release API calls the step makes."""

    def get_release_by_tag(
        self, owner: str, repo: str, tag: str
    ) -> Result[ReleaseLookup, ReleaseApiError]: ...

    def create_release(self, request: ReleaseRequest) -> Result[Release, ReleaseApiError]: ...


class GitHubReleaseClient:
    """ReleaseClient backed by the GitHub REST API."""

    def __init__(self, http: HttpClient, api_url: str = DEFAULT_API_URL) -> None:
        self._http = http
        self._api_url = api_url.rstrip("/")

    def releases_url(self, owner: str, repo: str) -> str:
        return f"{self._api_url}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}/releases"

    def get_release_by_tag(
        self, owner: str, repo: str, tag: str
    ) -> Result[ReleaseLookup, ReleaseApiError]:
        url = f"{self.releases_url(owner, repo)}/tags/{quote(tag, safe='')}"
        result = self._http.request_json("GET", url)
        if isinstance(result, Err):
            return Err(ReleaseApiError(status=result.error.status, message=result.error.message))

        response = result.value
        return Ok(ReleaseLookup(status=response.status, release=Release.from_payload(response.data)))

    def create_release(self, request: ReleaseRequest) -> Result[Release, ReleaseApiError]:
        url = self.releases_url(request.owner, request.repo)
        result = self._http.request_json("POST", url, request.to_payload())
        if isinstance(result, Err):
            return Err(ReleaseApiError(status=result.error.status, message=result.error.message))

        release = Release.from_payload(result.value.data)
        if release is None:
            return Err(
                ReleaseApiError(
                    status=result.value.status,
                    message="Release payload is missing id, html_url or upload_url",
                )
            )
        return Ok(release)
