from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from cr.core.structured import get_id, get_str

DEFAULT_API_URL = "https://api.github.com"
TAG_REF_PREFIX = "refs/tags/"


def tag_name_from_ref(ref: str) -> str:
    """``refs/tags/v1.0.0`` -> ``v1.0.0``; anything else is returned unchanged."""
    return ref.removeprefix(TAG_REF_PREFIX)


@dataclass(frozen=True, slots=True)
class RepoRef:
    owner: str
    repo: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    """Parameters of one create-release call."""

    owner: str
    repo: str
    tag_name: str
    name: str
    body: str
    draft: bool
    prerelease: bool

    def to_payload(self) -> dict[str, object]:
        # body is sent even when empty
        return {
            "tag_name": self.tag_name,
            "name": self.name,
            "body": self.body,
            "draft": self.draft,
            "prerelease": self.prerelease,
        }


@dataclass(frozen=True, slots=True)
class Release:
    id: int | str
    html_url: str
    upload_url: str

    @classmethod
    def from_payload(cls, data: Mapping[str, object]) -> Release | None:
        """Build from an API payload; None if a required field is missing."""
        release_id = get_id(data, "id")
        html_url = get_str(data, "html_url")
        upload_url = get_str(data, "upload_url")
        if release_id is None or html_url is None or upload_url is None:
            return None
        return cls(id=release_id, html_url=html_url, upload_url=upload_url)

    def outputs(self) -> tuple[tuple[str, str], ...]:
        """Step outputs, in publication order."""
        return (
            ("id", str(self.id)),
            ("html_url", self.html_url),
            ("upload_url", self.upload_url),
        )


@dataclass(frozen=True, slots=True)
class ReleaseLookup:
    """Reply to a lookup by tag.

    A 200 reply means a release exists for the tag. ``release`` is ``None``
    when that reply could not be parsed.
    """

    status: int
    release: Release | None = None

    @property
    def found(self) -> bool:
        return self.status == 200
