"""Typed access to the workflow process environment.

The runner describes the job through well-known environment variables. This
module turns them into a frozen ``ActionEnv`` with validation, so the rest of
the step never touches ``os.environ`` directly.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from cr.core.result import Err, Ok, Result
from cr.github.model import DEFAULT_API_URL, RepoRef

__all__ = [
    "ActionEnv",
    "ConfigError",
    "load_action_env",
    "parse_repository",
]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the process environment cannot describe a run."""

    message: str
    variable: str | None = None


@dataclass(frozen=True, slots=True)
class ActionEnv:
    """Everything the step needs from the runner besides its inputs."""

    repo: RepoRef
    token: str
    api_url: str = DEFAULT_API_URL
    output_path: Path | None = None


def parse_repository(slug: str) -> Result[RepoRef, ConfigError]:
    """Parse ``owner/repo``."""
    owner, sep, repo = slug.strip().partition("/")
    if not sep or not owner or not repo or "/" in repo:
        return Err(
            ConfigError(
                f"invalid repository '{slug}' (expected owner/repo)",
                variable="GITHUB_REPOSITORY",
            )
        )
    return Ok(RepoRef(owner=owner, repo=repo))


def _get(environ: Mapping[str, str], key: str) -> str | None:
    value = environ.get(key, "").strip()
    return value or None


def load_action_env(
    environ: Mapping[str, str],
    *,
    repository: str | None = None,
    api_url: str | None = None,
) -> Result[ActionEnv, ConfigError]:
    """Load the run description from environment variables.

    Args:
        environ: Usually ``os.environ``.
        repository: Overrides ``GITHUB_REPOSITORY``.
        api_url: Overrides ``GITHUB_API_URL``.

    Returns:
        Ok(ActionEnv) on success, Err(ConfigError) naming the bad variable.
    """
    slug = repository or _get(environ, "GITHUB_REPOSITORY")
    if slug is None:
        return Err(ConfigError("GITHUB_REPOSITORY is not set", variable="GITHUB_REPOSITORY"))

    repo = parse_repository(slug)
    if isinstance(repo, Err):
        return repo

    token = _get(environ, "GITHUB_TOKEN") or _get(environ, "INPUT_GITHUB_TOKEN")
    if token is None:
        return Err(ConfigError("GITHUB_TOKEN is not set", variable="GITHUB_TOKEN"))

    base = (api_url or _get(environ, "GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/")
    if not base.startswith(("https://", "http://")):
        return Err(ConfigError(f"invalid API URL: {base}", variable="GITHUB_API_URL"))

    output = _get(environ, "GITHUB_OUTPUT")
    return Ok(
        ActionEnv(
            repo=repo.value,
            token=token,
            api_url=base,
            output_path=Path(output) if output else None,
        )
    )
