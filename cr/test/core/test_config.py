"""Tests for cr.core.config module."""

from __future__ import annotations

from pathlib import Path

from cr.core.config import ConfigError, load_action_env, parse_repository
from cr.core.result import Err, Ok
from cr.github.model import DEFAULT_API_URL, RepoRef


def _env(**extra: str) -> dict[str, str]:
    env = {"GITHUB_REPOSITORY": "octo/hello", "GITHUB_TOKEN": "t0ken"}
    env.update(extra)
    return env


class TestParseRepository:
    def test_valid(self) -> None:
        assert parse_repository("octo/hello") == Ok(RepoRef(owner="octo", repo="hello"))

    def test_missing_slash(self) -> None:
        result = parse_repository("octo")
        assert isinstance(result, Err)
        assert result.error.variable == "GITHUB_REPOSITORY"

    def test_empty_parts(self) -> None:
        assert isinstance(parse_repository("/hello"), Err)
        assert isinstance(parse_repository("octo/"), Err)

    def test_too_many_parts(self) -> None:
        assert isinstance(parse_repository("a/b/c"), Err)


class TestLoadActionEnv:
    def test_minimal(self) -> None:
        result = load_action_env(_env())

        assert isinstance(result, Ok)
        env = result.value
        assert env.repo == RepoRef(owner="octo", repo="hello")
        assert env.token == "t0ken"
        assert env.api_url == DEFAULT_API_URL
        assert env.output_path is None

    def test_missing_repository(self) -> None:
        result = load_action_env({"GITHUB_TOKEN": "t"})
        assert result == Err(
            ConfigError("GITHUB_REPOSITORY is not set", variable="GITHUB_REPOSITORY")
        )

    def test_missing_token(self) -> None:
        result = load_action_env({"GITHUB_REPOSITORY": "octo/hello"})
        assert isinstance(result, Err)
        assert result.error.variable == "GITHUB_TOKEN"

    def test_token_from_input(self) -> None:
        result = load_action_env({"GITHUB_REPOSITORY": "octo/hello", "INPUT_GITHUB_TOKEN": "in"})
        assert isinstance(result, Ok)
        assert result.value.token == "in"

    def test_repository_override(self) -> None:
        result = load_action_env(_env(), repository="other/repo")
        assert isinstance(result, Ok)
        assert result.value.repo.slug == "other/repo"

    def test_api_url_trailing_slash_removed(self) -> None:
        result = load_action_env(_env(GITHUB_API_URL="https://ghe.example.com/api/v3/"))
        assert isinstance(result, Ok)
        assert result.value.api_url == "https://ghe.example.com/api/v3"

    def test_api_url_override_wins(self) -> None:
        result = load_action_env(
            _env(GITHUB_API_URL="https://ignored.example.com"),
            api_url="https://api.example.com",
        )
        assert isinstance(result, Ok)
        assert result.value.api_url == "https://api.example.com"

    def test_invalid_api_url(self) -> None:
        result = load_action_env(_env(GITHUB_API_URL="ftp://example.com"))
        assert isinstance(result, Err)
        assert result.error.variable == "GITHUB_API_URL"

    def test_output_path(self, tmp_path: Path) -> None:
        out = tmp_path / "output.txt"
        result = load_action_env(_env(GITHUB_OUTPUT=str(out)))
        assert isinstance(result, Ok)
        assert result.value.output_path == out
