from __future__ import annotations

import typer

from cr.cli.context import build_context
from cr.core.errors import ErrorCode
from cr.services.creator import (
    CreateFailed,
    CreateOutcome,
    DuplicateTagRejected,
    InputRejected,
    OutputFailed,
    Published,
    ReleaseCreator,
)


def outcome_exit_code(outcome: CreateOutcome) -> ErrorCode:
    match outcome:
        case Published():
            return ErrorCode.OK
        case DuplicateTagRejected() | InputRejected():
            return ErrorCode.USER_ERROR
        case CreateFailed():
            return ErrorCode.NETWORK_ERROR
        case OutputFailed():
            return ErrorCode.IO_ERROR


def run(
    repository: str | None = typer.Option(
        None,
        "--repository",
        help="owner/repo (default: $GITHUB_REPOSITORY)",
    ),
    api_url: str | None = typer.Option(
        None,
        "--api-url",
        help="REST API base URL (default: $GITHUB_API_URL or https://api.github.com)",
    ),
) -> None:
    """Create the release for the pushed tag and publish its outputs."""
    ctx = build_context(repository=repository, api_url=api_url)

    creator = ReleaseCreator(
        repo=ctx.env.repo,
        inputs=ctx.inputs,
        client=ctx.client,
        outputs=ctx.outputs,
        failures=ctx.failures,
        console=ctx.console,
    )
    code = outcome_exit_code(creator.run())
    if code.is_error:
        raise typer.Exit(code=int(code))
