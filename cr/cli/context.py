from __future__ import annotations

import os
from dataclasses import dataclass

import typer

from cr import __version__
from cr.core.config import ActionEnv, load_action_env
from cr.core.errors import ErrorCode
from cr.core.inputs import EnvInputSource, InputSource
from cr.core.result import Err
from cr.github.http import RealHttpClient
from cr.github.releases import GitHubReleaseClient, ReleaseClient
from cr.output.console import ConsoleProtocol, RichConsole
from cr.output.workflow import (
    CommandFailureReporter,
    CommandOutputSink,
    FailureReporter,
    FileOutputSink,
    OutputSink,
)


@dataclass(frozen=True, slots=True)
class StepContext:
    env: ActionEnv
    inputs: InputSource
    client: ReleaseClient
    outputs: OutputSink
    failures: FailureReporter
    console: ConsoleProtocol


def build_context(*, repository: str | None = None, api_url: str | None = None) -> StepContext:
    env_result = load_action_env(os.environ, repository=repository, api_url=api_url)
    if isinstance(env_result, Err):
        typer.echo(f"error: {env_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    env = env_result.value
    outputs: OutputSink = (
        FileOutputSink(env.output_path) if env.output_path is not None else CommandOutputSink()
    )
    return StepContext(
        env=env,
        inputs=EnvInputSource(),
        client=GitHubReleaseClient(
            RealHttpClient(env.token, user_agent=f"create-release/{__version__}"),
            api_url=env.api_url,
        ),
        outputs=outputs,
        failures=CommandFailureReporter(),
        console=RichConsole(),
    )
