"""Step outputs and failure reporting for the workflow runner.

The runner reads step outputs from the file named by ``GITHUB_OUTPUT`` and
parses ``::command::`` lines on stdout. Both are written with ``typer.echo``
or plain file I/O, never through Rich, so no markup or wrapping can corrupt
them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable
from uuid import uuid4

import typer

__all__ = [
    "OutputSink",
    "FailureReporter",
    "FileOutputSink",
    "CommandOutputSink",
    "CommandFailureReporter",
    "MockOutputSink",
    "MockFailureReporter",
    "escape_data",
    "escape_property",
]


@runtime_checkable
class OutputSink(Protocol):
    """Accepts the named step outputs of one run as a single batch.

    Either every output in the batch is published, in order, or the call
    raises and none is.
    """

    def set_outputs(self, outputs: Sequence[tuple[str, str]]) -> None: ...


@runtime_checkable
class FailureReporter(Protocol):
    """Marks the step as failed with one human-readable message."""

    def set_failed(self, message: str) -> None: ...


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


class FileOutputSink:
    """Append outputs to the ``GITHUB_OUTPUT`` file.

    Each value is wrapped in a random heredoc delimiter so multi-line values
    survive. The whole batch is checked first and then appended with one
    write.

    Raises:
        ValueError: If a name or value contains its delimiter.
        OSError: If the file cannot be written.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def set_outputs(self, outputs: Sequence[tuple[str, str]]) -> None:
        text = "".join(_heredoc_entry(name, value) for name, value in outputs)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(text)


def _heredoc_entry(name: str, value: str) -> str:
    delimiter = f"ghadelimiter_{uuid4()}"
    if delimiter in name or delimiter in value:
        raise ValueError(f"unexpected delimiter in output '{name}'")
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


class CommandOutputSink:
    """Emit outputs as legacy ``::set-output`` commands.

    Used when the runner does not provide ``GITHUB_OUTPUT``.
    """

    def set_outputs(self, outputs: Sequence[tuple[str, str]]) -> None:
        lines = [
            f"::set-output name={escape_property(name)}::{escape_data(value)}"
            for name, value in outputs
        ]
        if lines:
            typer.echo("\n".join(lines))


class CommandFailureReporter:
    """Emit an ``::error::`` command; the exit code is set by the caller."""

    def set_failed(self, message: str) -> None:
        typer.echo(f"::error::{escape_data(message)}")


def _empty_pairs() -> list[tuple[str, str]]:
    return []


def _empty_messages() -> list[str]:
    return []


@dataclass
class MockOutputSink:
    """Captures outputs for testing."""

    outputs: list[tuple[str, str]] = field(default_factory=_empty_pairs)

    def set_outputs(self, outputs: Sequence[tuple[str, str]]) -> None:
        self.outputs.extend(outputs)


@dataclass
class MockFailureReporter:
    """Captures failure messages for testing."""

    messages: list[str] = field(default_factory=_empty_messages)

    def set_failed(self, message: str) -> None:
        self.messages.append(message)
