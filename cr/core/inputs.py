"""Step input access.

Workflow runners hand step inputs to the process as ``INPUT_<NAME>``
environment variables. ``InputSource`` is the narrow interface the release
creator reads them through, so tests can script values and observe the exact
order and number of reads.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

__all__ = [
    "InputError",
    "InputSource",
    "EnvInputSource",
    "MockInputSource",
    "input_env_name",
    "parse_bool_input",
]


class InputError(Exception):
    """A required step input was not supplied."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Input required and not supplied: {name}")
        self.name = name


@runtime_checkable
class InputSource(Protocol):
    """Protocol for reading named step inputs."""

    def get_input(self, name: str, *, required: bool = False) -> str:
        """Return the input value, or "" when unset.

        Raises:
            InputError: If ``required`` and the value is empty.
        """
        ...


def input_env_name(name: str) -> str:
    """Environment variable carrying an input: ``tag_name`` -> ``INPUT_TAG_NAME``."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def parse_bool_input(value: str) -> bool:
    """Only the exact string "true" enables a flag."""
    return value == "true"


class EnvInputSource:
    """Read inputs from the process environment.

    Values are trimmed the same way the Actions toolkit trims them.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def get_input(self, name: str, *, required: bool = False) -> str:
        value = self._environ.get(input_env_name(name), "").strip()
        if required and not value:
            raise InputError(name)
        return value


def _empty_names() -> list[str]:
    return []


@dataclass
class MockInputSource:
    """Input source returning queued values in call order.

    Each ``get_input`` consumes the next queued value whatever name is asked
    for; once the queue is empty it returns "". ``calls`` records the names
    in the order they were read.
    """

    values: list[str]
    calls: list[str] = field(default_factory=_empty_names)

    def get_input(self, name: str, *, required: bool = False) -> str:
        self.calls.append(name)
        value = self.values.pop(0) if self.values else ""
        if required and not value:
            raise InputError(name)
        return value
