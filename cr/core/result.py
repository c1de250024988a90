"""Result type for explicit error handling.

Every call that talks to the outside world (environment, HTTP, files) returns
either ``Ok(value)`` or ``Err(error)`` instead of raising, so callers decide
at each step how a failure maps to the step outcome.

Usage:
    def parse_repo(slug: str) -> Result[RepoRef, ConfigError]:
        owner, sep, name = slug.partition("/")
        if not sep:
            return Err(ConfigError(f"invalid repository: {slug}"))
        return Ok(RepoRef(owner=owner, repo=name))

    result = parse_repo("octo/hello")
    if isinstance(result, Err):
        print(result.error.message)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
