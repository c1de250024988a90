"""create-release: publish a GitHub release from a workflow step."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("create-release")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
