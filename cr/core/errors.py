"""Exit codes for the release step.

The numeric values are the process exit status and should remain stable:
- 0: Success
- 1: User error (missing input, duplicate tag)
- 2: Environment error (GITHUB_REPOSITORY / token missing or malformed)
- 4: Network error (the release API rejected the create call)
- 5: I/O error (step outputs could not be written)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
