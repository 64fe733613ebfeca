"""Error codes for CLI exit status.

These values are used as process exit codes and should remain stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: User error (bad input, missing option, malformed upload URL)
    - 2: Validation error (asset name collisions)
    - 4: Network error (API unreachable, unexpected HTTP status)
    - 5: I/O error (file not found, permission denied)
    """

    OK = 0
    USER_ERROR = 1
    VALIDATION_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
