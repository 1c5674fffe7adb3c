"""Error codes for CLI exit status.

Every failed comparison maps to one of these codes so scripts can tell bad
input apart from network trouble or unusable release data.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (missing arguments, bad filter, unknown tag)
    - 2: Environment error (unreadable config)
    - 3: Data error (tags that are not versions, nothing left to compare)
    - 4: Network error (API unreachable, non-success status)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    DATA_ERROR = 3
    NETWORK_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
