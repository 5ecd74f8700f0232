"""Exit codes for the pushit command.

Values are used as process exit codes and should remain stable:
- 0: Success (an operator abort also exits cleanly)
- 1: User error (topic mismatch, malformed tag, manifest entry missing)
- 2: Environment error (module or site directory/file missing)
- 3: Git error (a git command failed; no rollback is attempted)
- 5: I/O error (manifest could not be read or written)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the CLI."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    GIT_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
