"""Error presentation and exit code mapping."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pushit.core.errors import ErrorCode
from pushit.output.console import Style
from pushit.release.errors import PushitError

if TYPE_CHECKING:
    from pushit.output.console import ConsoleProtocol

__all__ = ["error_exit_code", "print_error"]


def print_error(error: PushitError, console: ConsoleProtocol) -> None:
    """Print captured git output (if any), the error and its hint."""
    if error.output:
        console.print(error.output, Style.DIM)
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def error_exit_code(error: PushitError) -> int:
    match error.kind:
        case "directory_not_found" | "module_not_found" | "makefile_not_found":
            return int(ErrorCode.ENV_ERROR)
        case "manifest_read_failed" | "manifest_write_failed":
            return int(ErrorCode.IO_ERROR)
        case "git_failed":
            return int(ErrorCode.GIT_ERROR)
        case _:
            return int(ErrorCode.USER_ERROR)
