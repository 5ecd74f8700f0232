from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pushit.git.runner import GitError

ErrorKind = Literal[
    "directory_not_found",
    "module_not_found",
    "makefile_not_found",
    "topic_mismatch",
    "invalid_tag",
    "manifest_entry_not_found",
    "manifest_read_failed",
    "manifest_write_failed",
    "git_failed",
]


@dataclass(frozen=True, slots=True)
class PushitError:
    kind: ErrorKind
    message: str
    hint: str | None = None
    output: str | None = None


def git_failed(error: GitError) -> PushitError:
    return PushitError(
        kind="git_failed",
        message=f"there was a problem running '{' '.join(('git', *error.command))}'",
        hint="See the git output above for clues. Nothing was rolled back.",
        output=error.output.strip() or None,
    )
