"""Serialized git command execution.

Both release tasks share one ``GitRunner``. Every command takes the runner's
lock for its whole duration, so the module and site tasks never have two git
processes in flight at once even though they run on different threads. The
working directory is passed explicitly to each command.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from pushit.core.result import Err, Ok, Result
from pushit.output.console import ConsoleProtocol
from pushit.platform.process import ProcessError
from pushit.platform.process import run as run_process

__all__ = [
    "GIT_NETWORK_TIMEOUT_SECONDS",
    "GIT_TIMEOUT_SECONDS",
    "Executor",
    "GitError",
    "GitRunner",
]

GIT_TIMEOUT_SECONDS = 30.0
GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

_NETWORK_COMMANDS = frozenset({"fetch", "pull", "push"})

Executor = Callable[..., Result[str, ProcessError]]


@dataclass(frozen=True, slots=True)
class GitError:
    """A git command that failed.

    Attributes:
        command: Git arguments (without the ``git`` executable).
        output: Combined stdout/stderr of the command.
        returncode: Process exit code (-1 if git could not be started).
    """

    command: tuple[str, ...]
    output: str
    returncode: int = 1

    @property
    def message(self) -> str:
        return f"git {' '.join(self.command)} failed (exit {self.returncode})"


class GitRunner:
    """Runs git commands one at a time.

    Attributes:
        dry_run: When True, mutating commands are echoed but not executed.
    """

    def __init__(
        self,
        *,
        console: ConsoleProtocol,
        dry_run: bool = False,
        executable: str = "git",
        execute: Executor = run_process,
    ) -> None:
        self._console = console
        self._executable = executable
        self._execute = execute
        self._lock = threading.Lock()
        self.dry_run = dry_run

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path,
        where: str,
        mutating: bool = False,
    ) -> Result[str, GitError]:
        """Run ``git <args>`` in ``cwd``.

        Args:
            args: Git arguments.
            cwd: Repository working directory.
            where: Short label of the repository, used when echoing.
            mutating: Whether the command changes local or remote state.
        """
        argv = list(args)
        timeout = (
            GIT_NETWORK_TIMEOUT_SECONDS if argv and argv[0] in _NETWORK_COMMANDS else GIT_TIMEOUT_SECONDS
        )

        with self._lock:
            self._console.command(argv, where=where)
            if mutating and self.dry_run:
                return Ok("")
            result = self._execute([self._executable, *argv], cwd, timeout=timeout)

        match result:
            case Err(e):
                return Err(GitError(command=tuple(argv), output=e.output, returncode=e.returncode))
            case Ok(output):
                return Ok(output)
