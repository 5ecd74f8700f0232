"""Git repository operations used by a release.

Only the commands a release needs are exposed. Each returns a Result; nothing
here raises on git failure.

Usage:
    repo = Repository(Path("/path/to/module"), runner=runner, label="foo")
    match repo.current_branch():
        case Ok(branch):
            print(f"Branch: {branch}")
        case Err(e):
            print(e.output)
"""

from __future__ import annotations

from pathlib import Path

from pushit.core.config import DEFAULT_MAIN_BRANCH
from pushit.core.result import Err, Ok, Result
from pushit.git.runner import GitError, GitRunner

__all__ = ["Repository"]

_REMOTE = "origin"


class Repository:
    """A working copy driven through a shared ``GitRunner``.

    Attributes:
        path: Repository working directory.
        label: Short name used when echoing commands.
        main_branch: Name of the branch releases are cut from.
    """

    def __init__(
        self,
        path: Path,
        *,
        runner: GitRunner,
        label: str,
        main_branch: str = DEFAULT_MAIN_BRANCH,
    ) -> None:
        self.path = path
        self.label = label
        self.main_branch = main_branch
        self._runner = runner

    @property
    def remote_main(self) -> str:
        return f"{_REMOTE}/{self.main_branch}"

    def fetch(self) -> Result[str, GitError]:
        """Fetch branches and tags from origin."""
        return self._run(["fetch", "--tags", _REMOTE])

    def current_branch(self) -> Result[str, GitError]:
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        match result:
            case Ok(output):
                return Ok(output.strip())
            case Err(_):
                return result

    def latest_tag(self) -> Result[str, GitError]:
        """Most recent tag reachable from the fetched main branch."""
        result = self._run(["describe", self.remote_main, "--abbrev=0", "--tags"])
        match result:
            case Ok(output):
                return Ok(output.strip())
            case Err(_):
                return result

    def checkout_main(self) -> Result[str, GitError]:
        return self._run(["checkout", self.main_branch], mutating=True)

    def fast_forward_main(self) -> Result[str, GitError]:
        """Fast-forward the checked out main branch to its fetched remote state."""
        return self._run(["merge", "--ff-only", self.remote_main], mutating=True)

    def pull_main(self) -> Result[str, GitError]:
        return self._run(["pull", "--ff-only", _REMOTE, self.main_branch], mutating=True)

    def delete_branch(self, branch: str) -> Result[str, GitError]:
        """Delete a local branch (``-d``: git refuses if it is not merged into HEAD)."""
        return self._run(["branch", "-d", branch], mutating=True)

    def create_tag(self, tag: str) -> Result[str, GitError]:
        return self._run(["tag", tag], mutating=True)

    def push_tags(self) -> Result[str, GitError]:
        return self._run(["push", _REMOTE, "--tags"], mutating=True)

    def commit_file(self, relpath: str, message: str) -> Result[str, GitError]:
        """Commit a single tracked file with ``message``."""
        return self._run(["commit", relpath, "-m", message], mutating=True)

    def push_main(self) -> Result[str, GitError]:
        return self._run(["push", _REMOTE, self.main_branch], mutating=True)

    def _run(self, args: list[str], *, mutating: bool = False) -> Result[str, GitError]:
        return self._runner.run(args, cwd=self.path, where=self.label, mutating=mutating)
