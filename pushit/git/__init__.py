"""Git operations module.

- GitRunner: serialized execution of git commands
- Repository: the release-specific operations on one working copy

Usage:
    from pushit.git import GitRunner, Repository

    runner = GitRunner(console=console)
    module = Repository(module_dir, runner=runner, label="foo")
    site = Repository(site_dir, runner=runner, label="site")
"""

from pushit.git.repository import Repository
from pushit.git.runner import GitError, GitRunner

__all__ = [
    "GitError",
    "GitRunner",
    "Repository",
]
