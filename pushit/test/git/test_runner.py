"""Tests for pushit.git.runner module."""

from __future__ import annotations

import threading
from pathlib import Path

from pushit.core.result import Err, Ok
from pushit.git.runner import GIT_NETWORK_TIMEOUT_SECONDS, GIT_TIMEOUT_SECONDS, GitError, GitRunner
from pushit.output.console import MockConsole
from pushit.test._fakes import FakeGit


def test_runs_git_in_given_directory(tmp_path: Path, fake_git: FakeGit) -> None:
    fake_git.respond(["rev-parse", "--abbrev-ref", "HEAD"], "NCAA-5\n")
    runner = GitRunner(console=MockConsole(), execute=fake_git)

    result = runner.run(["rev-parse", "--abbrev-ref", "HEAD"], cwd=tmp_path, where="foo")

    assert result == Ok("NCAA-5\n")
    assert fake_git.calls == [(tmp_path, ("rev-parse", "--abbrev-ref", "HEAD"))]


def test_failure_becomes_git_error(tmp_path: Path, fake_git: FakeGit) -> None:
    fake_git.fail(["push", "origin", "--tags"], "rejected", returncode=1)
    runner = GitRunner(console=MockConsole(), execute=fake_git)

    result = runner.run(["push", "origin", "--tags"], cwd=tmp_path, where="foo", mutating=True)

    assert isinstance(result, Err)
    assert result.error == GitError(command=("push", "origin", "--tags"), output="rejected")
    assert result.error.message == "git push origin --tags failed (exit 1)"


def test_echoes_commands(tmp_path: Path, fake_git: FakeGit) -> None:
    console = MockConsole()
    runner = GitRunner(console=console, execute=fake_git)

    runner.run(["tag", "v1.3.0"], cwd=tmp_path, where="foo", mutating=True)

    assert console.messages == ["[foo] git tag v1.3.0"]


def test_dry_run_skips_only_mutating_commands(tmp_path: Path, fake_git: FakeGit) -> None:
    runner = GitRunner(console=MockConsole(), dry_run=True, execute=fake_git)

    assert runner.run(["fetch", "--tags", "origin"], cwd=tmp_path, where="foo") == Ok("")
    assert runner.run(["tag", "v1.3.0"], cwd=tmp_path, where="foo", mutating=True) == Ok("")

    assert fake_git.commands() == [("fetch", "--tags", "origin")]


def test_network_commands_get_longer_timeout(tmp_path: Path) -> None:
    seen: dict[str, float | None] = {}

    def execute(cmd: list[str], cwd: Path, *, timeout: float | None = None) -> Ok[str]:
        seen[cmd[1]] = timeout
        return Ok("")

    runner = GitRunner(console=MockConsole(), execute=execute)
    runner.run(["push", "origin", "master"], cwd=tmp_path, where="site")
    runner.run(["commit", "x", "-m", "y"], cwd=tmp_path, where="site")

    assert seen == {"push": GIT_NETWORK_TIMEOUT_SECONDS, "commit": GIT_TIMEOUT_SECONDS}


def test_commands_from_many_threads_never_overlap(tmp_path: Path, fake_git: FakeGit) -> None:
    fake_git.delays = {"status": 0.01}
    runner = GitRunner(console=MockConsole(), execute=fake_git)

    threads = [
        threading.Thread(target=runner.run, args=(["status"],), kwargs={"cwd": tmp_path, "where": "x"})
        for _ in range(8)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(fake_git.calls) == 8
    assert fake_git.max_in_flight == 1
