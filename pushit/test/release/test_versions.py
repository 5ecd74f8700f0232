from __future__ import annotations

from pathlib import Path

import pytest

from pushit.core.result import Err, Ok
from pushit.git.repository import Repository
from pushit.git.runner import GitRunner
from pushit.output.console import MockConsole
from pushit.release.model import BumpKind, VersionPlan
from pushit.release.versions import bump_version, resolve_topic, resolve_versions
from pushit.test._fakes import FakeGit

BRANCH = ("rev-parse", "--abbrev-ref", "HEAD")
LATEST = ("describe", "origin/master", "--abbrev=0", "--tags")


class TestResolveTopic:
    def test_main_without_topic_fails(self) -> None:
        result = resolve_topic(branch="master", topic="", main_branch="master")
        assert isinstance(result, Err)
        assert result.error.kind == "topic_mismatch"

    def test_mismatched_topic_fails(self) -> None:
        result = resolve_topic(branch="NCAA-5", topic="NCAA-9", main_branch="master")
        assert isinstance(result, Err)
        assert result.error.kind == "topic_mismatch"
        assert "NCAA-9 != NCAA-5" in result.error.message

    def test_current_branch_becomes_topic(self) -> None:
        assert resolve_topic(branch="NCAA-5", topic="", main_branch="master") == Ok("NCAA-5")

    def test_matching_topic(self) -> None:
        assert resolve_topic(branch="NCAA-5", topic="NCAA-5", main_branch="master") == Ok("NCAA-5")

    def test_merged_topic_from_main(self) -> None:
        assert resolve_topic(branch="master", topic="NCAA-5", main_branch="master") == Ok("NCAA-5")

    def test_custom_main_branch(self) -> None:
        result = resolve_topic(branch="main", topic="", main_branch="main")
        assert isinstance(result, Err)


class TestBumpVersion:
    @pytest.mark.parametrize(
        ("bump", "expected"),
        [(BumpKind.major, "2.0.0"), (BumpKind.minor, "1.3.0"), (BumpKind.patch, "1.2.4")],
    )
    def test_bump(self, bump: BumpKind, expected: str) -> None:
        assert bump_version("1.2.3", bump) == Ok(expected)

    def test_malformed_tag(self) -> None:
        result = bump_version("1.2", BumpKind.patch)
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_tag"


class TestResolveVersions:
    def _resolve(self, tmp_path: Path, fake_git: FakeGit, *, topic: str = "", bump=BumpKind.minor):  # noqa: ANN001
        console = MockConsole()
        repo = Repository(tmp_path, runner=GitRunner(console=console, execute=fake_git), label="foo")
        return resolve_versions(repo=repo, bump=bump, topic=topic, console=console), console

    def test_plan_from_topic_branch(self, tmp_path: Path, fake_git: FakeGit) -> None:
        fake_git.respond(BRANCH, "NCAA-5\n")
        fake_git.respond(LATEST, "v1.2.3\n")

        result, console = self._resolve(tmp_path, fake_git)

        assert result == Ok(VersionPlan(current="1.2.3", new="1.3.0", topic="NCAA-5"))
        assert fake_git.commands() == [("fetch", "--tags", "origin"), BRANCH, LATEST]
        assert console.find("Current version: 1.2.3")

    def test_topic_checked_before_tag_lookup(self, tmp_path: Path, fake_git: FakeGit) -> None:
        fake_git.respond(BRANCH, "master\n")

        result, _ = self._resolve(tmp_path, fake_git)

        assert isinstance(result, Err)
        assert result.error.kind == "topic_mismatch"
        assert LATEST not in fake_git.commands()

    def test_fetch_failure_is_git_failure(self, tmp_path: Path, fake_git: FakeGit) -> None:
        fake_git.fail(["fetch", "--tags", "origin"], "Could not read from remote repository.")

        result, _ = self._resolve(tmp_path, fake_git)

        assert isinstance(result, Err)
        assert result.error.kind == "git_failed"
        assert result.error.output == "Could not read from remote repository."

    def test_malformed_latest_tag(self, tmp_path: Path, fake_git: FakeGit) -> None:
        fake_git.respond(BRANCH, "NCAA-5\n")
        fake_git.respond(LATEST, "release-7\n")

        result, _ = self._resolve(tmp_path, fake_git)

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_tag"
