from __future__ import annotations

from pathlib import Path

import pytest

from pushit.test._fakes import FakeGit, ReleaseRepos, build_release_repos


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def release_repos(tmp_path: Path) -> ReleaseRepos:
    return build_release_repos(tmp_path)
