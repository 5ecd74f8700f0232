from __future__ import annotations

import pytest

from pushit.release.model import BumpKind
from pushit.release.semver import SemVer, parse_version, strip_tag_prefix


def test_parse_version() -> None:
    assert parse_version("1.2.3") == SemVer(1, 2, 3)
    assert parse_version("v0.0.1") == SemVer(0, 0, 1)
    assert parse_version(" 10.20.30\n") == SemVer(10, 20, 30)


@pytest.mark.parametrize("text", ["1.2", "1.2.3.4", "1.2.x", "1.2.3-beta.1", "", "vv1.2.3"])
def test_parse_version_rejects_malformed(text: str) -> None:
    assert parse_version(text) is None


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (BumpKind.major, SemVer(2, 0, 0)),
        (BumpKind.minor, SemVer(1, 3, 0)),
        (BumpKind.patch, SemVer(1, 2, 4)),
    ],
)
def test_bump_resets_columns_to_the_right(kind: BumpKind, expected: SemVer) -> None:
    assert SemVer(1, 2, 3).bump(kind) == expected


def test_bump_from_zero() -> None:
    assert SemVer(0, 0, 0).bump(BumpKind.patch) == SemVer(0, 0, 1)
    assert SemVer(0, 9, 9).bump(BumpKind.minor) == SemVer(0, 10, 0)


def test_formatting() -> None:
    assert str(SemVer(1, 3, 0)) == "1.3.0"
    assert SemVer(1, 3, 0).to_tag() == "v1.3.0"


def test_strip_tag_prefix() -> None:
    assert strip_tag_prefix("v1.2.3\n") == "1.2.3"
    assert strip_tag_prefix("1.2.3") == "1.2.3"
