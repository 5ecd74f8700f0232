from __future__ import annotations

import re
from dataclasses import dataclass

from pushit.release.model import BumpKind


_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)$")


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_tag(self) -> str:
        return f"v{self}"

    def bump(self, kind: BumpKind) -> "SemVer":
        match kind:
            case BumpKind.major:
                return SemVer(self.major + 1, 0, 0)
            case BumpKind.minor:
                return SemVer(self.major, self.minor + 1, 0)
            case BumpKind.patch:
                return SemVer(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")


def parse_version(text: str) -> SemVer | None:
    """Parse ``MAJOR.MINOR.PATCH`` with an optional leading ``v``."""
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def strip_tag_prefix(tag: str) -> str:
    tag = tag.strip()
    return tag[1:] if tag.startswith("v") else tag
