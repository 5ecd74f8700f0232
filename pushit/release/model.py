from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class BumpKind(str, Enum):
    major = "major"
    minor = "minor"
    patch = "patch"


@dataclass(frozen=True, slots=True)
class ModuleRef:
    """The module being released; its name is the last segment of ``path``."""

    name: str
    path: Path


@dataclass(frozen=True, slots=True)
class VersionPlan:
    current: str
    new: str
    topic: str

    @property
    def tag(self) -> str:
        return f"v{self.new}"


def commit_message(*, topic: str, module: str, version: str) -> str:
    return f"{topic} {module} -> {version}"
