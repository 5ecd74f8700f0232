"""Release workflow: version resolution, manifest rewrite, tag and publish."""

from pushit.release.errors import PushitError
from pushit.release.model import BumpKind, ModuleRef, VersionPlan
from pushit.release.service import PushitService, PushitSession, ReleaseState

__all__ = [
    "BumpKind",
    "ModuleRef",
    "PushitError",
    "PushitService",
    "PushitSession",
    "ReleaseState",
    "VersionPlan",
]
