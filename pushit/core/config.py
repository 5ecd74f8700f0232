"""Run configuration.

Site options fall back to environment variables only when the corresponding
CLI option was not given, then to hardcoded defaults.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "DEFAULT_MAIN_BRANCH",
    "DEFAULT_SITE_MAKEFILE",
    "DEFAULT_SITE_REPO",
    "ENV_SITE_MAKEFILE",
    "ENV_SITE_REPO",
    "PushitConfig",
    "resolve_config",
]

ENV_SITE_REPO = "NCAA_BARCA_SITE_REPO_PATH"
ENV_SITE_MAKEFILE = "NCAA_BARCA_SITE_MAKEFILE"

DEFAULT_SITE_REPO = "~/Repos/ncaa-barcelona"
DEFAULT_SITE_MAKEFILE = "barcelona.make"
DEFAULT_MAIN_BRANCH = "master"


@dataclass(frozen=True, slots=True)
class PushitConfig:
    """Resolved options for a single run.

    Attributes:
        module_dir: Working directory of the module repository.
        site_repo: Working directory of the site repository.
        site_makefile: Manifest filename inside ``site_repo``.
        topic: Topic branch supplied by the operator ("" = use current branch).
        main_branch: Name of the main branch in both repositories.
        require_module_file: Whether ``<module>.module`` must exist.
        dry_run: Print mutating git commands instead of running them.
    """

    module_dir: Path
    site_repo: Path
    site_makefile: str
    topic: str = ""
    main_branch: str = DEFAULT_MAIN_BRANCH
    require_module_file: bool = True
    dry_run: bool = False

    @property
    def makefile_path(self) -> Path:
        return self.site_repo / self.site_makefile


def _expand(raw: str) -> Path:
    return Path(raw).expanduser()


def resolve_config(
    *,
    module: Path | None,
    site_repo: str | None,
    site_makefile: str | None,
    topic: str | None = None,
    main_branch: str = DEFAULT_MAIN_BRANCH,
    no_module: bool = False,
    dry_run: bool = False,
    environ: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> PushitConfig:
    """Build a ``PushitConfig`` from CLI values, environment and defaults."""
    env = os.environ if environ is None else environ

    if site_repo is None:
        site_repo = env.get(ENV_SITE_REPO) or DEFAULT_SITE_REPO
    if site_makefile is None:
        site_makefile = env.get(ENV_SITE_MAKEFILE) or DEFAULT_SITE_MAKEFILE

    module_dir = module if module is not None else (cwd or Path.cwd())

    return PushitConfig(
        module_dir=module_dir.expanduser(),
        site_repo=_expand(site_repo),
        site_makefile=site_makefile,
        topic=(topic or "").strip(),
        main_branch=main_branch,
        require_module_file=not no_module,
        dry_run=dry_run,
    )
