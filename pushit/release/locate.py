"""Locate the module repository and the site manifest on disk."""

from __future__ import annotations

import os
from pathlib import Path

from pushit.core.config import ENV_SITE_MAKEFILE, ENV_SITE_REPO, PushitConfig
from pushit.core.result import Err, Ok, Result
from pushit.release.errors import PushitError
from pushit.release.model import ModuleRef

MODULE_FILE_SUFFIX = ".module"


def module_name_for(path: Path) -> str:
    return Path(os.path.abspath(path)).name


def resolve_module(config: PushitConfig) -> Result[ModuleRef, PushitError]:
    """Derive the module from its directory and check the ``<name>.module`` marker."""
    module_dir = Path(os.path.abspath(config.module_dir))
    name = module_name_for(module_dir)

    if not module_dir.is_dir():
        return Err(
            PushitError(
                kind="directory_not_found",
                message=f"there was a problem reading the module directory @ {module_dir}",
                hint=(
                    "Change to the top-level of the module repo (where the *.module file is) "
                    "or pass its full path with --module."
                ),
            )
        )

    if config.require_module_file and not (module_dir / f"{name}{MODULE_FILE_SUFFIX}").is_file():
        return Err(
            PushitError(
                kind="module_not_found",
                message=f"could not locate module '{name}' @ {module_dir}",
                hint="Use --no-module if this repo has no *.module file.",
            )
        )

    return Ok(ModuleRef(name=name, path=module_dir))


def locate_makefile(config: PushitConfig) -> Result[Path, PushitError]:
    if not config.site_repo.is_dir():
        return Err(
            PushitError(
                kind="directory_not_found",
                message=f"there was a problem reading the site repo directory @ {config.site_repo}",
                hint=f"Pass --site-repo or set {ENV_SITE_REPO}.",
            )
        )

    makefile = config.makefile_path
    if not makefile.is_file():
        return Err(
            PushitError(
                kind="makefile_not_found",
                message=f"could not locate makefile @ '{makefile}'",
                hint=f"Pass --site-makefile or set {ENV_SITE_MAKEFILE}.",
            )
        )

    return Ok(makefile)
