from __future__ import annotations

from pathlib import Path

import typer

from pushit import __version__
from pushit.cli.errors import error_exit_code, print_error
from pushit.core.config import (
    DEFAULT_MAIN_BRANCH,
    DEFAULT_SITE_MAKEFILE,
    DEFAULT_SITE_REPO,
    ENV_SITE_MAKEFILE,
    ENV_SITE_REPO,
    resolve_config,
)
from pushit.core.errors import ErrorCode
from pushit.core.result import Err
from pushit.output.console import RichConsole
from pushit.release.model import BumpKind
from pushit.release.service import PushitService, ReleaseState


app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
    help=(
        "Bump and tag a new module version, pin it in the site makefile, "
        "and push both repos. Run after merging the module's pull request."
    ),
)


def _prompt(question: str) -> str:
    return typer.prompt(question, default="", show_default=False)


def pushit(
    bump: BumpKind = typer.Option(
        BumpKind.patch,
        "--bump",
        "-v",
        help="The semver column of the module version to bump (major|minor|patch).",
    ),
    module: Path | None = typer.Option(
        None,
        "--module",
        help="The path to the module with changes to push. (default: current directory)",
    ),
    site_repo: str | None = typer.Option(
        None,
        "--site-repo",
        "-r",
        help=f"Path to the site repo holding the makefile. (default: ${ENV_SITE_REPO} or {DEFAULT_SITE_REPO})",
    ),
    site_makefile: str | None = typer.Option(
        None,
        "--site-makefile",
        help=f"Filename of the *.make file to alter. (default: ${ENV_SITE_MAKEFILE} or {DEFAULT_SITE_MAKEFILE})",
    ),
    topic: str | None = typer.Option(
        None,
        "--topic",
        help=(
            "Name of the topic branch (eg. NCAA-31337). Required if it is already merged, "
            "otherwise the current branch is used."
        ),
    ),
    no_module: bool = typer.Option(
        False, "--no-module", help="Do not require a <module>.module file in the module repo."
    ),
    main_branch: str = typer.Option(
        DEFAULT_MAIN_BRANCH, "--main-branch", help="Main branch of both repos."
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print mutating git commands without running them."
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Tag a module release and publish it to the site makefile."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))

    console = RichConsole()
    config = resolve_config(
        module=module,
        site_repo=site_repo,
        site_makefile=site_makefile,
        topic=topic,
        main_branch=main_branch,
        no_module=no_module,
        dry_run=dry_run,
    )

    service = PushitService(
        config=config,
        bump=bump,
        console=console,
        confirm=_prompt,
        assume_yes=yes,
    )
    result = service.run()
    if isinstance(result, Err):
        print_error(result.error, console)
        raise typer.Exit(code=error_exit_code(result.error))

    if service.state == ReleaseState.PUBLISHED:
        console.success("Push completed successfully!")
        console.print("Your new version will build to the staging environment momentarily.")


app.command()(pushit)


def main() -> None:
    app()
