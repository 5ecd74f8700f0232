"""Release orchestration.

A run moves through ``ReleaseState`` one step at a time::

    init -> module_resolved -> makefile_located -> version_resolved
         -> awaiting_confirmation -> releasing -> published
                                  \\-> aborted

Any step error ends the run in ``failed``. No repository is touched before
the operator confirms; after that the run is all-or-nothing with no rollback.
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from pushit.core.config import PushitConfig
from pushit.core.result import Err, Ok, Result
from pushit.git.repository import Repository
from pushit.git.runner import GitRunner
from pushit.output.console import ConsoleProtocol, Style
from pushit.release.errors import PushitError
from pushit.release.fsm import FINISH, StepOutcome, advance, run_state_machine
from pushit.release.locate import locate_makefile, resolve_module
from pushit.release.manifest import check_entry, rewrite_manifest
from pushit.release.model import BumpKind, ModuleRef, VersionPlan, commit_message
from pushit.release.tasks import ModuleReleaseTask, ReleaseOutcome, SitePublishTask
from pushit.release.versions import resolve_versions

AFFIRMATIVE = "y"
CONFIRM_PROMPT = "Are you sure you want to tag and push this new version to staging? (y/n)"

Confirm = Callable[[str], str]


class ReleaseState(str, Enum):
    INIT = "init"
    MODULE_RESOLVED = "module_resolved"
    MAKEFILE_LOCATED = "makefile_located"
    VERSION_RESOLVED = "version_resolved"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    RELEASING = "releasing"
    PUBLISHED = "published"
    ABORTED = "aborted"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class PushitSession:
    state: ReleaseState = ReleaseState.INIT
    module: ModuleRef | None = None
    makefile: Path | None = None
    plan: VersionPlan | None = None


class PushitService:
    """Run one release of one module into the site manifest.

    Attributes:
        history: Every state the run entered, in order (starting with init).
    """

    def __init__(
        self,
        *,
        config: PushitConfig,
        bump: BumpKind,
        console: ConsoleProtocol,
        confirm: Confirm,
        assume_yes: bool = False,
        runner: GitRunner | None = None,
    ) -> None:
        self._config = config
        self._bump = bump
        self._console = console
        self._confirm = confirm
        self._assume_yes = assume_yes
        self._runner = runner or GitRunner(console=console, dry_run=config.dry_run)
        self.history: list[ReleaseState] = [ReleaseState.INIT]

    @property
    def state(self) -> ReleaseState:
        return self.history[-1]

    def run(self) -> Result[PushitSession, PushitError]:
        result = run_state_machine(
            initial_state=PushitSession(),
            get_step=lambda s: s.state,
            handlers={
                ReleaseState.INIT: self._resolve_module,
                ReleaseState.MODULE_RESOLVED: self._locate_makefile,
                ReleaseState.MAKEFILE_LOCATED: self._resolve_versions,
                ReleaseState.VERSION_RESOLVED: self._preflight_manifest,
                ReleaseState.AWAITING_CONFIRMATION: self._await_confirmation,
                ReleaseState.RELEASING: self._release,
                ReleaseState.PUBLISHED: _finish,
                ReleaseState.ABORTED: _finish,
            },
            on_advance=lambda s: self.history.append(s.state),
        )
        if isinstance(result, Err):
            self.history.append(ReleaseState.FAILED)
        return result

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def _resolve_module(self, session: PushitSession) -> Result[StepOutcome[PushitSession], PushitError]:
        module = resolve_module(self._config)
        if isinstance(module, Err):
            return module
        self._console.print(f"Module repo: {module.value.name}")
        return Ok(advance(replace(session, state=ReleaseState.MODULE_RESOLVED, module=module.value)))

    def _locate_makefile(self, session: PushitSession) -> Result[StepOutcome[PushitSession], PushitError]:
        makefile = locate_makefile(self._config)
        if isinstance(makefile, Err):
            return makefile
        return Ok(
            advance(replace(session, state=ReleaseState.MAKEFILE_LOCATED, makefile=makefile.value))
        )

    def _resolve_versions(self, session: PushitSession) -> Result[StepOutcome[PushitSession], PushitError]:
        module = _require(session.module)
        plan = resolve_versions(
            repo=self._module_repo(module),
            bump=self._bump,
            topic=self._config.topic,
            console=self._console,
        )
        if isinstance(plan, Err):
            return plan
        return Ok(advance(replace(session, state=ReleaseState.VERSION_RESOLVED, plan=plan.value)))

    def _preflight_manifest(
        self, session: PushitSession
    ) -> Result[StepOutcome[PushitSession], PushitError]:
        plan = _require(session.plan)
        checked = check_entry(
            _require(session.makefile),
            module=_require(session.module).name,
            current_version=plan.current,
        )
        if isinstance(checked, Err):
            return checked
        return Ok(advance(replace(session, state=ReleaseState.AWAITING_CONFIRMATION)))

    def _await_confirmation(
        self, session: PushitSession
    ) -> Result[StepOutcome[PushitSession], PushitError]:
        plan = _require(session.plan)
        self._console.print(f"New version: {plan.new}", Style.SUCCESS)

        if not self._assume_yes:
            answer = self._confirm(CONFIRM_PROMPT)
            if answer.strip() != AFFIRMATIVE:
                self._console.print("Aborting...", Style.WARNING)
                return Ok(advance(replace(session, state=ReleaseState.ABORTED)))

        return Ok(advance(replace(session, state=ReleaseState.RELEASING)))

    def _release(self, session: PushitSession) -> Result[StepOutcome[PushitSession], PushitError]:
        module = _require(session.module)
        plan = _require(session.plan)

        release_task = ModuleReleaseTask(
            repo=self._module_repo(module),
            tag=plan.tag,
            topic=plan.topic,
            console=self._console,
        )
        site_task = SitePublishTask(
            repo=Repository(
                self._config.site_repo,
                runner=self._runner,
                label="site",
                main_branch=self._config.main_branch,
            ),
            makefile=_require(session.makefile),
            console=self._console,
            dry_run=self._config.dry_run,
        )

        # Leaving the executor waits for the module task, so no git command
        # outlives this step even when the site side fails first.
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="pushit-module") as executor:
            released = executor.submit(release_task.run)
            published = self._publish(site_task, module=module, plan=plan, released=released)

        if isinstance(published, Err):
            outcome = released.result()
            if isinstance(outcome, Err) and outcome.error is not published.error:
                self._console.error(f"module release also failed: {outcome.error.message}")
            return published

        return Ok(advance(replace(session, state=ReleaseState.PUBLISHED)))

    def _publish(
        self,
        site_task: SitePublishTask,
        *,
        module: ModuleRef,
        plan: VersionPlan,
        released: Future[ReleaseOutcome],
    ) -> Result[None, PushitError]:
        updated = site_task.update()
        if isinstance(updated, Err):
            return updated

        manifest = rewrite_manifest(
            site_task.makefile,
            module=module.name,
            new_version=plan.new,
            current_version=plan.current,
        )
        if isinstance(manifest, Err):
            return manifest

        message = commit_message(topic=plan.topic, module=module.name, version=plan.new)
        return site_task.publish(manifest.value, message=message, released=released)

    def _module_repo(self, module: ModuleRef) -> Repository:
        return Repository(
            module.path,
            runner=self._runner,
            label=module.name,
            main_branch=self._config.main_branch,
        )


def _finish(_: PushitSession) -> Result[StepOutcome[PushitSession], PushitError]:
    return Ok(FINISH)


def _require[T](value: T | None) -> T:
    if value is None:
        raise AssertionError("release step reached without its prerequisite")
    return value
