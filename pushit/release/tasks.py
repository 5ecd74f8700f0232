"""The two halves of a release.

``ModuleReleaseTask`` runs on a worker thread: it returns the module repo to
its main branch, tags the new version and pushes tags. ``SitePublishTask`` runs
in the foreground: it updates the site repo, writes and commits the manifest,
then blocks on the module task's future before pushing. The site push
therefore never happens unless the tag push already succeeded.
"""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass
from pathlib import Path

from pushit.core.result import Err, Ok, Result
from pushit.git.repository import Repository
from pushit.output.console import ConsoleProtocol, Style
from pushit.release.errors import PushitError, git_failed
from pushit.release.manifest import Manifest, write_manifest

type ReleaseOutcome = Result[str, PushitError]


@dataclass(frozen=True, slots=True)
class ModuleReleaseTask:
    repo: Repository
    tag: str
    topic: str
    console: ConsoleProtocol

    def run(self) -> ReleaseOutcome:
        """Tag and push the module; returns the pushed tag."""
        on_topic = self.topic != self.repo.main_branch

        for step in (self.repo.checkout_main, self.repo.fast_forward_main):
            result = step()
            if isinstance(result, Err):
                return Err(git_failed(result.error))

        if on_topic:
            # Assumed merged upstream; git's own -d check is the only guard.
            deleted = self.repo.delete_branch(self.topic)
            if isinstance(deleted, Err):
                return Err(git_failed(deleted.error))
            self.console.print(
                f"Module repo cleanup: local topic branch '{self.topic}' was deleted.", Style.DIM
            )

        for step in (lambda: self.repo.create_tag(self.tag), self.repo.push_tags):
            result = step()
            if isinstance(result, Err):
                return Err(git_failed(result.error))

        self.console.success(f"tagged and pushed {self.tag}")
        return Ok(self.tag)


@dataclass(frozen=True, slots=True)
class SitePublishTask:
    repo: Repository
    makefile: Path
    console: ConsoleProtocol
    dry_run: bool = False

    def update(self) -> Result[None, PushitError]:
        """Check out the main branch and fast-forward it from origin."""
        for step in (self.repo.checkout_main, self.repo.pull_main):
            result = step()
            if isinstance(result, Err):
                return Err(git_failed(result.error))
        return Ok(None)

    def publish(
        self,
        manifest: Manifest,
        *,
        message: str,
        released: Future[ReleaseOutcome],
    ) -> Result[None, PushitError]:
        """Write and commit the manifest, wait for ``released``, then push.

        When the module release failed its error is returned and nothing is
        pushed; the local site commit is left in place.
        """
        if self.dry_run:
            self.console.print(f"would write {self.makefile}", Style.DIM)
        else:
            written = write_manifest(self.makefile, manifest)
            if isinstance(written, Err):
                return written

        committed = self.repo.commit_file(str(self.makefile.relative_to(self.repo.path)), message)
        if isinstance(committed, Err):
            return Err(git_failed(committed.error))
        self.console.print(message)
        self.console.print("`-- committed changes with message", Style.DIM)

        outcome = released.result()
        if isinstance(outcome, Err):
            return outcome

        pushed = self.repo.push_main()
        if isinstance(pushed, Err):
            return Err(git_failed(pushed.error))
        return Ok(None)
