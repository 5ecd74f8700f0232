"""Work out the version being released.

The module repo is fetched, the current branch is checked against the topic
the operator named, and the latest tag on the main branch is bumped.
"""

from __future__ import annotations

from pushit.core.result import Err, Ok, Result
from pushit.git.repository import Repository
from pushit.output.console import ConsoleProtocol, Style
from pushit.release.errors import PushitError, git_failed
from pushit.release.model import BumpKind, VersionPlan
from pushit.release.semver import parse_version, strip_tag_prefix


def resolve_topic(*, branch: str, topic: str, main_branch: str) -> Result[str, PushitError]:
    """Return the topic branch being released.

    An empty ``topic`` means "use the current branch", which is only possible
    while the topic branch is still checked out.
    """
    if branch == main_branch and not topic:
        return Err(
            PushitError(
                kind="topic_mismatch",
                message=(
                    "if you have already merged your branch, you must provide it via the "
                    "--topic option"
                ),
                hint="Otherwise, checkout the branch and re-run.",
            )
        )

    if topic and branch != topic and branch != main_branch:
        return Err(
            PushitError(
                kind="topic_mismatch",
                message=(
                    "the branch supplied via --topic does not match the current module branch "
                    f"({topic} != {branch})"
                ),
            )
        )

    return Ok(topic or branch)


def bump_version(latest: str, bump: BumpKind) -> Result[str, PushitError]:
    version = parse_version(latest)
    if version is None:
        return Err(
            PushitError(
                kind="invalid_tag",
                message=f"latest tag is not a MAJOR.MINOR.PATCH version: v{latest}",
                hint="Tag the main branch with vMAJOR.MINOR.PATCH before releasing.",
            )
        )
    return Ok(str(version.bump(bump)))


def resolve_versions(
    *,
    repo: Repository,
    bump: BumpKind,
    topic: str,
    console: ConsoleProtocol,
) -> Result[VersionPlan, PushitError]:
    """Fetch the module repo and compute the next version.

    Returns:
        Ok(VersionPlan) with the current version, the bumped version and the
        resolved topic; Err(PushitError) otherwise.
    """
    fetched = repo.fetch()
    if isinstance(fetched, Err):
        return Err(git_failed(fetched.error))
    console.print("`-- updated module repo", Style.DIM)

    branch = repo.current_branch()
    if isinstance(branch, Err):
        return Err(git_failed(branch.error))

    resolved_topic = resolve_topic(branch=branch.value, topic=topic, main_branch=repo.main_branch)
    if isinstance(resolved_topic, Err):
        return resolved_topic

    tag = repo.latest_tag()
    if isinstance(tag, Err):
        return Err(git_failed(tag.error))

    latest = strip_tag_prefix(tag.value)
    console.print(f"Current version: {latest}")

    new_version = bump_version(latest, bump)
    if isinstance(new_version, Err):
        return new_version

    return Ok(VersionPlan(current=latest, new=new_version.value, topic=resolved_topic.value))
