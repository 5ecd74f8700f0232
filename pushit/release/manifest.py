"""Site manifest (drush make file) rewriting.

The manifest pins each module to a tag with a line of the form::

    projects[<module>][download][tag] = "v<version>"

A release rewrites exactly one such line: the first one naming the module at
its current tag.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from pushit.core.result import Err, Ok, Result
from pushit.platform.files import replace_text
from pushit.release.errors import PushitError


@dataclass(frozen=True, slots=True)
class Manifest:
    """Manifest content split into lines (without line terminators)."""

    lines: tuple[str, ...]
    trailing_newline: bool = True

    @classmethod
    def from_text(cls, text: str) -> Manifest:
        trailing = text.endswith("\n")
        body = text[:-1] if trailing else text
        return cls(lines=tuple(body.split("\n")) if text else (), trailing_newline=trailing)

    def render(self) -> str:
        text = "\n".join(self.lines)
        return text + "\n" if self.trailing_newline else text


@dataclass(frozen=True, slots=True)
class ManifestRewrite:
    lines: tuple[str, ...]
    replaced: bool


def entry_key(module: str, version: str) -> str:
    return f'projects[{module}][download][tag] = "v{version}"'


def rewrite_lines(
    lines: Sequence[str], *, module: str, new_version: str, current_version: str
) -> ManifestRewrite:
    """Replace ``current_version`` with ``new_version`` on the module's entry line.

    Only the first line containing the entry key is touched; when no line
    matches, the input lines are returned unchanged with ``replaced=False``.
    """
    key = entry_key(module, current_version)
    current = current_version.strip()
    out: list[str] = []
    replaced = False

    for line in lines:
        if not replaced and key in line:
            out.append(line.replace(current, new_version))
            replaced = True
        else:
            out.append(line)

    return ManifestRewrite(lines=tuple(out), replaced=replaced)


def read_manifest(path: Path) -> Result[Manifest, PushitError]:
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            PushitError(
                kind="manifest_read_failed",
                message=f"could not read makefile {path.name}: {e}",
                hint=str(path),
            )
        )
    return Ok(Manifest.from_text(text))


def _entry_not_found(module: str, version: str) -> PushitError:
    return PushitError(
        kind="manifest_entry_not_found",
        message=(
            f"either the module '{module}' or latest tag 'v{version}' was not found in the makefile"
        ),
        hint="Make sure your site repo is up-to-date before using this utility.",
    )


def check_entry(path: Path, *, module: str, current_version: str) -> Result[None, PushitError]:
    """Confirm the manifest pins ``module`` at ``current_version`` (read-only)."""
    manifest = read_manifest(path)
    if isinstance(manifest, Err):
        return manifest

    key = entry_key(module, current_version)
    if not any(key in line for line in manifest.value.lines):
        return Err(_entry_not_found(module, current_version))
    return Ok(None)


def rewrite_manifest(
    path: Path, *, module: str, new_version: str, current_version: str
) -> Result[Manifest, PushitError]:
    manifest = read_manifest(path)
    if isinstance(manifest, Err):
        return manifest

    rewrite = rewrite_lines(
        manifest.value.lines,
        module=module,
        new_version=new_version,
        current_version=current_version,
    )
    if not rewrite.replaced:
        return Err(_entry_not_found(module, current_version))

    return Ok(Manifest(lines=rewrite.lines, trailing_newline=manifest.value.trailing_newline))


def write_manifest(path: Path, manifest: Manifest) -> Result[None, PushitError]:
    """Overwrite ``path`` with the full manifest."""
    try:
        replace_text(path, manifest.render())
    except OSError as e:
        return Err(
            PushitError(
                kind="manifest_write_failed",
                message=f"could not write new makefile: {e}",
                hint="Check permissions and try again.",
            )
        )
    return Ok(None)
