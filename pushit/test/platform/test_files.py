from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from pushit.platform.files import replace_text


def test_replace_text_keeps_line_endings(tmp_path: Path) -> None:
    path = tmp_path / "barcelona.make"
    path.write_bytes(b"core = 7.x\r\n")

    replace_text(path, 'core = 7.x\r\nprojects[foo][download][tag] = "v1.3.0"\r\n')

    assert path.read_bytes() == b'core = 7.x\r\nprojects[foo][download][tag] = "v1.3.0"\r\n'


def test_replace_text_keeps_permissions(tmp_path: Path) -> None:
    path = tmp_path / "barcelona.make"
    path.write_text("old\n", encoding="utf-8")
    path.chmod(0o640)

    replace_text(path, "new\n")

    assert path.read_text(encoding="utf-8") == "new\n"
    assert stat.S_IMODE(path.stat().st_mode) == 0o640


def test_replace_text_cleans_temp_file_on_replace_failure(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    path = tmp_path / "barcelona.make"
    path.write_text("old\n", encoding="utf-8")

    def fail_replace(_src: Path, _dst: Path) -> None:
        raise OSError("replace failed")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(OSError, match="replace failed"):
        replace_text(path, "new\n")

    assert path.read_text(encoding="utf-8") == "old\n"
    assert list(tmp_path.glob(".barcelona.make.*.tmp")) == []
