from __future__ import annotations

from pathlib import Path

import pytest

from sysprobe.errors import FileUnreadable, SourceUnavailable
from sysprobe.host.readers import exists, read_text


def test_read_text_returns_full_contents(tmp_path: Path) -> None:
    target = tmp_path / "memory.max"
    target.write_text("1073741824\n")

    assert read_text(target) == "1073741824\n"
    assert read_text(str(target)) == "1073741824\n"


def test_read_text_missing_file(tmp_path: Path) -> None:
    missing = tmp_path / "nonexistent"

    with pytest.raises(FileUnreadable) as excinfo:
        read_text(missing)

    assert isinstance(excinfo.value, SourceUnavailable)
    assert excinfo.value.path == str(missing)
    assert str(excinfo.value).startswith(f"failed to read file {missing}")


def test_read_text_directory_is_unreadable(tmp_path: Path) -> None:
    with pytest.raises(FileUnreadable):
        read_text(tmp_path)


def test_exists(tmp_path: Path) -> None:
    (tmp_path / "cpu.max").write_text("max 100000\n")

    assert exists(tmp_path / "cpu.max")
    assert not exists(tmp_path / "cpu.stat")
