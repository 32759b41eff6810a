"""
Primitive file readers.

A missing file is an expected outcome outside containers, so failures are
raised as :class:`~sysprobe.errors.FileUnreadable` for callers to fall back
on rather than treated as fatal.
"""

from __future__ import annotations

import os
from pathlib import Path

from sysprobe.errors import FileUnreadable


def read_text(path: str | os.PathLike[str]) -> str:
    """Return the full contents of ``path``."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileUnreadable(str(path), str(exc)) from exc


def exists(path: str | os.PathLike[str]) -> bool:
    return Path(path).exists()
