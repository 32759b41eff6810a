"""Operating-system family detection, resolved once per resolver."""

from __future__ import annotations

import sys
from enum import Enum


class OsFamily(str, Enum):
    """Supported host families."""

    LINUX = "linux"
    DARWIN = "darwin"

    @property
    def has_container_accounting(self) -> bool:
        return self is OsFamily.LINUX

    @classmethod
    def detect(cls, platform_name: str | None = None) -> OsFamily:
        """Map a ``sys.platform`` value to a family; unknown Unixes count as Linux."""
        name = (platform_name if platform_name is not None else sys.platform).lower()
        if name.startswith("darwin"):
            return cls.DARWIN
        return cls.LINUX

    @classmethod
    def from_setting(cls, value: str) -> OsFamily:
        """Resolve a configured family name, auto-detecting when blank."""
        if not value:
            return cls.detect()
        try:
            return cls(value.lower())
        except ValueError as exc:
            raise ValueError(f"Unsupported OS family: {value}") from exc
