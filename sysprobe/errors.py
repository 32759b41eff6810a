"""
Failure taxonomy shared by readers, probes, and the resolution engine.

Probe-level failures all derive from :class:`SourceUnavailable` so the
engine can treat a missing file, a missing command, and unparseable output
as the same "try the next source" outcome.
"""

from __future__ import annotations

from collections.abc import Sequence


class SysprobeError(Exception):
    """Base class for every error raised by sysprobe."""


class SourceUnavailable(SysprobeError):
    """A single measurement source could not produce a value."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class FileUnreadable(SourceUnavailable):
    """File is missing or cannot be read by this process."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"failed to read file {path}: {reason}", source=path)
        self.path = path


class CommandUnavailable(SourceUnavailable):
    """Executable is missing or exited with a non-zero status."""

    def __init__(self, command: Sequence[str], reason: str) -> None:
        joined = " ".join(command)
        super().__init__(f"command execution failed ({joined}): {reason}", source=joined)
        self.command = tuple(command)


class ParseFailure(SourceUnavailable):
    """Output was present but did not match any known format."""


class MetricUnavailable(SysprobeError):
    """Every source for a metric was exhausted without a usable value."""

    def __init__(self, metric: str, failures: Sequence[str] = ()) -> None:
        detail = "; ".join(failures) if failures else "no sources configured"
        super().__init__(f"{metric} information not found ({detail})")
        self.metric = metric
        self.failures = list(failures)
