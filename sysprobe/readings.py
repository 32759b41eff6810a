"""Raw readings produced by source probes before normalization."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class CpuReading:
    """CPU capacity and consumption as reported by a single source."""

    limit_cores: float
    used_cores: float
    load_average: str = ""


@dataclass(slots=True, frozen=True)
class MemoryReading:
    """
    Memory usage as reported by a single source.

    ``itemized`` is set by sources that break free memory down into
    free/buffers/cached; those report availability as the sum of the three.
    Sources that only know a usage/limit pair report ``limit - usage``.
    """

    usage_bytes: int
    limit_bytes: int
    free_bytes: int = 0
    buffer_bytes: int = 0
    cached_bytes: int = 0
    itemized: bool = False

    @property
    def available_bytes(self) -> int:
        if self.itemized:
            return self.free_bytes + self.buffer_bytes + self.cached_bytes
        return self.limit_bytes - self.usage_bytes
