"""
Parsers for system report utilities: ``top``, ``free``, ``vm_stat``,
``uptime``, ``nproc`` and ``sysctl``.

``top`` is handled in two dialects: the procps ``%Cpu(s): ... id`` summary
line and the prose ``CPU usage: X% user, Y% sys, Z% idle`` line printed on
Darwin.
"""

from __future__ import annotations

import re

from sysprobe.errors import ParseFailure
from sysprobe.readings import MemoryReading

DEFAULT_PAGE_SIZE = 4096

_PROCPS_CPU_RE = re.compile(
    r"%?Cpu\(s\):\s*([0-9.]+)%?\s*us,\s*([0-9.]+)%?\s*sy,.*?([0-9.]+)%?\s*id"
)

VM_STAT_PAGE_KEYS = (
    "Pages free",
    "Pages active",
    "Pages inactive",
    "Pages speculative",
    "Pages wired down",
    "Pages throttled",
    "Pages purgeable",
    "File-backed pages",
    "Anonymous pages",
)
VM_STAT_FREE_KEYS = ("Pages free", "Pages speculative")


def _idle_from_prose(line: str) -> float | None:
    for part in line.split(","):
        fields = part.split()
        if "idle" not in fields:
            continue
        position = fields.index("idle")
        if position == 0:
            continue
        try:
            return float(fields[position - 1].rstrip("%"))
        except ValueError:
            continue
    return None


def parse_top_cpu_usage(output: str) -> float:
    """Return CPU usage percent (``100 - idle``) from ``top`` output."""
    for line in output.splitlines():
        if "Cpu(s)" in line or "%Cpu" in line:
            match = _PROCPS_CPU_RE.search(line)
            if match:
                try:
                    idle = float(match.group(3))
                except ValueError:
                    continue
                return 100.0 - idle
        if "CPU usage:" in line:
            idle = _idle_from_prose(line.split("CPU usage:", 1)[1])
            if idle is not None:
                return 100.0 - idle
    raise ParseFailure("could not parse CPU usage from top output")


def _optional_int(fields: list[str], index: int | None) -> int:
    if index is None or index >= len(fields):
        return 0
    try:
        return int(fields[index])
    except ValueError:
        return 0


def _buffer_columns(header: list[str]) -> tuple[int | None, int | None]:
    """Return data-row indexes for buffers and cached given the header row."""
    if "buff/cache" in header:
        # procps-ng folds buffers and cache into one column; its trailing
        # "available" column is not a cache figure.
        return header.index("buff/cache") + 1, None
    return 5, 6


def parse_free_output(output: str) -> MemoryReading:
    """Parse ``free -b`` output into an itemized :class:`MemoryReading`."""
    lines = output.splitlines()
    header: list[str] = []
    for line in lines:
        stripped = line.strip()
        if stripped.startswith("total"):
            header = stripped.split()
        if not stripped.startswith("Mem:"):
            continue

        fields = stripped.split()
        if len(fields) < 4:
            raise ParseFailure("invalid memory line format in free output")
        try:
            total, used, free = (int(value) for value in fields[1:4])
        except ValueError as exc:
            raise ParseFailure(f"failed to parse free output: {exc}") from exc
        if total <= 0:
            raise ParseFailure("total memory in free output must be positive")

        buffers_index, cached_index = _buffer_columns(header)
        return MemoryReading(
            usage_bytes=used,
            limit_bytes=total,
            free_bytes=free,
            buffer_bytes=_optional_int(fields, buffers_index),
            cached_bytes=_optional_int(fields, cached_index),
            itemized=True,
        )
    raise ParseFailure("memory information not found in free output")


def parse_page_size(output: str) -> int:
    try:
        size = int(output.strip())
    except ValueError as exc:
        raise ParseFailure(f"invalid page size: {output.strip()!r}") from exc
    if size <= 0:
        raise ParseFailure(f"page size must be positive, got {size}")
    return size


def parse_vm_stat(output: str, page_size: int = DEFAULT_PAGE_SIZE) -> MemoryReading:
    """
    Parse Darwin ``vm_stat`` page counters into a :class:`MemoryReading`.

    Total memory is the sum of every page category; free memory counts free
    and speculative pages.
    """
    stats: dict[str, int] = {}
    for line in output.splitlines():
        parts = line.split(":")
        if len(parts) != 2:
            continue
        key = parts[0].strip()
        value = parts[1].strip().rstrip(".")
        try:
            stats[key] = int(value)
        except ValueError:
            continue

    total_pages = sum(stats.get(key, 0) for key in VM_STAT_PAGE_KEYS)
    if total_pages <= 0:
        raise ParseFailure("no page statistics found in vm_stat output")
    free_pages = sum(stats.get(key, 0) for key in VM_STAT_FREE_KEYS)

    total = total_pages * page_size
    free = free_pages * page_size
    return MemoryReading(
        usage_bytes=total - free,
        limit_bytes=total,
        free_bytes=free,
        itemized=True,
    )


def parse_core_count(output: str) -> float:
    """Parse the single number printed by ``nproc`` or ``sysctl -n hw.ncpu``."""
    try:
        cores = float(output.strip())
    except ValueError as exc:
        raise ParseFailure(f"invalid CPU core count: {output.strip()!r}") from exc
    if cores <= 0:
        raise ParseFailure(f"invalid CPU core count: {cores}")
    return cores


def parse_load_average(output: str) -> str:
    """Return the raw load-average triple from ``uptime`` output."""
    for marker in ("load averages:", "load average:"):
        index = output.find(marker)
        if index != -1:
            return output[index + len(marker):].strip()
    raise ParseFailure("load average not found in uptime output")
