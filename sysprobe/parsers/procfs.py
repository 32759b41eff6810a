"""Parsers for the kernel's ``/proc`` descriptor files."""

from __future__ import annotations

from sysprobe.errors import ParseFailure

PROC_STAT_MIN_FIELDS = 8


def parse_cpuinfo_core_count(content: str) -> int:
    """Count ``processor`` entries in ``/proc/cpuinfo``."""
    count = sum(1 for line in content.splitlines() if line.startswith("processor"))
    if count == 0:
        raise ParseFailure("no processors found in /proc/cpuinfo")
    return count


def parse_meminfo_total(content: str) -> int:
    """Return ``MemTotal`` from ``/proc/meminfo`` in bytes."""
    for line in content.splitlines():
        if not line.startswith("MemTotal:"):
            continue
        fields = line.split()
        if len(fields) < 2:
            break
        try:
            total = int(fields[1]) * 1024
        except ValueError as exc:
            raise ParseFailure(f"invalid MemTotal value: {fields[1]!r}") from exc
        if total <= 0:
            raise ParseFailure(f"MemTotal must be positive, got {fields[1]!r}")
        return total
    raise ParseFailure("MemTotal not found in /proc/meminfo")


def parse_proc_stat_cpu(content: str) -> float:
    """
    Return the busy fraction of the aggregate ``cpu`` line in ``/proc/stat``.

    The counters are cumulative since boot, so this is the average since boot
    rather than a current rate: ``(user + system) / (user + system + idle)``.
    """
    lines = content.splitlines()
    if not lines or not lines[0].startswith("cpu "):
        raise ParseFailure("invalid /proc/stat format")
    fields = lines[0].split()
    if len(fields) < PROC_STAT_MIN_FIELDS:
        raise ParseFailure("insufficient CPU fields in /proc/stat")
    try:
        user, system, idle = float(fields[1]), float(fields[3]), float(fields[4])
    except ValueError as exc:
        raise ParseFailure(f"invalid /proc/stat counters: {lines[0]!r}") from exc
    total = user + system + idle
    if total <= 0 or min(user, system, idle) < 0:
        raise ParseFailure(f"invalid /proc/stat counters: {lines[0]!r}")
    return (user + system) / total
