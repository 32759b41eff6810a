"""
Parsers for cgroup (container accounting) v1 and v2 files.

Limit parsers that may meet an "unbounded" sentinel take a zero-argument
callable for the host-wide total instead of reading it themselves, which
keeps them pure for a given input.
"""

from __future__ import annotations

from collections.abc import Callable

from sysprobe.errors import ParseFailure

UNBOUNDED_TOKEN = "max"
UNBOUNDED_CFS_QUOTA = -1
# v1 reports "no limit" as int64 max rounded down to the page size.
UNBOUNDED_MEMORY_THRESHOLD = 2**62 - 1


def _to_float(token: str, label: str) -> float:
    try:
        return float(token)
    except ValueError as exc:
        raise ParseFailure(f"invalid {label}: {token!r}") from exc


def _to_int(token: str, label: str) -> int:
    try:
        return int(token)
    except ValueError as exc:
        raise ParseFailure(f"invalid {label}: {token!r}") from exc


def parse_cpu_stat_usage_usec(content: str) -> float:
    """Return cumulative ``usage_usec`` from a v2 ``cpu.stat`` block."""
    for line in content.splitlines():
        parts = line.split()
        if len(parts) == 2 and parts[0] == "usage_usec":
            value = _to_float(parts[1], "usage_usec")
            if value < 0:
                raise ParseFailure(f"negative usage_usec: {parts[1]!r}")
            return value
    raise ParseFailure("usage_usec not found in cpu.stat")


def parse_cpuacct_usage_ns(content: str) -> float:
    """Return cumulative nanoseconds from a v1 ``cpuacct.usage`` file."""
    value = _to_float(content.strip(), "cpuacct.usage")
    if value < 0:
        raise ParseFailure(f"negative cpuacct.usage: {content.strip()!r}")
    return value


def _quota_over_period(quota: float, period_token: str) -> float:
    period = _to_float(period_token, "CPU period")
    if period <= 0:
        raise ParseFailure(f"CPU period must be positive, got {period_token!r}")
    if quota <= 0:
        raise ParseFailure(f"CPU quota must be positive, got {quota!r}")
    return quota / period


def parse_cpu_max(content: str, host_cores: Callable[[], float]) -> float:
    """Return the CPU limit in cores from a v2 ``cpu.max`` line."""
    parts = content.split()
    if len(parts) != 2:
        raise ParseFailure(f"invalid cpu.max format: {content.strip()!r}")
    quota_token, period_token = parts
    if quota_token == UNBOUNDED_TOKEN:
        return host_cores()
    return _quota_over_period(_to_float(quota_token, "CPU quota"), period_token)


def parse_cfs_limit(
    quota_content: str, period_content: str, host_cores: Callable[[], float]
) -> float:
    """Return the CPU limit in cores from v1 ``cfs_quota_us``/``cfs_period_us``."""
    quota = _to_float(quota_content.strip(), "CPU quota")
    if quota == UNBOUNDED_CFS_QUOTA:
        return host_cores()
    return _quota_over_period(quota, period_content.strip())


def parse_memory_bytes(content: str) -> int:
    value = _to_int(content.strip(), "memory value")
    if value < 0:
        raise ParseFailure(f"negative memory value: {content.strip()!r}")
    return value


def parse_memory_max(content: str, host_memory: Callable[[], int]) -> int:
    """Return the v2 ``memory.max`` limit, delegating ``max`` to the host total."""
    if content.strip() == UNBOUNDED_TOKEN:
        return host_memory()
    limit = parse_memory_bytes(content)
    if limit == 0:
        raise ParseFailure("memory.max is zero")
    return limit


def parse_v1_memory_limit(content: str, host_memory: Callable[[], int]) -> int:
    """Return the v1 ``memory.limit_in_bytes`` limit, treating huge values as unbounded."""
    limit = parse_memory_bytes(content)
    if limit > UNBOUNDED_MEMORY_THRESHOLD:
        return host_memory()
    if limit == 0:
        raise ParseFailure("memory.limit_in_bytes is zero")
    return limit
