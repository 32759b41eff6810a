"""
Container-accounting probes for cgroup v2 (primary) and v1 (secondary).

CPU usage counters in both versions are cumulative. In
:attr:`CpuRateMode.CUMULATIVE` mode a single reading is divided by
:data:`CUMULATIVE_DIVISOR`, an approximation kept for compatibility with
existing callers. :attr:`CpuRateMode.SAMPLED` reads the counter twice and
reports the real rate over the sampling window.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from sysprobe.errors import ParseFailure
from sysprobe.host.readers import read_text
from sysprobe.parsers.cgroup import (
    parse_cfs_limit,
    parse_cpu_max,
    parse_cpu_stat_usage_usec,
    parse_cpuacct_usage_ns,
    parse_memory_bytes,
    parse_memory_max,
    parse_v1_memory_limit,
)
from sysprobe.readings import CpuReading, MemoryReading

from .context import CpuRateMode, SourceContext
from .kernel import host_core_count, host_memory_total

logger = logging.getLogger(__name__)

V2_CPU_MAX = "cpu.max"
V2_CPU_STAT = "cpu.stat"
V2_MEMORY_MAX = "memory.max"
V2_MEMORY_CURRENT = "memory.current"

V1_CFS_QUOTA = "cpu,cpuacct/cpu.cfs_quota_us"
V1_CFS_PERIOD = "cpu,cpuacct/cpu.cfs_period_us"
V1_CPUACCT_USAGE = "cpuacct/cpuacct.usage"
V1_MEMORY_LIMIT = "memory/memory.limit_in_bytes"
V1_MEMORY_USAGE = "memory/memory.usage_in_bytes"

CUMULATIVE_DIVISOR = 100.0


def _used_cores(ctx: SourceContext, cpu_seconds: Callable[[], float]) -> float:
    if ctx.cpu_rate_mode is CpuRateMode.SAMPLED:
        first = cpu_seconds()
        started = ctx.clock()
        ctx.sleep(ctx.sample_interval)
        second = cpu_seconds()
        elapsed = ctx.clock() - started
        if elapsed <= 0:
            raise ParseFailure("CPU sampling window did not advance")
        return max(second - first, 0.0) / elapsed
    return cpu_seconds() / CUMULATIVE_DIVISOR


# --- cgroup v2 ----------------------------------------------------------- #
def cgroup_v2_cpu_limit(ctx: SourceContext) -> float:
    content = read_text(ctx.cgroup_path(V2_CPU_MAX))
    return parse_cpu_max(content, lambda: host_core_count(ctx))


def _v2_cpu_seconds(ctx: SourceContext) -> float:
    return parse_cpu_stat_usage_usec(read_text(ctx.cgroup_path(V2_CPU_STAT))) / 1e6


def cgroup_v2_cpu(ctx: SourceContext) -> CpuReading:
    limit = cgroup_v2_cpu_limit(ctx)
    used = _used_cores(ctx, lambda: _v2_cpu_seconds(ctx))
    return CpuReading(limit_cores=limit, used_cores=used)


def cgroup_v2_memory(ctx: SourceContext) -> MemoryReading:
    limit = parse_memory_max(
        read_text(ctx.cgroup_path(V2_MEMORY_MAX)), lambda: host_memory_total(ctx)
    )
    usage = parse_memory_bytes(read_text(ctx.cgroup_path(V2_MEMORY_CURRENT)))
    return MemoryReading(usage_bytes=usage, limit_bytes=limit)


# --- cgroup v1 ----------------------------------------------------------- #
def cgroup_v1_cpu_limit(ctx: SourceContext) -> float:
    quota = read_text(ctx.cgroup_path(V1_CFS_QUOTA))
    period = read_text(ctx.cgroup_path(V1_CFS_PERIOD))
    return parse_cfs_limit(quota, period, lambda: host_core_count(ctx))


def _v1_cpu_seconds(ctx: SourceContext) -> float:
    return parse_cpuacct_usage_ns(read_text(ctx.cgroup_path(V1_CPUACCT_USAGE))) / 1e9


def cgroup_v1_cpu(ctx: SourceContext) -> CpuReading:
    limit = cgroup_v1_cpu_limit(ctx)
    used = _used_cores(ctx, lambda: _v1_cpu_seconds(ctx))
    return CpuReading(limit_cores=limit, used_cores=used)


def cgroup_v1_memory(ctx: SourceContext) -> MemoryReading:
    limit = parse_v1_memory_limit(
        read_text(ctx.cgroup_path(V1_MEMORY_LIMIT)), lambda: host_memory_total(ctx)
    )
    usage = parse_memory_bytes(read_text(ctx.cgroup_path(V1_MEMORY_USAGE)))
    return MemoryReading(usage_bytes=usage, limit_bytes=limit)
