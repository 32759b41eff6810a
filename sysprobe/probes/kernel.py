"""Last-resort probes reading raw kernel interfaces under procfs."""

from __future__ import annotations

from sysprobe.host.readers import read_text
from sysprobe.parsers.procfs import (
    parse_cpuinfo_core_count,
    parse_meminfo_total,
    parse_proc_stat_cpu,
)
from sysprobe.readings import CpuReading

from .context import SourceContext

CPUINFO = "cpuinfo"
MEMINFO = "meminfo"
STAT = "stat"


def host_core_count(ctx: SourceContext) -> float:
    """Number of processors listed in ``/proc/cpuinfo``."""
    return float(parse_cpuinfo_core_count(read_text(ctx.proc_path(CPUINFO))))


def host_memory_total(ctx: SourceContext) -> int:
    """Total system memory from ``/proc/meminfo`` in bytes."""
    return parse_meminfo_total(read_text(ctx.proc_path(MEMINFO)))


def kernel_cpu(ctx: SourceContext) -> CpuReading:
    """Host-wide CPU reading from ``/proc/stat`` scaled by the processor count."""
    busy = parse_proc_stat_cpu(read_text(ctx.proc_path(STAT)))
    cores = host_core_count(ctx)
    return CpuReading(limit_cores=cores, used_cores=busy * cores)
