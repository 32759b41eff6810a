"""
Pure parsers turning raw file or command output into typed values.

Every parser raises :class:`~sysprobe.errors.ParseFailure` on input it does
not recognize; none of them return a zero-valued success.
"""

from .cgroup import (
    UNBOUNDED_MEMORY_THRESHOLD,
    parse_cfs_limit,
    parse_cpu_max,
    parse_cpu_stat_usage_usec,
    parse_cpuacct_usage_ns,
    parse_memory_bytes,
    parse_memory_max,
    parse_v1_memory_limit,
)
from .procfs import parse_cpuinfo_core_count, parse_meminfo_total, parse_proc_stat_cpu
from .reports import (
    DEFAULT_PAGE_SIZE,
    parse_core_count,
    parse_free_output,
    parse_load_average,
    parse_page_size,
    parse_top_cpu_usage,
    parse_vm_stat,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "UNBOUNDED_MEMORY_THRESHOLD",
    "parse_cfs_limit",
    "parse_core_count",
    "parse_cpu_max",
    "parse_cpu_stat_usage_usec",
    "parse_cpuacct_usage_ns",
    "parse_cpuinfo_core_count",
    "parse_free_output",
    "parse_load_average",
    "parse_memory_bytes",
    "parse_memory_max",
    "parse_meminfo_total",
    "parse_page_size",
    "parse_proc_stat_cpu",
    "parse_top_cpu_usage",
    "parse_v1_memory_limit",
    "parse_vm_stat",
]
