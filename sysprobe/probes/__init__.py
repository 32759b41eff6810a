"""
Source probes: one function per measurement source.

Each probe takes a :class:`SourceContext` and either returns a reading or
raises a :class:`~sysprobe.errors.SourceUnavailable` subclass.
"""

from .cgroup import cgroup_v1_cpu, cgroup_v1_memory, cgroup_v2_cpu, cgroup_v2_memory
from .command import (
    darwin_command_cpu,
    darwin_command_memory,
    linux_command_cpu,
    linux_command_memory,
)
from .context import CpuRateMode, SourceContext
from .kernel import host_core_count, host_memory_total, kernel_cpu

__all__ = [
    "CpuRateMode",
    "SourceContext",
    "cgroup_v1_cpu",
    "cgroup_v1_memory",
    "cgroup_v2_cpu",
    "cgroup_v2_memory",
    "darwin_command_cpu",
    "darwin_command_memory",
    "host_core_count",
    "host_memory_total",
    "kernel_cpu",
    "linux_command_cpu",
    "linux_command_memory",
]
