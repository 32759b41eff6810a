"""
Probes built on OS report utilities.

Linux uses ``nproc``/``top -b``/``free -b``; Darwin uses ``sysctl``/
``top -l``/``vm_stat``. The load average is best effort: a missing or
unparseable ``uptime`` leaves it empty without failing the probe.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sysprobe.errors import CommandUnavailable, ParseFailure, SourceUnavailable
from sysprobe.host.commands import (
    LOAD_MONITOR_COMMANDS,
    MEMORY_MONITOR_COMMANDS,
    UPTIME_COMMAND,
)
from sysprobe.host.family import OsFamily
from sysprobe.parsers.reports import (
    DEFAULT_PAGE_SIZE,
    parse_core_count,
    parse_free_output,
    parse_load_average,
    parse_page_size,
    parse_top_cpu_usage,
    parse_vm_stat,
)
from sysprobe.readings import CpuReading, MemoryReading

from .context import SourceContext
from .kernel import host_core_count

logger = logging.getLogger(__name__)

NPROC_COMMAND = ("nproc",)
DARWIN_NCPU_COMMAND = ("sysctl", "-n", "hw.ncpu")
DARWIN_PAGESIZE_COMMAND = ("sysctl", "-n", "hw.pagesize")


def load_average(ctx: SourceContext) -> str:
    try:
        return parse_load_average(ctx.runner(UPTIME_COMMAND))
    except SourceUnavailable as exc:
        logger.debug(f"Load average unavailable: {exc}")
        return ""


def _cpu_from_top(ctx: SourceContext, cores: float, top_command: Sequence[str]) -> CpuReading:
    usage = parse_top_cpu_usage(ctx.runner(top_command))
    if not 0.0 <= usage <= 100.0:
        raise ParseFailure(f"invalid CPU usage percent: {usage}")
    return CpuReading(
        limit_cores=cores,
        used_cores=usage / 100.0 * cores,
        load_average=load_average(ctx),
    )


# --- Linux --------------------------------------------------------------- #
def linux_core_count(ctx: SourceContext) -> float:
    """Cores from ``nproc``, or ``/proc/cpuinfo`` when ``nproc`` is missing."""
    try:
        output = ctx.runner(NPROC_COMMAND)
    except CommandUnavailable as exc:
        logger.debug(f"nproc unavailable, counting /proc/cpuinfo entries: {exc}")
        return host_core_count(ctx)
    return parse_core_count(output)


def linux_command_cpu(ctx: SourceContext) -> CpuReading:
    cores = linux_core_count(ctx)
    return _cpu_from_top(ctx, cores, LOAD_MONITOR_COMMANDS[OsFamily.LINUX])


def linux_command_memory(ctx: SourceContext) -> MemoryReading:
    return parse_free_output(ctx.runner(MEMORY_MONITOR_COMMANDS[OsFamily.LINUX]))


# --- Darwin -------------------------------------------------------------- #
def darwin_core_count(ctx: SourceContext) -> float:
    return parse_core_count(ctx.runner(DARWIN_NCPU_COMMAND))


def darwin_page_size(ctx: SourceContext) -> int:
    try:
        return parse_page_size(ctx.runner(DARWIN_PAGESIZE_COMMAND))
    except SourceUnavailable as exc:
        logger.debug(f"Page size unavailable, assuming {DEFAULT_PAGE_SIZE}: {exc}")
        return DEFAULT_PAGE_SIZE


def darwin_command_cpu(ctx: SourceContext) -> CpuReading:
    cores = darwin_core_count(ctx)
    return _cpu_from_top(ctx, cores, LOAD_MONITOR_COMMANDS[OsFamily.DARWIN])


def darwin_command_memory(ctx: SourceContext) -> MemoryReading:
    output = ctx.runner(MEMORY_MONITOR_COMMANDS[OsFamily.DARWIN])
    return parse_vm_stat(output, page_size=darwin_page_size(ctx))
