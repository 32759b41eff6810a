"""
Resolution engine: ordered probe tables per OS family.

Each family registers one ordered tuple of probes per metric. CPU and memory
are resolved independently through :func:`try_in_order`; the first entry of
a family's table is its primary source, and an answer from any later entry
marks the snapshot as having used a fallback.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Generic, TypeVar

from sysprobe.config import SysprobeConfig, get_config
from sysprobe.host import commands
from sysprobe.host.family import OsFamily
from sysprobe.probes import (
    CpuRateMode,
    SourceContext,
    cgroup_v1_cpu,
    cgroup_v1_memory,
    cgroup_v2_cpu,
    cgroup_v2_memory,
    darwin_command_cpu,
    darwin_command_memory,
    kernel_cpu,
    linux_command_cpu,
    linux_command_memory,
)
from sysprobe.readings import CpuReading, MemoryReading

from .fallback import try_in_order
from .models import CpuMetrics, MemoryMetrics, ResolutionMethod, ResourceSnapshot
from .normalize import build_cpu_metrics, build_memory_metrics

logger = logging.getLogger(__name__)

R = TypeVar("R")
M = TypeVar("M")


@dataclass(slots=True, frozen=True)
class ProbeEntry(Generic[R]):
    """A named probe and the tier it reports when it answers."""

    name: str
    tier: ResolutionMethod
    probe: Callable[[SourceContext], R]


@dataclass(slots=True, frozen=True)
class ProbeTable:
    """Ordered CPU and memory probes for one OS family."""

    cpu: tuple[ProbeEntry[CpuReading], ...]
    memory: tuple[ProbeEntry[MemoryReading], ...]

    @property
    def command_cpu(self) -> ProbeEntry[CpuReading]:
        return _command_entry(self.cpu, "cpu")

    @property
    def command_memory(self) -> ProbeEntry[MemoryReading]:
        return _command_entry(self.memory, "memory")


_CONTAINER_TIERS = frozenset(
    {ResolutionMethod.PRIMARY_CONTAINER, ResolutionMethod.SECONDARY_CONTAINER}
)


def _check_container_tiers(family: OsFamily, table: ProbeTable) -> None:
    """Reject container-accounting probes for a family that has none."""
    if family.has_container_accounting:
        return
    for entry in (*table.cpu, *table.memory):
        if entry.tier in _CONTAINER_TIERS:
            raise ValueError(
                f"{family.value} has no container accounting; "
                f"probe {entry.name} cannot report {entry.tier.value}"
            )


def _command_entry(entries: tuple[ProbeEntry[R], ...], metric: str) -> ProbeEntry[R]:
    for entry in entries:
        if entry.tier is ResolutionMethod.COMMAND_BASED:
            return entry
    raise LookupError(f"No command-based {metric} probe registered")


DEFAULT_PROBE_TABLES: Mapping[OsFamily, ProbeTable] = {
    OsFamily.LINUX: ProbeTable(
        cpu=(
            ProbeEntry("cgroup_v2", ResolutionMethod.PRIMARY_CONTAINER, cgroup_v2_cpu),
            ProbeEntry("cgroup_v1", ResolutionMethod.SECONDARY_CONTAINER, cgroup_v1_cpu),
            ProbeEntry("command", ResolutionMethod.COMMAND_BASED, linux_command_cpu),
            # Raw kernel counters report under the command tier.
            ProbeEntry("kernel", ResolutionMethod.COMMAND_BASED, kernel_cpu),
        ),
        memory=(
            ProbeEntry("cgroup_v2", ResolutionMethod.PRIMARY_CONTAINER, cgroup_v2_memory),
            ProbeEntry("cgroup_v1", ResolutionMethod.SECONDARY_CONTAINER, cgroup_v1_memory),
            ProbeEntry("command", ResolutionMethod.COMMAND_BASED, linux_command_memory),
        ),
    ),
    OsFamily.DARWIN: ProbeTable(
        cpu=(ProbeEntry("command", ResolutionMethod.COMMAND_BASED, darwin_command_cpu),),
        memory=(
            ProbeEntry("command", ResolutionMethod.COMMAND_BASED, darwin_command_memory),
        ),
    ),
}


@dataclass(slots=True, frozen=True)
class MetricResolution(Generic[M]):
    """Outcome of one metric's fallback chain."""

    metrics: M
    tier: ResolutionMethod
    used_fallback: bool
    source: str


def combine_methods(cpu: ResolutionMethod, memory: ResolutionMethod) -> ResolutionMethod:
    """Snapshot-level method: the shared tier, or ``MIXED`` when they differ."""
    if cpu is memory:
        return cpu
    return ResolutionMethod.MIXED


class ResourceResolver:
    """
    Resolve CPU and memory snapshots for a fixed OS family.

    The resolver keeps no state between calls, so a single instance may be
    shared across threads.
    """

    def __init__(
        self,
        family: OsFamily,
        *,
        context: SourceContext | None = None,
        probe_tables: Mapping[OsFamily, ProbeTable] | None = None,
    ) -> None:
        tables = probe_tables if probe_tables is not None else DEFAULT_PROBE_TABLES
        if family not in tables:
            raise ValueError(f"No probe table registered for {family.value}")
        _check_container_tiers(family, tables[family])
        self.family = family
        self.context = context if context is not None else SourceContext()
        self.table = tables[family]

    # --- Snapshots -------------------------------------------------------- #
    def resolve_snapshot(self) -> ResourceSnapshot:
        """Run both fallback chains; raises ``MetricUnavailable`` on exhaustion."""
        cpu = self.resolve_cpu()
        memory = self.resolve_memory()
        return ResourceSnapshot(
            cpu=cpu.metrics,
            memory=memory.metrics,
            method=combine_methods(cpu.tier, memory.tier),
            used_fallback=cpu.used_fallback or memory.used_fallback,
            cpu_source=cpu.source,
            memory_source=memory.source,
        )

    def resolve_snapshot_command_only(self) -> ResourceSnapshot:
        """Skip container sources; a command failure raises ``SourceUnavailable``."""
        cpu_entry = self.table.command_cpu
        memory_entry = self.table.command_memory
        cpu_metrics = build_cpu_metrics(cpu_entry.probe(self.context))
        memory_metrics = build_memory_metrics(memory_entry.probe(self.context))
        return ResourceSnapshot(
            cpu=cpu_metrics,
            memory=memory_metrics,
            method=ResolutionMethod.COMMAND_BASED,
            used_fallback=False,
            cpu_source=cpu_entry.name,
            memory_source=memory_entry.name,
        )

    def resolve_cpu(self) -> MetricResolution[CpuMetrics]:
        return self._resolve("cpu", self.table.cpu, build_cpu_metrics)

    def resolve_memory(self) -> MetricResolution[MemoryMetrics]:
        return self._resolve("memory", self.table.memory, build_memory_metrics)

    def _resolve(
        self,
        metric: str,
        entries: tuple[ProbeEntry[R], ...],
        normalize: Callable[[R], M],
    ) -> MetricResolution[M]:
        attempts = [(entry.name, partial(entry.probe, self.context)) for entry in entries]
        result = try_in_order(attempts, metric=metric)
        entry = entries[result.index]
        used_fallback = result.index > 0
        if used_fallback:
            logger.info(f"{metric} resolved by fallback source {entry.name}")
        return MetricResolution(
            metrics=normalize(result.value),
            tier=entry.tier,
            used_fallback=used_fallback,
            source=entry.name,
        )

    # --- Per-metric accessors -------------------------------------------- #
    def cpu_usage_percent(self) -> float:
        return self.resolve_cpu().metrics.usage_percent

    def cpu_limit_cores(self) -> float:
        return self.resolve_cpu().metrics.limit_cores

    def available_cpu_cores(self) -> float:
        return self.resolve_cpu().metrics.available_cores

    def memory_usage_bytes(self) -> int:
        return self.resolve_memory().metrics.usage_bytes

    def memory_limit_bytes(self) -> int:
        return self.resolve_memory().metrics.limit_bytes

    def memory_usage_percent(self) -> float:
        return self.resolve_memory().metrics.usage_percent

    def available_memory_bytes(self) -> int:
        return self.resolve_memory().metrics.available_bytes

    # --- Raw utility output ---------------------------------------------- #
    def load_monitor_output(self) -> str:
        return commands.load_monitor_output(self.family, self.context.runner)

    def memory_monitor_output(self) -> str:
        return commands.memory_monitor_output(self.family, self.context.runner)

    def process_list_output(self) -> str:
        return commands.process_list_output(self.context.runner)

    def uptime_output(self) -> str:
        return commands.uptime_output(self.context.runner)


METRIC_ACCESSORS: dict[str, Callable[[ResourceResolver], float | int]] = {
    "cpu_usage_percent": ResourceResolver.cpu_usage_percent,
    "cpu_limit_cores": ResourceResolver.cpu_limit_cores,
    "available_cpu_cores": ResourceResolver.available_cpu_cores,
    "memory_usage_bytes": ResourceResolver.memory_usage_bytes,
    "memory_limit_bytes": ResourceResolver.memory_limit_bytes,
    "memory_usage_percent": ResourceResolver.memory_usage_percent,
    "available_memory_bytes": ResourceResolver.available_memory_bytes,
}

RAW_OUTPUTS: dict[str, Callable[[ResourceResolver], str]] = {
    "load": ResourceResolver.load_monitor_output,
    "memory": ResourceResolver.memory_monitor_output,
    "processes": ResourceResolver.process_list_output,
    "uptime": ResourceResolver.uptime_output,
}


def create_resolver(config: SysprobeConfig | None = None) -> ResourceResolver:
    """Build a resolver from configuration (the global config by default)."""
    config = config or get_config()
    context = SourceContext(
        cgroup_root=Path(config.cgroup_root),
        proc_root=Path(config.proc_root),
        cpu_rate_mode=CpuRateMode(config.cpu_rate_mode),
        sample_interval=config.cpu_sample_interval,
    )
    return ResourceResolver(OsFamily.from_setting(config.os_family), context=context)
