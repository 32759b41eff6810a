"""Execution context shared by every source probe."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from sysprobe.host.commands import CommandRunner, run_command


class CpuRateMode(str, Enum):
    """How cumulative cgroup CPU counters become a "cores in use" figure."""

    # Single read divided by a fixed factor; matches historical output.
    CUMULATIVE = "cumulative"
    # Two reads ``sample_interval`` apart; a true instantaneous rate.
    SAMPLED = "sampled"


@dataclass(slots=True, frozen=True)
class SourceContext:
    """
    Where probes look and how they run commands.

    Args:
        cgroup_root: Mount point of the cgroup hierarchy.
        proc_root: Mount point of procfs.
        runner: Command runner used by command-based probes.
        cpu_rate_mode: Normalization applied to cumulative CPU counters.
        sample_interval: Delay between reads in ``SAMPLED`` mode, in seconds.
        sleep: Sleep function used between samples.
        clock: Monotonic clock used to measure the sampling window.
    """

    cgroup_root: Path = Path("/sys/fs/cgroup")
    proc_root: Path = Path("/proc")
    runner: CommandRunner = run_command
    cpu_rate_mode: CpuRateMode = CpuRateMode.CUMULATIVE
    sample_interval: float = 0.1
    sleep: Callable[[float], None] = field(default=time.sleep)
    clock: Callable[[], float] = field(default=time.monotonic)

    def cgroup_path(self, relative: str) -> Path:
        return self.cgroup_root / relative

    def proc_path(self, relative: str) -> Path:
        return self.proc_root / relative
