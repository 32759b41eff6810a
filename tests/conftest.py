"""Shared pytest fixtures for the sysprobe project."""

from __future__ import annotations

import pathlib
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

import pytest

from sysprobe.config import set_config
from sysprobe.errors import CommandUnavailable
from sysprobe.probes import SourceContext

TOP_LINUX = """top - 10:30:00 up 2 days, 20:45,  1 user,  load average: 0.52, 0.58, 0.59
Tasks: 123 total,   1 running, 122 sleeping,   0 stopped,   0 zombie
%Cpu(s):  5.2 us,  2.1 sy,  0.0 ni, 92.7 id,  0.0 wa,  0.0 hi,  0.0 si,  0.0 st
MiB Mem :  16384.0 total,   8192.0 free,   4096.0 used,   4096.0 buff/cache
"""
FREE_LINUX = """              total        used        free      shared  buff/cache   available
Mem:       16777216     8388608     4194304          0     4194304     8388608
Swap:      16777216            0    16777216
"""
UPTIME_LINUX = " 10:30:00 up 2 days, 20:45,  1 user,  load average: 0.52, 0.58, 0.59\n"
TOP_DARWIN = """Processes: 412 total, 2 running, 410 sleeping, 2104 threads
2024/05/01 10:30:00
Load Avg: 1.73, 1.91, 2.05
CPU usage: 7.98% user, 5.32% sys, 86.69% idle
SharedLibs: 512M resident, 96M data, 48M linkedit.
"""
VM_STAT_DARWIN = """Mach Virtual Memory Statistics: (page size of 16384 bytes)
Pages free:                               10000.
Pages active:                             20000.
Pages inactive:                           15000.
Pages speculative:                         5000.
Pages throttled:                              0.
Pages wired down:                         10000.
Pages purgeable:                           1000.
"Translation faults":                 123456789.
Pages copy-on-write:                    1234567.
File-backed pages:                        12000.
Anonymous pages:                          27000.
"""
UPTIME_DARWIN = "10:30  up 3 days,  2:01, 2 users, load averages: 1.73 1.91 2.05\n"
CPUINFO = "".join(
    f"processor\t: {index}\nvendor_id\t: GenuineIntel\nmodel name\t: Test CPU\n\n"
    for index in range(4)
)
MEMINFO = "MemTotal:       16384000 kB\nMemFree:         8192000 kB\nMemAvailable:   12000000 kB\n"
PROC_STAT = "cpu  3000 0 1000 16000 0 0 0 0 0 0\ncpu0 750 0 250 4000 0 0 0 0 0 0\nintr 123456\n"

GIB = 1024**3


class FakeRunner:
    """Command runner returning canned output keyed by argument tuple."""

    def __init__(self, outputs: dict[tuple[str, ...], str | Exception] | None = None) -> None:
        self.outputs: dict[tuple[str, ...], str | Exception] = dict(outputs or {})
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, args: Sequence[str]) -> str:
        key = tuple(args)
        self.calls.append(key)
        if key not in self.outputs:
            raise CommandUnavailable(key, "command not found")
        value = self.outputs[key]
        if isinstance(value, Exception):
            raise value
        return value


@dataclass
class FakeHost:
    """Temporary cgroup/procfs tree plus a fake command runner."""

    root: pathlib.Path
    runner: FakeRunner = field(default_factory=FakeRunner)

    @property
    def cgroup_root(self) -> pathlib.Path:
        return self.root / "cgroup"

    @property
    def proc_root(self) -> pathlib.Path:
        return self.root / "proc"

    def cgroup(self, relative: str, content: str) -> None:
        path = self.cgroup_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)

    def proc(self, relative: str, content: str) -> None:
        path = self.proc_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)

    def command(self, args: Sequence[str], output: str | Exception) -> None:
        self.runner.outputs[tuple(args)] = output

    # --- Canned scenarios ------------------------------------------------ #
    def with_cgroup_v2(
        self,
        *,
        cpu_max: str = "200000 100000\n",
        usage_usec: int = 50_000_000,
        memory_max: str = f"{2 * GIB}\n",
        memory_current: str = f"{GIB // 2}\n",
    ) -> FakeHost:
        """2.0 cores limit, 0.5 cores used; 2 GiB limit, 0.5 GiB used."""
        self.cgroup("cpu.max", cpu_max)
        self.cgroup("cpu.stat", f"usage_usec {usage_usec}\nuser_usec 40000000\nsystem_usec 10000000\n")
        self.cgroup("memory.max", memory_max)
        self.cgroup("memory.current", memory_current)
        return self

    def with_cgroup_v1(
        self,
        *,
        quota: str = "150000\n",
        period: str = "100000\n",
        usage_ns: int = 30_000_000_000,
        memory_limit: str = f"{GIB}\n",
        memory_usage: str = f"{GIB // 4}\n",
    ) -> FakeHost:
        """1.5 cores limit, 0.3 cores used; 1 GiB limit, 0.25 GiB used."""
        self.cgroup("cpu,cpuacct/cpu.cfs_quota_us", quota)
        self.cgroup("cpu,cpuacct/cpu.cfs_period_us", period)
        self.cgroup("cpuacct/cpuacct.usage", f"{usage_ns}\n")
        self.cgroup("memory/memory.limit_in_bytes", memory_limit)
        self.cgroup("memory/memory.usage_in_bytes", memory_usage)
        return self

    def with_procfs(self) -> FakeHost:
        """4 processors; 16384000 kB total memory."""
        self.proc("cpuinfo", CPUINFO)
        self.proc("meminfo", MEMINFO)
        return self

    def with_proc_stat(self, content: str = PROC_STAT) -> FakeHost:
        """Aggregate counters 20% busy since boot."""
        self.proc("stat", content)
        return self

    def with_linux_commands(self) -> FakeHost:
        """4 cores at 7.3% usage; ``free`` reports 16 MiB total, 8 MiB used."""
        self.command(("nproc",), "4\n")
        self.command(("top", "-b", "-n", "1"), TOP_LINUX)
        self.command(("free", "-b"), FREE_LINUX)
        self.command(("uptime",), UPTIME_LINUX)
        self.command(("ps", "aux"), "USER PID %CPU %MEM COMMAND\nroot 1 0.0 0.1 init\n")
        return self

    def with_darwin_commands(self) -> FakeHost:
        """8 cores at 13.31% usage; ``vm_stat`` with 16 KiB pages."""
        self.command(("sysctl", "-n", "hw.ncpu"), "8\n")
        self.command(("sysctl", "-n", "hw.pagesize"), "16384\n")
        self.command(("top", "-l", "1"), TOP_DARWIN)
        self.command(("vm_stat",), VM_STAT_DARWIN)
        self.command(("uptime",), UPTIME_DARWIN)
        return self

    def context(self, **overrides: Any) -> SourceContext:
        options: dict[str, Any] = {
            "cgroup_root": self.cgroup_root,
            "proc_root": self.proc_root,
            "runner": self.runner,
        }
        options.update(overrides)
        return SourceContext(**options)


@pytest.fixture(scope="session")
def project_root() -> Iterator[pathlib.Path]:
    """Return repository root for convenience in tests."""
    yield pathlib.Path(__file__).resolve().parent.parent


@pytest.fixture(autouse=True)
def _reset_global_config() -> Iterator[None]:
    set_config(None)
    yield
    set_config(None)


@pytest.fixture()
def fake_host(tmp_path: pathlib.Path) -> FakeHost:
    host = FakeHost(root=tmp_path / "host")
    host.cgroup_root.mkdir(parents=True)
    host.proc_root.mkdir(parents=True)
    return host
