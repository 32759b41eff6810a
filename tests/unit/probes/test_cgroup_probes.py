from __future__ import annotations

import pytest

from sysprobe.errors import FileUnreadable, ParseFailure
from sysprobe.probes import CpuRateMode
from sysprobe.probes.cgroup import (
    cgroup_v1_cpu,
    cgroup_v1_cpu_limit,
    cgroup_v1_memory,
    cgroup_v2_cpu,
    cgroup_v2_cpu_limit,
    cgroup_v2_memory,
)

GIB = 1024**3


def test_v2_cpu_cumulative(fake_host) -> None:
    reading = cgroup_v2_cpu(fake_host.with_cgroup_v2().context())

    assert reading.limit_cores == pytest.approx(2.0)
    assert reading.used_cores == pytest.approx(0.5)
    assert reading.load_average == ""


def test_v2_cpu_unbounded_uses_processor_count(fake_host) -> None:
    fake_host.with_cgroup_v2(cpu_max="max 100000\n").with_procfs()

    assert cgroup_v2_cpu_limit(fake_host.context()) == 4.0


def test_v2_cpu_unbounded_without_procfs_fails(fake_host) -> None:
    fake_host.with_cgroup_v2(cpu_max="max 100000\n")

    with pytest.raises(FileUnreadable):
        cgroup_v2_cpu(fake_host.context())


def test_v2_cpu_sampled_measures_rate(fake_host) -> None:
    fake_host.with_cgroup_v2(usage_usec=50_000_000)
    ticks = iter([10.0, 10.2])
    sleeps: list[float] = []

    def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)
        fake_host.cgroup("cpu.stat", "usage_usec 50200000\n")

    ctx = fake_host.context(
        cpu_rate_mode=CpuRateMode.SAMPLED,
        sample_interval=0.2,
        sleep=fake_sleep,
        clock=lambda: next(ticks),
    )

    reading = cgroup_v2_cpu(ctx)

    assert sleeps == [0.2]
    assert reading.used_cores == pytest.approx(1.0)
    assert reading.limit_cores == pytest.approx(2.0)


def test_sampled_mode_rejects_stalled_clock(fake_host) -> None:
    fake_host.with_cgroup_v2()
    ctx = fake_host.context(
        cpu_rate_mode=CpuRateMode.SAMPLED,
        sleep=lambda _: None,
        clock=lambda: 5.0,
    )

    with pytest.raises(ParseFailure):
        cgroup_v2_cpu(ctx)


def test_v2_memory(fake_host) -> None:
    reading = cgroup_v2_memory(fake_host.with_cgroup_v2().context())

    assert reading.limit_bytes == 2 * GIB
    assert reading.usage_bytes == GIB // 2
    assert reading.available_bytes == 2 * GIB - GIB // 2
    assert not reading.itemized


def test_v2_memory_unbounded_uses_meminfo(fake_host) -> None:
    fake_host.with_cgroup_v2(memory_max="max\n").with_procfs()

    reading = cgroup_v2_memory(fake_host.context())

    assert reading.limit_bytes == 16384000 * 1024


def test_v2_missing_files_fail(fake_host) -> None:
    ctx = fake_host.context()

    with pytest.raises(FileUnreadable):
        cgroup_v2_cpu(ctx)
    with pytest.raises(FileUnreadable):
        cgroup_v2_memory(ctx)


def test_v1_cpu_cumulative(fake_host) -> None:
    reading = cgroup_v1_cpu(fake_host.with_cgroup_v1().context())

    assert reading.limit_cores == pytest.approx(1.5)
    assert reading.used_cores == pytest.approx(0.3)


def test_v1_cpu_unbounded_quota(fake_host) -> None:
    fake_host.with_cgroup_v1(quota="-1\n").with_procfs()

    assert cgroup_v1_cpu_limit(fake_host.context()) == 4.0


def test_v1_memory(fake_host) -> None:
    reading = cgroup_v1_memory(fake_host.with_cgroup_v1().context())

    assert reading.limit_bytes == GIB
    assert reading.usage_bytes == GIB // 4


def test_v1_memory_unbounded_limit(fake_host) -> None:
    fake_host.with_cgroup_v1(memory_limit="9223372036854771712\n").with_procfs()

    assert cgroup_v1_memory(fake_host.context()).limit_bytes == 16384000 * 1024


def test_v1_memory_zero_limit_fails(fake_host) -> None:
    fake_host.with_cgroup_v1(memory_limit="0\n")

    with pytest.raises(ParseFailure):
        cgroup_v1_memory(fake_host.context())
