"""
Resolution latency harness.

Container-source snapshots only read small files, so a batch of them should
finish well inside a second even on slow CI machines.
"""

from __future__ import annotations

import time

import pytest

from sysprobe.engine.resolver import ResourceResolver
from sysprobe.host.family import OsFamily

ITERATIONS = 200
BUDGET_SECONDS = 2.0


@pytest.mark.performance
def test_container_snapshot_latency(fake_host) -> None:
    resolver = ResourceResolver(OsFamily.LINUX, context=fake_host.with_cgroup_v2().context())

    started = time.perf_counter()
    for _ in range(ITERATIONS):
        resolver.resolve_snapshot()
    elapsed = time.perf_counter() - started

    assert elapsed < BUDGET_SECONDS, f"{ITERATIONS} snapshots took {elapsed:.3f}s"


@pytest.mark.performance
def test_fallback_chain_latency(fake_host) -> None:
    resolver = ResourceResolver(OsFamily.LINUX, context=fake_host.with_linux_commands().context())

    started = time.perf_counter()
    for _ in range(ITERATIONS):
        resolver.resolve_snapshot()
    elapsed = time.perf_counter() - started

    assert elapsed < BUDGET_SECONDS, f"{ITERATIONS} fallback snapshots took {elapsed:.3f}s"
