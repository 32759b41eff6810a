"""Derive every redundant snapshot field from a probe reading."""

from __future__ import annotations

import logging

from sysprobe.readings import CpuReading, MemoryReading

from .models import CpuMetrics, MemoryMetrics

logger = logging.getLogger(__name__)

BYTES_PER_MB = 1024 * 1024


def build_cpu_metrics(reading: CpuReading) -> CpuMetrics:
    """Clamp used cores into ``[0, limit]`` and derive percent and availability."""
    limit = reading.limit_cores
    used = min(max(reading.used_cores, 0.0), limit)
    if used != reading.used_cores:
        logger.debug(f"Clamped used cores {reading.used_cores:.4f} to {used:.4f}")
    return CpuMetrics(
        usage_percent=used / limit * 100.0,
        limit_cores=limit,
        used_cores=used,
        available_cores=limit - used,
        load_average=reading.load_average,
    )


def build_memory_metrics(reading: MemoryReading) -> MemoryMetrics:
    """Derive availability, percent, and MB mirrors from byte counts."""
    limit = reading.limit_bytes
    usage = min(max(reading.usage_bytes, 0), limit)
    if usage != reading.usage_bytes:
        logger.debug(f"Clamped memory usage {reading.usage_bytes} to limit {limit}")

    if reading.itemized:
        available = reading.available_bytes
    else:
        available = limit - usage

    return MemoryMetrics(
        usage_bytes=usage,
        limit_bytes=limit,
        available_bytes=available,
        free_bytes=reading.free_bytes,
        buffer_bytes=reading.buffer_bytes,
        cached_bytes=reading.cached_bytes,
        usage_percent=usage / limit * 100.0,
        usage_mb=usage / BYTES_PER_MB,
        limit_mb=limit / BYTES_PER_MB,
        available_mb=available / BYTES_PER_MB,
    )
