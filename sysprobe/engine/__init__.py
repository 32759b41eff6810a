"""Resolution engine: fallback chains, normalization, and snapshot models."""

from .fallback import FirstSuccess, try_in_order
from .models import CpuMetrics, MemoryMetrics, ResolutionMethod, ResourceSnapshot
from .resolver import (
    DEFAULT_PROBE_TABLES,
    METRIC_ACCESSORS,
    RAW_OUTPUTS,
    ProbeEntry,
    ProbeTable,
    ResourceResolver,
    create_resolver,
)

__all__ = [
    "DEFAULT_PROBE_TABLES",
    "METRIC_ACCESSORS",
    "RAW_OUTPUTS",
    "CpuMetrics",
    "FirstSuccess",
    "MemoryMetrics",
    "ProbeEntry",
    "ProbeTable",
    "ResolutionMethod",
    "ResourceResolver",
    "ResourceSnapshot",
    "create_resolver",
    "try_in_order",
]
