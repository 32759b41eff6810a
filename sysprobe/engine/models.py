"""
Pydantic models describing a resolved resource snapshot.

Snapshots are frozen: every derived field is computed once by the
normalizer and the constraints below hold for any value that gets built.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

_ROUNDING_TOLERANCE = 1e-9


class ResolutionMethod(str, Enum):
    """Which tier of the fallback chain answered."""

    PRIMARY_CONTAINER = "primary_container"
    SECONDARY_CONTAINER = "secondary_container"
    COMMAND_BASED = "command_based"
    MIXED = "mixed"


class CpuMetrics(BaseModel):
    """CPU limit and consumption in cores."""

    model_config = ConfigDict(frozen=True)

    usage_percent: float = Field(ge=0.0, le=100.0)
    limit_cores: float = Field(gt=0.0)
    used_cores: float = Field(ge=0.0)
    available_cores: float = Field(ge=0.0)
    load_average: str = ""

    @model_validator(mode="after")
    def _validate_used_within_limit(self) -> CpuMetrics:
        if self.used_cores > self.limit_cores + _ROUNDING_TOLERANCE:
            raise ValueError("used_cores cannot exceed limit_cores.")
        return self


class MemoryMetrics(BaseModel):
    """Memory limit and consumption with MB-denominated mirrors."""

    model_config = ConfigDict(frozen=True)

    usage_bytes: int = Field(ge=0)
    limit_bytes: int = Field(gt=0)
    available_bytes: int = Field(ge=0)
    free_bytes: int = Field(default=0, ge=0)
    buffer_bytes: int = Field(default=0, ge=0)
    cached_bytes: int = Field(default=0, ge=0)
    usage_percent: float = Field(ge=0.0, le=100.0)
    usage_mb: float = Field(ge=0.0)
    limit_mb: float = Field(gt=0.0)
    available_mb: float = Field(ge=0.0)


class ResourceSnapshot(BaseModel):
    """Point-in-time CPU and memory picture with provenance."""

    model_config = ConfigDict(frozen=True)

    cpu: CpuMetrics
    memory: MemoryMetrics
    method: ResolutionMethod
    used_fallback: bool
    cpu_source: str
    memory_source: str
