"""
Configuration management for sysprobe.

Provides centralized configuration for filesystem roots, OS family
selection, CPU counter normalization, and surface defaults through
environment variables and defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

CPU_RATE_MODES = ("cumulative", "sampled")


@dataclass
class SysprobeConfig:
    """Main configuration for the sysprobe engine and its surfaces."""

    # Filesystem roots consulted by Linux probes
    cgroup_root: str = "/sys/fs/cgroup"
    proc_root: str = "/proc"

    # "" auto-detects; "linux" or "darwin" forces a family
    os_family: str = ""

    # CPU counter normalization: "cumulative" or "sampled"
    cpu_rate_mode: str = "cumulative"
    cpu_sample_interval: float = 0.1

    # Default connectivity timeout offered by CLI, API, and UI
    connect_timeout: int = 5

    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.cpu_rate_mode not in CPU_RATE_MODES:
            raise ValueError(
                f"Unsupported CPU rate mode: {self.cpu_rate_mode} "
                f"(expected one of {', '.join(CPU_RATE_MODES)})"
            )
        if self.cpu_sample_interval <= 0:
            raise ValueError("cpu_sample_interval must be positive.")

    @classmethod
    def from_env(cls) -> SysprobeConfig:
        """Create configuration from environment variables."""
        return cls(
            cgroup_root=os.environ.get("SYSPROBE_CGROUP_ROOT", "/sys/fs/cgroup"),
            proc_root=os.environ.get("SYSPROBE_PROC_ROOT", "/proc"),
            os_family=os.environ.get("SYSPROBE_OS_FAMILY", "").strip().lower(),
            cpu_rate_mode=os.environ.get("SYSPROBE_CPU_RATE_MODE", "cumulative").strip().lower(),
            cpu_sample_interval=float(os.environ.get("SYSPROBE_CPU_SAMPLE_INTERVAL", "0.1")),
            connect_timeout=int(os.environ.get("SYSPROBE_CONNECT_TIMEOUT", "5")),
            log_level=os.environ.get("SYSPROBE_LOG_LEVEL", "WARNING").upper(),
        )


# Global configuration instance
_config: SysprobeConfig | None = None


def get_config() -> SysprobeConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = SysprobeConfig.from_env()
    return _config


def set_config(config: SysprobeConfig | None) -> None:
    """Set the global configuration instance (``None`` resets to env)."""
    global _config
    _config = config
