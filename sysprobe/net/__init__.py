"""Network diagnostics independent of the resolution engine."""

from .connectivity import ConnectivityReport, check_connectivity

__all__ = ["ConnectivityReport", "check_connectivity"]
