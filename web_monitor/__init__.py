"""
Web Monitor - Pluggable HTTP availability probe.

This package provides a probe that performs a single HTTP GET against a target
URL and classifies the outcome as healthy or unhealthy with a diagnostic,
for use by an external scheduler.
"""

from web_monitor._version import __version__
from web_monitor.adapters.probes import AvailabilityProbe
from web_monitor.core.entities import CheckResult, Healthy, Unhealthy
from web_monitor.core.exceptions import ConfigurationError
from web_monitor.core.ports import Checkable

__all__ = [
    "AvailabilityProbe",
    "CheckResult",
    "Checkable",
    "ConfigurationError",
    "Healthy",
    "Unhealthy",
    "__version__",
]
