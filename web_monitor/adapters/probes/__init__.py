"""
Probes module - Checkable implementations.

This module contains adapters that implement the Checkable port against
real network targets.
"""

from web_monitor.adapters.probes.web_availability import (
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    AvailabilityProbe,
)

__all__ = [
    "AvailabilityProbe",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
]
