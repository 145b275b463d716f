"""
Core ports - Interfaces implemented by probes.

A scheduler only depends on Checkable, so HTTP probes can run alongside other
probe kinds (TCP ports, DNS lookups) without the scheduler knowing which
concrete probe it holds.
"""

from abc import ABC, abstractmethod

from web_monitor.core.entities import CheckResult


class Checkable(ABC):  # pylint: disable=too-few-public-methods
    """Capability of being checked for health."""

    @abstractmethod
    def check(self) -> CheckResult:
        """
        Perform one check and classify the outcome.

        Unavailability of the target is reported through the returned
        result, never raised.

        Returns:
            CheckResult: Healthy or Unhealthy
        """
