"""
Core entities - Results produced by health probes.

A check resolves to exactly one of two cases: Healthy, or Unhealthy with a
human-readable diagnostic. Both are immutable value objects.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CheckResult:
    """Base class for the outcome of a single check."""

    @property
    def is_healthy(self) -> bool:
        return isinstance(self, Healthy)


@dataclass(frozen=True)
class Healthy(CheckResult):
    """The target answered with a success status."""


@dataclass(frozen=True)
class Unhealthy(CheckResult):
    """
    The target could not be reached or answered with a non-success status.

    Attributes:
        diagnostic: Description naming the URL and either the status code
                    observed or the connection failure
    """

    diagnostic: str

    def __str__(self) -> str:
        return self.diagnostic
