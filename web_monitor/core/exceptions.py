"""
Core exceptions.
"""


class ConfigurationError(ValueError):
    """Raised when a probe cannot be constructed from the given settings."""
