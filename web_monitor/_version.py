"""Package version, kept apart so adapters can import it without cycles."""

__version__ = "0.1.0"
