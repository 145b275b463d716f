"""
Adapters module - Concrete implementations of the core ports.
"""
