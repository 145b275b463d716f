"""
Core module - Entities, ports and exceptions shared by every probe.
"""
