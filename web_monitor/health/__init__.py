"""
Health module - Config-driven one-shot checks of web availability.

This module loads the sites to probe from a config file, checks each of them
once and reports the outcome as an exit code.
"""

from web_monitor.health.config import build_probe, load_config
from web_monitor.health.runner import run_health_check, run_health_checks

__all__ = ["build_probe", "load_config", "run_health_check", "run_health_checks"]
