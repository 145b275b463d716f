"""
Health runner - Checks configured sites once and reports the outcome.

This module loads the site configuration, runs one probe check per site and
maps the results to process exit codes. It keeps no state between runs:
repeating checks and suppressing repeated alerts is left to the caller.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence, Tuple

from web_monitor.core.entities import CheckResult
from web_monitor.core.exceptions import ConfigurationError
from web_monitor.health import config

logger = logging.getLogger(__name__)

EXIT_HEALTHY = 0
EXIT_UNHEALTHY = 3


def run_health_check(
    site_id: str, config_path: Optional[str] = None, quiet: bool = False
) -> int:
    """
    Run one check for a site and return exit code.

    Args:
        site_id: Site identifier
        config_path: Path to config file (optional)
        quiet: If True, don't print the report to stdout

    Returns:
        Exit code: 0 (healthy), 3 (unhealthy or misconfigured)
    """
    return run_health_checks([site_id], config_path=config_path, quiet=quiet)


def run_health_checks(
    site_ids: Sequence[str],
    config_path: Optional[str] = None,
    quiet: bool = False,
    max_workers: int = 8,
) -> int:
    """
    Check several sites concurrently and return the worst exit code.

    Args:
        site_ids: Site identifiers; every configured site when empty
        config_path: Path to config file (optional)
        quiet: If True, don't print reports to stdout
        max_workers: Upper bound on concurrent checks

    Returns:
        Exit code: 0 if every site is healthy, 3 otherwise
    """
    try:
        all_configs = config.load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load config: %s", e)
        return EXIT_UNHEALTHY

    targets = list(site_ids) or list(all_configs)
    if not targets:
        logger.error("No sites configured")
        return EXIT_UNHEALTHY

    exit_code = EXIT_HEALTHY
    known: List[Tuple[str, Dict[str, Any]]] = []
    for site_id in targets:
        if site_id not in all_configs:
            logger.error("Site not found in config: %s", site_id)
            exit_code = EXIT_UNHEALTHY
        else:
            known.append((site_id, all_configs[site_id]))

    if not known:
        return exit_code

    workers = max(1, min(max_workers, len(known)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        results = list(executor.map(lambda item: _check_site(*item), known))

    for (site_id, site_config), result in zip(known, results):
        if result is None or not result.is_healthy:
            exit_code = EXIT_UNHEALTHY
        if not quiet:
            _print_report(site_id, site_config["url"], result)

    return exit_code


def _check_site(
    site_id: str, site_config: Dict[str, Any]
) -> Optional[CheckResult]:
    """
    Build the probe for a site and check it once.

    Returns:
        The check result, or None when the probe could not be built or
        raised unexpectedly
    """
    try:
        probe = config.build_probe(site_config)
    except ConfigurationError as e:
        logger.error("Cannot build probe for %s: %s", site_id, e)
        return None

    logger.info("Checking %s (%s)...", site_id, site_config["url"])
    try:
        with probe:
            return probe.check()
    except Exception as e:
        logger.error("Health check failed for %s: %s", site_id, e, exc_info=True)
        return None


def _print_report(site_id: str, url: str, result: Optional[CheckResult]) -> None:
    """
    Print a formatted report to stdout.

    Args:
        site_id: Site identifier
        url: Checked URL
        result: Check result, None when the check could not be completed
    """
    if result is None:
        icon, state, detail = "❌", "ERROR", "Check could not be completed"
    elif result.is_healthy:
        icon, state, detail = "✅", "UP", ""
    else:
        icon, state, detail = "❌", "DOWN", str(result)

    print()
    print("=" * 80)
    print(f"{icon} Health Check: {site_id} - {state}")
    print("=" * 80)
    print(f"URL: {url}")
    if detail:
        print(detail)
    print("=" * 80)
    print()
