#!/usr/bin/env python3
"""
Health Watch CLI - Check configured sites once.

Usage:
    python -m web_monitor.interface.watch [site_id ...] [--config configs/watch.json] [-q]

Exit codes:
    0: Every checked site is up
    3: At least one site is down or misconfigured
"""

import argparse
import logging
import sys
from typing import List, Optional

from web_monitor.health import run_health_checks


def setup_logging(verbose: bool = False) -> None:
    """
    Setup logging configuration.

    Args:
        verbose: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code: 0 (all up), 3 (any down)
    """
    parser = argparse.ArgumentParser(
        description="One-shot web availability check for configured sites",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit codes:
  0  - Every checked site is up
  3  - At least one site is down or misconfigured

Examples:
  python -m web_monitor.interface.watch
  python -m web_monitor.interface.watch example --config configs/watch.json
  python -m web_monitor.interface.watch example example_api -q
        """,
    )

    parser.add_argument(
        "site_ids",
        nargs="*",
        metavar="site_id",
        help="Site identifiers to check (default: every configured site)",
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to config file (default: configs/watch.json or configs/watch.example.json)",
    )

    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Don't print reports, only set the exit code",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )

    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    logger = logging.getLogger(__name__)
    logger.info(
        "Starting health check for: %s", ", ".join(args.site_ids) or "all sites"
    )

    try:
        exit_code = run_health_checks(
            args.site_ids, config_path=args.config, quiet=args.quiet
        )
        logger.info("Health check completed with exit code: %d", exit_code)
        return exit_code
    except KeyboardInterrupt:
        logger.error("Health check interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
