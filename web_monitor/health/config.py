"""
Health configuration - Loads and validates the sites to probe.

This module loads a JSON file mapping site identifiers to probe settings and
builds AvailabilityProbe instances from validated entries.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from web_monitor.adapters.probes import DEFAULT_TIMEOUT, AvailabilityProbe

logger = logging.getLogger(__name__)


# Configuration schema structure
# {
#   "site_id": {
#     "url": str,
#     "user_agent": Optional[str],
#     "timeout": Optional[float],
#     "verify_ssl": Optional[bool]
#   }
# }


def _default_config_path() -> Path:
    project_root = Path(__file__).parent.parent.parent
    config_path = project_root / "configs" / "watch.json"
    example_path = project_root / "configs" / "watch.example.json"

    if config_path.exists():
        return config_path
    if example_path.exists():
        logger.warning(
            "Using example config file: %s. "
            "Create configs/watch.json for production.",
            example_path,
        )
        return example_path
    raise FileNotFoundError(
        f"Config file not found. Expected one of: {config_path} or {example_path}"
    )


def load_config(config_path: Optional[str] = None) -> Dict[str, Dict[str, Any]]:
    """
    Load probe configuration from a JSON file.

    Args:
        config_path: Path to config file. If None, looks for configs/watch.json
                     or falls back to configs/watch.example.json

    Returns:
        Dict with site_id -> validated site config mappings. Invalid
        entries are logged and left out.

    Raises:
        FileNotFoundError: If no config file found
        ValueError: If the file is not valid JSON or not a JSON object
    """
    config_file = Path(config_path) if config_path else _default_config_path()
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_file}")

    if config_file.suffix in (".yaml", ".yml"):
        raise ValueError(
            "YAML support requires PyYAML library. "
            "Use JSON format for now or install: pip install pyyaml"
        )

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a JSON object: {config_file}")

    validated_config: Dict[str, Dict[str, Any]] = {}
    for site_id, site_config in data.items():
        try:
            validated_config[site_id] = _validate_site_config(site_id, site_config)
        except ValueError as e:
            logger.error("Invalid config for site %s: %s", site_id, e)

    logger.info(
        "Loaded health config: %d sites configured from %s",
        len(validated_config),
        config_file,
    )
    return validated_config


def _validate_site_config(site_id: str, config: Any) -> Dict[str, Any]:
    """
    Validate a single site's configuration and fill in defaults.

    Raises:
        ValueError: If config is invalid
    """
    if not isinstance(config, dict):
        raise ValueError(f"Config must be a dict for site: {site_id}")

    if "url" not in config:
        raise ValueError(f"Missing required field 'url' for site: {site_id}")
    if not isinstance(config["url"], str) or not config["url"].strip():
        raise ValueError(f"Field 'url' must be a non-empty string for site: {site_id}")

    validated = {
        "url": config["url"].strip(),
        "user_agent": config.get("user_agent"),
        "timeout": config.get("timeout", DEFAULT_TIMEOUT),
        "verify_ssl": config.get("verify_ssl", True),
    }

    if validated["user_agent"] is not None and not isinstance(
        validated["user_agent"], str
    ):
        raise ValueError(f"Field 'user_agent' must be a string for site: {site_id}")
    timeout = validated["timeout"]
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ValueError(f"Field 'timeout' must be a number for site: {site_id}")
    if timeout <= 0:
        raise ValueError(f"Field 'timeout' must be positive for site: {site_id}")
    if not isinstance(validated["verify_ssl"], bool):
        raise ValueError(f"Field 'verify_ssl' must be a bool for site: {site_id}")

    return validated


def build_probe(site_config: Dict[str, Any]) -> AvailabilityProbe:
    """
    Build a probe from a validated site config.

    Raises:
        ConfigurationError: If the HTTP client cannot be configured
    """
    url = site_config["url"]
    timeout = site_config.get("timeout", DEFAULT_TIMEOUT)
    verify = site_config.get("verify_ssl", True)

    if not verify:
        logger.warning("SSL verification disabled for %s", url)

    user_agent = site_config.get("user_agent")
    if user_agent is None:
        return AvailabilityProbe.new(url, timeout=timeout, verify=verify)
    return AvailabilityProbe.with_user_agent(
        url, user_agent, timeout=timeout, verify=verify
    )
