"""Configuration loading for waiting."""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_PATH = Path.home() / ".waiting" / "config.yaml"

logger = logging.getLogger(__name__)


def load_config(
    required: bool = False,
    fallback: Optional[Dict[str, Any]] = None
) -> Optional[Dict[str, Any]]:
    """Load ~/.waiting/config.yaml.

    Args:
        required: If True, exit with error when config is missing or unreadable.
        fallback: Default dict to return when config is missing and not required.

    Returns:
        Parsed config dict, fallback dict, or None if missing/invalid.
    """
    if not CONFIG_PATH.exists():
        if required:
            logger.error("Config file not found at %s", CONFIG_PATH)
            sys.exit(1)
        return fallback

    try:
        with open(CONFIG_PATH, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as e:
        logger.error("Error reading config: %s", e)
        if required:
            sys.exit(1)
        return fallback

    if not isinstance(data, dict):
        logger.error("Config at %s must be a mapping, got %s", CONFIG_PATH, type(data).__name__)
        if required:
            sys.exit(1)
        return fallback

    return data


def section(config: Optional[Dict[str, Any]], name: str) -> Dict[str, Any]:
    """Return a named mapping from the config, or an empty dict."""
    if not config:
        return {}
    value = config.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    return value
