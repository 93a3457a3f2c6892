"""Configuration file loading and logging setup for the CLI.

Config values override the defaults held in Constants. Loading never raises:
a missing or broken config file is logged and the defaults stay in effect.
"""

from __future__ import annotations

import logging
import math
import os
from typing import Any, Dict, Optional

import yaml

from common.logging_utils import configure_logging
from constants import Constants

logger = logging.getLogger(__name__)


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load configuration from a YAML file.

    The values may sit at the top level or under a ``bootloader_locator`` section.

    Args:
        config_path: Path to YAML config file.

    Returns:
        Configuration dict (empty when nothing could be loaded).
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load config: %s", e)
        return {}

    if not isinstance(data, dict):
        return {}
    section = data.get(Constants.CONFIG_SECTION, data)
    return section if isinstance(section, dict) else {}


def apply_config_overrides(config: Dict[str, Any]) -> None:
    """Apply config values onto Constants; invalid values are logged and skipped."""
    cargo = config.get("cargo")
    if cargo is not None:
        if isinstance(cargo, str) and cargo.strip():
            Constants.CARGO_BIN = cargo.strip()
        else:
            logger.warning("Ignoring invalid 'cargo' setting: %r", cargo)

    dependency_name = config.get("dependency_name")
    if dependency_name is not None:
        if isinstance(dependency_name, str) and dependency_name.strip():
            Constants.DEPENDENCY_NAME = dependency_name.strip()
        else:
            logger.warning("Ignoring invalid 'dependency_name' setting: %r", dependency_name)

    timeout = config.get("timeout")
    if timeout is not None:
        try:
            value = float(timeout)
        except (TypeError, ValueError):
            value = 0.0
        if value > 0 and math.isfinite(value) and not isinstance(timeout, bool):
            Constants.METADATA_TIMEOUT_SEC = value
        else:
            logger.warning("Ignoring invalid 'timeout' setting: %r", timeout)


def setup_logging(args: Any) -> None:
    """Configure logging based on CLI arguments.

    Args:
        args: Parsed CLI arguments.
    """
    # Honor CLI --loglevel
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()

    configure_logging()

    # Add file handler if --logfile specified
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        )
        file_handler.setFormatter(formatter)
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)
