"""Logging helpers shared by the CLI and the cargo collaborators."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict

from constants import Constants

_HANDLER_NAME = "bootloader-locator"


def configure_logging() -> None:
    """Install a single stderr handler on the root logger.

    The level comes from the BOOTLOADER_LOCATOR_LOG_LEVEL environment variable
    and falls back to Constants.DEFAULT_LOG_LEVEL. Calling this more than once
    does not add duplicate handlers.
    """
    level_name = os.environ.get(Constants.ENV_LOG_LEVEL, Constants.DEFAULT_LOG_LEVEL)
    level = getattr(logging, str(level_name).upper(), None)
    if not isinstance(level, int):
        level = getattr(logging, Constants.DEFAULT_LOG_LEVEL)

    root = logging.getLogger()
    if not any(getattr(h, "name", None) == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when debug records from logger would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` mapping for structured log records.

    None values are dropped so records only carry fields that were provided.
    """
    return {key: value for key, value in fields.items() if value is not None}
