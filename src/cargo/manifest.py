"""Locate and read the Cargo.toml of the current project."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

try:
    import tomllib as toml  # type: ignore
except ImportError:  # Python < 3.11
    import tomli as toml  # type: ignore

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

from .errors import ManifestLocateError

logger = logging.getLogger(__name__)


def locate_manifest(start_dir: Optional[str] = None) -> str:
    """Return the absolute path of the nearest Cargo.toml at or above ``start_dir``.

    Args:
        start_dir: Directory to start from; the current working directory if None.

    Raises:
        ManifestLocateError: if no manifest exists up to the filesystem root, or
            a directory cannot be listed.
    """
    origin = os.path.abspath(start_dir or os.getcwd())
    directory = origin

    while True:
        try:
            entries = os.listdir(directory)
        except OSError as exc:
            raise ManifestLocateError(
                f"Failed to read directory {directory}: {exc}", start_dir=origin
            ) from exc

        if Constants.MANIFEST_FILE in entries:
            candidate = os.path.join(directory, Constants.MANIFEST_FILE)
            if os.path.isfile(candidate):
                if is_debug_enabled(logger):
                    logger.debug("Found manifest", extra=extra_context(
                        event="decision", component="manifest", action="locate_manifest",
                        target=candidate, outcome="found",
                    ))
                return candidate

        parent = os.path.dirname(directory)
        if parent == directory:
            raise ManifestLocateError(
                f"Could not find {Constants.MANIFEST_FILE} in {origin} or any parent directory",
                start_dir=origin,
            )
        directory = parent


def read_manifest(manifest_path: str) -> Dict[str, Any]:
    """Parse a Cargo.toml.

    Raises:
        ManifestLocateError: if the file cannot be read or is not valid TOML.
    """
    try:
        with open(manifest_path, "rb") as f:
            return toml.load(f)
    except OSError as exc:
        raise ManifestLocateError(f"Failed to read {manifest_path}: {exc}") from exc
    except toml.TOMLDecodeError as exc:
        raise ManifestLocateError(f"Failed to parse {manifest_path}: {exc}") from exc


def is_virtual_manifest(manifest: Dict[str, Any]) -> bool:
    """True for a workspace root manifest that declares no package of its own."""
    return "workspace" in manifest and "package" not in manifest
