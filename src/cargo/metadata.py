"""Query project metadata by running ``cargo metadata``."""

from __future__ import annotations

import json
import logging
import os
import subprocess
from typing import Any, Dict, List, Optional

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

from .errors import CargoMetadataError, MetadataErrorKind
from .models import Graph
from .schema import SchemaError

logger = logging.getLogger(__name__)


def cargo_executable() -> str:
    """Return the cargo binary to run: ``$CARGO`` when set, else the configured one."""
    env_cargo = os.environ.get(Constants.ENV_CARGO)
    if env_cargo and env_cargo.strip():
        return env_cargo.strip()
    return Constants.CARGO_BIN


def cargo_command(manifest_path: str, cargo: Optional[str] = None) -> List[str]:
    """Build the argv for ``cargo metadata`` on the given manifest."""
    return [
        cargo or cargo_executable(),
        "metadata",
        "--manifest-path",
        str(manifest_path),
        "--format-version",
        str(Constants.METADATA_FORMAT_VERSION),
    ]


def run_cargo_metadata(
    manifest_path: str,
    cargo: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Dict[str, Any]:
    """Run ``cargo metadata`` and return its decoded JSON output.

    Args:
        manifest_path: Cargo.toml of the project to describe.
        cargo: cargo binary; defaults to ``cargo_executable()``.
        timeout: Seconds to wait; defaults to ``Constants.METADATA_TIMEOUT_SEC``.

    Raises:
        CargoMetadataError: if cargo cannot be run, fails, times out or
            prints something that is not a UTF-8 JSON object.
    """
    cmd = cargo_command(manifest_path, cargo)
    if timeout is None:
        timeout = Constants.METADATA_TIMEOUT_SEC

    if is_debug_enabled(logger):
        logger.debug("Running cargo metadata", extra=extra_context(
            event="function_entry", component="metadata", action="run_cargo_metadata",
            target=str(manifest_path), command=" ".join(cmd), timeout=timeout,
        ))

    try:
        proc = subprocess.run(  # noqa: S603
            cmd,
            capture_output=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        raise CargoMetadataError(
            MetadataErrorKind.TIMEOUT, detail=f"gave up after {exc.timeout} seconds"
        ) from exc
    except OSError as exc:
        raise CargoMetadataError(MetadataErrorKind.IO, detail=str(exc)) from exc

    if proc.returncode != 0:
        logger.debug("cargo metadata exited with status %s", proc.returncode)
        raise CargoMetadataError(MetadataErrorKind.FAILED, stderr=proc.stderr or b"")

    try:
        output = proc.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CargoMetadataError(MetadataErrorKind.STRING_CONVERSION, detail=str(exc)) from exc

    try:
        data = json.loads(output)
    except json.JSONDecodeError as exc:
        raise CargoMetadataError(MetadataErrorKind.PARSE_JSON, detail=str(exc)) from exc

    if not isinstance(data, dict):
        raise CargoMetadataError(
            MetadataErrorKind.PARSE_JSON,
            detail=f"expected a JSON object, got {type(data).__name__}",
        )

    if is_debug_enabled(logger):
        logger.debug("Received cargo metadata", extra=extra_context(
            event="function_exit", component="metadata", action="run_cargo_metadata",
            target=str(manifest_path), count=len(data.get("packages") or []),
        ))
    return data


def load_graph(
    manifest_path: str,
    cargo: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Graph:
    """Return the dependency graph of the project owning ``manifest_path``.

    Raises:
        CargoMetadataError: as ``run_cargo_metadata``, plus ``MALFORMED`` when the
            JSON does not describe a usable graph.
    """
    data = run_cargo_metadata(manifest_path, cargo=cargo, timeout=timeout)
    try:
        return Graph.from_metadata(data)
    except SchemaError as exc:
        raise CargoMetadataError(MetadataErrorKind.MALFORMED, detail=str(exc)) from exc
