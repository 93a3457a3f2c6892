"""bootloader-locator - find the bootloader dependency of a cargo project

Prints the manifest path and activated features of the package a project
imports as ``bootloader`` (or another configured name), as JSON.
"""
import json
import logging
import os
import sys
from typing import Callable, Optional

from args import parse_args
from cargo import (
    CargoMetadataError,
    Graph,
    LocateErrorKind,
    LocateResult,
    ManifestLocateError,
    is_virtual_manifest,
    load_graph,
    locate_manifest,
    read_manifest,
    resolve,
)
from cli_config import apply_config_overrides, load_config, setup_logging
from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants, ExitCodes

logger = logging.getLogger(__name__)


def locate_bootloader(
    dependency_name: Optional[str] = None,
    manifest_path: Optional[str] = None,
    *,
    metadata_provider: Optional[Callable[[str], Graph]] = None,
    manifest_locator: Optional[Callable[[Optional[str]], str]] = None,
) -> LocateResult:
    """Locate the dependency imported as ``dependency_name`` by the current project.

    Args:
        dependency_name: Import name of the dependency; defaults to
            ``Constants.DEPENDENCY_NAME``.
        manifest_path: Cargo.toml of the importing package; found with
            ``manifest_locator`` starting at the current directory if None.
        metadata_provider: Returns the dependency graph for a manifest path;
            ``load_graph`` if None.
        manifest_locator: Returns the nearest manifest path for a start
            directory; ``locate_manifest`` if None.

    Returns:
        LocateResult: the located dependency, or the reason it was not found.
    """
    if dependency_name is None:
        dependency_name = Constants.DEPENDENCY_NAME
    metadata_provider = metadata_provider or load_graph
    manifest_locator = manifest_locator or locate_manifest

    if manifest_path:
        manifest_path = os.path.abspath(manifest_path)
    else:
        try:
            manifest_path = manifest_locator(None)
        except ManifestLocateError as e:
            return LocateResult.failure(LocateErrorKind.MANIFEST, cause=e)

    _warn_if_virtual(manifest_path)

    if is_debug_enabled(logger):
        logger.debug("Querying dependency graph", extra=extra_context(
            event="function_entry", component="cli", action="locate_bootloader",
            target=dependency_name, manifest=manifest_path,
        ))

    try:
        graph = metadata_provider(manifest_path)
    except CargoMetadataError as e:
        return LocateResult.failure(LocateErrorKind.METADATA, cause=e)

    return resolve(graph, manifest_path, dependency_name)


def _warn_if_virtual(manifest_path: str) -> None:
    # cargo reports unreadable manifests itself; only a virtual one deserves a hint
    try:
        manifest = read_manifest(manifest_path)
    except ManifestLocateError as e:
        logger.debug("Could not inspect manifest: %s", e)
        return
    if is_virtual_manifest(manifest):
        logger.warning(
            "%s is a virtual workspace manifest; pass the manifest of a workspace member "
            "with --manifest-path",
            manifest_path,
        )


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    setup_logging(args)

    config = load_config(getattr(args, "CONFIG", None))
    if config:
        logger.info("Loaded config from: %s", args.CONFIG)
        apply_config_overrides(config)

    result = locate_bootloader(manifest_path=args.MANIFEST_PATH)
    if not result.ok:
        logger.debug("Lookup failed with %s", result.error.kind.value)
        sys.stderr.write(f"error: {result.error.description}\n")
        sys.exit(ExitCodes.LOCATE_ERROR.value)

    print(json.dumps(result.dependency.to_dict(), indent=2))
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
