"""Cargo project support.

This package locates a named dependency of a cargo package:
- models.py: typed dependency graph built from `cargo metadata` JSON
- schema.py: JSON Schema for the consumed subset of the metadata format
- resolver.py: the dependency lookup over a graph
- metadata.py: running `cargo metadata`
- manifest.py: finding and reading the project's Cargo.toml
- errors.py: result and error types
"""

from .errors import (
    CargoMetadataError,
    LocateError,
    LocateErrorKind,
    LocateFailed,
    LocateResult,
    ManifestLocateError,
    MetadataErrorKind,
)
from .manifest import is_virtual_manifest, locate_manifest, read_manifest
from .metadata import load_graph, run_cargo_metadata
from .models import (
    DependencyEdge,
    Graph,
    Package,
    ResolvedDependency,
    ResolvedEdge,
    ResolvedNode,
)
from .resolver import resolve
from .schema import SchemaError

__all__ = [
    # Models
    "DependencyEdge",
    "Graph",
    "Package",
    "ResolvedDependency",
    "ResolvedEdge",
    "ResolvedNode",
    # Lookup
    "resolve",
    # Collaborators
    "load_graph",
    "run_cargo_metadata",
    "locate_manifest",
    "read_manifest",
    "is_virtual_manifest",
    # Errors
    "CargoMetadataError",
    "LocateError",
    "LocateErrorKind",
    "LocateFailed",
    "LocateResult",
    "ManifestLocateError",
    "MetadataErrorKind",
    "SchemaError",
]
