"""Typed model of a cargo dependency graph.

Built once from the decoded output of ``cargo metadata --format-version 1`` and
treated as read-only afterwards.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import semantic_version

from .schema import SchemaError, validate_metadata


def normalize_manifest_path(path: str) -> str:
    """Normalize a manifest path for equality checks."""
    return os.path.normcase(os.path.normpath(str(path)))


@dataclass(frozen=True)
class DependencyEdge:
    """A dependency as declared in a package's Cargo.toml."""
    name: str
    rename: Optional[str] = None
    kind: Optional[str] = None
    optional: bool = False
    req: Optional[str] = None

    @property
    def local_name(self) -> str:
        """Name the dependency is imported under (alias wins over package name)."""
        return self.rename if self.rename else self.name

    @property
    def crate_name(self) -> str:
        """Extern crate name cargo reports for this edge in the resolve graph."""
        return self.local_name.replace("-", "_")


@dataclass(frozen=True)
class Package:
    """A package known to the graph."""
    id: str
    name: str
    manifest_path: str
    version: Optional[semantic_version.Version] = None
    dependencies: Tuple[DependencyEdge, ...] = ()

    def find_dependency(self, local_name: str) -> Optional[DependencyEdge]:
        """Return the first declared dependency imported as ``local_name``."""
        return next((d for d in self.dependencies if d.local_name == local_name), None)


@dataclass(frozen=True)
class ResolvedEdge:
    """A resolved dependency edge with the features activated for it."""
    name: str
    package_id: str
    features: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ResolvedNode:
    """How resolution concluded for one package."""
    id: str
    deps: Tuple[ResolvedEdge, ...] = ()
    features: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ResolvedDependency:
    """The located dependency."""
    manifest_path: str
    features: Tuple[str, ...] = ()
    name: Optional[str] = None
    version: Optional[semantic_version.Version] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "manifest_path": self.manifest_path,
            "features": list(self.features),
            "name": self.name,
            "version": str(self.version) if self.version is not None else None,
        }


@dataclass(frozen=True)
class Graph:
    """Packages and resolve nodes keyed by package id."""
    packages: Dict[str, Package] = field(default_factory=dict)
    nodes: Dict[str, ResolvedNode] = field(default_factory=dict)
    root: Optional[str] = None

    def package(self, package_id: str) -> Optional[Package]:
        return self.packages.get(package_id)

    def node(self, package_id: str) -> Optional[ResolvedNode]:
        return self.nodes.get(package_id)

    def package_by_manifest(self, manifest_path: str) -> Optional[Package]:
        """Return the package whose manifest is ``manifest_path``, if any."""
        wanted = normalize_manifest_path(manifest_path)
        for package in self.packages.values():
            if normalize_manifest_path(package.manifest_path) == wanted:
                return package
        return None

    @classmethod
    def from_metadata(cls, data: Any) -> "Graph":
        """Build a graph from decoded ``cargo metadata`` JSON.

        Raises:
            SchemaError: if the payload is not shaped like format version 1,
                repeats a package or node id, or names a root that does not
                exist. Other dangling ids are left for the resolver to report.
        """
        validate_metadata(data)

        packages: Dict[str, Package] = {}
        for raw in data["packages"]:
            package = _parse_package(raw)
            if package.id in packages:
                raise SchemaError(f"Duplicate package id: {package.id}")
            packages[package.id] = package

        resolve = data.get("resolve") or {}
        raw_nodes: List[Dict[str, Any]] = resolve.get("nodes", [])
        node_features: Dict[str, Tuple[str, ...]] = {}
        for raw in raw_nodes:
            if raw["id"] in node_features:
                raise SchemaError(f"Duplicate resolve node id: {raw['id']}")
            node_features[raw["id"]] = tuple(raw.get("features", []))

        nodes: Dict[str, ResolvedNode] = {}
        for raw in raw_nodes:
            deps = []
            for dep in raw["deps"]:
                if "features" in dep:
                    features = tuple(dep["features"])
                else:
                    features = node_features.get(dep["pkg"], ())
                deps.append(ResolvedEdge(name=dep["name"], package_id=dep["pkg"], features=features))
            nodes[raw["id"]] = ResolvedNode(
                id=raw["id"],
                deps=tuple(deps),
                features=node_features[raw["id"]],
            )

        root = resolve.get("root")
        if root is not None and (root not in packages or root not in nodes):
            raise SchemaError(f"Resolve root does not name a known package: {root}")

        return cls(packages=packages, nodes=nodes, root=root)


def _parse_package(raw: Dict[str, Any]) -> Package:
    version = None
    if raw.get("version") is not None:
        try:
            version = semantic_version.Version(raw["version"])
        except ValueError as exc:
            raise SchemaError(
                f"Invalid version for package {raw['id']}: {raw['version']}"
            ) from exc

    dependencies = tuple(
        DependencyEdge(
            name=dep["name"],
            rename=dep.get("rename"),
            kind=dep.get("kind"),
            optional=bool(dep.get("optional", False)),
            req=dep.get("req"),
        )
        for dep in raw["dependencies"]
    )
    return Package(
        id=raw["id"],
        name=raw["name"],
        manifest_path=raw["manifest_path"],
        version=version,
        dependencies=dependencies,
    )
