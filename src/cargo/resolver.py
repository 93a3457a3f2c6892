"""Find a named dependency of a cargo package in a resolved dependency graph.

The lookup needs both halves of the graph. The declared edge in the caller's
manifest carries the rename that maps an import name to a package name; only
the resolved edge carries the features that resolution activated.
"""

from __future__ import annotations

from typing import Optional

from .errors import LocateErrorKind, LocateResult
from .models import DependencyEdge, Graph, ResolvedDependency, ResolvedEdge, ResolvedNode


def resolve(
    graph: Graph,
    caller_manifest_path: str,
    target_dependency_name: str = "bootloader",
) -> LocateResult:
    """Locate the package the caller imports as ``target_dependency_name``.

    Args:
        graph: Dependency graph of the caller's project.
        caller_manifest_path: Path of the Cargo.toml of the package doing the import.
        target_dependency_name: Import name to look for.

    Returns:
        LocateResult holding either the ResolvedDependency or a LocateError of
        kind CALLER_PACKAGE_NOT_FOUND, TARGET_DEPENDENCY_NOT_DECLARED or
        GRAPH_INCOMPLETE.
    """
    caller = graph.package_by_manifest(caller_manifest_path)
    if caller is None:
        return LocateResult.failure(
            LocateErrorKind.CALLER_PACKAGE_NOT_FOUND, detail=str(caller_manifest_path)
        )

    declared = caller.find_dependency(target_dependency_name)
    if declared is None:
        return LocateResult.failure(
            LocateErrorKind.TARGET_DEPENDENCY_NOT_DECLARED,
            detail=f"`{target_dependency_name}` is not a dependency of `{caller.name}`",
        )

    node = graph.node(caller.id)
    if node is None:
        return LocateResult.failure(
            LocateErrorKind.GRAPH_INCOMPLETE, detail="resolve node for caller"
        )

    edge = _find_resolved_edge(graph, node, declared)
    if edge is None:
        return LocateResult.failure(
            LocateErrorKind.GRAPH_INCOMPLETE, detail="resolved edge for target dependency"
        )

    package = graph.package(edge.package_id)
    if package is None:
        return LocateResult.failure(
            LocateErrorKind.GRAPH_INCOMPLETE, detail="package for resolved id"
        )

    return LocateResult.success(
        ResolvedDependency(
            manifest_path=package.manifest_path,
            features=edge.features,
            name=package.name,
            version=package.version,
        )
    )


def _find_resolved_edge(
    graph: Graph, node: ResolvedNode, declared: DependencyEdge
) -> Optional[ResolvedEdge]:
    # An edge's target name comes from the package its id points at. A dangling
    # id can still be matched through the extern crate name so the missing
    # package is reported instead of a missing edge.
    candidates = []
    for edge in node.deps:
        package = graph.package(edge.package_id)
        if package is not None:
            if package.name == declared.name:
                candidates.append(edge)
        elif edge.name == declared.crate_name:
            candidates.append(edge)

    if not candidates:
        return None
    # Several versions of one package may be imported under different renames.
    for edge in candidates:
        if edge.name == declared.crate_name:
            return edge
    return candidates[0]
