"""Tests for the dependency lookup over a cargo graph."""

import pytest

from cargo.errors import LocateError, LocateErrorKind, LocateResult
from cargo.models import Graph, ResolvedDependency
from cargo.resolver import resolve

from constants import Constants

from conftest import BOOT_MANIFEST, CALLER_MANIFEST


class TestResolveSuccess:
    """Lookups that find the dependency."""

    def test_renamed_dependency(self, graph):
        result = resolve(graph, CALLER_MANIFEST, "bootloader")
        assert result.ok
        assert result.dependency.manifest_path == BOOT_MANIFEST
        assert result.dependency.features == ("vga", "serial")
        assert result.dependency.name == "boot_impl"
        assert str(result.dependency.version) == "0.9.8"

    def test_default_target_name_is_bootloader(self, graph):
        result = resolve(graph, CALLER_MANIFEST)
        assert result.ok
        assert result.dependency.manifest_path == BOOT_MANIFEST

    def test_direct_name_matches_like_alias(self, metadata):
        """A dependency declared under its own name resolves the same way."""
        caller = metadata["packages"][0]
        caller["dependencies"][1] = {"name": "bootloader", "rename": None}
        metadata["packages"][1]["name"] = "bootloader"
        metadata["resolve"]["nodes"][0]["deps"][1]["name"] = "bootloader"

        result = resolve(Graph.from_metadata(metadata), CALLER_MANIFEST, "bootloader")
        assert result.ok
        assert result.dependency.manifest_path == BOOT_MANIFEST
        assert result.dependency.features == ("vga", "serial")

    def test_features_are_exactly_the_edge_features(self, metadata):
        metadata["resolve"]["nodes"][0]["deps"][1]["features"] = ["serial"]
        result = resolve(Graph.from_metadata(metadata), CALLER_MANIFEST, "bootloader")
        assert result.dependency.features == ("serial",)

    def test_other_dependencies_can_be_located(self, graph):
        result = resolve(graph, CALLER_MANIFEST, "log")
        assert result.ok
        assert result.dependency.manifest_path == "/registry/log-0.4.20/Cargo.toml"
        assert result.dependency.features == ("std",)

    def test_manifest_path_is_normalized(self, graph):
        result = resolve(graph, "/p/A/./sub/../Cargo.toml", "bootloader")
        assert result.ok

    def test_default_ignores_configured_name(self, graph, monkeypatch):
        """The lookup default is fixed; only the CLI layer reads config."""
        monkeypatch.setattr(Constants, "DEPENDENCY_NAME", "log")
        result = resolve(graph, CALLER_MANIFEST)
        assert result.dependency.manifest_path == BOOT_MANIFEST

    def test_idempotent(self, graph):
        first = resolve(graph, CALLER_MANIFEST, "bootloader")
        second = resolve(graph, CALLER_MANIFEST, "bootloader")
        assert first == second

    def test_renamed_versions_pick_matching_crate_name(self, metadata):
        """Two versions of one package imported under different renames."""
        metadata["packages"].append({
            "id": "P3",
            "name": "boot_impl",
            "version": "0.10.0",
            "manifest_path": "/p/boot10/Cargo.toml",
            "dependencies": [],
        })
        metadata["packages"][0]["dependencies"].insert(
            0, {"name": "boot_impl", "rename": "bootloader10"}
        )
        metadata["resolve"]["nodes"][0]["deps"].insert(
            0, {"name": "bootloader10", "pkg": "P3"}
        )
        metadata["resolve"]["nodes"].append({"id": "P3", "deps": [], "features": ["uefi"]})
        graph = Graph.from_metadata(metadata)

        old = resolve(graph, CALLER_MANIFEST, "bootloader")
        new = resolve(graph, CALLER_MANIFEST, "bootloader10")
        assert old.dependency.manifest_path == BOOT_MANIFEST
        assert new.dependency.manifest_path == "/p/boot10/Cargo.toml"
        assert new.dependency.features == ("uefi",)


class TestResolveFailures:
    """Each failing step yields its own error kind."""

    def test_unknown_caller_manifest(self, graph):
        result = resolve(graph, "/elsewhere/Cargo.toml", "bootloader")
        assert not result.ok
        assert result.dependency is None
        assert result.error.kind == LocateErrorKind.CALLER_PACKAGE_NOT_FOUND
        assert "/elsewhere/Cargo.toml" in result.error.description

    def test_missing_dependency(self, graph):
        result = resolve(graph, CALLER_MANIFEST, "missing")
        assert result.error.kind == LocateErrorKind.TARGET_DEPENDENCY_NOT_DECLARED
        assert "missing" in str(result.error)

    def test_empty_target_name_is_not_replaced(self, graph):
        result = resolve(graph, CALLER_MANIFEST, "")
        assert not result.ok
        assert result.error.kind == LocateErrorKind.TARGET_DEPENDENCY_NOT_DECLARED

    def test_package_name_does_not_match_when_renamed(self, graph):
        """Once renamed, the package name is no longer an import name."""
        result = resolve(graph, CALLER_MANIFEST, "boot_impl")
        assert result.error.kind == LocateErrorKind.TARGET_DEPENDENCY_NOT_DECLARED

    def test_missing_resolve_node_for_caller(self, metadata):
        metadata["resolve"]["root"] = None
        metadata["resolve"]["nodes"] = metadata["resolve"]["nodes"][1:]
        result = resolve(Graph.from_metadata(metadata), CALLER_MANIFEST, "bootloader")
        assert result.error.kind == LocateErrorKind.GRAPH_INCOMPLETE
        assert result.error.detail == "resolve node for caller"
        assert not result.error.is_upstream

    def test_missing_resolved_edge(self, metadata):
        del metadata["resolve"]["nodes"][0]["deps"][1]
        result = resolve(Graph.from_metadata(metadata), CALLER_MANIFEST, "bootloader")
        assert result.error.kind == LocateErrorKind.GRAPH_INCOMPLETE
        assert result.error.detail == "resolved edge for target dependency"

    def test_dangling_resolved_id(self, metadata):
        metadata["resolve"]["nodes"][0]["deps"][1]["pkg"] = "GONE"
        result = resolve(Graph.from_metadata(metadata), CALLER_MANIFEST, "bootloader")
        assert result.error.kind == LocateErrorKind.GRAPH_INCOMPLETE
        assert result.error.detail == "package for resolved id"
        assert "package for resolved id" in result.error.description

    def test_no_resolve_section(self, metadata):
        metadata["resolve"] = None
        result = resolve(Graph.from_metadata(metadata), CALLER_MANIFEST, "bootloader")
        assert result.error.kind == LocateErrorKind.GRAPH_INCOMPLETE


class TestLocateResult:
    """Result values hold exactly one outcome."""

    def test_empty_result_rejected(self):
        with pytest.raises(ValueError):
            LocateResult()

    def test_both_outcomes_rejected(self):
        with pytest.raises(ValueError):
            LocateResult(
                dependency=ResolvedDependency(manifest_path=BOOT_MANIFEST),
                error=LocateError(kind=LocateErrorKind.GRAPH_INCOMPLETE),
            )

    def test_unwrap_success(self):
        dep = ResolvedDependency(manifest_path=BOOT_MANIFEST, features=("vga",))
        assert LocateResult.success(dep).unwrap() is dep
