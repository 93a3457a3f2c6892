"""Shared fixtures: a small `cargo metadata` payload and its graph."""

import pytest

from cargo.models import Graph

CALLER_MANIFEST = "/p/A/Cargo.toml"
BOOT_MANIFEST = "/p/boot/Cargo.toml"


def make_metadata():
    """Return metadata for package A importing boot_impl as `bootloader`."""
    return {
        "version": 1,
        "packages": [
            {
                "id": "A",
                "name": "a",
                "version": "0.1.0",
                "manifest_path": CALLER_MANIFEST,
                "dependencies": [
                    {"name": "log", "rename": None, "kind": None, "req": "^0.4", "optional": False},
                    {"name": "boot_impl", "rename": "bootloader", "kind": None, "req": "^0.9", "optional": False},
                ],
            },
            {
                "id": "P2",
                "name": "boot_impl",
                "version": "0.9.8",
                "manifest_path": BOOT_MANIFEST,
                "dependencies": [],
            },
            {
                "id": "L",
                "name": "log",
                "version": "0.4.20",
                "manifest_path": "/registry/log-0.4.20/Cargo.toml",
                "dependencies": [],
            },
        ],
        "resolve": {
            "root": "A",
            "nodes": [
                {
                    "id": "A",
                    "deps": [
                        {"name": "log", "pkg": "L", "dep_kinds": [{"kind": None, "target": None}]},
                        {"name": "bootloader", "pkg": "P2", "dep_kinds": [{"kind": None, "target": None}]},
                    ],
                    "features": [],
                },
                {"id": "P2", "deps": [], "features": ["vga", "serial"]},
                {"id": "L", "deps": [], "features": ["std"]},
            ],
        },
    }


@pytest.fixture
def metadata():
    return make_metadata()


@pytest.fixture
def graph(metadata):
    return Graph.from_metadata(metadata)
