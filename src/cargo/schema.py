"""JSON Schema for the subset of ``cargo metadata --format-version 1`` we read.

Only fields consumed by the graph model are constrained; everything else cargo
emits (targets, authors, workspace members, ...) passes through untouched.
"""

from __future__ import annotations

from typing import Any, Dict

from jsonschema import Draft7Validator

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

METADATA_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["packages", "resolve"],
    "properties": {
        "version": {"enum": [1]},
        "packages": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "name", "manifest_path", "dependencies"],
                "properties": {
                    "id": {"type": "string"},
                    "name": {"type": "string"},
                    "version": {"type": "string"},
                    "manifest_path": {"type": "string"},
                    "dependencies": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["name"],
                            "properties": {
                                "name": {"type": "string"},
                                "rename": {"type": ["string", "null"]},
                                "kind": {"type": ["string", "null"]},
                                "req": {"type": "string"},
                                "optional": {"type": "boolean"},
                            },
                        },
                    },
                },
            },
        },
        "resolve": {
            "type": ["object", "null"],
            "required": ["nodes"],
            "properties": {
                "root": {"type": ["string", "null"]},
                "nodes": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["id", "deps"],
                        "properties": {
                            "id": {"type": "string"},
                            "features": _STRING_LIST,
                            "deps": {
                                "type": "array",
                                "items": {
                                    "type": "object",
                                    "required": ["name", "pkg"],
                                    "properties": {
                                        "name": {"type": "string"},
                                        "pkg": {"type": "string"},
                                        "features": _STRING_LIST,
                                    },
                                },
                            },
                        },
                    },
                },
            },
        },
    },
}

_VALIDATOR = Draft7Validator(METADATA_SCHEMA)


class SchemaError(ValueError):
    """Raised when metadata does not have the shape the graph model needs."""


def validate_metadata(data: Any) -> None:
    """Validate a decoded ``cargo metadata`` payload and raise on the first error."""
    errs = sorted(_VALIDATOR.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errs:
        first = errs[0]
        path = "/".join([str(p) for p in first.path])
        raise SchemaError(f"Invalid metadata at '{path}': {first.message}")
