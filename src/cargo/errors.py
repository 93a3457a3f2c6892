"""Error and result types for locating a dependency in a cargo project.

Lookup outcomes are returned as values (``LocateResult``) rather than raised.
The two collaborators that talk to the outside world, the ``cargo metadata``
runner and the manifest locator, raise ``CargoMetadataError`` and
``ManifestLocateError``; the facade turns those into upstream-failure values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .models import ResolvedDependency


class MetadataErrorKind(Enum):
    """Ways in which querying ``cargo metadata`` can fail."""
    IO = "io"
    FAILED = "failed"
    TIMEOUT = "timeout"
    STRING_CONVERSION = "string_conversion"
    PARSE_JSON = "parse_json"
    MALFORMED = "malformed"


class CargoMetadataError(Exception):
    """Failed to query project metadata.

    The originating exception, if any, is chained as ``__cause__``.
    """

    def __init__(
        self,
        kind: MetadataErrorKind,
        detail: str = "",
        stderr: bytes = b"",
    ):
        self.kind = kind
        self.detail = detail
        self.stderr = stderr
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.kind == MetadataErrorKind.IO:
            return f"Failed to execute `cargo metadata`: {self.detail}"
        if self.kind == MetadataErrorKind.FAILED:
            text = self.stderr.decode("utf-8", errors="replace").strip()
            return f"`cargo metadata` was not successful: {text}"
        if self.kind == MetadataErrorKind.TIMEOUT:
            return f"`cargo metadata` did not finish in time: {self.detail}"
        if self.kind == MetadataErrorKind.STRING_CONVERSION:
            return (
                "Failed to convert the `cargo metadata` output to a string: "
                f"{self.detail}"
            )
        if self.kind == MetadataErrorKind.PARSE_JSON:
            return f"Failed to parse `cargo metadata` output as JSON: {self.detail}"
        return f"The `cargo metadata` output was not valid: {self.detail}"


class ManifestLocateError(Exception):
    """No usable Cargo.toml could be found or read."""

    def __init__(self, message: str, start_dir: Optional[str] = None):
        self.start_dir = start_dir
        super().__init__(message)


class LocateFailed(Exception):
    """Raised by ``LocateResult.unwrap`` when the lookup failed."""

    def __init__(self, error: "LocateError"):
        self.error = error
        super().__init__(error.description)


class LocateErrorKind(Enum):
    """Failure kinds of a dependency lookup."""
    METADATA = "metadata"
    MANIFEST = "manifest"
    CALLER_PACKAGE_NOT_FOUND = "caller_package_not_found"
    TARGET_DEPENDENCY_NOT_DECLARED = "target_dependency_not_declared"
    GRAPH_INCOMPLETE = "graph_incomplete"


_UPSTREAM_KINDS = (LocateErrorKind.METADATA, LocateErrorKind.MANIFEST)


@dataclass(frozen=True)
class LocateError:
    """A failed lookup: the kind, a short detail and an optional nested cause."""
    kind: LocateErrorKind
    detail: str = ""
    cause: Optional[Exception] = None

    @property
    def is_upstream(self) -> bool:
        return self.kind in _UPSTREAM_KINDS

    @property
    def description(self) -> str:
        kind = self.kind
        if kind == LocateErrorKind.METADATA:
            return f"Failed to retrieve project metadata: {self.cause or self.detail}"
        if kind == LocateErrorKind.MANIFEST:
            return f"Failed to locate the project manifest: {self.cause or self.detail}"
        if kind == LocateErrorKind.CALLER_PACKAGE_NOT_FOUND:
            return (
                "No package in the `cargo metadata` output has the manifest path "
                f"{self.detail}"
            )
        if kind == LocateErrorKind.TARGET_DEPENDENCY_NOT_DECLARED:
            return (
                "Could not find a dependency with the given name in the "
                f"`cargo metadata` output: {self.detail}"
            )
        return f"The `cargo metadata` output is incomplete: missing {self.detail}"

    def __str__(self) -> str:
        return self.description


@dataclass(frozen=True)
class LocateResult:
    """Outcome of a lookup; exactly one of ``dependency`` and ``error`` is set."""
    dependency: Optional["ResolvedDependency"] = None
    error: Optional[LocateError] = None

    def __post_init__(self):
        if (self.dependency is None) == (self.error is None):
            raise ValueError("LocateResult needs exactly one of dependency and error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, dependency: "ResolvedDependency") -> "LocateResult":
        return cls(dependency=dependency)

    @classmethod
    def failure(
        cls,
        kind: LocateErrorKind,
        detail: str = "",
        cause: Optional[Exception] = None,
    ) -> "LocateResult":
        return cls(error=LocateError(kind=kind, detail=detail, cause=cause))

    def unwrap(self) -> "ResolvedDependency":
        """Return the dependency or raise ``LocateFailed``."""
        if self.error is not None:
            raise LocateFailed(self.error)
        return self.dependency
