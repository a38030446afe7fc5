"""Error types raised while parsing and resolving referenced YAML documents.

Every error derives from ``YamlRefError`` and carries enough context
(offending path, glob pattern or ancestor chain) to be shown to a user
directly.  Where a builtin exception category fits, the error also
inherits from it so callers may catch e.g. ``FileNotFoundError``.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class YamlRefError(Exception):
    """Base class for all yaml-reference errors."""


class InvalidMarkerError(YamlRefError, ValueError):
    """Raised when a marker is constructed with an invalid payload.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    location:
        Path of the file containing the marker, when known.
    line:
        1-based line number of the marker, when known.
    """

    def __init__(
        self, message: str, location: str | None = None, line: int | None = None
    ) -> None:
        self.marker_message = message
        self.location = location
        self.line = line
        where = ""
        if location is not None:
            where = f" in {location}" + (f":{line}" if line is not None else "")
        super().__init__(f"{message}{where}")


class MissingLocationError(YamlRefError):
    """Raised when a marker is resolved before its source location was stamped.

    This signals a programming error; markers produced by the parser are
    always stamped.
    """

    def __init__(self, marker: Any) -> None:
        self.marker = marker
        super().__init__(f"Marker has no source location: {marker!r}")


class ParseError(YamlRefError):
    """Raised when a document is not valid YAML.

    Parameters
    ----------
    path:
        Path of the file that failed to parse.
    reason:
        Description of the underlying syntax problem.
    line:
        1-based line number of the problem, when known.
    column:
        1-based column number of the problem, when known.
    """

    def __init__(
        self,
        path: str,
        reason: str,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.path = path
        self.reason = reason
        self.line = line
        self.column = column
        loc = path if line is None else f"{path}:{line}:{column}"
        super().__init__(f"Failed to parse YAML file {loc}: {reason}")


class ReferencedFileNotFoundError(YamlRefError, FileNotFoundError):
    """Raised when a referenced file does not exist."""

    def __init__(self, target: str, referrer: str | None = None) -> None:
        self.target = target
        self.referrer = referrer
        message = f"Referenced file not found: {target}"
        if referrer is not None:
            message += f" (from {referrer})"
        super().__init__(message)

    def __str__(self) -> str:
        # OSError formats its own args otherwise
        return str(self.args[0])


class CircularReferenceError(YamlRefError):
    """Raised when a file is referenced while it is still being resolved.

    Parameters
    ----------
    target:
        The file that closes the cycle.
    chain:
        Files on the resolution stack, in visitation order.
    """

    def __init__(self, target: str, chain: Sequence[str]) -> None:
        self.target = target
        self.chain = tuple(chain)
        visited = " -> ".join(self.chain)
        super().__init__(
            f"Circular reference detected: {target} (visited: {visited})"
        )


class NoMatchError(YamlRefError):
    """Raised when a ``!reference-all`` glob matches no usable file.

    Parameters
    ----------
    pattern:
        The glob as written in the document.
    base:
        Directory the glob was evaluated against.
    """

    def __init__(self, pattern: str, base: str) -> None:
        self.pattern = pattern
        self.base = base
        super().__init__(
            f"No YAML files found matching glob pattern: {pattern} (in {base})"
        )


class PathNotAllowedError(YamlRefError, PermissionError):
    """Raised when a reference target lies outside every allowed root."""

    def __init__(self, target: str, allowed_roots: Sequence[str]) -> None:
        self.target = target
        self.allowed_roots = tuple(allowed_roots)
        super().__init__(
            f"Referenced path {target} is not allowed. "
            f"Allowed paths: {', '.join(self.allowed_roots)}"
        )

    def __str__(self) -> str:
        return str(self.args[0])


class MergeTypeError(YamlRefError, TypeError):
    """Raised when a ``!merge`` element does not resolve to a mapping.

    Parameters
    ----------
    index:
        0-based position of the offending element in the flattened sequence.
    value:
        The offending value.
    """

    def __init__(self, index: int, value: Any) -> None:
        self.index = index
        self.value = value
        kind = "null" if value is None else type(value).__name__
        super().__init__(
            f"!merge element at index {index} must be a mapping, got {kind}: {value!r}"
        )


class InvalidPatternError(YamlRefError):
    """Raised when the filesystem rejects a glob pattern."""

    def __init__(self, pattern: str, reason: str = "") -> None:
        self.pattern = pattern
        message = f"Invalid glob pattern: {pattern}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class FileReadError(YamlRefError, OSError):
    """Raised when an existing file cannot be read (permissions, I/O)."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")

    def __str__(self) -> str:
        return str(self.args[0])


class SerializationError(YamlRefError, ValueError):
    """Raised when a resolved document cannot be written in the requested format.

    JSON output rejects values with no JSON equivalent, such as ``.nan``,
    ``.inf`` or ``!!binary`` data.
    """

    def __init__(self, output_format: str, reason: str) -> None:
        self.output_format = output_format
        self.reason = reason
        super().__init__(f"Cannot serialize document as {output_format}: {reason}")
