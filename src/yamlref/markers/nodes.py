"""Marker node definitions for referenced YAML documents.

A parsed document is a plain Python tree (``None``, ``bool``, numbers,
``str``, ``list`` and ``dict``) in which the four marker types below may
appear at any position.  Markers are frozen dataclasses; the closed
``Marker`` union covers every kind the resolver must handle, and
downstream code dispatches with ``isinstance`` checks.

``Reference`` and ``ReferenceAll`` carry a ``location``: the absolute
path of the file they were parsed from.  The parser stamps it via
``with_location``; markers built by hand start without one.
"""
from __future__ import annotations

import ntpath
import posixpath
from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from typing import Any, Union

from yamlref.errors import InvalidMarkerError


def _is_absolute(path: str) -> bool:
    """Return True if ``path`` is absolute under POSIX or Windows rules."""
    if posixpath.isabs(path) or path.startswith("\\"):
        return True
    return ntpath.isabs(path) or bool(ntpath.splitdrive(path)[0])


# ---------------------------------------------------------------------------
# File references
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Reference:
    """A ``!reference`` marker standing for the content of one file.

    Parameters
    ----------
    path:
        Path of the referenced file, relative to the containing file.
    location:
        Absolute path of the file containing this marker.
    """

    path: str
    location: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.path, str) or not self.path:
            raise InvalidMarkerError("Reference path must not be empty")
        if _is_absolute(self.path):
            raise InvalidMarkerError(
                f'Reference path must be relative, not absolute: "{self.path}"'
            )

    def with_location(self, location: str) -> "Reference":
        """Return a copy stamped with the containing file's path."""
        return replace(self, location=location)

    def __repr__(self) -> str:
        return f"Reference(path={self.path!r}, location={self.location!r})"


@dataclass(frozen=True, slots=True)
class ReferenceAll:
    """A ``!reference-all`` marker standing for every file a glob matches.

    Parameters
    ----------
    glob:
        Glob pattern, relative to the containing file.
    location:
        Absolute path of the file containing this marker.
    """

    glob: str
    location: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.glob, str) or not self.glob:
            raise InvalidMarkerError("ReferenceAll glob must not be empty")
        if _is_absolute(self.glob):
            raise InvalidMarkerError(
                f'ReferenceAll glob must be relative, not absolute: "{self.glob}"'
            )

    def with_location(self, location: str) -> "ReferenceAll":
        """Return a copy stamped with the containing file's path."""
        return replace(self, location=location)

    def __repr__(self) -> str:
        return f"ReferenceAll(glob={self.glob!r}, location={self.location!r})"


# ---------------------------------------------------------------------------
# Sequence operators
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Flatten:
    """A ``!flatten`` marker: its items collapse into one flat list."""

    items: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True, slots=True)
class Merge:
    """A ``!merge`` marker: its items (mappings) merge last-write-wins."""

    items: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


Marker = Union[Reference, ReferenceAll, Flatten, Merge]

FileMarker = Union[Reference, ReferenceAll]

MARKER_TYPES: tuple[type, ...] = (Reference, ReferenceAll, Flatten, Merge)


def is_marker(value: object) -> bool:
    """Return True if ``value`` is one of the four marker kinds."""
    return isinstance(value, MARKER_TYPES)


def iter_markers(node: Any) -> Iterator[Marker]:
    """Yield every marker in ``node``, depth-first, including nested ones."""
    if isinstance(node, (Flatten, Merge)):
        yield node
        for item in node.items:
            yield from iter_markers(item)
    elif isinstance(node, (Reference, ReferenceAll)):
        yield node
    elif isinstance(node, list):
        for item in node:
            yield from iter_markers(item)
    elif isinstance(node, dict):
        for value in node.values():
            yield from iter_markers(value)


def stamp_locations(node: Any, location: str, missing_only: bool = False) -> Any:
    """Return ``node`` with every file marker stamped with ``location``.

    Containers are rebuilt; scalars are returned unchanged.  With
    ``missing_only``, markers that already carry a location keep it.
    """
    if isinstance(node, (Reference, ReferenceAll)):
        if missing_only and node.location:
            return node
        return node.with_location(location)
    if isinstance(node, (Flatten, Merge)):
        items = tuple(stamp_locations(i, location, missing_only) for i in node.items)
        return type(node)(items)
    if isinstance(node, list):
        return [stamp_locations(item, location, missing_only) for item in node]
    if isinstance(node, dict):
        return {
            key: stamp_locations(value, location, missing_only)
            for key, value in node.items()
        }
    return node
