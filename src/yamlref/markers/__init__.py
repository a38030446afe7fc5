"""Marker model module.

Exports the four marker node types and helpers for inspecting trees
that contain them.
"""
from __future__ import annotations

from yamlref.markers.nodes import (
    MARKER_TYPES,
    FileMarker,
    Flatten,
    Marker,
    Merge,
    Reference,
    ReferenceAll,
    is_marker,
    iter_markers,
    stamp_locations,
)

__all__ = [
    "Reference",
    "ReferenceAll",
    "Flatten",
    "Merge",
    "Marker",
    "FileMarker",
    "MARKER_TYPES",
    "is_marker",
    "iter_markers",
    "stamp_locations",
]
