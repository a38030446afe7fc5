"""YAML parser that recognizes the yaml-reference marker tags.

Four local tags are understood on top of PyYAML's safe schema::

    database: !reference {path: ./database.yaml}
    services: !reference-all {glob: ./services/*.yaml}
    ports: !flatten [80, [443, 8443]]
    settings: !merge [{debug: false}, {debug: true}]

``!reference`` and ``!reference-all`` must tag a mapping holding a
string ``path`` / ``glob``; ``!flatten`` and ``!merge`` must tag a
sequence.  Any other shape raises ``InvalidMarkerError``.  Every file
marker is stamped with the absolute path of the file being parsed.

Timestamps are kept as plain strings so that parsed documents stay
JSON-compatible.
"""
from __future__ import annotations

import logging
import os
from typing import Any

import yaml
from yaml.composer import ComposerError

from yamlref.errors import InvalidMarkerError, ParseError
from yamlref.fs.local import FileSystem, LocalFileSystem
from yamlref.markers.nodes import Flatten, Merge, Reference, ReferenceAll

logger = logging.getLogger(__name__)

REFERENCE_TAG = "!reference"
REFERENCE_ALL_TAG = "!reference-all"
FLATTEN_TAG = "!flatten"
MERGE_TAG = "!merge"


class ReferenceLoader(yaml.SafeLoader):
    """``SafeLoader`` that builds marker nodes for the reference tags.

    Parameters
    ----------
    stream:
        YAML text to parse.
    location:
        Absolute path of the file the text came from; stamped on every
        ``Reference`` and ``ReferenceAll`` built by this loader.
    """

    def __init__(self, stream: str, location: str | None = None) -> None:
        super().__init__(stream)
        self.location = location
        self._open_anchors: list[str] = []

    def compose_node(self, parent: yaml.Node | None, index: Any) -> yaml.Node:
        # An alias to an anchor that is still being composed would build a
        # self-containing structure.
        if self.check_event(yaml.AliasEvent):
            event = self.peek_event()
            if event.anchor in self._open_anchors:
                raise ComposerError(
                    None, None, f"found recursive alias {event.anchor!r}", event.start_mark
                )
            return super().compose_node(parent, index)
        anchor = self.peek_event().anchor
        if anchor is None:
            return super().compose_node(parent, index)
        self._open_anchors.append(anchor)
        try:
            return super().compose_node(parent, index)
        finally:
            self._open_anchors.pop()


def _line(node: yaml.Node) -> int:
    return node.start_mark.line + 1


def _marker_property(loader: ReferenceLoader, node: yaml.Node, tag: str, key: str) -> str:
    """Return the string ``key`` property of a mapping-shaped marker."""
    if not isinstance(node, yaml.MappingNode):
        raise InvalidMarkerError(
            f'{tag} tag must be followed by a mapping with a "{key}" property',
            loader.location,
            _line(node),
        )
    mapping = loader.construct_mapping(node, deep=True)
    value = mapping.get(key)
    if value is None:
        raise InvalidMarkerError(
            f'{tag} tag requires a "{key}" property', loader.location, _line(node)
        )
    if not isinstance(value, str):
        raise InvalidMarkerError(
            f'{tag} "{key}" property must be a string', loader.location, _line(node)
        )
    return value


def _marker_items(loader: ReferenceLoader, node: yaml.Node, tag: str) -> list[Any]:
    """Return the constructed items of a sequence-shaped marker."""
    if not isinstance(node, yaml.SequenceNode):
        raise InvalidMarkerError(
            f"{tag} tag must be applied to a sequence, not a "
            f"{'mapping' if isinstance(node, yaml.MappingNode) else 'scalar'}",
            loader.location,
            _line(node),
        )
    return loader.construct_sequence(node, deep=True)


def _construct_reference(loader: ReferenceLoader, node: yaml.Node) -> Reference:
    path = _marker_property(loader, node, REFERENCE_TAG, "path")
    try:
        marker = Reference(path)
    except InvalidMarkerError as exc:
        raise InvalidMarkerError(exc.marker_message, loader.location, _line(node)) from None
    return marker.with_location(loader.location) if loader.location else marker


def _construct_reference_all(loader: ReferenceLoader, node: yaml.Node) -> ReferenceAll:
    pattern = _marker_property(loader, node, REFERENCE_ALL_TAG, "glob")
    try:
        marker = ReferenceAll(pattern)
    except InvalidMarkerError as exc:
        raise InvalidMarkerError(exc.marker_message, loader.location, _line(node)) from None
    return marker.with_location(loader.location) if loader.location else marker


def _construct_flatten(loader: ReferenceLoader, node: yaml.Node) -> Flatten:
    return Flatten(tuple(_marker_items(loader, node, FLATTEN_TAG)))


def _construct_merge(loader: ReferenceLoader, node: yaml.Node) -> Merge:
    return Merge(tuple(_marker_items(loader, node, MERGE_TAG)))


ReferenceLoader.add_constructor(REFERENCE_TAG, _construct_reference)
ReferenceLoader.add_constructor(REFERENCE_ALL_TAG, _construct_reference_all)
ReferenceLoader.add_constructor(FLATTEN_TAG, _construct_flatten)
ReferenceLoader.add_constructor(MERGE_TAG, _construct_merge)
ReferenceLoader.add_constructor(
    "tag:yaml.org,2002:timestamp", yaml.SafeLoader.construct_yaml_str
)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def parse_text(text: str, location: str | None = None) -> Any:
    """Parse YAML ``text`` into a tree that may contain marker nodes.

    Parameters
    ----------
    text:
        YAML source text holding a single document.
    location:
        Absolute path the text was read from.  File markers are stamped
        with it; when ``None`` they are left unstamped.

    Returns
    -------
    Any
        The document tree; ``None`` for an empty document.

    Raises
    ------
    ParseError
        If the text is not valid YAML.
    InvalidMarkerError
        If a marker tag has the wrong shape or an invalid path.
    """
    loader = ReferenceLoader(text, location)
    try:
        return loader.get_single_data()
    except yaml.MarkedYAMLError as exc:
        mark = exc.problem_mark or exc.context_mark
        reason = exc.problem or exc.context or str(exc)
        if mark is None:
            raise ParseError(location or "<string>", reason) from exc
        raise ParseError(
            location or "<string>", reason, mark.line + 1, mark.column + 1
        ) from exc
    except yaml.YAMLError as exc:
        raise ParseError(location or "<string>", str(exc)) from exc
    finally:
        loader.dispose()


def parse_file(path: str | os.PathLike[str], filesystem: FileSystem | None = None) -> Any:
    """Read and parse a YAML file, stamping its absolute path on every marker.

    Parameters
    ----------
    path:
        Path of the file to parse; made absolute before use.
    filesystem:
        Source of the file text (default: the local disk).

    Raises
    ------
    ReferencedFileNotFoundError
        If the file does not exist.
    ParseError
        If the file is not valid YAML.
    """
    fs = filesystem if filesystem is not None else LocalFileSystem()
    absolute = os.path.abspath(os.fspath(path))
    text = fs.read_text(absolute)
    logger.debug("Parsing %s", absolute)
    return parse_text(text, absolute)
