"""JSON and YAML output for resolved (or still unresolved) documents.

Resolved documents are plain dict/list/scalar trees and serialize to
either format directly.  Mapping keys are sorted recursively so that
output is stable regardless of the order keys appeared in the sources.

Unresolved trees may still hold marker nodes; ``to_yaml`` writes them
back out with their tags, which is what ``yaml-reference parse`` shows.

Usage
-----
::

    from yamlref.output import DocumentSerializer

    serializer = DocumentSerializer()
    print(serializer.to_json(resolved))
"""
from __future__ import annotations

import json
from typing import Any

import yaml

from yamlref.errors import SerializationError
from yamlref.markers.nodes import Flatten, Merge, Reference, ReferenceAll
from yamlref.parser.loader import FLATTEN_TAG, MERGE_TAG, REFERENCE_ALL_TAG, REFERENCE_TAG


def sort_keys(data: Any) -> Any:
    """Return a copy of ``data`` with every mapping's keys sorted alphabetically."""
    if isinstance(data, dict):
        return {key: sort_keys(data[key]) for key in sorted(data, key=str)}
    if isinstance(data, list):
        return [sort_keys(item) for item in data]
    if isinstance(data, Flatten):
        return Flatten(tuple(sort_keys(item) for item in data.items))
    if isinstance(data, Merge):
        return Merge(tuple(sort_keys(item) for item in data.items))
    return data


class _MarkerDumper(yaml.SafeDumper):
    """``SafeDumper`` that writes marker nodes back out with their tags."""


def _represent_reference(dumper: yaml.SafeDumper, ref: Reference) -> yaml.Node:
    return dumper.represent_mapping(REFERENCE_TAG, {"path": ref.path})


def _represent_reference_all(dumper: yaml.SafeDumper, ref: ReferenceAll) -> yaml.Node:
    return dumper.represent_mapping(REFERENCE_ALL_TAG, {"glob": ref.glob})


def _represent_flatten(dumper: yaml.SafeDumper, marker: Flatten) -> yaml.Node:
    return dumper.represent_sequence(FLATTEN_TAG, list(marker.items))


def _represent_merge(dumper: yaml.SafeDumper, marker: Merge) -> yaml.Node:
    return dumper.represent_sequence(MERGE_TAG, list(marker.items))


_MarkerDumper.add_representer(Reference, _represent_reference)
_MarkerDumper.add_representer(ReferenceAll, _represent_reference_all)
_MarkerDumper.add_representer(Flatten, _represent_flatten)
_MarkerDumper.add_representer(Merge, _represent_merge)


class DocumentSerializer:
    """Converts document trees to JSON or YAML text.

    Parameters
    ----------
    sort:
        Sort mapping keys recursively before writing (default ``True``).
    """

    def __init__(self, sort: bool = True) -> None:
        self.sort = sort

    def _prepare(self, data: Any) -> Any:
        return sort_keys(data) if self.sort else data

    def to_json(self, data: Any, indent: int = 2) -> str:
        """Serialize a resolved document to a JSON string.

        Raises
        ------
        SerializationError
            If the document holds a value JSON cannot represent, such as
            ``.nan``, ``.inf`` or ``!!binary`` data.
        """
        try:
            return json.dumps(
                self._prepare(data), indent=indent, ensure_ascii=False, allow_nan=False
            )
        except (TypeError, ValueError) as exc:
            raise SerializationError("json", str(exc)) from exc

    def to_yaml(self, data: Any) -> str:
        """Serialize a document, markers included, to a YAML string."""
        return yaml.dump(
            self._prepare(data),
            Dumper=_MarkerDumper,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
