"""Structural sequence operators applied by ``!flatten`` and ``!merge``.

Both operators work on already-resolved values: they never see markers.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from yamlref.errors import MergeTypeError


def flatten(sequence: Iterable[Any]) -> list[Any]:
    """Recursively splice nested lists into a single flat list.

    Non-list elements pass through unchanged and keep their relative
    order; no element of the result is itself a list.

    Example
    -------
    ::

        >>> flatten([1, [2, [3, []]], "x"])
        [1, 2, 3, 'x']
    """
    result: list[Any] = []
    for item in sequence:
        if isinstance(item, list):
            result.extend(flatten(item))
        else:
            result.append(item)
    return result


def check_mappings(sequence: Sequence[Any]) -> list[dict[str, Any]]:
    """Return ``sequence`` as a list of mappings.

    Raises
    ------
    MergeTypeError
        At the first element that is not a ``dict`` (``None``, scalars and
        lists all count as violations).
    """
    for index, item in enumerate(sequence):
        if not isinstance(item, dict):
            raise MergeTypeError(index, item)
    return list(sequence)


def merge(mappings: Iterable[dict[str, Any]]) -> dict[str, Any]:
    """Shallow-merge mappings left to right, last write wins.

    A later value replaces an earlier one for the same key even when
    both are mappings (no deep merge) and even when the later value is
    ``None``.  An empty input yields an empty mapping.
    """
    result: dict[str, Any] = {}
    for mapping in mappings:
        result.update(mapping)
    return result
