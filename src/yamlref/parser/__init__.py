"""YAML parser module.

Exports the marker-aware loader and the ``parse_file`` / ``parse_text``
convenience functions.
"""
from __future__ import annotations

from yamlref.parser.loader import (
    FLATTEN_TAG,
    MERGE_TAG,
    REFERENCE_ALL_TAG,
    REFERENCE_TAG,
    ReferenceLoader,
    parse_file,
    parse_text,
)

__all__ = [
    "ReferenceLoader",
    "parse_file",
    "parse_text",
    "REFERENCE_TAG",
    "REFERENCE_ALL_TAG",
    "FLATTEN_TAG",
    "MERGE_TAG",
]
