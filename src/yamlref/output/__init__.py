"""Output module.

Exports the serializer that turns document trees into JSON/YAML text.
"""
from __future__ import annotations

from yamlref.output.serializer import DocumentSerializer, sort_keys

__all__ = ["DocumentSerializer", "sort_keys"]
