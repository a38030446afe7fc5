"""Sequence operators module.

Exports ``flatten`` and ``merge`` along with the mapping check that
guards ``merge``.
"""
from __future__ import annotations

from yamlref.operators.sequence import check_mappings, flatten, merge

__all__ = ["flatten", "merge", "check_mappings"]
