"""Path guard module.

Exports the allow-list type and the canonicalizing path checks.
"""
from __future__ import annotations

from yamlref.guard.paths import AllowedRoots, canonicalize, is_allowed, is_within

__all__ = ["AllowedRoots", "canonicalize", "is_allowed", "is_within"]
