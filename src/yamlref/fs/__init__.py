"""File access module.

Exports the ``FileSystem`` protocol and its local-disk implementation.
"""
from __future__ import annotations

from yamlref.fs.local import FileSystem, LocalFileSystem

__all__ = ["FileSystem", "LocalFileSystem"]
