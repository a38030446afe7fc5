"""Depth-first resolution of marker nodes into plain YAML data.

The ``Resolver`` walks a parsed tree and replaces every marker:

* ``Reference`` becomes the resolved content of the referenced file;
* ``ReferenceAll`` becomes a list of the resolved contents of every
  matching file, ordered by absolute path;
* ``Flatten`` becomes its resolved items, flattened;
* ``Merge`` becomes the shallow last-write-wins merge of its resolved,
  flattened items.

Siblings are resolved strictly one after another.  A single
``AncestorStack`` is shared by the whole walk and detects cycles; an
``AllowedRoots`` allow-list confines every file read.  Any error aborts
the walk; no partial result is returned.

Usage
-----
::

    from yamlref.resolver import Resolver

    resolver = Resolver.for_entry("config/main.yaml", ["shared/"])
    data = resolver.load("config/main.yaml")
"""
from __future__ import annotations

import glob
import logging
import os
from collections.abc import Iterable
from typing import Any

from yamlref.errors import (
    MissingLocationError,
    NoMatchError,
    PathNotAllowedError,
    ReferencedFileNotFoundError,
)
from yamlref.guard.paths import AllowedRoots
from yamlref.markers.nodes import FileMarker, Flatten, Merge, Reference, ReferenceAll
from yamlref.operators.sequence import check_mappings, flatten, merge
from yamlref.parser.loader import parse_file
from yamlref.resolver.ancestors import AncestorStack
from yamlref.resolver.config import ResolverConfig

logger = logging.getLogger(__name__)


class Resolver:
    """Replaces markers in a document tree with the content they designate.

    A ``Resolver`` holds the mutable ancestor stack of one resolution;
    create a new instance per top-level call and never share one between
    threads.

    Parameters
    ----------
    allowed_roots:
        Directories references may read from.
    config:
        Extensions and filesystem to use (default ``ResolverConfig()``).
    """

    def __init__(
        self, allowed_roots: AllowedRoots, config: ResolverConfig | None = None
    ) -> None:
        self.allowed_roots = allowed_roots
        self.config = config if config is not None else ResolverConfig()
        self._ancestors = AncestorStack()

    @classmethod
    def for_entry(
        cls,
        entry_file: str | os.PathLike[str],
        allow_paths: Iterable[str | os.PathLike[str]] | None = None,
        config: ResolverConfig | None = None,
    ) -> "Resolver":
        """Return a resolver whose allow-list is built for ``entry_file``."""
        return cls(AllowedRoots.for_entry(entry_file, allow_paths), config)

    @property
    def ancestors(self) -> AncestorStack:
        """The files currently being resolved."""
        return self._ancestors

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def load(self, entry_file: str | os.PathLike[str]) -> Any:
        """Parse ``entry_file`` and return its fully resolved content.

        Raises
        ------
        YamlRefError
            Any error from the taxonomy in :mod:`yamlref.errors`.
        """
        path = os.path.abspath(os.fspath(entry_file))
        if not self.config.filesystem.exists(path):
            raise ReferencedFileNotFoundError(path)
        with self._ancestors.visiting(path):
            return self._resolve_file(path)

    def resolve(self, node: Any) -> Any:
        """Return ``node`` with every marker in it resolved."""
        if isinstance(node, Reference):
            return self._resolve_reference(node)
        if isinstance(node, ReferenceAll):
            return self._resolve_reference_all(node)
        if isinstance(node, Flatten):
            return flatten(self._resolve_items(node.items))
        if isinstance(node, Merge):
            return merge(check_mappings(flatten(self._resolve_items(node.items))))
        if isinstance(node, list):
            return self._resolve_items(node)
        if isinstance(node, dict):
            return {key: self.resolve(value) for key, value in node.items()}
        return node

    # ------------------------------------------------------------------
    # Marker handlers
    # ------------------------------------------------------------------

    def _resolve_items(self, items: Iterable[Any]) -> list[Any]:
        return [self.resolve(item) for item in items]

    def _resolve_file(self, path: str) -> Any:
        """Parse ``path`` and resolve its content; the caller holds it on the stack."""
        tree = parse_file(path, self.config.filesystem)
        return self.resolve(tree)

    def _resolve_reference(self, ref: Reference) -> Any:
        location = _require_location(ref)
        target = os.path.normpath(os.path.join(os.path.dirname(location), ref.path))

        if not self.allowed_roots.allows(target):
            raise PathNotAllowedError(target, self.allowed_roots.roots)

        with self._ancestors.visiting(target):
            if not self.config.filesystem.exists(target):
                raise ReferencedFileNotFoundError(target, location)
            logger.debug("Resolving reference %s (from %s)", target, location)
            return self._resolve_file(target)

    def _resolve_reference_all(self, ref: ReferenceAll) -> list[Any]:
        location = _require_location(ref)
        base = os.path.dirname(location)
        pattern = os.path.join(glob.escape(base), ref.glob)

        matches: list[str] = []
        for match in self.config.filesystem.glob(pattern):
            path = os.path.normpath(os.path.abspath(match))
            if not self.config.is_document(path):
                continue
            if not self.allowed_roots.allows(path):
                logger.debug("Excluding %s from %s: outside allowed paths", path, ref.glob)
                continue
            matches.append(path)

        if not matches:
            raise NoMatchError(ref.glob, base)

        resolved: list[Any] = []
        for path in sorted(set(matches)):
            with self._ancestors.visiting(path):
                logger.debug("Resolving %s (glob %s from %s)", path, ref.glob, location)
                resolved.append(self._resolve_file(path))
        return resolved


def _require_location(marker: FileMarker) -> str:
    if not marker.location:
        raise MissingLocationError(marker)
    return marker.location
