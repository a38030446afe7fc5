"""yaml-reference: resolve cross-file references in YAML documents.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    # config/main.yaml
    #   database: !reference {path: ./database.yaml}
    #   services: !reference-all {glob: ./services/*.yaml}
    #   ports: !flatten [80, [443, 8443]]
    #   settings: !merge [{debug: false}, {debug: true}]

    import yamlref

    data = yamlref.load("config/main.yaml")

    # Allow references into a sibling directory as well
    data = yamlref.load("config/main.yaml", allow_paths=["shared/"])

    # Inside an event loop
    data = await yamlref.load_async("config/main.yaml")

    yamlref.__version__
    '0.1.0'
"""
from __future__ import annotations

import asyncio
import os
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from yamlref.errors import (
    CircularReferenceError,
    FileReadError,
    InvalidMarkerError,
    InvalidPatternError,
    MergeTypeError,
    MissingLocationError,
    NoMatchError,
    ParseError,
    PathNotAllowedError,
    ReferencedFileNotFoundError,
    SerializationError,
    YamlRefError,
)
from yamlref.markers.nodes import Flatten, Merge, Reference, ReferenceAll

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from yamlref.resolver.config import ResolverConfig


def load(
    path: str | os.PathLike[str],
    allow_paths: Iterable[str | os.PathLike[str]] | None = None,
    *,
    config: "ResolverConfig | None" = None,
) -> Any:
    """Load a YAML file and resolve every marker in it, recursively.

    Parameters
    ----------
    path:
        The entry YAML file.
    allow_paths:
        Extra directories references may read from.  The entry file's
        own directory is always allowed.
    config:
        Extensions and filesystem to use.

    Returns
    -------
    Any
        The fully resolved document: plain dicts, lists and scalars.

    Raises
    ------
    yamlref.YamlRefError
        On any parse, reference, allow-list, cycle or merge error.
    """
    from yamlref.resolver.engine import Resolver

    return Resolver.for_entry(path, allow_paths, config).load(path)


async def load_async(
    path: str | os.PathLike[str],
    allow_paths: Iterable[str | os.PathLike[str]] | None = None,
    *,
    config: "ResolverConfig | None" = None,
) -> Any:
    """Async variant of :func:`load`.

    Runs the same resolution in a worker thread so the event loop is not
    blocked by file reads.
    """
    roots = list(allow_paths) if allow_paths is not None else None
    return await asyncio.to_thread(load, path, roots, config=config)


def resolve(
    node: Any,
    location: str | os.PathLike[str],
    allow_paths: Iterable[str | os.PathLike[str]] | None = None,
    *,
    config: "ResolverConfig | None" = None,
) -> Any:
    """Resolve markers in an already-parsed or hand-built tree.

    Parameters
    ----------
    node:
        Document tree, possibly holding marker nodes.
    location:
        Path of the file the tree stands for.  Relative marker paths are
        resolved against its directory, and markers without a location
        are stamped with it.
    allow_paths:
        Extra directories references may read from.
    config:
        Extensions and filesystem to use.
    """
    from yamlref.markers.nodes import stamp_locations
    from yamlref.resolver.engine import Resolver

    absolute = os.path.abspath(os.fspath(location))
    resolver = Resolver.for_entry(absolute, allow_paths, config)
    with resolver.ancestors.visiting(absolute):
        return resolver.resolve(stamp_locations(node, absolute, missing_only=True))


def parse_file(path: str | os.PathLike[str]) -> Any:
    """Parse a YAML file without resolving its markers."""
    from yamlref.parser.loader import parse_file as _parse_file

    return _parse_file(path)


def parse_text(text: str, location: str | None = None) -> Any:
    """Parse YAML text without resolving its markers."""
    from yamlref.parser.loader import parse_text as _parse_text

    return _parse_text(text, location)


__all__ = [
    "__version__",
    "load",
    "load_async",
    "resolve",
    "parse_file",
    "parse_text",
    # Markers
    "Reference",
    "ReferenceAll",
    "Flatten",
    "Merge",
    # Errors
    "YamlRefError",
    "InvalidMarkerError",
    "MissingLocationError",
    "ParseError",
    "ReferencedFileNotFoundError",
    "CircularReferenceError",
    "NoMatchError",
    "PathNotAllowedError",
    "MergeTypeError",
    "InvalidPatternError",
    "FileReadError",
    "SerializationError",
]
