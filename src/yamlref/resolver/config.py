"""Configuration for :class:`~yamlref.resolver.engine.Resolver`."""
from __future__ import annotations

from dataclasses import dataclass, field

from yamlref.fs.local import FileSystem, LocalFileSystem

DEFAULT_EXTENSIONS: tuple[str, ...] = (".yaml", ".yml")


@dataclass(frozen=True)
class ResolverConfig:
    """Settings shared by every step of one resolution.

    Parameters
    ----------
    extensions:
        File suffixes a ``!reference-all`` match must end with to be
        loaded (default ``.yaml`` and ``.yml``).
    filesystem:
        Where files are checked, read and globbed (default: local disk).
    """

    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    filesystem: FileSystem = field(default_factory=LocalFileSystem)

    def is_document(self, path: str) -> bool:
        """Return True if ``path`` has a recognized document extension."""
        return path.endswith(self.extensions)
