"""Allow-list checks that keep reference resolution inside sandboxed roots.

Every candidate path is canonicalized with ``os.path.realpath`` before
the comparison, so a symlink inside an allowed directory that points
outside of it is rejected.  A root admits a path only on a path-segment
boundary: ``/tmp/allowed`` admits ``/tmp/allowed/a.yaml`` but not
``/tmp/allowed-but-not-really/a.yaml``.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

logger = logging.getLogger(__name__)


def canonicalize(path: str | os.PathLike[str]) -> str:
    """Return the absolute, symlink-free form of ``path``."""
    return os.path.realpath(os.path.abspath(os.fspath(path)))


def is_within(path: str, root: str) -> bool:
    """Return True if canonical ``path`` equals ``root`` or lies below it."""
    if path == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return path.startswith(prefix)


def is_allowed(target: str | os.PathLike[str], allowed_roots: Iterable[str]) -> bool:
    """Return True if ``target`` canonicalizes to a path inside an allowed root.

    Parameters
    ----------
    target:
        Absolute path of the file about to be read.
    allowed_roots:
        Canonical absolute directory paths.
    """
    real = canonicalize(target)
    return any(is_within(real, root) for root in allowed_roots)


@dataclass(frozen=True)
class AllowedRoots:
    """Ordered, de-duplicated set of canonical directories references may read.

    Parameters
    ----------
    roots:
        Canonical absolute directory paths, in priority order.
    """

    roots: tuple[str, ...]

    @classmethod
    def for_entry(
        cls,
        entry_file: str | os.PathLike[str],
        extra_roots: Iterable[str | os.PathLike[str]] | None = None,
    ) -> "AllowedRoots":
        """Build the allow-list for a top-level resolution of ``entry_file``.

        The canonical parent directory of the entry file is always the
        first root; every extra root follows, canonicalized, with
        duplicates dropped.
        """
        candidates = [os.path.dirname(canonicalize(entry_file))]
        candidates.extend(canonicalize(root) for root in extra_roots or ())
        roots: list[str] = []
        for candidate in candidates:
            if candidate not in roots:
                roots.append(candidate)
        logger.debug("Allowed roots: %s", ", ".join(roots))
        return cls(tuple(roots))

    def allows(self, target: str | os.PathLike[str]) -> bool:
        """Return True if ``target`` lies inside one of the roots."""
        return is_allowed(target, self.roots)

    def __iter__(self) -> Iterator[str]:
        return iter(self.roots)

    def __len__(self) -> int:
        return len(self.roots)
