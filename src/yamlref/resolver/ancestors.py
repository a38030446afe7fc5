"""Ancestor tracking for cycle detection during depth-first resolution.

The stack mirrors the resolver's call stack: a file is pushed right
before its content is resolved and popped right after, whether the
resolution succeeded or raised.  It is not a cache; a file may be
resolved many times as long as it never appears twice on one path.
"""
from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from yamlref.errors import CircularReferenceError
from yamlref.guard.paths import canonicalize


class AncestorStack:
    """Files currently being resolved, in visitation order.

    Membership is decided on canonical paths so that a symlink back to
    an ancestor is detected as a cycle too.
    """

    def __init__(self) -> None:
        self._paths: list[str] = []
        self._keys: list[str] = []

    @property
    def chain(self) -> tuple[str, ...]:
        """Return the files on the stack, outermost first."""
        return tuple(self._paths)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        return canonicalize(path) in self._keys

    def __len__(self) -> int:
        return len(self._paths)

    def __bool__(self) -> bool:
        return bool(self._paths)

    @contextmanager
    def visiting(self, path: str) -> Iterator[None]:
        """Hold ``path`` on the stack for the duration of the ``with`` block.

        Raises
        ------
        CircularReferenceError
            If ``path`` is already on the stack.  The stack is left
            unchanged in that case.
        """
        key = canonicalize(path)
        if key in self._keys:
            raise CircularReferenceError(path, self.chain)
        self._paths.append(path)
        self._keys.append(key)
        try:
            yield
        finally:
            self._paths.pop()
            self._keys.pop()
