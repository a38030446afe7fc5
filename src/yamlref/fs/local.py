"""File access used by the parser and the resolver.

The resolver never touches the disk directly; it goes through a
``FileSystem``.  ``LocalFileSystem`` is the default, backed by
``pathlib`` and the standard-library ``glob`` module.  Tests and
embedding applications may supply any object with the same three
methods, e.g. an in-memory mapping of paths to text.
"""
from __future__ import annotations

import glob as _glob
import logging
import os
import re
from pathlib import Path
from typing import Protocol, runtime_checkable

from yamlref.errors import (
    FileReadError,
    InvalidPatternError,
    ParseError,
    ReferencedFileNotFoundError,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class FileSystem(Protocol):
    """The file operations the resolver depends on."""

    def exists(self, path: str) -> bool:
        """Return True if ``path`` names an existing file."""
        ...

    def read_text(self, path: str) -> str:
        """Return the full text of ``path``.

        Raises
        ------
        ReferencedFileNotFoundError
            If the file does not exist.
        ParseError
            If the file is not valid text in the expected encoding.
        FileReadError
            If the file exists but cannot be read.
        """
        ...

    def glob(self, pattern: str) -> list[str]:
        """Return absolute paths of the files matching ``pattern``, in any order.

        Literal directory text in ``pattern`` arrives escaped with
        ``glob.escape``, so only the trailing glob is pattern syntax.

        Raises
        ------
        InvalidPatternError
            If the pattern cannot be evaluated.
        """
        ...


class LocalFileSystem:
    """``FileSystem`` backed by the local disk.

    Parameters
    ----------
    encoding:
        Text encoding used for every read (default ``"utf-8"``).
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def exists(self, path: str) -> bool:
        return Path(path).is_file()

    def read_text(self, path: str) -> str:
        try:
            return Path(path).read_text(encoding=self.encoding)
        except (FileNotFoundError, IsADirectoryError) as exc:
            raise ReferencedFileNotFoundError(path) from exc
        except UnicodeDecodeError as exc:
            raise ParseError(path, f"invalid {self.encoding}: {exc}") from exc
        except OSError as exc:
            raise FileReadError(path, exc.strerror or str(exc)) from exc

    def glob(self, pattern: str) -> list[str]:
        try:
            matches = _glob.glob(pattern, recursive=True)
        except (re.error, ValueError) as exc:
            raise InvalidPatternError(pattern, str(exc)) from exc
        files = [os.path.abspath(match) for match in matches if os.path.isfile(match)]
        logger.debug("Glob %s matched %d file(s)", pattern, len(files))
        return files

    def __repr__(self) -> str:
        return f"LocalFileSystem(encoding={self.encoding!r})"
