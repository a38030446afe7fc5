"""CLI package.

The ``cli`` sub-package contains the Click application and its
commands. It imports from the public API of the parent package and
from ``yamlref.output`` for rendering, never from the resolver
internals directly.
"""
from __future__ import annotations
