"""Resolution engine module.

Exports the ``Resolver``, its configuration and the ancestor stack used
for cycle detection.
"""
from __future__ import annotations

from yamlref.resolver.ancestors import AncestorStack
from yamlref.resolver.config import DEFAULT_EXTENSIONS, ResolverConfig
from yamlref.resolver.engine import Resolver

__all__ = ["Resolver", "ResolverConfig", "AncestorStack", "DEFAULT_EXTENSIONS"]
