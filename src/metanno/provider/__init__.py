"""Type graph providers.

Exports the ``TypeGraphProvider`` protocol, the in-memory
``StaticTypeGraph`` and the graph document loaders.
"""
from __future__ import annotations

from metanno.provider.base import TypeGraphProvider
from metanno.provider.loaders import (
    GraphLoader,
    JsonGraphLoader,
    YamlGraphLoader,
    load_graph,
    loader_for,
    loader_registry,
)
from metanno.provider.static import StaticTypeGraph

__all__ = [
    "TypeGraphProvider",
    "StaticTypeGraph",
    "GraphLoader",
    "YamlGraphLoader",
    "JsonGraphLoader",
    "load_graph",
    "loader_for",
    "loader_registry",
]
