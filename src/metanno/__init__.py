"""metanno — transitive meta-annotation resolution for source analysis tools.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import metanno

    graph = metanno.load_graph("stereotypes.yaml")
    facade = metanno.AnnotationQueryFacade(graph)

    site = graph.declaration("test.MyComponent")
    facade.is_annotated_with(site, "org.springframework.stereotype.Component")

    # One-off closure without keeping a facade around
    metanno.closure_of(graph, "org.springframework.context.annotation.Configuration")

    metanno.__version__
    '0.1.0'
"""
from __future__ import annotations

from pathlib import Path

from metanno.config import ResolverConfig
from metanno.model.types import (
    IGNORED_PREFIXES,
    AnnotationUsage,
    ClosureRecord,
    Declaration,
    TypeIdentifier,
)
from metanno.provider.base import TypeGraphProvider
from metanno.provider.static import StaticTypeGraph
from metanno.query.facade import AnnotationQueryFacade

__version__: str = "0.1.0"


def load_graph(path: str | Path, loader: str | None = None) -> StaticTypeGraph:
    """Load a YAML or JSON graph document into a ``StaticTypeGraph``.

    Parameters
    ----------
    path:
        The document to read.
    loader:
        Registered loader name; chosen by file suffix when omitted.

    Raises
    ------
    metanno.errors.GraphLoadError
        If the file cannot be read or decoded.
    metanno.errors.GraphFormatError
        If the document has the wrong shape.
    """
    from metanno.provider.loaders import load_graph as _load_graph

    return _load_graph(path, loader=loader)


def closure_of(
    provider: TypeGraphProvider,
    name: TypeIdentifier | str,
    config: ResolverConfig | None = None,
) -> ClosureRecord | None:
    """Compute the closure of one annotation type with a throwaway cache.

    Returns
    -------
    ClosureRecord | None
        ``None`` for blank names and for built-in annotation types.
    """
    return AnnotationQueryFacade(provider, config=config).closure_of(name)


__all__ = [
    "__version__",
    "IGNORED_PREFIXES",
    "AnnotationQueryFacade",
    "AnnotationUsage",
    "ClosureRecord",
    "Declaration",
    "ResolverConfig",
    "StaticTypeGraph",
    "TypeGraphProvider",
    "TypeIdentifier",
    "closure_of",
    "load_graph",
]
