"""The semantic-binding contract metanno consumes.

metanno never parses source or resolves names itself.  Callers supply an
object satisfying ``TypeGraphProvider``, typically an adapter over their
compiler or indexer's binding information.

Implementations
---------------
- :class:`~metanno.provider.static.StaticTypeGraph`: an in-memory graph,
  loadable from YAML or JSON documents.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from metanno.model.types import TypeIdentifier


@runtime_checkable
class TypeGraphProvider(Protocol):
    """Protocol for semantic-binding back-ends.

    Both methods must be deterministic for a fixed program snapshot and
    safe to call from several threads at once.  metanno never mutates a
    provider.
    """

    def resolve(self, usage: Any) -> TypeIdentifier | None:
        """Return the type an annotation occurrence binds to.

        Parameters
        ----------
        usage:
            One annotation occurrence in the caller's own AST representation.

        Returns
        -------
        TypeIdentifier | None
            ``None`` when the binding cannot be determined.
        """
        ...  # pragma: no cover

    def meta_annotations_of(self, identifier: TypeIdentifier) -> Sequence[TypeIdentifier]:
        """Return the annotations declared directly on ``identifier``.

        Returns
        -------
        Sequence[TypeIdentifier]
            In source declaration order; empty when there are none or the
            declaration is unavailable.
        """
        ...  # pragma: no cover
