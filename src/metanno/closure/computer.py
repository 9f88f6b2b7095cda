"""Transitive meta-annotation closure of a single annotation type.

The walk is depth-first and pre-order, over the meta-annotations each
type declares, in declaration order.  A single ``discovered`` set is
shared by the whole walk, so a type reached twice (through a cycle or a
shared ancestor) keeps the position of its first discovery and is only
descended into once.  A branch is finished before its next sibling is
visited.

For ``A -> [B, C]`` and ``B -> [D]`` the closure of ``A`` is
``[B, D, C]``.

The walk uses an explicit stack of iterators rather than recursion, so
arbitrarily deep annotation chains cannot exhaust the interpreter stack.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from metanno.model.types import IGNORED_PREFIXES, ClosureRecord, TypeIdentifier
from metanno.provider.base import TypeGraphProvider

logger = logging.getLogger(__name__)

_EXHAUSTED = object()


class ClosureComputer:
    """Computes ``ClosureRecord`` values from a ``TypeGraphProvider``.

    Parameters
    ----------
    provider:
        Supplies the meta-annotations declared on each type.
    ignored_prefixes:
        Name prefixes of the built-in annotation namespace.  Matching
        types are skipped entirely: never added, never descended into.
    """

    def __init__(
        self,
        provider: TypeGraphProvider,
        ignored_prefixes: Iterable[str] = IGNORED_PREFIXES,
    ) -> None:
        self._provider = provider
        self._ignored_prefixes: tuple[str, ...] = tuple(ignored_prefixes)

    @property
    def ignored_prefixes(self) -> tuple[str, ...]:
        return self._ignored_prefixes

    def is_ignored(self, identifier: TypeIdentifier) -> bool:
        return identifier.in_namespace(self._ignored_prefixes)

    def compute(self, root: TypeIdentifier) -> ClosureRecord:
        """Return the closure of ``root``.

        ``root`` itself is never part of the result, even when a cycle
        leads back to it.  Types without meta-annotations, or whose
        declaration the provider cannot find, contribute nothing.
        """
        # dict keeps insertion order, which is the discovery order
        discovered: dict[TypeIdentifier, None] = {}
        stack: list[Iterator[TypeIdentifier | None]] = [self._metas(root)]

        while stack:
            meta = next(stack[-1], _EXHAUSTED)
            if meta is _EXHAUSTED:
                stack.pop()
                continue
            if meta is None or self.is_ignored(meta) or meta in discovered:
                continue
            discovered[meta] = None
            stack.append(self._metas(meta))

        discovered.pop(root, None)
        record = ClosureRecord(root=root, members=tuple(discovered))
        logger.debug("Computed closure of %s: %d member(s)", root, len(record))
        return record

    def _metas(self, identifier: TypeIdentifier) -> Iterator[TypeIdentifier | None]:
        return iter(self._provider.meta_annotations_of(identifier) or ())
