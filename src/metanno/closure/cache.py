"""Thread-safe, compute-once memoization of closures.

``ClosureCache.get_or_compute`` runs at most one traversal per type,
however many threads ask for it at the same time.  Threads asking for
the same missing type wait on a per-key lock while one of them computes;
threads asking for different types never wait on each other's
traversals.

Entries are never evicted or replaced.  A cache belongs to a single
analysis session over a fixed set of sources; when the sources change,
build a new cache (or a new ``AnnotationQueryFacade``).

Usage
-----
::

    cache = ClosureCache(ClosureComputer(provider))
    record = cache.get_or_compute(TypeIdentifier("test.CustomComponent"))
"""
from __future__ import annotations

import logging
import threading

from metanno.closure.computer import ClosureComputer
from metanno.model.types import ClosureRecord, TypeIdentifier

logger = logging.getLogger(__name__)


class ClosureCache:
    """Append-only map from annotation type to its ``ClosureRecord``.

    Parameters
    ----------
    computer:
        Produces records for types not cached yet.  Callers must not ask
        for types in the computer's ignored namespace.
    """

    def __init__(self, computer: ClosureComputer) -> None:
        self._computer = computer
        self._records: dict[TypeIdentifier, ClosureRecord] = {}
        self._key_locks: dict[TypeIdentifier, threading.Lock] = {}
        self._lock = threading.Lock()
        self._computations = 0

    @property
    def computer(self) -> ClosureComputer:
        return self._computer

    @property
    def computations(self) -> int:
        """Number of traversals this cache has actually run."""
        return self._computations

    def get_or_compute(self, identifier: TypeIdentifier) -> ClosureRecord:
        """Return the cached closure of ``identifier``, computing it once.

        If the computation raises, nothing is stored and the exception
        propagates; the next call for the same type tries again.
        """
        record = self._records.get(identifier)
        if record is not None:
            return record

        with self._lock:
            record = self._records.get(identifier)
            if record is not None:
                return record
            key_lock = self._key_locks.setdefault(identifier, threading.Lock())

        with key_lock:
            record = self._records.get(identifier)
            if record is not None:
                logger.debug("Closure of %s computed by another thread", identifier)
                return record
            record = self._computer.compute(identifier)
            with self._lock:
                self._records[identifier] = record
                self._key_locks.pop(identifier, None)
                self._computations += 1
        return record

    def get(self, identifier: TypeIdentifier) -> ClosureRecord | None:
        """Return the cached record without computing, or ``None``."""
        return self._records.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"ClosureCache(entries={len(self._records)}, computations={self._computations})"
