"""Value types shared by every metanno component.

Exports ``TypeIdentifier``, ``ClosureRecord``, ``AnnotationUsage``,
``Declaration`` and the default ignored namespace.
"""
from __future__ import annotations

from metanno.model.types import (
    IGNORED_PREFIXES,
    AnnotationUsage,
    ClosureRecord,
    Declaration,
    TypeIdentifier,
)

__all__ = [
    "IGNORED_PREFIXES",
    "AnnotationUsage",
    "ClosureRecord",
    "Declaration",
    "TypeIdentifier",
]
