"""Public query surface."""
from __future__ import annotations

from metanno.query.facade import AnnotationQueryFacade

__all__ = ["AnnotationQueryFacade"]
