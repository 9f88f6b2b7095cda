"""Closure computation and caching."""
from __future__ import annotations

from metanno.closure.cache import ClosureCache
from metanno.closure.computer import ClosureComputer

__all__ = ["ClosureCache", "ClosureComputer"]
