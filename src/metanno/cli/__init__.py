"""CLI package.

The ``cli`` sub-package contains the Click application.  It should
import only from the public API of the parent package and from
``metanno.errors`` / ``metanno.provider.loaders``.
"""
from __future__ import annotations
