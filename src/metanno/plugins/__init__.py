"""Plugin subsystem for metanno.

Third-party graph loaders register through ``importlib.metadata``
entry-points in the "metanno.loaders" group.

Example
-------
Declare a loader in pyproject.toml:

.. code-block:: toml

    [project.entry-points."metanno.loaders"]
    jdt-index = "my_package.loaders:JdtIndexLoader"
"""
from __future__ import annotations

from metanno.plugins.registry import (
    PluginAlreadyRegisteredError,
    PluginNotFoundError,
    PluginRegistry,
)

__all__ = ["PluginRegistry", "PluginNotFoundError", "PluginAlreadyRegisteredError"]
