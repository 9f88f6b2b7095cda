"""Name-keyed registry of plugin classes.

metanno uses one registry, ``metanno.provider.loaders.loader_registry``,
to hold graph loaders.  Built-in loaders register with the decorator at
import time; installed packages contribute more through an entry-point
group, read by ``load_entrypoints``.

Example
-------
::

    @loader_registry.register("toml")
    class TomlGraphLoader(GraphLoader):
        suffixes = (".toml",)

        def load(self, text: str) -> StaticTypeGraph:
            ...
"""
from __future__ import annotations

import importlib.metadata
import logging
from abc import ABC
from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=ABC)


class PluginNotFoundError(KeyError):
    """No plugin is registered under the requested name."""

    def __init__(self, name: str, registry_name: str, available: list[str] | None = None) -> None:
        self.plugin_name = name
        self.registry_name = registry_name
        choices = ", ".join(available) if available else "none"
        super().__init__(
            f"No plugin named {name!r} in the {registry_name!r} registry "
            f"(available: {choices})."
        )


class PluginAlreadyRegisteredError(ValueError):
    """A second plugin tried to claim a name already in use."""

    def __init__(self, name: str, registry_name: str) -> None:
        self.plugin_name = name
        self.registry_name = registry_name
        super().__init__(
            f"Plugin {name!r} is already registered in the {registry_name!r} registry."
        )


class PluginRegistry(Generic[T]):
    """Plugin classes sharing one abstract base, keyed by name.

    Parameters
    ----------
    base_class:
        Every registered class must subclass it.
    name:
        Shown in error messages.
    """

    def __init__(self, base_class: type[T], name: str) -> None:
        self._base_class = base_class
        self._name = name
        self._plugins: dict[str, type[T]] = {}

    @property
    def name(self) -> str:
        return self._name

    def register(self, name: str) -> Callable[[type[T]], type[T]]:
        """Class decorator form of ``register_class``."""

        def decorator(cls: type[T]) -> type[T]:
            self.register_class(name, cls)
            return cls

        return decorator

    def register_class(self, name: str, cls: type[T]) -> None:
        """Register ``cls`` under ``name``.

        Raises
        ------
        PluginAlreadyRegisteredError
            If ``name`` is taken.
        TypeError
            If ``cls`` is not a subclass of the registry's base class.
        """
        if name in self._plugins:
            raise PluginAlreadyRegisteredError(name, self._name)
        if not (isinstance(cls, type) and issubclass(cls, self._base_class)):
            raise TypeError(
                f"Cannot register {cls!r} under {name!r}: "
                f"not a subclass of {self._base_class.__name__}."
            )
        self._plugins[name] = cls
        logger.debug("Registered %r -> %s in %r", name, cls.__qualname__, self._name)

    def get(self, name: str) -> type[T]:
        """Return the class registered under ``name``.

        Raises
        ------
        PluginNotFoundError
            If nothing is registered under ``name``.
        """
        if name not in self._plugins:
            raise PluginNotFoundError(name, self._name, self.list_plugins())
        return self._plugins[name]

    def list_plugins(self) -> list[str]:
        return sorted(self._plugins)

    def items(self) -> Iterator[tuple[str, type[T]]]:
        """``(name, class)`` pairs in name order."""
        for name in self.list_plugins():
            yield name, self._plugins[name]

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)

    def __repr__(self) -> str:
        return f"PluginRegistry({self._name!r}, {self._base_class.__name__}, {self.list_plugins()})"

    def load_entrypoints(self, group: str) -> int:
        """Register the classes declared under the entry-point ``group``.

        Names already present are left alone.  An entry-point that fails
        to import, or does not point at a subclass of the base class, is
        logged and skipped.

        Returns
        -------
        int
            Number of newly registered plugins.
        """
        added = 0
        for ep in importlib.metadata.entry_points(group=group):
            if ep.name in self._plugins:
                continue
            try:
                cls = ep.load()
            except Exception:
                logger.exception("Cannot import entry-point %r from %r; skipping.", ep.name, group)
                continue
            try:
                self.register_class(ep.name, cls)
            except TypeError:
                logger.warning("Entry-point %r is not a %s; skipping.", ep.name, self._base_class.__name__)
                continue
            added += 1
        return added
