"""Graph loaders: turn YAML or JSON documents into ``StaticTypeGraph``.

Loaders are plugins.  The two built-ins are registered in
``loader_registry``; further loaders can be added with the registry's
decorator or discovered from the "metanno.loaders" entry-point group.
"""
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

import yaml

from metanno.errors import GraphLoadError
from metanno.plugins.registry import PluginRegistry
from metanno.provider.static import StaticTypeGraph

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "metanno.loaders"


class GraphLoader(ABC):
    """Base class for graph document loaders."""

    #: File suffixes (lower case, with the dot) this loader handles.
    suffixes: tuple[str, ...] = ()

    @abstractmethod
    def load(self, text: str) -> StaticTypeGraph:
        """Parse ``text`` into a graph.

        Raises
        ------
        GraphLoadError
            If the text cannot be decoded.
        GraphFormatError
            If the decoded document has the wrong shape.
        """

    def load_file(self, path: str | Path) -> StaticTypeGraph:
        """Read ``path`` as UTF-8 and parse it."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise GraphLoadError(str(path), "file not found") from None
        except (OSError, UnicodeDecodeError) as exc:
            raise GraphLoadError(str(path), str(exc)) from exc
        try:
            graph = self.load(text)
        except GraphLoadError as exc:
            raise GraphLoadError(str(path), exc.reason) from exc
        logger.debug("Loaded %r from %s", graph, path)
        return graph


loader_registry: PluginRegistry[GraphLoader] = PluginRegistry(GraphLoader, "graph loaders")


@loader_registry.register("yaml")
class YamlGraphLoader(GraphLoader):
    suffixes = (".yaml", ".yml")

    def load(self, text: str) -> StaticTypeGraph:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise GraphLoadError("<string>", f"invalid YAML: {exc}") from exc
        return StaticTypeGraph.from_mapping(data)


@loader_registry.register("json")
class JsonGraphLoader(GraphLoader):
    suffixes = (".json",)

    def load(self, text: str) -> StaticTypeGraph:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise GraphLoadError("<string>", f"invalid JSON: {exc}") from exc
        return StaticTypeGraph.from_mapping(data)


_entrypoints_loaded = False


def discover_loaders() -> None:
    """Register loaders from the "metanno.loaders" entry-point group.

    Runs once per process; later calls return immediately.
    """
    global _entrypoints_loaded
    if _entrypoints_loaded:
        return
    added = loader_registry.load_entrypoints(ENTRY_POINT_GROUP)
    _entrypoints_loaded = True
    if added:
        logger.debug("Discovered %d graph loader(s) from %r", added, ENTRY_POINT_GROUP)


def loader_for(path: str | Path) -> GraphLoader:
    """Pick a registered loader by file suffix; YAML when nothing matches."""
    discover_loaders()
    suffix = Path(path).suffix.lower()
    for _name, cls in loader_registry.items():
        if suffix in cls.suffixes:
            return cls()
    return YamlGraphLoader()


def load_graph(path: str | Path, loader: str | None = None) -> StaticTypeGraph:
    """Load a graph document, by explicit loader name or by suffix.

    Raises
    ------
    PluginNotFoundError
        If ``loader`` names no registered or installed loader.
    """
    if loader:
        discover_loaders()
        instance = loader_registry.get(loader)()
    else:
        instance = loader_for(path)
    return instance.load_file(path)
