"""Resolver configuration.

Usage
-----
::

    from metanno.config import ResolverConfig

    config = ResolverConfig.from_yaml("ignored_prefixes: [java., javax.annotation.]")
    facade = AnnotationQueryFacade(provider, config=config)
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import yaml

from metanno.errors import ConfigError
from metanno.model.types import IGNORED_PREFIXES


@dataclass(frozen=True)
class ResolverConfig:
    """Configuration for :class:`~metanno.query.facade.AnnotationQueryFacade`.

    Parameters
    ----------
    ignored_prefixes:
        Name prefixes of the built-in annotation namespace.  Types whose
        qualified name starts with one of these are never traversed,
        cached or reported.
    """

    ignored_prefixes: tuple[str, ...] = IGNORED_PREFIXES

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ResolverConfig":
        """Build a config from a parsed document; missing keys keep defaults."""
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError("<root>", "expected a mapping")

        unknown = set(data) - {"ignored_prefixes"}
        if unknown:
            raise ConfigError(sorted(unknown)[0], "unknown key")

        raw = data.get("ignored_prefixes", IGNORED_PREFIXES)
        if isinstance(raw, str):
            raw = [raw]
        if not isinstance(raw, (list, tuple)):
            raise ConfigError("ignored_prefixes", "expected a list of strings")
        prefixes: list[str] = []
        for item in raw:
            if not isinstance(item, str) or not item:
                raise ConfigError("ignored_prefixes", f"{item!r} is not a non-empty string")
            prefixes.append(item)
        return cls(ignored_prefixes=tuple(prefixes))

    @classmethod
    def from_yaml(cls, text: str) -> "ResolverConfig":
        """Build a config from YAML text."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError("<root>", f"not valid YAML ({exc})") from exc
        return cls.from_mapping(data)
