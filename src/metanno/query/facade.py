"""Query API over meta-annotation hierarchies.

``AnnotationQueryFacade`` answers whether an annotation occurrence
(or a declaration carrying annotations) stands for some target annotation
type, directly or through a chain of meta-annotations.  It is how a
framework marker such as ``@Component`` is recognized behind custom
stereotypes like ``@Configuration`` or a project's own ``@MyService``.

One facade holds one closure cache.  It is safe to share between the
worker threads of a single analysis pass; when the sources change, create
a new facade.

Degraded input never raises: unresolved occurrences, missing declarations
and ``None`` or blank targets all yield ``False`` or an empty tuple.
Occurrences of built-in annotation types (the ignored namespace) are
treated like unresolved occurrences.

Usage
-----
::

    from metanno import AnnotationQueryFacade, StaticTypeGraph

    facade = AnnotationQueryFacade(graph)
    facade.is_annotated_with(declaration, "org.springframework.stereotype.Component")
    facade.inherits_type(usage, "org.springframework.stereotype.Component")
    facade.hierarchy_of(usage)
"""
from __future__ import annotations

from typing import Any

from metanno.closure.cache import ClosureCache
from metanno.closure.computer import ClosureComputer
from metanno.config import ResolverConfig
from metanno.model.types import ClosureRecord, TypeIdentifier
from metanno.provider.base import TypeGraphProvider


class AnnotationQueryFacade:
    """Answers meta-annotation queries through a shared closure cache.

    Parameters
    ----------
    provider:
        Resolves occurrences and lists declared meta-annotations.
    config:
        Resolver settings; defaults to ``ResolverConfig()``.
    """

    def __init__(
        self,
        provider: TypeGraphProvider,
        config: ResolverConfig | None = None,
    ) -> None:
        self._provider = provider
        self._config = config if config is not None else ResolverConfig()
        self._cache = ClosureCache(
            ClosureComputer(provider, ignored_prefixes=self._config.ignored_prefixes)
        )

    @property
    def cache(self) -> ClosureCache:
        return self._cache

    @property
    def config(self) -> ResolverConfig:
        return self._config

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_annotated_with(self, site: Any, target: TypeIdentifier | str | None) -> bool:
        """Return True if any annotation at ``site`` is or carries ``target``.

        Parameters
        ----------
        site:
            A declaration exposing its applied annotations, in declared
            order, as ``site.annotations``.
        target:
            Qualified name of the annotation type looked for.
        """
        identifier = TypeIdentifier.coerce(target)
        if identifier is None or site is None:
            return False
        for usage in getattr(site, "annotations", None) or ():
            if self.inherits_type(usage, identifier, exclude_concrete_type=False):
                return True
        return False

    def inherits_type(
        self,
        use: Any,
        target: TypeIdentifier | str | None,
        exclude_concrete_type: bool = False,
    ) -> bool:
        """Return True if the occurrence ``use`` is or carries ``target``.

        Parameters
        ----------
        use:
            One annotation occurrence.
        target:
            Qualified name of the annotation type looked for.
        exclude_concrete_type:
            When True, ``use``'s own type does not count; only types
            reached through meta-annotations do.
        """
        identifier = TypeIdentifier.coerce(target)
        if identifier is None:
            return False
        record = self._record_for(use)
        if record is None:
            return False
        if not exclude_concrete_type and record.root == identifier:
            return True
        return identifier in record

    def hierarchy_of(
        self, use: Any, exclude_concrete_type: bool = False
    ) -> tuple[TypeIdentifier, ...]:
        """Return every type ``use`` carries through meta-annotations.

        The result is in discovery order and never includes the type of
        ``use`` itself, whatever ``exclude_concrete_type`` says.
        """
        record = self._record_for(use)
        return record.members if record is not None else ()

    def closure_of(self, target: TypeIdentifier | str) -> ClosureRecord | None:
        """Return the closure of an annotation type given by name.

        ``None`` for blank names and for types in the ignored namespace.
        """
        identifier = TypeIdentifier.coerce(target)
        if identifier is None or self._cache.computer.is_ignored(identifier):
            return None
        return self._cache.get_or_compute(identifier)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _record_for(self, use: Any) -> ClosureRecord | None:
        if use is None:
            return None
        identifier = self._provider.resolve(use)
        if identifier is None or self._cache.computer.is_ignored(identifier):
            return None
        return self._cache.get_or_compute(identifier)
