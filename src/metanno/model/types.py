"""Value types for annotation type graphs.

Every type here is a frozen dataclass compared structurally, so two
records produced by different calls for the same annotation type are
interchangeable.  Identifiers are fully qualified annotation type names.

Identifiers whose name starts with one of the ``IGNORED_PREFIXES`` belong
to the platform's built-in annotation facility (``java.lang.annotation``
and friends).  Those are never traversed and never reported.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

IGNORED_PREFIXES: tuple[str, ...] = ("java.",)


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TypeIdentifier:
    """Fully qualified name of an annotation type.

    Parameters
    ----------
    name:
        The qualified name, e.g. ``"org.springframework.stereotype.Component"``.
    """

    name: str

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"TypeIdentifier({self.name!r})"

    @property
    def simple_name(self) -> str:
        """The last dotted segment of the name."""
        return self.name.rsplit(".", 1)[-1]

    def in_namespace(self, prefixes: Iterable[str] = IGNORED_PREFIXES) -> bool:
        """Return True if the name starts with any of ``prefixes``."""
        return any(self.name.startswith(prefix) for prefix in prefixes)

    @classmethod
    def coerce(cls, value: "TypeIdentifier | str | None") -> "TypeIdentifier | None":
        """Turn a caller-supplied name into an identifier.

        Returns ``None`` for ``None`` and for blank strings, which callers
        treat as "matches nothing".
        """
        if value is None:
            return None
        if isinstance(value, TypeIdentifier):
            return value if value.name else None
        if isinstance(value, str):
            stripped = value.strip()
            return cls(stripped) if stripped else None
        return None


# ---------------------------------------------------------------------------
# Closures
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ClosureRecord:
    """All annotation types ``root`` transitively carries.

    ``members`` is ordered by first discovery during a depth-first,
    pre-order walk and never contains ``root`` itself or any type from
    the ignored namespace.

    Parameters
    ----------
    root:
        The annotation type this closure belongs to.
    members:
        Meta-annotation types reachable from ``root``.
    """

    root: TypeIdentifier
    members: tuple[TypeIdentifier, ...] = field(default=())

    def __contains__(self, item: object) -> bool:
        identifier = TypeIdentifier.coerce(item) if isinstance(item, str) else item
        return identifier in self.members

    def __iter__(self) -> Iterator[TypeIdentifier]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def inherits(self, target: "TypeIdentifier | str") -> bool:
        """Return True if ``target`` is reachable through meta-annotations."""
        identifier = TypeIdentifier.coerce(target)
        return identifier is not None and identifier in self.members

    @property
    def names(self) -> list[str]:
        """Member names, in discovery order."""
        return [member.name for member in self.members]


# ---------------------------------------------------------------------------
# Source-side shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AnnotationUsage:
    """One annotation written at a declaration site.

    Parameters
    ----------
    type_name:
        The qualified type the occurrence binds to, or ``None`` when the
        binding could not be determined.
    line:
        1-based line of the occurrence, 0 when unknown.
    col:
        1-based column of the occurrence, 0 when unknown.
    """

    type_name: str | None
    line: int = 0
    col: int = 0


@dataclass(frozen=True, slots=True)
class Declaration:
    """A declaration (type, method, field) and the annotations applied to it."""

    name: str
    annotations: tuple[AnnotationUsage, ...] = field(default=())
