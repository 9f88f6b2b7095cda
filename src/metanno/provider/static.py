"""In-memory type graph.

``StaticTypeGraph`` holds a snapshot of annotation declarations and the
declaration sites that use them.  It is the provider behind the CLI and a
convenient stand-in for a compiler's binding layer in tests.

Document shape
--------------
::

    annotations:
      org.springframework.context.annotation.Configuration:
        - java.lang.annotation.Documented
        - org.springframework.stereotype.Component
      org.springframework.stereotype.Component:
        - org.springframework.stereotype.Indexed
    declarations:
      test.MyComponent:
        - org.springframework.context.annotation.Configuration
        - null          # an occurrence whose type could not be bound

Only ``annotations`` is required.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from metanno.errors import GraphFormatError
from metanno.model.types import AnnotationUsage, Declaration, TypeIdentifier


class StaticTypeGraph:
    """A ``TypeGraphProvider`` over a fixed mapping.

    Parameters
    ----------
    annotations:
        Annotation type name to the names of its meta-annotations, in
        declaration order.
    declarations:
        Declaration name to the type names of the annotations applied to
        it.  ``None`` entries model occurrences with broken bindings.
    """

    def __init__(
        self,
        annotations: Mapping[str, Iterable[str]],
        declarations: Mapping[str, Iterable[str | None]] | None = None,
    ) -> None:
        self._meta: dict[TypeIdentifier, tuple[TypeIdentifier, ...]] = {
            TypeIdentifier(name): tuple(TypeIdentifier(meta) for meta in metas)
            for name, metas in annotations.items()
        }
        self._declarations: dict[str, Declaration] = {
            name: Declaration(
                name=name,
                annotations=tuple(AnnotationUsage(type_name) for type_name in usages),
            )
            for name, usages in (declarations or {}).items()
        }

    # ------------------------------------------------------------------
    # TypeGraphProvider
    # ------------------------------------------------------------------

    def resolve(self, usage: Any) -> TypeIdentifier | None:
        """Bind an ``AnnotationUsage``; anything else is unresolved."""
        if not isinstance(usage, AnnotationUsage):
            return None
        return TypeIdentifier.coerce(usage.type_name)

    def meta_annotations_of(self, identifier: TypeIdentifier) -> Sequence[TypeIdentifier]:
        return self._meta.get(identifier, ())

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def declaration(self, name: str) -> Declaration:
        """Return the named declaration site.

        Raises
        ------
        KeyError
            If no declaration with that name is part of the graph.
        """
        return self._declarations[name]

    @property
    def declarations(self) -> Mapping[str, Declaration]:
        return MappingProxyType(self._declarations)

    @property
    def annotation_types(self) -> list[TypeIdentifier]:
        """Declared annotation types, in document order."""
        return list(self._meta)

    def __contains__(self, item: object) -> bool:
        identifier = TypeIdentifier.coerce(item) if isinstance(item, str) else item
        return identifier in self._meta

    def __len__(self) -> int:
        return len(self._meta)

    def __repr__(self) -> str:
        return (
            f"StaticTypeGraph(annotations={len(self._meta)}, "
            f"declarations={len(self._declarations)})"
        )

    # ------------------------------------------------------------------
    # Construction from documents
    # ------------------------------------------------------------------

    @classmethod
    def from_mapping(cls, data: Any) -> "StaticTypeGraph":
        """Build a graph from a parsed YAML/JSON document.

        Raises
        ------
        GraphFormatError
            If the document does not follow the shape in the module docstring.
        """
        if not isinstance(data, Mapping):
            raise GraphFormatError("graph document must be a mapping")

        unknown = set(data) - {"annotations", "declarations"}
        if unknown:
            raise GraphFormatError("unknown top-level key", sorted(map(str, unknown))[0])
        if "annotations" not in data:
            raise GraphFormatError("missing required key 'annotations'")

        annotations = _read_section(data["annotations"], "annotations", allow_null=False)
        declarations = _read_section(
            data.get("declarations") or {}, "declarations", allow_null=True
        )
        return cls(annotations, declarations)


def _read_section(
    section: Any, location: str, *, allow_null: bool
) -> dict[str, list[str | None]]:
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise GraphFormatError("expected a mapping of names to lists", location)

    result: dict[str, list[str | None]] = {}
    for key, entries in section.items():
        key_location = f"{location}.{key}"
        if not isinstance(key, str) or not key.strip():
            raise GraphFormatError("names must be non-empty strings", key_location)
        if key.strip() in result:
            raise GraphFormatError(f"duplicate name {key.strip()!r}", key_location)
        if entries is None:
            entries = []
        if not isinstance(entries, list):
            raise GraphFormatError("expected a list of type names", key_location)

        names: list[str | None] = []
        for index, entry in enumerate(entries):
            if entry is None and allow_null:
                names.append(None)
                continue
            if not isinstance(entry, str) or not entry.strip():
                raise GraphFormatError(
                    f"{entry!r} is not a type name", f"{key_location}[{index}]"
                )
            names.append(entry.strip())
        result[key.strip()] = names
    return result
