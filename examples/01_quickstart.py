"""Quickstart: load a type graph and ask meta-annotation questions."""
from __future__ import annotations

from pathlib import Path

import metanno

GRAPH = Path(__file__).parent / "spring_stereotypes.yaml"
COMPONENT = "org.springframework.stereotype.Component"
APPLICATION = "org.springframework.boot.autoconfigure.SpringBootApplication"


def main() -> None:
    graph = metanno.load_graph(GRAPH)
    facade = metanno.AnnotationQueryFacade(graph)

    for name in ("test.MyApplication", "test.MyComponent", "test.Unbound"):
        site = graph.declaration(name)
        print(f"{name} is a component: {facade.is_annotated_with(site, COMPONENT)}")

    usage = metanno.AnnotationUsage(APPLICATION)
    print(f"\n@{usage.type_name.rsplit('.', 1)[-1]} carries:")
    for member in facade.hierarchy_of(usage):
        print(f"  {member}")


if __name__ == "__main__":
    main()
