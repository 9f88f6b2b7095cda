"""Throughput benchmarks for closure queries.

Builds a layered synthetic graph (every type meta-annotated by a few
types of the next layer, plus a built-in marker) and measures cold
queries, which populate the cache, against warm ones served from it.

Run::

    python benchmarks/bench_closure.py
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path
from typing import Any

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from metanno.model.types import AnnotationUsage
from metanno.provider.static import StaticTypeGraph
from metanno.query.facade import AnnotationQueryFacade


def build_layered_graph(layers: int = 8, width: int = 12, fan_out: int = 3) -> StaticTypeGraph:
    """Return a graph whose layer ``n`` types point at ``fan_out`` types of layer ``n + 1``."""
    annotations: dict[str, list[str]] = {}
    for layer in range(layers):
        for index in range(width):
            metas = ["java.lang.annotation.Documented"]
            if layer + 1 < layers:
                metas += [f"L{layer + 1}.T{(index + k) % width}" for k in range(fan_out)]
            annotations[f"L{layer}.T{index}"] = metas
    return StaticTypeGraph(annotations)


def bench_query_throughput(iterations: int = 2000) -> dict[str, Any]:
    """Measure ``inherits_type`` throughput on a cold and a warm facade."""
    graph = build_layered_graph()
    usages = [AnnotationUsage(t.name) for t in graph.annotation_types]
    target = "L7.T0"

    facade = AnnotationQueryFacade(graph)
    start = time.perf_counter()
    for usage in usages:
        facade.inherits_type(usage, target)
    cold_seconds = time.perf_counter() - start

    start = time.perf_counter()
    for i in range(iterations):
        facade.inherits_type(usages[i % len(usages)], target)
    warm_seconds = time.perf_counter() - start

    return {
        "operation": "inherits_type",
        "iterations": iterations,
        "types": len(usages),
        "cold_seconds": round(cold_seconds, 6),
        "ops_per_second": round(iterations / warm_seconds, 1) if warm_seconds > 0 else 0.0,
    }


if __name__ == "__main__":
    print(json.dumps(bench_query_throughput(), indent=2))
