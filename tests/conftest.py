"""Shared test fixtures for metanno.

Fixtures defined here are available to all tests in the suite without
needing an explicit import.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from metanno.provider.static import StaticTypeGraph

EXAMPLES = Path(__file__).parent.parent / "examples"


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "metanno"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string."""
    return "0.1.0"


@pytest.fixture()
def spring_graph_path() -> Path:
    return EXAMPLES / "spring_stereotypes.yaml"


@pytest.fixture()
def spring_graph(spring_graph_path: Path) -> StaticTypeGraph:
    from metanno.provider.loaders import YamlGraphLoader

    return YamlGraphLoader().load_file(spring_graph_path)
