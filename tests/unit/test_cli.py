"""Unit tests for the metanno command line interface."""
from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from metanno.cli.main import EXIT_FALSE, cli

APPLICATION = "org.springframework.boot.autoconfigure.SpringBootApplication"
COMPONENT = "org.springframework.stereotype.Component"


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def small_graph(tmp_path: Path) -> Path:
    path = tmp_path / "graph.yaml"
    path.write_text(
        "annotations:\n"
        "  a.A: [a.B, a.C]\n"
        "  a.B: [a.D, java.lang.annotation.Documented]\n"
        "  a.Leaf: []\n"
        "declarations:\n"
        "  x.Site: [a.A]\n",
        encoding="utf-8",
    )
    return path


class TestInfoCommands:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "metanno" in result.output

    def test_loaders(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["loaders"])
        assert result.exit_code == 0
        assert "yaml" in result.output
        assert "json" in result.output


class TestHierarchy:
    def test_lists_members_in_order(self, runner: CliRunner, small_graph: Path) -> None:
        result = runner.invoke(cli, ["hierarchy", str(small_graph), "a.A"])
        assert result.exit_code == 0
        output = result.output
        assert output.index("a.B") < output.index("a.D") < output.index("a.C")
        assert "java.lang" not in output

    def test_no_members(self, runner: CliRunner, small_graph: Path) -> None:
        result = runner.invoke(cli, ["hierarchy", str(small_graph), "a.Leaf"])
        assert result.exit_code == 0
        assert "no meta-annotations" in result.output

    def test_built_in_type(self, runner: CliRunner, small_graph: Path) -> None:
        result = runner.invoke(cli, ["hierarchy", str(small_graph), "java.lang.Deprecated"])
        assert result.exit_code == 1

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_type_name(self, runner: CliRunner, small_graph: Path, name: str) -> None:
        result = runner.invoke(cli, ["hierarchy", str(small_graph), name])
        assert result.exit_code == 1
        assert "must not be blank" in result.output
        assert "built-in" not in result.output

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["hierarchy", str(tmp_path / "nope.yaml"), "a.A"])
        assert result.exit_code == 1

    def test_malformed_graph(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("annotations: [a.A]\n", encoding="utf-8")
        result = runner.invoke(cli, ["hierarchy", str(path), "a.A"])
        assert result.exit_code == 1

    def test_unknown_loader(self, runner: CliRunner, small_graph: Path) -> None:
        result = runner.invoke(cli, ["hierarchy", str(small_graph), "a.A", "--loader", "toml"])
        assert result.exit_code == 1


class TestInherits:
    def test_true(self, runner: CliRunner, small_graph: Path) -> None:
        result = runner.invoke(cli, ["inherits", str(small_graph), "a.A", "a.D"])
        assert result.exit_code == 0
        assert "true" in result.output

    def test_false(self, runner: CliRunner, small_graph: Path) -> None:
        result = runner.invoke(cli, ["inherits", str(small_graph), "a.B", "a.C"])
        assert result.exit_code == EXIT_FALSE
        assert "false" in result.output

    def test_exclude_concrete(self, runner: CliRunner, small_graph: Path) -> None:
        included = runner.invoke(cli, ["inherits", str(small_graph), "a.A", "a.A"])
        excluded = runner.invoke(cli, ["inherits", str(small_graph), "a.A", "a.A", "--exclude-concrete"])
        assert included.exit_code == 0
        assert excluded.exit_code == EXIT_FALSE

    def test_config_file(self, runner: CliRunner, small_graph: Path, tmp_path: Path) -> None:
        config = tmp_path / "metanno.yaml"
        config.write_text("ignored_prefixes: [java., a.D]\n", encoding="utf-8")
        result = runner.invoke(
            cli, ["inherits", str(small_graph), "a.A", "a.D", "--config", str(config)]
        )
        assert result.exit_code == EXIT_FALSE

    def test_invalid_config_file(self, runner: CliRunner, small_graph: Path, tmp_path: Path) -> None:
        config = tmp_path / "metanno.yaml"
        config.write_text("ignored_prefixes: 5\n", encoding="utf-8")
        result = runner.invoke(
            cli, ["inherits", str(small_graph), "a.A", "a.D", "--config", str(config)]
        )
        assert result.exit_code == 1

    def test_spring_example(self, runner: CliRunner, spring_graph_path: Path) -> None:
        result = runner.invoke(cli, ["inherits", str(spring_graph_path), APPLICATION, COMPONENT])
        assert result.exit_code == 0


class TestCheck:
    def test_annotated_site(self, runner: CliRunner, small_graph: Path) -> None:
        result = runner.invoke(cli, ["check", str(small_graph), "x.Site", "a.D"])
        assert result.exit_code == 0

    def test_not_annotated(self, runner: CliRunner, small_graph: Path) -> None:
        result = runner.invoke(cli, ["check", str(small_graph), "x.Site", "a.Leaf"])
        assert result.exit_code == EXIT_FALSE

    def test_unknown_declaration(self, runner: CliRunner, small_graph: Path) -> None:
        result = runner.invoke(cli, ["check", str(small_graph), "x.Missing", "a.D"])
        assert result.exit_code == 1

    def test_spring_cycle(self, runner: CliRunner, spring_graph_path: Path) -> None:
        result = runner.invoke(cli, ["check", str(spring_graph_path), "test.MyComponent", COMPONENT])
        assert result.exit_code == 0


class TestDump:
    def test_json_to_file(self, runner: CliRunner, small_graph: Path, tmp_path: Path) -> None:
        out = tmp_path / "closures.json"
        result = runner.invoke(cli, ["dump", str(small_graph), "--output", str(out)])
        assert result.exit_code == 0
        assert json.loads(out.read_text(encoding="utf-8")) == {
            "a.A": ["a.B", "a.D", "a.C"],
            "a.B": ["a.D"],
            "a.Leaf": [],
        }

    def test_yaml_to_file(self, runner: CliRunner, small_graph: Path, tmp_path: Path) -> None:
        import yaml

        out = tmp_path / "closures.yaml"
        result = runner.invoke(cli, ["dump", str(small_graph), "--format", "yaml", "-o", str(out)])
        assert result.exit_code == 0
        assert yaml.safe_load(out.read_text(encoding="utf-8"))["a.A"] == ["a.B", "a.D", "a.C"]

    def test_stdout(self, runner: CliRunner, small_graph: Path) -> None:
        result = runner.invoke(cli, ["dump", str(small_graph)])
        assert result.exit_code == 0
        assert "a.Leaf" in result.output


class TestVerbose:
    def test_verbose_configures_logging(self, runner: CliRunner, small_graph: Path) -> None:
        with patch("logging.basicConfig") as basic_config:
            result = runner.invoke(cli, ["--verbose", "inherits", str(small_graph), "a.A", "a.B"])
        assert result.exit_code == 0
        basic_config.assert_called_once()

    def test_quiet_by_default(self, runner: CliRunner, small_graph: Path) -> None:
        with patch("logging.basicConfig") as basic_config:
            runner.invoke(cli, ["inherits", str(small_graph), "a.A", "a.B"])
        basic_config.assert_not_called()
