"""CLI entry point for metanno.

Invoked as::

    metanno [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m metanno.cli.main

Commands
--------
hierarchy   Show the meta-annotation closure of an annotation type
inherits    Test whether an annotation type is or carries another
check       Test whether a declaration is annotated with a type
dump        Print the closure of every annotation type in a graph
loaders     List registered graph loaders
version     Show version information

GRAPH arguments are YAML or JSON graph documents; see
``metanno.provider.static`` for their shape.
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
import yaml
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from metanno.config import ResolverConfig
    from metanno.provider.static import StaticTypeGraph

console = Console()
err_console = Console(stderr=True)

# Exit code for a query that ran fine but answered "no".
EXIT_FALSE = 2


def _load_graph_or_exit(path: str, loader: str | None) -> "StaticTypeGraph":
    """Load a graph document, printing errors and exiting on failure."""
    from metanno.errors import GraphFormatError, GraphLoadError
    from metanno.plugins.registry import PluginNotFoundError
    from metanno.provider.loaders import load_graph

    try:
        return load_graph(path, loader=loader)
    except GraphLoadError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)
    except GraphFormatError as exc:
        err_console.print(f"[red]Invalid graph[/red] in {path}: {exc}")
        sys.exit(1)
    except PluginNotFoundError as exc:
        err_console.print(f"[red]Error:[/red] {exc.args[0]}")
        sys.exit(1)


def _load_config_or_exit(path: str | None) -> "ResolverConfig":
    """Read a resolver config file, or return the defaults."""
    from metanno.config import ResolverConfig
    from metanno.errors import ConfigError

    if path is None:
        return ResolverConfig()
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)
    try:
        return ResolverConfig.from_yaml(text)
    except ConfigError as exc:
        err_console.print(f"[red]Invalid config[/red] in {path}: {exc}")
        sys.exit(1)


def _answer(result: bool) -> None:
    if result:
        console.print("[green]true[/green]")
        sys.exit(0)
    console.print("[yellow]false[/yellow]")
    sys.exit(EXIT_FALSE)


def graph_options(func):  # type: ignore[no-untyped-def]
    """Options shared by every command that reads a graph."""
    func = click.option(
        "--config",
        "config_path",
        type=click.Path(exists=False),
        default=None,
        help="YAML file with resolver settings (ignored_prefixes)",
    )(func)
    func = click.option(
        "--loader",
        default=None,
        help="Graph loader name (default: chosen by file suffix)",
    )(func)
    return func


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="metanno")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Resolve annotation types through chains of meta-annotations."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# ---------------------------------------------------------------------------
# version / loaders
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from metanno import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]metanno[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


@cli.command(name="loaders")
def loaders_command() -> None:
    """List graph loaders, including those installed via entry-points."""
    from metanno.provider.loaders import discover_loaders, loader_registry

    discover_loaders()

    table = Table(title="Graph loaders")
    table.add_column("Name", style="bold")
    table.add_column("Suffixes")
    table.add_column("Class")
    for name, cls in loader_registry.items():
        table.add_row(name, ", ".join(cls.suffixes) or "-", f"{cls.__module__}.{cls.__qualname__}")
    console.print(table)


# ---------------------------------------------------------------------------
# hierarchy
# ---------------------------------------------------------------------------


@cli.command(name="hierarchy")
@click.argument("graph", type=click.Path(exists=False))
@click.argument("type_name")
@graph_options
def hierarchy_command(graph: str, type_name: str, loader: str | None, config_path: str | None) -> None:
    """Show every annotation type TYPE_NAME carries, in discovery order.

    GRAPH is the graph document, TYPE_NAME a qualified annotation type.
    """
    from metanno.query.facade import AnnotationQueryFacade

    type_name = type_name.strip()
    if not type_name:
        err_console.print("[red]Error:[/red] TYPE_NAME must not be blank")
        sys.exit(1)

    type_graph = _load_graph_or_exit(graph, loader)
    facade = AnnotationQueryFacade(type_graph, config=_load_config_or_exit(config_path))
    record = facade.closure_of(type_name)

    if record is None:
        err_console.print(f"[yellow]Skipped:[/yellow] {type_name} is a built-in annotation type")
        sys.exit(1)
    if type_name not in type_graph:
        err_console.print(f"[yellow]Warning:[/yellow] {type_name} is not declared in {graph}")
    if not record.members:
        console.print(f"{type_name} carries no meta-annotations")
        return

    table = Table(title=f"Hierarchy: {type_name}")
    table.add_column("#", justify="right")
    table.add_column("Annotation type")
    for index, member in enumerate(record.members, start=1):
        table.add_row(str(index), member.name)
    console.print(table)


# ---------------------------------------------------------------------------
# inherits / check
# ---------------------------------------------------------------------------


@cli.command(name="inherits")
@click.argument("graph", type=click.Path(exists=False))
@click.argument("type_name")
@click.argument("target")
@click.option(
    "--exclude-concrete",
    is_flag=True,
    default=False,
    help="Do not count TYPE_NAME itself as a match",
)
@graph_options
def inherits_command(
    graph: str,
    type_name: str,
    target: str,
    exclude_concrete: bool,
    loader: str | None,
    config_path: str | None,
) -> None:
    """Test whether an occurrence of TYPE_NAME is or carries TARGET.

    Exits 0 for true and 2 for false.
    """
    from metanno.model.types import AnnotationUsage
    from metanno.query.facade import AnnotationQueryFacade

    type_graph = _load_graph_or_exit(graph, loader)
    facade = AnnotationQueryFacade(type_graph, config=_load_config_or_exit(config_path))
    _answer(facade.inherits_type(AnnotationUsage(type_name), target, exclude_concrete))


@cli.command(name="check")
@click.argument("graph", type=click.Path(exists=False))
@click.argument("declaration")
@click.argument("target")
@graph_options
def check_command(
    graph: str,
    declaration: str,
    target: str,
    loader: str | None,
    config_path: str | None,
) -> None:
    """Test whether DECLARATION is annotated with TARGET, directly or via meta-annotations.

    DECLARATION names an entry of the graph's ``declarations`` section.
    Exits 0 for true and 2 for false.
    """
    from metanno.query.facade import AnnotationQueryFacade

    type_graph = _load_graph_or_exit(graph, loader)
    try:
        site = type_graph.declaration(declaration)
    except KeyError:
        err_console.print(f"[red]Error:[/red] No declaration {declaration!r} in {graph}")
        sys.exit(1)

    facade = AnnotationQueryFacade(type_graph, config=_load_config_or_exit(config_path))
    _answer(facade.is_annotated_with(site, target))


# ---------------------------------------------------------------------------
# dump
# ---------------------------------------------------------------------------


@cli.command(name="dump")
@click.argument("graph", type=click.Path(exists=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output format",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
@graph_options
def dump_command(
    graph: str,
    output_format: str,
    output: str | None,
    loader: str | None,
    config_path: str | None,
) -> None:
    """Print the closure of every annotation type declared in GRAPH."""
    from metanno.query.facade import AnnotationQueryFacade

    type_graph = _load_graph_or_exit(graph, loader)
    facade = AnnotationQueryFacade(type_graph, config=_load_config_or_exit(config_path))

    closures: dict[str, list[str]] = {}
    for identifier in type_graph.annotation_types:
        record = facade.closure_of(identifier)
        if record is not None:
            closures[identifier.name] = record.names

    if output_format.lower() == "json":
        text = json.dumps(closures, indent=2, ensure_ascii=False)
        lang = "json"
    else:
        text = yaml.dump(closures, default_flow_style=False, allow_unicode=True, sort_keys=False)
        lang = "yaml"

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]Closures written to[/green] {output}")
    else:
        console.print(Syntax(text, lang))


if __name__ == "__main__":
    cli()
