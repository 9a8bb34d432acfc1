"""Typer-based CLI for HeapGraph heap snapshot analysis."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from . import __version__
from .analyzer import HeapAnalyzer
from .config_manager import clear_report_config, load_report_config, save_report_config
from .errors import HeapGraphError, InvalidArgumentError
from .markdown import format_value, render
from .models import ColumnKind, Report

console = Console()

app = typer.Typer(
    help="🧠 HeapGraph CLI — find what keeps your heap alive.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(
    help="⚙️  Configuration — report defaults.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
app.add_typer(config_app, name="config")


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"HeapGraph CLI v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """HeapGraph CLI: retention analysis and hot paths for heap snapshots."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ------------------------------------------------------------------
# Shared helpers
# ------------------------------------------------------------------

PATH_ARG = typer.Argument(..., exists=True, dir_okay=False, help="Path to the heap graph snapshot.")
ROWS_OPT = typer.Option(None, "--rows", "-r", min=1, help="Number of rows to include.")
OUTPUT_OPT = typer.Option(None, "--output", "-o", help="Write output to file instead of stdout.")
NAME_OPT = typer.Option(..., "--name", "-n", help="Case-insensitive substring to match in type names.")
PRETTY_OPT = typer.Option(None, "--pretty/--plain", help="Render with rich instead of markdown.")


def _rich_table(report: Report) -> Table:
    table = Table(show_header=True, header_style="bold cyan")
    for column in report.columns:
        table.add_column(column.name, justify="right" if column.kind == ColumnKind.NUMERIC else "left")
    for row in report.rows:
        table.add_row(*(format_value(row.get(c.name)) for c in report.columns))
    return table


def _rich_tree(report: Report) -> Tree:
    tree = Tree("[bold]Hot path to root[/bold]")

    def add(parent: Tree, nodes) -> None:
        for node in nodes:
            label = node.label if node.value is None else f"{node.label} [dim](Count: {format_value(node.value)})[/dim]"
            add(parent.add(label), node.children)

    add(tree, report.tree)
    return tree


def _emit(report: Report, output: Optional[Path], pretty: Optional[bool]) -> None:
    if output is not None:
        output.write_text(render(report), encoding="utf-8")
        typer.echo(f"Wrote report to {output}")
        return

    if pretty is None:
        pretty = load_report_config()["pretty"]
    if pretty:
        console.print(_rich_tree(report) if report.is_tree else _rich_table(report))
    else:
        typer.echo(render(report), nl=False)


def _run(path: Path, produce: Callable[[HeapAnalyzer], Report]) -> Report:
    try:
        with HeapAnalyzer.open(path) as session:
            return produce(session)
    except InvalidArgumentError as exc:
        raise typer.BadParameter(str(exc))
    except (HeapGraphError, FileNotFoundError) as exc:
        cause = f" ({exc.__cause__})" if exc.__cause__ else ""
        typer.echo(typer.style(f"❌ {exc}{cause}", fg=typer.colors.RED), err=True)
        raise typer.Exit(code=1)


def _rows(rows: Optional[int]) -> int:
    return rows if rows is not None else load_report_config()["rows"]


# ------------------------------------------------------------------
# Report commands
# ------------------------------------------------------------------

@app.command("top")
def top(
    path: Path = PATH_ARG,
    rows: Optional[int] = ROWS_OPT,
    output: Optional[Path] = OUTPUT_OPT,
    pretty: Optional[bool] = PRETTY_OPT,
):
    """Show top types by Inclusive Size (retained)."""
    count = _rows(rows)
    _emit(_run(path, lambda s: s.top_by_inclusive_size(count)), output, pretty)


@app.command("top-size")
def top_size(
    path: Path = PATH_ARG,
    rows: Optional[int] = ROWS_OPT,
    output: Optional[Path] = OUTPUT_OPT,
    pretty: Optional[bool] = PRETTY_OPT,
):
    """Show top types by shallow Size (Bytes)."""
    count = _rows(rows)
    _emit(_run(path, lambda s: s.top_by_size(count)), output, pretty)


@app.command("top-count")
def top_count(
    path: Path = PATH_ARG,
    rows: Optional[int] = ROWS_OPT,
    output: Optional[Path] = OUTPUT_OPT,
    pretty: Optional[bool] = PRETTY_OPT,
):
    """Show top types by object Count."""
    count = _rows(rows)
    _emit(_run(path, lambda s: s.top_by_count(count)), output, pretty)


@app.command("filter")
def filter_types(
    path: Path = PATH_ARG,
    name: str = NAME_OPT,
    rows: Optional[int] = ROWS_OPT,
    output: Optional[Path] = OUTPUT_OPT,
    pretty: Optional[bool] = PRETTY_OPT,
):
    """Show types whose name contains a substring (sorted by Inclusive Size)."""
    _emit(_run(path, lambda s: s.by_name(name, rows)), output, pretty)


@app.command("roots")
def roots(
    path: Path = PATH_ARG,
    name: str = NAME_OPT,
    output: Optional[Path] = OUTPUT_OPT,
    pretty: Optional[bool] = PRETTY_OPT,
):
    """Show the hot path to GC roots for matching types."""
    report = _run(path, lambda s: s.paths_to_root(name))
    if not report.tree and output is None:
        typer.echo(f"No types matching '{name}' found.")
        raise typer.Exit(code=0)
    _emit(report, output, pretty)


@app.command("serve")
def serve():
    """Run the MCP tool server over stdio."""
    from .server import run

    run()


# ------------------------------------------------------------------
# Configuration commands
# ------------------------------------------------------------------

@config_app.command("show")
def config_show():
    """Print the effective report defaults."""
    settings = load_report_config()
    typer.echo(f"rows   = {settings['rows']}")
    typer.echo(f"pretty = {str(settings['pretty']).lower()}")


@config_app.command("set")
def config_set(
    rows: Optional[int] = typer.Option(None, "--rows", "-r", min=1, help="Default row count."),
    pretty: Optional[bool] = typer.Option(None, "--pretty/--plain", help="Default rendering."),
):
    """Save report defaults to config.toml."""
    if rows is None and pretty is None:
        raise typer.BadParameter("Pass --rows and/or --pretty/--plain.")
    settings = save_report_config(rows=rows, pretty=pretty)
    typer.echo(f"Saved defaults: rows={settings['rows']} pretty={str(settings['pretty']).lower()}")


@config_app.command("reset")
def config_reset():
    """Remove saved report defaults."""
    clear_report_config()
    typer.echo("Reset report defaults.")


if __name__ == "__main__":
    app()
