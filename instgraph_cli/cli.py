"""Typer-based CLI for InstGraph template instantiation profiles."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__, config
from .analyzer import ProfileResult, analyze_file
from .config_manager import load_config, save_config
from .dialects import Dialect, UnknownDialectError, available_dialects, get_dialect
from .graph_export import export_dot, export_json
from .report import render_console, write_report

logger = logging.getLogger(__name__)
console = Console()

app = typer.Typer(
    help="📊 InstGraph — template instantiation profiles from compiler diagnostics.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"InstGraph CLI v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Log parser diagnostics to stderr."),
):
    """InstGraph CLI: flat and call-graph reports of template instantiations."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _resolve_dialect(name: Optional[str]) -> Dialect:
    try:
        return get_dialect(name or config.DEFAULT_DIALECT)
    except UnknownDialectError as exc:
        raise typer.BadParameter(str(exc), param_hint="--dialect")


def _run(input_file: Path, dialect: Dialect, call_graph: bool = True) -> ProfileResult:
    logger.debug("Analyzing %s as %s", input_file, dialect.name)
    try:
        return analyze_file(input_file, dialect, call_graph=call_graph)
    except OSError as exc:
        typer.echo(f"❌ Cannot read '{input_file}': {exc}", err=True)
        raise typer.Exit(code=1)


@app.command("analyze")
def analyze(
    input_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Compiler output captured to a file."),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Report file ('-' for stdout). Defaults to INPUT.profile.txt.",
    ),
    dialect: Optional[str] = typer.Option(None, "--dialect", "-d", help="Compiler dialect: msvc, gcc, gcc-legacy."),
    call_graph: bool = typer.Option(
        config.DEFAULT_CALL_GRAPH,
        "--call-graph/--no-call-graph",
        help="Include the call graph section.",
    ),
):
    """Write the flat frequency table and call graph for a compiler log."""
    resolved = _resolve_dialect(dialect)
    result = _run(input_file, resolved, call_graph=call_graph)

    to_stdout = output == "-"
    if to_stdout:
        write_report(result, sys.stdout, call_graph=call_graph)
    else:
        output_path = Path(output) if output else input_file.with_name(input_file.name + config.REPORT_SUFFIX)
        with open(output_path, "w", encoding="utf-8") as sink:
            write_report(result, sink, call_graph=call_graph)
        typer.echo(f"Wrote report to {output_path}")

    stats = result.stats
    typer.echo(
        f"Instantiations: {result.frequency.total_matches} | "
        f"Locations: {len(result.frequency.rows)} | "
        f"Skipped: {stats.skipped}",
        err=to_stdout,
    )


@app.command("show")
def show(
    input_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Compiler output captured to a file."),
    dialect: Optional[str] = typer.Option(None, "--dialect", "-d", help="Compiler dialect: msvc, gcc, gcc-legacy."),
    top: int = typer.Option(config.DEFAULT_TOP, min=1, max=500, help="Rows to show per table."),
):
    """Print the hottest instantiation sites as tables."""
    resolved = _resolve_dialect(dialect)
    result = _run(input_file, resolved)
    render_console(result, console, top=top)


@app.command("export-graph")
def export_graph(
    input_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Compiler output captured to a file."),
    fmt: str = typer.Option("dot", "--format", "-f", help="Export format: dot or json."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path."),
    dialect: Optional[str] = typer.Option(None, "--dialect", "-d", help="Compiler dialect: msvc, gcc, gcc-legacy."),
):
    """Export the aggregated call graph to Graphviz DOT or JSON."""
    fmt = fmt.lower()
    if fmt not in {"dot", "json"}:
        raise typer.BadParameter("Format must be one of: dot, json")

    resolved = _resolve_dialect(dialect)
    result = _run(input_file, resolved)

    if output is None:
        output = input_file.with_name(f"{input_file.stem}_graph.{fmt}")

    if fmt == "json":
        export_json(result, output)
    else:
        export_dot(result, output)

    typer.echo(f"Exported graph to {output}")


@app.command("dialects")
def list_dialects():
    """List supported compiler dialects."""
    table = Table(title="Compiler dialects")
    table.add_column("Name", style="cyan")
    table.add_column("Commit")
    table.add_column("Description")
    for d in available_dialects():
        marker = " *" if d.name == config.DEFAULT_DIALECT else ""
        table.add_row(d.name + marker, d.commit_policy.value, d.description)
    console.print(table)


@app.command("set-dialect")
def set_dialect(name: str = typer.Argument(..., help="Dialect to use by default.")):
    """Save the default compiler dialect to the config file."""
    resolved = _resolve_dialect(name)
    if not save_config(dialect=resolved.name):
        typer.echo("❌ Could not write config (is the 'toml' package installed?)", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Default dialect set to '{resolved.name}'.")


@app.command("show-config")
def show_config():
    """Print the effective configuration."""
    profile = load_config()
    typer.echo(f"Config file: {config.CONFIG_FILE}")
    typer.echo(f"  effective dialect = {config.DEFAULT_DIALECT}")
    for key, value in profile.items():
        typer.echo(f"  {key} = {value}")


if __name__ == "__main__":
    app()
