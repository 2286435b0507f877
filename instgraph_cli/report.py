"""Render profile results as the plain-text report or as rich console tables."""

from __future__ import annotations

from typing import List, Optional, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .analyzer import ProfileResult
from .config import COUNT_COLUMN_WIDTH
from .models import CallGraphEntry, FrequencyReport


# ===================================================================
# Plain-text report
# ===================================================================

def format_flat_report(report: FrequencyReport) -> List[str]:
    width = max(report.max_location_width, 0)
    lines = [f"Total instantiations: {report.total_matches}"]
    lines.append(
        "Location".rjust(width)
        + "count".rjust(COUNT_COLUMN_WIDTH)
        + "cum.".rjust(COUNT_COLUMN_WIDTH)
    )
    lines.append("-" * (width + 2 * COUNT_COLUMN_WIDTH))
    for row in report.rows:
        lines.append(
            row.location.rjust(width)
            + str(row.count).rjust(COUNT_COLUMN_WIDTH)
            + str(row.cumulative).rjust(COUNT_COLUMN_WIDTH)
        )
    return lines


def format_call_graph(entries: List[CallGraphEntry]) -> List[str]:
    lines = ["", "Call Graph", ""]
    for entry in entries:
        lines.append(f"{entry.location} ({entry.count})")
        lines.append("  Parents:")
        for parent in entry.parents:
            lines.append(f"    {parent.location} ({parent.weight})")
        lines.append("  Children:")
        for child in entry.children:
            lines.append(f"    {child.location} ({child.weight}/{child.count})")
    return lines


def write_report(result: ProfileResult, sink: TextIO, call_graph: bool = True) -> None:
    """Write the flat table and, optionally, the call graph to *sink*."""
    lines = format_flat_report(result.frequency)
    if call_graph:
        lines.extend(format_call_graph(result.call_graph_entries()))
    sink.write("\n".join(lines))
    sink.write("\n")


# ===================================================================
# Console rendering
# ===================================================================

def render_console(result: ProfileResult, console: Optional[Console] = None, top: int = 20) -> None:
    """Print the *top* rows of each report as rich tables."""
    console = console or Console()
    stats = result.stats

    console.print(
        f"[bold]Total instantiations:[/bold] {result.frequency.total_matches}  "
        f"[dim]({stats.dialect}, {stats.lines} lines, max depth {stats.max_depth}, "
        f"backtrace depth {stats.max_backtrace_depth}, {stats.skipped} skipped)[/dim]"
    )

    flat = Table(title="Instantiation sites", show_lines=False)
    flat.add_column("Location", style="cyan")
    flat.add_column("Count", justify="right")
    flat.add_column("Cum.", justify="right", style="dim")
    for row in result.frequency.rows[:top]:
        flat.add_row(escape(row.location), str(row.count), str(row.cumulative))
    console.print(flat)

    entries = result.call_graph_entries()
    if not entries:
        return

    graph = Table(title="Call graph", show_lines=True)
    graph.add_column("Location", style="cyan")
    graph.add_column("Count", justify="right")
    graph.add_column("Total", justify="right", style="bold")
    graph.add_column("Parents")
    graph.add_column("Children (weight/count)")
    for entry in entries[:top]:
        graph.add_row(
            escape(str(entry.location)),
            str(entry.count),
            str(entry.total_with_children),
            escape("\n".join(f"{p.location} ({p.weight})" for p in entry.parents)),
            escape("\n".join(f"{c.location} ({c.weight}/{c.count})" for c in entry.children)),
        )
    console.print(graph)
