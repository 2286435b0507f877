"""Single-pass analysis pipeline: raw lines to frequency table and call graph."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union

from .aggregate import aggregate, call_graph_order
from .dialects import Dialect, get_dialect
from .frequency import FrequencyCounter
from .models import (
    AggregateRecord,
    CallGraphEntry,
    ChildEdge,
    EventKind,
    FrequencyReport,
    Location,
    ParentEdge,
    ParseStats,
)
from .registry import LineRegistry
from .tree import InstantiationTree, TreeBuilder

logger = logging.getLogger(__name__)


@dataclass
class ProfileResult:
    frequency: FrequencyReport
    registry: LineRegistry
    tree: InstantiationTree
    graph: Dict[int, AggregateRecord] = field(default_factory=dict)
    stats: ParseStats = field(default_factory=ParseStats)

    def call_graph_entries(self) -> List[CallGraphEntry]:
        """Resolve the aggregated graph into report-ready entries.

        Entries are ordered by transitive total, largest first; parent and
        child edges are ordered by ``(file, line)``.
        """
        location = self.registry.location
        entries = []
        for handle in call_graph_order(self.graph):
            record = self.graph[handle]
            parents = [
                ParentEdge(location=location(h), weight=w)
                for h, w in sorted(record.parents.items(), key=lambda item: _sort_key(location(item[0])))
            ]
            children = [
                ChildEdge(location=location(h), weight=w, count=self.graph[h].count)
                for h, w in sorted(record.children.items(), key=lambda item: _sort_key(location(item[0])))
            ]
            entries.append(
                CallGraphEntry(
                    location=location(handle),
                    count=record.count,
                    total_with_children=record.total_with_children,
                    parents=parents,
                    children=children,
                )
            )
        return entries


def _sort_key(loc: Location) -> Tuple[str, int]:
    return (loc.file, loc.line)


def analyze_lines(
    lines: Iterable[str],
    dialect: Union[Dialect, str],
    call_graph: bool = True,
) -> ProfileResult:
    """Run the flat report and the call-graph reconstruction in one pass.

    Args:
        lines: Raw diagnostic lines, in compiler output order.
        dialect: A :class:`Dialect` or a dialect name; resolved before any
            line is read.
        call_graph: When False only the frequency table is produced.

    Returns:
        ProfileResult holding both reports and the intermediate structures.
    """
    if isinstance(dialect, str):
        dialect = get_dialect(dialect)

    stats = ParseStats(dialect=dialect.name)
    counter = FrequencyCounter()
    builder = TreeBuilder(dialect)

    for line in lines:
        stats.lines += 1
        event = dialect.classify(line)
        if event.kind is EventKind.ENTER:
            stats.enter += 1
            counter.add(event.fragment)
        elif event.kind is EventKind.BACKTRACE:
            stats.backtrace += 1
        elif event.kind is EventKind.EXIT:
            stats.exit += 1
        else:
            stats.unmatched += 1
            continue

        if call_graph:
            builder.feed(event)

    tree = builder.finish()
    stats.skipped = builder.skipped
    stats.max_depth = tree.max_depth()
    stats.max_backtrace_depth = max(node.backtrace_depth for node in tree.nodes)
    graph = aggregate(tree) if call_graph else {}

    logger.info(
        "Parsed %d lines (%s): %d enter, %d exit, %d backtrace, %d skipped; "
        "%d locations, backtrace depth %d",
        stats.lines,
        stats.dialect,
        stats.enter,
        stats.exit,
        stats.backtrace,
        stats.skipped,
        len(builder.registry),
        stats.max_backtrace_depth,
    )

    return ProfileResult(
        frequency=counter.report(),
        registry=builder.registry,
        tree=tree,
        graph=graph,
        stats=stats,
    )


def analyze_file(path: Path, dialect: Union[Dialect, str], call_graph: bool = True) -> ProfileResult:
    """Analyze a diagnostic log on disk.

    The dialect is resolved before the file is opened, and ``OSError`` from
    opening the file propagates to the caller untouched.
    """
    if isinstance(dialect, str):
        dialect = get_dialect(dialect)
    with open(path, "r", encoding="utf-8", errors="replace") as handle:
        return analyze_lines(handle, dialect, call_graph=call_graph)
