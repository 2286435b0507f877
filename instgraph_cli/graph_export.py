"""Graph export helpers for Graphviz DOT and JSON outputs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from .analyzer import ProfileResult


def graph_payload(result: ProfileResult) -> Dict[str, Any]:
    """Serializable view of the aggregated call graph."""
    nodes = []
    edges = []
    for entry in result.call_graph_entries():
        node_id = str(entry.location)
        nodes.append(
            {
                "id": node_id,
                "file": entry.location.file,
                "line": entry.location.line,
                "count": entry.count,
                "total_with_children": entry.total_with_children,
            }
        )
        for child in entry.children:
            edges.append({"src": node_id, "dst": str(child.location), "weight": child.weight})

    return {
        "dialect": result.stats.dialect,
        "total_instantiations": result.frequency.total_matches,
        "nodes": nodes,
        "edges": edges,
    }


def export_json(result: ProfileResult, output_file: Path) -> None:
    output_file.write_text(json.dumps(graph_payload(result), indent=2), encoding="utf-8")


def export_dot(result: ProfileResult, output_file: Path) -> None:
    payload = graph_payload(result)

    lines = ["digraph InstantiationGraph {"]
    lines.append("  rankdir=LR;")

    for node in payload["nodes"]:
        label = f"{_esc(node['id'])}\\ncount={node['count']} total={node['total_with_children']}"
        lines.append(f'  "{_esc(node["id"])}" [label="{label}"];')

    for edge in payload["edges"]:
        lines.append(
            f'  "{_esc(edge["src"])}" -> "{_esc(edge["dst"])}" [label="{edge["weight"]}"];'
        )

    lines.append("}")
    output_file.write_text("\n".join(lines), encoding="utf-8")


def _esc(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')
