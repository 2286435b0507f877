"""Fold an instantiation tree into a per-location call graph."""

from __future__ import annotations

from typing import Dict, List

from .models import AggregateRecord
from .tree import InstantiationTree


def aggregate(tree: InstantiationTree) -> Dict[int, AggregateRecord]:
    """Aggregate *tree* into records keyed by location handle.

    Every node adds one to its location's direct count.  Every ancestor
    with a different location gains one child edge to the node and one
    to its ``total_with_children``, so totals are transitive: a location
    is charged for everything instantiated anywhere beneath it.
    Self-edges are never recorded.
    """
    graph: Dict[int, AggregateRecord] = {}

    for index in tree.postorder():
        location = tree.node(index).location
        if location is None:
            continue
        record = graph.setdefault(location, AggregateRecord())
        record.count += 1

        for ancestor_index in tree.ancestors(index):
            ancestor = tree.node(ancestor_index).location
            if ancestor is None or ancestor == location:
                continue
            parent_record = graph.setdefault(ancestor, AggregateRecord())
            parent_record.children[location] = parent_record.children.get(location, 0) + 1
            parent_record.total_with_children += 1
            record.parents[ancestor] = record.parents.get(ancestor, 0) + 1

    return graph


def call_graph_order(graph: Dict[int, AggregateRecord]) -> List[int]:
    """Handles sorted by ``total_with_children``, largest first.

    Ties keep the graph's insertion order.
    """
    return sorted(graph, key=lambda handle: graph[handle].total_with_children, reverse=True)
