"""Structural summary of a graph, computed with NetworkX."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

import networkx as nx

from pgraph.graph.convert import to_networkx
from pgraph.model.graph import Graph


@dataclass
class GraphSummary:
    """Counts and node sets describing a graph's shape.

    Attributes:
        nodes: Number of nodes.
        edges: Number of edges.
        entry: Name of the entry node.
        terminals: Names of terminal nodes.
        self_loops: Names of nodes owning at least one self-loop edge.
        unreachable: Nodes that cannot be reached from the entry node.
        trapped: Nodes reachable from the entry that cannot reach any terminal.
        has_cycles: Whether the graph contains a directed cycle.
    """

    nodes: int
    edges: int
    entry: str
    terminals: List[str] = field(default_factory=list)
    self_loops: List[str] = field(default_factory=list)
    unreachable: List[str] = field(default_factory=list)
    trapped: List[str] = field(default_factory=list)
    has_cycles: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": self.nodes,
            "edges": self.edges,
            "entry": self.entry,
            "terminals": list(self.terminals),
            "self_loops": list(self.self_loops),
            "unreachable": list(self.unreachable),
            "trapped": list(self.trapped),
            "has_cycles": self.has_cycles,
        }


def describe_graph(graph: Graph) -> GraphSummary:
    """Summarize the structure of ``graph``.

    Node lists keep the graph's declaration order.
    """
    nx_graph = to_networkx(graph)
    entry = graph.entry.name
    order = [node.name for node in graph]

    reachable = nx.descendants(nx_graph, entry) | {entry}
    terminals = [node.name for node in graph.terminals()]
    can_finish = set(terminals)
    for name in terminals:
        can_finish |= nx.ancestors(nx_graph, name)

    return GraphSummary(
        nodes=len(graph),
        edges=graph.edge_count,
        entry=entry,
        terminals=terminals,
        self_loops=[n for n in order if nx_graph.has_edge(n, n)],
        unreachable=[n for n in order if n not in reachable],
        trapped=[n for n in order if n in reachable and n not in can_finish],
        has_cycles=not nx.is_directed_acyclic_graph(nx_graph),
    )
