"""Graph conversion utilities between pgraph graphs and NetworkX graphs.

``to_networkx`` produces a ``networkx.MultiDiGraph`` keyed by edge index so
parallel edges survive the round trip; ``from_networkx`` builds a validated
graph from any NetworkX directed graph.
"""

from __future__ import annotations

from typing import Dict, List

import networkx as nx

from pgraph.builder import DEFAULT_ENTRY, build_graph
from pgraph.model.graph import Graph


def to_networkx(graph: Graph) -> nx.MultiDiGraph:
    """Convert a graph to a NetworkX MultiDiGraph.

    Nodes are keyed by name and carry ``terminal`` and ``entry`` attributes.
    Edges are keyed by their graph-wide index and carry ``position``, the
    ordinal of the edge within its source node.

    Args:
        graph: Graph to convert.

    Returns:
        A new MultiDiGraph with the same nodes and edges.
    """
    nx_graph = nx.MultiDiGraph()
    entry = graph.entry.name
    for node in graph:
        nx_graph.add_node(node.name, terminal=node.is_terminal, entry=node.name == entry)
    for edge in graph.edges():
        nx_graph.add_edge(
            graph.source(edge).name,
            graph.target(edge).name,
            key=edge.index,
            position=edge.position,
        )
    return nx_graph


def from_networkx(nx_graph: nx.DiGraph, entry: str = DEFAULT_ENTRY) -> Graph:
    """Build a graph from a NetworkX directed graph.

    Successor order follows the order NetworkX reports out-edges. When edges
    carry a ``position`` attribute (as written by :func:`to_networkx`), they are
    sorted by it so the original order is restored.

    Args:
        nx_graph: A ``DiGraph`` or ``MultiDiGraph``. Node keys must be strings.
        entry: Name of the entry node.

    Raises:
        ValueError: If ``nx_graph`` is undirected.
        BuildError: See :meth:`pgraph.builder.GraphBuilder.build`.
    """
    if not nx_graph.is_directed():
        raise ValueError("Only directed NetworkX graphs can be converted.")

    spec: Dict[str, List[str]] = {}
    for name in nx_graph.nodes:
        out_edges = list(nx_graph.out_edges(name, data=True))
        if all("position" in data for _, _, data in out_edges):
            out_edges.sort(key=lambda e: e[2]["position"])
        spec[name] = [target for _, target, _ in out_edges]
    return build_graph(spec, entry=entry)
