"""Immutable directed graph of named nodes.

Nodes live in an arena (a tuple indexed by ``Node.index``). Edges store the
indices of their source and target instead of references to node objects, so
cyclic topologies never become cyclic object graphs. A ``Graph`` is produced
by :mod:`pgraph.builder` and is read-only afterwards; it can be shared by any
number of independent enumerations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple


@dataclass(frozen=True)
class Edge:
    """Directed edge between two nodes of a graph.

    Attributes:
        index: Identifier unique within the graph. Two edges joining the same
            pair of nodes still have different indices.
        source: Arena index of the owning node.
        target: Arena index of the node the edge leads to.
        position: Ordinal of the edge among the owning node's edges.
    """

    index: int
    source: int
    target: int
    position: int

    @property
    def is_self_loop(self) -> bool:
        """True when the edge leads back to its owning node."""
        return self.source == self.target


@dataclass(frozen=True)
class Node:
    """Named vertex with its outgoing edges in declared order.

    Attributes:
        index: Position of the node in the graph arena.
        name: Unique node name.
        edges: Outgoing edges; their order drives traversal order.
    """

    index: int
    name: str
    edges: Tuple[Edge, ...] = ()

    @property
    def is_terminal(self) -> bool:
        """True when the node has no outgoing edges."""
        return not self.edges


class Graph:
    """Arena of nodes plus a distinguished entry node.

    Instances are created by :class:`pgraph.builder.GraphBuilder`, which
    guarantees unique names, resolved edge targets and an existing entry.
    """

    def __init__(self, nodes: Tuple[Node, ...], entry: int) -> None:
        self._nodes = nodes
        self._index_by_name: Dict[str, int] = {n.name: n.index for n in nodes}
        self._entry = entry

    @property
    def entry(self) -> Node:
        """Node traversal starts from."""
        return self._nodes[self._entry]

    @property
    def nodes(self) -> Tuple[Node, ...]:
        """All nodes in arena order."""
        return self._nodes

    @property
    def edge_count(self) -> int:
        """Total number of edges."""
        return sum(len(n.edges) for n in self._nodes)

    def node(self, name: str) -> Node:
        """Return the node called ``name``.

        Raises:
            KeyError: If no such node exists.
        """
        try:
            return self._nodes[self._index_by_name[name]]
        except KeyError:
            raise KeyError(f"Node '{name}' does not exist.") from None

    def node_at(self, index: int) -> Node:
        """Return the node stored at arena position ``index``."""
        return self._nodes[index]

    def target(self, edge: Edge) -> Node:
        """Return the node ``edge`` leads to."""
        return self._nodes[edge.target]

    def source(self, edge: Edge) -> Node:
        """Return the node owning ``edge``."""
        return self._nodes[edge.source]

    def successors(self, name: str) -> List[str]:
        """Names of the nodes reached by each edge of ``name``, in edge order."""
        return [self._nodes[e.target].name for e in self.node(name).edges]

    def edges(self) -> Iterator[Edge]:
        """Iterate over every edge, grouped by owning node in arena order."""
        for node in self._nodes:
            yield from node.edges

    def terminals(self) -> List[Node]:
        """Nodes without outgoing edges, in arena order."""
        return [n for n in self._nodes if n.is_terminal]

    def to_spec(self) -> Dict[str, List[str]]:
        """Return the name -> successor names mapping describing this graph."""
        return {n.name: self.successors(n.name) for n in self._nodes}

    def __contains__(self, name: object) -> bool:
        return name in self._index_by_name

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return self.entry.name == other.entry.name and self.to_spec() == other.to_spec()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Graph(nodes={len(self._nodes)}, edges={self.edge_count}, "
            f"entry={self.entry.name!r})"
        )
