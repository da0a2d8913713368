"""Paths through a graph, built and unwound during depth-first traversal.

A :class:`Path` is a stack of :class:`Occurrence` entries. The enumerator
pushes an occurrence when it enters a node, records on it the edge it decides
to follow, and pops it when it leaves the node. Completed paths are
snapshotted with :meth:`Path.copy`; the live path keeps mutating.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pgraph.model.graph import Edge, Node


@dataclass
class Occurrence:
    """One visit of a node within a path.

    Attributes:
        node: The visited node (shared with the graph, never copied).
        edge: Edge chosen to leave the node, or None while undecided and on
            the final occurrence of a path.
    """

    node: Node
    edge: Optional[Edge] = None


class Path:
    """Ordered sequence of node occurrences from the entry node onwards."""

    def __init__(self, occurrences: Optional[List[Occurrence]] = None) -> None:
        self._occurrences: List[Occurrence] = list(occurrences or [])

    def push(self, node: Node) -> None:
        """Append a new occurrence of ``node`` with no edge chosen."""
        self._occurrences.append(Occurrence(node))

    def pop(self) -> Occurrence:
        """Remove and return the last occurrence.

        Raises:
            IndexError: If the path is empty.
        """
        if not self._occurrences:
            raise IndexError("pop from an empty path")
        return self._occurrences.pop()

    def follow_edge(self, edge: Edge) -> bool:
        """Record ``edge`` as the way out of the current node if it may be taken.

        The edge must belong to the node of the last occurrence. It is refused
        when it leads straight back to that node, or when any earlier
        occurrence of the same node already left through it; following it
        again would repeat the same loop forever. Every occurrence is checked,
        not only the most recent one, because a node re-entered through a
        loop has one occurrence per iteration.

        Returns:
            True if the edge was recorded on the last occurrence (replacing
            any edge recorded there before), False if it was refused.

        Raises:
            IndexError: If the path is empty.
        """
        if not self._occurrences:
            raise IndexError("cannot follow an edge from an empty path")

        current = self._occurrences[-1]
        if edge.source != current.node.index:
            raise ValueError(
                f"Edge {edge.index} does not leave node '{current.node.name}'."
            )

        if edge.is_self_loop:
            return False

        for occurrence in self._occurrences:
            if occurrence.node.index == current.node.index and occurrence.edge == edge:
                return False

        current.edge = edge
        return True

    def copy(self) -> Path:
        """Return an independent snapshot of the path."""
        return Path([Occurrence(o.node, o.edge) for o in self._occurrences])

    @property
    def node_names(self) -> Tuple[str, ...]:
        """Names of the visited nodes, in order."""
        return tuple(o.node.name for o in self._occurrences)

    @property
    def edges(self) -> Tuple[Optional[Edge], ...]:
        """Edge chosen at each occurrence (None where nothing was chosen)."""
        return tuple(o.edge for o in self._occurrences)

    @property
    def last(self) -> Occurrence:
        """Most recent occurrence."""
        return self._occurrences[-1]

    def _key(self) -> Tuple[Tuple[int, Optional[int]], ...]:
        return tuple(
            (o.node.index, o.edge.index if o.edge is not None else None)
            for o in self._occurrences
        )

    def to_dict(self, include_edges: bool = False) -> Dict[str, Any]:
        """Return a JSON-serializable representation.

        Args:
            include_edges: Also list, per occurrence, the position of the
                chosen edge within its node (None when no edge was chosen).
        """
        data: Dict[str, Any] = {"nodes": list(self.node_names)}
        if include_edges:
            data["edges"] = [
                o.edge.position if o.edge is not None else None
                for o in self._occurrences
            ]
        return data

    def __len__(self) -> int:
        return len(self._occurrences)

    def __iter__(self) -> Iterator[Occurrence]:
        return iter(self._occurrences)

    def __getitem__(self, idx: int) -> Occurrence:
        return self._occurrences[idx]

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return "".join(f"{name}; " for name in self.node_names).rstrip()

    def __repr__(self) -> str:
        return f"Path({list(self.node_names)})"
