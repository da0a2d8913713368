"""Construction of validated graphs from textual descriptions.

The builder turns a mapping (or a sequence of pairs) from node name to ordered
successor names into a :class:`pgraph.model.graph.Graph`. Construction is all
or nothing: the first problem raises a :class:`pgraph.exceptions.BuildError`
subclass and no graph is returned.

Example:
    >>> graph = build_graph({"start": ["end"], "end": []})
    >>> graph.successors("start")
    ['end']
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from pgraph.exceptions import (
    DuplicateNodeError,
    InvalidNodeNameError,
    MissingEntryError,
    UnresolvedReferenceError,
)
from pgraph.logging import get_logger
from pgraph.model.graph import Edge, Graph, Node

logger = get_logger(__name__)

Successors = Optional[Sequence[str]]
GraphSpecInput = Union[Mapping[str, Successors], Iterable[Tuple[str, Successors]]]

DEFAULT_ENTRY = "start"


def _iter_declarations(spec: GraphSpecInput) -> List[Tuple[str, Successors]]:
    if isinstance(spec, Mapping):
        return list(spec.items())
    return [(name, successors) for name, successors in spec]


class GraphBuilder:
    """Validates graph descriptions and materializes graphs.

    Attributes:
        entry: Name of the node the built graph starts from.
    """

    def __init__(self, entry: str = DEFAULT_ENTRY) -> None:
        self.entry = entry

    def build(self, spec: GraphSpecInput) -> Graph:
        """Build a graph from ``spec``.

        Args:
            spec: Mapping of node name to ordered successor names, or an
                iterable of ``(name, successors)`` pairs. ``None`` or an empty
                sequence declares a terminal node.

        Returns:
            The constructed graph.

        Raises:
            InvalidNodeNameError: A node name is not a non-empty string.
            DuplicateNodeError: A node name is declared twice.
            UnresolvedReferenceError: A successor name is not declared.
            MissingEntryError: The entry node is not declared.
        """
        declarations = _iter_declarations(spec)

        # Pass 1: assign arena indices
        index_by_name: Dict[str, int] = {}
        for name, _successors in declarations:
            if not isinstance(name, str) or not name:
                raise InvalidNodeNameError(name)
            if name in index_by_name:
                raise DuplicateNodeError(name)
            index_by_name[name] = len(index_by_name)

        # Pass 2: resolve successors into edges, preserving declared order
        nodes: List[Node] = []
        edge_index = 0
        for name, successors in declarations:
            if isinstance(successors, str):
                raise TypeError(
                    f"Successors of '{name}' must be a sequence of names, not a string"
                )
            source = index_by_name[name]
            edges: List[Edge] = []
            for position, target_name in enumerate(successors or ()):
                target = index_by_name.get(target_name)
                if target is None:
                    raise UnresolvedReferenceError(name, target_name)
                edges.append(Edge(edge_index, source, target, position))
                edge_index += 1
            nodes.append(Node(source, name, tuple(edges)))

        entry = index_by_name.get(self.entry)
        if entry is None:
            raise MissingEntryError(self.entry)

        graph = Graph(tuple(nodes), entry)
        logger.debug(
            "Built graph with %d nodes and %d edges (entry '%s')",
            len(nodes),
            edge_index,
            self.entry,
        )
        return graph


def build_graph(spec: GraphSpecInput, entry: str = DEFAULT_ENTRY) -> Graph:
    """Build a graph from ``spec`` with ``entry`` as the start node.

    See :meth:`GraphBuilder.build`.
    """
    return GraphBuilder(entry=entry).build(spec)
