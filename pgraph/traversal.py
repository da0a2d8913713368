"""Depth-first enumeration of every path from the entry to a terminal node.

The walk carries one mutable :class:`pgraph.model.path.Path`. Entering a node
pushes an occurrence, leaving it pops the occurrence. When a terminal node is
entered, the path is snapshotted into the result list. Edges are tried in
declared order and an edge is taken only if ``Path.follow_edge`` accepts it,
which rules out self-loops and any (node, edge) pair already used on the
current path. This bounds every path to ``edge_count + 1`` occurrences, so the
walk always terminates even on cyclic graphs.

A non-terminal node none of whose edges can be taken is a dead loop: the
partial path is reported to the caller's sink as a :class:`DeadLoopWarning`
and contributes no result. Enumeration of sibling branches continues.

The walk keeps an explicit stack of frames instead of recursing, so graph size
is not capped by the interpreter recursion limit. Discovery order is the same
as a recursive left-to-right pre-order walk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from pgraph.config import ENUMERATOR_CONFIG, EnumeratorConfig
from pgraph.exceptions import TraversalLimitError
from pgraph.logging import get_logger
from pgraph.model.graph import Graph, Node
from pgraph.model.path import Path

logger = get_logger(__name__)


@dataclass(frozen=True)
class DeadLoopWarning:
    """A subtree abandoned because no edge of its last node can be followed.

    Attributes:
        path: Snapshot of the path at the point of detection. Its last
            occurrence is the re-entered node, with no edge chosen.
    """

    path: Path

    @property
    def node(self) -> Node:
        """Node at which the walk could not progress."""
        return self.path.last.node

    @property
    def message(self) -> str:
        return (
            "Loop without exit, or loop whose nodes and edges are all part of "
            f"the path already. Ignoring the subtree: {self.path}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"node": self.node.name, "path": list(self.path.node_names)}


DeadLoopSink = Callable[[DeadLoopWarning], None]


def log_dead_loop(warning: DeadLoopWarning) -> None:
    """Default sink: report the dead loop through the package logger."""
    logger.warning(warning.message)


@dataclass
class EnumerationStats:
    """Counters gathered during one enumeration.

    Attributes:
        visits: Number of node occurrences pushed.
        max_depth: Longest path length reached, in occurrences.
        paths: Number of completed paths.
        dead_loops: Number of dead loops reported.
    """

    visits: int = 0
    max_depth: int = 0
    paths: int = 0
    dead_loops: int = 0


@dataclass
class _Frame:
    node: Node
    next_edge: int = 0
    followed: bool = False


class PathEnumerator:
    """Enumerates terminal-reaching paths of a graph.

    One enumerator may be reused for several graphs sequentially; it must not
    run two enumerations at the same time. The graph itself is never mutated
    and can be enumerated by several enumerators in parallel.

    Args:
        on_dead_loop: Callable receiving each dead loop as it is found.
            Defaults to :func:`log_dead_loop`.
        config: Traversal budgets. Defaults to ``ENUMERATOR_CONFIG``.
    """

    def __init__(
        self,
        on_dead_loop: Optional[DeadLoopSink] = None,
        config: Optional[EnumeratorConfig] = None,
    ) -> None:
        self.on_dead_loop = on_dead_loop or log_dead_loop
        self.config = config or ENUMERATOR_CONFIG
        self.config.validate()
        self.stats = EnumerationStats()

    def enumerate(self, graph: Graph) -> List[Path]:
        """Return every path from ``graph.entry`` to a terminal node.

        Paths are returned in the order a left-to-right depth-first walk
        discovers them. The list is empty when no terminal is reachable
        without reusing an edge.

        Raises:
            TraversalLimitError: If ``config.max_depth`` or
                ``config.max_visits`` is exceeded.
        """
        self.stats = EnumerationStats()
        paths: List[Path] = []
        current = Path()
        frames: List[_Frame] = []

        self._enter(graph.entry, current, frames, paths)

        while frames:
            frame = frames[-1]
            edges = frame.node.edges

            descended = False
            while frame.next_edge < len(edges):
                edge = edges[frame.next_edge]
                frame.next_edge += 1
                if current.follow_edge(edge):
                    frame.followed = True
                    self._enter(graph.target(edge), current, frames, paths)
                    descended = True
                    break
            if descended:
                continue

            if not frame.followed:
                self._report_dead_loop(current)

            frames.pop()
            current.pop()

        logger.debug(
            "Enumerated %d path(s), %d dead loop(s), %d visit(s), max depth %d",
            self.stats.paths,
            self.stats.dead_loops,
            self.stats.visits,
            self.stats.max_depth,
        )
        return paths

    def _enter(
        self, node: Node, current: Path, frames: List[_Frame], paths: List[Path]
    ) -> None:
        current.push(node)
        self._account_visit(len(current))

        if node.is_terminal:
            paths.append(current.copy())
            self.stats.paths += 1
            current.pop()
            return

        frames.append(_Frame(node))

    def _account_visit(self, depth: int) -> None:
        stats = self.stats
        stats.visits += 1
        stats.max_depth = max(stats.max_depth, depth)

        max_depth = self.config.max_depth
        if max_depth is not None and depth > max_depth:
            raise TraversalLimitError("max_depth", max_depth)
        max_visits = self.config.max_visits
        if max_visits is not None and stats.visits > max_visits:
            raise TraversalLimitError("max_visits", max_visits)

    def _report_dead_loop(self, current: Path) -> None:
        self.stats.dead_loops += 1
        self.on_dead_loop(DeadLoopWarning(current.copy()))


@dataclass
class EnumerationResult:
    """Paths and dead loops collected by :func:`find_paths`."""

    paths: List[Path] = field(default_factory=list)
    dead_loops: List[DeadLoopWarning] = field(default_factory=list)
    stats: EnumerationStats = field(default_factory=EnumerationStats)

    def to_dict(self, include_edges: bool = False) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "paths": [p.to_dict(include_edges=include_edges) for p in self.paths],
            "dead_loops": [w.to_dict() for w in self.dead_loops],
            "stats": {
                "visits": self.stats.visits,
                "max_depth": self.stats.max_depth,
                "paths": self.stats.paths,
                "dead_loops": self.stats.dead_loops,
            },
        }


def find_paths(
    graph: Graph,
    config: Optional[EnumeratorConfig] = None,
    on_dead_loop: Optional[DeadLoopSink] = None,
) -> EnumerationResult:
    """Enumerate ``graph`` and collect paths and dead loops together.

    Args:
        graph: Graph to enumerate.
        config: Traversal budgets (optional).
        on_dead_loop: Extra sink called for each dead loop in addition to
            collecting it (optional).

    Returns:
        EnumerationResult with paths in discovery order.
    """
    result = EnumerationResult()

    def collect(warning: DeadLoopWarning) -> None:
        result.dead_loops.append(warning)
        if on_dead_loop is not None:
            on_dead_loop(warning)

    enumerator = PathEnumerator(on_dead_loop=collect, config=config)
    result.paths = enumerator.enumerate(graph)
    result.stats = enumerator.stats
    return result
