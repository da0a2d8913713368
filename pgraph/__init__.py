"""pgraph: path enumeration over directed, possibly cyclic graphs.

pgraph lists every path from an entry node to a terminal node (a node without
outgoing edges). Each loop may be traversed once per path; loops that can never
be left are reported as dead loops instead of being followed forever. The
motivating use case is parser state graphs, where a path is one sequence of
transitions from entry to acceptance.

Primary API:
    build_graph() - Validate a name -> successors mapping and build a Graph
    find_paths() - Enumerate a Graph and collect paths and dead loops
    PathEnumerator - Enumerator with a caller-supplied dead-loop sink
    load_graph_yaml() - Parse and validate a YAML graph description

Example:
    from pgraph import build_graph, find_paths

    graph = build_graph({
        "start": ["loop", "accept"],
        "loop": ["start"],
        "accept": [],
    })
    for path in find_paths(graph).paths:
        print(path)
"""

from __future__ import annotations

from pgraph import cli, logging
from pgraph._version import __version__
from pgraph.builder import GraphBuilder, build_graph
from pgraph.config import EnumeratorConfig
from pgraph.dsl.loader import GraphSpec, load_graph_file, load_graph_yaml
from pgraph.exceptions import (
    BuildError,
    DuplicateNodeError,
    InvalidNodeNameError,
    MissingEntryError,
    TraversalLimitError,
    UnresolvedReferenceError,
)
from pgraph.graph.convert import from_networkx, to_networkx
from pgraph.graph.stats import GraphSummary, describe_graph
from pgraph.model.graph import Edge, Graph, Node
from pgraph.model.path import Occurrence, Path
from pgraph.traversal import (
    DeadLoopWarning,
    EnumerationResult,
    EnumerationStats,
    PathEnumerator,
    find_paths,
)

__all__ = [
    # Version
    "__version__",
    # Model
    "Graph",
    "Node",
    "Edge",
    "Path",
    "Occurrence",
    # Construction
    "GraphBuilder",
    "build_graph",
    "GraphSpec",
    "load_graph_yaml",
    "load_graph_file",
    # Enumeration
    "PathEnumerator",
    "find_paths",
    "EnumeratorConfig",
    "EnumerationResult",
    "EnumerationStats",
    "DeadLoopWarning",
    # Errors
    "BuildError",
    "DuplicateNodeError",
    "InvalidNodeNameError",
    "UnresolvedReferenceError",
    "MissingEntryError",
    "TraversalLimitError",
    # Library integrations (NetworkX)
    "from_networkx",
    "to_networkx",
    "GraphSummary",
    "describe_graph",
    # Utilities
    "cli",
    "logging",
]
