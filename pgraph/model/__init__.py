"""Graph and path data model.

This package defines the immutable node/edge arena (`Graph`, `Node`, `Edge`)
and the mutable backtracking `Path` built while enumerating it.
"""

from pgraph.model.graph import Edge, Graph, Node
from pgraph.model.path import Occurrence, Path

__all__ = [
    "Graph",
    "Node",
    "Edge",
    "Path",
    "Occurrence",
]
