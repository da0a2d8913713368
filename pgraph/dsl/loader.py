"""YAML loader + schema validation for graph descriptions.

A description is a YAML mapping::

    description: Parser with a re-entrant loop
    entry: start
    nodes:
      start: [start_loop, s1]
      start_loop: [loop_1, s1]
      loop_1: [loop_2]
      loop_2: [start_loop, accept]
      s1: [accept]
      accept: []

Scalars are read literally: node names such as ``on``, ``no`` or ``1`` stay
strings instead of becoming booleans or numbers. Node declarations keep their
document order and duplicates are preserved, so the builder can report them.
An empty value (``accept:``, ``accept: ~``) declares a terminal node.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import jsonschema
import yaml

from pgraph.builder import DEFAULT_ENTRY, build_graph
from pgraph.logging import get_logger
from pgraph.model.graph import Graph

logger = get_logger(__name__)

RECOGNIZED_KEYS = {"description", "entry", "nodes"}
_EMPTY_SCALARS = {"", "~", "null", "Null", "NULL"}


class _Pairs(list):
    """Mapping read from YAML as an ordered list of (key, value) pairs."""


class _LiteralPairsLoader(yaml.BaseLoader):
    """BaseLoader that keeps mappings as ordered pairs, duplicates included."""


def _construct_pairs(loader: yaml.BaseLoader, node: yaml.MappingNode) -> _Pairs:
    return _Pairs(loader.construct_pairs(node, deep=True))


_LiteralPairsLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_pairs
)


@dataclass
class GraphSpec:
    """Validated graph description, ready for :func:`pgraph.builder.build_graph`.

    Attributes:
        nodes: ``(name, successors)`` declarations in document order.
        entry: Name of the entry node.
        description: Free-form text from the document, if any.
    """

    nodes: List[Tuple[str, List[str]]] = field(default_factory=list)
    entry: str = DEFAULT_ENTRY
    description: Optional[str] = None

    def build(self) -> Graph:
        """Build the described graph.

        Raises:
            BuildError: See :meth:`pgraph.builder.GraphBuilder.build`.
        """
        return build_graph(self.nodes, entry=self.entry)


def _plain(value: Any) -> Any:
    """Convert loader output into plain dicts and lists for schema validation."""
    if isinstance(value, _Pairs):
        plain: Dict[Any, Any] = {}
        for key, item in value:
            if not isinstance(key, str):
                raise ValueError("Mapping keys must be scalars")
            plain[key] = _plain(item)
        return plain
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def _load_schema() -> Dict[str, Any]:
    with (
        resources.files("pgraph.schemas")
        .joinpath("graph.json")
        .open("r", encoding="utf-8")
    ) as f:
        return json.load(f)


def load_graph_yaml(yaml_str: str) -> GraphSpec:
    """Load, normalize, and validate a graph description.

    Args:
        yaml_str: YAML document text.

    Returns:
        GraphSpec with node declarations in document order.

    Raises:
        ValueError: If the document is not a mapping, repeats a top-level key,
            or uses unrecognized top-level keys.
        jsonschema.ValidationError: If the document does not match the schema.
        yaml.YAMLError: If the text is not valid YAML.
    """
    document = yaml.load(yaml_str, Loader=_LiteralPairsLoader)
    if document is None:
        raise ValueError("The graph description is empty.")
    if not isinstance(document, _Pairs):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")

    top: Dict[str, Any] = {}
    for key, value in document:
        if key in top:
            raise ValueError(f"Duplicate top-level key '{key}' in graph description.")
        top[key] = value

    extra = set(top) - RECOGNIZED_KEYS
    if extra:
        raise ValueError(
            f"Unrecognized top-level key(s) in graph description: "
            f"{', '.join(sorted(map(str, extra)))}. "
            f"Allowed keys are {sorted(RECOGNIZED_KEYS)}"
        )

    nodes_section = top.get("nodes")
    if nodes_section is not None and not isinstance(nodes_section, _Pairs):
        raise ValueError("'nodes' must be a mapping")

    declarations: List[Tuple[str, Any]] = []
    for name, successors in nodes_section or ():
        if isinstance(successors, str) and successors in _EMPTY_SCALARS:
            successors = []
        declarations.append((name, successors))

    normalized = {key: _plain(value) for key, value in top.items()}
    if nodes_section is not None:
        normalized["nodes"] = _plain(_Pairs(declarations))
    jsonschema.validate(normalized, _load_schema())

    spec = GraphSpec(
        nodes=[(name, list(successors)) for name, successors in declarations],
        entry=top.get("entry", DEFAULT_ENTRY),
        description=top.get("description"),
    )
    logger.debug(
        "Loaded graph description with %d node declaration(s)", len(spec.nodes)
    )
    return spec


def load_graph_file(path: Union[str, Path]) -> GraphSpec:
    """Read and validate the graph description stored at ``path``."""
    return load_graph_yaml(Path(path).read_text(encoding="utf-8"))


def build_graph_from_yaml(yaml_str: str) -> Graph:
    """Load a graph description and build it in one step."""
    return load_graph_yaml(yaml_str).build()
