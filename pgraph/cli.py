"""Command-line interface for pgraph."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import jsonschema
import yaml

from pgraph.config import EnumeratorConfig
from pgraph.dsl.loader import GraphSpec, load_graph_file
from pgraph.exceptions import BuildError, TraversalLimitError
from pgraph.graph.stats import describe_graph
from pgraph.logging import get_logger, set_global_log_level
from pgraph.model.graph import Graph
from pgraph.traversal import find_paths, log_dead_loop

logger = get_logger(__name__)


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
    max_col_width: Optional[int] = None,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width
        max_col_width: Cells longer than this are clipped with "..."

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    def clip(val: Any) -> str:
        s = str(val)
        if max_col_width is not None and len(s) > max_col_width:
            return s[: max_col_width - 3] + "..."
        return s

    clipped_headers = [clip(h) for h in headers]
    clipped_rows = [[clip(item) for item in row] for row in rows]

    all_data = [clipped_headers] + clipped_rows
    col_widths = [
        max(max(len(row[col_idx]) for row in all_data), min_width)
        for col_idx in range(len(clipped_headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{item:<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(clipped_headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    lines.extend(format_row(row) for row in clipped_rows)
    return "\n".join(lines)


def _plural(n: int, singular: str, plural: Optional[str] = None) -> str:
    """Return grammatically correct unit for count n."""
    if n == 1:
        return singular
    return plural or (singular + "s")


def _load_graph(path: Path) -> tuple[GraphSpec, Graph]:
    """Load and build the graph at ``path`` or exit with status 1."""
    try:
        spec = load_graph_file(path)
        graph = spec.build()
    except FileNotFoundError:
        logger.error("Graph file not found: %s", path)
        raise SystemExit(1) from None
    except (yaml.YAMLError, jsonschema.ValidationError) as exc:
        logger.error("Invalid graph description %s: %s", path, exc)
        raise SystemExit(1) from None
    except BuildError as exc:
        logger.error("Failed to build graph from %s: %s", path, exc)
        raise SystemExit(1) from None
    except (ValueError, TypeError) as exc:
        logger.error("Invalid graph description %s: %s", path, exc)
        raise SystemExit(1) from None
    logger.info(
        "Loaded graph %s: %d %s, %d %s",
        path,
        len(graph),
        _plural(len(graph), "node"),
        graph.edge_count,
        _plural(graph.edge_count, "edge"),
    )
    return spec, graph


def _print_paths(
    path: Path,
    as_json: bool,
    show_edges: bool,
    max_depth: Optional[int],
    max_visits: Optional[int],
) -> None:
    """Enumerate the graph at ``path`` and print the paths found."""
    _spec, graph = _load_graph(path)
    config = EnumeratorConfig(max_depth=max_depth, max_visits=max_visits)
    try:
        config.validate()
        result = find_paths(graph, config=config, on_dead_loop=log_dead_loop)
    except ValueError as exc:
        logger.error("Invalid enumeration settings: %s", exc)
        raise SystemExit(1) from None
    except TraversalLimitError as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from None

    if as_json:
        print(json.dumps(result.to_dict(include_edges=show_edges), indent=2))
        return

    print("Paths found:")
    for found in result.paths:
        line = str(found)
        if show_edges:
            choices = ", ".join(
                f"{o.node.name}->{graph.target(o.edge).name}"
                for o in found
                if o.edge is not None
            )
            line = f"{line}  [{choices}]"
        print(f"\t{line}")

    n_paths = len(result.paths)
    n_dead = len(result.dead_loops)
    logger.info(
        "Found %d %s and %d dead %s",
        n_paths,
        _plural(n_paths, "path"),
        n_dead,
        _plural(n_dead, "loop"),
    )


def _inspect_graph(path: Path, as_json: bool) -> None:
    """Print a structural summary of the graph at ``path``."""
    spec, graph = _load_graph(path)
    summary = describe_graph(graph)

    if as_json:
        print(json.dumps(summary.to_dict(), indent=2))
        return

    print(f"Graph: {path}")
    if spec.description:
        print(f"   {spec.description}")
    print(f"   Entry: {summary.entry}")
    print(f"   Nodes: {summary.nodes}   Edges: {summary.edges}")
    print(f"   Cycles: {'yes' if summary.has_cycles else 'no'}")

    rows = [
        [
            node.name,
            ", ".join(graph.successors(node.name)) or "-",
            "terminal" if node.is_terminal else "",
        ]
        for node in graph
    ]
    print()
    print(_format_table(["Node", "Successors", "Kind"], rows, max_col_width=60))

    for label, names in (
        ("Self-loops", summary.self_loops),
        ("Unreachable from entry", summary.unreachable),
        ("Cannot reach a terminal", summary.trapped),
    ):
        if names:
            print(f"\n   {label}: {', '.join(names)}")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``pgraph`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="pgraph",
        description="Enumerate entry-to-terminal paths of directed graphs.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{paths,inspect}",
        help="Available commands",
    )

    paths_parser = subparsers.add_parser(
        "paths", help="List every path from the entry to a terminal node"
    )
    paths_parser.add_argument("graph", type=Path, help="Path to graph YAML")
    paths_parser.add_argument(
        "--show-edges",
        action="store_true",
        help="Also show the edge chosen at each step",
    )
    paths_parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Abort when a path grows longer than this many nodes",
    )
    paths_parser.add_argument(
        "--max-visits",
        type=int,
        default=None,
        help="Abort after this many node visits",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Validate a graph and summarize its structure"
    )
    inspect_parser.add_argument("graph", type=Path, help="Path to graph YAML")

    for p in (paths_parser, inspect_parser):
        p.add_argument("--json", action="store_true", help="Print JSON to stdout")

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "paths":
        _print_paths(
            path=args.graph,
            as_json=args.json,
            show_edges=args.show_edges,
            max_depth=args.max_depth,
            max_visits=args.max_visits,
        )
    elif args.command == "inspect":
        _inspect_graph(args.graph, args.json)


if __name__ == "__main__":
    main()
