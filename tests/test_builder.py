"""Tests for graph construction and validation."""

import pytest

from pgraph.builder import GraphBuilder, build_graph
from pgraph.exceptions import (
    BuildError,
    DuplicateNodeError,
    InvalidNodeNameError,
    MissingEntryError,
    UnresolvedReferenceError,
)


class TestGraphBuilder:
    """Tests for successful builds."""

    def test_nodes_and_edges_follow_declaration_order(self, reference_graph):
        """Successor order is preserved on every node."""
        assert [n.name for n in reference_graph] == [
            "start",
            "start_loop",
            "loop_1",
            "loop_2",
            "s1",
            "accept",
        ]
        assert reference_graph.successors("start") == ["start_loop", "s1"]
        assert reference_graph.successors("loop_2") == ["start_loop", "accept"]
        assert reference_graph.successors("accept") == []

    def test_entry_defaults_to_start(self, reference_graph):
        assert reference_graph.entry.name == "start"

    def test_custom_entry(self):
        graph = GraphBuilder(entry="init").build({"init": ["done"], "done": []})
        assert graph.entry.name == "init"

    def test_edge_indices_are_unique(self, reference_graph):
        indices = [e.index for e in reference_graph.edges()]
        assert len(indices) == reference_graph.edge_count == 8
        assert len(set(indices)) == len(indices)

    def test_parallel_edges_are_distinct(self):
        """Two edges to the same target are separate edges."""
        graph = build_graph({"start": ["end", "end"], "end": []})
        first, second = graph.node("start").edges
        assert first != second
        assert (first.position, second.position) == (0, 1)
        assert graph.target(first) is graph.target(second)

    def test_edges_reference_arena_indices(self, reference_graph):
        start = reference_graph.node("start")
        edge = start.edges[1]
        assert edge.source == start.index
        assert reference_graph.node_at(edge.target).name == "s1"
        assert reference_graph.source(edge) is start

    def test_terminals(self, reference_graph):
        assert [n.name for n in reference_graph.terminals()] == ["accept"]
        assert reference_graph.node("accept").is_terminal
        assert not reference_graph.node("s1").is_terminal

    def test_none_successors_declare_terminal(self):
        graph = build_graph({"start": ["end"], "end": None})
        assert graph.node("end").is_terminal

    def test_pairs_input(self):
        graph = build_graph([("start", ["end"]), ("end", [])])
        assert graph.to_spec() == {"start": ["end"], "end": []}

    def test_to_spec_round_trip(self, reference_spec, reference_graph):
        assert reference_graph.to_spec() == reference_spec
        assert build_graph(reference_graph.to_spec()) == reference_graph

    def test_graph_container_protocol(self, reference_graph):
        assert "loop_1" in reference_graph
        assert "missing" not in reference_graph
        assert len(reference_graph) == 6
        assert "entry='start'" in repr(reference_graph)

    def test_unknown_node_lookup_raises_key_error(self, reference_graph):
        with pytest.raises(KeyError, match="missing"):
            reference_graph.node("missing")


class TestBuildErrors:
    """Tests for the build error taxonomy."""

    def test_unresolved_reference(self):
        with pytest.raises(UnresolvedReferenceError) as exc_info:
            build_graph({"start": ["s1", "nowhere"], "s1": []})
        assert exc_info.value.source == "start"
        assert exc_info.value.target == "nowhere"
        assert "nowhere" in str(exc_info.value)

    def test_duplicate_node(self):
        with pytest.raises(DuplicateNodeError) as exc_info:
            build_graph([("start", ["end"]), ("end", []), ("start", [])])
        assert exc_info.value.name == "start"

    def test_missing_entry(self):
        with pytest.raises(MissingEntryError) as exc_info:
            build_graph({"a": ["b"], "b": []})
        assert exc_info.value.entry == "start"

    def test_missing_custom_entry(self):
        with pytest.raises(MissingEntryError, match="init"):
            build_graph({"start": []}, entry="init")

    @pytest.mark.parametrize("name", ["", None, 3])
    def test_invalid_node_name(self, name):
        with pytest.raises(InvalidNodeNameError):
            build_graph([("start", []), (name, [])])

    def test_string_successors_rejected(self):
        with pytest.raises(TypeError, match="start"):
            build_graph({"start": "end", "end": []})

    def test_build_errors_share_base_class(self):
        for exc_type in (
            DuplicateNodeError,
            InvalidNodeNameError,
            MissingEntryError,
            UnresolvedReferenceError,
        ):
            assert issubclass(exc_type, BuildError)
            assert issubclass(exc_type, ValueError)

    def test_duplicate_reported_before_unresolved(self):
        """Names are registered before any successor is resolved."""
        with pytest.raises(DuplicateNodeError):
            build_graph([("start", ["ghost"]), ("start", [])])
