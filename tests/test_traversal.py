"""Tests for depth-first path enumeration."""

import logging

import pytest

from pgraph.builder import build_graph
from pgraph.config import EnumeratorConfig
from pgraph.exceptions import TraversalLimitError
from pgraph.traversal import (
    DeadLoopWarning,
    EnumerationResult,
    PathEnumerator,
    find_paths,
)


def names(paths):
    return [list(p.node_names) for p in paths]


class TestReferenceScenarios:
    """Fixed expectations for the sample parse graphs."""

    def test_reference_graph(self, reference_graph):
        result = find_paths(reference_graph)
        assert names(result.paths) == [
            ["start", "start_loop", "loop_1", "loop_2", "start_loop", "s1", "accept"],
            ["start", "start_loop", "loop_1", "loop_2", "accept"],
            ["start", "start_loop", "s1", "accept"],
            ["start", "s1", "accept"],
        ]
        assert result.dead_loops == []

    def test_dead_loop_graph(self, dead_loop_graph):
        result = find_paths(dead_loop_graph)
        assert names(result.paths) == [["start", "s1", "accept"]]
        assert len(result.dead_loops) == 1
        warning = result.dead_loops[0]
        assert list(warning.path.node_names) == [
            "start",
            "start_loop",
            "loop_1",
            "loop_2",
            "start_loop",
        ]
        assert warning.node.name == "start_loop"
        assert warning.path.last.edge is None

    def test_crossing_loops_graph(self, crossing_loops_graph):
        result = find_paths(crossing_loops_graph)
        assert names(result.paths) == [
            ["start", "s1", "s3", "s2", "s3", "accept"],
            ["start", "s1", "s3", "accept"],
            ["start", "s2", "s3", "s1", "s3", "accept"],
            ["start", "s2", "s3", "accept"],
        ]
        assert [list(w.path.node_names) for w in result.dead_loops] == [
            ["start", "s1", "s3", "s1"],
            ["start", "s1", "s3", "s2", "s3", "s1"],
            ["start", "s2", "s3", "s1", "s3", "s2"],
            ["start", "s2", "s3", "s2"],
        ]


class TestEdgeCases:
    def test_terminal_entry_yields_single_path(self):
        result = find_paths(build_graph({"start": []}))
        assert names(result.paths) == [["start"]]
        assert result.dead_loops == []

    def test_self_loop_is_never_followed(self):
        graph = build_graph({"start": ["start", "end"], "end": []})
        result = find_paths(graph)
        assert names(result.paths) == [["start", "end"]]
        assert result.dead_loops == []

    def test_only_self_loop_is_a_dead_loop(self):
        result = find_paths(build_graph({"start": ["start"], "end": []}))
        assert result.paths == []
        assert [list(w.path.node_names) for w in result.dead_loops] == [["start"]]

    def test_no_reachable_terminal_gives_empty_result(self):
        graph = build_graph({"start": ["a"], "a": ["start"], "end": []})
        result = find_paths(graph)
        assert result.paths == []
        assert len(result.dead_loops) == 1

    def test_parallel_edges_produce_separate_paths(self):
        graph = build_graph({"start": ["end", "end"], "end": []})
        paths = find_paths(graph).paths
        assert names(paths) == [["start", "end"], ["start", "end"]]
        assert paths[0] != paths[1]
        assert [p[0].edge.position for p in paths] == [0, 1]

    def test_unreachable_nodes_are_ignored(self):
        graph = build_graph({"start": ["end"], "end": [], "orphan": ["orphan"]})
        result = find_paths(graph)
        assert names(result.paths) == [["start", "end"]]
        assert result.dead_loops == []

    def test_long_chain_does_not_hit_recursion_limit(self):
        size = 2000
        spec = {"start": ["n0"]}
        spec.update({f"n{i}": [f"n{i + 1}"] for i in range(size)})
        spec[f"n{size}"] = []
        result = find_paths(build_graph(spec))
        assert len(result.paths) == 1
        assert len(result.paths[0]) == size + 2


class TestProperties:
    """Invariants every enumeration result satisfies."""

    @pytest.fixture(
        params=["reference_graph", "dead_loop_graph", "crossing_loops_graph", "dense"]
    )
    def graph(self, request):
        if request.param == "dense":
            nodes = ["start", "a", "b"]
            spec = {n: [m for m in nodes] + ["end"] for n in nodes}
            spec["end"] = []
            return build_graph(spec)
        return request.getfixturevalue(request.param)

    def test_every_path_ends_at_terminal(self, graph):
        for path in find_paths(graph).paths:
            assert path.last.node.is_terminal
            assert path.last.edge is None
            assert path[0].node is graph.entry

    def test_no_edge_reused_within_a_path(self, graph):
        for path in find_paths(graph).paths:
            chosen = [o.edge for o in path if o.edge is not None]
            assert len(chosen) == len({e.index for e in chosen})

    def test_no_self_loop_followed(self, graph):
        for path in find_paths(graph).paths:
            for occurrence in path:
                if occurrence.edge is not None:
                    assert not occurrence.edge.is_self_loop
                    assert occurrence.edge.source == occurrence.node.index

    def test_consecutive_occurrences_follow_chosen_edge(self, graph):
        for path in find_paths(graph).paths:
            for here, there in zip(path, list(path)[1:]):
                assert graph.target(here.edge) is there.node

    def test_depth_bounded_by_edge_count(self, graph):
        result = find_paths(graph)
        assert result.stats.max_depth <= graph.edge_count + 1
        for path in result.paths:
            assert len(path) <= graph.edge_count + 1

    def test_deterministic(self, graph):
        first = find_paths(graph)
        second = find_paths(graph)
        assert first.paths == second.paths
        assert [w.path for w in first.dead_loops] == [w.path for w in second.dead_loops]

    def test_dead_loop_paths_end_at_non_terminal(self, graph):
        for warning in find_paths(graph).dead_loops:
            assert not warning.node.is_terminal


class TestPathEnumerator:
    def test_sink_receives_warnings_in_order(self, crossing_loops_graph):
        received = []
        paths = PathEnumerator(on_dead_loop=received.append).enumerate(
            crossing_loops_graph
        )
        assert len(paths) == 4
        assert all(isinstance(w, DeadLoopWarning) for w in received)
        assert len(received) == 4

    def test_default_sink_logs_warning(self, dead_loop_graph, caplog):
        caplog.set_level(logging.WARNING, logger="pgraph")
        PathEnumerator().enumerate(dead_loop_graph)
        messages = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert len(messages) == 1
        assert "start; start_loop; loop_1; loop_2; start_loop;" in messages[0]

    def test_stats(self, reference_graph):
        enumerator = PathEnumerator(on_dead_loop=lambda w: None)
        enumerator.enumerate(reference_graph)
        stats = enumerator.stats
        assert stats.paths == 4
        assert stats.dead_loops == 0
        assert stats.max_depth == 7
        assert stats.visits >= 7

    def test_enumerator_is_reusable(self, reference_graph, dead_loop_graph):
        enumerator = PathEnumerator(on_dead_loop=lambda w: None)
        assert len(enumerator.enumerate(dead_loop_graph)) == 1
        assert len(enumerator.enumerate(reference_graph)) == 4
        assert enumerator.stats.paths == 4

    def test_graph_is_not_mutated(self, crossing_loops_spec, crossing_loops_graph):
        find_paths(crossing_loops_graph)
        assert crossing_loops_graph.to_spec() == crossing_loops_spec

    def test_max_depth_budget(self, reference_graph):
        with pytest.raises(TraversalLimitError) as exc_info:
            find_paths(reference_graph, config=EnumeratorConfig(max_depth=5))
        assert exc_info.value.limit == "max_depth"

    def test_max_depth_budget_not_hit(self, reference_graph):
        result = find_paths(reference_graph, config=EnumeratorConfig(max_depth=7))
        assert len(result.paths) == 4

    def test_max_visits_budget(self, reference_graph):
        with pytest.raises(TraversalLimitError, match="max_visits=3"):
            find_paths(reference_graph, config=EnumeratorConfig(max_visits=3))

    def test_invalid_config_rejected(self):
        with pytest.raises(ValueError):
            PathEnumerator(config=EnumeratorConfig(max_depth=0))


class TestEnumerationResult:
    def test_find_paths_forwards_to_extra_sink(self, dead_loop_graph):
        extra = []
        result = find_paths(dead_loop_graph, on_dead_loop=extra.append)
        assert extra == result.dead_loops

    def test_to_dict(self, dead_loop_graph):
        data = find_paths(dead_loop_graph).to_dict()
        assert data["paths"] == [{"nodes": ["start", "s1", "accept"]}]
        assert data["dead_loops"] == [
            {
                "node": "start_loop",
                "path": ["start", "start_loop", "loop_1", "loop_2", "start_loop"],
            }
        ]
        assert data["stats"]["paths"] == 1
        assert data["stats"]["dead_loops"] == 1

    def test_empty_result(self):
        result = EnumerationResult()
        assert result.to_dict()["paths"] == []
