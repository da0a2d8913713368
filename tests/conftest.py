"""Shared graph fixtures.

The three parse graphs below exercise the traversal rules: a loop with exits,
a loop without an exit, and two loops crossing at a shared node.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from pgraph.builder import build_graph

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


@pytest.fixture
def reference_spec():
    #            ┌────────────────────────┐
    #            ▼                        │
    #  start ─► start_loop ─► loop_1 ─► loop_2 ─► accept
    #    │           │                            ▲
    #    └──────────►s1───────────────────────────┘
    return {
        "start": ["start_loop", "s1"],
        "start_loop": ["loop_1", "s1"],
        "loop_1": ["loop_2"],
        "loop_2": ["start_loop", "accept"],
        "s1": ["accept"],
        "accept": [],
    }


@pytest.fixture
def dead_loop_spec():
    # Same as the reference graph without the loop exits
    # start_loop -> s1 and loop_2 -> accept.
    return {
        "start": ["start_loop", "s1"],
        "start_loop": ["loop_1"],
        "loop_1": ["loop_2"],
        "loop_2": ["start_loop"],
        "s1": ["accept"],
        "accept": [],
    }


@pytest.fixture
def crossing_loops_spec():
    #  start ─► s1 ─► s3 ◄─ s2 ◄─ start
    #           ▲     │ │    ▲
    #           └─────┘ └────┘
    #                 │
    #                 ▼
    #               accept
    return {
        "start": ["s1", "s2"],
        "s1": ["s3"],
        "s2": ["s3"],
        "s3": ["s1", "s2", "accept"],
        "accept": [],
    }


@pytest.fixture
def reference_graph(reference_spec):
    return build_graph(reference_spec)


@pytest.fixture
def dead_loop_graph(dead_loop_spec):
    return build_graph(dead_loop_spec)


@pytest.fixture
def crossing_loops_graph(crossing_loops_spec):
    return build_graph(crossing_loops_spec)


@pytest.fixture
def examples_dir() -> Path:
    return EXAMPLES_DIR
