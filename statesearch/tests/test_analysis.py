"""
Tests for tree analysis helpers (tree/analysis.py).
"""

import numpy as np
import pytest

from statesearch.graph_state import GraphState
from statesearch.tree import (
    count_possible_nodes,
    count_subtree_nodes,
    effective_branching_factor,
    generate_tree,
    tree_statistics,
)


@pytest.fixture
def small_tree():
    """S -> A -> C, S -> B (generated, 4 nodes, leaves C and B)"""
    graph = {"S": ["A", "B"], "A": ["C"]}
    return generate_tree(GraphState(graph, "S"), max_depth=3)


def test_A1_count_subtree_nodes(small_tree):
    """A1: All nodes, leaves only, without the start node, filtered"""
    assert count_subtree_nodes(small_tree) == 4
    assert count_subtree_nodes(small_tree, leaf_only=True) == 2
    assert count_subtree_nodes(small_tree, include_start=False) == 3
    assert count_subtree_nodes(small_tree, predicate=lambda n: n.depth == 1) == 2

    node_a = small_tree.children[0]
    assert count_subtree_nodes(node_a) == 2
    assert count_subtree_nodes(node_a, include_start=False, leaf_only=True) == 1


def test_A2_count_possible_nodes():
    """A2: Game-tree count from a movable state, nothing materialised"""
    graph = {"S": ["A", "B"], "A": ["C"]}
    start = GraphState(graph, "S")
    never = lambda state: False  # noqa: E731

    assert count_possible_nodes(start, never) == 4
    assert count_possible_nodes(start, never, leaf_only=True) == 2
    assert count_possible_nodes(start, never, include_start=False) == 3
    # start state untouched
    assert start.node == "S"


def test_A3_count_possible_nodes_terminal_and_horizon():
    """A3: Terminal predicate and max_depth cut branches"""
    graph = {"S": ["A", "B"], "A": ["C"], "C": ["D"]}
    start = GraphState(graph, "S")

    stop_at_a = lambda state: state.node == "A"  # noqa: E731
    assert count_possible_nodes(start, stop_at_a) == 3  # S, A, B
    assert count_possible_nodes(start, lambda s: False, max_depth=1) == 3
    assert count_possible_nodes(start, lambda s: False, max_depth=0, leaf_only=True) == 1


def test_A4_count_possible_nodes_requires_movable():
    """A4: Non-movable state rejected"""
    with pytest.raises(TypeError):
        count_possible_nodes(object(), lambda s: True)


def test_A5_statistics_binary_tree(binary_tree_graph):
    """A5: Complete binary tree -> b* = 2"""
    root = generate_tree(GraphState(binary_tree_graph, "r"), max_depth=2)
    stats = tree_statistics(root)

    assert stats.total_nodes == 7
    assert stats.max_depth == 2
    assert stats.leaf_count == 4
    assert stats.duplicate_count == 0
    assert stats.solution_count == 0
    np.testing.assert_array_equal(stats.nodes_per_depth, [1, 2, 4])
    assert stats.effective_branching_factor == pytest.approx(2.0)


def test_A6_statistics_with_duplicates(diamond_graph):
    """A6: Duplicate and goal counts"""
    root = generate_tree(GraphState(diamond_graph, "S", goals={"C"}), max_depth=2)
    stats = tree_statistics(root)

    assert stats.total_nodes == 5
    assert stats.duplicate_count == 1
    assert stats.solution_count == 2


def test_A7_effective_branching_factor_edges():
    """A7: Chain -> 1.0, single node -> 0.0"""
    assert effective_branching_factor(5, 4) == pytest.approx(1.0, abs=1e-6)
    assert effective_branching_factor(1, 0) == 0.0
    assert effective_branching_factor(4, 1) == pytest.approx(3.0)
