"""
Shared fixtures for the search core tests.

Graphs are plain adjacency dicts wrapped in GraphState; a few hand-written
collaborators cover the other capability shapes (sentinel goal, movable
interface, dead end).
"""

import asyncio

import pytest

from statesearch.graph_state import GraphState


# ========== Graphs ==========

@pytest.fixture
def chain_graph():
    """Linear graph N1 -> N2 -> N3 -> N4 -> N5"""
    return {"N1": ["N2"], "N2": ["N3"], "N3": ["N4"], "N4": ["N5"]}


@pytest.fixture
def diamond_graph():
    """start -> A, start -> B, A -> C, B -> C"""
    return {"S": ["A", "B"], "A": ["C"], "B": ["C"]}


@pytest.fixture
def cyclic_graph():
    """A <-> B, B -> C, C -> A, C -> D (goal D)"""
    return {"A": ["B"], "B": ["C", "A"], "C": ["A", "D"], "D": []}


@pytest.fixture
def long_branch_graph():
    """
    Long branch declared first, short branch second.

        S -> L1 -> L2 -> L3 -> G
        S -> X -> G
    """
    return {"S": ["L1", "X"], "L1": ["L2"], "L2": ["L3"], "L3": ["G"], "X": ["G"]}


@pytest.fixture
def complete_graph():
    """Fully connected graph on 4 nodes, no self loops"""
    nodes = [0, 1, 2, 3]
    return {n: [m for m in nodes if m != n] for n in nodes}


@pytest.fixture
def binary_tree_graph():
    """Complete binary tree of depth 2 (7 nodes)"""
    return {"r": ["a", "b"], "a": ["a1", "a2"], "b": ["b1", "b2"]}


# ========== Collaborators ==========

class SentinelState:
    """Collaborator using the `won` terminal field instead of is_goal()"""

    def __init__(self, value, target):
        self.value = value
        self.target = target
        self.won = value == target

    def clone(self):
        return SentinelState(self.value, self.target)

    def get_state_key(self):
        return str(self.value)

    def get_next_states(self):
        if self.value >= self.target:
            return []
        return [("inc", SentinelState(self.value + 1, self.target))]


class CounterPuzzle:
    """
    Movable collaborator: reach `target` from `value` with "+1" and "*2".

    make_move() refuses moves that would exceed `limit`.
    """

    def __init__(self, value, target, limit=100):
        self.value = value
        self.target = target
        self.limit = limit

    def clone(self):
        return CounterPuzzle(self.value, self.target, self.limit)

    def get_state_key(self):
        return str(self.value)

    def is_goal(self):
        return self.value == self.target

    def get_all_valid_moves(self):
        return ["+1", "*2"]

    def make_move(self, move):
        new_value = self.value + 1 if move == "+1" else self.value * 2
        if new_value > self.limit:
            return False
        self.value = new_value
        return True


class DeadEndState:
    """Keyable, goal-testable, but offers no successors at all"""

    def clone(self):
        return DeadEndState()

    def get_state_key(self):
        return "dead-end"

    def is_goal(self):
        return False


class BareLeaf:
    """Successor type with a key and goal flag but no successor source"""

    def __init__(self, name, goal=False):
        self.name = name
        self.goal = goal

    def get_state_key(self):
        return self.name

    def is_goal(self):
        return self.goal


class BranchingRoot:
    """Generator state whose children are BareLeaf objects (no get_next_states)"""

    def __init__(self, leaves):
        self.leaves = leaves

    def clone(self):
        return BranchingRoot(self.leaves)

    def get_state_key(self):
        return "root"

    def is_goal(self):
        return False

    def get_next_states(self):
        return [(leaf.name, leaf) for leaf in self.leaves]


@pytest.fixture
def make_graph_state():
    """Factory: make_graph_state(graph, start, goals=None)"""
    def _make(graph, start, goals=None):
        return GraphState(graph, start, goals=goals)
    return _make


async def wait_until(predicate, max_turns=1000):
    """Yield to the event loop until predicate() holds."""
    for _ in range(max_turns):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")
