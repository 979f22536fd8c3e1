"""
GraphState: a ready-made collaborator over an explicit adjacency map.

Useful for small hand-written state spaces and for testing traversal
properties on synthetic graphs (diamonds, cycles, chains).

Adjacency format:
    {node: [next_node, ...]}                 move label == next_node
    {node: [(move, next_node), ...]}         explicit move labels

Nodes must be hashable. The graph itself is shared between clones (it is
never mutated); only the current position is copied.
"""

from __future__ import annotations
from typing import Any, Hashable, Iterable, Mapping, Optional

from statesearch.models import Successor


class GraphState:
    """
    Position on an explicit directed graph.

    Attributes:
        graph: Adjacency mapping (read-only, shared)
        node: Current position
        goals: Set of goal positions

    Example:
        >>> g = GraphState({"S": ["A", "B"], "A": ["G"]}, "S", goals={"G"})
        >>> [s.move for s in g.get_next_states()]
        ['A', 'B']
    """

    def __init__(
        self,
        graph: Mapping[Hashable, Iterable[Any]],
        node: Hashable,
        goals: Optional[Iterable[Hashable]] = None,
    ):
        self.graph = graph
        self.node = node
        self.goals = frozenset(goals or ())

    def __repr__(self) -> str:
        return f"GraphState(node={self.node!r})"

    def _edges(self) -> list[tuple[Any, Hashable]]:
        edges = []
        for item in self.graph.get(self.node, ()):
            if isinstance(item, tuple) and len(item) == 2:
                edges.append(item)
            else:
                edges.append((item, item))
        return edges

    def clone(self) -> GraphState:
        return GraphState(self.graph, self.node, self.goals)

    def get_state_key(self) -> str:
        return repr(self.node)

    def is_goal(self) -> bool:
        return self.node in self.goals

    def get_next_states(self) -> list[Successor]:
        return [
            Successor(move=move, state=GraphState(self.graph, target, self.goals))
            for move, target in self._edges()
        ]

    def get_all_valid_moves(self) -> list[Any]:
        return [move for move, _ in self._edges()]

    def make_move(self, move: Any) -> bool:
        """
        Apply move in place.

        Returns:
            False (and no change) if move is not an edge from the current node
        """
        for label, target in self._edges():
            if label == move:
                self.node = target
                return True
        return False
