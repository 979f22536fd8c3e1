"""
Search Core Data Models.

This module defines the data structures exchanged by the search core:
- Successor: One (move, next state) pair produced by a collaborator
- SearchNode: Frontier entry of GraphSearchEngine
- VisitSignal: In-band answer of a per-node hook
- SearchResult: Outcome of GraphSearchEngine.solve()
- RunOutcome / RunReport: Completion payload of the stepwise controller

NOTE: TreeNode is NOT defined here. It lives in tree/node.py next to the
      builder that owns its lifecycle.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class Successor:
    """
    One transition offered by a state.

    Attributes:
        move: Move label (any value meaningful to the caller)
        state: Resulting state (must not alias the parent state)
    """
    move: Any
    state: Any

    @classmethod
    def coerce(cls, item: Any) -> Successor:
        """
        Normalise a collaborator item into a Successor.

        Accepted shapes: Successor, (move, state) tuple, mapping with
        'move'/'state' keys, or any object with .move/.state attributes.

        Raises:
            TypeError: Item has none of the accepted shapes
        """
        if isinstance(item, cls):
            return item
        if isinstance(item, tuple) and len(item) == 2:
            return cls(move=item[0], state=item[1])
        if isinstance(item, dict) and "move" in item and "state" in item:
            return cls(move=item["move"], state=item["state"])
        if hasattr(item, "move") and hasattr(item, "state"):
            return cls(move=item.move, state=item.state)
        raise TypeError(f"Cannot interpret successor item: {item!r}")


@dataclass(frozen=True)
class SearchNode:
    """
    Frontier entry of the plain search engine.

    Attributes:
        state: Domain state (owned by this node)
        path: Moves applied from the start state, in order
        depth: Number of moves from the start state (== len(path))

    Notes:
        - Never mutated after creation (frozen)
        - Released once expanded and no longer on the frontier or in a result
    """
    state: Any
    path: tuple = ()
    depth: int = 0

    def child(self, move: Any, state: Any) -> SearchNode:
        """Node reached from this one by applying move."""
        return SearchNode(state=state, path=self.path + (move,), depth=self.depth + 1)


class VisitSignal(Enum):
    """Answer of a per-node hook. Returning None means CONTINUE."""
    CONTINUE = "CONTINUE"
    STOP = "STOP"


STOP = VisitSignal.STOP


@dataclass
class SearchResult:
    """
    Outcome of one GraphSearchEngine.solve() call.

    Attributes:
        success: A goal state was reached
        path: Moves from the start state to the goal (empty unless success)
        nodes_visited: Nodes removed from the frontier (including the goal)
        stopped: The run was cancelled (hook returned STOP or token cancelled)
        goal_state: The goal state reached (None unless success)
        max_frontier_size: Largest frontier size observed
        elapsed_s: Wall-clock duration of the call in seconds

    Notes:
        - success=False, stopped=False: frontier exhausted or depth ceiling hit
        - Absence of a solution is a normal outcome, not an error
    """
    success: bool
    path: list = field(default_factory=list)
    nodes_visited: int = 0
    stopped: bool = False
    goal_state: Optional[Any] = None
    max_frontier_size: int = 0
    elapsed_s: float = 0.0

    @property
    def path_length(self) -> int:
        return len(self.path)


class RunOutcome(Enum):
    """How a stepwise run ended."""
    COMPLETED = "completed"  # goal found or search exhausted
    STOPPED = "stopped"  # cancelled by the user


@dataclass
class RunReport:
    """Payload handed to the controller's completion callback."""
    outcome: RunOutcome
    result: SearchResult
    steps: int

    @property
    def stopped(self) -> bool:
        return self.outcome is RunOutcome.STOPPED
