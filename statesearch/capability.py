"""
Collaborator contract of the search core.

The core never implements game rules. It consumes states that expose a
subset of the following members:

    clone()               -> independent copy (no aliasing)
    get_state_key()       -> stable identity (equal states, equal keys)
    is_goal()             -> goal predicate            ┐ goal test
    <sentinel attribute>  -> terminal flag (e.g. won)  ┘ (one of)
    get_next_states()     -> [(move, state), ...]      ┐ successor source
    get_all_valid_moves() + make_move(move) + clone()  ┘ (one of)

resolve_capabilities() inspects the start state ONCE per traversal and
returns a StateCapabilities record with bound strategies for the goal test
and successor generation. Traversal loops only call into that record.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Protocol, runtime_checkable

from statesearch.models import Successor


@runtime_checkable
class Cloneable(Protocol):
    def clone(self) -> Any: ...


@runtime_checkable
class Keyable(Protocol):
    def get_state_key(self) -> Any: ...


@runtime_checkable
class GoalTestable(Protocol):
    def is_goal(self) -> bool: ...


@runtime_checkable
class SuccessorGenerating(Protocol):
    def get_next_states(self) -> Any: ...


@runtime_checkable
class Movable(Protocol):
    def clone(self) -> Any: ...

    def get_all_valid_moves(self) -> Any: ...

    def make_move(self, move: Any) -> Any: ...


class GoalKind(Enum):
    PREDICATE = "predicate"  # is_goal()
    SENTINEL = "sentinel"  # terminal attribute
    NONE = "none"  # never a goal


class SuccessorKind(Enum):
    GENERATOR = "generator"  # get_next_states()
    MOVES = "moves"  # clone + make_move per valid move
    NONE = "none"  # dead end


def _successors_from_generator(state: Any) -> list[Successor]:
    return [Successor.coerce(item) for item in state.get_next_states()]


def _successors_from_moves(state: Any) -> list[Successor]:
    successors = []
    for move in state.get_all_valid_moves():
        child = state.clone()
        applied = child.make_move(move)
        # None means the collaborator does not report success/failure
        if applied is None or applied:
            successors.append(Successor(move=move, state=child))
    return successors


def _no_successors(state: Any) -> list[Successor]:
    return []


def _never_goal(state: Any) -> bool:
    return False


_SUCCESSOR_SOURCES: dict[SuccessorKind, Callable[[Any], list[Successor]]] = {
    SuccessorKind.GENERATOR: _successors_from_generator,
    SuccessorKind.MOVES: _successors_from_moves,
    SuccessorKind.NONE: _no_successors,
}

# Member set each node must offer for the resolved successor source
_SUCCESSOR_PROTOCOLS: dict[SuccessorKind, Any] = {
    SuccessorKind.GENERATOR: SuccessorGenerating,
    SuccessorKind.MOVES: Movable,
}


@dataclass(frozen=True)
class StateCapabilities:
    """
    Capabilities of a collaborator, resolved once at traversal start.

    Attributes:
        goal_kind: Which goal convention the state follows
        successor_kind: Which successor source the state offers
        keyable: State exposes get_state_key()
        cloneable: State exposes clone()
        goal_sentinel: Attribute name used for GoalKind.SENTINEL
    """
    goal_kind: GoalKind
    successor_kind: SuccessorKind
    keyable: bool
    cloneable: bool
    goal_sentinel: str = "won"

    def is_goal(self, state: Any) -> bool:
        # Nodes without is_goal() fall back to the sentinel attribute
        if self.goal_kind is GoalKind.PREDICATE and isinstance(state, GoalTestable):
            return bool(state.is_goal())
        if self.goal_kind is not GoalKind.NONE:
            return bool(getattr(state, self.goal_sentinel, False))
        return _never_goal(state)

    def supports(self, state: Any) -> bool:
        """True if state offers the successor source resolved at traversal start."""
        protocol = _SUCCESSOR_PROTOCOLS.get(self.successor_kind)
        return protocol is not None and isinstance(state, protocol)

    def successors(self, state: Any) -> list[Successor]:
        """
        Successors of state under the resolved source.

        A node lacking that source is a dead end: the result is empty.
        """
        if not self.supports(state):
            return []
        return _SUCCESSOR_SOURCES[self.successor_kind](state)

    @property
    def can_expand(self) -> bool:
        return self.successor_kind is not SuccessorKind.NONE


def resolve_capabilities(state: Any, goal_sentinel: str = "won") -> StateCapabilities:
    """
    Classify a collaborator state.

    Args:
        state: Start state of a traversal
        goal_sentinel: Attribute consulted when the state has no is_goal()

    Returns:
        StateCapabilities record

    Notes:
        - get_next_states() takes precedence over the movable interface
        - A state with neither is a dead end, not an error

    Example:
        >>> caps = resolve_capabilities(GraphState(graph, "A", goals={"C"}))
        >>> caps.successor_kind
        <SuccessorKind.GENERATOR: 'generator'>
    """
    if isinstance(state, GoalTestable):
        goal_kind = GoalKind.PREDICATE
    elif hasattr(state, goal_sentinel):
        goal_kind = GoalKind.SENTINEL
    else:
        goal_kind = GoalKind.NONE

    if isinstance(state, SuccessorGenerating):
        successor_kind = SuccessorKind.GENERATOR
    elif isinstance(state, Movable):
        successor_kind = SuccessorKind.MOVES
    else:
        successor_kind = SuccessorKind.NONE

    return StateCapabilities(
        goal_kind=goal_kind,
        successor_kind=successor_kind,
        keyable=isinstance(state, Keyable),
        cloneable=isinstance(state, Cloneable),
        goal_sentinel=goal_sentinel,
    )
