"""
Graph Search Engine.

This module implements GraphSearchEngine.solve() - breadth-first or
depth-first traversal of a collaborator state space until the first goal.

Key Concepts:
- Frontier: FIFO (BFS) or LIFO (DFS), chosen once per call
- VisitedIndex: state key -> depth at first discovery (first-seen wins)
- Per-node hook: awaited before the goal test, may answer STOP
- max_depth: hard ceiling, nodes at the ceiling are tested but not expanded

Guarantees:
- BFS + check_duplicates on an unweighted graph returns a shortest path
- Both strategies terminate on finite cyclic graphs with check_duplicates
- DFS returns some path, with no length guarantee
"""

from __future__ import annotations
from typing import Any, Awaitable, Callable, Optional, Union
import asyncio
import inspect
import time

from statesearch.capability import resolve_capabilities
from statesearch.config import SearchConfig, SearchStrategy
from statesearch.debug import LogDomain, LogLevel
from statesearch.engine.cancellation import CancellationToken
from statesearch.engine.frontier import make_frontier
from statesearch.models import SearchNode, SearchResult, VisitSignal
from statesearch.performance import PerformanceTimer


HookAnswer = Optional[Union[VisitSignal, str]]
OnVisit = Callable[[Any, int], Union[Awaitable[HookAnswer], HookAnswer]]


def _is_stop(answer: Any) -> bool:
    return answer is VisitSignal.STOP or answer == VisitSignal.STOP.value


class GraphSearchEngine:
    """
    Breadth-first / depth-first search with duplicate suppression.

    Args:
        config: SearchConfig (defaults if None)
        timer: PerformanceTimer receiving the "expand" blocks
               (a private one bound to config.debug if None)
        **overrides: SearchConfig fields, used when config is None

    Example:
        >>> engine = GraphSearchEngine(strategy="BFS", max_depth=20)
        >>> result = await engine.solve(start_state)
        >>> result.success, result.path
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        timer: Optional[PerformanceTimer] = None,
        **overrides: Any,
    ):
        if config is not None and overrides:
            raise ValueError("Pass either a SearchConfig or keyword overrides, not both")
        self.config = config if config is not None else SearchConfig(**overrides)
        self.timer = timer if timer is not None else PerformanceTimer(self.config.debug)

    @property
    def strategy(self) -> SearchStrategy:
        return self.config.strategy

    async def solve(
        self,
        start_state: Any,
        on_visit: Optional[OnVisit] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> SearchResult:
        """
        Search from start_state until a goal is found or the frontier is empty.

        Args:
            start_state: Collaborator state (see capability.py)
            on_visit: Optional hook (state, frontier_size) awaited per node;
                      answering VisitSignal.STOP (or "STOP") cancels the run
            cancel_token: Optional token checked before each hook

        Returns:
            SearchResult

        Raises:
            TypeError: check_duplicates is on but the start state has no get_state_key()

        Algorithm:
            1. Pop next node (strategy order), count it
            2. Cancellation check, then hook
            3. Goal test -> success
            4. depth >= max_depth or no successor source -> drop node
            5. Enumerate successors, skip known keys, register new keys
            6. Optional successor_key sort; DFS pushes the sorted list reversed
        """
        cfg = self.config
        debug = cfg.debug
        caps = resolve_capabilities(start_state, cfg.goal_sentinel)

        if cfg.check_duplicates and not caps.keyable:
            raise TypeError(
                f"{type(start_state).__name__} has no get_state_key(); "
                "required when check_duplicates=True"
            )
        if not caps.can_expand:
            debug.log(
                LogDomain.ENGINE, LogLevel.WARN,
                "State offers no successor generator, nodes are dead ends",
                state_type=type(start_state).__name__,
            )
        # MissingSuccessorCapability is reported once per traversal
        dead_end_reported = not caps.can_expand

        started = time.perf_counter()
        frontier = make_frontier(cfg.strategy, [SearchNode(state=start_state)])

        visited: dict[Any, int] = {}
        if cfg.check_duplicates:
            visited[start_state.get_state_key()] = 0

        nodes_visited = 0
        max_frontier_size = len(frontier)

        def finish(success: bool, stopped: bool = False, node: Optional[SearchNode] = None) -> SearchResult:
            result = SearchResult(
                success=success,
                path=list(node.path) if success and node is not None else [],
                nodes_visited=nodes_visited,
                stopped=stopped,
                goal_state=node.state if success and node is not None else None,
                max_frontier_size=max_frontier_size,
                elapsed_s=time.perf_counter() - started,
            )
            debug.log(
                LogDomain.ENGINE, LogLevel.DEBUG, "Search finished",
                strategy=cfg.strategy.value, success=result.success,
                stopped=result.stopped, nodes_visited=nodes_visited,
                path_length=result.path_length,
            )
            return result

        while frontier:
            node = frontier.pop()
            nodes_visited += 1

            if cancel_token is not None and cancel_token.cancelled:
                return finish(False, stopped=True)

            if on_visit is not None:
                answer = on_visit(node.state, len(frontier))
                if inspect.isawaitable(answer):
                    answer = await answer
                if _is_stop(answer):
                    return finish(False, stopped=True)

            if caps.is_goal(node.state):
                return finish(True, node=node)

            if node.depth >= cfg.max_depth:
                continue

            if not caps.supports(node.state):
                if not dead_end_reported:
                    debug.log(
                        LogDomain.ENGINE, LogLevel.WARN,
                        "Node offers no successor generator, treated as dead end",
                        state_type=type(node.state).__name__, depth=node.depth,
                    )
                    dead_end_reported = True
                continue

            with self.timer.time_block("expand"):
                children = []
                for successor in caps.successors(node.state):
                    if cfg.check_duplicates:
                        key = successor.state.get_state_key()
                        if key in visited:
                            continue
                        visited[key] = node.depth + 1
                    children.append(node.child(successor.move, successor.state))

                if cfg.successor_key is not None:
                    children.sort(key=cfg.successor_key)

                # Stack semantics: push reversed so the first child is expanded first
                if cfg.strategy is SearchStrategy.DEPTH_FIRST:
                    children.reverse()

            frontier.extend(children)
            max_frontier_size = max(max_frontier_size, len(frontier))

            debug.log(
                LogDomain.ENGINE, LogLevel.DEBUG, "Expanded node",
                depth=node.depth, children=len(children), frontier=len(frontier),
            )

        return finish(False)

    def solve_blocking(
        self,
        start_state: Any,
        on_visit: Optional[OnVisit] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> SearchResult:
        """Run solve() to completion outside of an event loop."""
        return asyncio.run(self.solve(start_state, on_visit=on_visit, cancel_token=cancel_token))


async def solve(
    start_state: Any,
    strategy: Union[SearchStrategy, str] = SearchStrategy.BREADTH_FIRST,
    max_depth: int = 1000,
    check_duplicates: bool = True,
    on_visit: Optional[OnVisit] = None,
    successor_key: Optional[Callable[[SearchNode], Any]] = None,
    cancel_token: Optional[CancellationToken] = None,
) -> SearchResult:
    """
    One-shot search with keyword configuration.

    Example:
        >>> result = await solve(board, strategy="DFS", max_depth=64)
    """
    engine = GraphSearchEngine(
        strategy=strategy,
        max_depth=max_depth,
        check_duplicates=check_duplicates,
        successor_key=successor_key,
    )
    return await engine.solve(start_state, on_visit=on_visit, cancel_token=cancel_token)
