"""
Frontier containers.

Both disciplines sit on collections.deque (O(1) at both ends). The
discipline is fixed when the frontier is built, so the traversal loop
never branches on strategy.
"""

from __future__ import annotations
from collections import deque
from typing import Any, Iterable

from statesearch.config import SearchStrategy


class Frontier:
    """Discovered-but-not-yet-expanded nodes."""

    def __init__(self, items: Iterable[Any] = ()):
        self._items: deque = deque(items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def push(self, item: Any) -> None:
        self._items.append(item)

    def extend(self, items: Iterable[Any]) -> None:
        self._items.extend(items)

    def pop(self) -> Any:
        raise NotImplementedError


class FifoFrontier(Frontier):
    """Queue: oldest node first (breadth-first)."""

    def pop(self) -> Any:
        return self._items.popleft()


class LifoFrontier(Frontier):
    """Stack: newest node first (depth-first)."""

    def pop(self) -> Any:
        return self._items.pop()


def make_frontier(strategy: SearchStrategy, items: Iterable[Any] = ()) -> Frontier:
    """Build the frontier matching a strategy."""
    if SearchStrategy.parse(strategy) is SearchStrategy.DEPTH_FIRST:
        return LifoFrontier(items)
    return FifoFrontier(items)
