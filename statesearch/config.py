"""
Search Core Configuration Models.

This module defines the configuration structures for the search core:
- SearchStrategy: Traversal discipline (breadth-first / depth-first)
- SearchConfig: GraphSearchEngine parameters
- TreeConfig: SearchTreeBuilder parameters
- RunnerConfig: StepwiseExecutionController pacing table

All delays in milliseconds. Depths count applied moves from the start state.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Callable, Any, Union

from statesearch.debug import DebugConfig


class SearchStrategy(Enum):
    """Frontier removal order."""
    BREADTH_FIRST = "BFS"  # FIFO queue
    DEPTH_FIRST = "DFS"  # LIFO stack

    @classmethod
    def parse(cls, value: Union[SearchStrategy, str]) -> SearchStrategy:
        """
        Coerce user input into a SearchStrategy.

        Args:
            value: Enum member, "BFS"/"DFS" or "breadth-first"/"depth-first"

        Returns:
            Matching SearchStrategy

        Raises:
            ValueError: Unknown strategy name
        """
        if isinstance(value, cls):
            return value

        aliases = {
            "bfs": cls.BREADTH_FIRST,
            "breadth-first": cls.BREADTH_FIRST,
            "breadth_first": cls.BREADTH_FIRST,
            "dfs": cls.DEPTH_FIRST,
            "depth-first": cls.DEPTH_FIRST,
            "depth_first": cls.DEPTH_FIRST,
        }
        try:
            return aliases[str(value).strip().lower()]
        except KeyError:
            raise ValueError(f"Unknown search strategy: {value!r}") from None


@dataclass
class SearchConfig:
    """
    GraphSearchEngine configuration.

    Notes:
        - max_depth is a hard safety ceiling, not a search horizon hint
        - successor_key is a sort key; wrap comparators with functools.cmp_to_key
    """

    strategy: SearchStrategy = SearchStrategy.BREADTH_FIRST
    """Frontier discipline. Strings are accepted and parsed."""

    max_depth: int = 1000
    """Nodes at this depth are goal-tested but never expanded."""

    check_duplicates: bool = True
    """Suppress successors whose state key was already discovered (first-seen wins)."""

    successor_key: Optional[Callable[[Any], Any]] = None
    """Optional sort key over the candidate SearchNodes of one expansion.
    Lowest key is expanded first under both strategies. A two-argument
    comparator converts with functools.cmp_to_key(compare)."""

    goal_sentinel: str = "won"
    """Attribute read as the terminal flag when a state has no is_goal()."""

    debug: DebugConfig = field(default_factory=DebugConfig)

    def __post_init__(self):
        self.strategy = SearchStrategy.parse(self.strategy)
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")


@dataclass
class TreeConfig:
    """
    SearchTreeBuilder configuration.

    The defaults describe a small visualisation horizon (three moves deep).
    """

    max_depth: int = 3
    check_duplicates: bool = True
    strategy: SearchStrategy = SearchStrategy.BREADTH_FIRST
    continue_after_goal: bool = False
    """If False, goal nodes are recorded as leaves and not expanded."""

    goal_sentinel: str = "won"

    duplicate_label: str = "duplicate"
    """Annotation for nodes pruned as duplicates."""

    goal_label: str = "goal"
    """Annotation for goal nodes (a duplicate goal keeps duplicate_label)."""

    debug: DebugConfig = field(default_factory=DebugConfig)

    def __post_init__(self):
        self.strategy = SearchStrategy.parse(self.strategy)
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")


SPEED_DELAYS_MS: tuple[int, ...] = (0, 20, 100, 300, 600, 1000)
MANUAL_SPEED_LEVEL = 6
DEFAULT_SPEED_DELAY_MS = 100


@dataclass
class RunnerConfig:
    """
    Pacing table for the stepwise controller.

    Levels 0..len(speed_delays_ms)-1 map to a fixed delay, manual_level
    (and above) switches to single-stepping. Any other level falls back to
    default_delay_ms.
    """

    speed_delays_ms: tuple[int, ...] = SPEED_DELAYS_MS
    manual_level: int = MANUAL_SPEED_LEVEL
    default_delay_ms: int = DEFAULT_SPEED_DELAY_MS

    initial_level: Optional[int] = None
    """Level applied at construction. None keeps default_delay_ms in automatic mode."""

    debug: DebugConfig = field(default_factory=DebugConfig)

    def is_manual_level(self, level: int) -> bool:
        return level >= self.manual_level

    def delay_for_level(self, level: int) -> int:
        """
        Map a speed level to a delay.

        Args:
            level: Integer speed level (below manual_level)

        Returns:
            Delay in milliseconds

        Example:
            >>> RunnerConfig().delay_for_level(2)
            100
            >>> RunnerConfig().delay_for_level(-1)
            100
        """
        if 0 <= level < len(self.speed_delays_ms):
            return self.speed_delays_ms[level]
        return self.default_delay_ms
