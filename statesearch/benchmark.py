"""
Strategy benchmark: solve one start state under several strategies and
compare path length, visited nodes and wall-clock time.
"""

from __future__ import annotations
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Union

from statesearch.config import SearchConfig, SearchStrategy
from statesearch.engine.engine import GraphSearchEngine
from statesearch.performance import PerformanceTimer


@dataclass
class StrategyBenchmark:
    """Benchmark figures of one strategy."""
    strategy: SearchStrategy
    success: bool
    path_length: int
    nodes_visited: int
    runs: int
    mean_elapsed_s: float


def benchmark_strategies(
    start_state: Any,
    strategies: Iterable[Union[SearchStrategy, str]] = (
        SearchStrategy.BREADTH_FIRST, SearchStrategy.DEPTH_FIRST
    ),
    repeats: int = 1,
    timer: Optional[PerformanceTimer] = None,
    **search_kwargs: Any,
) -> Dict[SearchStrategy, StrategyBenchmark]:
    """
    Solve the same start state with several strategies.

    Args:
        start_state: Collaborator state
        strategies: Strategies to compare
        repeats: Runs per strategy (timings averaged)
        timer: Optional PerformanceTimer; it receives one measurement per run
               and, when enabled, the engine's "expand" blocks nested below
               "benchmark <strategy>"
        **search_kwargs: Further SearchConfig fields (max_depth, ...)

    Returns:
        Dict mapping strategy -> StrategyBenchmark

    Raises:
        ValueError: repeats < 1
    """
    if repeats < 1:
        raise ValueError(f"repeats must be >= 1, got {repeats}")

    timer = timer or PerformanceTimer()
    benchmarks = {}

    for strategy in strategies:
        strategy = SearchStrategy.parse(strategy)
        engine = GraphSearchEngine(SearchConfig(strategy=strategy, **search_kwargs), timer=timer)

        result = None
        with timer.time_block(f"benchmark {strategy.value}"):
            for _ in range(repeats):
                started = time.perf_counter()
                result = engine.solve_blocking(start_state)
                timer.record(strategy, time.perf_counter() - started)

        benchmarks[strategy] = StrategyBenchmark(
            strategy=strategy,
            success=result.success,
            path_length=result.path_length,
            nodes_visited=result.nodes_visited,
            runs=repeats,
            mean_elapsed_s=timer.average(strategy),
        )

    timer.log_results()
    return benchmarks
