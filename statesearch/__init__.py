"""
statesearch: State-space search core.

Breadth-first / depth-first traversal of discrete state spaces (game
positions, puzzle configurations) with duplicate suppression, a
materialised search tree for visualisation, and a stepwise controller for
watching and driving a search one node at a time.

Main API:
    GraphSearchEngine(...).solve(start_state)          -> SearchResult
    SearchTreeBuilder(...).generate_tree(start_state)  -> TreeNode
    StepwiseExecutionController(engine, ...).start(s)  -> RunReport

States are collaborators: see capability.py for the members they expose.
"""

from statesearch.config import (
    SearchStrategy,
    SearchConfig,
    TreeConfig,
    RunnerConfig,
    SPEED_DELAYS_MS,
    MANUAL_SPEED_LEVEL,
)
from statesearch.debug import DebugConfig, LogDomain, LogLevel, get_search_logger
from statesearch.models import (
    Successor,
    SearchNode,
    SearchResult,
    VisitSignal,
    STOP,
    RunOutcome,
    RunReport,
)
from statesearch.capability import (
    GoalKind,
    SuccessorKind,
    StateCapabilities,
    resolve_capabilities,
)
from statesearch.graph_state import GraphState
from statesearch.engine import CancellationToken, GraphSearchEngine, solve
from statesearch.tree import (
    TreeNode,
    SearchTreeBuilder,
    generate_tree,
    TreeStatistics,
    tree_statistics,
    count_subtree_nodes,
    count_possible_nodes,
)
from statesearch.runner import StepwiseExecutionController, RunnerState, RunnerStatus
from statesearch.performance import PerformanceTimer, TimingBlock
from statesearch.benchmark import StrategyBenchmark, benchmark_strategies


__all__ = [
    # Main API
    "GraphSearchEngine",
    "solve",
    "SearchTreeBuilder",
    "generate_tree",
    "StepwiseExecutionController",
    # Config
    "SearchStrategy",
    "SearchConfig",
    "TreeConfig",
    "RunnerConfig",
    "SPEED_DELAYS_MS",
    "MANUAL_SPEED_LEVEL",
    "DebugConfig",
    "LogDomain",
    "LogLevel",
    "get_search_logger",
    # Models
    "Successor",
    "SearchNode",
    "SearchResult",
    "VisitSignal",
    "STOP",
    "RunOutcome",
    "RunReport",
    "TreeNode",
    "RunnerState",
    "RunnerStatus",
    "CancellationToken",
    # Collaborators
    "GoalKind",
    "SuccessorKind",
    "StateCapabilities",
    "resolve_capabilities",
    "GraphState",
    # Analysis
    "TreeStatistics",
    "tree_statistics",
    "count_subtree_nodes",
    "count_possible_nodes",
    "PerformanceTimer",
    "TimingBlock",
    "StrategyBenchmark",
    "benchmark_strategies",
]

__version__ = "0.1.0"
