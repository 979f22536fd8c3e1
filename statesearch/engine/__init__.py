"""
Graph search engine.

Public exports:
- GraphSearchEngine: BFS/DFS search with duplicate suppression and per-node hook
- solve: one-shot keyword wrapper around GraphSearchEngine.solve()
- CancellationToken: cooperative cancel flag
- Frontier, FifoFrontier, LifoFrontier, make_frontier: frontier containers
"""

from statesearch.engine.cancellation import CancellationToken
from statesearch.engine.frontier import Frontier, FifoFrontier, LifoFrontier, make_frontier
from statesearch.engine.engine import GraphSearchEngine, solve

__all__ = [
    'GraphSearchEngine',
    'solve',
    'CancellationToken',
    'Frontier',
    'FifoFrontier',
    'LifoFrontier',
    'make_frontier',
]
