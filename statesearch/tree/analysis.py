"""
Search tree analysis helpers.

- count_subtree_nodes: count stored nodes (all or leaves only) below a node
- count_possible_nodes: count a game tree from a state without building it
- tree_statistics: summary figures of a generated tree
- effective_branching_factor: b* with b* + b*^2 + ... + b*^d = N
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Optional
import numpy as np

from statesearch.capability import Movable
from statesearch.tree.node import TreeNode


def count_subtree_nodes(
    node: TreeNode,
    leaf_only: bool = False,
    include_start: bool = True,
    predicate: Optional[Callable[[TreeNode], bool]] = None,
) -> int:
    """
    Count nodes of a stored subtree.

    Args:
        node: Subtree root
        leaf_only: Count leaves only
        include_start: Count the subtree root itself
        predicate: Optional filter, nodes failing it are not counted
                   (their children still are)

    Returns:
        Number of matching nodes
    """
    count = 0
    stack = [node]

    while stack:
        current = stack.pop()
        if current is not node or include_start:
            if (not leaf_only or current.is_leaf) and (predicate is None or predicate(current)):
                count += 1
        stack.extend(current.children)

    return count


def count_possible_nodes(
    state: Any,
    is_terminal: Callable[[Any], bool],
    leaf_only: bool = False,
    include_start: bool = True,
    max_depth: Optional[int] = None,
) -> int:
    """
    Count the nodes of the full game tree below state.

    Nothing is materialised: each move is applied to a clone and the
    clone is discarded after its subtree was counted. Duplicates are NOT
    merged (this counts paths, not distinct states).

    Args:
        state: Movable state (clone, get_all_valid_moves, make_move)
        is_terminal: Predicate ending a branch
        leaf_only: Count terminal/horizon leaves only
        include_start: Count the starting node itself
        max_depth: Optional horizon (nodes at max_depth are leaves)

    Returns:
        Node count

    Raises:
        TypeError: state is not movable
    """
    if not isinstance(state, Movable):
        raise TypeError(f"{type(state).__name__} does not implement the movable interface")

    def count(current: Any, depth: int) -> int:
        counted_here = depth > 0 or include_start
        at_horizon = max_depth is not None and depth >= max_depth

        moves = [] if is_terminal(current) or at_horizon else list(current.get_all_valid_moves())
        if not moves:
            return 1 if counted_here else 0

        total = 1 if counted_here and not leaf_only else 0
        for move in moves:
            child = current.clone()
            child.make_move(move)
            total += count(child, depth + 1)
        return total

    return count(state, 0)


def effective_branching_factor(total_nodes: int, depth: int) -> float:
    """
    Effective branching factor b* of a tree.

    Solves b + b^2 + ... + b^depth = total_nodes - 1 (root excluded).

    Args:
        total_nodes: Node count including the root
        depth: Depth of the deepest node

    Returns:
        b* (0.0 for a single node or depth 0)

    Example:
        >>> round(effective_branching_factor(7, 2), 6)  # complete binary tree
        2.0
    """
    if depth <= 0 or total_nodes <= 1:
        return 0.0

    # Highest power first: b^d + ... + b - (N - 1) = 0
    coefficients = np.ones(depth + 1)
    coefficients[-1] = -(total_nodes - 1)
    roots = np.roots(coefficients)

    # Exactly one positive real root (single sign change)
    real_roots = roots[(np.abs(roots.imag) < 1e-9) & (roots.real > 0)].real
    return float(real_roots.max()) if real_roots.size else 0.0


@dataclass
class TreeStatistics:
    """
    Summary of a generated tree.

    Attributes:
        total_nodes: All nodes including the root
        max_depth: Depth of the deepest node
        leaf_count: Nodes without children
        duplicate_count: Nodes flagged is_duplicate
        solution_count: Nodes flagged is_solution
        nodes_per_depth: nodes_per_depth[d] = number of nodes at depth d
        effective_branching_factor: See effective_branching_factor()
    """
    total_nodes: int
    max_depth: int
    leaf_count: int
    duplicate_count: int
    solution_count: int
    nodes_per_depth: np.ndarray
    effective_branching_factor: float


def tree_statistics(root: TreeNode) -> TreeStatistics:
    """Collect TreeStatistics for the tree below root."""
    nodes = list(root.iter_nodes())
    depths = np.fromiter((node.depth - root.depth for node in nodes), dtype=int, count=len(nodes))
    max_depth = int(depths.max())

    return TreeStatistics(
        total_nodes=len(nodes),
        max_depth=max_depth,
        leaf_count=sum(1 for node in nodes if node.is_leaf),
        duplicate_count=sum(1 for node in nodes if node.is_duplicate),
        solution_count=sum(1 for node in nodes if node.is_solution),
        nodes_per_depth=np.bincount(depths),
        effective_branching_factor=effective_branching_factor(len(nodes), max_depth),
    )
