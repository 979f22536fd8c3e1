"""
Search Tree Builder.

This module implements SearchTreeBuilder.generate_tree() - a traversal that
materialises every explored transition as a TreeNode instead of stopping
at the first goal.

Key Concepts:
- Every generated child is attached to its parent, duplicates included
- Duplicates become leaves; goals become leaves unless continue_after_goal
- VisitedIndex keeps the SHALLOWEST depth per key (shortest-seen wins)
- DFS generates moves in reverse declared order so the stack pops them
  in declared order

Duplicate tie-break (check_duplicates=True):
    child.depth >= stored depth  -> is_duplicate, not expanded
    child.depth <  stored depth  -> stored depth lowered, child expanded

NOTE: GraphSearchEngine keeps first-seen depths instead (see engine/engine.py).
"""

from __future__ import annotations
from typing import Any, Optional

from statesearch.capability import resolve_capabilities
from statesearch.config import SearchStrategy, TreeConfig
from statesearch.debug import LogDomain, LogLevel
from statesearch.engine.frontier import make_frontier
from statesearch.tree.node import TreeNode


class SearchTreeBuilder:
    """
    Builds a finite search tree for visualisation.

    Attributes:
        config: TreeConfig
        nodes_visited: TreeNode count of the last generate_tree() call

    Example:
        >>> builder = SearchTreeBuilder(max_depth=2, strategy="DFS")
        >>> root = builder.generate_tree(board)
        >>> builder.nodes_visited
        7
    """

    def __init__(self, config: Optional[TreeConfig] = None, **overrides: Any):
        if config is not None and overrides:
            raise ValueError("Pass either a TreeConfig or keyword overrides, not both")
        self.config = config if config is not None else TreeConfig(**overrides)
        self.nodes_visited = 0

    def generate_tree(self, start_state: Any) -> TreeNode:
        """
        Explore from start_state up to config.max_depth.

        Args:
            start_state: Collaborator state; must implement clone()
                         (and get_state_key() when check_duplicates)

        Returns:
            Root TreeNode (clone of start_state, depth 0)

        Raises:
            TypeError: Missing clone() or get_state_key()
        """
        cfg = self.config
        debug = cfg.debug
        caps = resolve_capabilities(start_state, cfg.goal_sentinel)

        if not caps.cloneable:
            raise TypeError(f"{type(start_state).__name__} has no clone()")
        if cfg.check_duplicates and not caps.keyable:
            raise TypeError(
                f"{type(start_state).__name__} has no get_state_key(); "
                "required when check_duplicates=True"
            )
        if not caps.can_expand:
            debug.log(
                LogDomain.TREE, LogLevel.WARN,
                "State offers no successor generator, tree is a single node",
                state_type=type(start_state).__name__,
            )
        dead_end_reported = not caps.can_expand

        next_id = 0

        def make_node(state: Any, depth: int, move: Any = None) -> TreeNode:
            nonlocal next_id
            node = TreeNode(id=next_id, state=state, depth=depth, parent_move=move)
            next_id += 1
            if caps.is_goal(state):
                node.is_solution = True
                node.annotation = cfg.goal_label
            return node

        root = make_node(start_state.clone(), 0)

        # VisitedIndex: state key -> shallowest depth seen so far
        visited: dict[Any, int] = {}
        if cfg.check_duplicates:
            visited[root.state.get_state_key()] = 0

        frontier = make_frontier(cfg.strategy, [root])

        while frontier:
            current = frontier.pop()

            if current.depth >= cfg.max_depth:
                continue
            if current.is_duplicate:
                continue
            if current.is_solution and not cfg.continue_after_goal:
                continue
            if not caps.supports(current.state):
                if not dead_end_reported:
                    debug.log(
                        LogDomain.TREE, LogLevel.WARN,
                        "Node offers no successor generator, kept as leaf",
                        node_id=current.id, state_type=type(current.state).__name__,
                    )
                    dead_end_reported = True
                continue

            successors = caps.successors(current.state)
            if cfg.strategy is SearchStrategy.DEPTH_FIRST:
                successors = list(reversed(successors))

            for successor in successors:
                child = make_node(successor.state, current.depth + 1, successor.move)

                if cfg.check_duplicates:
                    key = child.state.get_state_key()
                    previous_depth = visited.get(key)
                    if previous_depth is not None and child.depth >= previous_depth:
                        child.is_duplicate = True
                        child.annotation = cfg.duplicate_label
                    else:
                        visited[key] = child.depth

                current.children.append(child)

                if child.is_duplicate:
                    continue
                if child.is_solution and not cfg.continue_after_goal:
                    continue
                frontier.push(child)

        self.nodes_visited = next_id
        debug.log(
            LogDomain.TREE, LogLevel.DEBUG, "Tree generated",
            strategy=cfg.strategy.value, nodes=next_id, max_depth=cfg.max_depth,
        )
        return root


def generate_tree(
    start_state: Any,
    max_depth: int = 3,
    check_duplicates: bool = True,
    strategy: SearchStrategy | str = SearchStrategy.BREADTH_FIRST,
    continue_after_goal: bool = False,
) -> TreeNode:
    """One-shot tree generation with keyword configuration."""
    builder = SearchTreeBuilder(
        max_depth=max_depth,
        check_duplicates=check_duplicates,
        strategy=strategy,
        continue_after_goal=continue_after_goal,
    )
    return builder.generate_tree(start_state)
