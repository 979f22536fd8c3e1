"""
Search tree materialisation.

Public exports:
- TreeNode: node of a generated tree
- SearchTreeBuilder / generate_tree: build a tree up to a depth horizon
- count_subtree_nodes, count_possible_nodes: node counting helpers
- TreeStatistics / tree_statistics / effective_branching_factor: tree summary
"""

from statesearch.tree.node import TreeNode
from statesearch.tree.builder import SearchTreeBuilder, generate_tree
from statesearch.tree.analysis import (
    TreeStatistics,
    count_possible_nodes,
    count_subtree_nodes,
    effective_branching_factor,
    tree_statistics,
)

__all__ = [
    'TreeNode',
    'SearchTreeBuilder',
    'generate_tree',
    'TreeStatistics',
    'tree_statistics',
    'count_subtree_nodes',
    'count_possible_nodes',
    'effective_branching_factor',
]
