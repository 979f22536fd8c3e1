"""
Tree node of a materialised search tree.

TreeNode is defined ONLY here. SearchTreeBuilder creates every instance;
callers (renderers, analysis helpers) only read them.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional


@dataclass(eq=False, repr=False)
class TreeNode:
    """
    One explored transition of a search tree.

    Attributes:
        id: Unique within one generate_tree() call, assigned in creation order
        state: Owned state (the root holds a clone of the start state)
        depth: Parent depth + 1 (root: 0)
        parent_move: Move that produced this node (None for the root)
        children: Child nodes in generation order
        is_duplicate: State was already reached at an equal or shallower depth
        is_solution: State satisfies the goal test
        annotation: Display label ("duplicate", "goal", ...)

    Invariants:
        - child.depth == parent.depth + 1
        - flags and annotation are set once, when the builder creates the node
    """
    id: int
    state: Any
    depth: int = 0
    parent_move: Optional[Any] = None
    children: list[TreeNode] = field(default_factory=list)
    is_duplicate: bool = False
    is_solution: bool = False
    annotation: Optional[str] = None

    def __repr__(self) -> str:
        flags = []
        if self.is_duplicate:
            flags.append("dup")
        if self.is_solution:
            flags.append("goal")
        flag_text = f" [{','.join(flags)}]" if flags else ""
        return (
            f"TreeNode(id={self.id}, depth={self.depth}, move={self.parent_move!r}, "
            f"children={len(self.children)}{flag_text})"
        )

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def iter_nodes(self) -> Iterator[TreeNode]:
        """Pre-order traversal (iterative, children in stored order)."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, node_id: int) -> Optional[TreeNode]:
        for node in self.iter_nodes():
            if node.id == node_id:
                return node
        return None

    def to_dict(self, state_serializer: Optional[Callable[[Any], Any]] = None) -> dict:
        """
        Nested plain-data view for an external renderer.

        Args:
            state_serializer: Optional callable turning a state into
                              JSON-friendly data; states are omitted if None

        Returns:
            {id, depth, move, is_duplicate, is_solution, annotation,
             [state], children: [...]}
        """
        data = {
            "id": self.id,
            "depth": self.depth,
            "move": self.parent_move,
            "is_duplicate": self.is_duplicate,
            "is_solution": self.is_solution,
            "annotation": self.annotation,
        }
        if state_serializer is not None:
            data["state"] = state_serializer(self.state)
        data["children"] = [child.to_dict(state_serializer) for child in self.children]
        return data
