"""Test fixtures for PosiTreeLib consumers.

These fixtures provide controlled access to internal state for testing
purposes without exposing implementation details as part of the public
API. Counts here are computed independently of the tree's own
bookkeeping, so they can be used to check it.
"""

from collections import deque
from typing import Any, Dict, List, Optional

from ..binary import BinaryTree
from ..core.node import BinaryNode
from ..core.position import Position
from ..core.tree import Tree
from ..general import GeneralTree


class TreeTestHelper:
    """Public test fixture for structural verification.

    Example:
        tree = build_complete_binary_tree(3)
        helper = TreeTestHelper(tree)

        assert helper.check_invariants() == []
        assert helper.reachable_count() == tree.size()
    """

    def __init__(self, tree: Tree):
        """Initialize with the tree under test.

        Args:
            tree: Any BinaryTree or GeneralTree
        """
        self._tree = tree
        self._arena = tree._arena

    def reachable_count(self) -> int:
        """Count nodes reachable from the root with a breadth-first walk."""
        return self._count_from(self._tree._root)

    def subtree_count(self, position: Position) -> int:
        """Count the nodes of the subtree rooted at ``position``."""
        index, _ = self._tree._resolve(position)
        return self._count_from(index)

    def _count_from(self, start: Optional[int]) -> int:
        if start is None:
            return 0
        count = 0
        queue = deque([start])
        while queue:
            node = self._arena.get(queue.popleft())
            count += 1
            queue.extend(self._children_of(node))
        return count

    @staticmethod
    def _children_of(node) -> List[int]:
        if isinstance(node, BinaryNode):
            return [i for i in (node.left, node.right) if i is not None]
        return list(node.children)

    def check_invariants(self) -> List[str]:
        """Check the structural invariants of the tree.

        Returns:
            List of violations (empty if the tree is consistent):
            size mismatches, one-sided parent/child links, records owned
            by another tree and records that no longer exist
        """
        problems = []
        tree = self._tree
        owner = self._arena.owner

        reachable = 0
        if tree._root is not None:
            root = self._arena.get(tree._root)
            if root.parent is not None:
                problems.append("root has a parent")

            queue = deque([tree._root])
            while queue:
                index = queue.popleft()
                node = self._arena.get(index)
                reachable += 1

                if node.owner != owner:
                    problems.append(f"node {index} is owned by another tree")

                for child in self._children_of(node):
                    try:
                        child_node = self._arena.get(child)
                    except KeyError:
                        problems.append(f"node {index} links to released node {child}")
                        continue
                    if child_node.parent != index:
                        problems.append(
                            f"node {child} does not point back to its parent {index}"
                        )
                    queue.append(child)

        if reachable != tree.size():
            problems.append(f"size() is {tree.size()} but {reachable} nodes are reachable")

        if len(self._arena) != reachable:
            problems.append(
                f"arena holds {len(self._arena)} live records but {reachable} are reachable"
            )

        return problems

    def get_summary(self) -> Dict[str, Any]:
        """Return high-level structural state for testing."""
        return {
            'size': self._tree.size(),
            'reachable': self.reachable_count(),
            'live_records': len(self._arena),
            'version': self._tree.version,
            'epoch': self._arena.epoch,
        }


def build_complete_binary_tree(levels: int, start: int = 1) -> BinaryTree:
    """Build a complete binary tree numbered level by level.

    With ``levels=3`` this is the standard 7-node sample: root 1,
    children 2 and 3, grandchildren 4, 5 (under 2) and 6, 7 (under 3).

    Args:
        levels: Number of levels (0 gives an empty tree)
        start: Element of the root; the rest are numbered consecutively
    """
    tree: BinaryTree = BinaryTree()
    if levels <= 0:
        return tree

    value = start
    frontier = [tree.add_root(value)]
    for _ in range(levels - 1):
        next_frontier = []
        for parent in frontier:
            value += 1
            next_frontier.append(tree.add_left(parent, value))
            value += 1
            next_frontier.append(tree.add_right(parent, value))
        frontier = next_frontier
    return tree


def build_chain(depth: int, shape: str = "binary") -> Tree:
    """Build a degenerate tree: a single path of ``depth + 1`` nodes.

    Elements are 0 (root) to ``depth`` (the only leaf). Binary chains
    grow to the left.
    """
    tree: Tree = BinaryTree() if shape == "binary" else GeneralTree()
    position = tree.add_root(0)
    for value in range(1, depth + 1):
        if isinstance(tree, BinaryTree):
            position = tree.add_left(position, value)
        else:
            position = tree.add_child(position, value)
    return tree


def build_sample_general_tree() -> GeneralTree:
    """Build the sample general tree: A with children B, C and B's child D."""
    tree: GeneralTree = GeneralTree()
    a = tree.add_root("A")
    b = tree.add_child(a, "B")
    tree.add_child(a, "C")
    tree.add_child(b, "D")
    return tree
