"""Binary trees for PosiTreeLib.

A BinaryTree has at most two children per node, held in named ``left``
and ``right`` slots. No ordering between elements is assumed: this is a
plain binary tree, not a search tree.
"""

from typing import Iterator, Optional, TypeVar

from .config import RenderConfig, TraversalOrder
from .core.node import BinaryNode
from .core.position import Position
from .core.traversal import Step, TraversalView, preorder_indices
from .core.tree import Tree
from .core.views import ChildrenView
from .errors import SlotOccupiedError

T = TypeVar('T')


class BinaryTree(Tree[T]):
    """Position-based binary tree.

    Iterating the tree itself yields elements inorder. Preorder,
    postorder and breadth-first walks are available as restartable
    iterables.

    Example:
        >>> tree = BinaryTree()
        >>> root = tree.add_root(1)
        >>> left = tree.add_left(root, 2)
        >>> right = tree.add_right(root, 3)
        >>> list(tree)
        [2, 1, 3]
    """

    DEFAULT_ORDER = TraversalOrder.INORDER
    SUPPORTED_ORDERS = frozenset({
        TraversalOrder.PREORDER,
        TraversalOrder.INORDER,
        TraversalOrder.POSTORDER,
        TraversalOrder.BREADTH_FIRST,
    })

    def _new_node(self, value: T, parent: Optional[int]) -> BinaryNode:
        return BinaryNode(value, parent, self._arena.owner)

    def _subtree_walk(self, index: int) -> Iterator[Step]:
        return preorder_indices(self._arena, index)

    # ------------------------------------------------------------------
    # Creation

    def add_left(self, parent: Position[T], value: T) -> Position[T]:
        """Create the left child of ``parent``.

        Raises:
            SlotOccupiedError: If ``parent`` already has a left child
        """
        return self._add_child(parent, value, 'left')

    def add_right(self, parent: Position[T], value: T) -> Position[T]:
        """Create the right child of ``parent``.

        Raises:
            SlotOccupiedError: If ``parent`` already has a right child
        """
        return self._add_child(parent, value, 'right')

    def _add_child(self, parent: Position[T], value: T, slot: str) -> Position[T]:
        parent_index, node = self._resolve(parent)
        if getattr(node, slot) is not None:
            raise SlotOccupiedError(f"Node already has a {slot} child")

        child = self._arena.allocate(self._new_node(value, parent_index))
        setattr(node, slot, child)
        self._size += 1
        self._version += 1
        return self._position(child)

    # ------------------------------------------------------------------
    # Navigation

    def left(self, position: Position[T]) -> Optional[Position[T]]:
        """Return the left child of ``position``, or None."""
        _, node = self._resolve(position)
        return None if node.left is None else self._position(node.left)

    def right(self, position: Position[T]) -> Optional[Position[T]]:
        """Return the right child of ``position``, or None."""
        _, node = self._resolve(position)
        return None if node.right is None else self._position(node.right)

    def sibling(self, position: Position[T]) -> Optional[Position[T]]:
        """Return the other child of ``position``'s parent, or None."""
        index, node = self._resolve(position)
        if node.parent is None:
            return None
        parent = self._arena.get(node.parent)
        other = parent.right if parent.left == index else parent.left
        return None if other is None else self._position(other)

    def children(self, position: Position[T]) -> ChildrenView:
        """Return a live, read-only view of the children of ``position``.

        The left child, if any, comes first.
        """
        self._resolve(position)
        return ChildrenView(lambda: self._resolve(position)[1].child_indices(), self._position)

    # ------------------------------------------------------------------
    # Traversal

    def preorder_iterable(self) -> TraversalView[T]:
        """Node, left subtree, right subtree."""
        return self.traversal(TraversalOrder.PREORDER)

    def inorder_iterable(self) -> TraversalView[T]:
        """Left subtree, node, right subtree. Same as iterating the tree."""
        return self.traversal(TraversalOrder.INORDER)

    def postorder_iterable(self) -> TraversalView[T]:
        """Left subtree, right subtree, node."""
        return self.traversal(TraversalOrder.POSTORDER)

    def breadth_first_iterable(self) -> TraversalView[T]:
        """Level by level, left to right."""
        return self.traversal(TraversalOrder.BREADTH_FIRST)


def binary_tree(render: Optional[RenderConfig] = None) -> BinaryTree:
    """Create an empty binary tree.

    Args:
        render: How ``str(tree)`` lists elements

    Returns:
        New, empty BinaryTree
    """
    return BinaryTree(render)
