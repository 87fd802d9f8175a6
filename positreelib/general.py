"""General (n-ary) trees for PosiTreeLib.

A GeneralTree puts no limit on the number of children per node. Children
keep the order they were added in, and that order is the only ordering
the tree knows about.
"""

from typing import Iterator, Optional, TypeVar

from .config import RenderConfig, TraversalOrder
from .core.node import GeneralNode
from .core.position import Position
from .core.traversal import Step, TraversalView, breadth_first_indices
from .core.tree import Tree
from .core.views import ChildrenView

T = TypeVar('T')


class GeneralTree(Tree[T]):
    """Position-based tree with any number of children per node.

    Iterating the tree itself yields elements in preorder: a node, then
    each of its children's subtrees in insertion order.

    Example:
        >>> tree = GeneralTree()
        >>> a = tree.add_root("A")
        >>> b = tree.add_child(a, "B")
        >>> c = tree.add_child(a, "C")
        >>> d = tree.add_child(b, "D")
        >>> list(tree)
        ['A', 'B', 'D', 'C']
    """

    DEFAULT_ORDER = TraversalOrder.PREORDER
    SUPPORTED_ORDERS = frozenset({
        TraversalOrder.PREORDER,
        TraversalOrder.POSTORDER,
        TraversalOrder.BREADTH_FIRST,
    })

    def _new_node(self, value: T, parent: Optional[int]) -> GeneralNode:
        return GeneralNode(value, parent, self._arena.owner)

    def _subtree_walk(self, index: int) -> Iterator[Step]:
        return breadth_first_indices(self._arena, index)

    def add_child(self, parent: Position[T], value: T) -> Position[T]:
        """Append a new child to ``parent``. O(1) amortized."""
        parent_index, node = self._resolve(parent)
        child = self._arena.allocate(self._new_node(value, parent_index))
        node.add_child(child)
        self._size += 1
        self._version += 1
        return self._position(child)

    def children(self, position: Position[T]) -> ChildrenView:
        """Return a live, read-only view of the children of ``position``.

        The view keeps insertion order and reflects children added later.
        Mutating it raises UnsupportedOperationError.
        """
        self._resolve(position)
        return ChildrenView(lambda: self._resolve(position)[1].children, self._position)

    def preorder_iterable(self) -> TraversalView[T]:
        """Node, then each child's subtree in insertion order."""
        return self.traversal(TraversalOrder.PREORDER)

    def postorder_iterable(self) -> TraversalView[T]:
        """Each child's subtree in insertion order, then node."""
        return self.traversal(TraversalOrder.POSTORDER)

    def breadth_first_iterable(self) -> TraversalView[T]:
        return self.traversal(TraversalOrder.BREADTH_FIRST)


def general_tree(render: Optional[RenderConfig] = None) -> GeneralTree:
    """Create an empty general tree.

    Args:
        render: How ``str(tree)`` lists elements

    Returns:
        New, empty GeneralTree
    """
    return GeneralTree(render)
