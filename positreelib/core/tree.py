"""Shared tree capability for PosiTreeLib.

Tree implements everything that doesn't depend on the tree's shape:
sizing, containment, reset, root creation, parent navigation, value
replacement, subtree removal, traversal plumbing and rendering. Shapes
(BinaryTree, GeneralTree) add their own child-creation and navigation
calls on top and choose a default traversal order.

Every call that takes a Position validates it before touching anything,
so a failing call never leaves the tree half-modified.
"""

import logging
from abc import ABC, abstractmethod
from typing import (Any, Callable, FrozenSet, Generic, Iterator, Optional,
                    Tuple, TypeVar, Union)

from ..config import RenderConfig, TraversalOrder, parse_order
from ..errors import (CapabilityMismatchError, DuplicateRootError,
                      ForeignPositionError, InvalidPositionError)
from .arena import NodeArena
from .node import NodeRecord
from .position import Position
from .traversal import FailFastIterator, Step, TraversalView, create_traversal

logger = logging.getLogger(__name__)

T = TypeVar('T')

OrderLike = Union[TraversalOrder, str]


class Tree(ABC, Generic[T]):
    """Abstract base class for position-based rooted trees.

    Subclasses must set ``DEFAULT_ORDER`` and ``SUPPORTED_ORDERS`` and
    implement ``_new_node`` (how a record of their shape is built) and
    ``_subtree_walk`` (how a detached subtree is counted).
    """

    DEFAULT_ORDER: TraversalOrder = TraversalOrder.PREORDER
    SUPPORTED_ORDERS: FrozenSet[TraversalOrder] = frozenset()

    def __init__(self, render: Optional[RenderConfig] = None):
        """Create an empty tree.

        Args:
            render: How ``str(tree)`` lists elements (default ``[a, b, c]``)
        """
        self._arena = NodeArena()
        self._root: Optional[int] = None
        self._size = 0
        self._version = 0
        self._render = render or RenderConfig()

    # ------------------------------------------------------------------
    # Abstract hooks

    @abstractmethod
    def _new_node(self, value: T, parent: Optional[int]) -> NodeRecord:
        """Build a detached node record of this tree's shape."""
        pass

    @abstractmethod
    def _subtree_walk(self, index: int) -> Iterator[Step]:
        """Walk every node of the subtree rooted at ``index``.

        Used to count (and release) a detached subtree. The walk must read
        a node's links before yielding it.
        """
        pass

    # ------------------------------------------------------------------
    # Size and state

    @property
    def version(self) -> int:
        """Structural version; bumped on every change of shape."""
        return self._version

    @property
    def owner(self):
        """Ownership token carried by every position this tree issues."""
        return self._arena.owner

    def size(self) -> int:
        """Number of nodes in the tree. O(1)."""
        return self._size

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def contains(self, value: Any) -> bool:
        """Check if any node holds an element equal to ``value``.

        Scans the default traversal order, O(n). ``None`` is an ordinary
        element and can be searched for.
        """
        for element in self:
            if element == value:
                return True
        return False

    def __contains__(self, value: Any) -> bool:
        return self.contains(value)

    def clear(self) -> None:
        """Remove every node. Every issued position becomes stale."""
        removed = self._size
        self._arena.reset()
        self._root = None
        self._size = 0
        self._version += 1
        logger.debug("Cleared %s (%d nodes removed)", self.__class__.__name__, removed)

    # ------------------------------------------------------------------
    # Creation and navigation

    def root(self) -> Optional[Position[T]]:
        """Return the root position, or None if the tree is empty."""
        if self._root is None:
            return None
        return self._position(self._root)

    def add_root(self, value: T) -> Position[T]:
        """Create the root of an empty tree.

        Raises:
            DuplicateRootError: If the tree already has a root
        """
        if self._root is not None:
            raise DuplicateRootError(
                f"{self.__class__.__name__} already has a root"
            )
        self._root = self._arena.allocate(self._new_node(value, None))
        self._size = 1
        self._version += 1
        return self._position(self._root)

    def parent(self, position: Position[T]) -> Optional[Position[T]]:
        """Return the parent of ``position``, or None for the root."""
        _, node = self._resolve(position)
        if node.parent is None:
            return None
        return self._position(node.parent)

    def set(self, position: Position[T], value: T) -> T:
        """Replace the element at ``position`` and return the old one.

        This is not a structural change: running iterators stay valid.
        """
        _, node = self._resolve(position)
        old = node.value
        node.value = value
        return old

    def is_root(self, position: Position[T]) -> bool:
        _, node = self._resolve(position)
        return node.parent is None

    def is_leaf(self, position: Position[T]) -> bool:
        _, node = self._resolve(position)
        return node.is_leaf()

    def is_internal(self, position: Position[T]) -> bool:
        return not self.is_leaf(position)

    def num_children(self, position: Position[T]) -> int:
        _, node = self._resolve(position)
        return node.child_count()

    def depth(self, position: Position[T]) -> int:
        """Number of edges between ``position`` and the root."""
        _, node = self._resolve(position)
        depth = 0
        while node.parent is not None:
            node = self._arena.get(node.parent)
            depth += 1
        return depth

    def height(self, position: Optional[Position[T]] = None) -> int:
        """Number of edges on the longest downward path from ``position``.

        Args:
            position: Subtree root (default: the tree root)

        Returns:
            Height of the subtree, or -1 for an empty tree
        """
        if position is None:
            start = self._root
        else:
            start, _ = self._resolve(position)
        if start is None:
            return -1
        steps = create_traversal(TraversalOrder.PREORDER, self._arena, start)
        return max(depth for _, depth in steps)

    # ------------------------------------------------------------------
    # Removal

    def remove_subtree(self, position: Position[T]) -> int:
        """Remove ``position`` and all its descendants.

        Removing the root is the same as ``clear()``. Otherwise the node
        is unlinked from its parent in O(1) and the detached subtree is
        walked once, O(k), to count and release its k nodes. Positions
        inside the subtree become stale.

        Returns:
            Number of nodes removed
        """
        index, node = self._resolve(position)

        if node.parent is None:
            removed = self._size
            self.clear()
            return removed

        self._arena.get(node.parent).detach_child(index)

        removed = 0
        for released, _ in self._subtree_walk(index):
            self._arena.release(released)
            removed += 1

        self._size -= removed
        self._version += 1
        logger.debug("Removed subtree of %d nodes from %s", removed, self.__class__.__name__)
        return removed

    # ------------------------------------------------------------------
    # Traversal

    def __iter__(self) -> Iterator[T]:
        """Iterate elements in the tree's default order."""
        return self._iter_values(self.DEFAULT_ORDER)

    def traversal(self, order: Optional[OrderLike] = None) -> TraversalView[T]:
        """Return a restartable view of the elements in ``order``.

        Raises:
            CapabilityMismatchError: If this tree can't walk in ``order``
        """
        resolved = self._check_order(order)
        return TraversalView(lambda: self._iter_values(resolved), resolved, self._render)

    def positions(self,
                  order: Optional[OrderLike] = None,
                  start: Optional[Position[T]] = None) -> TraversalView[Position[T]]:
        """Return a restartable view of positions in ``order``.

        Args:
            order: Traversal order (default: the tree's default order)
            start: Walk only the subtree rooted here (default: whole tree)
        """
        resolved = self._check_order(order)
        if start is not None:
            self._resolve(start)

        def factory() -> Iterator[Position[T]]:
            # Re-resolved per iteration: the start node may be gone by now
            start_index = None if start is None else self._resolve(start)[0]
            return self._iter_steps(resolved, start_index, lambda i, d: self._position(i))

        return TraversalView(factory, resolved, self._render)

    def walk(self,
             order: Optional[OrderLike] = None,
             start: Optional[Position[T]] = None,
             max_depth: Optional[int] = None) -> Iterator[Tuple[Position[T], int]]:
        """Walk the tree once, yielding ``(position, depth)`` pairs.

        Depth is relative to ``start``. Unlike ``positions()`` this is a
        one-shot iterator; its version snapshot is taken right away.

        Args:
            order: Traversal order (default: the tree's default order)
            start: Walk only the subtree rooted here (default: whole tree)
            max_depth: Don't descend below this depth (None = unlimited)
        """
        resolved = self._check_order(order)
        start_index = None if start is None else self._resolve(start)[0]
        return self._iter_steps(
            resolved, start_index, lambda i, d: (self._position(i), d), max_depth
        )

    def for_each(self, visit: Callable[[T], Any], order: Optional[OrderLike] = None) -> None:
        """Call ``visit`` with every element, in ``order``.

        Runs on the same iterative engines as the iterables, so it works on
        trees of any depth. Mutating the tree's structure from ``visit``
        raises StructuralConflictError.
        """
        for element in self._iter_values(self._check_order(order)):
            visit(element)

    def _iter_values(self, order: TraversalOrder) -> Iterator[T]:
        return self._iter_steps(order, None, lambda i, d: self._arena.get(i).value)

    def _iter_steps(self,
                    order: TraversalOrder,
                    start: Optional[int],
                    project: Callable[[int, int], Any],
                    max_depth: Optional[int] = None) -> FailFastIterator:
        if start is None:
            start = self._root
        steps = create_traversal(order, self._arena, start, max_depth)
        return FailFastIterator(self, steps, project)

    def _check_order(self, order: Optional[OrderLike]) -> TraversalOrder:
        if order is None:
            return self.DEFAULT_ORDER
        resolved = parse_order(order)
        if resolved not in self.SUPPORTED_ORDERS:
            raise CapabilityMismatchError(
                f"{self.__class__.__name__} does not support {resolved.value} traversal"
            )
        return resolved

    # ------------------------------------------------------------------
    # Positions

    def _position(self, index: int) -> Position[T]:
        return Position(self._arena, index)

    def _resolve(self, position: Position[T]) -> Tuple[int, NodeRecord]:
        """Validate a position and return its index and node record.

        Raises:
            InvalidPositionError: If ``position`` is not a Position
            ForeignPositionError: If another tree issued it
            StalePositionError: If its node has been removed
        """
        if not isinstance(position, Position):
            raise InvalidPositionError(
                f"Expected a Position, got {type(position).__name__}"
            )
        if position.owner != self._arena.owner:
            raise ForeignPositionError(
                f"Position was issued by a different tree than this {self.__class__.__name__}"
            )
        node = self._arena.resolve(position._index, position._generation, position._epoch)
        return position._index, node

    # ------------------------------------------------------------------
    # Rendering

    def __str__(self) -> str:
        return self._render.render(self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={self._size})"
