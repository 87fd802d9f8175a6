"""Traversal engines for PosiTreeLib.

Engines walk the node records of a NodeArena without recursion, using a
plain list as an explicit stack (or a deque as a queue), so arbitrarily
deep trees traverse without hitting the interpreter's recursion limit.

Every engine is a generator of ``(index, depth)`` steps, where depth is
relative to the starting node. Engines read a node's links *before*
yielding it, so a caller may release the yielded node from the arena
while the walk continues (subtree removal relies on this).

Engines are raw: they know nothing about versions. Users get them
wrapped in a FailFastIterator, which refuses to advance once the tree
has changed shape.
"""

from collections import deque
from typing import (TYPE_CHECKING, Callable, Deque, Generic, Iterator, List,
                    Optional, Tuple, TypeVar)

from ..config import RenderConfig, TraversalOrder
from ..errors import CapabilityMismatchError, StructuralConflictError
from .arena import NodeArena
from .node import BinaryNode

if TYPE_CHECKING:
    from .tree import Tree

T = TypeVar('T')

# (arena index, depth relative to the start node)
Step = Tuple[int, int]


def _should_explore(depth: int, max_depth: Optional[int]) -> bool:
    return max_depth is None or depth < max_depth


def preorder_indices(arena: NodeArena,
                     start: int,
                     max_depth: Optional[int] = None) -> Iterator[Step]:
    """Walk node, then children in order.

    Children are pushed in reverse so the first child is popped first;
    for binary nodes that means right is pushed before left.
    """
    stack: List[Step] = [(start, 0)]
    while stack:
        index, depth = stack.pop()
        if _should_explore(depth, max_depth):
            for child in reversed(arena.get(index).child_indices()):
                stack.append((child, depth + 1))
        yield index, depth


def inorder_indices(arena: NodeArena,
                    start: int,
                    max_depth: Optional[int] = None) -> Iterator[Step]:
    """Walk left subtree, node, right subtree. Binary nodes only.

    Descends left pushing every node on the way, pops the deepest one,
    emits it and continues into its right subtree.
    """
    stack: List[Step] = []
    current: Optional[int] = start
    depth = 0
    while True:
        while current is not None:
            stack.append((current, depth))
            current = arena.get(current).left if _should_explore(depth, max_depth) else None
            depth += 1

        if not stack:
            return

        index, depth = stack.pop()
        current = arena.get(index).right if _should_explore(depth, max_depth) else None
        yield index, depth
        depth += 1


def postorder_indices(arena: NodeArena,
                      start: int,
                      max_depth: Optional[int] = None) -> Iterator[Step]:
    """Walk children in order, then node.

    A single stack of frames, each holding a cursor over the node's
    remaining children. A node is emitted once its cursor runs dry,
    which is exactly when the recursive version would return from it.
    """
    def frame(index: int, depth: int) -> Tuple[int, int, Iterator[int]]:
        if _should_explore(depth, max_depth):
            children = arena.get(index).child_indices()
        else:
            children = []
        return index, depth, iter(children)

    stack = [frame(start, 0)]
    while stack:
        index, depth, pending = stack[-1]
        child = next(pending, None)
        if child is not None:
            stack.append(frame(child, depth + 1))
        else:
            stack.pop()
            yield index, depth


def breadth_first_indices(arena: NodeArena,
                          start: int,
                          max_depth: Optional[int] = None) -> Iterator[Step]:
    """Walk level by level, children in order within each node."""
    queue: Deque[Step] = deque([(start, 0)])
    while queue:
        index, depth = queue.popleft()
        if _should_explore(depth, max_depth):
            queue.extend((child, depth + 1) for child in arena.get(index).child_indices())
        yield index, depth


_ENGINES = {
    TraversalOrder.PREORDER: preorder_indices,
    TraversalOrder.INORDER: inorder_indices,
    TraversalOrder.POSTORDER: postorder_indices,
    TraversalOrder.BREADTH_FIRST: breadth_first_indices,
}


def create_traversal(order: TraversalOrder,
                     arena: NodeArena,
                     start: Optional[int],
                     max_depth: Optional[int] = None) -> Iterator[Step]:
    """Create a raw traversal engine by order.

    Args:
        order: Which order to walk in
        arena: Storage holding the nodes
        start: Index of the first node, or None for an empty walk
        max_depth: Deepest depth to visit (None = unlimited)

    Returns:
        Iterator of (index, depth) steps

    Raises:
        ValueError: If the order is not recognized
        CapabilityMismatchError: If inorder is requested for non-binary nodes
    """
    if order not in _ENGINES:
        raise ValueError(f"Unknown traversal order: {order!r}")

    if start is None:
        return iter(())

    if order is TraversalOrder.INORDER and not isinstance(arena.get(start), BinaryNode):
        raise CapabilityMismatchError("Inorder traversal requires a binary tree")

    return _ENGINES[order](arena, start, max_depth)


class FailFastIterator(Iterator[T]):
    """Iterator that fails once its tree has changed shape.

    Takes a snapshot of the tree's structural version when created and
    compares it on every advance, including the one that would report
    exhaustion. Value replacement doesn't change the version, so it
    never trips the check.
    """

    def __init__(self,
                 tree: 'Tree',
                 steps: Iterator[Step],
                 project: Callable[[int, int], T]):
        """Initialize the iterator.

        Args:
            tree: Tree whose version is watched
            steps: Raw engine to pull (index, depth) steps from
            project: Turns a step into the item handed to the caller
        """
        self._tree = tree
        self._expected = tree.version
        self._steps = steps
        self._project = project

    def __iter__(self) -> 'FailFastIterator[T]':
        return self

    def __next__(self) -> T:
        if self._tree.version != self._expected:
            raise StructuralConflictError(
                f"{self._tree.__class__.__name__} changed structure after the "
                f"iterator was created (version {self._expected} -> {self._tree.version})"
            )
        index, depth = next(self._steps)
        return self._project(index, depth)


class TraversalView(Generic[T]):
    """Restartable, lazy traversal of a tree.

    Each ``iter()`` starts a brand new traversal with its own version
    snapshot, so a view can be looped over any number of times, and a
    loop started after a mutation sees the new structure.
    """

    def __init__(self,
                 factory: Callable[[], Iterator[T]],
                 order: TraversalOrder,
                 render: Optional[RenderConfig] = None):
        self._factory = factory
        self.order = order
        self._render = render or RenderConfig()

    def __iter__(self) -> Iterator[T]:
        return self._factory()

    def __str__(self) -> str:
        return self._render.render(self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(order={self.order.value!r})"


__all__ = [
    'Step',
    'preorder_indices',
    'inorder_indices',
    'postorder_indices',
    'breadth_first_indices',
    'create_traversal',
    'FailFastIterator',
    'TraversalView',
]
