"""Position handles for PosiTreeLib.

A Position is the only way users refer to a node. It is an opaque,
non-owning observer: it exposes the element stored at the node and
nothing else. All navigation and mutation goes through the tree that
issued the position, which validates it first.
"""

from typing import TYPE_CHECKING, Generic, Hashable, TypeVar

if TYPE_CHECKING:
    from .arena import NodeArena

T = TypeVar('T')


class Position(Generic[T]):
    """Opaque handle to one node of one tree.

    Two positions are equal when they refer to the same node of the same
    tree, even if they were obtained from different calls:

        >>> root = tree.root()
        >>> tree.parent(tree.left(root)) == root
        True

    A position outlives nothing: once its node is removed (by
    ``remove_subtree`` or ``clear``) every use of it raises
    StalePositionError.
    """

    __slots__ = ('_arena', '_index', '_generation', '_epoch')

    def __init__(self, arena: 'NodeArena', index: int):
        self._arena = arena
        self._index = index
        self._generation = arena.generation(index)
        self._epoch = arena.epoch

    def element(self) -> T:
        """Return the element stored at this position.

        Raises:
            StalePositionError: If the node has been removed
        """
        return self._arena.resolve(self._index, self._generation, self._epoch).value

    @property
    def owner(self) -> Hashable:
        """Token of the tree that issued this position."""
        return self._arena.owner

    def is_valid(self) -> bool:
        """Check whether the node behind this position still exists."""
        return self._arena.is_alive(self._index, self._generation, self._epoch)

    def _key(self):
        return (self._arena.owner, self._epoch, self._index, self._generation)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        if not self.is_valid():
            return f"{self.__class__.__name__}(<removed>)"
        return f"{self.__class__.__name__}(element={self.element()!r})"
