"""Read-only views over tree structure."""

from collections.abc import Sequence
from itertools import islice
from typing import Callable, Collection, Iterator, NoReturn

from ..errors import UnsupportedOperationError
from .position import Position


class ChildrenView(Sequence):
    """Read-only, ordered sequence of the child positions of one node.

    The view is live: it asks the tree for the node's children on every
    access, so it reflects children added or removed later, and raises
    StalePositionError once the node itself is gone. Positions are
    created on access. Every mutating list method raises
    UnsupportedOperationError: children are added and removed through
    the tree.
    """

    __slots__ = ('_source', '_make_position')

    def __init__(self,
                 source: Callable[[], Collection[int]],
                 make_position: Callable[[int], Position]):
        """Initialize the view.

        Args:
            source: Returns the current child indices, validating the node
            make_position: Turns a child index into a Position
        """
        self._source = source
        self._make_position = make_position

    def __len__(self) -> int:
        return len(self._source())

    def __iter__(self) -> Iterator[Position]:
        for index in list(self._source()):
            yield self._make_position(index)

    def __getitem__(self, item):
        indices = self._source()
        if isinstance(item, slice):
            return [self._make_position(i) for i in list(indices)[item]]

        count = len(indices)
        if item < 0:
            item += count
        if not 0 <= item < count:
            raise IndexError("children index out of range")
        return self._make_position(next(islice(indices, item, None)))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self)!r})"

    def _read_only(self, *args, **kwargs) -> NoReturn:
        raise UnsupportedOperationError(
            "Children view is read-only; use the tree to add or remove nodes"
        )

    append = _read_only
    extend = _read_only
    insert = _read_only
    remove = _read_only
    pop = _read_only
    clear = _read_only
    sort = _read_only
    reverse = _read_only
    __setitem__ = _read_only
    __delitem__ = _read_only
    __iadd__ = _read_only
