"""Flat owned storage for node records.

A NodeArena owns every node record of one tree. Records are addressed by
integer index; parent and child links are indices too, so the node graph
holds no reference cycles and needs no manual teardown.

Handles to nodes (positions) are validated against three counters:

- ``owner``: a token unique to the tree, compared by value
- ``epoch``: bumped on every full reset, invalidating every old handle
- per-slot ``generation``: bumped whenever a slot is released, so a handle
  to a destroyed node never resolves to whatever reuses its slot later
"""

import uuid
from typing import Hashable, List, Optional

from ..errors import StalePositionError
from .node import NodeRecord


class NodeArena:
    """Index-addressed storage for the node records of a single tree."""

    def __init__(self, owner: Optional[Hashable] = None):
        """Initialize an empty arena.

        Args:
            owner: Ownership token (a fresh UUID if omitted)
        """
        self.owner = owner if owner is not None else uuid.uuid4()
        self.epoch = 0
        self._slots: List[Optional[NodeRecord]] = []
        self._generations: List[int] = []
        self._free: List[int] = []
        self._live = 0

    def __len__(self) -> int:
        """Number of live records."""
        return self._live

    def allocate(self, record: NodeRecord) -> int:
        """Store a record and return its index.

        Released slots are reused before the storage grows.
        """
        if self._free:
            index = self._free.pop()
            self._slots[index] = record
        else:
            index = len(self._slots)
            self._slots.append(record)
            self._generations.append(0)
        self._live += 1
        return index

    def release(self, index: int) -> None:
        """Drop the record at ``index`` and invalidate handles to it."""
        if self._slots[index] is None:
            raise KeyError(index)
        self._slots[index] = None
        self._generations[index] += 1
        self._free.append(index)
        self._live -= 1

    def get(self, index: int) -> NodeRecord:
        """Return the live record at ``index``.

        Internal links always point at live records, so a miss here means
        the arena was corrupted.
        """
        record = self._slots[index]
        if record is None:
            raise KeyError(index)
        return record

    def generation(self, index: int) -> int:
        return self._generations[index]

    def resolve(self, index: int, generation: int, epoch: int) -> NodeRecord:
        """Return the record a handle refers to, if it is still alive.

        Args:
            index: Slot index carried by the handle
            generation: Slot generation when the handle was issued
            epoch: Arena epoch when the handle was issued

        Returns:
            The live node record

        Raises:
            StalePositionError: If the node was destroyed since
        """
        if epoch != self.epoch:
            raise StalePositionError(
                "Position refers to a node removed when the tree was cleared"
            )
        if (index >= len(self._slots)
                or self._generations[index] != generation
                or self._slots[index] is None):
            raise StalePositionError(
                "Position refers to a node removed with its subtree"
            )
        return self._slots[index]

    def is_alive(self, index: int, generation: int, epoch: int) -> bool:
        """Check whether a handle still refers to a live record."""
        return (epoch == self.epoch
                and index < len(self._slots)
                and self._generations[index] == generation
                and self._slots[index] is not None)

    def reset(self) -> None:
        """Drop every record at once and invalidate every handle.

        Old storage is discarded wholesale rather than released slot by
        slot, so this is O(1) apart from garbage collection.
        """
        self.epoch += 1
        self._slots = []
        self._generations = []
        self._free = []
        self._live = 0
