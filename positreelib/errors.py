"""Exception hierarchy for PosiTreeLib.

Every error is raised synchronously at the offending call, before any
state is touched. Nothing here is retried or recovered internally.

Absent neighbours (the parent of a root, the children of a leaf, the root
of an empty tree) are not errors: navigation returns ``None`` for them.
"""


class TreeError(Exception):
    """Base class for all PosiTreeLib errors."""
    pass


class DuplicateRootError(TreeError):
    """Raised by ``add_root`` when the tree already has a root."""
    pass


class SlotOccupiedError(TreeError):
    """Raised by ``add_left``/``add_right`` when the target slot is filled."""
    pass


class PositionError(TreeError, ValueError):
    """Base class for errors caused by the position argument of a call."""
    pass


class ForeignPositionError(PositionError):
    """Raised when a position issued by one tree is used against another."""
    pass


class InvalidPositionError(PositionError):
    """Raised when the argument is not a position handle at all."""
    pass


class StalePositionError(InvalidPositionError):
    """Raised when a position refers to a node that has been destroyed.

    Nodes are destroyed by ``remove_subtree`` and ``clear``. The handle
    still carries the right owner token, but the storage slot it points
    at has been released (or the whole arena reset) since it was issued.
    """
    pass


class StructuralConflictError(TreeError, RuntimeError):
    """Raised by an iterator whose tree changed shape after it was created."""
    pass


class UnsupportedOperationError(TreeError, TypeError):
    """Raised on an attempt to mutate a read-only view."""
    pass


class CapabilityMismatchError(TreeError):
    """Raised when a traversal configuration can't be satisfied by a tree."""
    pass


__all__ = [
    'TreeError',
    'DuplicateRootError',
    'SlotOccupiedError',
    'PositionError',
    'ForeignPositionError',
    'InvalidPositionError',
    'StalePositionError',
    'StructuralConflictError',
    'UnsupportedOperationError',
    'CapabilityMismatchError',
]
