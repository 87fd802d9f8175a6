"""Node records for PosiTreeLib.

Node records are plain data containers living inside a NodeArena. Links
between them are arena indices, never object references: a record knows
the index of its parent and the indices of its children, plus the token
of the tree that owns it.

Records are internal. Users only ever see them through a Position.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional


class NodeRecord(ABC):
    """Abstract base class for node records of any tree shape.

    Subclasses decide how children are stored. Everything the traversal
    engines need is exposed through ``child_indices``, so the same
    preorder/postorder/breadth-first code serves every shape.
    """

    value: Any
    parent: Optional[int]
    owner: Hashable

    @abstractmethod
    def child_indices(self) -> List[int]:
        """Return the indices of this node's children, in visiting order.

        Returns:
            List[int]: A fresh list; mutating it doesn't affect the node
        """
        pass

    @abstractmethod
    def detach_child(self, index: int) -> None:
        """Unlink the child stored at ``index`` from this node.

        Raises:
            KeyError: If ``index`` is not a child of this node
        """
        pass

    @abstractmethod
    def child_count(self) -> int:
        """Return the number of immediate children."""
        pass

    def is_leaf(self) -> bool:
        """Check if this node has no children."""
        return self.child_count() == 0


@dataclass
class BinaryNode(NodeRecord):
    """Node record with two named child slots."""

    value: Any
    parent: Optional[int]
    owner: Hashable
    left: Optional[int] = None
    right: Optional[int] = None

    def child_indices(self) -> List[int]:
        return [i for i in (self.left, self.right) if i is not None]

    def detach_child(self, index: int) -> None:
        if self.left == index:
            self.left = None
        elif self.right == index:
            self.right = None
        else:
            raise KeyError(index)

    def child_count(self) -> int:
        return (self.left is not None) + (self.right is not None)


@dataclass
class GeneralNode(NodeRecord):
    """Node record with any number of children.

    Children are kept as the keys of a dict: insertion order is preserved
    and a single child can be unlinked in O(1).
    """

    value: Any
    parent: Optional[int]
    owner: Hashable
    children: Dict[int, None] = field(default_factory=dict)

    def add_child(self, index: int) -> None:
        self.children[index] = None

    def child_indices(self) -> List[int]:
        return list(self.children)

    def detach_child(self, index: int) -> None:
        del self.children[index]

    def child_count(self) -> int:
        return len(self.children)
