"""Data collection strategies for PosiTreeLib.

DataCollectors define what a traversal plan hands back for each position
it visits. This lets the same walk produce elements, positions, depths,
root paths or child counts depending on what the caller needs.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List

from .position import Position


class DataCollector(ABC):
    """Abstract base class for data collection strategies."""

    def __init__(self, tree):
        """Initialize collector with the tree being traversed.

        Args:
            tree: Tree the positions belong to (for navigation)
        """
        self.tree = tree

    @abstractmethod
    def collect(self, position: Position, depth: int) -> Any:
        """Collect data for a position.

        Args:
            position: The position being visited
            depth: Depth relative to where the traversal started

        Returns:
            Collected data (type depends on collector)
        """
        pass

    def reset(self) -> None:
        """Forget anything remembered from an earlier traversal.

        Called by TraversalPlan before every run. Stateless collectors
        have nothing to forget.
        """
        pass


class ValueCollector(DataCollector):
    """Collects the element stored at each position."""

    def collect(self, position: Position, depth: int) -> Any:
        return position.element()


class PositionCollector(DataCollector):
    """Collects the position handle itself."""

    def collect(self, position: Position, depth: int) -> Position:
        return position


class DepthCollector(DataCollector):
    """Collects the traversal depth of each position."""

    def collect(self, position: Position, depth: int) -> int:
        return depth


class ChildCountCollector(DataCollector):
    """Collects element, depth and immediate child count.

    Useful for tree structure analysis.
    """

    def collect(self, position: Position, depth: int) -> Dict[str, Any]:
        child_count = self.tree.num_children(position)
        return {
            'value': position.element(),
            'depth': depth,
            'child_count': child_count,
            'is_leaf': child_count == 0,
        }


class PathCollector(DataCollector):
    """Collects the elements on the path from the tree root to each position.

    The ancestor chain of every position seen is cached per collector, so
    a preorder or breadth-first walk extends its parent's chain instead of
    climbing to the root. Only positions are cached: elements are read
    when the path is built, so values replaced with ``set()`` show up.
    The chains stay valid while the tree keeps its shape, which a
    fail-fast traversal guarantees, and are dropped on ``reset()``.
    """

    def __init__(self, tree):
        super().__init__(tree)
        self._chain_cache: Dict[Position, List[Position]] = {}

    def reset(self) -> None:
        self._chain_cache.clear()

    def collect(self, position: Position, depth: int) -> List[Any]:
        # Walk up to the nearest cached ancestor (or past the root)
        pending = []
        current = position
        while current is not None and current not in self._chain_cache:
            pending.append(current)
            current = self.tree.parent(current)

        chain = [] if current is None else list(self._chain_cache[current])
        for ancestor in reversed(pending):
            chain.append(ancestor)
            self._chain_cache[ancestor] = list(chain)

        return [p.element() for p in chain]


class CustomCollector(DataCollector):
    """Collects whatever a user function returns.

    Example:
        >>> collector = CustomCollector(tree, lambda p, d: (d, p.element()))
    """

    def __init__(self, tree, func: Callable[[Position, int], Any]):
        super().__init__(tree)
        self.func = func

    def collect(self, position: Position, depth: int) -> Any:
        return self.func(position, depth)
