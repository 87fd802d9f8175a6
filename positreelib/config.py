"""Configuration system for PosiTreeLib.

This module defines how users describe a traversal: which order to walk
in, which depths and positions to keep, what data to collect for each
position, and how trees render themselves as text.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Set, Union


class TraversalOrder(Enum):
    """Order in which a traversal visits positions.

    Not every tree shape supports every order: inorder is only defined
    for binary trees.
    """
    PREORDER = "preorder"            # Node, then children
    INORDER = "inorder"              # Left, node, right (binary only)
    POSTORDER = "postorder"          # Children, then node
    BREADTH_FIRST = "breadth_first"  # Level by level


class DataRequirement(Enum):
    """Specifies what a traversal plan collects for each position."""
    VALUE = "value"                # The stored element
    POSITION = "position"          # The position handle itself
    DEPTH = "depth"                # Depth relative to the traversal start
    PATH = "path"                  # Elements from the tree root down to the node
    CHILD_COUNT = "child_count"    # Number of immediate children
    CUSTOM = "custom"              # User-defined collector


_ORDER_ALIASES = {
    'pre': TraversalOrder.PREORDER,
    'preorder': TraversalOrder.PREORDER,
    'dfs_pre': TraversalOrder.PREORDER,
    'in': TraversalOrder.INORDER,
    'inorder': TraversalOrder.INORDER,
    'post': TraversalOrder.POSTORDER,
    'postorder': TraversalOrder.POSTORDER,
    'dfs_post': TraversalOrder.POSTORDER,
    'bfs': TraversalOrder.BREADTH_FIRST,
    'breadth_first': TraversalOrder.BREADTH_FIRST,
    'level': TraversalOrder.BREADTH_FIRST,
    'level_order': TraversalOrder.BREADTH_FIRST,
}


def parse_order(order: Union[TraversalOrder, str]) -> TraversalOrder:
    """Parse a traversal order from an enum member or a string alias.

    Args:
        order: ``TraversalOrder`` member or a name such as ``"pre"``,
            ``"inorder"``, ``"post"`` or ``"bfs"`` (case-insensitive)

    Returns:
        TraversalOrder enum value

    Raises:
        ValueError: If the name is not recognized
    """
    if isinstance(order, TraversalOrder):
        return order

    if isinstance(order, str) and order.lower() in _ORDER_ALIASES:
        return _ORDER_ALIASES[order.lower()]

    raise ValueError(
        f"Unknown traversal order: {order!r}. "
        f"Choose from: {', '.join(sorted(_ORDER_ALIASES))}"
    )


@dataclass
class FilterConfig:
    """Configuration for filtering positions during traversal.

    Filters only decide what is yielded. They never prune: the children
    of an excluded position are still visited.
    """

    include_filter: Optional[Callable[[Any], bool]] = None  # Include predicate
    exclude_filter: Optional[Callable[[Any], bool]] = None  # Exclude predicate

    def should_include(self, position) -> bool:
        """Check if a position passes the filters.

        Args:
            position: Position to check

        Returns:
            True if position passes all filters
        """
        # Exclusion takes precedence
        if self.exclude_filter and self.exclude_filter(position):
            return False

        if self.include_filter:
            return bool(self.include_filter(position))

        return True


@dataclass
class DepthConfig:
    """Configuration for depth-based filtering.

    Depths are relative to where the traversal starts (0 for the start).
    """

    min_depth: int = 0                          # Minimum depth to yield
    max_depth: Optional[int] = None             # Maximum depth to traverse
    specific_depths: Optional[Set[int]] = None  # Only these specific depths

    def should_yield(self, depth: int) -> bool:
        """Check if positions at this depth should be yielded."""
        if self.specific_depths is not None:
            return depth in self.specific_depths

        if depth < self.min_depth:
            return False
        if self.max_depth is not None and depth > self.max_depth:
            return False

        return True

    def should_explore(self, depth: int) -> bool:
        """Check if children of a position at this depth should be visited."""
        if self.specific_depths is not None:
            return any(d > depth for d in self.specific_depths)

        if self.max_depth is not None:
            return depth < self.max_depth

        return True

    def explore_limit(self) -> Optional[int]:
        """Deepest depth any yielded position can have, or None if unbounded.

        Traversal engines use this to stop descending early.
        """
        if self.specific_depths is not None:
            return max(self.specific_depths) if self.specific_depths else 0
        return self.max_depth


@dataclass
class RenderConfig:
    """How a tree or traversal renders as text.

    The output is meant for debugging and is not a stable format.
    """

    separator: str = ", "
    prefix: str = "["
    suffix: str = "]"
    max_items: Optional[int] = None  # Truncate long listings
    ellipsis: str = "..."

    def render(self, values: Iterable[Any]) -> str:
        """Render values in iteration order.

        Args:
            values: Elements to list

        Returns:
            The elements joined by ``separator`` between ``prefix`` and
            ``suffix``, cut short with ``ellipsis`` past ``max_items``
        """
        parts: List[str] = []
        for value in values:
            if self.max_items is not None and len(parts) >= self.max_items:
                parts.append(self.ellipsis)
                break
            parts.append(str(value))
        return f"{self.prefix}{self.separator.join(parts)}{self.suffix}"

    def validate(self) -> List[str]:
        errors = []
        if self.max_items is not None and self.max_items < 0:
            errors.append("max_items cannot be negative")
        return errors


@dataclass
class TraversalConfig:
    """Complete configuration for a traversal plan.

    This is the primary way users specify what they want from a
    traversal. The TraversalPlan validates it against the capabilities
    of the tree it runs on.
    """

    # Traversal order (None = the tree's default order)
    order: Optional[TraversalOrder] = None

    # Depth control
    depth: DepthConfig = field(default_factory=DepthConfig)

    # Position filtering
    filter: FilterConfig = field(default_factory=FilterConfig)

    # Data collection
    data_requirement: DataRequirement = DataRequirement.VALUE
    custom_collector: Optional[Any] = None  # Custom collector instance

    # Limits
    max_nodes: Optional[int] = None  # Stop after yielding this many

    # Error handling for user callbacks (filters, custom collectors)
    on_error: Optional[Callable[[Any, Exception], None]] = None
    skip_errors: bool = False  # Continue on callback errors vs fail fast

    @classmethod
    def shallow(cls, max_depth: int = 1) -> 'TraversalConfig':
        """Create config for a shallow, level-by-level scan.

        Args:
            max_depth: How deep to go (default 1 = start and its children)

        Returns:
            TraversalConfig for shallow scanning
        """
        return cls(
            order=TraversalOrder.BREADTH_FIRST,
            depth=DepthConfig(max_depth=max_depth),
        )

    @classmethod
    def level_order(cls) -> 'TraversalConfig':
        """Create config yielding positions level by level."""
        return cls(
            order=TraversalOrder.BREADTH_FIRST,
            data_requirement=DataRequirement.DEPTH,
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.depth.min_depth < 0:
            errors.append("min_depth cannot be negative")

        if self.depth.max_depth is not None:
            if self.depth.max_depth < 0:
                errors.append("max_depth cannot be negative")
            if self.depth.max_depth < self.depth.min_depth:
                errors.append("max_depth cannot be less than min_depth")

        if self.depth.specific_depths is not None:
            if any(d < 0 for d in self.depth.specific_depths):
                errors.append("specific_depths cannot contain negative depths")

        if self.max_nodes is not None and self.max_nodes <= 0:
            errors.append("max_nodes must be positive")

        if self.data_requirement == DataRequirement.CUSTOM and self.custom_collector is None:
            errors.append("custom_collector required when data_requirement is CUSTOM")

        return errors


__all__ = [
    'TraversalOrder',
    'DataRequirement',
    'FilterConfig',
    'DepthConfig',
    'RenderConfig',
    'TraversalConfig',
    'parse_order',
]
