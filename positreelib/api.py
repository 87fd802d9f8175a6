"""High-level API for PosiTreeLib.

This module provides simple, functional interfaces for common traversal
tasks. These functions wrap TraversalConfig and TraversalPlan for ease
of use in simple cases.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from .config import (
    DataRequirement,
    DepthConfig,
    FilterConfig,
    RenderConfig,
    TraversalConfig,
    TraversalOrder,
    parse_order,
)
from .core.position import Position
from .core.tree import Tree
from .planning import TraversalPlan


def traverse_tree(
    tree: Tree,
    order: Optional[Union[TraversalOrder, str]] = None,
    start: Optional[Position] = None,
    max_depth: Optional[int] = None,
    min_depth: int = 0,
    include_filter: Optional[Callable[[Position], bool]] = None,
    exclude_filter: Optional[Callable[[Position], bool]] = None,
    **kwargs
) -> Iterator[Position]:
    """Simple interface for tree traversal.

    This is the primary high-level function for walking a tree. It
    handles the common case of wanting to iterate over positions without
    dealing with configs and plans.

    Args:
        tree: Tree to walk
        order: Traversal order (default: the tree's default order)
        start: Walk only the subtree rooted here
        max_depth: Maximum depth to traverse, relative to start
        min_depth: Minimum depth before yielding positions
        include_filter: Function deciding if a position is yielded
        exclude_filter: Function deciding if a position is skipped
        **kwargs: Additional TraversalConfig options (max_nodes, on_error, ...)

    Yields:
        Positions that match the criteria

    Example:
        >>> for position in traverse_tree(tree, "bfs", max_depth=1):
        ...     print(position.element())
    """
    kwargs.update(
        order=order,
        max_depth=max_depth,
        min_depth=min_depth,
        include_filter=include_filter,
        exclude_filter=exclude_filter,
    )
    config = _build_config_from_kwargs(**kwargs)
    plan = TraversalPlan(config, tree)

    for position, _ in plan.execute(start):
        yield position


def collect_tree_data(
    tree: Tree,
    data_requirement: DataRequirement = DataRequirement.VALUE,
    start: Optional[Position] = None,
    **kwargs
) -> Iterator[Tuple[Position, Any]]:
    """Traverse a tree and collect the specified data.

    Similar to traverse_tree but yields both positions and collected data.

    Args:
        tree: Tree to walk
        data_requirement: What data to collect
        start: Walk only the subtree rooted here
        **kwargs: Additional traversal options (see traverse_tree)

    Yields:
        Tuples of (position, collected_data)

    Example:
        >>> for position, path in collect_tree_data(tree, DataRequirement.PATH):
        ...     print(" -> ".join(map(str, path)))
    """
    kwargs['data_requirement'] = data_requirement
    config = _build_config_from_kwargs(**kwargs)
    plan = TraversalPlan(config, tree)

    yield from plan.execute(start)


def count_nodes(tree: Tree, start: Optional[Position] = None, **kwargs) -> int:
    """Count positions that match criteria.

    Without criteria this is an independent recount of the tree (or of
    the subtree at ``start``), which always agrees with ``tree.size()``.
    """
    count = 0
    for _ in traverse_tree(tree, start=start, **kwargs):
        count += 1
    return count


def find_positions(
    tree: Tree,
    predicate: Callable[[Position], bool],
    **kwargs
) -> Iterator[Position]:
    """Find positions that match a predicate.

    Example:
        >>> evens = list(find_positions(tree, lambda p: p.element() % 2 == 0))
    """
    kwargs['include_filter'] = predicate
    yield from traverse_tree(tree, **kwargs)


def get_leaf_positions(tree: Tree, **kwargs) -> Iterator[Position]:
    """Get every leaf position, in traversal order."""
    for position in traverse_tree(tree, **kwargs):
        if tree.is_leaf(position):
            yield position


def get_tree_paths(tree: Tree, **kwargs) -> Iterator[List[Any]]:
    """Get the elements on the path from the root to each position."""
    for _, path in collect_tree_data(tree, DataRequirement.PATH, **kwargs):
        yield path


def get_tree_stats(tree: Tree, **kwargs) -> Dict[str, Any]:
    """Get statistics about a tree.

    With ``max_depth`` the walk stops descending at that depth, so nodes
    there have no visited children and count as leaves of the walked tree.

    Returns:
        Dictionary with total, leaf and internal node counts, the maximum
        depth, the node count per depth and the average branching factor
        (visited children per internal node)
    """
    explore_limit = _build_config_from_kwargs(**kwargs).depth.explore_limit()
    stats: Dict[str, Any] = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'max_depth': 0,
        'depths': {},
    }
    edges = 0

    for position, info in collect_tree_data(tree, DataRequirement.CHILD_COUNT, **kwargs):
        depth = info['depth']
        stats['total_nodes'] += 1

        child_count = info['child_count']
        if explore_limit is not None and depth >= explore_limit:
            child_count = 0

        if child_count == 0:
            stats['leaf_nodes'] += 1
        edges += child_count

        stats['max_depth'] = max(stats['max_depth'], depth)
        stats['depths'][depth] = stats['depths'].get(depth, 0) + 1

    stats['internal_nodes'] = stats['total_nodes'] - stats['leaf_nodes']
    stats['average_branching'] = (
        edges / stats['internal_nodes']
        if stats['internal_nodes'] > 0 else 0
    )

    return stats


def render_tree(
    tree: Tree,
    order: Optional[Union[TraversalOrder, str]] = None,
    config: Optional[RenderConfig] = None,
) -> str:
    """Render a tree's elements as a comma-separated listing.

    Example:
        >>> render_tree(tree, "post")
        '[4, 5, 2, 6, 7, 3, 1]'
    """
    config = config or RenderConfig()
    return config.render(tree.traversal(order))


# Helper functions

def _build_config_from_kwargs(**kwargs) -> TraversalConfig:
    """Build TraversalConfig from keyword arguments.

    Args:
        **kwargs: Configuration options

    Returns:
        TraversalConfig instance
    """
    config = TraversalConfig(depth=DepthConfig(), filter=FilterConfig())

    order = kwargs.pop('order', None)
    if order is not None:
        config.order = parse_order(order)

    max_depth = kwargs.pop('max_depth', None)
    if max_depth is not None:
        config.depth.max_depth = max_depth

    if 'min_depth' in kwargs:
        config.depth.min_depth = kwargs.pop('min_depth')

    if 'include_filter' in kwargs:
        config.filter.include_filter = kwargs.pop('include_filter')

    if 'exclude_filter' in kwargs:
        config.filter.exclude_filter = kwargs.pop('exclude_filter')

    on_error = kwargs.pop('on_error', None)
    if on_error is not None:
        config.on_error = on_error
        config.skip_errors = True

    # Apply any remaining kwargs directly
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)

    return config
