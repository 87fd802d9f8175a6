"""Traversal planning for PosiTreeLib.

The TraversalPlan validates that a TraversalConfig can be satisfied by a
tree and coordinates the actual traversal: engine selection, depth
pruning, filtering, data collection and limits.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .config import DataRequirement, TraversalConfig, TraversalOrder
from .core.collector import (
    ChildCountCollector,
    DataCollector,
    DepthCollector,
    PathCollector,
    PositionCollector,
    ValueCollector,
)
from .core.position import Position
from .core.tree import Tree
from .errors import CapabilityMismatchError, TreeError

logger = logging.getLogger(__name__)


class TraversalPlan:
    """Validated execution plan for a tree traversal.

    The plan is the bridge between user intent (TraversalConfig) and
    execution. Every problem with the configuration, and every order the
    tree can't walk in, is reported up front in a single
    CapabilityMismatchError before any node is visited.
    """

    def __init__(self, config: TraversalConfig, tree: Tree):
        """Create and validate a traversal plan.

        Args:
            config: User's traversal configuration
            tree: Tree to traverse

        Raises:
            CapabilityMismatchError: If the tree can't satisfy the config
        """
        self.config = config
        self.tree = tree

        config_errors = config.validate()
        if config_errors:
            logger.debug("Rejected traversal config: %s", config_errors)
            raise CapabilityMismatchError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )

        capability_issues = self._validate_capabilities()
        if capability_issues:
            logger.debug("Rejected traversal plan: %s", capability_issues)
            raise CapabilityMismatchError(
                f"Tree limitations: {'; '.join(capability_issues)}"
            )

        self.order: TraversalOrder = config.order or tree.DEFAULT_ORDER
        self.collector = self._select_collector()

        # Track execution state
        self.nodes_processed = 0
        self.errors_encountered: List[Tuple[Position, str]] = []

    def _validate_capabilities(self) -> List[str]:
        """Validate the tree can satisfy the configuration.

        Returns:
            List of capability issues (empty if all satisfied)
        """
        issues = []

        order = self.config.order or self.tree.DEFAULT_ORDER
        if order not in self.tree.SUPPORTED_ORDERS:
            issues.append(
                f"{self.tree.__class__.__name__} cannot traverse in {order.value} order"
            )

        return issues

    def _select_collector(self) -> DataCollector:
        """Select the data collector matching the data requirement."""
        if self.config.data_requirement == DataRequirement.CUSTOM:
            return self.config.custom_collector

        collector_map = {
            DataRequirement.VALUE: ValueCollector,
            DataRequirement.POSITION: PositionCollector,
            DataRequirement.DEPTH: DepthCollector,
            DataRequirement.PATH: PathCollector,
            DataRequirement.CHILD_COUNT: ChildCountCollector,
        }

        collector_class = collector_map[self.config.data_requirement]
        return collector_class(self.tree)

    def _handle_error(self, position: Position, error: Exception) -> None:
        """Handle an error raised by a user callback.

        Args:
            position: Position being processed when the error occurred
            error: The exception that was raised
        """
        self.errors_encountered.append((position, str(error)))

        if self.config.on_error:
            self.config.on_error(position, error)

        if not self.config.skip_errors:
            raise error

    def execute(self, start: Optional[Position] = None) -> Iterator[Tuple[Position, Any]]:
        """Execute the traversal plan.

        The start position is validated immediately; the walk itself is
        lazy and fail-fast, so changing the tree's structure while
        consuming the result raises StructuralConflictError.

        Args:
            start: Walk only the subtree rooted here (default: whole tree)

        Returns:
            Iterator of (position, collected_data) tuples
        """
        self.collector.reset()
        steps = self.tree.walk(
            self.order,
            start=start,
            max_depth=self.config.depth.explore_limit(),
        )
        return self._run(steps)

    def _run(self, steps: Iterator[Tuple[Position, int]]) -> Iterator[Tuple[Position, Any]]:
        self.nodes_processed = 0
        self.errors_encountered = []
        max_nodes = self.config.max_nodes

        for position, depth in steps:
            if not self.config.depth.should_yield(depth):
                continue

            try:
                if not self.config.filter.should_include(position):
                    continue
                data = self.collector.collect(position, depth)
            except TreeError:
                raise
            except Exception as e:
                self._handle_error(position, e)
                continue

            self.nodes_processed += 1
            yield position, data

            if max_nodes is not None and self.nodes_processed >= max_nodes:
                break

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of the execution plan.

        Returns:
            Dictionary with plan details
        """
        return {
            'order': self.order.value,
            'data_requirement': self.config.data_requirement.value,
            'max_depth': self.config.depth.max_depth,
            'min_depth': self.config.depth.min_depth,
            'max_nodes': self.config.max_nodes,
            'tree': self.tree.__class__.__name__,
            'tree_size': self.tree.size(),
            'collector': self.collector.__class__.__name__,
        }


__all__ = [
    'TraversalPlan',
    'CapabilityMismatchError',
]
