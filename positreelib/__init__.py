"""PosiTreeLib - Position-Based Tree Library.

PosiTreeLib provides rooted trees whose nodes are reached through opaque
handles ("positions"). Two shapes are available:

━━━━━━━━━━━━━━━━━━━━━━━━━━
Binary (at most a left and a right child):
    from positreelib import binary_tree

General (any number of children, in insertion order):
    from positreelib import general_tree
━━━━━━━━━━━━━━━━━━━━━━━━━━

Both shapes share the same contract: positions are validated against the
tree that issued them, traversals are lazy, iterative and restartable,
and an iterator fails fast once the tree changes shape under it.
"""

__version__ = "0.1.0"

import logging

from .errors import (
    TreeError,
    DuplicateRootError,
    SlotOccupiedError,
    PositionError,
    ForeignPositionError,
    InvalidPositionError,
    StalePositionError,
    StructuralConflictError,
    UnsupportedOperationError,
    CapabilityMismatchError,
)
from .config import (
    TraversalOrder,
    DataRequirement,
    FilterConfig,
    DepthConfig,
    RenderConfig,
    TraversalConfig,
    parse_order,
)
from .core import Position, Tree, TraversalView, ChildrenView
from .binary import BinaryTree, binary_tree
from .general import GeneralTree, general_tree
from .planning import TraversalPlan
from .api import (
    traverse_tree,
    collect_tree_data,
    count_nodes,
    find_positions,
    get_leaf_positions,
    get_tree_paths,
    get_tree_stats,
    render_tree,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Errors
    "TreeError",
    "DuplicateRootError",
    "SlotOccupiedError",
    "PositionError",
    "ForeignPositionError",
    "InvalidPositionError",
    "StalePositionError",
    "StructuralConflictError",
    "UnsupportedOperationError",
    "CapabilityMismatchError",
    # Config
    "TraversalOrder",
    "DataRequirement",
    "FilterConfig",
    "DepthConfig",
    "RenderConfig",
    "TraversalConfig",
    "parse_order",
    # Trees
    "Position",
    "Tree",
    "TraversalView",
    "ChildrenView",
    "BinaryTree",
    "binary_tree",
    "GeneralTree",
    "general_tree",
    # Planning and API
    "TraversalPlan",
    "traverse_tree",
    "collect_tree_data",
    "count_nodes",
    "find_positions",
    "get_leaf_positions",
    "get_tree_paths",
    "get_tree_stats",
    "render_tree",
]
