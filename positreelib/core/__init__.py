"""Core abstractions for PosiTreeLib.

This package contains the node storage, position handles, traversal
engines and the shared Tree base class that the concrete tree shapes
build on.
"""

from .node import NodeRecord, BinaryNode, GeneralNode
from .arena import NodeArena
from .position import Position
from .traversal import (
    FailFastIterator,
    TraversalView,
    create_traversal,
    preorder_indices,
    inorder_indices,
    postorder_indices,
    breadth_first_indices,
)
from .views import ChildrenView
from .tree import Tree
from .collector import (
    DataCollector,
    ValueCollector,
    PositionCollector,
    DepthCollector,
    PathCollector,
    ChildCountCollector,
    CustomCollector,
)

__all__ = [
    "NodeRecord",
    "BinaryNode",
    "GeneralNode",
    "NodeArena",
    "Position",
    "FailFastIterator",
    "TraversalView",
    "create_traversal",
    "preorder_indices",
    "inorder_indices",
    "postorder_indices",
    "breadth_first_indices",
    "ChildrenView",
    "Tree",
    "DataCollector",
    "ValueCollector",
    "PositionCollector",
    "DepthCollector",
    "PathCollector",
    "ChildCountCollector",
    "CustomCollector",
]
