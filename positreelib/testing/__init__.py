"""Testing utilities for PosiTreeLib consumers."""

from .fixtures import (
    TreeTestHelper,
    build_chain,
    build_complete_binary_tree,
    build_sample_general_tree,
)

__all__ = [
    'TreeTestHelper',
    'build_chain',
    'build_complete_binary_tree',
    'build_sample_general_tree',
]
