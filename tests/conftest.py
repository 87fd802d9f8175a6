"""Shared fixtures for the PosiTreeLib test suite."""

import pytest

from positreelib.testing import build_complete_binary_tree, build_sample_general_tree


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: builds very large trees; run with --all")


@pytest.fixture
def sample_binary():
    """The standard 7-node complete binary tree (1; 2, 3; 4, 5, 6, 7)."""
    return build_complete_binary_tree(3)


@pytest.fixture
def sample_general():
    """A with children B, C (in that order) and B's child D."""
    return build_sample_general_tree()
