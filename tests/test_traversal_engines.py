"""Tests for the iterative traversal engines.

The engines are checked against straightforward recursive walks on
randomly shaped trees, and for the properties the tree relies on:
depth reporting, depth limits and walking over released nodes.
"""

import random

import pytest

from positreelib import BinaryTree, CapabilityMismatchError, GeneralTree, TraversalOrder
from positreelib.testing import TreeTestHelper
from positreelib.core import (
    breadth_first_indices,
    create_traversal,
    inorder_indices,
    postorder_indices,
    preorder_indices,
)


def random_binary_tree(seed, count=60):
    rng = random.Random(seed)
    tree = BinaryTree()
    open_slots = [(tree.add_root(0), 'left'), (tree.root(), 'right')]
    for value in range(1, count):
        parent, slot = open_slots.pop(rng.randrange(len(open_slots)))
        add = tree.add_left if slot == 'left' else tree.add_right
        child = add(parent, value)
        open_slots.extend([(child, 'left'), (child, 'right')])
    return tree


def random_general_tree(seed, count=60):
    rng = random.Random(seed)
    tree = GeneralTree()
    nodes = [tree.add_root(0)]
    for value in range(1, count):
        nodes.append(tree.add_child(rng.choice(nodes), value))
    return tree


def recursive_walk(tree, order):
    """Reference walk using recursion and the public navigation calls."""
    out = []

    def visit(position):
        children = list(tree.children(position))
        if order is TraversalOrder.PREORDER:
            out.append(position.element())
            for child in children:
                visit(child)
        elif order is TraversalOrder.POSTORDER:
            for child in children:
                visit(child)
            out.append(position.element())
        else:
            left, right = tree.left(position), tree.right(position)
            if left is not None:
                visit(left)
            out.append(position.element())
            if right is not None:
                visit(right)

    if tree.root() is not None:
        visit(tree.root())
    return out


def recursive_level_order(tree):
    levels = []

    def visit(position, depth):
        if len(levels) <= depth:
            levels.append([])
        levels[depth].append(position.element())
        for child in tree.children(position):
            visit(child, depth + 1)

    visit(tree.root(), 0)
    return [value for level in levels for value in level]


class TestAgainstRecursion:

    @pytest.mark.parametrize("seed", range(5))
    @pytest.mark.parametrize("order", [
        TraversalOrder.PREORDER,
        TraversalOrder.INORDER,
        TraversalOrder.POSTORDER,
    ])
    def test_binary_depth_first(self, seed, order):
        tree = random_binary_tree(seed)
        assert list(tree.traversal(order)) == recursive_walk(tree, order)

    @pytest.mark.parametrize("seed", range(5))
    @pytest.mark.parametrize("order", [TraversalOrder.PREORDER, TraversalOrder.POSTORDER])
    def test_general_depth_first(self, seed, order):
        tree = random_general_tree(seed)
        assert list(tree.traversal(order)) == recursive_walk(tree, order)

    @pytest.mark.parametrize("seed", range(5))
    def test_breadth_first(self, seed):
        for tree in (random_binary_tree(seed), random_general_tree(seed)):
            assert list(tree.breadth_first_iterable()) == recursive_level_order(tree)

    @pytest.mark.parametrize("seed", range(3))
    def test_every_order_visits_every_node_once(self, seed):
        tree = random_binary_tree(seed)
        for order in TraversalOrder:
            assert sorted(tree.traversal(order)) == list(range(tree.size()))


class TestEngineSteps:

    def test_depths_are_reported(self, sample_binary):
        steps = preorder_indices(sample_binary._arena, sample_binary._root)
        assert [depth for _, depth in steps] == [0, 1, 2, 2, 1, 2, 2]

    def test_inorder_depths(self, sample_binary):
        steps = inorder_indices(sample_binary._arena, sample_binary._root)
        assert [depth for _, depth in steps] == [2, 1, 2, 0, 2, 1, 2]

    def test_depths_relative_to_start(self, sample_binary):
        walked = [
            (position.element(), depth)
            for position, depth in sample_binary.walk(
                "bfs", start=sample_binary.right(sample_binary.root())
            )
        ]
        assert walked == [(3, 0), (6, 1), (7, 1)]

    @pytest.mark.parametrize("order, expected", [
        ("pre", [1, 2, 3]),
        ("in", [2, 1, 3]),
        ("post", [2, 3, 1]),
        ("bfs", [1, 2, 3]),
    ])
    def test_max_depth(self, sample_binary, order, expected):
        walked = [p.element() for p, _ in sample_binary.walk(order, max_depth=1)]
        assert walked == expected

    def test_max_depth_zero(self, sample_general):
        assert [p.element() for p, _ in sample_general.walk(max_depth=0)] == ["A"]

    @pytest.mark.parametrize("engine", [
        preorder_indices,
        inorder_indices,
        postorder_indices,
        breadth_first_indices,
    ])
    def test_walk_survives_release_of_yielded_nodes(self, sample_binary, engine):
        arena = sample_binary._arena
        released = 0
        for index, _ in engine(arena, sample_binary._root):
            arena.release(index)
            released += 1
        assert released == 7
        assert len(arena) == 0


class TestSubtreeRemovalCounts:
    """remove_subtree returns what an independent recount finds."""

    @pytest.mark.parametrize("seed", range(5))
    @pytest.mark.parametrize("build", [random_binary_tree, random_general_tree])
    def test_removed_count_matches_recount(self, seed, build):
        tree = build(seed)
        helper = TreeTestHelper(tree)
        rng = random.Random(seed)

        for _ in range(5):
            if tree.is_empty():
                break
            target = rng.choice(list(tree.positions("bfs")))
            expected = helper.subtree_count(target)
            size_before = tree.size()

            assert tree.remove_subtree(target) == expected
            assert tree.size() == size_before - expected
            assert helper.check_invariants() == []


class TestCreateTraversal:

    def test_empty_start(self):
        tree = BinaryTree()
        assert list(create_traversal(TraversalOrder.PREORDER, tree._arena, None)) == []

    def test_unknown_order(self, sample_binary):
        with pytest.raises(ValueError):
            create_traversal("sideways", sample_binary._arena, sample_binary._root)

    def test_inorder_requires_binary_nodes(self, sample_general):
        with pytest.raises(CapabilityMismatchError):
            create_traversal(TraversalOrder.INORDER, sample_general._arena, sample_general._root)

    def test_each_order_has_an_engine(self, sample_binary):
        for order in TraversalOrder:
            steps = list(create_traversal(order, sample_binary._arena, sample_binary._root))
            assert len(steps) == 7
