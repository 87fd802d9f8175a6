"""Deep and wide trees: traversal and removal must not depend on recursion.

These build trees far deeper than the interpreter's recursion limit, so
any recursive code path on the way fails loudly. Marked slow; run with
``python run_tests.py --all``.
"""

import sys

import pytest

from positreelib import count_nodes, get_tree_stats
from positreelib.testing import TreeTestHelper, build_chain

DEPTH = 200_000
WIDTH = 100_000


@pytest.mark.slow
class TestDeepTrees:

    @pytest.fixture(scope="class", params=["binary", "general"])
    def chain(self, request):
        assert DEPTH > sys.getrecursionlimit()
        return build_chain(DEPTH, shape=request.param)

    def test_every_order_walks_the_chain(self, chain):
        for order in chain.SUPPORTED_ORDERS:
            count = 0
            for _ in chain.traversal(order):
                count += 1
            assert count == DEPTH + 1

    def test_height_and_depth(self, chain):
        assert chain.height() == DEPTH
        deepest = None
        for deepest in chain.positions("pre"):
            pass
        assert chain.depth(deepest) == DEPTH

    def test_postorder_ends_at_root(self, chain):
        last = None
        for last in chain.traversal("post"):
            pass
        assert last == 0

    def test_plan_and_paths(self, chain):
        assert count_nodes(chain, max_depth=10) == 11
        assert get_tree_stats(chain, order="bfs")['max_depth'] == DEPTH

    def test_remove_deep_subtree(self):
        chain = build_chain(DEPTH)
        first = chain.left(chain.root())
        assert chain.remove_subtree(first) == DEPTH
        assert chain.size() == 1
        assert TreeTestHelper(chain).check_invariants() == []

    def test_clear_deep_tree(self):
        chain = build_chain(DEPTH, shape="general")
        chain.clear()
        assert chain.size() == 0
        assert list(chain) == []


@pytest.mark.slow
class TestWideTrees:

    @pytest.fixture(scope="class")
    def wide(self):
        tree = build_chain(0, shape="general")
        root = tree.root()
        for value in range(1, WIDTH + 1):
            tree.add_child(root, value)
        return tree

    def test_children_view(self, wide):
        children = wide.children(wide.root())
        assert len(children) == WIDTH
        assert children[-1].element() == WIDTH

    def test_breadth_first(self, wide):
        assert list(wide.breadth_first_iterable())[:3] == [0, 1, 2]
        assert count_nodes(wide) == WIDTH + 1

    def test_remove_children_one_by_one(self):
        tree = build_chain(0, shape="general")
        root = tree.root()
        positions = [tree.add_child(root, i) for i in range(10_000)]
        for position in positions[::2]:
            tree.remove_subtree(position)
        assert tree.size() == 5_001
        assert [p.element() for p in tree.children(root)][:3] == [1, 3, 5]
