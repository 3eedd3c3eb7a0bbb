"""Tests for the functional API helpers."""

import pytest

from dtreelib import (
    DT,
    Operator,
    TreeConfig,
    build,
    count_nodes,
    decide,
    find_nodes,
    get_leaf_nodes,
    get_tree_stats,
    iter_nodes,
)


@pytest.fixture
def weather_tree():
    """Small decision tree on temperature, then wind speed.

    root
    ├── cold (< 10)
    │   ├── stay-in (< 20 wind)
    │   └── coat    (< 100 wind)
    └── warm (< 40)
        └── beach   (< 15 wind)
    """
    root = DT.init("root")
    cold = DT.new("cold", 10)
    build(cold, DT.new("stay-in", 20), DT.new("coat", 100))
    warm = DT.new("warm", 40).add("beach", 15)
    return build(root, cold, warm)


class TestBuild:
    def test_build_appends_in_order(self, weather_tree):
        assert [c.data for c in weather_tree.children()] == ["cold", "warm"]
        assert weather_tree.latest_child().data == "warm"

    def test_build_returns_tree(self):
        root = DT.init("root")
        assert build(root) == root


class TestDecide:
    def test_full_path(self, weather_tree):
        assert decide(weather_tree, [25, 5], Operator.LESS).data == "beach"
        assert decide(weather_tree, [5, 50], Operator.LESS).data == "coat"

    def test_stops_at_first_miss(self, weather_tree):
        # 30 km/h wind is too much for the beach
        assert decide(weather_tree, [25, 30], Operator.LESS).data == "warm"

    def test_no_values(self, weather_tree):
        assert decide(weather_tree, [], Operator.LESS) == weather_tree

    def test_per_edge_tree(self):
        root = DT.init("root", TreeConfig.per_edge())
        root.add("yes", True, op="==").add("no", False, op="==")
        root.first().add("done", 1, op=">=")

        assert decide(root, [True, 3]).data == "done"
        assert decide(root, [False]).data == "no"


class TestIteration:
    def test_depth_first_order(self, weather_tree):
        order = [n.data for n in iter_nodes(weather_tree)]
        assert order == ["root", "cold", "stay-in", "coat", "warm", "beach"]

    def test_breadth_first_order(self, weather_tree):
        order = [n.data for n in iter_nodes(weather_tree, strategy="bfs")]
        assert order == ["root", "cold", "warm", "stay-in", "coat", "beach"]

    def test_unknown_strategy(self, weather_tree):
        with pytest.raises(ValueError, match="Unknown traversal strategy"):
            iter_nodes(weather_tree, strategy="sideways")

    def test_count_nodes(self, weather_tree):
        assert count_nodes(weather_tree) == 6
        assert count_nodes(weather_tree.first()) == 3

    def test_find_nodes(self, weather_tree):
        found = find_nodes(weather_tree, lambda n: n.decision is not None and n.decision >= 40)
        assert [n.data for n in found] == ["coat", "warm"]

    def test_get_leaf_nodes(self, weather_tree):
        assert [n.data for n in get_leaf_nodes(weather_tree)] == ["stay-in", "coat", "beach"]


class TestStats:
    def test_tree_stats(self, weather_tree):
        stats = get_tree_stats(weather_tree)

        assert stats == {
            'total_nodes': 6,
            'leaf_nodes': 3,
            'max_depth': 2,
            'max_children': 2,
            'undecided_nodes': 1,
        }

    def test_single_node(self):
        stats = get_tree_stats(DT.new("alone", 1))

        assert stats['total_nodes'] == 1
        assert stats['leaf_nodes'] == 1
        assert stats['max_depth'] == 0
        assert stats['undecided_nodes'] == 0
