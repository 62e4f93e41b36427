import pytest

from forcenet.models import Node
from forcenet.physics.quadtree import QuadTree


def _nodes(points) -> list[Node]:
    return [Node(id=i, x=x, y=y) for i, (x, y) in enumerate(points)]


def _leaf_points(tree: QuadTree) -> list[Node]:
    found: list[Node] = []

    def collect(quad) -> bool:
        found.extend(quad.points)
        return False

    tree.visit(collect)
    return found


def test_every_node_lands_in_exactly_one_leaf() -> None:
    nodes = _nodes([(0, 0), (10, 0), (0, 10), (10, 10), (5, 5), (7, 2)])
    tree = QuadTree.from_nodes(nodes)

    assert len(tree) == 6
    found = _leaf_points(tree)
    assert sorted(n.id for n in found) == [n.id for n in nodes]


def test_coincident_nodes_share_a_leaf() -> None:
    nodes = _nodes([(3, 3)] * 5 + [(9, 9)])
    tree = QuadTree.from_nodes(nodes)

    found = _leaf_points(tree)
    assert len(found) == 6


def test_accumulate_totals_and_centroid() -> None:
    nodes = _nodes([(0, 0), (10, 0), (0, 10), (10, 10)])
    tree = QuadTree.from_nodes(nodes)
    tree.accumulate(lambda _n: -2.0)

    assert tree.root.strength == pytest.approx(-8.0)
    assert tree.root.cx == pytest.approx(5.0)
    assert tree.root.cy == pytest.approx(5.0)


def test_visit_can_skip_children() -> None:
    nodes = _nodes([(0, 0), (10, 10)])
    tree = QuadTree.from_nodes(nodes)

    visited = []
    tree.visit(lambda quad: visited.append(quad) or True)
    assert visited == [tree.root]


def test_empty_tree() -> None:
    tree = QuadTree.from_nodes([])
    assert len(tree) == 0
    assert tree.root.is_leaf


def test_second_distinct_point_splits_the_leaf() -> None:
    a, b = _nodes([(0, 0), (0.9, 0.9)])
    tree = QuadTree.from_nodes([a])
    assert tree.root.is_leaf

    tree.root.insert(b)
    assert not tree.root.is_leaf
    assert tree.root.points == []
    assert len(list(tree.root.iter_children())) == 2
