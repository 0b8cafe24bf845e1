"""Tests for the degree index."""

import unittest

import pytest

from socialgraph.degree import (
    apply_degrees,
    compute_degrees,
    degree_distribution,
    top_nodes_by_degree,
    with_degrees,
)
from socialgraph.models import Edge, Node
from socialgraph.utils.validation import GraphInvariantError


def make_nodes(*ids, degree=0):
    return tuple(Node(id=i, name=f"User{i}", group=(i % 8) + 1, degree=degree) for i in ids)


class TestComputeDegrees(unittest.TestCase):
    """compute_degrees is pure and always starts from zero."""

    def test_basic_counts(self):
        nodes = make_nodes(1, 2, 3)
        edges = [Edge(1, 2), Edge(2, 3)]

        self.assertEqual(compute_degrees(nodes, edges), {1: 1, 2: 2, 3: 1})

    def test_self_loop_counts_twice(self):
        nodes = make_nodes(1, 2)
        edges = [Edge(1, 1), Edge(1, 2)]

        self.assertEqual(compute_degrees(nodes, edges), {1: 3, 2: 1})

    def test_parallel_edges_counted(self):
        nodes = make_nodes(1, 2)
        edges = [Edge(1, 2), Edge(2, 1), Edge(1, 2)]

        self.assertEqual(compute_degrees(nodes, edges), {1: 3, 2: 3})

    def test_isolated_node_has_zero(self):
        nodes = make_nodes(1, 2, 3)

        self.assertEqual(compute_degrees(nodes, [Edge(1, 2)])[3], 0)

    def test_stale_degrees_ignored(self):
        nodes = make_nodes(1, 2, degree=42)

        self.assertEqual(compute_degrees(nodes, [Edge(1, 2)]), {1: 1, 2: 1})

    def test_object_endpoints(self):
        nodes = make_nodes(1, 2, 3)
        # Endpoints resolved to objects/mappings by a layout pass
        edges = [Edge(nodes[0], nodes[1]), Edge({"id": 2, "x": 1.0}, 3)]

        self.assertEqual(compute_degrees(nodes, edges), {1: 1, 2: 2, 3: 1})

    def test_unknown_endpoint(self):
        with self.assertRaises(GraphInvariantError):
            compute_degrees(make_nodes(1), [Edge(1, 5)])

    def test_non_id_endpoint(self):
        with self.assertRaises(TypeError):
            compute_degrees(make_nodes(1), [Edge(1, "one")])


class TestApplyDegrees:
    def test_does_not_mutate_input(self):
        nodes = make_nodes(1, 2)
        updated = apply_degrees(nodes, {1: 4, 2: 0})

        assert [n.degree for n in nodes] == [0, 0]
        assert [n.degree for n in updated] == [4, 0]

    def test_idempotent(self):
        nodes = make_nodes(1, 2, 3, degree=7)
        edges = [Edge(1, 2), Edge(2, 3), Edge(3, 1)]

        once = with_degrees(nodes, edges)
        twice = with_degrees(once, edges)

        assert once == twice
        assert [n.degree for n in twice] == [2, 2, 2]


class TestDistribution:
    def test_degree_distribution(self, example_snapshot):
        assert degree_distribution(example_snapshot.nodes) == {1: 2, 2: 3}

    def test_top_nodes(self, star_snapshot):
        top = top_nodes_by_degree(star_snapshot.nodes, 2)

        assert [n.id for n in top] == [0, 22]

    def test_top_nodes_ties_keep_order(self, example_snapshot):
        top = top_nodes_by_degree(example_snapshot.nodes, 4)

        assert [n.id for n in top] == [0, 1, 2, 3]

    @pytest.mark.parametrize("n", [0, -3])
    def test_top_nodes_non_positive(self, example_snapshot, n):
        assert top_nodes_by_degree(example_snapshot.nodes, n) == []
