# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import numpy as np
import pytest

from axe import Node, Partition, Partitioning, make_partitioning, AxeException
from axe.core.partitioning import get_chunk_sizes

from tests.utils import make_chain, assert_node_sets_equal


@pytest.mark.parametrize('nv, partition_count, sizes', [
    (6, 3, [2, 2, 2]),
    (7, 3, [2, 2, 3]),
    (8, 3, [2, 2, 4]),
    (2, 3, [0, 0, 2]),
    (5, 1, [5]),
])
def test_get_chunk_sizes(nv, partition_count, sizes):
    assert get_chunk_sizes(nv, partition_count) == sizes


class TestMakePartitioning:
    def test_even(self):
        nodes, edge_costs = make_chain(6)
        p = make_partitioning(nodes, edge_costs, 3)
        assert_node_sets_equal(p, [[0, 1], [2, 3], [4, 5]])
        assert all(not part.fixed for part in p.partitions)
        assert all(part.external_inputs == () for part in p.partitions)

    def test_remainder_goes_to_last(self):
        nodes, edge_costs = make_chain(8)
        p = make_partitioning(nodes, edge_costs, 3)
        assert_node_sets_equal(p, [[0, 1], [2, 3], [4, 5, 6, 7]])
        p.validate()

    def test_more_partitions_than_nodes(self):
        nodes, edge_costs = make_chain(2)
        p = make_partitioning(nodes, edge_costs, 3)
        assert_node_sets_equal(p, [[], [], [0, 1]])
        p.validate()


class TestMove:
    def test_move(self):
        nodes, edge_costs = make_chain(4)
        p = make_partitioning(nodes, edge_costs, 2)

        p.move(1, 0, 1)
        assert_node_sets_equal(p, [[0], [1, 2, 3]])
        p.validate()

    def test_idempotent(self):
        nodes, edge_costs = make_chain(4)
        p = make_partitioning(nodes, edge_costs, 2)

        p.move(1, 0, 1)
        # Node 1 is no longer in partition 0, it stays where it is.
        p.move(1, 0, 1)
        assert_node_sets_equal(p, [[0], [1, 2, 3]])
        p.validate()

    def test_move_back(self):
        nodes, edge_costs = make_chain(4)
        p = make_partitioning(nodes, edge_costs, 2)

        p.move(3, 1, 0)
        p.move(3, 0, 1)
        assert_node_sets_equal(p, [[0, 1], [2, 3]])


class TestPickOtherGroup:
    def test_never_self_or_fixed(self, rng):
        p = Partitioning(
            [Node()] * 4, {},
            [
                Partition([0]),
                Partition([1], fixed=True),
                Partition([2]),
                Partition([3]),
            ]
        )
        picked = set(p.pick_other_group(0, rng) for _ in range(200))
        assert picked == {2, 3}

    def test_single_candidate(self, rng):
        p = Partitioning(
            [Node()] * 3, {},
            [Partition([0], fixed=True), Partition([1]), Partition([2])]
        )
        for _ in range(20):
            assert p.pick_other_group(2, rng) == 1

    def test_no_candidate(self, rng):
        p = Partitioning(
            [Node()] * 2, {},
            [Partition([0], fixed=True), Partition([1])]
        )
        with pytest.raises(AssertionError):
            p.pick_other_group(1, rng)


class TestNormalize:
    def test_order_by_min_id(self):
        p = Partitioning(
            [Node()] * 5, {7: 1},
            [
                Partition([4, 2]),
                Partition([3, 1], external_inputs=[7], fixed=True),
                Partition([0]),
            ]
        )
        p.normalize()
        assert_node_sets_equal(p, [[0], [1, 3], [2, 4]])

        # Flags and external inputs travel with their partition.
        assert [part.fixed for part in p.partitions] == [False, True, False]
        assert p.partitions[1].external_inputs == (7,)

    def test_empty_partition_first(self):
        p = Partitioning(
            [Node()] * 3, {},
            [Partition([1, 2]), Partition([]), Partition([0])]
        )
        p.normalize()
        # Both the empty partition and [0] have a minimum id of 0,
        # the sort is stable.
        assert_node_sets_equal(p, [[], [0], [1, 2]])

    def test_idempotent(self):
        p = Partitioning(
            [Node()] * 6, {},
            [Partition([5]), Partition([3, 4]), Partition([0, 1, 2])]
        )
        p.normalize()
        once = p.node_sets()
        p.normalize()
        assert p.node_sets() == once == [[0, 1, 2], [3, 4], [5]]

    def test_relabeled_runs_agree(self):
        a = Partitioning(
            [Node()] * 4, {}, [Partition([2, 3]), Partition([0, 1])])
        b = Partitioning(
            [Node()] * 4, {}, [Partition([1, 0]), Partition([3, 2])])
        a.normalize()
        b.normalize()
        assert a.node_sets() == b.node_sets()


def test_membership():
    p = Partitioning(
        [Node()] * 5, {},
        [Partition([3]), Partition([0, 4]), Partition([1, 2])]
    )
    assert np.array_equal(p.membership(), np.array([1, 2, 2, 0, 1]))


class TestValidate:
    def test_node_in_two_partitions(self):
        p = Partitioning(
            [Node()] * 2, {}, [Partition([0, 1]), Partition([1])])
        with pytest.raises(AxeException, match="Node 1"):
            p.validate()

    def test_node_in_no_partition(self):
        p = Partitioning(
            [Node()] * 3, {}, [Partition([0]), Partition([2])])
        with pytest.raises(AxeException, match="Node 1"):
            p.validate()

    def test_unknown_node(self):
        p = Partitioning(
            [Node()] * 1, {}, [Partition([0]), Partition([5])])
        with pytest.raises(AxeException, match="unknown node 5"):
            p.validate()
