# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from typing import Iterable, List, Mapping, Sequence, Tuple

import numpy as np

from axe.core.graph import \
    EdgeCosts, EdgeId, Node, NodeId, make_edge_costs, make_nodes
from axe.core.utils import AxeException, OrderedSet


class Partition:
    """
    A group of nodes to be executed on the same unit.

    Attributes:
    -   nodes: ids of the owned nodes, in insertion order
    -   external_inputs: ids of the edges entering this partition from
            outside the modeled node set, their costs are charged to this
            partition alone
    -   fixed: a fixed partition is pinned, the optimizer never moves nodes
            into or out of it, and it is not counted in the imbalance
    """

    def __init__(
        self,
        nodes: Iterable[NodeId] = (),
        external_inputs: Iterable[EdgeId] = (),
        fixed: bool = False
    ) -> None:
        self.nodes: OrderedSet[NodeId] = OrderedSet(nodes)
        self.external_inputs: Tuple[EdgeId, ...] = tuple(external_inputs)
        self.fixed = fixed

    def min_id(self) -> int:
        return min(self.nodes, default=0)

    def __repr__(self) -> str:
        return (
            f"Partition(nodes={sorted(self.nodes)}"
            f", external_inputs={list(self.external_inputs)}"
            f", fixed={self.fixed})"
        )


class Partitioning:
    """
    The node list and edge costs of a graph, together with an ordered
    sequence of partitions covering all nodes.

    Only the partitions are mutable. A Partitioning is not synchronized and
    must be driven by a single caller at a time.
    """

    def __init__(
        self,
        nodes: Iterable[Node],
        edge_costs: Mapping[EdgeId, int],
        partitions: Iterable[Partition]
    ) -> None:
        self.nodes: Tuple[Node, ...] = make_nodes(nodes)
        self.edge_costs: EdgeCosts = make_edge_costs(edge_costs)
        self.partitions: List[Partition] = list(partitions)

    def cost(self) -> Tuple[int, List[int]]:
        """
        Returns:
        -   int: the objective, i.e. the sum of non-fixed partition costs
                plus the imbalance penalty
        -   List[int]: cost of each partition, fixed partitions included

        Raises:
        -   MissingEdgeSourceError: some input edge has no producer
        """
        # axe.core.cost imports this module.
        from axe.core.cost import evaluate_cost
        return evaluate_cost(self)

    def move(self, node_id: NodeId, src: int, dst: int) -> None:
        # Both steps are set operations, removing an absent id or
        # re-inserting a present id does nothing.
        self.partitions[src].nodes.discard(node_id)
        self.partitions[dst].nodes.add(node_id)

    def pick_other_group(self, group: int, rng: np.random.Generator) -> int:
        """
        Uniformly pick a non-fixed partition other than `group`.

        The caller must ensure there are at least two non-fixed partitions
        (or one, when `group` itself is fixed).
        """
        candidates = [
            i for i, partition in enumerate(self.partitions)
            if i != group and not partition.fixed
        ]
        assert len(candidates) > 0, \
            "Need at least two non-fixed partitions to pick from"
        return candidates[int(rng.integers(len(candidates)))]

    def normalize(self) -> None:
        """
        Reorder partitions by their minimum node id, ascending.

        Group indexes chosen by the optimizer are arbitrary, two runs ending
        up with the same node sets compare equal after normalization.
        The sort is stable, so calling this again changes nothing.
        """
        self.partitions.sort(key=lambda partition: partition.min_id())

    def membership(self) -> np.ndarray:
        """
        Returns:
        -   np.ndarray: int64 vector, the partition index of each node,
                -1 for nodes that no partition owns.
        """
        membership = np.full((len(self.nodes),), -1, dtype=np.int64)
        for group, partition in enumerate(self.partitions):
            ids = np.fromiter(partition.nodes, dtype=np.int64,
                              count=len(partition.nodes))
            membership[ids] = group
        return membership

    def node_sets(self) -> List[List[NodeId]]:
        return [sorted(partition.nodes) for partition in self.partitions]

    def validate(self) -> None:
        """
        Check every node is owned by exactly one partition.
        """
        owners = np.zeros((len(self.nodes),), dtype=np.int64)
        for group, partition in enumerate(self.partitions):
            for node_id in partition.nodes:
                if not 0 <= node_id < len(self.nodes):
                    raise AxeException(
                        f"Partition {group} owns unknown node {node_id}")
                owners[node_id] += 1

        if not np.all(owners == 1):
            bad = int(np.flatnonzero(owners != 1)[0])
            raise AxeException(
                f"Node {bad} is owned by {int(owners[bad])} partitions")

    def __repr__(self) -> str:
        return f"Partitioning(partitions={self.partitions})"


def get_chunk_sizes(nv: int, partition_count: int) -> List[int]:
    """
    Contiguous chunk sizes of the initial assignment.
    The remainder nodes all go to the last partition.
    """
    per_partition_n, residue = divmod(nv, partition_count)
    sizes = [per_partition_n] * partition_count
    sizes[-1] += residue
    return sizes


def make_partitioning(
    nodes: Sequence[Node],
    edge_costs: Mapping[EdgeId, int],
    partition_count: int
) -> Partitioning:
    """
    Create `partition_count` partitions and fill them with contiguous
    chunks of node ids, `len(nodes) // partition_count` ids each,
    with the remainder appended to the last partition.
    """
    assert partition_count > 0, "Partition count must be positive"

    partitions = []
    start = 0
    for size in get_chunk_sizes(len(nodes), partition_count):
        partitions.append(Partition(range(start, start + size)))
        start += size

    return Partitioning(nodes, edge_costs, partitions)
