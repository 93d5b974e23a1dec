# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from typing import Dict, List, Sequence, Tuple

from axe import Node, Partitioning


def make_chain(
    n: int, node_cost: int = 10, edge_cost: int = 1
) -> Tuple[List[Node], Dict[int, int]]:
    """
    Nodes `0 -> 1 -> ... -> n-1`, node `i` produces edge `i+1`.
    """
    nodes = []
    for i in range(n):
        nodes.append(Node(
            inputs=[i] if i > 0 else [],
            outputs=[i + 1] if i < n - 1 else [],
            cost=node_cost
        ))
    edge_costs = {i: edge_cost for i in range(1, n)}
    return nodes, edge_costs


def assert_node_sets_equal(p: Partitioning, want: Sequence[Sequence[int]]):
    assert len(p.partitions) == len(want), \
        f"expected {len(want)} partitions; got {len(p.partitions)}"
    for g, ids in enumerate(want):
        assert sorted(p.partitions[g].nodes) == sorted(ids), \
            f"group {g}: wanted {sorted(ids)}; got {p.partitions[g]}"
