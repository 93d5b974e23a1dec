# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from typing import Dict, List, Sequence, Tuple, TYPE_CHECKING
import more_itertools

from axe.core.graph import EdgeId
from axe.core.utils import MissingEdgeSourceError

if TYPE_CHECKING:
    from axe.core.partitioning import Partitioning


def get_edge_sources(partitioning: 'Partitioning') -> Dict[EdgeId, int]:
    """
    Map each edge id to the index of the partition producing it.

    An edge is produced by the partition owning the node that outputs it,
    or by the partition declaring it as an external input. External inputs
    are recorded last and take precedence.
    """
    sources: Dict[EdgeId, int] = {}
    for group, partition in enumerate(partitioning.partitions):
        for node_id in partition.nodes:
            for output in partitioning.nodes[node_id].outputs:
                sources[output] = group
        for output in partition.external_inputs:
            sources[output] = group
    return sources


def compute_imbalance(costs: Sequence[int]) -> int:
    """
    Sum of the gaps between the most expensive partition and each other one.
    Zero if and only if all costs are equal.
    """
    if len(costs) == 0:
        return 0
    max_cost = max(costs)
    return sum(max_cost - c for c in costs)


def evaluate_cost(partitioning: 'Partitioning') -> Tuple[int, List[int]]:
    """
    Evaluate the objective of the current assignment.

    The cost of a partition is the execution cost of its nodes, plus the
    cost of its external inputs, plus the cost of each edge crossing its
    boundary. A crossing edge is charged to both the producing and the
    consuming partition.

    The objective only counts non-fixed partitions:
    `sum(non-fixed costs) + imbalance(non-fixed costs)`.

    Returns:
    -   int: the objective
    -   List[int]: cost of each partition, including fixed ones

    Raises:
    -   MissingEdgeSourceError: an input edge has no producer
    """
    edge_costs = partitioning.edge_costs
    sources = get_edge_sources(partitioning)

    costs = [0] * len(partitioning.partitions)
    for group, partition in enumerate(partitioning.partitions):
        for ext_input in partition.external_inputs:
            costs[group] += edge_costs[ext_input]

    for group, partition in enumerate(partitioning.partitions):
        for node_id in partition.nodes:
            node = partitioning.nodes[node_id]
            costs[group] += node.cost

            for edge_id in node.inputs:
                source = sources.get(edge_id, None)
                if source is None:
                    raise MissingEdgeSourceError(edge_id, node_id)

                if source != group:
                    costs[group] += edge_costs[edge_id]
                    costs[source] += edge_costs[edge_id]

    # Fixed partitions are reported but do not count towards the objective.
    non_fixed_groups, _fixed_groups = more_itertools.partition(
        lambda g: partitioning.partitions[g].fixed,
        range(len(costs))
    )
    non_fixed_costs = [costs[g] for g in non_fixed_groups]

    total = sum(non_fixed_costs) + compute_imbalance(non_fixed_costs)
    return total, costs
