# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple
from typing_extensions import TypeAlias

from axe.core.utils import AxeException

NodeId: TypeAlias = int
EdgeId: TypeAlias = int


@dataclass(frozen=True)
class Node:
    """
    A computation node.

    Attributes:
    -   inputs: ids of the edges this node consumes
    -   outputs: ids of the edges this node produces
    -   cost: non-negative execution cost

    Node ids are not stored on the node, a node's id is its index in the
    node list of a `Partitioning`.
    """
    inputs: Tuple[EdgeId, ...] = field(default=())
    outputs: Tuple[EdgeId, ...] = field(default=())
    cost: int = 0

    def __post_init__(self):
        # Accept any iterable and freeze it.
        object.__setattr__(self, 'inputs', tuple(self.inputs))
        object.__setattr__(self, 'outputs', tuple(self.outputs))
        if self.cost < 0:
            raise AxeException(f"Node cost cannot be negative: {self.cost}")


class EdgeCosts(Mapping[EdgeId, int]):
    """
    Read-only mapping from edge ids to their communication cost.

    An edge without a recorded cost is free, i.e. `edge_costs[e] == 0`.
    """

    def __init__(self, costs: Mapping[EdgeId, int]) -> None:
        for edge_id, cost in costs.items():
            if cost < 0:
                raise AxeException(
                    f"Cost of edge {edge_id} cannot be negative: {cost}")
        self._costs = MappingProxyType(dict(costs))

    def __getitem__(self, edge_id: EdgeId) -> int:
        return self._costs.get(edge_id, 0)

    def __contains__(self, edge_id) -> bool:
        return edge_id in self._costs

    def __iter__(self):
        return iter(self._costs)

    def __len__(self) -> int:
        return len(self._costs)

    def __repr__(self) -> str:
        return f"EdgeCosts({dict(self._costs)})"


def make_edge_costs(costs: Mapping[EdgeId, int]) -> EdgeCosts:
    if isinstance(costs, EdgeCosts):
        return costs
    return EdgeCosts(costs)


def make_nodes(nodes: Iterable[Node]) -> Tuple[Node, ...]:
    nodes = tuple(nodes)
    for node in nodes:
        if not isinstance(node, Node):
            raise AxeException(f"Expect axe.Node, got {type(node)}")
    return nodes
