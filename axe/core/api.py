# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from typing import Mapping, Optional, Sequence

import numpy as np

from axe.core.graph import EdgeId, Node
from axe.core.optimizer import optimize
from axe.core.partitioning import Partitioning, make_partitioning
from axe.core.utils import AxeException, logger


def _validate_partition_args(
    nodes, partition_count, rounds, initial_temperature, seed, rng,
    max_rounds, time_limit
) -> np.random.Generator:
    if len(nodes) == 0:
        raise AxeException("Argument `nodes` cannot be empty")

    if partition_count < 2:
        raise AxeException(
            f"Argument `partition_count` cannot be {partition_count}")

    if rounds < 1:
        raise AxeException(f"Argument `rounds` cannot be {rounds}")

    if initial_temperature < 0:
        raise AxeException(
            f"Argument `initial_temperature` cannot be {initial_temperature}")

    if max_rounds is not None and max_rounds < 1:
        raise AxeException(f"Argument `max_rounds` cannot be {max_rounds}")

    if time_limit is not None and time_limit < 0:
        raise AxeException(f"Argument `time_limit` cannot be {time_limit}")

    if rng is not None:
        if seed is not None:
            raise AxeException(
                "Arguments `seed` and `rng` cannot be both specified")
        return rng

    return np.random.default_rng(seed)


def partition(
    nodes: Sequence[Node],
    edge_costs: Mapping[EdgeId, int],
    partition_count: int,
    rounds: int,
    initial_temperature: float,
    *,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    max_rounds: Optional[int] = None,
    time_limit: Optional[float] = None,
) -> Partitioning:
    """
    Assign nodes to `partition_count` partitions.

    The nodes are first split into contiguous chunks, then the assignment
    is optimized by simulated annealing and finally normalized.

    Args:
    -   nodes (Sequence[axe.Node]):
            the graph nodes, a node's id is its index in this sequence
    -   edge_costs (Mapping[int, int]):
            communication cost of each edge id, missing edges cost 0
    -   partition_count (int):
            the number of partitions, at least 2
    -   rounds (int), initial_temperature (float):
            the cooling schedule, see `axe.optimize`
    -   seed (int):
            if provided, seed of a new `np.random.Generator`
    -   rng (np.random.Generator):
            if provided, the random source to use, cannot be specified
            together with `seed`
    -   max_rounds (int), time_limit (float):
            bounds of the optimization, see `axe.optimize`

    Returns:
    -   axe.Partitioning
            the normalized partitioning

    Raises:
    -   AxeException: invalid arguments
    -   MissingEdgeSourceError: some input edge has no producer
    """
    rng = _validate_partition_args(
        nodes, partition_count, rounds, initial_temperature, seed, rng,
        max_rounds, time_limit
    )

    logger.info(
        f"Partitioning {len(nodes)} nodes into {partition_count} partitions"
        f", rounds={rounds}, initial_temperature={initial_temperature}"
    )

    partitioning = make_partitioning(nodes, edge_costs, partition_count)
    info = optimize(
        partitioning, rounds, initial_temperature,
        rng=rng, max_rounds=max_rounds, time_limit=time_limit
    )
    partitioning.normalize()

    logger.info(
        f"Partitioning completed with cost {info['cost']}"
        f" after {info['rounds']} rounds"
    )
    return partitioning
