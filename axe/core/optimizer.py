# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import time
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from axe.core.graph import NodeId
from axe.core.partitioning import Partitioning
from axe.core.utils import logger


def get_temperature(
    round_id: int, rounds: int, initial_temperature: float
) -> float:
    """
    Linear cooling, reaching 0 at `round_id == rounds` and staying there.
    """
    return max(initial_temperature * (1 - round_id / rounds), 0.0)


def _snapshot(partitioning: Partitioning) -> List[Tuple[int, List[NodeId]]]:
    # Nodes moved during a round must not alter what the round iterates.
    return [
        (group, list(partition.nodes))
        for group, partition in enumerate(partitioning.partitions)
        if not partition.fixed
    ]


def optimize(
    partitioning: Partitioning,
    rounds: int,
    initial_temperature: float,
    *,
    rng: np.random.Generator,
    max_rounds: Optional[int] = None,
    time_limit: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Simulated annealing over single-node moves, in place.

    Each round visits every node of the non-fixed partitions once and tries
    to move it to a random other non-fixed partition. With probability equal
    to the round temperature the move is taken whatever it costs, otherwise
    it is kept only if the objective strictly decreases.

    At least `rounds` rounds are run, after which the search continues as
    long as the previous round kept an improving move.

    Args:
    -   rounds (int):
            the number of cooling rounds, must be positive
    -   initial_temperature (float):
            acceptance probability of any move at round 0
    -   rng (np.random.Generator):
            the only random source of the search
    -   max_rounds (int):
            if provided, the total number of rounds never exceeds it
    -   time_limit (float):
            if provided, seconds after which the improving tail stops,
            the first `rounds` rounds are always run

    Returns:
    -   Dict[str, Any]
            "cost": the objective of the final assignment,
            "rounds": the number of rounds that were run

    Raises:
    -   MissingEdgeSourceError: from the cost evaluation, the partitioning
            is left at the state where the error occurred

    There must be at least two non-fixed partitions.
    """
    assert rounds > 0, "Round count must be positive"

    start_time = time.monotonic()

    cur_cost, _ = partitioning.cost()

    improved = False
    round_id = 0
    while round_id < rounds or improved:
        if max_rounds is not None and round_id >= max_rounds:
            logger.info(f"Stop optimization at max round {max_rounds}")
            break
        if round_id >= rounds and time_limit is not None \
                and time.monotonic() - start_time > time_limit:
            logger.info(
                f"Stop optimization after {time_limit} seconds"
                f" at round {round_id}")
            break

        improved = False

        temperature = get_temperature(round_id, rounds, initial_temperature)
        logger.debug(
            f"round {round_id}: temperature={temperature:f} cost={cur_cost}")

        for group, node_ids in _snapshot(partitioning):
            for node_id in node_ids:
                target = partitioning.pick_other_group(group, rng)

                if rng.random() < temperature:
                    partitioning.move(node_id, group, target)
                    cur_cost, _ = partitioning.cost()
                    continue

                partitioning.move(node_id, group, target)
                new_cost, _ = partitioning.cost()
                if new_cost < cur_cost:
                    improved = True
                    cur_cost = new_cost
                else:
                    partitioning.move(node_id, target, group)

        round_id += 1

    logger.info(f"Optimization completed with cost {cur_cost}"
                f" after {round_id} rounds")

    return {'cost': cur_cost, 'rounds': round_id}
