# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from .core.graph import Node, EdgeCosts, NodeId, EdgeId
from .core.partitioning import Partition, Partitioning, make_partitioning
from .core.cost import evaluate_cost, compute_imbalance
from .core.optimizer import optimize
from .core.api import partition
from .core.utils import logger, AxeException, MissingEdgeSourceError
