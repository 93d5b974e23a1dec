# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import os
import logging
from typing import Iterable, Iterator, MutableSet, Optional
from typing_extensions import OrderedDict, TypeVar

logger: logging.Logger = logging.getLogger("axe")

# DEBUG, INFO, WARNING, ERROR, CRITICAL
# NOTE environ variable AXE_LOG_LEVEL is read once, at import time.
logger.setLevel(os.environ.get("AXE_LOG_LEVEL", logging.INFO))
handler = logging.StreamHandler()  # FileHandler, StreamHandler

formatter = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

handler.setFormatter(formatter)
logger.addHandler(handler)


class AxeException(Exception):
    pass


class MissingEdgeSourceError(AxeException):
    """
    An input edge of some node is neither the output of any node nor
    a declared external input of any partition.
    """

    def __init__(self, edge_id: int, node_id: int) -> None:
        super().__init__(
            f"failed to find source for input {edge_id} of node {node_id}")
        self.edge_id = edge_id
        self.node_id = node_id


_T = TypeVar("_T")


class OrderedSet(MutableSet[_T]):
    # For interfaces of MutableSet see
    # https://docs.python.org/3/library/collections.abc.html
    #
    # Iteration follows insertion order, so that a seeded search visits
    # nodes in a reproducible order.

    def __init__(self, inits: Optional[Iterable[_T]] = None) -> None:
        self._odict: OrderedDict[_T, tuple] = \
            OrderedDict.fromkeys(inits, ()) \
            if inits is not None else OrderedDict()

    def __contains__(self, x: _T) -> bool:  # type: ignore
        return x in self._odict

    def __iter__(self) -> Iterator[_T]:
        return iter(self._odict)

    def __len__(self) -> int:
        return len(self._odict)

    def __repr__(self) -> str:
        return f"OrderedSet({list(self._odict)})"

    def add(self, value: _T) -> None:
        self._odict[value] = ()

    def discard(self, value: _T) -> None:
        if value in self._odict.keys():
            del self._odict[value]
