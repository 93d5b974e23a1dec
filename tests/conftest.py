# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
The file name `conftest.py` is pytest standard.

By defining fixtures here the whole chain of depended fixtures are available.
"""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """
    A freshly seeded random source for each test case, so that test cases
    do not depend on their running order.
    """
    return np.random.default_rng(2024)
