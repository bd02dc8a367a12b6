import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from sirsim import SIRParams, SIRState


@pytest.fixture
def daily_grid():
    return np.arange(0, 366, dtype=float)


@pytest.fixture
def reference_state():
    return SIRState(S=0.99, I=0.01, R=0.0)


@pytest.fixture
def reference_params():
    # 14 day infectious period, R0 = 2
    gamma = 1 / 14
    return SIRParams(beta=2 * gamma, gamma=gamma)
