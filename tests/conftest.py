import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

SEED = 20240917


@pytest.fixture
def rng() -> np.random.Generator:
    """Fresh seeded generator for each test."""
    return np.random.default_rng(SEED)
