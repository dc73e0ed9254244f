"""
Shared pytest fixtures for stretchwalk tests.
"""

import numpy as np
import pytest


@pytest.fixture
def random_seed():
    """Fixed random seed for reproducibility."""
    return 42


@pytest.fixture
def rng(random_seed):
    """NumPy random generator with fixed seed."""
    return np.random.default_rng(random_seed)


def standard_normal_log_density(x):
    return -0.5 * float(np.dot(x, x))


@pytest.fixture
def gaussian():
    """Unnormalized standard normal log-density in any dimension."""
    return standard_normal_log_density
