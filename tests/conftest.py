"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def classic_system():
    """3x3 textbook system with solution x = (2, 3, -1)."""
    augmented = np.array([
        [2.0, 1.0, -1.0, 8.0],
        [-3.0, -1.0, 2.0, -11.0],
        [-2.0, 1.0, 2.0, -3.0],
    ])
    return augmented, np.array([2.0, 3.0, -1.0])


@pytest.fixture
def redundant_system():
    """Second equation is twice the first: singular but consistent."""
    return np.array([
        [1.0, 1.0, 2.0],
        [2.0, 2.0, 4.0],
    ])


@pytest.fixture
def contradictory_system():
    """x + y = 2 and x + y = 3: no solution."""
    return np.array([
        [1.0, 1.0, 2.0],
        [1.0, 1.0, 3.0],
    ])


def make_system(rng, n):
    """Random diagonally dominant (well-conditioned) augmented matrix and its exact RHS source."""
    A = rng.standard_normal((n, n)) + n * np.eye(n)
    x_true = rng.standard_normal(n)
    b = A @ x_true
    return np.column_stack([A, b]), x_true


@pytest.fixture
def random_system(rng):
    """Factory fixture: random_system(n) -> (augmented, x_true)."""
    def _make(n):
        return make_system(rng, n)
    return _make
