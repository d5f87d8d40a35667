"""
Pytest configuration and shared fixtures for featkit tests.
"""

from dataclasses import dataclass

import numpy as np
import pytest

import featkit


# =============================================================================
# Dataset Construction
# =============================================================================

@dataclass
class Dataset:
    """Binary classification dataset with a masked copy for imputation."""
    x: np.ndarray          # complete matrix (n x p)
    y: np.ndarray          # class labels in {0, 1}
    x_missing: np.ndarray  # x with ~10% of the cells set to NaN
    informative: int       # number of leading columns that separate the classes


def make_default_dataset(seed: int = 42, n: int = 120, p: int = 8,
                         informative: int = 3, missing_rate: float = 0.1) -> Dataset:
    """Build the shared test dataset.

    The first ``informative`` columns are shifted by class so the S2N score
    of those columns dominates; the rest are noise. The masked copy never
    loses a whole row or column.
    """
    rng = np.random.default_rng(seed)
    y = np.repeat([0, 1], n // 2)
    x = rng.normal(size=(n, p))
    x[y == 1, :informative] += 3.0

    mask = rng.random((n, p)) < missing_rate
    # Keep column 0 complete so no row can become fully missing.
    mask[:, 0] = False
    x_missing = x.copy()
    x_missing[mask] = np.nan

    return Dataset(x=x, y=y, x_missing=x_missing, informative=informative)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def default_dataset():
    """Dataset built once per test session, read-only for tests."""
    data = make_default_dataset()
    data.x.flags.writeable = False
    data.y.flags.writeable = False
    data.x_missing.flags.writeable = False
    return data


@pytest.fixture(autouse=True)
def reset_config():
    """Restore the global configuration after every test."""
    yield
    featkit.config.reset()


@pytest.fixture
def small_missing_matrix():
    """Three-row matrix with a single missing cell.

    Matrix:
    [[ 1,   2],
     [ 2, NaN],
     [10,  20]]
    """
    return np.array([
        [1.0, 2.0],
        [2.0, np.nan],
        [10.0, 20.0],
    ])
