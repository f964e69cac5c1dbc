"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pyndarray import as_ndarray


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def square_matrix():
    """Small non-singular matrix with a known determinant of 102."""
    return as_ndarray([[1, 3, 2], [5, 11, 13], [8, 2, 7]])


@pytest.fixture
def random_square(rng):
    """Random well-conditioned 5 x 5 matrix."""
    values = rng.standard_normal((5, 5)) + 5 * np.eye(5)
    return values, as_ndarray(values)


@pytest.fixture
def tall_matrix(rng):
    """Random 5 x 3 matrix."""
    values = rng.standard_normal((5, 3))
    return values, as_ndarray(values)


@pytest.fixture
def rank_deficient_matrix():
    """3 x 3 matrix of rank 2 (third row is the sum of the first two)."""
    return as_ndarray([[1, 2, 3], [4, 5, 6], [5, 7, 9]])


@pytest.fixture
def tensor_4d():
    """2 x 2 x 2 x 1 array of distinct non-integral values."""
    return as_ndarray([[[[1.5], [3.25]], [[5.125], [6]]],
                       [[[7.5], [8.625]], [[9.25], [10.125]]]])
