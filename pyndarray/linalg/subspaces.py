"""
Quantities derived from the singular value decomposition.

Singular values at or below 0.5 sqrt(m + n + 1) sigma_max eps are treated
as zero; see pp 67-73 in Press WH, Teukolsky SA, Vetterling WT, Flannery
BP. Numerical Recipes 3rd Edition: The Art of Scientific Computing.
Cambridge University Press; 2007.
"""

from __future__ import annotations

import math
import warnings
from typing import Any

from pyndarray.array.base import AbstractNDArray
from pyndarray.core.precision import EPSILON_64
from pyndarray.linalg._common import SVDResult, require_matrix
from pyndarray.linalg.products import dot
from pyndarray.linalg.svd import singular_value_decomposition


def _small_threshold(shape: tuple[int, ...], svd: SVDResult) -> float:
    m, n = shape
    return 0.5 * math.sqrt(m + n + 1) * svd.singular_values[0] * EPSILON_64


def _rank_from_svd(shape: tuple[int, ...], svd: SVDResult) -> int:
    threshold = _small_threshold(shape, svd)
    rank = 0
    for value in svd.singular_values:
        if abs(value) <= threshold:
            break
        rank += 1
    return rank


def pseudoinverse(A: Any) -> AbstractNDArray:
    """
    Moore-Penrose pseudoinverse of a matrix.

    Equal to the inverse when that exists (inverse() is then faster), but
    also defined for singular and rectangular matrices, where it gives the
    least-squares solution of a linear system.

    Args:
        A: m x n matrix

    Returns:
        New n x m matrix
    """
    A = require_matrix(A, "pseudoinverse")
    svd = singular_value_decomposition(A)
    small = _small_threshold(A.shape, svd)

    D_inv = svd.D.transpose().copy()
    for i in range(min(A.shape) - 1, -1, -1):
        value = svd.D.get_element((i, i))
        # values at or below the threshold belong to the nullspace
        D_inv.set_element((i, i), 0.0 if value <= small else 1 / value)

    return dot(svd.V.transpose(), dot(D_inv, svd.U.transpose()))


def rank(A: Any) -> int:
    """Number of linearly independent rows (the dimension of the range)."""
    A = require_matrix(A, "rank")
    return _rank_from_svd(A.shape, singular_value_decomposition(A))


def nullity(A: Any) -> int:
    """Number of rows minus the rank."""
    A = require_matrix(A, "nullity")
    return A.shape[0] - rank(A)


def range_space(A: Any) -> AbstractNDArray | None:
    """
    Orthonormal basis of the range of A.

    The range is the set of all b for which some x satisfies A x = b.

    Returns:
        Read-only matrix whose rows are the basis vectors, or None if the
        range is {0}
    """
    A = require_matrix(A, "range_space")
    svd = singular_value_decomposition(A)
    r = _rank_from_svd(A.shape, svd)
    if r == 0:
        return None
    return svd.U.transpose().at([(0, r)])


def nullspace(A: Any) -> AbstractNDArray | None:
    """
    Orthonormal basis of the nullspace of A.

    The nullspace is the set of all x for which A x = 0.

    Returns:
        Read-only matrix whose rows are the basis vectors, or None if the
        nullspace is {0}
    """
    A = require_matrix(A, "nullspace")
    svd = singular_value_decomposition(A)
    r = _rank_from_svd(A.shape, svd)
    if r == svd.V.shape[0]:
        return None
    return svd.V.at([(r, None)])


def condition_number(A: Any) -> float:
    """
    Ratio of the largest singular value to the smallest.

    Large values mean A is close to singular and likely to behave poorly
    in numerical computations. A singular matrix has condition number
    inf, reported with a RuntimeWarning.
    """
    A = require_matrix(A, "condition_number")
    values = singular_value_decomposition(A).singular_values
    smallest = values[-1]

    if smallest == 0:
        warnings.warn(
            "Matrix is singular; its condition number is infinite",
            RuntimeWarning,
            stacklevel=2,
        )
        return math.inf

    return values[0] / smallest
