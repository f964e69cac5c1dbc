"""
Common types for the linear algebra routines.

Defines the immutable result payloads returned by the decompositions and
the argument coercion shared by every entry point.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pyndarray.array.base import AbstractNDArray
from pyndarray.array.dense import as_ndarray
from pyndarray.core.exceptions import ArrayTypeError


@dataclass(frozen=True)
class LUResult:
    """
    Payload of an LU decomposition, P L U = A.

    Attributes
    ----------
    P : PermutationMatrix
        Read-only row permutation matrix. P.det() gives the parity.
    L : AbstractNDArray
        Read-only unit lower triangular matrix.
    U : AbstractNDArray
        Read-only upper triangular matrix.
    p : tuple of int
        p[k] is the row swapped with row k at elimination step k.
    p_epsilon : int
        -1 if p is composed of an odd number of swaps, otherwise 1.
    """
    P: AbstractNDArray
    L: AbstractNDArray
    U: AbstractNDArray
    p: tuple[int, ...]
    p_epsilon: int


@dataclass(frozen=True)
class SVDResult:
    """
    Payload of a singular value decomposition, U D V = A.

    Attributes
    ----------
    U : AbstractNDArray
        Read-only orthogonal m x m matrix.
    D : AbstractNDArray
        Read-only m x n diagonal matrix, diagonal descending and non-negative.
    V : AbstractNDArray
        Read-only orthogonal n x n matrix.
    singular_values : tuple of float
        The diagonal of D.
    """
    U: AbstractNDArray
    D: AbstractNDArray
    V: AbstractNDArray
    singular_values: tuple[float, ...]


@dataclass(frozen=True)
class HouseholderResult:
    """
    Householder reflection of a vector x.

    Attributes
    ----------
    v : AbstractNDArray
        Householder vector, with v[0] == 1.
    beta : float
        Scale such that P = I - beta v v^t.
    P : AbstractNDArray
        Orthogonal reflection; P x is zero except for its first element,
        which is non-negative.
    """
    v: AbstractNDArray
    beta: float
    P: AbstractNDArray


@dataclass(frozen=True)
class BidiagonalResult:
    """
    Payload of a bidiagonalization, U B V = A.

    Attributes
    ----------
    U : AbstractNDArray
        Orthogonal m x m matrix.
    B : AbstractNDArray
        Upper bidiagonal m x n matrix.
    V : AbstractNDArray
        Orthogonal n x n matrix.
    """
    U: AbstractNDArray
    B: AbstractNDArray
    V: AbstractNDArray


def require_matrix(A: Any, operation: str) -> AbstractNDArray:
    """
    Coerce A to an array and verify that it is a matrix.

    Args:
        A: Array or array-like
        operation: Name used in the error message

    Returns:
        A as an AbstractNDArray

    Raises:
        ArrayTypeError: If A cannot be converted or is not 2-dimensional
    """
    A = as_ndarray(A)
    if A.ndim != 2:
        raise ArrayTypeError(
            f"{operation} requires a matrix (2-dimensional array), got shape {A.shape}"
        )
    return A


def require_square(A: Any, operation: str) -> AbstractNDArray:
    """Coerce A to an array and verify that it is a square matrix."""
    A = require_matrix(A, operation)
    if A.shape[0] != A.shape[1]:
        raise ArrayTypeError(
            f"{operation} requires a square matrix, got shape {A.shape}"
        )
    return A
