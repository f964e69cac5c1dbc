"""
Matrix products and norms.
"""

import math
from typing import Any

from pyndarray.array.base import AbstractNDArray
from pyndarray.array.compare import are_close
from pyndarray.array.dense import as_ndarray, eye
from pyndarray.core.exceptions import DimensionError


def _dot_into(result: AbstractNDArray, A: AbstractNDArray, B: AbstractNDArray) -> None:
    if A.ndim > 1:
        for i in range(A.shape[0] - 1, -1, -1):
            _dot_into(result.at([i]), A.at([i]), B)
    elif B.ndim > 1:
        for i in range(B.shape[1] - 1, -1, -1):
            _dot_into(result.at([i]), A, B.at([None, i]))
    else:
        total = A.get_element((0,)) * B.get_element((0,))
        for i in range(A.shape[0] - 1, 0, -1):
            total += A.get_element((i,)) * B.get_element((i,))
        result.set_element((), total)


def dot(A: Any, B: Any) -> AbstractNDArray:
    """
    Matrix product of two arrays.

    Takes the dot product of the last dimension of A with the first
    dimension of B. This is the dot product for two vectors and the
    matrix product for two matrices; a vector is treated as a row on the
    left and as a column on the right.

    Args:
        A: Left operand (rank >= 1)
        B: Right operand (rank >= 1)

    Returns:
        New array of shape A.shape[:-1] + B.shape[1:]; 0-D for two vectors

    Raises:
        DimensionError: If either operand is 0-D or the contracted
            dimensions differ
    """
    A = as_ndarray(A)
    B = as_ndarray(B)

    if A.ndim == 0 or B.ndim == 0:
        raise DimensionError(
            f"Can not multiply array of shape {A.shape} by array of shape {B.shape}"
        )
    if A.shape[-1] != B.shape[0]:
        raise DimensionError(
            f"Can not multiply array of shape {A.shape} by array of shape {B.shape}"
        )

    result = A.create_result(A.shape[:-1] + B.shape[1:])
    _dot_into(result, A, B)
    return result


def norm(A: Any) -> float:
    """
    L2 norm of an array.

    The square root of the sum of the squares of all of the elements: the
    Euclidean norm for a vector and the Frobenius norm for a matrix.
    Arrays too large to square are rescaled by their largest magnitude
    first.
    """
    A = as_ndarray(A)
    total = 0.0
    for index in A.iter_indexes():
        value = A.get_element(index)
        total += value * value

    if total == math.inf:
        scale = A.abs().max()
        return scale * norm(A.div(scale))

    return math.sqrt(total)


def is_orthogonal(A: Any) -> bool:
    """
    Return True iff A is an orthogonal matrix.

    The rows (and columns) of an orthogonal matrix are orthogonal unit
    vectors, so its transpose is its inverse. Non-square arrays are never
    orthogonal.
    """
    A = as_ndarray(A)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        return False
    return are_close(dot(A, A.transpose()), eye(A.shape[0]))
