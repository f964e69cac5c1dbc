"""
LU decomposition and the routines built on it.

Uses Crout's algorithm with scaled partial pivoting; see pp 48-54 in
Press WH, Teukolsky SA, Vetterling WT, Flannery BP. Numerical Recipes
3rd Edition: The Art of Scientific Computing. Cambridge University
Press; 2007.
"""

from __future__ import annotations

from typing import Any

from pyndarray.array.base import AbstractNDArray
from pyndarray.array.dense import as_ndarray, eye
from pyndarray.array.view import ArrayView, read_only_view
from pyndarray.core.exceptions import (
    ArrayTypeError,
    DimensionError,
    SingularMatrixError,
)
from pyndarray.linalg._common import LUResult, require_matrix, require_square
from pyndarray.linalg.products import dot
from pyndarray.linalg.subspaces import pseudoinverse


class PermutationMatrix(ArrayView):
    """A read-only permutation matrix that knows its own determinant."""

    def __init__(self, matrix: AbstractNDArray, parity: int):
        base, map_to, stride, offsets = matrix._view_transform()
        super().__init__(base, matrix.shape, map_to, stride, offsets)
        self.parity = parity

    def det(self) -> float:
        """Determinant of the permutation: +1 or -1."""
        return float(self.parity)


def lu_decomposition(A: Any) -> LUResult:
    """
    Decompose a square matrix into P L U.

    P is a row permutation matrix, L is unit lower triangular and U is
    upper triangular, with P L U = A.

    Args:
        A: Square matrix

    Returns:
        LUResult with read-only P, L and U plus the pivot rows and parity

    Raises:
        ArrayTypeError: If A is not a square matrix
        SingularMatrixError: If a row of A is zero or an exactly zero pivot
            is encountered
    """
    A = require_square(A, "lu_decomposition")
    N = A.shape[0]
    scratch = A.copy()

    scaling = []
    for i in range(N):
        largest = A.at([i]).abs().max()
        if largest == 0:
            raise SingularMatrixError(
                f"Row {i} is zero; the matrix is singular "
                "(consider using singular value decomposition)",
                pivot_index=i,
            )
        scaling.append(1 / largest)

    p = []
    p_epsilon = 1

    for k in range(N):
        # find the largest scaled pivot
        pivot_row = k
        pivot_val = abs(scaling[k] * scratch.get_element((k, k)))
        for i in range(k + 1, N):
            test_val = abs(scaling[i] * scratch.get_element((i, k)))
            if test_val > pivot_val:
                pivot_row, pivot_val = i, test_val

        if pivot_row != k:
            scratch.at([k]).swap(scratch.at([pivot_row]))
            p_epsilon = -p_epsilon
            # only the scaling of rows below k is used again
            scaling[pivot_row] = scaling[k]
        p.append(pivot_row)

        if pivot_val == 0:
            raise SingularMatrixError(
                "Singular or near-singular matrix encountered; "
                "consider using singular value decomposition",
                pivot_index=k,
            )

        pivot_scaling = 1 / scratch.get_element((k, k))
        for i in range(k + 1, N):
            multiplier = scratch.get_element((i, k)) * pivot_scaling
            scratch.set_element((i, k), multiplier)
            for j in range(k + 1, N):
                scratch.set_element(
                    (i, j),
                    scratch.get_element((i, j)) - scratch.get_element((k, j)) * multiplier,
                )

    P = eye(N).copy()
    for i in range(N - 1, -1, -1):
        if p[i] != i:
            P.at([i]).swap(P.at([p[i]]))

    L = A.create_result(A.shape)
    L.walk_indexes(lambda index: L.set_element(
        index,
        0.0 if index[0] < index[1]
        else 1.0 if index[0] == index[1]
        else scratch.get_element(index),
    ))

    U = A.create_result(A.shape)
    U.walk_indexes(lambda index: U.set_element(
        index, 0.0 if index[0] > index[1] else scratch.get_element(index)
    ))

    return LUResult(
        P=PermutationMatrix(P, p_epsilon),
        L=read_only_view(L),
        U=read_only_view(U),
        p=tuple(p),
        p_epsilon=p_epsilon,
    )


def _lu_solve(lu: LUResult, b: AbstractNDArray) -> AbstractNDArray:
    N = b.shape[0]
    x = b.create_result(b.shape)

    if b.ndim > 1:
        # solve for each column of b separately
        for index in b.at([0]).iter_indexes():
            column = _lu_solve(lu, b.at([None, *index]))
            for i in range(N):
                x.set_element((i, *index), column.get_element((i,)))
        return x

    # swap the rows of b to match L and U
    b = b.copy()
    for i in range(N):
        if lu.p[i] != i:
            held = b.get_element((i,))
            b.set_element((i,), b.get_element((lu.p[i],)))
            b.set_element((lu.p[i],), held)

    # forward substitution for L y = b
    y = b.create_result(b.shape)
    for i in range(N):
        total = 0.0
        for j in range(i):
            total += lu.L.get_element((i, j)) * y.get_element((j,))
        y.set_element((i,), (b.get_element((i,)) - total) / lu.L.get_element((i, i)))

    # backward substitution for U x = y
    for i in range(N - 1, -1, -1):
        total = 0.0
        for j in range(i + 1, N):
            total += lu.U.get_element((i, j)) * x.get_element((j,))
        x.set_element((i,), (y.get_element((i,)) - total) / lu.U.get_element((i, i)))

    return x


def solve_linear_system(
    A_or_lu: Any,
    b: Any,
    *,
    return_closest: bool = False,
) -> AbstractNDArray:
    """
    Solve a linear system of the form A x = b.

    By default the exact solution is found by LU decomposition, which
    fails for singular or non-square A. With return_closest=True the
    solution minimizing ||A x - b|| is found through the pseudoinverse
    instead, which works for singular and rectangular matrices.

    Args:
        A_or_lu: Matrix A, or the LUResult of a previous decomposition
        b: Right hand side vector, or an array whose columns are solved
            independently
        return_closest: Find the least-squares solution

    Returns:
        New array x with the shape of b

    Raises:
        ArrayTypeError: If A is not a matrix, b is not an array of rank
            >= 1, or A is not square (without return_closest)
        DimensionError: If A and b have different numbers of rows
        SingularMatrixError: If A is singular (without return_closest)
    """
    if isinstance(A_or_lu, LUResult):
        lu = A_or_lu
        A = None
        rows = lu.L.shape[0]
    else:
        lu = None
        A = require_matrix(A_or_lu, "solve_linear_system")
        rows = A.shape[0]

    b = as_ndarray(b)
    if b.ndim == 0:
        raise ArrayTypeError("b must be a vector or matrix, not a 0-D array")

    if rows != b.shape[0]:
        raise DimensionError(
            f"The number of rows of A ({rows}) does not match "
            f"the number of rows of b ({b.shape[0]})"
        )

    if return_closest:
        if A is None:
            A = dot(lu.P, dot(lu.L, lu.U))
        return dot(pseudoinverse(A), b)

    if lu is None:
        if A.shape[0] > A.shape[1]:
            raise ArrayTypeError(
                "The system is overdetermined (the matrix has more rows than "
                "columns); consider passing return_closest=True"
            )
        if A.shape[0] < A.shape[1]:
            raise ArrayTypeError(
                "The system is underdetermined (the matrix has fewer rows than "
                "columns); consider passing return_closest=True"
            )
        try:
            lu = lu_decomposition(A)
        except SingularMatrixError as err:
            raise SingularMatrixError(
                "Singular matrix encountered; consider passing return_closest=True",
                matrix_name="A",
                pivot_index=err.pivot_index,
            ) from err

    return _lu_solve(lu, b)


def det(A: Any) -> float:
    """
    Determinant of a square matrix.

    The determinant of a product is the product of the determinants, and
    that of a triangular matrix is the product of its diagonal, so this
    multiplies P.det() by the diagonals of L and U. A matrix found to be
    exactly singular has determinant 0.0.
    """
    A = require_square(A, "det")
    try:
        lu = lu_decomposition(A)
    except SingularMatrixError:
        return 0.0

    result = lu.P.det()
    for i in range(A.shape[0]):
        result *= lu.L.get_element((i, i))
        result *= lu.U.get_element((i, i))
    return result


def inverse(A: Any) -> AbstractNDArray:
    """
    Inverse of a square non-singular matrix.

    For singular or non-square matrices use pseudoinverse().

    Raises:
        ArrayTypeError: If A is not a square matrix
        SingularMatrixError: If A is singular
    """
    A = require_matrix(A, "inverse")
    if A.shape[0] != A.shape[1]:
        raise ArrayTypeError(
            "Only square matrices have an inverse; consider using pseudoinverse instead"
        )

    try:
        return solve_linear_system(A, eye(A.shape[0]))
    except SingularMatrixError as err:
        raise SingularMatrixError(
            "Singular matrix encountered; consider using pseudoinverse",
            matrix_name="A",
            pivot_index=err.pivot_index,
        ) from err
