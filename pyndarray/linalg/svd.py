"""
Bidiagonalization and singular value decomposition.

Based on algorithms 5.4.2, 8.6.1 and 8.6.2 in Golub GH, Van Loan CF.
Matrix Computations. 3rd ed. The Johns Hopkins University Press; 1996.
"""

from __future__ import annotations

import math
from typing import Any

from pyndarray.array.base import AbstractNDArray
from pyndarray.array.dense import eye
from pyndarray.array.view import read_only_view
from pyndarray.core.exceptions import ConvergenceError
from pyndarray.core.precision import EPSILON_64
from pyndarray.core.tolerances import (
    SVD_MAX_SWEEPS_FACTOR,
    SVD_MIN_SWEEPS,
    SVD_NEGLIGIBLE_FACTOR,
)
from pyndarray.linalg._common import BidiagonalResult, SVDResult, require_matrix
from pyndarray.linalg.products import dot
from pyndarray.linalg.transforms import givens_rotation, householder_transform


def bidiagonalization(A: Any) -> BidiagonalResult:
    """
    Decompose a matrix into U B V with B upper bidiagonal.

    U and V are orthogonal and B is zero everywhere except on the
    diagonal and the superdiagonal. Used by the singular value
    decomposition and rarely needed directly.

    Args:
        A: m x n matrix

    Returns:
        BidiagonalResult with writable U (m x m), B (m x n) and V (n x n)

    Raises:
        ArrayTypeError: If A is not a matrix
    """
    A = require_matrix(A, "bidiagonalization")
    m, n = A.shape

    U = eye(m).copy()
    V = eye(n).copy()
    B = A.copy()

    for i in range(min(m, n)):
        if i < m - 1:
            # cancel the column below the diagonal
            house = householder_transform(B.at([(i, None), i]))
            U.at([None, (i, None)]).assign(dot(U.at([None, (i, None)]), house.P))
            B.at([(i, None), (i, None)]).assign(dot(house.P, B.at([(i, None), (i, None)])))
            B.at([(i + 1, None), i]).assign(0.0)
        if i + 1 < n - 1:
            # cancel the row right of the superdiagonal
            house = householder_transform(B.at([i, (i + 1, None)]))
            V.at([(i + 1, None)]).assign(dot(house.P, V.at([(i + 1, None)])))
            B.at([None, (i + 1, None)]).assign(dot(B.at([None, (i + 1, None)]), house.P))
            B.at([i, (i + 2, None)]).assign(0.0)

    return BidiagonalResult(U=U, B=B, V=V)


def _wilkinson_start(B: AbstractNDArray, p: int, q: int) -> tuple[float, float]:
    """
    First column of the shifted B^t B for the implicit-shift step.

    The shift is the eigenvalue of the trailing 2 x 2 block of B^t B
    closest to its bottom right element.
    """
    d0 = B.get_element((p, p))
    dm = B.get_element((q - 2, q - 2))
    dn = B.get_element((q - 1, q - 1))
    f1 = B.get_element((p, p + 1))
    fm = B.get_element((q - 3, q - 2)) if q > 2 else 0.0
    fn = B.get_element((q - 2, q - 1))

    # rescale so squaring cannot overflow
    scale = max(abs(d0), abs(f1), abs(dm), abs(dn), abs(fm), abs(fn))
    d0, dm, dn, f1, fm, fn = (value / scale for value in (d0, dm, dn, f1, fm, fn))

    tmm = dm * dm + fm * fm
    tmn = dm * fn
    tnn = dn * dn + fn * fn
    trace = tmm + tnn
    # trace^2 - 4 det, written so rounding cannot make it negative
    root = math.sqrt((tmm - tnn) * (tmm - tnn) + 4 * tmn * tmn)
    if trace / 2 > tnn:
        mu = (trace - root) / 2
    else:
        mu = (trace + root) / 2

    return d0 * d0 - mu, d0 * f1


def singular_value_decomposition(A: Any) -> SVDResult:
    """
    Decompose a matrix into U D V.

    U and V are orthogonal and D is diagonal with non-negative entries
    sorted from largest to smallest. The bidiagonal form of A is reduced
    by implicit-shift Givens chasing until every superdiagonal element is
    negligible.

    Args:
        A: m x n matrix

    Returns:
        SVDResult with read-only U (m x m), D (m x n) and V (n x n)

    Raises:
        ArrayTypeError: If A is not a matrix
        ConvergenceError: If the iteration does not converge
    """
    A = require_matrix(A, "singular_value_decomposition")
    m, n = A.shape

    if m < n:
        # decompose the transpose rather than handle wide matrices
        svd_t = singular_value_decomposition(A.transpose())
        return SVDResult(
            U=svd_t.V.transpose(),
            D=svd_t.D.transpose(),
            V=svd_t.U.transpose(),
            singular_values=svd_t.singular_values,
        )

    bidiag = bidiagonalization(A)
    U, B, V = bidiag.U, bidiag.B, bidiag.V
    r = A.create_result([2])
    tiny = SVD_NEGLIGIBLE_FACTOR * EPSILON_64
    max_sweeps = max(SVD_MAX_SWEEPS_FACTOR * n * n, SVD_MIN_SWEEPS)

    sweeps = 0
    while True:
        # zero the negligible superdiagonal elements
        for i in range(n - 1):
            if abs(B.get_element((i, i + 1))) <= tiny * (
                abs(B.get_element((i, i))) + abs(B.get_element((i + 1, i + 1)))
            ):
                B.set_element((i, i + 1), 0.0)

        # B[q:, q:] is diagonal
        q = n
        while q > 1 and B.get_element((q - 2, q - 1)) == 0:
            q -= 1
        if q <= 1:
            break

        # B[p:q, p:q] has no zero superdiagonal elements
        p = q - 1
        while p > 0 and B.get_element((p - 1, p)) != 0:
            p -= 1

        sweeps += 1
        if sweeps > max_sweeps:
            raise ConvergenceError(
                "Singular value decomposition did not converge",
                iterations=sweeps - 1,
                active_block=(p, q),
                reason="superdiagonal elements remain above the negligible threshold",
            )

        # a zero on the diagonal is chased out by a rotation starting there
        k = next((i for i in range(p, q - 1) if B.get_element((i, i)) == 0), None)
        if k is None:
            k = p
            start = _wilkinson_start(B, p, q)
        else:
            start = (0.0, 1.0)
        r.set_element((0,), start[0])
        r.set_element((1,), start[1])

        # chase the bulge down the bidiagonal
        while k < q - 1:
            j = max(0, k - 1)
            G = givens_rotation(r)
            V.at([(k, k + 2)]).assign(dot(G, V.at([(k, k + 2)])))
            block = B.at([(j, k + 2), (k, k + 2)])
            block.assign(dot(block, G.transpose()))
            r.set_element((0,), B.get_element((k, k)))
            r.set_element((1,), B.get_element((k + 1, k)))

            j = min(q, k + 3)
            G = givens_rotation(r)
            U.at([None, (k, k + 2)]).assign(dot(U.at([None, (k, k + 2)]), G.transpose()))
            block = B.at([(k, k + 2), (k, j)])
            block.assign(dot(G, block))
            if k + 2 < q:
                r.set_element((0,), B.get_element((k, k + 1)))
                r.set_element((1,), B.get_element((k, k + 2)))
            k += 1

    # make the diagonal non-negative, compensating in V
    for i in range(n):
        if B.get_element((i, i)) < 0:
            B.set_element((i, i), -B.get_element((i, i)))
            V.at([i]).neg_here()

    order = sorted(range(n), key=lambda i: -B.get_element((i, i)))

    U_sorted = A.create_result(U.shape)
    D = A.create_result(B.shape)
    V_sorted = A.create_result(V.shape)
    for i, source in enumerate(order):
        U_sorted.at([None, i]).assign(U.at([None, source]))
        D.set_element((i, i), B.get_element((source, source)))
        V_sorted.at([i]).assign(V.at([source]))
    for i in range(n, m):
        # columns of U outside the range of A
        U_sorted.at([None, i]).assign(U.at([None, i]))

    return SVDResult(
        U=read_only_view(U_sorted),
        D=read_only_view(D),
        V=read_only_view(V_sorted),
        singular_values=tuple(D.get_element((i, i)) for i in range(n)),
    )
