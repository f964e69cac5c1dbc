"""
Elementary orthogonal transforms.

Householder reflections and Givens rotations, the building blocks of
bidiagonalization and the singular value decomposition.
"""

import math
from typing import Any

from pyndarray.array.base import AbstractNDArray
from pyndarray.array.dense import as_ndarray, eye
from pyndarray.core.exceptions import ArrayTypeError
from pyndarray.core.tolerances import GIVENS_RATIO_LIMIT, HOUSEHOLDER_RESCALE_THRESHOLD
from pyndarray.core.validation import Dummy
from pyndarray.linalg._common import HouseholderResult
from pyndarray.linalg.products import dot, norm


def householder_transform(x: Any) -> HouseholderResult:
    """
    Compute the Householder reflection of a vector.

    The reflection across a hyperplane through the origin that zeros all
    but the first element of x. It is returned both as the orthogonal
    matrix P and as the normal vector v, with v[0] = 1,
    P = I - beta v v^t, and P x zero everywhere except its first
    element, which is non-negative.

    Based on algorithm 5.1.1 in Golub GH, Van Loan CF. Matrix
    Computations. 3rd ed. The Johns Hopkins University Press; 1996.

    Args:
        x: Vector (1-dimensional array)

    Returns:
        HouseholderResult(v, beta, P)

    Raises:
        ArrayTypeError: If x is not a vector
    """
    x = as_ndarray(x)
    if x.ndim != 1:
        raise ArrayTypeError(f"householder_transform requires a vector, got shape {x.shape}")

    v = x.copy()
    x0 = x.get_element((0,))
    norm2 = dot(v, v).val()

    if norm2 > HOUSEHOLDER_RESCALE_THRESHOLD:
        # normalize first so squaring cannot overflow
        return householder_transform(x.div(norm(x)))

    # squared magnitude of everything but the first element
    off_norm2 = norm2 - x0 * x0

    if off_norm2 == 0:
        # x is already of the form [x0, 0, ..., 0]; beta = 2 flips a negative x0
        beta = 2.0 if x0 < 0 else 0.0
        v.set_element((0,), 1.0)
    else:
        length = math.sqrt(norm2)
        if x0 <= 0:
            v0 = x0 - length
        else:
            v0 = -off_norm2 / (x0 + length)
        beta = 2 * v0 * v0 / (off_norm2 + v0 * v0)
        v.set_element((0,), v0)
        v.div_here(v0)

    outer = dot(v.at([None, Dummy(1)]), v.at([Dummy(1), None]))
    P = eye(x.shape[0]).sub(outer.mul(beta))

    return HouseholderResult(v=v, beta=beta, P=P)


def givens_rotation(v: Any) -> AbstractNDArray:
    """
    Compute the Givens rotation of a length-2 vector.

    Returns the rotation G = [[c, s], [-s, c]] with G v = [r, 0]. Extreme
    ratios between the two elements are treated as exact 0, 180 or
    +-90 degree rotations.

    Based on algorithm 1 in Anderson E. Discontinuous Plane Rotations and
    the Symmetric Eigenvalue Problem. LAPACK Working Note 150; 2000.

    Raises:
        ArrayTypeError: If v is not a vector of length 2
    """
    v = as_ndarray(v)
    if v.ndim != 1 or v.shape[0] != 2:
        raise ArrayTypeError("Only vectors of length 2 are supported")

    f = v.get_element((0,))
    g = v.get_element((1,))

    if g == 0 or abs(f / g) > GIVENS_RATIO_LIMIT:
        # rotate 0 or 180 degrees
        c = 1.0 if f >= 0 else -1.0
        s = 0.0
    elif f == 0 or abs(f / g) < 1 / GIVENS_RATIO_LIMIT:
        # rotate +-90 degrees
        c = 0.0
        s = 1.0 if g >= 0 else -1.0
    elif abs(f) > abs(g):
        t = f / g
        u = math.copysign(math.sqrt(1 + t * t), g)
        s = 1 / u
        c = s * t
    else:
        t = f / g
        u = math.copysign(math.sqrt(1 + 1 / (t * t)), f)
        c = 1 / u
        s = c / t

    result = v.create_result([2, 2])
    result.set_element((0, 0), c)
    result.set_element((0, 1), s)
    result.set_element((1, 0), -s)
    result.set_element((1, 1), c)
    return result
