"""
Approximate equality for numbers and arrays.
"""

import numbers
from typing import Any

from pyndarray.array.base import iter_indexes
from pyndarray.core.exceptions import ArrayTypeError, DimensionError, ValidationError
from pyndarray.core.protocols import is_ndarray
from pyndarray.core.tolerances import DEFAULT


def _numbers_close(a: Any, b: Any, abstol: float, reltol: float) -> bool:
    if a == b:
        return True
    difference = abs(a - b)
    if difference <= abstol:
        return True
    return difference / max(abs(a), abs(b)) <= reltol


def are_close(
    val1: Any,
    val2: Any,
    abstol: float = DEFAULT.atol,
    reltol: float = DEFAULT.rtol,
) -> bool:
    """
    Test whether two numbers or two arrays are approximately equal.

    Two numbers are close when they are equal, when their difference is
    at most abstol, or when their difference relative to the larger
    magnitude is at most reltol. Arrays are close when every pair of
    corresponding elements is close.

    Args:
        val1: Number or array
        val2: Number or array of the same kind
        abstol: Absolute tolerance (non-negative)
        reltol: Relative tolerance (non-negative)

    Returns:
        True if val1 and val2 are close

    Raises:
        ValidationError: If a tolerance is negative
        DimensionError: If the arrays have different shapes
        ArrayTypeError: If the values are not both numbers or both arrays
    """
    if abstol < 0 or reltol < 0:
        raise ValidationError(
            f"Tolerances must be non-negative, got abstol={abstol}, reltol={reltol}"
        )

    if is_ndarray(val1) and is_ndarray(val2):
        shape1, shape2 = tuple(val1.shape), tuple(val2.shape)
        if shape1 != shape2:
            raise DimensionError(f"Shapes differ: {shape1} != {shape2}")
        return all(
            _numbers_close(val1.get_element(index), val2.get_element(index), abstol, reltol)
            for index in iter_indexes(shape1)
        )

    if isinstance(val1, numbers.Number) and isinstance(val2, numbers.Number):
        return _numbers_close(val1, val2, abstol, reltol)

    raise ArrayTypeError(
        f"Can only compare two numbers or two arrays, got "
        f"{type(val1).__name__} and {type(val2).__name__}"
    )
