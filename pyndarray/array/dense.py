"""
Dense storage for n-dimensional arrays.

DenseNDArray keeps its elements in a flat numpy buffer in row-major
order. It is the array type returned by create_result() and therefore by
every operation that computes a new array.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyndarray.array.base import AbstractNDArray
from pyndarray.core.exceptions import ArrayTypeError
from pyndarray.core.protocols import is_ndarray
from pyndarray.core.validation import check_shape


class DenseNDArray(AbstractNDArray):
    """
    A writable array backed by a flat numpy buffer.

    Elements start at zero. Indexes passed to get_element() and
    set_element() are trusted; use val() or [] for checked access.
    """

    def __init__(self, shape: Sequence[int], dtype: Any = np.float64):
        self._shape = check_shape(shape)
        self._data = np.zeros(int(np.prod(self._shape, dtype=np.int64)), dtype=dtype)

        strides = []
        step = 1
        for length in reversed(self._shape):
            strides.append(step)
            step *= length
        self._strides = tuple(reversed(strides))

    @property
    def shape(self) -> tuple[int, ...]:
        return self._shape

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def _offset(self, index: tuple[int, ...]) -> int:
        return sum(i * s for i, s in zip(index, self._strides))

    def get_element(self, index: tuple[int, ...]) -> Any:
        return self._data[self._offset(index)].item()

    def set_element(self, index: tuple[int, ...], value: Any) -> DenseNDArray:
        self._data[self._offset(index)] = value
        return self

    def create_result(self, shape: Sequence[int]) -> DenseNDArray:
        return DenseNDArray(shape, dtype=np.result_type(self._data.dtype, np.float64))

    def to_numpy(self) -> NDArray[Any]:
        return self._data.reshape(self._shape).copy()

    @classmethod
    def from_numpy(cls, values: NDArray[Any]) -> DenseNDArray:
        """Create an array holding a copy of a numpy array's elements."""
        result = cls(values.shape, dtype=values.dtype)
        result._data[:] = values.ravel()
        return result


class IdentityMatrix(AbstractNDArray):
    """A read-only N x N identity matrix computed on demand."""

    def __init__(self, N: int):
        self._shape = check_shape([N, N])

    @property
    def shape(self) -> tuple[int, ...]:
        return self._shape

    def get_element(self, index: tuple[int, ...]) -> float:
        return 1.0 if index[0] == index[1] else 0.0


def eye(N: int) -> IdentityMatrix:
    """
    Get an N x N identity matrix.

    The matrix is read-only; call copy() for a writable one.
    """
    return IdentityMatrix(N)


def as_ndarray(values: ArrayLike | AbstractNDArray) -> AbstractNDArray:
    """
    Validate and convert input to an n-dimensional array.

    Arrays deriving from AbstractNDArray are returned as they are. Other
    objects satisfying the SupportsNDArray protocol are copied into dense
    storage. Anything else goes through numpy, so nested sequences must
    be rectangular and numeric.

    Args:
        values: Array, nested sequence, scalar or numpy array

    Returns:
        An AbstractNDArray (a new DenseNDArray unless values already was one)

    Raises:
        ArrayTypeError: If values cannot be converted to a numeric array
    """
    if isinstance(values, AbstractNDArray):
        return values

    if is_ndarray(values):
        result = DenseNDArray(values.shape)
        return result.walk_indexes(
            lambda index: result.set_element(index, values.get_element(index))
        )

    try:
        converted = np.asarray(values)
    except (ValueError, TypeError) as e:
        raise ArrayTypeError(f"cannot convert to array: {e}") from e

    if converted.dtype == object:
        raise ArrayTypeError(
            "converted to object dtype, indicating ragged nesting or non-numeric data"
        )

    if converted.dtype == np.bool_ or not np.issubdtype(converted.dtype, np.number):
        raise ArrayTypeError(f"non-numeric dtype {converted.dtype}, expected numeric data")

    if converted.size == 0:
        raise ArrayTypeError("cannot create an array with an empty dimension")

    # Ensure floating point so results of division stay exact
    if not np.issubdtype(converted.dtype, np.inexact):
        converted = converted.astype(np.float64)

    return DenseNDArray.from_numpy(converted)
