"""
Tests for dense storage, as_ndarray() and eye().
"""

import numpy as np
import pytest

from pyndarray import AbstractNDArray, DenseNDArray, as_ndarray, eye
from pyndarray.core.exceptions import (
    ArrayTypeError,
    DimensionError,
    ReadOnlyArrayError,
)


class TestDenseNDArray:
    """DenseNDArray is a zero-initialized writable row-major array."""

    def test_starts_at_zero(self):
        A = DenseNDArray([2, 3])
        assert A.shape == (2, 3)
        assert A.to_list() == [[0, 0, 0], [0, 0, 0]]

    def test_set_and_get(self):
        A = DenseNDArray([2, 3])
        assert A.set_element((1, 2), 7.5) is A
        assert A.get_element((1, 2)) == 7.5
        assert A.get_element((0, 2)) == 0

    def test_scalar_array(self):
        A = DenseNDArray([])
        A.set_element((), 4)
        assert A.ndim == 0
        assert A.val() == 4

    def test_rejects_bad_shape(self):
        with pytest.raises(DimensionError):
            DenseNDArray([2, 0])

    def test_is_writable(self):
        assert not DenseNDArray([1]).is_read_only()

    def test_create_result_is_dense(self):
        A = as_ndarray([10.125, 3])
        B = A.create_result([3, 5])
        assert isinstance(B, DenseNDArray)
        assert B.shape == (3, 5)

    def test_to_numpy_is_a_copy(self):
        A = as_ndarray([[1, 2], [3, 4]])
        values = A.to_numpy()
        values[0, 0] = 9
        assert A.val([0, 0]) == 1
        np.testing.assert_array_equal(values, [[9, 2], [3, 4]])

    def test_from_numpy(self):
        values = np.arange(6, dtype=np.float64).reshape(2, 3)
        A = DenseNDArray.from_numpy(values)
        assert A.val([1, 0]) == 3
        values[1, 0] = -1
        assert A.val([1, 0]) == 3


class TestAsNDArray:
    """as_ndarray converts nested sequences and rejects non-numeric data."""

    def test_nested_list(self):
        A = as_ndarray([[1, 5], [3, 4]])
        assert isinstance(A, AbstractNDArray)
        assert A.shape == (2, 2)
        assert A.to_list() == [[1, 5], [3, 4]]

    def test_ints_promoted_to_float(self):
        A = as_ndarray([1, 2, 3])
        assert A.dtype == np.float64
        assert A.reciprocal().to_list() == [1, 0.5, 1 / 3]

    def test_scalar(self):
        A = as_ndarray(2.5)
        assert A.shape == ()
        assert A.val() == 2.5

    def test_array_passthrough(self):
        A = as_ndarray([1, 2])
        assert as_ndarray(A) is A

    def test_numpy_input(self):
        A = as_ndarray(np.eye(3))
        assert A.shape == (3, 3)
        assert A.val([1, 1]) == 1

    def test_protocol_object_copied(self):
        class Ramp:
            shape = (3,)

            def get_element(self, index):
                return float(index[0])

        A = as_ndarray(Ramp())
        assert A.to_list() == [0, 1, 2]
        assert not A.is_read_only()

    def test_rejects_ragged(self):
        with pytest.raises(ArrayTypeError):
            as_ndarray([[1, 2], [3]])

    def test_rejects_strings(self):
        with pytest.raises(ArrayTypeError, match="non-numeric"):
            as_ndarray(["a", "b"])

    def test_rejects_booleans(self):
        with pytest.raises(ArrayTypeError):
            as_ndarray([True, False])

    def test_rejects_empty(self):
        with pytest.raises(ArrayTypeError, match="empty"):
            as_ndarray([])


class TestEye:
    """eye(N) is a read-only identity matrix."""

    def test_values(self):
        assert eye(3).to_list() == [[1, 0, 0], [0, 1, 0], [0, 0, 1]]

    def test_read_only(self):
        I = eye(2)
        assert I.is_read_only()
        with pytest.raises(ReadOnlyArrayError):
            I.set_element((0, 1), 5)

    def test_copy_is_writable(self):
        I = eye(2).copy()
        I.set_element((0, 1), 5)
        assert I.to_list() == [[1, 5], [0, 1]]

    def test_views_are_read_only(self):
        assert eye(3).at([1]).is_read_only()
        assert eye(3).transpose().is_read_only()
