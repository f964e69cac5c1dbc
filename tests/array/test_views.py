"""
Tests for views created by at(), transpose() and read_only_view().

Validates:
    - shape of views for integer, None, range and dummy entries
    - aliasing: writes through a view reach the base and vice versa
    - composition of views over views
    - read-only propagation
    - index checking on view access
"""

import pytest

from pyndarray import Dummy, as_ndarray, read_only_view
from pyndarray.array.view import ArrayView, WritableArrayView
from pyndarray.core.exceptions import (
    ArrayTypeError,
    IndexRangeError,
    ReadOnlyArrayError,
)


@pytest.fixture
def M():
    return as_ndarray([[1.5, 3.25], [5.125, 6.125], [7.5, 8.625]])


class TestAtShapes:
    """Each entry kind contributes (or removes) one dimension."""

    def test_integer_fixes_dimension(self, tensor_4d):
        B = tensor_4d.at([1])
        assert B.shape == (2, 2, 1)
        assert B.to_list() == [[[7.5], [8.625]], [[9.25], [10.125]]]

    def test_none_keeps_dimension(self, tensor_4d):
        B = tensor_4d.at([None, None, 0, 0])
        assert B.shape == (2, 2)
        assert B.to_list() == [[1.5, 5.125], [7.5, 9.25]]

    def test_all_integers_give_scalar(self, tensor_4d):
        B = tensor_4d.at([1, 1, 0, 0])
        assert B.shape == ()
        assert B.val() == 9.25

    def test_range(self, M):
        B = M.at([(1, 3)])
        assert B.shape == (2, 2)
        assert B.to_list() == [[5.125, 6.125], [7.5, 8.625]]

    def test_open_and_negative_ranges(self, M):
        assert M.at([(1, None), 0]).to_list() == [5.125, 7.5]
        assert M.at([(-2,), 1]).to_list() == [6.125, 8.625]
        assert M.at([slice(None, 2), 1]).to_list() == [3.25, 6.125]

    def test_trailing_dummy(self):
        v = as_ndarray([1, 2, 3])
        B = v.at([None, Dummy(2)])
        assert B.shape == (3, 2)
        assert B.to_list() == [[1, 1], [2, 2], [3, 3]]

    def test_leading_digit_string_dummy(self):
        v = as_ndarray([1, 2, 3])
        B = v.at(["2", None])
        assert B.shape == (2, 3)
        assert B.to_list() == [[1, 2, 3], [1, 2, 3]]

    def test_negative_integer(self, M):
        assert M.at([-1]).to_list() == [7.5, 8.625]

    def test_invalid_indexes(self, M):
        with pytest.raises(IndexRangeError):
            M.at([3])
        with pytest.raises(IndexRangeError):
            M.at([0, 0, 0])
        with pytest.raises(ArrayTypeError):
            M.at(0)


class TestAliasing:
    """Views share storage with their base."""

    def test_write_through_column_view(self, M):
        B = M.at([None, 1])
        assert B.set_element((1,), 2) is B
        assert B.to_list() == [3.25, 2, 8.625]
        assert M.to_list() == [[1.5, 3.25], [5.125, 2], [7.5, 8.625]]

    def test_base_write_visible_in_view(self, M):
        B = M.at([(1, 3), 0])
        M.set_element((2, 0), -1)
        assert B.to_list() == [5.125, -1]

    def test_view_does_not_track_index_list(self, M):
        indexes = [None, 1]
        B = M.at(indexes)
        indexes[1] = 0
        assert B.to_list() == [3.25, 6.125, 8.625]

    def test_dummy_dimension_aliases_one_element(self):
        v = as_ndarray([1, 2])
        B = v.at([None, Dummy(3)])
        B.set_element((0, 2), 9)
        assert v.to_list() == [9, 2]
        assert B.to_list() == [[9, 9, 9], [2, 2, 2]]

    def test_assign_block(self):
        A = as_ndarray([[0, 0, 0], [0, 0, 0], [0, 0, 0]])
        A.at([(1, None), (1, None)]).assign(as_ndarray([[1, 2], [3, 4]]))
        assert A.to_list() == [[0, 0, 0], [0, 1, 2], [0, 3, 4]]


class TestComposition:
    """Views of views resolve against the root array."""

    def test_view_of_view(self, tensor_4d):
        B = tensor_4d.at([1, None, None, 0])
        C = B.at([None, 1])
        assert C.to_list() == [8.625, 10.125]
        assert C.base is tensor_4d

    def test_range_of_range(self):
        A = as_ndarray([[1, 2, 3, 4], [5, 6, 7, 8], [9, 10, 11, 12]])
        B = A.at([(1, None), (1, None)])
        C = B.at([(1, None), (1, 3)])
        assert C.to_list() == [[11, 12]]
        C.set_element((0, 0), 0)
        assert A.val([2, 2]) == 0

    def test_view_of_dummy(self):
        v = as_ndarray([1, 2, 3])
        B = v.at([None, Dummy(4)])
        C = B.at([(1, None), 2])
        assert C.to_list() == [2, 3]

    def test_transpose(self, M):
        T = M.transpose()
        assert T.shape == (2, 3)
        assert T.to_list() == [[1.5, 5.125, 7.5], [3.25, 6.125, 8.625]]
        T.set_element((1, 0), 0)
        assert M.val([0, 1]) == 0

    def test_transpose_of_row_view(self, M):
        assert M.at([1]).T.to_list() == [5.125, 6.125]

    def test_transpose_twice(self, M):
        assert M.T.T.to_list() == M.to_list()


class TestReadOnly:
    """Read-only arrays produce read-only views."""

    def test_view_of_writable_is_writable(self, M):
        B = M.at([0])
        assert isinstance(B, WritableArrayView)
        assert not B.is_read_only()

    def test_read_only_view_refuses_writes(self, M):
        R = read_only_view(M)
        assert R.is_read_only()
        with pytest.raises(ReadOnlyArrayError):
            R.set_element((0, 0), 1)

    def test_read_only_view_sees_base_writes(self, M):
        R = read_only_view(M)
        M.set_element((0, 0), 42)
        assert R.val([0, 0]) == 42

    def test_read_only_propagates(self, M):
        R = read_only_view(M)
        for view in (R.at([0]), R.transpose(), R.at([None, Dummy(2)])):
            assert type(view) is ArrayView
            with pytest.raises(ReadOnlyArrayError):
                view.assign(0)

    def test_copy_of_read_only_is_writable(self, M):
        C = read_only_view(M).copy()
        C.set_element((0, 0), 1)
        assert M.val([0, 0]) == 1.5


class TestViewAccess:
    """View element access validates its reduced index."""

    def test_get_element_checks_index(self, tensor_4d):
        B = tensor_4d.at([1, None, 1])
        assert B.shape == (2, 1)
        with pytest.raises(IndexRangeError):
            B.get_element((2, 0))

    def test_set_element_checks_index(self, tensor_4d):
        B = tensor_4d.at([1, None, 1])
        with pytest.raises(IndexRangeError):
            B.set_element((0, 1), 3)

    def test_negative_reduced_index_rejected(self, M):
        with pytest.raises(IndexRangeError):
            M.at([0]).get_element((-1,))

    def test_shape_not_assignable(self, tensor_4d):
        B = tensor_4d.at([1, None, 1])
        with pytest.raises(AttributeError):
            B.shape = (1, 1)
