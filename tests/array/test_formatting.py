"""
Tests for format_array() and str() of arrays.
"""

from pyndarray import DenseNDArray, as_ndarray, format_array
from pyndarray.array.formatting import format_value


class TestFormatValue:
    """Integral floats print as integers."""

    def test_integral_float_drops_fraction(self):
        assert format_value(3.0) == "3"
        assert format_value(-0.0) == "0"

    def test_fractional_float(self):
        assert format_value(0.625) == "0.625"

    def test_non_float(self):
        assert format_value("A") == "A"
        assert format_value(7) == "7"


class TestFormatArray:
    """Arrays render with a common field width per rank."""

    def test_scalar(self):
        assert str(as_ndarray(58)) == "( 58 )"

    def test_vector(self):
        assert str(as_ndarray([15, 70])) == "[ 15, 70 ]"

    def test_vector_padding(self):
        assert str(as_ndarray([3.25, 2, 8.625])) == "[  3.25,     2, 8.625 ]"

    def test_matrix(self):
        assert str(as_ndarray([[1, 5], [3, 4]])) == "[[ 1, 5 ],\n [ 3, 4 ]]"

    def test_matrix_padding(self):
        A = as_ndarray([[1.5, 3.25], [5.125, 2], [7.5, 8.625]])
        assert str(A) == (
            "[[   1.5,  3.25 ],\n"
            " [ 5.125,     2 ],\n"
            " [   7.5, 8.625 ]]"
        )

    def test_negative_values(self):
        A = as_ndarray([[-6, 1, -4], [-2, -5, 4]])
        assert format_array(A) == "[[ -6,  1, -4 ],\n [ -2, -5,  4 ]]"

    def test_three_dimensional(self):
        A = DenseNDArray([2, 2, 3])
        A.walk_indexes(lambda index: A.set_element(index, 1))
        assert str(A) == (
            "[\n"
            " [[ 1, 1, 1 ],\n"
            "  [ 1, 1, 1 ]],\n"
            "\n"
            " [[ 1, 1, 1 ],\n"
            "  [ 1, 1, 1 ]]\n"
            "]"
        )

    def test_view_of_four_dimensional(self, tensor_4d):
        assert str(tensor_4d.at([1])) == (
            "[\n"
            " [[    7.5 ],\n"
            "  [  8.625 ]],\n"
            "\n"
            " [[   9.25 ],\n"
            "  [ 10.125 ]]\n"
            "]"
        )

    def test_width_taken_from_whole_array(self, tensor_4d):
        assert str(tensor_4d.at([None, None, 0, 0])) == (
            "[[   1.5, 5.125 ],\n"
            " [   7.5,  9.25 ]]"
        )
