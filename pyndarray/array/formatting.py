"""
Human-readable rendering of arrays.

Every element is right-aligned to the width of the widest element in
the array. Rank 1 renders as a bracketed row, rank 2 as a bracketed
block of rows and higher ranks as blocks separated by blank lines. A
0-D array renders as "( value )".
"""

from typing import Any

from pyndarray.array.base import AbstractNDArray


def format_value(value: Any) -> str:
    """Render one element; integral floats lose their trailing '.0'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _field_width(array: AbstractNDArray) -> int:
    return max(
        (len(format_value(array.get_element(index))) for index in array.iter_indexes()),
        default=0,
    )


def _format_1d(array: AbstractNDArray, width: int) -> str:
    cells = [format_value(array.val([i])).rjust(width) for i in range(array.shape[0])]
    return "[ " + ", ".join(cells) + " ]"


def _format_2d(array: AbstractNDArray, width: int, indent: int) -> str:
    rows = [_format_1d(array.at([i]), width) for i in range(array.shape[0])]
    return " " * indent + "[" + (",\n" + " " * (indent + 1)).join(rows) + "]"


def _format_nd(array: AbstractNDArray, width: int, indent: int) -> str:
    if array.ndim == 0:
        return "( " + format_value(array.val()) + " )"
    if array.ndim == 1:
        return _format_1d(array, width)
    if array.ndim == 2:
        return _format_2d(array, width, indent)

    blocks = [
        _format_nd(array.at([i]), width, indent + 1) for i in range(array.shape[0])
    ]
    return " " * indent + "[\n" + ",\n\n".join(blocks) + "\n" + " " * indent + "]"


def format_array(array: AbstractNDArray) -> str:
    """
    Create a human-readable text version of an array.

    Args:
        array: Array to render

    Returns:
        Multi-line string, e.g. '[[ 1, 5 ],\\n [ 3, 4 ]]' for a 2 x 2 matrix
    """
    return _format_nd(array, _field_width(array), 0)
