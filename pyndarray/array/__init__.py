"""
Array types for pyndarray.

Key components:
    base: AbstractNDArray, the base class providing every array operation
    view: Strided views created by at() and transpose()
    dense: DenseNDArray storage, as_ndarray() and eye()
    compare: are_close()
    formatting: format_array()
"""

from pyndarray.array.base import AbstractNDArray, iter_indexes
from pyndarray.array.view import ArrayView, WritableArrayView, read_only_view
from pyndarray.array.dense import DenseNDArray, IdentityMatrix, as_ndarray, eye
from pyndarray.array.compare import are_close
from pyndarray.array.formatting import format_array

__all__ = [
    "AbstractNDArray",
    "iter_indexes",
    "ArrayView",
    "WritableArrayView",
    "read_only_view",
    "DenseNDArray",
    "IdentityMatrix",
    "as_ndarray",
    "eye",
    "are_close",
    "format_array",
]
