"""
pyndarray: n-dimensional arrays with strided views and dense linear algebra.

Arrays share storage through zero-copy views created by at() and
transpose(), and expose the decompositions of pyndarray.linalg as
methods (A.dot(B), A.inverse(), A.singular_value_decomposition(), ...).

Submodules:
    core: Exceptions, validation, protocols and numeric constants
    array: Array base class, views, dense storage and formatting
    linalg: LU, Householder, Givens, bidiagonalization and SVD
"""

__version__ = "0.1.0"

from pyndarray.core import (
    NDArrayError,
    ValidationError,
    ArrayTypeError,
    ReadOnlyArrayError,
    IndexRangeError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
    ConvergenceError,
    Dummy,
    SupportsNDArray,
)
from pyndarray.array import (
    AbstractNDArray,
    DenseNDArray,
    are_close,
    as_ndarray,
    eye,
    format_array,
    read_only_view,
)
from pyndarray import linalg
from pyndarray.linalg import dot, solve_linear_system

__all__ = [
    "__version__",
    # Arrays
    "AbstractNDArray",
    "DenseNDArray",
    "SupportsNDArray",
    "Dummy",
    "as_ndarray",
    "eye",
    "are_close",
    "format_array",
    "read_only_view",
    # Linear algebra
    "linalg",
    "dot",
    "solve_linear_system",
    # Exceptions
    "NDArrayError",
    "ValidationError",
    "ArrayTypeError",
    "ReadOnlyArrayError",
    "IndexRangeError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
    "ConvergenceError",
]
