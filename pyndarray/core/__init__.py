"""
Core infrastructure for pyndarray.

This module provides shared abstractions and utilities used by the array
and linear algebra packages.

Key components:
    protocols: SupportsNDArray structural protocol
    exceptions: Exception hierarchy
    validation: Shape and index validators
    precision: Machine epsilon
    tolerances: Tolerance tiers and algorithm thresholds
"""

from pyndarray.core.protocols import SupportsNDArray, is_ndarray
from pyndarray.core.exceptions import (
    NDArrayError,
    ValidationError,
    ArrayTypeError,
    ReadOnlyArrayError,
    IndexRangeError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
    ConvergenceError,
)
from pyndarray.core.validation import Dummy, check_indexes, check_shape

__all__ = [
    # Protocols
    "SupportsNDArray",
    "is_ndarray",
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
    # Validation
    "Dummy",
    "check_indexes",
    "check_shape",
]
