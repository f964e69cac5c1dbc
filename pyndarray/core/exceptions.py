"""
Exception hierarchy for pyndarray.

All exceptions inherit from NDArrayError to allow catching any
library-specific error. Argument and index problems also inherit from the
matching builtin (TypeError, IndexError, ValueError) so ordinary Python
handlers keep working.

Design principles:
    - Caller misuse (ValidationError) is kept apart from numerically
      inapplicable operations (NumericalError)
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class NDArrayError(Exception):
    """Base exception for all pyndarray errors."""
    pass


class ValidationError(NDArrayError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class ArrayTypeError(ValidationError, TypeError):
    """
    An argument is the wrong kind of value for the operation.

    Raised for non-sequence indexes, fractional indexes, unsupported
    index entries, and operations applied to arrays of the wrong rank
    (e.g. LU decomposition of a non-square matrix).
    """
    pass


class ReadOnlyArrayError(ArrayTypeError):
    """
    Attempt to write to a read-only array.

    Use copy() to obtain a writable array with the same contents.
    """
    pass


class IndexRangeError(ValidationError, IndexError):
    """
    An index, range or index count is out of bounds.

    Raised when a numeric index lies outside its dimension, when a range
    is inverted or extends beyond its dimension, or when the number of
    indexes does not match the rank of the array.
    """
    pass


class DimensionError(ValidationError, ValueError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when a shape is invalid or when two operands have shapes that
    cannot be combined.
    """
    pass


class NumericalError(NDArrayError):
    """
    Numerical computation failed.

    Base class for errors signalling that a requested computation is not
    applicable to the given data. Callers are expected to catch these and
    fall back to an SVD-based alternative such as pseudoinverse().
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when LU elimination meets a pivot that is exactly zero.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Column at which elimination failed, if known
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index


class ConvergenceError(NDArrayError):
    """
    Iterative algorithm failed to converge.

    Raised when the implicit-shift SVD sweep exceeds its iteration cap.

    Attributes:
        iterations: Number of sweeps completed
        active_block: (p, q) bounds of the block still being reduced
        reason: Why convergence failed (e.g., 'max_iterations')
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        active_block: tuple[int, int] | None = None,
        reason: str | None = None,
    ):
        super().__init__(message)
        self.iterations = iterations
        self.active_block = active_block
        self.reason = reason
