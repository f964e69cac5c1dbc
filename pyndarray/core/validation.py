"""
Shape and index validation for pyndarray.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

An index is a list or tuple with one entry per dimension. Entries may be:
    - an integer in [-length, length); negative values count from the end
    - None, leaving the dimension open (only where allow_undefined is set)
    - a range (start, stop) or slice(start, stop) (only with allow_range)
    - a dummy marker, Dummy(n) or a digit string such as "3", adding a new
      dimension of length n (only with allow_dummy)

Design principles:
    - No side effects; validators return their input unchanged
    - Misuse of types raises ArrayTypeError, bounds problems raise
      IndexRangeError, bad shapes raise DimensionError
    - Error messages include the offending value
"""

import math
import numbers
import re
from dataclasses import dataclass
from typing import Any, Sequence

from pyndarray.core.exceptions import (
    ArrayTypeError,
    DimensionError,
    IndexRangeError,
)


_POSITIVE_INT = re.compile(r'[0-9]+')


@dataclass(frozen=True)
class Dummy:
    """
    Marker for a new zero-stride dimension in at().

    Every position along a dummy dimension aliases the same element, so
    Dummy(3) turns a vector of length n into an (n, 3) view whose three
    columns are the same vector.
    """
    length: int

    def __post_init__(self) -> None:
        if isinstance(self.length, bool) or not isinstance(self.length, numbers.Integral):
            raise ArrayTypeError(f"Dummy length must be an integer, got {self.length!r}")
        if self.length <= 0:
            raise DimensionError(f"Dummy length must be positive, got {self.length}")


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_integral(value: Any) -> bool:
    if isinstance(value, numbers.Integral):
        return True
    return float(value).is_integer()


def is_range(value: Any) -> bool:
    """Return True if an index entry is a range (sequence or slice)."""
    return isinstance(value, (list, tuple, slice))


def dummy_length(entry: Any) -> int | None:
    """
    Return the length introduced by a dummy marker, or None if entry is not one.

    Args:
        entry: A single index entry

    Returns:
        Positive length for Dummy(n) or a digit string, otherwise None
    """
    if isinstance(entry, Dummy):
        return entry.length
    if isinstance(entry, str) and _POSITIVE_INT.fullmatch(entry):
        length = int(entry)
        if length > 0:
            return length
    return None


def normalize_range(entry: Sequence[Any] | slice, length: int) -> tuple[int, int]:
    """
    Resolve a range entry against a dimension of the given length.

    Missing bounds default to 0 and length; negative bounds wrap once
    relative to length.

    Args:
        entry: (start, stop) sequence of at most two items, or a slice
            without a step
        length: Length of the dimension the range applies to

    Returns:
        (start, stop) with 0 <= start < stop <= length

    Raises:
        ArrayTypeError: If a bound is not an integer or the slice has a step
        IndexRangeError: If the range is empty, inverted, out of bounds or
            has more than two items
    """
    if isinstance(entry, slice):
        if entry.step is not None:
            raise ArrayTypeError(f"Range {entry!r} must not have a step")
        start, stop = entry.start, entry.stop
    else:
        if len(entry) > 2:
            raise IndexRangeError(f"Too many elements in range {list(entry)!r}")
        padded = list(entry) + [None] * (2 - len(entry))
        start, stop = padded

    start = 0 if start is None else start
    stop = length if stop is None else stop

    for bound in (start, stop):
        if not _is_number(bound):
            raise ArrayTypeError(f"Non-numeric value encountered in range {entry!r}")
        if not _is_integral(bound):
            raise ArrayTypeError(f"Non-integer bound encountered in range {entry!r}")

    start, stop = int(start), int(stop)
    if start < 0:
        start += length
    if stop < 0:
        stop += length

    if start >= stop:
        raise IndexRangeError(
            f"Upper end of range was not greater than lower end of range: {entry!r}"
        )
    if stop > length or start < 0:
        raise IndexRangeError(
            f"Range {entry!r} extends beyond actual dimension [0, {length})"
        )

    return start, stop


def check_shape(shape: Any) -> tuple[int, ...]:
    """
    Verify that a value is a valid array shape.

    Args:
        shape: Candidate shape, a list or tuple of dimension lengths

    Returns:
        The shape as a tuple of ints

    Raises:
        ArrayTypeError: If shape is not a sequence or contains a
            non-numeric or fractional length
        DimensionError: If a length is zero, negative or NaN
    """
    if not isinstance(shape, (list, tuple)):
        raise ArrayTypeError(f"Non-sequence given as a shape: {shape!r}")

    for length in shape:
        if not _is_number(length):
            raise ArrayTypeError(f"Encountered non-numeric length {length!r}")
        if not length > 0:
            raise DimensionError(f"Encountered non-positive length {length}")
        if not _is_integral(length):
            raise ArrayTypeError(f"Non-integer length {length}")

    return tuple(int(length) for length in shape)


def check_indexes(
    shape: Sequence[int],
    indexes: Any,
    *,
    allow_undefined: bool = False,
    allow_dummy: bool = False,
    allow_range: bool = False,
    nonnegative: bool = False,
) -> Any:
    """
    Verify a list of indexes against a shape.

    By default indexes must be a list or tuple of integers with exactly
    one entry per dimension, and negative indexes are allowed.

    Args:
        shape: Shape of the array being indexed
        indexes: The indexes to check
        allow_undefined: Permit None entries and lists shorter than the rank
        allow_dummy: Permit dummy markers introducing new dimensions
        allow_range: Permit (start, stop) ranges and slices
        nonnegative: Reject negative integer indexes

    Returns:
        indexes, unchanged

    Raises:
        ArrayTypeError: If indexes is not a sequence, an entry is of a kind
            not permitted by the options, or an integer index is fractional
        IndexRangeError: If an index or range is out of bounds, or the
            number of indexes does not match the rank
    """
    if not isinstance(indexes, (list, tuple)):
        raise ArrayTypeError(f"Non-sequence given as an index: {indexes!r}")

    ndim = len(shape)
    i = 0  # position in indexes
    j = 0  # dimension of shape that indexes[i] applies to
    while i < len(indexes) and j < ndim:
        entry = indexes[i]
        length = shape[j]

        if _is_number(entry):
            lower = 0 if nonnegative else -length
            if not lower <= entry < length:
                raise IndexRangeError(
                    f"Index out of range, {entry} is not within [{lower}, {length})"
                )
            if not _is_integral(entry):
                raise ArrayTypeError(f"Non-integer index {entry}")
            j += 1
        elif entry is None and allow_undefined:
            j += 1
        elif allow_range and is_range(entry):
            normalize_range(entry, length)
            j += 1
        elif not allow_dummy or dummy_length(entry) is None:
            raise ArrayTypeError(f"Encountered non-numeric index {entry!r}")
        i += 1

    if allow_dummy:
        # trailing dummy markers are fine
        while i < len(indexes) and dummy_length(indexes[i]) is not None:
            i += 1

    if j != ndim or i != len(indexes):
        if not allow_undefined or j >= ndim:
            raise IndexRangeError(
                f"Expected {ndim} indexes but given {len(indexes)} indexes"
            )

    return indexes


def normalize_index(shape: Sequence[int], index: Sequence[Any]) -> tuple[int, ...]:
    """
    Resolve a validated integer index to non-negative ints.

    Args:
        shape: Shape of the array being indexed
        index: Index already accepted by check_indexes()

    Returns:
        Tuple of non-negative ints
    """
    return tuple(
        int(entry) + length if entry < 0 else int(entry)
        for entry, length in zip(index, shape)
    )
