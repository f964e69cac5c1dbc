"""
Core protocols for pyndarray.

These define the structural interface an array-like object must satisfy
to take part in elementwise operations and linear algebra. We use
Protocol (structural typing) rather than requiring inheritance from
AbstractNDArray, so foreign array types only need the two primitives.

Design Principles:
    - Minimal contract: a shape and an element reader
    - Writing is optional and detected, never assumed
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SupportsNDArray(Protocol):
    """
    Minimal protocol for an n-dimensional array.

    get_element() is always called with a tuple of non-negative integers
    whose length equals len(shape). Writable arrays additionally provide
    set_element(index, value) returning the array itself.
    """

    @property
    def shape(self) -> tuple[int, ...]:
        """Length of each dimension; () for a 0-D (scalar) array."""
        ...

    def get_element(self, index: tuple[int, ...]) -> Any:
        """Read the element at a fully resolved index."""
        ...


def is_ndarray(value: object) -> bool:
    """Return True if value satisfies the SupportsNDArray protocol."""
    return isinstance(value, SupportsNDArray)
