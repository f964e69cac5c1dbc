"""
Base class for n-dimensional arrays.

AbstractNDArray provides a rich set of operations built on two
primitives that subclasses must implement: the shape property and
get_element(). Writable subclasses also override set_element(); an array
whose set_element() is the inherited default is read-only.

Indexes handed to get_element() and set_element() are always tuples of
non-negative ints with one entry per dimension. val() is the friendlier
reader that validates its index and accepts negative entries.
"""

from __future__ import annotations

import abc
import itertools
import math
import numbers
import operator
from typing import Any, Callable, Iterator, Sequence

import numpy as np
from numpy.typing import NDArray

from pyndarray.core.exceptions import (
    ArrayTypeError,
    DimensionError,
    ReadOnlyArrayError,
)
from pyndarray.core.protocols import is_ndarray
from pyndarray.core.validation import check_indexes, normalize_index


def iter_indexes(shape: Sequence[int]) -> Iterator[tuple[int, ...]]:
    """
    Yield every full index of an array with the given shape.

    The first dimension varies slowest and every dimension counts down
    from length - 1 to 0. A 0-D shape yields the single index ().
    """
    return itertools.product(*(range(length - 1, -1, -1) for length in shape))


def _is_scalar(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


class AbstractNDArray(abc.ABC):
    """
    A base class for n-dimensional arrays.

    To create a new array type, inherit from this class and implement
    shape and get_element() and, for writable arrays, set_element().
    """

    # make numpy scalars defer to our reflected operators
    __array_ufunc__ = None

    #
    # Primitives
    #

    @property
    @abc.abstractmethod
    def shape(self) -> tuple[int, ...]:
        """The length of each dimension of the array."""

    @abc.abstractmethod
    def get_element(self, index: tuple[int, ...]) -> Any:
        """
        Read one element of the array.

        Args:
            index: Tuple of non-negative ints, one per dimension

        Returns:
            The value of the element at index
        """

    def set_element(self, index: tuple[int, ...], value: Any) -> AbstractNDArray:
        """
        Set one element of the array.

        Writable subclasses override this; the default refuses the write.

        Args:
            index: Tuple of non-negative ints, one per dimension
            value: New value for the element

        Returns:
            The array (chainable)

        Raises:
            ReadOnlyArrayError: Always, for read-only arrays
        """
        raise ReadOnlyArrayError(
            "Attempt to set an element of a read-only array (try using copy() first)"
        )

    #
    # Structure
    #

    @property
    def ndim(self) -> int:
        """Number of dimensions (rank) of the array."""
        return len(self.shape)

    def is_read_only(self) -> bool:
        """Return True if set_element() has not been overridden."""
        return type(self).set_element is AbstractNDArray.set_element

    def create_result(self, shape: Sequence[int]) -> AbstractNDArray:
        """
        Create a writable array for storing a computed result.

        Args:
            shape: Length of each dimension of the new array

        Returns:
            A new writable dense array
        """
        from pyndarray.array.dense import DenseNDArray

        return DenseNDArray(shape)

    def check_indexes(self, indexes: Any, **options: bool) -> AbstractNDArray:
        """
        Validate indexes against this array's shape.

        Accepts the keyword options of pyndarray.core.validation.check_indexes().

        Returns:
            The array (chainable)
        """
        check_indexes(self.shape, indexes, **options)
        return self

    def has_shape(self, shape: Any) -> bool:
        """Return True iff shape equals this array's shape."""
        if not isinstance(shape, (list, tuple)):
            return False
        return tuple(shape) == tuple(self.shape)

    def iter_indexes(self) -> Iterator[tuple[int, ...]]:
        """Iterate over every index in walk_indexes() order."""
        return iter_indexes(self.shape)

    def walk_indexes(self, visit: Callable[[tuple[int, ...]], Any]) -> AbstractNDArray:
        """
        Call visit(index) with every valid index of this array.

        The first dimension varies slowest and each dimension is traversed
        from its last index down to 0.

        Returns:
            The array (chainable)
        """
        for index in self.iter_indexes():
            visit(index)
        return self

    def val(self, index: Sequence[Any] | None = None) -> Any:
        """
        Get a particular element from the array.

        Like get_element() but validates the index and supports negative
        entries.

        Args:
            index: The index of the element (omit for a 0-D array)

        Returns:
            The element value
        """
        if index is None:
            index = ()
        check_indexes(self.shape, index)
        return self.get_element(normalize_index(self.shape, index))

    def copy(self) -> AbstractNDArray:
        """Return a new writable array holding a shallow copy of the elements."""
        result = self.create_result(self.shape)
        return result.walk_indexes(
            lambda index: result.set_element(index, self.get_element(index))
        )

    #
    # Views
    #

    def _view_transform(self) -> tuple[AbstractNDArray, tuple, tuple, tuple]:
        """Return (base, map_to, stride, offsets) relative to the root array."""
        ndim = self.ndim
        return self, tuple(range(ndim)), (1,) * ndim, (0,) * ndim

    def at(self, indexes: Sequence[Any]) -> AbstractNDArray:
        """
        Create a view of part of this array.

        An integer entry fixes that dimension (dropping it from the view),
        None keeps the dimension, a range (start, stop) keeps part of it and
        a dummy marker adds a new dimension whose elements all alias one
        element. The view shares storage with this array.

        Args:
            indexes: One entry per dimension, optionally followed by dummy
                markers; trailing dimensions may be omitted

        Returns:
            A view, writable iff this array is writable
        """
        from pyndarray.array.view import compose_view

        check_indexes(
            self.shape, indexes,
            allow_undefined=True, allow_dummy=True, allow_range=True,
        )
        return compose_view(self, indexes)

    def transpose(self) -> AbstractNDArray:
        """
        Get the transpose of this array as a view.

        The order of the dimensions is reversed; for a matrix this is the
        matrix transpose. Writes through the view change this array.
        """
        from pyndarray.array.view import transpose_view

        return transpose_view(self)

    @property
    def T(self) -> AbstractNDArray:
        return self.transpose()

    #
    # Bulk assignment
    #

    def assign(self, B: Any) -> AbstractNDArray:
        """
        Replace the elements of this array.

        Args:
            B: A number stored in every element, or an array of the same
                shape supplying each element

        Returns:
            The array (chainable)
        """
        if _is_scalar(B):
            return self.walk_indexes(lambda index: self.set_element(index, B))
        self._check_operand(B)
        return self.walk_indexes(
            lambda index: self.set_element(index, B.get_element(index))
        )

    def swap(self, B: AbstractNDArray) -> AbstractNDArray:
        """
        Swap the contents of this array with those in B.

        Combined with at() this swaps rows or columns in place.

        Returns:
            The array (chainable)
        """
        self._check_operand(B)

        def exchange(index: tuple[int, ...]) -> None:
            held = self.get_element(index)
            self.set_element(index, B.get_element(index))
            B.set_element(index, held)

        return self.walk_indexes(exchange)

    #
    # Elementwise arithmetic
    #

    def _check_operand(self, B: Any) -> None:
        if not is_ndarray(B):
            raise ArrayTypeError(
                f"B must be an n-dimensional array or a number, got {type(B).__name__}"
            )
        if not self.has_shape(tuple(B.shape)):
            raise DimensionError(
                f"B must have the same shape as this array: {tuple(B.shape)} != {self.shape}"
            )

    def _combine_here(self, B: Any, op: Callable[[Any, Any], Any]) -> AbstractNDArray:
        if _is_scalar(B):
            return self.walk_indexes(
                lambda index: self.set_element(index, op(self.get_element(index), B))
            )
        self._check_operand(B)
        return self.walk_indexes(
            lambda index: self.set_element(
                index, op(self.get_element(index), B.get_element(index))
            )
        )

    def _map_here(self, func: Callable[[Any], Any]) -> AbstractNDArray:
        return self.walk_indexes(
            lambda index: self.set_element(index, func(self.get_element(index)))
        )

    def add_here(self, B: Any) -> AbstractNDArray:
        """Replace this array with its elementwise sum with B (number or array)."""
        return self._combine_here(B, operator.add)

    def add(self, B: Any) -> AbstractNDArray:
        """Return a new array holding the elementwise sum with B."""
        return self.copy().add_here(B)

    def sub_here(self, B: Any) -> AbstractNDArray:
        """Replace this array with its elementwise difference with B."""
        return self._combine_here(B, operator.sub)

    def sub(self, B: Any) -> AbstractNDArray:
        """Return a new array holding the elementwise difference with B."""
        return self.copy().sub_here(B)

    def mul_here(self, B: Any) -> AbstractNDArray:
        """Replace this array with its elementwise product with B."""
        return self._combine_here(B, operator.mul)

    def mul(self, B: Any) -> AbstractNDArray:
        """Return a new array holding the elementwise product with B."""
        return self.copy().mul_here(B)

    def div_here(self, B: Any) -> AbstractNDArray:
        """Replace this array with its elementwise quotient by B."""
        return self._combine_here(B, operator.truediv)

    def div(self, B: Any) -> AbstractNDArray:
        """Return a new array holding the elementwise quotient by B."""
        return self.copy().div_here(B)

    def neg_here(self) -> AbstractNDArray:
        """Replace this array with its elementwise negation."""
        return self._map_here(operator.neg)

    def neg(self) -> AbstractNDArray:
        return self.copy().neg_here()

    def abs(self) -> AbstractNDArray:
        """Return a new array holding the absolute value of each element."""
        return self.copy()._map_here(abs)

    def reciprocal(self) -> AbstractNDArray:
        """Return a new array holding the reciprocal of each element."""
        return self.copy()._map_here(lambda value: 1 / value)

    def sum(self) -> Any:
        """Sum of all of the elements in this array."""
        total = 0
        for index in self.iter_indexes():
            total += self.get_element(index)
        return total

    #
    # Extrema
    #

    def _scan(self, better: Callable[[Any, Any], bool], start: float) -> tuple[Any, tuple[int, ...] | None]:
        best, best_index = start, None
        snapshot = self.copy()
        for index in snapshot.iter_indexes():
            value = snapshot.get_element(index)
            if better(value, best):
                best, best_index = value, index
        return best, best_index

    def max(self) -> Any:
        """Return the largest element."""
        return self._scan(operator.gt, -math.inf)[0]

    def arg_max(self) -> tuple[int, ...] | None:
        """Return the index of the largest element (first found in walk order)."""
        return self._scan(operator.gt, -math.inf)[1]

    def min(self) -> Any:
        """Return the smallest element."""
        return self._scan(operator.lt, math.inf)[0]

    def arg_min(self) -> tuple[int, ...] | None:
        """Return the index of the smallest element (first found in walk order)."""
        return self._scan(operator.lt, math.inf)[1]

    #
    # Conversion
    #

    def to_list(self) -> Any:
        """Convert to nested lists; a 0-D array yields its value."""
        if self.ndim == 0:
            return self.val()
        return [self.at([i]).to_list() for i in range(self.shape[0])]

    def to_numpy(self) -> NDArray[Any]:
        """Materialize the elements as a numpy array."""
        return np.array(self.to_list())

    def __str__(self) -> str:
        from pyndarray.array.formatting import format_array

        return format_array(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(shape={self.shape})"

    #
    # Python operators
    #

    def __getitem__(self, key: Any) -> Any:
        indexes = list(key) if isinstance(key, tuple) else [key]
        if len(indexes) == self.ndim and all(
            isinstance(entry, numbers.Integral) for entry in indexes
        ):
            return self.val(indexes)
        return self.at(indexes)

    def __setitem__(self, key: Any, value: Any) -> None:
        indexes = list(key) if isinstance(key, tuple) else [key]
        if len(indexes) == self.ndim and all(
            isinstance(entry, numbers.Integral) for entry in indexes
        ):
            check_indexes(self.shape, indexes)
            self.set_element(normalize_index(self.shape, indexes), value)
        else:
            self.at(indexes).assign(value)

    def _supports(self, other: Any) -> bool:
        return _is_scalar(other) or is_ndarray(other)

    def __add__(self, other: Any) -> Any:
        return self.add(other) if self._supports(other) else NotImplemented

    def __radd__(self, other: Any) -> Any:
        return self.add(other) if _is_scalar(other) else NotImplemented

    def __iadd__(self, other: Any) -> Any:
        return self.add_here(other) if self._supports(other) else NotImplemented

    def __sub__(self, other: Any) -> Any:
        return self.sub(other) if self._supports(other) else NotImplemented

    def __rsub__(self, other: Any) -> Any:
        return self.neg().add_here(other) if _is_scalar(other) else NotImplemented

    def __isub__(self, other: Any) -> Any:
        return self.sub_here(other) if self._supports(other) else NotImplemented

    def __mul__(self, other: Any) -> Any:
        return self.mul(other) if self._supports(other) else NotImplemented

    def __rmul__(self, other: Any) -> Any:
        return self.mul(other) if _is_scalar(other) else NotImplemented

    def __imul__(self, other: Any) -> Any:
        return self.mul_here(other) if self._supports(other) else NotImplemented

    def __truediv__(self, other: Any) -> Any:
        return self.div(other) if self._supports(other) else NotImplemented

    def __rtruediv__(self, other: Any) -> Any:
        return self.reciprocal().mul_here(other) if _is_scalar(other) else NotImplemented

    def __itruediv__(self, other: Any) -> Any:
        return self.div_here(other) if self._supports(other) else NotImplemented

    def __neg__(self) -> AbstractNDArray:
        return self.neg()

    def __abs__(self) -> AbstractNDArray:
        return self.abs()

    def __matmul__(self, other: Any) -> Any:
        return self.dot(other) if is_ndarray(other) else NotImplemented

    #
    # Linear algebra (see pyndarray.linalg)
    #

    def dot(self, B: AbstractNDArray) -> AbstractNDArray:
        """Contract the last dimension of this array with the first of B."""
        from pyndarray.linalg import dot

        return dot(self, B)

    def norm(self) -> float:
        """Euclidean (vector) or Frobenius (matrix) norm."""
        from pyndarray.linalg import norm

        return norm(self)

    def is_orthogonal(self) -> bool:
        from pyndarray.linalg import is_orthogonal

        return is_orthogonal(self)

    def lu_decomposition(self):
        from pyndarray.linalg import lu_decomposition

        return lu_decomposition(self)

    def det(self) -> float:
        from pyndarray.linalg import det

        return det(self)

    def inverse(self) -> AbstractNDArray:
        from pyndarray.linalg import inverse

        return inverse(self)

    def pseudoinverse(self) -> AbstractNDArray:
        from pyndarray.linalg import pseudoinverse

        return pseudoinverse(self)

    def householder_transform(self):
        from pyndarray.linalg import householder_transform

        return householder_transform(self)

    def givens_rotation(self) -> AbstractNDArray:
        from pyndarray.linalg import givens_rotation

        return givens_rotation(self)

    def bidiagonalization(self):
        from pyndarray.linalg import bidiagonalization

        return bidiagonalization(self)

    def singular_value_decomposition(self):
        from pyndarray.linalg import singular_value_decomposition

        return singular_value_decomposition(self)

    def condition_number(self) -> float:
        from pyndarray.linalg import condition_number

        return condition_number(self)

    def rank(self) -> int:
        from pyndarray.linalg import rank

        return rank(self)

    def nullity(self) -> int:
        from pyndarray.linalg import nullity

        return nullity(self)

    def range(self) -> AbstractNDArray | None:
        """Rows form an orthonormal basis of the range, or None."""
        from pyndarray.linalg import range_space

        return range_space(self)

    def nullspace(self) -> AbstractNDArray | None:
        """Rows form an orthonormal basis of the nullspace, or None."""
        from pyndarray.linalg import nullspace

        return nullspace(self)
