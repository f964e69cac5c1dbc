"""
Strided views onto another array.

A view never holds elements of its own. It stores a reference to the
root array (the first non-view array in the chain) together with a
transform mapping each of its dimensions onto a root dimension:

    map_to[k]   root dimension that view dimension k moves along
    stride[k]   1 for a real dimension, 0 for a dummy dimension
    offsets[d]  fixed starting position along root dimension d

Views of views are composed onto the root transform, so access cost does
not grow with the depth of the chain.
"""

from __future__ import annotations

from typing import Any, Sequence

from pyndarray.array.base import AbstractNDArray
from pyndarray.core.validation import (
    check_indexes,
    dummy_length,
    is_range,
    normalize_range,
)


class ArrayView(AbstractNDArray):
    """A read-only strided view onto a root array."""

    def __init__(
        self,
        base: AbstractNDArray,
        shape: Sequence[int],
        map_to: Sequence[int],
        stride: Sequence[int],
        offsets: Sequence[int],
    ):
        self._base = base
        self._shape = tuple(shape)
        self._map_to = tuple(map_to)
        self._stride = tuple(stride)
        self._offsets = tuple(offsets)

    @property
    def shape(self) -> tuple[int, ...]:
        return self._shape

    @property
    def base(self) -> AbstractNDArray:
        """The root array whose storage this view reads."""
        return self._base

    def _expand_index(self, index: tuple[int, ...]) -> tuple[int, ...]:
        check_indexes(self._shape, index, nonnegative=True)
        expanded = list(self._offsets)
        for k, position in enumerate(index):
            if self._stride[k]:
                expanded[self._map_to[k]] += position
        return tuple(expanded)

    def get_element(self, index: tuple[int, ...]) -> Any:
        return self._base.get_element(self._expand_index(index))

    def create_result(self, shape: Sequence[int]) -> AbstractNDArray:
        return self._base.create_result(shape)

    def _view_transform(self) -> tuple[AbstractNDArray, tuple, tuple, tuple]:
        return self._base, self._map_to, self._stride, self._offsets


class WritableArrayView(ArrayView):
    """A strided view whose writes go through to the root array."""

    def set_element(self, index: tuple[int, ...], value: Any) -> WritableArrayView:
        self._base.set_element(self._expand_index(index), value)
        return self


def compose_view(source: AbstractNDArray, indexes: Sequence[Any]) -> ArrayView:
    """
    Build the view of source selected by at()-style indexes.

    indexes must already have been accepted by check_indexes() with
    allow_undefined, allow_dummy and allow_range. Dimensions left
    unspecified at the end are kept whole.

    Args:
        source: Array (or view) being indexed
        indexes: Index entries for source

    Returns:
        A view on source's root, writable iff source is writable
    """
    root, old_map, old_stride, old_offsets = source._view_transform()
    source_shape = source.shape

    offsets = list(old_offsets)
    map_to: list[int] = []
    stride: list[int] = []
    shape: list[int] = []

    j = 0
    for entry in indexes:
        length = dummy_length(entry)
        if length is not None:
            map_to.append(0)
            stride.append(0)
            shape.append(length)
            continue

        if entry is None:
            map_to.append(old_map[j])
            stride.append(old_stride[j])
            shape.append(source_shape[j])
        elif is_range(entry):
            start, stop = normalize_range(entry, source_shape[j])
            if old_stride[j]:
                offsets[old_map[j]] += start
            map_to.append(old_map[j])
            stride.append(old_stride[j])
            shape.append(stop - start)
        else:
            position = int(entry)
            if position < 0:
                position += source_shape[j]
            if old_stride[j]:
                offsets[old_map[j]] += position
        j += 1

    for k in range(j, len(source_shape)):
        map_to.append(old_map[k])
        stride.append(old_stride[k])
        shape.append(source_shape[k])

    view_class = ArrayView if source.is_read_only() else WritableArrayView
    return view_class(root, shape, map_to, stride, offsets)


def transpose_view(source: AbstractNDArray) -> ArrayView:
    """Return a view of source with the order of its dimensions reversed."""
    root, map_to, stride, offsets = source._view_transform()
    view_class = ArrayView if source.is_read_only() else WritableArrayView
    return view_class(
        root,
        tuple(reversed(source.shape)),
        tuple(reversed(map_to)),
        tuple(reversed(stride)),
        offsets,
    )


def read_only_view(source: AbstractNDArray) -> ArrayView:
    """
    Return a read-only view covering the whole of source.

    Writes through the returned view raise ReadOnlyArrayError, while
    writes to source remain visible through it.
    """
    root, map_to, stride, offsets = source._view_transform()
    return ArrayView(root, source.shape, map_to, stride, offsets)
