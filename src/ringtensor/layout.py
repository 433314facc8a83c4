from __future__ import annotations

__all__ = ["Layout", "validate_shape", "row_major_strides"]

from dataclasses import dataclass
from itertools import product
from math import prod
from numbers import Integral
from typing import Any, Iterator, Sequence

from .exceptions import (
    AxisOutOfBoundsError,
    DuplicateAxisError,
    IndexCountError,
    IndexTypeError,
    IndexOutOfBoundsError,
    InvalidPermutationError,
    InvalidShapeError,
    ReshapeError,
    ShapeMismatchError,
)


def validate_shape(shape: Sequence[Any]) -> tuple[int, ...]:
    shape = tuple(shape)
    for dimension in shape:
        if not isinstance(dimension, int) or isinstance(dimension, bool) or dimension <= 0:
            raise InvalidShapeError(shape)
    return shape


def row_major_strides(shape: tuple[int, ...]) -> tuple[int, ...]:
    strides = []
    step = 1
    for dimension in reversed(shape):
        strides.append(step)
        step *= dimension
    return tuple(reversed(strides))


@dataclass(frozen=True, slots=True)
class Layout:
    """Addressing of a tensor's elements within a flat storage buffer.

    The element at index `(i_0, ..., i_{r-1})` lives at `offset + sum(i_k * strides[k])`. Every
    method returning a new layout preserves the invariant that all valid indexes address a slot
    that the original layout could already reach, which is what makes views safe.
    """

    shape: tuple[int, ...]
    strides: tuple[int, ...]
    offset: int = 0

    @staticmethod
    def row_major(shape: Sequence[int], offset: int = 0) -> Layout:
        shape = validate_shape(shape)
        return Layout(shape, row_major_strides(shape), offset)

    @property
    def order(self) -> int:
        return len(self.shape)

    @property
    def size(self) -> int:
        return prod(self.shape)

    @property
    def is_contiguous(self) -> bool:
        return all(
            dimension == 1 or stride == expected
            for dimension, stride, expected in zip(
                self.shape, self.strides, row_major_strides(self.shape), strict=True
            )
        )

    def normalize_axis(self, axis: int, order: int | None = None) -> int:
        if order is None:
            order = self.order
        if -order <= axis < order:
            return axis % order
        else:
            raise AxisOutOfBoundsError(axis, order)

    def normalize_axes(self, axes: Sequence[int]) -> tuple[int, ...]:
        normalized = tuple(self.normalize_axis(axis) for axis in axes)
        if len(set(normalized)) != len(normalized):
            raise DuplicateAxisError(tuple(axes))
        return normalized

    def normalize_index(self, index: int, axis: int) -> int:
        if not isinstance(index, Integral) or isinstance(index, bool):
            raise IndexTypeError(index, axis)
        index = int(index)
        dimension = self.shape[axis]
        if -dimension <= index < dimension:
            return index % dimension
        else:
            raise IndexOutOfBoundsError(index, axis, dimension)

    def position(self, index: tuple[int, ...]) -> int:
        if len(index) != self.order:
            raise IndexCountError(index, self.order)
        position = self.offset
        for axis, (i, stride) in enumerate(zip(index, self.strides)):
            position += self.normalize_index(i, axis) * stride
        return position

    def indices(self) -> Iterator[tuple[int, ...]]:
        return product(*(range(dimension) for dimension in self.shape))

    def positions(self) -> Iterator[int]:
        offset = self.offset
        strides = self.strides
        for index in self.indices():
            yield offset + sum(i * stride for i, stride in zip(index, strides))

    def slice(self, selectors: Sequence[Any]) -> Layout:
        """Select along each axis with `None`, an integer, a `slice`, or `...`."""
        selectors = tuple(selectors)
        n_ellipsis = sum(1 for selector in selectors if selector is Ellipsis)
        if n_ellipsis > 1:
            raise IndexError("An index can only have a single ellipsis ('...')")
        if len(selectors) - n_ellipsis > self.order:
            raise IndexCountError(selectors, self.order)

        if n_ellipsis == 1:
            at = selectors.index(Ellipsis)
            fill = (None,) * (self.order - len(selectors) + 1)
            selectors = selectors[:at] + fill + selectors[at + 1 :]
        else:
            selectors = selectors + (None,) * (self.order - len(selectors))

        shape = []
        strides = []
        offset = self.offset
        for axis, (selector, dimension, stride) in enumerate(
            zip(selectors, self.shape, self.strides, strict=True)
        ):
            if selector is None:
                shape.append(dimension)
                strides.append(stride)
            elif isinstance(selector, slice):
                start, stop, step = selector.indices(dimension)
                length = len(range(start, stop, step))
                if length == 0:
                    raise InvalidShapeError((*self.shape[:axis], 0, *self.shape[axis + 1 :]))
                offset += start * stride
                shape.append(length)
                strides.append(stride * step)
            else:
                offset += self.normalize_index(selector, axis) * stride

        return Layout(tuple(shape), tuple(strides), offset)

    def permute(self, axes: Sequence[int]) -> Layout:
        axes = tuple(axes)
        if len(axes) != self.order:
            raise InvalidPermutationError(axes, self.order)
        try:
            normalized = self.normalize_axes(axes)
        except (AxisOutOfBoundsError, DuplicateAxisError):
            raise InvalidPermutationError(axes, self.order) from None
        return Layout(
            tuple(self.shape[axis] for axis in normalized),
            tuple(self.strides[axis] for axis in normalized),
            self.offset,
        )

    def diagonal(self, offset: int, axis1: int, axis2: int) -> Layout:
        first, second = self.normalize_axes((axis1, axis2))
        first_dimension = self.shape[first]
        second_dimension = self.shape[second]

        start = self.offset
        if offset >= 0:
            length = min(first_dimension, second_dimension - offset)
            if length <= 0:
                raise IndexOutOfBoundsError(offset, second, second_dimension)
            start += offset * self.strides[second]
        else:
            length = min(first_dimension + offset, second_dimension)
            if length <= 0:
                raise IndexOutOfBoundsError(offset, first, first_dimension)
            start -= offset * self.strides[first]

        kept = [axis for axis in range(self.order) if axis not in (first, second)]
        return Layout(
            (*(self.shape[axis] for axis in kept), length),
            (
                *(self.strides[axis] for axis in kept),
                self.strides[first] + self.strides[second],
            ),
            start,
        )

    def resolve_shape(self, shape: Sequence[int]) -> tuple[int, ...]:
        """Fill in a single `-1` dimension so that the size matches this layout."""
        shape = tuple(shape)
        unknown = [axis for axis, dimension in enumerate(shape) if dimension == -1]
        if len(unknown) > 1:
            raise ReshapeError(self.shape, shape)
        elif len(unknown) == 1:
            known = prod(dimension for dimension in shape if dimension != -1)
            if known <= 0 or self.size % known != 0:
                raise ReshapeError(self.shape, shape)
            shape = tuple(self.size // known if dimension == -1 else dimension for dimension in shape)

        shape = validate_shape(shape)
        if prod(shape) != self.size:
            raise ReshapeError(self.shape, shape)
        return shape

    def reshape(self, shape: Sequence[int]) -> Layout:
        """Reinterpret a contiguous layout under a new shape."""
        if not self.is_contiguous:
            raise ValueError(f"Cannot reshape non-contiguous layout {self} without copying")
        return Layout.row_major(self.resolve_shape(shape), self.offset)

    def broadcast_to(self, shape: Sequence[int]) -> Layout:
        shape = validate_shape(shape)
        if len(shape) < self.order:
            raise ShapeMismatchError("broadcast", self.shape, shape)

        leading = len(shape) - self.order
        strides = [0] * leading
        for dimension, stride, target in zip(self.shape, self.strides, shape[leading:]):
            if dimension == target:
                strides.append(stride)
            elif dimension == 1:
                strides.append(0)
            else:
                raise ShapeMismatchError("broadcast", self.shape, shape)

        return Layout(shape, tuple(strides), self.offset)

    def unsqueeze(self, axis: int) -> Layout:
        axis = self.normalize_axis(axis, self.order + 1)
        return Layout(
            (*self.shape[:axis], 1, *self.shape[axis:]),
            (*self.strides[:axis], 0, *self.strides[axis:]),
            self.offset,
        )
