from __future__ import annotations

__all__ = ["Tensor", "concatenate", "stack"]

import logging
from numbers import Integral
from typing import Any, Callable, Iterable, Iterator, Sequence

from .exceptions import (
    AxisOutOfBoundsError,
    ModelMismatchError,
    ReshapeError,
    ShapeMismatchError,
)
from .layout import Layout
from .model import CoefficientModel

logger = logging.getLogger(__name__)


class Tensor:
    """Dense tensor whose elements belong to an arbitrary coefficient model.

    A tensor is a view: a `Layout` addressing a flat storage list. Slicing, permuting, taking a
    diagonal, broadcasting, and reshaping a contiguous tensor all return new tensors sharing the
    same list, so writes through one are visible through the others. Arithmetic, contraction,
    concatenation, and stacking always allocate new storage. Instances should be constructed via
    the `Tensor.from_*` static methods.
    """

    __slots__ = ("storage", "layout", "model")

    def __init__(self, storage: list[Any], layout: Layout, model: CoefficientModel):
        self.storage = storage
        self.layout = layout
        self.model = model

    @staticmethod
    def from_function(
        shape: Sequence[int], model: CoefficientModel, function: Callable[[tuple[int, ...]], Any]
    ) -> Tensor:
        """Evaluate `function` once at every index, in row-major order."""
        layout = Layout.row_major(shape)
        return Tensor([function(index) for index in layout.indices()], layout, model)

    @staticmethod
    def from_values(shape: Sequence[int], model: CoefficientModel, values: Iterable[Any]) -> Tensor:
        layout = Layout.row_major(shape)
        values = list(values)
        if len(values) != layout.size:
            raise ReshapeError((len(values),), layout.shape)
        return Tensor(values, layout, model)

    @staticmethod
    def from_lol(lol: Any, model: CoefficientModel, *, shape: Sequence[int] | None = None) -> Tensor:
        """Build a tensor from nested lists.

        Only `list` counts as nesting, so tuples and any other objects are taken as coefficients.
        """
        if shape is None:
            shape = default_lol_shape(lol)
        else:
            shape = tuple(shape)

        return Tensor.from_values(shape, model, lol_to_values(lol, shape))

    @staticmethod
    def from_scalar(value: Any, model: CoefficientModel) -> Tensor:
        return Tensor([value], Layout((), ()), model)

    @staticmethod
    def full(shape: Sequence[int], model: CoefficientModel, value: Any) -> Tensor:
        layout = Layout.row_major(shape)
        return Tensor([value] * layout.size, layout, model)

    @staticmethod
    def zeros(shape: Sequence[int], model: CoefficientModel) -> Tensor:
        return Tensor.full(shape, model, model.zero)

    @staticmethod
    def ones(shape: Sequence[int], model: CoefficientModel) -> Tensor:
        return Tensor.full(shape, model, model.one)

    @staticmethod
    def from_numpy(array, model: CoefficientModel) -> Tensor:
        import numpy

        array = numpy.asarray(array)
        return Tensor.from_values(array.shape, model, array.ravel().tolist())

    def to_numpy(self):
        import numpy

        array = numpy.empty(self.size, dtype=object)
        for i, value in enumerate(self.elements()):
            array[i] = value
        return array.reshape(self.shape)

    @property
    def shape(self) -> tuple[int, ...]:
        return self.layout.shape

    @property
    def order(self) -> int:
        return self.layout.order

    @property
    def size(self) -> int:
        return self.layout.size

    @property
    def strides(self) -> tuple[int, ...]:
        return self.layout.strides

    @property
    def offset(self) -> int:
        return self.layout.offset

    @property
    def is_contiguous(self) -> bool:
        return self.layout.is_contiguous

    @property
    def is_zero(self) -> bool:
        return all(self.model.is_zero(value) for value in self.elements())

    def _view(self, layout: Layout) -> Tensor:
        return Tensor(self.storage, layout, self.model)

    def _is_element_key(self, key: tuple[Any, ...]) -> bool:
        return len(key) == self.order and all(
            isinstance(i, Integral) and not isinstance(i, bool) for i in key
        )

    def __getitem__(self, key) -> Any:
        key = key if isinstance(key, tuple) else (key,)
        if self._is_element_key(key):
            return self.storage[self.layout.position(key)]
        else:
            return self.slice(*key)

    def __setitem__(self, key, value) -> None:
        key = key if isinstance(key, tuple) else (key,)
        if self._is_element_key(key):
            self.storage[self.layout.position(key)] = value
        elif isinstance(value, Tensor):
            self.slice(*key).assign(value)
        else:
            self.slice(*key).fill(value)

    def __len__(self) -> int:
        if self.order == 0:
            raise TypeError("len() of a tensor of order 0")
        return self.shape[0]

    def __iter__(self) -> Iterator[Tensor]:
        if self.order == 0:
            raise TypeError("Iteration over a tensor of order 0")
        return (self.slice(i) for i in range(self.shape[0]))

    def indices(self) -> Iterator[tuple[int, ...]]:
        return self.layout.indices()

    def elements(self) -> Iterator[Any]:
        storage = self.storage
        return (storage[position] for position in self.layout.positions())

    def items(self) -> Iterator[tuple[tuple[int, ...], Any]]:
        return zip(self.layout.indices(), self.elements())

    def item(self) -> Any:
        if self.order != 0:
            raise ValueError(f"Can only extract the item of a Tensor of order 0, not order {self.order}")
        return self.storage[self.offset]

    def fill(self, value: Any) -> None:
        """Overwrite every element of this view with `value`."""
        storage = self.storage
        for position in self.layout.positions():
            storage[position] = value

    def assign(self, other: Tensor) -> None:
        """Copy the elements of `other` into this view."""
        self._check_compatible(other, "assign")
        # Read everything first because other may overlap this view
        values = list(other.elements())
        storage = self.storage
        for position, value in zip(self.layout.positions(), values):
            storage[position] = value

    def copy(self) -> Tensor:
        return Tensor(list(self.elements()), Layout.row_major(self.shape), self.model)

    def map(self, function: Callable[[Any], Any], model: CoefficientModel | None = None) -> Tensor:
        if model is None:
            model = self.model
        return Tensor(
            [function(value) for value in self.elements()], Layout.row_major(self.shape), model
        )

    def to_lol(self) -> Any:
        if self.order == 0:
            return self.item()
        else:
            return [sub_tensor.to_lol() for sub_tensor in self]

    def slice(self, *selectors: Any) -> Tensor:
        """View selecting along each axis.

        Each selector is `None` to keep the whole axis, an integer to fix the index and drop the
        axis, a `slice` to take a range (negative steps reverse), or `...` to stand for as many
        `None` as needed. Axes without a selector are kept.
        """
        return self._view(self.layout.slice(selectors))

    def permute(self, *axes: int) -> Tensor:
        """View whose axis `k` is axis `axes[k]` of this tensor."""
        return self._view(self.layout.permute(unpack_sequence(axes)))

    def transpose(self, axis1: int = -2, axis2: int = -1) -> Tensor:
        first = self.layout.normalize_axis(axis1)
        second = self.layout.normalize_axis(axis2)
        axes = list(range(self.order))
        axes[first], axes[second] = axes[second], axes[first]
        return self.permute(*axes)

    def reshape(self, *shape: int) -> Tensor:
        """Tensor with the same elements in row-major order under a new shape.

        Shares storage when this tensor is contiguous and copies otherwise. One dimension may be
        -1, in which case it is inferred from the size.
        """
        shape = self.layout.resolve_shape(unpack_sequence(shape))
        if self.is_contiguous:
            return self._view(self.layout.reshape(shape))
        else:
            logger.debug(
                "Copying tensor with shape %s and strides %s before reshaping to %s",
                self.shape,
                self.strides,
                shape,
            )
            return self.copy().reshape(*shape)

    def ravel(self) -> Tensor:
        return self.reshape(-1)

    def diagonal(self, offset: int = 0, axis1: int = 0, axis2: int = 1) -> Tensor:
        """View of the elements where `index[axis2] - index[axis1] == offset`.

        Both axes are removed and the diagonal becomes the last axis. Only one pair of axes is
        merged per call; chain calls to read along three or more axes at once, e.g.
        `diagonal(0, 0, 1).diagonal(0, 0, -1)` for the `iii` diagonal of an order-3 tensor.
        """
        return self._view(self.layout.diagonal(offset, axis1, axis2))

    def broadcast_to(self, *shape: int) -> Tensor:
        return self._view(self.layout.broadcast_to(unpack_sequence(shape)))

    def unsqueeze(self, axis: int) -> Tensor:
        return self._view(self.layout.unsqueeze(axis))

    def _check_compatible(self, other: Tensor, operation: str) -> None:
        if not isinstance(other, Tensor):
            raise TypeError(f"Cannot {operation} a Tensor and a {type(other).__name__}")
        if self.shape != other.shape:
            raise ShapeMismatchError(operation, self.shape, other.shape)
        if self.model != other.model:
            raise ModelMismatchError(self.model, other.model)

    def _zip_with(self, other: Tensor, function: Callable[[Any, Any], Any], operation: str) -> Tensor:
        self._check_compatible(other, operation)
        return Tensor(
            [function(x, y) for x, y in zip(self.elements(), other.elements())],
            Layout.row_major(self.shape),
            self.model,
        )

    def add(self, other: Tensor) -> Tensor:
        return self._zip_with(other, self.model.add, "add")

    def subtract(self, other: Tensor) -> Tensor:
        return self._zip_with(other, self.model.subtract, "subtract")

    def negate(self) -> Tensor:
        return self.map(self.model.negate)

    def multiply(self, other: Tensor | Any) -> Tensor:
        """Element-wise product with a tensor, or product with a coefficient on the right."""
        if isinstance(other, Tensor):
            return self._zip_with(other, self.model.multiply, "multiply")
        else:
            multiply = self.model.multiply
            return self.map(lambda value: multiply(value, other))

    def left_multiply(self, scalar: Any) -> Tensor:
        multiply = self.model.multiply
        return self.map(lambda value: multiply(scalar, value))

    def __add__(self, other) -> Tensor:
        if isinstance(other, Tensor):
            return self.add(other)
        else:
            return NotImplemented

    def __sub__(self, other) -> Tensor:
        if isinstance(other, Tensor):
            return self.subtract(other)
        else:
            return NotImplemented

    def __neg__(self) -> Tensor:
        return self.negate()

    def __mul__(self, other) -> Tensor:
        return self.multiply(other)

    def __rmul__(self, other) -> Tensor:
        return self.left_multiply(other)

    def __matmul__(self, other) -> Tensor:
        if isinstance(other, Tensor):
            return self.matmul(other)
        else:
            return NotImplemented

    def sum(self, *axes: int) -> Tensor:
        """Sum over the given axes, or over all axes if none are given."""
        from .function import contract

        axes = unpack_sequence(axes)
        if len(axes) == 0:
            axes = tuple(range(self.order))
        summed = self.layout.normalize_axes(axes)

        if self.order == 0:
            return self.copy()

        labels = tuple(range(self.order))
        output = tuple(label for label in labels if label not in summed)
        return contract([self], [labels], output)

    def sum_all(self) -> Any:
        return self.model.sum(self.elements())

    def trace(self, offset: int = 0, axis1: int = 0, axis2: int = -1) -> Tensor:
        return self.diagonal(offset, axis1, axis2).sum(-1)

    def matmul(self, other: Tensor, r: int = 1) -> Tensor:
        """Contract the last `r` axes of this tensor with the first `r` axes of `other`."""
        from .function import contract

        if not isinstance(other, Tensor):
            raise TypeError(f"Cannot matmul a Tensor and a {type(other).__name__}")
        if not 0 <= r <= min(self.order, other.order):
            raise ShapeMismatchError(f"matmul over {r} axes", self.shape, other.shape)
        if self.shape[self.order - r :] != other.shape[:r]:
            raise ShapeMismatchError(f"matmul over {r} axes", self.shape, other.shape)
        if self.model != other.model:
            raise ModelMismatchError(self.model, other.model)

        # Order-0 operands cannot carry labels, so they reduce to scaling
        if self.order == 0:
            return other.left_multiply(self.item())
        elif other.order == 0:
            return self.multiply(other.item())

        left = tuple(range(self.order))
        right = left[self.order - r :] + tuple(range(self.order, self.order + other.order - r))
        output = left[: self.order - r] + right[r:]
        return contract([self, other], [left, right], output)

    def outer(self, other: Tensor) -> Tensor:
        return self.matmul(other, r=0)

    def wedge(self, other: Tensor) -> Tensor:
        """Outer product of two tensors.

        No antisymmetrization is applied; this is identical to `outer`.
        """
        return self.outer(other)

    def __eq__(self, other):
        if isinstance(other, Tensor):
            return (
                self.shape == other.shape
                and self.model == other.model
                and all(
                    self.model.is_equal(x, y) for x, y in zip(self.elements(), other.elements())
                )
            )
        else:
            return NotImplemented

    __hash__ = None

    def __repr__(self):
        return f"Tensor.from_lol({self.to_lol()!r}, {self.model!r})"


def unpack_sequence(arguments: tuple[Any, ...]) -> tuple[Any, ...]:
    """Allow both `f(1, 2)` and `f((1, 2))`."""
    if len(arguments) == 1 and isinstance(arguments[0], (tuple, list)):
        return tuple(arguments[0])
    else:
        return arguments


def default_lol_shape(lol: Any) -> tuple[int, ...]:
    shape = []
    node = lol
    while isinstance(node, list):
        shape.append(len(node))
        if len(node) == 0:
            break
        node = node[0]
    return tuple(shape)


def lol_to_values(lol: Any, shape: tuple[int, ...]) -> list[Any]:
    values = []

    def recurse(node: Any, axis: int):
        if axis == len(shape):
            if isinstance(node, list):
                raise ShapeMismatchError("from_lol", shape, (*shape, len(node)))
            values.append(node)
        elif not isinstance(node, list):
            raise ShapeMismatchError("from_lol", shape, shape[:axis])
        elif len(node) != shape[axis]:
            raise ShapeMismatchError("from_lol", shape, (*shape[:axis], len(node)))
        else:
            for element in node:
                recurse(element, axis + 1)

    recurse(lol, 0)

    return values


def concatenate(tensors: Sequence[Tensor], axis: int = 0) -> Tensor:
    """Join tensors along an existing axis into newly allocated storage."""
    tensors = list(tensors)
    if len(tensors) == 0:
        raise ValueError("Expected at least one tensor to concatenate")

    first = tensors[0]
    if first.order == 0:
        raise AxisOutOfBoundsError(axis, 0)
    axis = first.layout.normalize_axis(axis)

    for tensor in tensors[1:]:
        if tensor.model != first.model:
            raise ModelMismatchError(first.model, tensor.model)
        if tensor.order != first.order or any(
            dimension != other_dimension
            for i, (dimension, other_dimension) in enumerate(zip(first.shape, tensor.shape))
            if i != axis
        ):
            raise ShapeMismatchError("concatenate", first.shape, tensor.shape)

    shape = list(first.shape)
    shape[axis] = sum(tensor.shape[axis] for tensor in tensors)
    output = Tensor.zeros(shape, first.model)

    start = 0
    for tensor in tensors:
        stop = start + tensor.shape[axis]
        output.slice(*(None,) * axis, slice(start, stop)).assign(tensor)
        start = stop

    return output


def stack(tensors: Sequence[Tensor], axis: int = 0) -> Tensor:
    """Join equally shaped tensors along a new axis into newly allocated storage."""
    tensors = list(tensors)
    if len(tensors) == 0:
        raise ValueError("Expected at least one tensor to stack")

    first = tensors[0]
    axis = first.layout.normalize_axis(axis, first.order + 1)

    for tensor in tensors[1:]:
        if tensor.model != first.model:
            raise ModelMismatchError(first.model, tensor.model)
        if tensor.shape != first.shape:
            raise ShapeMismatchError("stack", first.shape, tensor.shape)

    shape = (*first.shape[:axis], len(tensors), *first.shape[axis:])
    output = Tensor.zeros(shape, first.model)

    for i, tensor in enumerate(tensors):
        output.slice(*(None,) * axis, i).assign(tensor)

    return output
