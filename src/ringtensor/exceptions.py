__all__ = [
    "InvalidShapeError",
    "ReshapeError",
    "IndexOutOfBoundsError",
    "IndexCountError",
    "IndexTypeError",
    "AxisOutOfBoundsError",
    "InvalidPermutationError",
    "DuplicateAxisError",
    "ShapeMismatchError",
    "ModelMismatchError",
    "LabelSizeConflictError",
    "MalformedContractionError",
    "OperandCountError",
    "LabelCountError",
    "UnlabeledOperandError",
    "OrphanedOutputLabelError",
    "DuplicateOutputLabelError",
]

from dataclasses import dataclass
from typing import Any, Hashable


@dataclass(frozen=True, slots=True)
class InvalidShapeError(ValueError):
    shape: tuple[Any, ...]

    def __str__(self) -> str:
        return f"Expected every dimension of a shape to be a positive integer, but got {self.shape}"


@dataclass(frozen=True, slots=True)
class ReshapeError(ValueError):
    source: tuple[int, ...]
    target: tuple[int, ...]

    def __str__(self) -> str:
        return (
            f"Expected a shape holding the same number of elements as {self.source}, "
            f"but got {self.target}"
        )


@dataclass(frozen=True, slots=True)
class IndexOutOfBoundsError(IndexError):
    index: int
    axis: int
    dimension: int

    def __str__(self) -> str:
        return (
            f"Expected index along axis {self.axis} to be in range "
            f"[{-self.dimension}, {self.dimension}), but got {self.index}"
        )


@dataclass(frozen=True, slots=True)
class IndexCountError(IndexError):
    index: tuple[Any, ...]
    order: int

    def __str__(self) -> str:
        return (
            f"Expected at most {self.order} indexes for a tensor of order {self.order}, "
            f"but got {len(self.index)}: {self.index}"
        )


@dataclass(frozen=True, slots=True)
class IndexTypeError(IndexError):
    index: Any
    axis: int

    def __str__(self) -> str:
        return f"Expected index along axis {self.axis} to be an integer, but got {self.index!r}"


@dataclass(frozen=True, slots=True)
class AxisOutOfBoundsError(IndexError):
    axis: int
    order: int

    def __str__(self) -> str:
        return (
            f"Expected axis to be in range [{-self.order}, {self.order}) for a tensor of order "
            f"{self.order}, but got {self.axis}"
        )


@dataclass(frozen=True, slots=True)
class InvalidPermutationError(ValueError):
    axes: tuple[int, ...]
    order: int

    def __str__(self) -> str:
        return (
            f"Expected a permutation of the axes 0 until {self.order}, but got {self.axes}"
        )


@dataclass(frozen=True, slots=True)
class DuplicateAxisError(ValueError):
    axes: tuple[int, ...]

    def __str__(self) -> str:
        return f"Expected each axis to be mentioned at most once, but got {self.axes}"


@dataclass(frozen=True, slots=True)
class ShapeMismatchError(ValueError):
    operation: str
    first: tuple[int, ...]
    second: tuple[int, ...]

    def __str__(self) -> str:
        return (
            f"Cannot apply {self.operation} between tensor with shape {self.first} and tensor "
            f"with shape {self.second}"
        )


@dataclass(frozen=True, slots=True)
class ModelMismatchError(ValueError):
    first: Any
    second: Any

    def __str__(self) -> str:
        return (
            f"Expected all tensors in an operation to share one coefficient model, "
            f"but found {self.first!r} and {self.second!r}"
        )


@dataclass(frozen=True, slots=True)
class LabelSizeConflictError(ValueError):
    label: Hashable
    first: int
    second: int

    def __str__(self) -> str:
        return (
            f"Expected every axis bound to label {self.label!r} to have the same size, "
            f"but found both {self.first} and {self.second}"
        )


@dataclass(frozen=True, slots=True)
class MalformedContractionError(ValueError):
    def __str__(self) -> str:
        return "Malformed contraction"


@dataclass(frozen=True, slots=True)
class OperandCountError(MalformedContractionError):
    expected: int
    actual: int

    def __str__(self) -> str:
        return (
            f"Expected one tensor per operand of the contraction, but the contraction has "
            f"{self.expected} operands and {self.actual} tensors were given"
        )


@dataclass(frozen=True, slots=True)
class LabelCountError(MalformedContractionError):
    operand: int
    labels: tuple[Hashable, ...]
    order: int

    def __str__(self) -> str:
        return (
            f"Expected operand {self.operand} to have one label per axis, but its tensor has "
            f"order {self.order} and it is labeled {self.labels}"
        )


@dataclass(frozen=True, slots=True)
class UnlabeledOperandError(MalformedContractionError):
    operand: int

    def __str__(self) -> str:
        return (
            f"Expected every operand of a contraction to bind at least one label, "
            f"but operand {self.operand} has none"
        )


@dataclass(frozen=True, slots=True)
class OrphanedOutputLabelError(MalformedContractionError):
    label: Hashable

    def __str__(self) -> str:
        return (
            f"Expected every output label to appear on some operand, "
            f"but {self.label!r} appears only in the output"
        )


@dataclass(frozen=True, slots=True)
class DuplicateOutputLabelError(MalformedContractionError):
    label: Hashable

    def __str__(self) -> str:
        return f"Expected each output label to appear once, but {self.label!r} is repeated"
