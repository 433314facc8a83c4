__all__ = ["Contraction", "make_contraction"]

from dataclasses import dataclass
from typing import Hashable, Sequence

from returns.result import Failure, Result, Success

from .exceptions import (
    DuplicateOutputLabelError,
    LabelCountError,
    LabelSizeConflictError,
    MalformedContractionError,
    OperandCountError,
    OrphanedOutputLabelError,
    UnlabeledOperandError,
)
from .expression.ast import EinsumExpression


@dataclass(frozen=True, slots=True)
class Contraction:
    """Canonical label-array form of a contraction.

    `operands[k][a]` is the label bound to axis `a` of the `k`-th input tensor and `output[a]` is
    the label of axis `a` of the result. Labels can be any hashable values. A label repeated
    within one operand restricts those axes to their diagonal. Labels absent from the output
    are summed over.
    """

    operands: tuple[tuple[Hashable, ...], ...]
    output: tuple[Hashable, ...]

    def __post_init__(self):
        operands = tuple(tuple(labels) for labels in self.operands)
        output = tuple(self.output)
        object.__setattr__(self, "operands", operands)
        object.__setattr__(self, "output", output)

        for i_operand, labels in enumerate(operands):
            if len(labels) == 0:
                raise UnlabeledOperandError(i_operand)

        labels = set(self.labels)
        seen = set()
        for label in output:
            if label in seen:
                raise DuplicateOutputLabelError(label)
            elif label not in labels:
                raise OrphanedOutputLabelError(label)
            seen.add(label)

    @property
    def labels(self) -> tuple[Hashable, ...]:
        """Every label on the operands, in order of first appearance."""
        return tuple(dict.fromkeys(label for labels in self.operands for label in labels))

    @property
    def free_labels(self) -> tuple[Hashable, ...]:
        return self.output

    @property
    def contracted_labels(self) -> tuple[Hashable, ...]:
        output = set(self.output)
        return tuple(label for label in self.labels if label not in output)

    def label_sizes(
        self, shapes: Sequence[tuple[int, ...]]
    ) -> Result[
        dict[Hashable, int], OperandCountError | LabelCountError | LabelSizeConflictError
    ]:
        """Size of each label given the shapes of the tensors bound to the operands."""
        if len(shapes) != len(self.operands):
            return Failure(OperandCountError(len(self.operands), len(shapes)))

        sizes = {}
        for i_operand, (labels, shape) in enumerate(zip(self.operands, shapes)):
            if len(labels) != len(shape):
                return Failure(LabelCountError(i_operand, labels, len(shape)))

            for label, size in zip(labels, shape):
                existing = sizes.setdefault(label, size)
                if existing != size:
                    return Failure(LabelSizeConflictError(label, existing, size))

        return Success(sizes)


def make_contraction(
    expression: EinsumExpression,
) -> Result[Contraction, MalformedContractionError]:
    """Number the labels of a parsed expression in order of first appearance."""
    ids = {label: i for i, label in enumerate(expression.labels())}

    try:
        contraction = Contraction(
            tuple(tuple(ids[label] for label in operand.labels) for operand in expression.operands),
            tuple(ids[label] for label in expression.output_labels()),
        )
    except MalformedContractionError as error:
        return Failure(error)

    return Success(contraction)
