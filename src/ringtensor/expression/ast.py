from __future__ import annotations

__all__ = ["Operand", "EinsumExpression"]

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Operand:
    labels: tuple[str, ...]

    @property
    def order(self):
        return len(self.labels)

    def deparse(self):
        return "".join(self.labels)

    def __str__(self):
        return self.deparse()


@dataclass(frozen=True)
class EinsumExpression:
    """Parsed form of a string like `ij,jk->ik`.

    An `output` of `None` means the expression had no `->` clause, in which case the output is
    every label that occurs exactly once among the operands, in order of first appearance.
    """

    operands: tuple[Operand, ...]
    output: Operand | None = None

    def __post_init__(self):
        from ..exceptions import DuplicateOutputLabelError, OrphanedOutputLabelError

        if self.output is not None:
            labels = set(self.labels())
            seen = set()
            for label in self.output.labels:
                if label in seen:
                    raise DuplicateOutputLabelError(label)
                elif label not in labels:
                    raise OrphanedOutputLabelError(label)
                seen.add(label)

    def labels(self) -> tuple[str, ...]:
        """Every label on the operands, in order of first appearance."""
        return tuple(dict.fromkeys(label for operand in self.operands for label in operand.labels))

    def label_participants(self) -> dict[str, set[tuple[int, int]]]:
        """Map of label to the operands and axes it is bound to.

        Returns:
            A mapping where each key is a label and each value is a set of pairs. In each pair,
            the first element is the position of an operand and the second element is the axis of
            that operand to which the label is bound.
        """
        participants = {}
        for i_operand, operand in enumerate(self.operands):
            for axis, label in enumerate(operand.labels):
                participants.setdefault(label, set()).add((i_operand, axis))
        return participants

    def output_labels(self) -> tuple[str, ...]:
        if self.output is not None:
            return self.output.labels
        else:
            counts = {}
            for operand in self.operands:
                for label in operand.labels:
                    counts[label] = counts.get(label, 0) + 1
            return tuple(label for label, count in counts.items() if count == 1)

    def deparse(self) -> str:
        operands = ",".join(operand.deparse() for operand in self.operands)
        if self.output is None:
            return operands
        else:
            return f"{operands}->{self.output.deparse()}"

    def __str__(self) -> str:
        return self.deparse()
