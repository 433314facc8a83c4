__all__ = ["evaluate_contraction", "common_model"]

import logging
from itertools import product
from typing import Sequence

from returns.functions import raise_exception

from .contraction import Contraction
from .exceptions import ModelMismatchError
from .layout import Layout
from .model import CoefficientModel
from .tensor import Tensor

logger = logging.getLogger(__name__)


def common_model(tensors: Sequence[Tensor]) -> CoefficientModel:
    if len(tensors) == 0:
        raise ValueError("Expected a model when contracting zero tensors")

    model = tensors[0].model
    for tensor in tensors[1:]:
        if tensor.model != model:
            raise ModelMismatchError(model, tensor.model)
    return model


def evaluate_contraction(
    contraction: Contraction, tensors: Sequence[Tensor], model: CoefficientModel | None = None
) -> Tensor:
    """Sum of products of the input elements over every assignment of the contracted labels.

    Every label gets a slot in a single assignment vector, free labels first in output order and
    contracted labels after them. Each operand reads the element at the position given by the
    values assigned to its labels, so a label repeated on one operand reads its diagonal.
    Everything is validated before the output is allocated.
    """
    tensors = list(tensors)
    sizes = contraction.label_sizes([tensor.shape for tensor in tensors]).alt(raise_exception).unwrap()
    if model is None:
        model = common_model(tensors)

    free = contraction.free_labels
    contracted = contraction.contracted_labels
    slots = {label: slot for slot, label in enumerate((*free, *contracted))}

    # Precompute (slot, stride) pairs per operand; repeated labels merge their strides
    addressings = []
    for tensor, labels in zip(tensors, contraction.operands):
        strides = {}
        for label, stride in zip(labels, tensor.strides):
            slot = slots[label]
            strides[slot] = strides.get(slot, 0) + stride
        addressings.append((tensor.storage, tensor.offset, tuple(strides.items())))

    shape = tuple(sizes[label] for label in free)
    logger.debug(
        "Contracting %d operands with shapes %s into shape %s over %d summed labels",
        len(tensors),
        [tensor.shape for tensor in tensors],
        shape,
        len(contracted),
    )

    zero = model.zero
    one = model.one
    add = model.add
    multiply = model.multiply

    free_ranges = [range(dimension) for dimension in shape]
    contracted_ranges = [range(sizes[label]) for label in contracted]

    values = []
    for free_values in product(*free_ranges):
        accumulator = zero
        for contracted_values in product(*contracted_ranges):
            assignment = free_values + contracted_values
            term = one
            for storage, offset, strides in addressings:
                position = offset
                for slot, stride in strides:
                    position += assignment[slot] * stride
                term = multiply(term, storage[position])
            accumulator = add(accumulator, term)
        values.append(accumulator)

    return Tensor(values, Layout.row_major(shape), model)
