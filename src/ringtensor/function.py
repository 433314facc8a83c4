__all__ = ["einsum", "contract", "compile_expression"]

import logging
from functools import lru_cache
from typing import Hashable, Sequence

from returns.functions import raise_exception

from .contraction import Contraction, make_contraction
from .engine import evaluate_contraction
from .expression import parse_expression
from .model import CoefficientModel
from .tensor import Tensor

logger = logging.getLogger(__name__)


@lru_cache(maxsize=256)
def compile_expression(expression: str) -> Contraction:
    logger.debug("Compiling einsum expression %r", expression)
    parsed = parse_expression(expression).alt(raise_exception).unwrap()
    return make_contraction(parsed).alt(raise_exception).unwrap()


def einsum(expression: str, *tensors: Tensor, model: CoefficientModel | None = None) -> Tensor:
    """Evaluate an index expression like `ij,jk->ik` on the given tensors.

    Each comma-separated group of letters labels the axes of one tensor. Labels missing from the
    output after `->` are summed over; a label repeated on one tensor reads along its diagonal.
    Without `->`, the output is every label occurring exactly once, in order of first appearance.
    """
    contraction = compile_expression(expression)
    return evaluate_contraction(contraction, tensors, model)


def contract(
    tensors: Sequence[Tensor],
    operand_labels: Sequence[Sequence[Hashable]],
    output_labels: Sequence[Hashable],
    model: CoefficientModel | None = None,
) -> Tensor:
    """Evaluate a contraction given as explicit labels, bypassing the string syntax."""
    contraction = Contraction(tuple(map(tuple, operand_labels)), tuple(output_labels))
    return evaluate_contraction(contraction, tensors, model)
