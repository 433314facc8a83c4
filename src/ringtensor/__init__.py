import logging

from .contraction import Contraction, make_contraction
from .exceptions import (
    AxisOutOfBoundsError,
    DuplicateAxisError,
    DuplicateOutputLabelError,
    IndexCountError,
    IndexTypeError,
    IndexOutOfBoundsError,
    InvalidPermutationError,
    InvalidShapeError,
    LabelCountError,
    LabelSizeConflictError,
    MalformedContractionError,
    ModelMismatchError,
    OperandCountError,
    OrphanedOutputLabelError,
    ReshapeError,
    ShapeMismatchError,
    UnlabeledOperandError,
)
from .expression import parse_expression
from .function import contract, einsum
from .layout import Layout
from .model import (
    CoefficientModel,
    Field,
    Integers,
    IntegersModN,
    IntegersModP,
    NotInvertibleError,
    Rationals,
)
from .tensor import Tensor, concatenate, stack

logging.getLogger(__name__).addHandler(logging.NullHandler())
