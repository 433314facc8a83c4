from . import ast
from ._parser import parse_expression
from .ast import EinsumExpression, Operand
