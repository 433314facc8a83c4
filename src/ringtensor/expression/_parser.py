__all__ = ["parse_expression"]

from parsita import ParseError, ParserContext, opt, reg, rep, rep1sep
from parsita.util import splat
from returns import result

from ..exceptions import DuplicateOutputLabelError, OrphanedOutputLabelError
from .ast import EinsumExpression, Operand


def make_expression(operands, output):
    match output:
        case []:
            return EinsumExpression(operands, None)
        case [labels]:
            return EinsumExpression(operands, labels)


class EinsumParsers(ParserContext, whitespace=r"[ ]*"):
    label = reg(r"[A-Za-z]")

    operand = rep(label) > (lambda labels: Operand(tuple(labels)))
    operands = rep1sep(operand, ",") > tuple

    output = "->" >> operand

    expression = operands & opt(output) > splat(make_expression)


def parse_expression(
    string: str, /
) -> result.Result[
    EinsumExpression, ParseError | DuplicateOutputLabelError | OrphanedOutputLabelError
]:
    try:
        return EinsumParsers.expression.parse(string)
    except (DuplicateOutputLabelError, OrphanedOutputLabelError) as e:
        return result.Failure(e)
