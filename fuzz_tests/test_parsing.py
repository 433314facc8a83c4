import hypothesis.strategies as st
from hypothesis import given
from parsita import ParseError
from returns.result import Failure, Success

from ringtensor import MalformedContractionError
from ringtensor.contraction import make_contraction
from ringtensor.expression import EinsumExpression, parse_expression

from .strategies import expressions


@given(st.text())
def test_expression_parsing_cannot_crash(string):
    match parse_expression(string):
        case Success(EinsumExpression()) | Failure(ParseError() | MalformedContractionError()):
            pass
        case unexpected:
            raise ValueError(unexpected)


@given(st.text(alphabet="ijk,-> "))
def test_expression_compiling_cannot_crash(string):
    match parse_expression(string).bind(make_contraction):
        case Success(_) | Failure(ParseError() | MalformedContractionError()):
            pass
        case unexpected:
            raise ValueError(unexpected)


@given(expressions())
def test_deparse_parse_round_trip(expression):
    deparsed = expression.deparse()
    assert parse_expression(deparsed) == Success(expression)


@given(expressions())
def test_contraction_keeps_label_structure(expression):
    contraction = make_contraction(expression).unwrap()
    assert [len(labels) for labels in contraction.operands] == [
        operand.order for operand in expression.operands
    ]
    assert len(contraction.output) == len(expression.output_labels())
