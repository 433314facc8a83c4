import hypothesis.strategies as st

from ringtensor import Integers, IntegersModP, Tensor
from ringtensor.expression import EinsumExpression, Operand

models = st.sampled_from([Integers(), IntegersModP(2), IntegersModP(7)])

labels = st.sampled_from("ijkl")
operands = st.builds(Operand, st.builds(tuple, st.lists(labels, min_size=1, max_size=4)))


@st.composite
def expressions(draw) -> EinsumExpression:
    expression_operands = tuple(draw(st.lists(operands, min_size=1, max_size=3)))

    if draw(st.booleans()):
        return EinsumExpression(expression_operands)
    else:
        all_labels = EinsumExpression(expression_operands).labels()
        order = draw(st.permutations(all_labels))
        n_output = draw(st.integers(min_value=0, max_value=len(order)))
        return EinsumExpression(expression_operands, Operand(tuple(order[:n_output])))


def shapes(
    orders=st.integers(min_value=0, max_value=3), dimensions=st.integers(min_value=1, max_value=3)
):
    return orders.flatmap(lambda order: st.tuples(*[dimensions] * order))


@st.composite
def tensors(draw, shape: tuple[int, ...] | None = None, model=None) -> Tensor:
    if shape is None:
        shape = draw(shapes())
    if model is None:
        model = draw(models)

    size = 1
    for dimension in shape:
        size *= dimension

    values = draw(st.lists(st.integers(-20, 20), min_size=size, max_size=size))
    # Reduce residues into the model's canonical range
    return Tensor.from_values(shape, model, values).map(lambda value: model.add(model.zero, value))


@st.composite
def expression_and_tensors(draw) -> tuple[EinsumExpression, list[Tensor]]:
    expression = draw(expressions())
    model = draw(models)
    sizes = {label: draw(st.integers(min_value=1, max_value=3)) for label in expression.labels()}
    operand_tensors = [
        draw(tensors(tuple(sizes[label] for label in operand.labels), model))
        for operand in expression.operands
    ]
    return expression, operand_tensors
