from fractions import Fraction

import pytest

from ringtensor import (
    IndexCountError,
    IndexOutOfBoundsError,
    IndexTypeError,
    Integers,
    IntegersModN,
    IntegersModP,
    InvalidShapeError,
    Rationals,
    ReshapeError,
    ShapeMismatchError,
    Tensor,
)

Z = Integers()


def ij(shape):
    return Tensor.from_function(shape, Z, lambda index: index[0] + 2 * index[1])


@pytest.mark.parametrize(
    ("lol", "shape"),
    [
        (7, ()),
        ([1, 2, 3], (3,)),
        ([[1, 2, 3], [3, 4, 5]], (2, 3)),
        ([[[0, 0, 3], [4, 5, 0]], [[0, 0, 0], [4, 5, 6]]], (2, 2, 3)),
    ],
)
def test_from_lol_to_lol(lol, shape):
    tensor = Tensor.from_lol(lol, Z)
    assert tensor.shape == shape
    assert tensor.to_lol() == lol


def test_from_lol_sum():
    tensor = Tensor.from_lol([[1, 2, 3], [3, 4, 5]], Z)
    assert tensor.sum_all() == 18


@pytest.mark.parametrize("lol", [[[1, 2], [3]], [[1, 2], 3], [1, [2, 3]]])
def test_from_ragged_lol(lol):
    with pytest.raises(ShapeMismatchError):
        Tensor.from_lol(lol, Z)


@pytest.mark.parametrize("lol", [[], [[], []]])
def test_from_empty_lol(lol):
    with pytest.raises(InvalidShapeError):
        Tensor.from_lol(lol, Z)


def test_from_lol_with_shape():
    tensor = Tensor.from_lol([[1, 2], [3, 4]], Z, shape=(2, 2))
    assert tensor[1, 0] == 3

    with pytest.raises(ShapeMismatchError):
        Tensor.from_lol([[1, 2], [3, 4]], Z, shape=(2, 3))


def test_from_function_is_row_major():
    tensor = Tensor.from_function((2, 3), Z, lambda index: index)
    assert tensor.storage == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]


def test_from_values():
    tensor = Tensor.from_values((2, 2), Z, range(4))
    assert tensor.to_lol() == [[0, 1], [2, 3]]

    with pytest.raises(ReshapeError):
        Tensor.from_values((2, 2), Z, range(5))


def test_from_scalar():
    tensor = Tensor.from_scalar(Fraction(1, 3), Rationals())
    assert tensor.order == 0
    assert tensor.size == 1
    assert tensor.item() == Fraction(1, 3)
    assert tensor[()] == Fraction(1, 3)


def test_full_zeros_ones():
    model = IntegersModN(5)
    assert Tensor.full((2,), model, 3).to_lol() == [3, 3]
    assert Tensor.zeros((2, 2), model).is_zero
    assert Tensor.ones((3,), model).to_lol() == [1, 1, 1]


@pytest.mark.parametrize("shape", [(0,), (2, 0), (-2,)])
def test_bad_shape(shape):
    with pytest.raises(InvalidShapeError):
        Tensor.zeros(shape, Z)


def test_element_access():
    u = ij((3, 3))
    assert u[2, 1] == 4
    assert u[-1, -1] == 6

    u[0, 0] = 10
    assert u[0, 0] == 10


@pytest.mark.parametrize("index", [(3, 0), (0, -4)])
def test_element_access_out_of_bounds(index):
    with pytest.raises(IndexOutOfBoundsError):
        ij((3, 3))[index]


def test_too_many_indexes():
    with pytest.raises(IndexCountError):
        ij((3, 3))[0, 0, 0]


@pytest.mark.parametrize("key", [(1.0, 1), (1, 1.5), (True, 1)])
def test_non_integer_index(key):
    u = ij((3, 3))
    with pytest.raises(IndexTypeError):
        u[key]
    with pytest.raises(IndexTypeError):
        u[key] = 0


def test_partial_index_is_a_view():
    u = ij((3, 3))
    row = u[1]
    assert row.shape == (3,)
    assert row.to_lol() == [1, 3, 5]


def test_item_requires_order_zero():
    with pytest.raises(ValueError):
        ij((2, 2)).item()


def test_len_and_iter():
    u = ij((2, 3))
    assert len(u) == 2
    assert [row.to_lol() for row in u] == [[0, 2, 4], [1, 3, 5]]

    scalar = Tensor.from_scalar(1, Z)
    with pytest.raises(TypeError):
        len(scalar)
    with pytest.raises(TypeError):
        iter(scalar)


def test_items():
    tensor = Tensor.from_lol([[1, 2], [3, 4]], Z)
    assert dict(tensor.items()) == {(0, 0): 1, (0, 1): 2, (1, 0): 3, (1, 1): 4}


def test_copy_is_independent():
    u = ij((2, 2))
    v = u.copy()
    v[0, 0] = 100
    assert u[0, 0] == 0
    assert v.storage is not u.storage


def test_map_changes_model():
    u = Tensor.from_lol([3, 8], Z)
    v = u.map(lambda x: x % 5, IntegersModN(5))
    assert v.model == IntegersModN(5)
    assert v.to_lol() == [3, 3]


def test_equality():
    model = IntegersModP(5)
    assert Tensor.from_lol([1, 7], model) == Tensor.from_lol([6, 2], model)
    assert Tensor.from_lol([1, 2], model) != Tensor.from_lol([1, 3], model)
    assert Tensor.from_lol([1, 2], model) != Tensor.from_lol([[1, 2]], model)
    assert Tensor.from_lol([1, 2], model) != Tensor.from_lol([1, 2], IntegersModN(5))
    assert Tensor.from_lol([1, 2], model) != [1, 2]


def test_equality_ignores_layout():
    u = ij((2, 3))
    assert u.permute(1, 0).permute(1, 0) == u
    assert u.permute(1, 0) == Tensor.from_lol([[0, 1], [2, 3], [4, 5]], Z)


def test_tensors_are_unhashable():
    with pytest.raises(TypeError):
        hash(ij((2, 2)))


def test_repr():
    assert repr(Tensor.from_lol([1, 2], Z)) == "Tensor.from_lol([1, 2], Integers())"




def test_tuple_coefficients_are_not_nesting():
    pairs = Tensor.from_lol([(1, 2), (3, 4)], Z)
    assert pairs.shape == (2,)
    assert pairs[1] == (3, 4)

    values = Tensor.from_values((2,), Z, [(1, 2), (3, 4)])
    assert repr(values) == "Tensor.from_lol([(1, 2), (3, 4)], Integers())"
    assert Tensor.from_lol(values.to_lol(), Z).shape == (2,)
