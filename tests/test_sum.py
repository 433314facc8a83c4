import pytest

from ringtensor import (
    DuplicateAxisError,
    Integers,
    IntegersModP,
    ShapeMismatchError,
    Tensor,
    einsum,
)

Z = Integers()


def test_sum_axis():
    u = Tensor.from_lol([[0, 1, 2], [2, 3, 4]], Z)
    assert u.sum(0) == Tensor.from_lol([2, 4, 6], Z)
    assert u.sum(1) == Tensor.from_lol([3, 9], Z)
    assert u.sum(-1) == u.sum(1)


def test_sum_all_axes():
    u = Tensor.from_lol([[0, 1, 2], [2, 3, 4]], Z)
    assert u.sum().order == 0
    assert u.sum().item() == 12
    assert u.sum(0, 1) == u.sum()
    assert u.sum((1, 0)) == u.sum()
    assert u.sum_all() == 12


def test_sum_order_3():
    u = Tensor.from_values((2, 3, 4), Z, range(24))
    assert u.sum(0, 2) == Tensor.from_lol([60, 92, 124], Z)


def test_sum_scalar():
    scalar = Tensor.from_scalar(4, Z)
    assert scalar.sum().item() == 4
    assert scalar.sum_all() == 4


def test_sum_duplicate_axes():
    with pytest.raises(DuplicateAxisError):
        Tensor.zeros((2, 2), Z).sum(0, -2)


def test_sum_in_finite_field():
    u = Tensor.from_lol([3, 4, 5], IntegersModP(7))
    assert u.sum().item() == 5
    assert u.sum_all() == 5


def test_trace_of_matrix():
    a = Tensor.from_values((4,), Z, range(4)).reshape(2, 2)
    assert a.trace().order == 0
    assert a.trace().item() == 3
    assert a.trace(1).item() == 1


def test_trace_of_order_3():
    b = Tensor.from_values((8,), Z, range(8)).reshape(2, 2, 2)
    assert b.trace(0, 0) == Tensor.from_lol([5, 9], Z)
    assert b.trace(0, 0, -1) == b.diagonal(0, 0, -1).sum(-1)
    assert b.trace(0, 0, 1) == Tensor.from_lol([6, 8], Z)


def test_matmul_over_two_axes():
    u = Tensor.from_function((2, 2, 3), Z, lambda index: index[0] + 2 * index[1] + 3 * index[2])
    w = Tensor.from_function((2, 3, 4), Z, lambda index: index[0] + 1)
    assert u.matmul(w, r=2) == einsum("ijk,jkl->il", u, w)


def test_matmul_default_is_one_axis():
    u = Tensor.from_values((2, 3), Z, range(6))
    w = Tensor.from_values((3, 2), Z, range(6))
    assert u.matmul(w) == einsum("ij,jk->ik", u, w)
    assert u.matmul(w) == Tensor.from_lol([[10, 13], [28, 40]], Z)


def test_matmul_over_all_axes():
    u = Tensor.from_values((2, 3), Z, range(6))
    assert u.matmul(u, r=2).item() == sum(i * i for i in range(6))


def test_matmul_zero_axes_is_outer():
    u = Tensor.from_lol([1, 2], Z)
    w = Tensor.from_lol([[1, 0], [0, 1]], Z)
    assert u.matmul(w, r=0) == u.outer(w)
    assert u.outer(w).shape == (2, 2, 2)


def test_matmul_with_scalar():
    scalar = Tensor.from_scalar(3, Z)
    u = Tensor.from_lol([1, 2], Z)
    assert scalar.matmul(u, r=0) == 3 * u
    assert u.matmul(scalar, r=0) == u * 3


@pytest.mark.parametrize("r", [1, 3, -1])
def test_matmul_shape_mismatch(r):
    u = Tensor.zeros((2, 3), Z)
    w = Tensor.zeros((2, 3), Z)
    with pytest.raises(ShapeMismatchError):
        u.matmul(w, r=r)


def test_wedge():
    u = Tensor.from_function((2, 3), Z, lambda index: index[0] + index[1])
    w = Tensor.from_function((3, 2), Z, lambda index: index[0])
    assert u.wedge(w).shape == (2, 3, 3, 2)
    assert u.wedge(w).slice(0, 1) == w
    assert u.wedge(w) == u.outer(w)
