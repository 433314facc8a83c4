from __future__ import annotations

__all__ = ["CoefficientModel", "Field"]

from abc import abstractmethod
from functools import reduce
from typing import Generic, Iterable, TypeVar

T = TypeVar("T")


class CoefficientModel(Generic[T]):
    """The ring operations that every tensor element passes through.

    Tensors never apply Python operators to their elements directly. Each addition,
    multiplication, and comparison is delegated to the model the tensor was built with, so the
    same engine works for integers, residues, fractions, or any other ring.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def zero(self) -> T:
        raise NotImplementedError()

    @property
    @abstractmethod
    def one(self) -> T:
        raise NotImplementedError()

    @abstractmethod
    def add(self, x: T, y: T) -> T:
        raise NotImplementedError()

    @abstractmethod
    def negate(self, x: T) -> T:
        raise NotImplementedError()

    @abstractmethod
    def multiply(self, x: T, y: T) -> T:
        """Multiply two elements, `x` on the left."""
        raise NotImplementedError()

    @abstractmethod
    def is_equal(self, x: T, y: T) -> bool:
        raise NotImplementedError()

    def subtract(self, x: T, y: T) -> T:
        return self.add(x, self.negate(y))

    def is_zero(self, x: T) -> bool:
        return self.is_equal(x, self.zero)

    def sum(self, values: Iterable[T]) -> T:
        return reduce(self.add, values, self.zero)

    def product(self, values: Iterable[T]) -> T:
        return reduce(self.multiply, values, self.one)


class Field(CoefficientModel[T]):
    __slots__ = ()

    @abstractmethod
    def reciprocal(self, x: T) -> T:
        """Multiplicative inverse of `x`.

        Raises:
            NotInvertibleError: If `x` is zero.
        """
        raise NotImplementedError()

    def divide(self, x: T, y: T) -> T:
        return self.multiply(x, self.reciprocal(y))
