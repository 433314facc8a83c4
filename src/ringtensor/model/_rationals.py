__all__ = ["Rationals"]

from dataclasses import dataclass
from fractions import Fraction

from ._exceptions import NotInvertibleError
from ._model import Field


@dataclass(frozen=True, slots=True)
class Rationals(Field[Fraction]):
    @property
    def zero(self) -> Fraction:
        return Fraction(0)

    @property
    def one(self) -> Fraction:
        return Fraction(1)

    def add(self, x: Fraction, y: Fraction) -> Fraction:
        return x + y

    def subtract(self, x: Fraction, y: Fraction) -> Fraction:
        return x - y

    def negate(self, x: Fraction) -> Fraction:
        return -x

    def multiply(self, x: Fraction, y: Fraction) -> Fraction:
        return x * y

    def is_equal(self, x: Fraction, y: Fraction) -> bool:
        return x == y

    def reciprocal(self, x: Fraction) -> Fraction:
        if x == 0:
            raise NotInvertibleError(x, self)
        return 1 / Fraction(x)

    def divide(self, x: Fraction, y: Fraction) -> Fraction:
        if y == 0:
            raise NotInvertibleError(y, self)
        return Fraction(x) / y
