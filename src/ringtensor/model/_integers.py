__all__ = ["Integers", "IntegersModN", "IntegersModP"]

from dataclasses import dataclass
from math import isqrt

from ._exceptions import NotInvertibleError
from ._model import CoefficientModel, Field


@dataclass(frozen=True, slots=True)
class Integers(CoefficientModel[int]):
    @property
    def zero(self) -> int:
        return 0

    @property
    def one(self) -> int:
        return 1

    def add(self, x: int, y: int) -> int:
        return x + y

    def subtract(self, x: int, y: int) -> int:
        return x - y

    def negate(self, x: int) -> int:
        return -x

    def multiply(self, x: int, y: int) -> int:
        return x * y

    def is_equal(self, x: int, y: int) -> bool:
        return x == y

    def is_zero(self, x: int) -> bool:
        return x == 0


@dataclass(frozen=True, slots=True)
class IntegersModN(CoefficientModel[int]):
    """Residues modulo `n`, always kept in the range `0` until `n`."""

    n: int

    def __post_init__(self):
        if self.n < 2:
            raise ValueError(f"Expected modulus to be at least 2, but got {self.n}")

    @property
    def zero(self) -> int:
        return 0

    @property
    def one(self) -> int:
        return 1

    def add(self, x: int, y: int) -> int:
        return (x + y) % self.n

    def subtract(self, x: int, y: int) -> int:
        return (x - y) % self.n

    def negate(self, x: int) -> int:
        return -x % self.n

    def multiply(self, x: int, y: int) -> int:
        return x * y % self.n

    def is_equal(self, x: int, y: int) -> bool:
        return (x - y) % self.n == 0


@dataclass(frozen=True, slots=True)
class IntegersModP(IntegersModN, Field[int]):
    """The finite field of residues modulo a prime `p`."""

    def __post_init__(self):
        if self.n < 2 or any(self.n % d == 0 for d in range(2, isqrt(self.n) + 1)):
            raise ValueError(f"Expected modulus to be prime, but got {self.n}")

    @property
    def p(self) -> int:
        return self.n

    def reciprocal(self, x: int) -> int:
        if x % self.n == 0:
            raise NotInvertibleError(x, self)
        return pow(x, -1, self.n)
