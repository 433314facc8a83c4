__all__ = ["NotInvertibleError"]

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class NotInvertibleError(ArithmeticError):
    value: Any
    model: Any

    def __str__(self) -> str:
        return f"Expected a unit of {self.model!r} to invert, but got {self.value!r}"
