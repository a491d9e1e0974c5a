"""Bounded-degree polynomial used as the single value type of the evaluator.

A value is a tuple of coefficients indexed by ascending power: ``(c,)`` is a
constant and ``(c, k)`` is the linear polynomial ``c + k*x``. Arithmetic never
produces more than two coefficients; operations that could are rejected.

The error messages count "degree" in coefficients, so a constant has degree 1
in their wording. The thresholds below are expressed in coefficient counts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from . import config
from .types import (
    DivisionByZeroError,
    DivisionUnsupportedError,
    InfiniteSolutionsError,
    NoSolutionError,
    UnsupportedOperationError,
)


def is_zero(value: float) -> bool:
    """True when ``value`` lies within the configured zero tolerance."""
    return abs(value) < config.ZERO_TOLERANCE


@dataclass(frozen=True)
class Polynomial:
    coefficients: Tuple[float, ...] = (0.0,)

    @staticmethod
    def constant(value: float) -> "Polynomial":
        return Polynomial((float(value),))

    @staticmethod
    def variable() -> "Polynomial":
        """The polynomial ``x``."""
        return Polynomial((0.0, 1.0))

    def __len__(self) -> int:
        return len(self.coefficients)

    def __getitem__(self, power: int) -> float:
        return self.coefficients[power]

    def is_constant(self) -> bool:
        return len(self) == 1

    def constant_term(self) -> float:
        return self.coefficients[0]

    def __neg__(self) -> "Polynomial":
        return Polynomial(tuple(-c for c in self.coefficients))

    def __add__(self, rhs: "Polynomial") -> "Polynomial":
        size = max(len(self), len(rhs))
        coeffs = [0.0] * size
        for power, c in enumerate(self.coefficients):
            coeffs[power] += c
        for power, c in enumerate(rhs.coefficients):
            coeffs[power] += c
        return Polynomial(tuple(coeffs))

    def __sub__(self, rhs: "Polynomial") -> "Polynomial":
        """Subtract the constant term of ``rhs`` from the constant term of ``self``.

        Only the constant terms take part: a linear right operand loses its
        ``x`` coefficient and the ``x`` coefficient of ``self`` is kept as is.
        """
        if len(self) > 1 and len(rhs) > 1:
            raise UnsupportedOperationError(
                "Subtraction not supported for polynomials of degree >= 1"
            )
        coeffs = list(self.coefficients)
        coeffs[0] -= rhs.constant_term()
        return Polynomial(tuple(coeffs))

    def __mul__(self, rhs: "Polynomial") -> "Polynomial":
        if len(self) >= 2 and len(rhs) >= 2:
            raise UnsupportedOperationError(
                "Multiplication of polynomials of degree >= 2 not allowed"
            )
        # scale the longer operand; the left one wins a tie
        if len(self) >= len(rhs):
            larger, factor = self, rhs.constant_term()
        else:
            larger, factor = rhs, self.constant_term()
        return Polynomial(tuple(c * factor for c in larger.coefficients))

    def __truediv__(self, rhs: "Polynomial") -> "Polynomial":
        if len(rhs) > 1:
            raise DivisionUnsupportedError(
                "Division not supported by polynomials of degree >= 1"
            )
        divisor = rhs.constant_term()
        if is_zero(divisor):
            raise DivisionByZeroError("Can't divide polynomial by 0")
        return Polynomial(tuple(c / divisor for c in self.coefficients))

    def solve_linear(self) -> float:
        """Return the root of ``c + k*x``.

        Raises:
            InfiniteSolutionsError: both coefficients are effectively zero
            NoSolutionError: the ``x`` coefficient vanishes but the constant does not
        """
        if len(self) < 2 or is_zero(self.coefficients[1]):
            if is_zero(self.constant_term()):
                raise InfiniteSolutionsError(
                    "Expression evaluates to 0, infinite number of solutions"
                )
            raise NoSolutionError("Constant can't equal 0, no solutions")
        return -self.coefficients[0] / self.coefficients[1]

    def to_string(self) -> str:
        parts = [f"{self.coefficients[0]:g}"]
        for power, c in enumerate(self.coefficients[1:], start=1):
            sign = "-" if c < 0 else "+"
            term = config.VARIABLE_SYMBOL if power == 1 else f"{config.VARIABLE_SYMBOL}^{power}"
            parts.append(f"{sign} {abs(c):g}*{term}")
        return " ".join(parts)

    def __str__(self) -> str:
        return self.to_string()
