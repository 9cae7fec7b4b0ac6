# src/fem1d/numerics/polynomials.py
"""First- and second-degree polynomials of one variable.

These are the building blocks of the hat basis: every basis piece is a
:class:`FirstDegreePolynomial`, and the affine maps between the reference
intervals ``[0, 1]`` / ``[-1, 1]`` and a physical interval are first-degree
polynomials too.

A constant is stored as a first-degree polynomial with ``coefficient == 0``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import overload

import numpy as np

from ..exceptions import DegenerateIntervalError
from ..typing import FloatArray

__all__ = [
    "FirstDegreePolynomial",
    "SecondDegreePolynomial",
    "transformation_to_0_1",
    "transformation_from_m1_p1",
]


@dataclass(frozen=True, slots=True)
class FirstDegreePolynomial:
    """``coefficient * x + independent_term``."""

    coefficient: float
    independent_term: float

    @overload
    def evaluate(self, x: float) -> float: ...
    @overload
    def evaluate(self, x: FloatArray) -> FloatArray: ...

    def evaluate(self, x):
        if np.ndim(x) == 0:
            return float(self.coefficient * x + self.independent_term)
        x = np.asarray(x, dtype=float)
        return self.coefficient * x + self.independent_term

    def __call__(self, x):
        return self.evaluate(x)

    @property
    def degree(self) -> int:
        return 0 if self.coefficient == 0.0 else 1

    def differentiate(self) -> FirstDegreePolynomial:
        # d/dx (c x + d) = c, stored as 0*x + c
        return FirstDegreePolynomial(0.0, float(self.coefficient))

    def compose(self, other: FirstDegreePolynomial) -> FirstDegreePolynomial:
        """Return ``self(other(x))``."""
        return FirstDegreePolynomial(
            coefficient=self.coefficient * other.coefficient,
            independent_term=self.coefficient * other.independent_term
            + self.independent_term,
        )

    # --- factories ---

    @classmethod
    def zero(cls) -> FirstDegreePolynomial:
        return cls(0.0, 0.0)

    @classmethod
    def constant(cls, value: float) -> FirstDegreePolynomial:
        return cls(0.0, float(value))

    @classmethod
    def phi_1(cls) -> FirstDegreePolynomial:
        """Ascending reference ramp ``x`` on ``[0, 1]``."""
        return cls(1.0, 0.0)

    @classmethod
    def phi_2(cls) -> FirstDegreePolynomial:
        """Descending reference ramp ``1 - x`` on ``[0, 1]``."""
        return cls(-1.0, 1.0)

    @classmethod
    def transformation_to_0_1(cls, beg: float, end: float) -> FirstDegreePolynomial:
        return transformation_to_0_1(beg, end)

    @classmethod
    def transformation_from_m1_p1(cls, beg: float, end: float) -> FirstDegreePolynomial:
        return transformation_from_m1_p1(beg, end)


@dataclass(frozen=True, slots=True)
class SecondDegreePolynomial:
    """``quadratic_coefficient * x**2 + linear_coefficient * x + independent_term``."""

    quadratic_coefficient: float
    linear_coefficient: float
    independent_term: float

    @overload
    def evaluate(self, x: float) -> float: ...
    @overload
    def evaluate(self, x: FloatArray) -> FloatArray: ...

    def evaluate(self, x):
        a = self.quadratic_coefficient
        b = self.linear_coefficient
        c = self.independent_term
        if np.ndim(x) == 0:
            return float(a * x * x + b * x + c)
        x = np.asarray(x, dtype=float)
        return a * x * x + b * x + c

    def __call__(self, x):
        return self.evaluate(x)

    @property
    def degree(self) -> int:
        if self.quadratic_coefficient != 0.0:
            return 2
        return 0 if self.linear_coefficient == 0.0 else 1

    def differentiate(self) -> FirstDegreePolynomial:
        return FirstDegreePolynomial(
            2.0 * self.quadratic_coefficient, float(self.linear_coefficient)
        )

    def compose(self, other: FirstDegreePolynomial) -> SecondDegreePolynomial:
        """Return ``self(other(x))`` for an affine ``other``."""
        a = self.quadratic_coefficient
        b = self.linear_coefficient
        c = self.independent_term
        m = other.coefficient
        k = other.independent_term
        # a (m x + k)^2 + b (m x + k) + c
        return SecondDegreePolynomial(
            quadratic_coefficient=a * m * m,
            linear_coefficient=2.0 * a * m * k + b * m,
            independent_term=a * k * k + b * k + c,
        )

    @classmethod
    def zero(cls) -> SecondDegreePolynomial:
        return cls(0.0, 0.0, 0.0)


def _check_interval(beg: float, end: float) -> tuple[float, float]:
    beg = float(beg)
    end = float(end)
    if not (math.isfinite(beg) and math.isfinite(end)):
        raise DegenerateIntervalError(f"Interval bounds must be finite, got [{beg}, {end}]")
    if beg == end:
        raise DegenerateIntervalError(f"Degenerate interval [{beg}, {end}]")
    return beg, end


def transformation_to_0_1(beg: float, end: float) -> FirstDegreePolynomial:
    """Affine map sending ``beg -> 0`` and ``end -> 1``."""
    beg, end = _check_interval(beg, end)
    width = end - beg
    return FirstDegreePolynomial(1.0 / width, -beg / width)


def transformation_from_m1_p1(beg: float, end: float) -> FirstDegreePolynomial:
    """Affine map sending ``-1 -> beg`` and ``1 -> end``.

    Its derivative, ``(end - beg) / 2``, is the Jacobian of the substitution
    used by Gauss-Legendre integration over ``[beg, end]``.
    """
    beg, end = _check_interval(beg, end)
    return FirstDegreePolynomial((end - beg) / 2.0, (end + beg) / 2.0)
