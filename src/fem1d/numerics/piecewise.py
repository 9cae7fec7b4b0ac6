# src/fem1d/numerics/piecewise.py
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import cast

import numpy as np
from numpy.typing import NDArray

from ..exceptions import DimensionMismatchError, MeshNotOrderedError
from .polynomials import FirstDegreePolynomial, SecondDegreePolynomial

__all__ = ["Polynomial", "PiecewisePolynomial"]

Polynomial = FirstDegreePolynomial | SecondDegreePolynomial


@dataclass(frozen=True, slots=True)
class PiecewisePolynomial:
    """
    A function defined by one polynomial per interval.

    ``breakpoints`` split the real line into ``len(breakpoints) + 1`` intervals;
    polynomial ``k`` is used on ``[breakpoints[k-1], breakpoints[k])`` with the
    first and last pieces extending to -inf / +inf.

    Evaluation picks the first polynomial whose breakpoint exceeds ``x``, else
    the last one. A point sitting exactly on a breakpoint therefore belongs to
    the piece on its right.
    """

    polynomials: tuple[Polynomial, ...]
    breakpoints: tuple[float, ...]

    def __post_init__(self) -> None:
        polys = tuple(self.polynomials)
        bps = tuple(float(b) for b in self.breakpoints)
        if len(polys) != len(bps) + 1:
            raise DimensionMismatchError(
                f"Need len(polynomials) == len(breakpoints) + 1, "
                f"got {len(polys)} and {len(bps)}"
            )
        arr = np.asarray(bps, dtype=float)
        if arr.size and not np.all(np.isfinite(arr)):
            raise MeshNotOrderedError("breakpoints must be finite")
        if arr.size > 1 and not np.all(np.diff(arr) > 0.0):
            raise MeshNotOrderedError("breakpoints must be strictly increasing")
        # normalize to tuples on a frozen instance
        object.__setattr__(self, "polynomials", polys)
        object.__setattr__(self, "breakpoints", bps)

    # --- constructors ---

    @classmethod
    def from_polynomials(
        cls, polynomials: Iterable[Polynomial], breakpoints: Iterable[float]
    ) -> PiecewisePolynomial:
        return cls(tuple(polynomials), tuple(breakpoints))

    @classmethod
    def from_values(
        cls,
        coefficients: Sequence[float],
        independent_terms: Sequence[float],
        breakpoints: Sequence[float],
    ) -> PiecewisePolynomial:
        """Build first-degree pieces from raw coefficients and independent terms."""
        if len(coefficients) != len(independent_terms):
            raise DimensionMismatchError(
                "coefficients and independent_terms must have the same length"
            )
        polys = [
            FirstDegreePolynomial(float(c), float(d))
            for c, d in zip(coefficients, independent_terms, strict=True)
        ]
        return cls(tuple(polys), tuple(breakpoints))

    @classmethod
    def from_constants(
        cls, values: Sequence[float], breakpoints: Sequence[float]
    ) -> PiecewisePolynomial:
        """Step function taking ``values[k]`` on interval ``k``."""
        return cls(
            tuple(FirstDegreePolynomial.constant(v) for v in values),
            tuple(breakpoints),
        )

    # --- evaluation ---

    def piece_index(self, x):
        """Index of the polynomial used at ``x`` (scalar or array)."""
        return np.searchsorted(np.asarray(self.breakpoints, dtype=float), x, side="right")

    def evaluate(self, x):
        if np.ndim(x) == 0:
            k = int(self.piece_index(float(x)))
            return float(self.polynomials[k].evaluate(float(x)))

        xs = np.asarray(x, dtype=float)
        idx = self.piece_index(xs)
        out = np.empty_like(xs, dtype=float)
        for k, poly in enumerate(self.polynomials):
            mask = idx == k
            if np.any(mask):
                out[mask] = poly.evaluate(xs[mask])
        return cast(NDArray[np.floating], out)

    def __call__(self, x):
        return self.evaluate(x)

    def __len__(self) -> int:
        return len(self.polynomials)

    def differentiate(self) -> PiecewisePolynomial:
        """Differentiate piece by piece, keeping the breakpoints."""
        return PiecewisePolynomial(
            tuple(p.differentiate() for p in self.polynomials), self.breakpoints
        )
