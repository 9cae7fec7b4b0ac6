# src/fem1d/numerics/quadrature.py
"""Gauss-Legendre quadrature on ``[-1, 1]`` and its change of variables.

A physical integral is computed as::

    ∫_a^b f(x) dx ≈ Σ_j f(T(x_j)) · T'(x_j) · w_j

where ``T = transformation_from_m1_p1(a, b)`` and ``(x_j, w_j)`` is the
degree-``n`` rule. The rule is exact for polynomials up to degree ``2n - 1``.

Nodes and weights come from :func:`numpy.polynomial.legendre.leggauss` and are
cached per degree, so reusing one degree for every interval of an assembly
pass costs a single computation.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import cast

import numpy as np
from numpy.polynomial.legendre import leggauss
from numpy.typing import NDArray

from ..exceptions import QuadratureDegreeError
from .polynomials import transformation_from_m1_p1

__all__ = [
    "MIN_QUADRATURE_DEGREE",
    "check_degree",
    "gauss_legendre",
    "quad_pair",
    "integrate",
    "QuadratureRule",
]

MIN_QUADRATURE_DEGREE = 2

VectorFn = Callable[[NDArray[np.floating]], NDArray[np.floating] | float]


def check_degree(degree: int) -> int:
    d = int(degree)
    if d != degree:
        raise QuadratureDegreeError(
            f"Gauss-Legendre degree must be an integer, got {degree!r}"
        )
    if d < MIN_QUADRATURE_DEGREE:
        raise QuadratureDegreeError(
            f"Gauss-Legendre degree must be >= {MIN_QUADRATURE_DEGREE}, got {degree}"
        )
    return d


@lru_cache(maxsize=32)
def _rule_by_angle(degree: int) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
    # leggauss returns ascending abscissas; sorting by angle means descending x
    nodes, weights = leggauss(degree)
    nodes = np.ascontiguousarray(nodes[::-1], dtype=float)
    weights = np.ascontiguousarray(weights[::-1], dtype=float)
    nodes.setflags(write=False)
    weights.setflags(write=False)
    return nodes, weights


def gauss_legendre(degree: int) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
    """Return ``(nodes, weights)`` of the degree-``degree`` rule on ``[-1, 1]``.

    Nodes are ordered by increasing ``arccos(node)``. The returned arrays are
    read-only views into the cache.
    """
    return _rule_by_angle(check_degree(degree))


def quad_pair(degree: int, i: int) -> tuple[float, float]:
    """Return ``(angle, weight)`` for the ``i``-th node, ``1 <= i <= degree``.

    ``cos(angle)`` is the abscissa on ``[-1, 1]``.
    """
    nodes, weights = gauss_legendre(degree)
    if not (1 <= int(i) <= nodes.shape[0]):
        raise IndexError(f"quadrature index must be in [1, {nodes.shape[0]}], got {i}")
    x = float(nodes[int(i) - 1])
    # clip guards arccos against |x| a hair above 1
    return math.acos(min(1.0, max(-1.0, x))), float(weights[int(i) - 1])


def integrate(fn: VectorFn, a: float, b: float, degree: int) -> float:
    """Integrate ``fn`` over ``[a, b]``; ``fn`` receives an array of points."""
    return QuadratureRule(degree).integrate(fn, a, b)


@dataclass(frozen=True, slots=True)
class QuadratureRule:
    """A fixed-degree rule reused across many intervals."""

    degree: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "degree", check_degree(self.degree))

    @property
    def nodes(self) -> NDArray[np.floating]:
        return gauss_legendre(self.degree)[0]

    @property
    def weights(self) -> NDArray[np.floating]:
        return gauss_legendre(self.degree)[1]

    def points_on(
        self, a: float, b: float
    ) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
        """Map the rule onto ``[a, b]``.

        Returns the physical points ``T(x_j)`` and the Jacobian-scaled weights
        ``T'(x_j) · w_j``.
        """
        T = transformation_from_m1_p1(a, b)
        dT = T.differentiate()
        points = T.evaluate(self.nodes)
        scaled = dT.evaluate(self.nodes) * self.weights
        return cast(NDArray[np.floating], points), cast(NDArray[np.floating], scaled)

    def integrate(self, fn: VectorFn, a: float, b: float) -> float:
        points, scaled = self.points_on(a, b)
        values = np.broadcast_to(np.asarray(fn(points), dtype=float), points.shape)
        return float(np.dot(values, scaled))
