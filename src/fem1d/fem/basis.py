# src/fem1d/fem/basis.py
"""Piecewise-linear "hat" basis over a 1D mesh.

Every basis function is stored with the same layout: four first-degree pieces
split by three breakpoints ``(prev, cur, next)``::

    [0, ramp_up, ramp_down, 0]

``ramp_up`` rises from 0 at ``prev`` to 1 at ``cur`` and ``ramp_down`` falls
back to 0 at ``next``. The two boundary functions get a virtual neighbour one
unit past the mesh edge, so their outer ramp lies outside the mesh and only
one ramp is active on ``[mesh[0], mesh[-1]]``.

Ramps are stored as ``c x + d``, so at a node far from the origin the value
drifts from an exact 1 or 0 by a few ulps times ``|x| / h``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import cast

import numpy as np
from numpy.typing import NDArray

from ..exceptions import DimensionMismatchError
from ..numerics.mesh import validate_mesh
from ..numerics.piecewise import PiecewisePolynomial
from ..numerics.polynomials import FirstDegreePolynomial, transformation_to_0_1

__all__ = ["hat_function", "build_linear_basis", "LinearBasis"]

# distance to the virtual neighbour of a boundary node
_VIRTUAL_OFFSET = 1.0


def hat_function(prev: float, cur: float, nxt: float) -> PiecewisePolynomial:
    """Hat centred on ``cur`` with support ``[prev, nxt]``."""
    ramp_up = FirstDegreePolynomial.phi_1().compose(transformation_to_0_1(prev, cur))
    ramp_down = FirstDegreePolynomial.phi_2().compose(transformation_to_0_1(cur, nxt))
    zero = FirstDegreePolynomial.zero()
    return PiecewisePolynomial((zero, ramp_up, ramp_down, zero), (prev, cur, nxt))


def build_linear_basis(
    mesh: Iterable[float] | NDArray[np.floating],
) -> list[PiecewisePolynomial]:
    """One hat per mesh node, boundary nodes included."""
    x = validate_mesh(mesh)
    n = int(x.shape[0])

    out: list[PiecewisePolynomial] = []
    for i in range(n):
        prev = float(x[i - 1]) if i > 0 else float(x[0]) - _VIRTUAL_OFFSET
        nxt = float(x[i + 1]) if i < n - 1 else float(x[-1]) + _VIRTUAL_OFFSET
        out.append(hat_function(prev, float(x[i]), nxt))
    return out


@dataclass(frozen=True, slots=True)
class LinearBasis:
    """The hat basis of a mesh together with the piecewise derivatives."""

    mesh: NDArray[np.floating]
    functions: tuple[PiecewisePolynomial, ...]
    derivatives: tuple[PiecewisePolynomial, ...]

    @classmethod
    def from_mesh(cls, mesh: Iterable[float] | NDArray[np.floating]) -> LinearBasis:
        x = validate_mesh(mesh)
        functions = tuple(build_linear_basis(x))
        derivatives = tuple(f.differentiate() for f in functions)
        return cls(mesh=x, functions=functions, derivatives=derivatives)

    @property
    def n_nodes(self) -> int:
        return int(self.mesh.shape[0])

    def __len__(self) -> int:
        return len(self.functions)

    def __getitem__(self, i: int) -> PiecewisePolynomial:
        return self.functions[i]

    def __iter__(self) -> Iterator[PiecewisePolynomial]:
        return iter(self.functions)

    def evaluate(self, coefficients: NDArray[np.floating], x) -> NDArray[np.floating]:
        """Evaluate ``Σ_i coefficients[i] φ_i(x)``, e.g. a solution vector."""
        c = np.asarray(coefficients, dtype=float)
        if c.shape != (len(self),):
            raise DimensionMismatchError(
                f"coefficients must have shape {(len(self),)} got {c.shape}"
            )
        xs = np.asarray(x, dtype=float)
        out = np.zeros_like(xs, dtype=float)
        for ci, phi in zip(c, self.functions, strict=True):
            if ci != 0.0:
                out = out + ci * np.asarray(phi(xs), dtype=float)
        return cast(NDArray[np.floating], out)
