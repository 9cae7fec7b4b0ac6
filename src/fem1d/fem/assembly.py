# src/fem1d/fem/assembly.py
"""Weak-form assembly for the 1D hat basis.

All three assembly modes share :func:`integrate_weak_forms`, which integrates,
interval by interval, the three bilinear forms

    mass        M[i, j] = ∫ φ_j  φ_i
    stiffness   K[i, j] = ∫ φ_j' φ_i'
    convection  C[i, j] = ∫ φ_j' φ_i

with a fixed-degree Gauss-Legendre rule. Hats only overlap their direct
neighbours, so every matrix is dense-shaped but populated on the tridiagonal
band only; diagonal entries collect both adjoining intervals.

Boundary handling differs per mode:

- steady diffusion: rows ``0`` and ``n-1`` are replaced by identity rows with
  the Dirichlet value in the load vector;
- time-dependent diffusion: the boundary unknowns are eliminated, giving an
  ``(n-2) x (n-2)`` interior system;
- Stokes pressure: the outlet row is Dirichlet and the inlet row keeps its
  weak-form equation over its single interval (natural condition).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal, cast

import numpy as np
from numpy.typing import NDArray

from ..exceptions import DimensionMismatchError, NonFiniteSystemError
from ..numerics.quadrature import QuadratureRule
from ..numerics.tridiag import Tridiag
from ..typing import SourceFn
from .basis import LinearBasis

__all__ = [
    "AssembledSystem",
    "ElementIntegrals",
    "integrate_weak_forms",
    "load_vector",
    "assemble_steady_diffusion",
    "assemble_time_dependent_diffusion",
    "assemble_stokes_pressure",
]

logger = logging.getLogger(__name__)

MeshLike = Iterable[float] | NDArray[np.floating]
Outlet = Literal["left", "right"]


@dataclass(frozen=True, slots=True)
class AssembledSystem:
    """A square linear system ``matrix @ x = rhs``.

    ``matrix`` is dense-shaped with entries only on the tridiagonal band.
    """

    matrix: NDArray[np.floating]
    rhs: NDArray[np.floating]

    @property
    def size(self) -> int:
        return int(self.rhs.shape[0])

    def as_tridiag(self) -> Tridiag:
        return Tridiag.from_dense(self.matrix)

    def reversed(self) -> AssembledSystem:
        """Same system with unknowns and equations numbered from the other end."""
        return AssembledSystem(
            matrix=np.ascontiguousarray(self.matrix[::-1, ::-1]),
            rhs=np.ascontiguousarray(self.rhs[::-1]),
        )

    def check_finite(self) -> None:
        if not np.all(np.isfinite(self.matrix)):
            raise NonFiniteSystemError("assembled matrix contains NaN or inf")
        if not np.all(np.isfinite(self.rhs)):
            raise NonFiniteSystemError("assembled load vector contains NaN or inf")


@dataclass(frozen=True, slots=True)
class ElementIntegrals:
    """The three ``(n x n)`` banded weak-form matrices of a basis."""

    mass: NDArray[np.floating]
    stiffness: NDArray[np.floating]
    convection: NDArray[np.floating]

    @property
    def n(self) -> int:
        return int(self.mass.shape[0])

    def operator(self, mu: float, b: float) -> NDArray[np.floating]:
        """Spatial operator ``S = μ K + b C``."""
        return cast(
            NDArray[np.floating], float(mu) * self.stiffness + float(b) * self.convection
        )


def _as_basis(mesh: MeshLike | LinearBasis) -> LinearBasis:
    if isinstance(mesh, LinearBasis):
        return mesh
    return LinearBasis.from_mesh(mesh)


def _eval_source(fn: SourceFn, x: NDArray[np.floating]) -> NDArray[np.floating]:
    """Evaluate ``fn`` on an array of points.

    A vectorized call is tried first; scalar-only callables fall back to a
    pointwise loop.
    """
    try:
        arr = np.asarray(fn(x), dtype=float)
        if arr.shape == x.shape:
            return cast(NDArray[np.floating], arr)
        if arr.ndim == 0:
            return cast(NDArray[np.floating], np.full_like(x, float(arr), dtype=float))
    except (TypeError, ValueError):
        pass

    out = np.empty_like(x, dtype=float)
    for k, xk in enumerate(x):
        out[k] = float(fn(float(xk)))
    return cast(NDArray[np.floating], out)


def integrate_weak_forms(basis: LinearBasis, rule: QuadratureRule) -> ElementIntegrals:
    """Integrate mass, stiffness and convection forms over every mesh interval."""
    x = basis.mesh
    n = len(basis)

    mass = np.zeros((n, n), dtype=float)
    stiffness = np.zeros((n, n), dtype=float)
    convection = np.zeros((n, n), dtype=float)

    for k in range(n - 1):
        pts, w = rule.points_on(float(x[k]), float(x[k + 1]))
        local = (k, k + 1)
        phi = {a: np.asarray(basis.functions[a](pts), dtype=float) for a in local}
        dphi = {a: np.asarray(basis.derivatives[a](pts), dtype=float) for a in local}

        for i in local:
            for j in local:
                mass[i, j] += float(np.dot(phi[j] * phi[i], w))
                stiffness[i, j] += float(np.dot(dphi[j] * dphi[i], w))
                convection[i, j] += float(np.dot(dphi[j] * phi[i], w))

    return ElementIntegrals(mass=mass, stiffness=stiffness, convection=convection)


def load_vector(
    basis: LinearBasis, rule: QuadratureRule, source: SourceFn
) -> NDArray[np.floating]:
    """``F[i] = ∫ f φ_i`` over the mesh."""
    x = basis.mesh
    n = len(basis)
    F = np.zeros(n, dtype=float)
    for k in range(n - 1):
        pts, w = rule.points_on(float(x[k]), float(x[k + 1]))
        f = _eval_source(source, pts)
        for i in (k, k + 1):
            F[i] += float(np.dot(f * np.asarray(basis.functions[i](pts), dtype=float), w))
    return F


def _boundary_pair(boundary_conditions) -> tuple[float, float]:
    bc = tuple(float(v) for v in boundary_conditions)
    if len(bc) != 2:
        raise DimensionMismatchError(
            f"boundary_conditions must hold 2 values, got {len(bc)}"
        )
    return bc[0], bc[1]


def _finish(system: AssembledSystem, check_finite: bool) -> AssembledSystem:
    if check_finite:
        system.check_finite()
    return system


def assemble_steady_diffusion(
    mesh: MeshLike | LinearBasis,
    mu: float,
    b: float,
    boundary_conditions,
    precision: int,
    *,
    check_finite: bool = True,
) -> AssembledSystem:
    """Assemble ``-μ u'' + b u' = 0`` with Dirichlet rows at both ends."""
    basis = _as_basis(mesh)
    left, right = _boundary_pair(boundary_conditions)
    rule = QuadratureRule(precision)
    forms = integrate_weak_forms(basis, rule)

    n = forms.n
    A = forms.operator(mu, b).copy()
    rhs = np.zeros(n, dtype=float)

    A[0, :] = 0.0
    A[0, 0] = 1.0
    rhs[0] = left
    A[-1, :] = 0.0
    A[-1, -1] = 1.0
    rhs[-1] = right

    logger.debug("Assembled steady diffusion system n=%d precision=%d", n, rule.degree)
    return _finish(AssembledSystem(matrix=A, rhs=rhs), check_finite)


def assemble_time_dependent_diffusion(
    mesh: MeshLike | LinearBasis,
    mu: float,
    b: float,
    boundary_conditions,
    state: NDArray[np.floating],
    time_step: float,
    precision: int,
    theta: float = 0.0,
    *,
    check_finite: bool = True,
) -> AssembledSystem:
    """Assemble one theta-scheme step of ``u_t - μ u_xx + b u_x = 0``.

    Parameters
    ----------
    state : ndarray
        Interior values ``u^n`` (length ``n - 2``).
    theta : float, default 0.0
        ``0`` keeps only the mass matrix on the left-hand side.

    Returns
    -------
    AssembledSystem
        The ``(n-2) x (n-2)`` interior system for ``u^{n+1}``. Boundary
        values are eliminated into the load vector at rows ``1`` and ``n-2``.
    """
    dt = float(time_step)
    if not dt > 0.0:
        raise ValueError("time_step must be > 0")
    theta = float(theta)
    if not (0.0 <= theta <= 1.0):
        raise ValueError("theta must be in [0, 1]")

    basis = _as_basis(mesh)
    n = len(basis)
    u_n = np.asarray(state, dtype=float)
    if u_n.shape != (n - 2,):
        raise DimensionMismatchError(
            f"state must have shape {(n - 2,)} got {u_n.shape}"
        )
    g = np.asarray(_boundary_pair(boundary_conditions), dtype=float)

    rule = QuadratureRule(precision)
    forms = integrate_weak_forms(basis, rule)
    S = forms.operator(mu, b)
    L = forms.mass + theta * dt * S
    R = forms.mass - (1.0 - theta) * dt * S

    inner = slice(1, n - 1)
    bnd = [0, n - 1]
    A = np.ascontiguousarray(L[inner, inner])
    rhs = R[inner, inner] @ u_n + (R[inner][:, bnd] - L[inner][:, bnd]) @ g

    logger.debug(
        "Assembled time-dependent system n_int=%d dt=%g theta=%g precision=%d",
        n - 2,
        dt,
        theta,
        rule.degree,
    )
    return _finish(
        AssembledSystem(matrix=A, rhs=cast(NDArray[np.floating], rhs)), check_finite
    )


def assemble_stokes_pressure(
    mesh: MeshLike | LinearBasis,
    rho: float,
    force_function: SourceFn,
    pressure: float,
    precision: int,
    outlet: Outlet = "right",
    *,
    check_finite: bool = True,
) -> AssembledSystem:
    """Assemble the static pressure equation ``(1/ρ) p_x = f``.

    Row ``i`` is ``Σ_j p_j ∫ φ_j' φ_i = ρ ∫ f φ_i``. The outlet row is fixed
    to ``pressure``; the inlet row keeps its weak-form equation.
    """
    if outlet not in ("left", "right"):
        raise ValueError("outlet must be 'left' or 'right'")

    basis = _as_basis(mesh)
    rule = QuadratureRule(precision)
    forms = integrate_weak_forms(basis, rule)

    A = forms.convection.copy()
    rhs = float(rho) * load_vector(basis, rule, force_function)

    row = -1 if outlet == "right" else 0
    A[row, :] = 0.0
    A[row, row] = 1.0
    rhs[row] = float(pressure)

    logger.debug(
        "Assembled Stokes pressure system n=%d outlet=%s precision=%d",
        forms.n,
        outlet,
        rule.degree,
    )
    return _finish(AssembledSystem(matrix=A, rhs=rhs), check_finite)
