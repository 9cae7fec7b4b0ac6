# src/fem1d/fem/solvers.py
"""Equation-specific solvers behind one ``solve`` contract.

Every solver returns the full nodal solution (length ``n``, mesh order,
boundary values included). Steady solvers ignore ``time_step``; the
time-dependent solver advances its own interior state on every call, so two
calls advance the simulation by two steps.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol, cast, runtime_checkable

import numpy as np
from numpy.typing import NDArray

from ..config import DEFAULT_CONFIG, SolverConfig
from ..exceptions import DimensionMismatchError
from ..numerics.tridiag import solve_by_thomas, solve_interior_by_thomas
from ..types import DiffusionParams, DiffusionParamsTimeDependent, StokesParams1D
from .assembly import (
    AssembledSystem,
    assemble_steady_diffusion,
    assemble_stokes_pressure,
    assemble_time_dependent_diffusion,
)
from .basis import LinearBasis
from .methods import resolve_method

__all__ = [
    "DiffEquationSolver",
    "DiffusionSolverTimeIndependent",
    "DiffusionSolverTimeDependent",
    "StokesSolver1D",
    "StaticPressureSolver",
    "NavierStokesSolver1D",
    "make_solver",
]

logger = logging.getLogger(__name__)

MeshLike = Iterable[float] | NDArray[np.floating]


@runtime_checkable
class DiffEquationSolver(Protocol):
    """Anything that can produce the next nodal solution."""

    def solve(
        self,
        integration_precision: int | None = None,
        time_step: float | None = None,
    ) -> NDArray[np.floating]:  # pragma: no cover
        ...


class DiffusionSolverTimeIndependent:
    """Steady ``-μ u'' + b u' = 0`` with Dirichlet values at both ends."""

    def __init__(
        self,
        params: DiffusionParams,
        mesh: MeshLike,
        config: SolverConfig | None = None,
    ) -> None:
        self.params = params
        self.basis = LinearBasis.from_mesh(mesh)
        self.config = DEFAULT_CONFIG if config is None else config
        self.system: AssembledSystem | None = None
        logger.info(
            "Steady diffusion solver: n=%d mu=%g b=%g",
            len(self.basis),
            params.mu,
            params.b,
        )

    @property
    def mesh(self) -> NDArray[np.floating]:
        return self.basis.mesh

    def solve(
        self,
        integration_precision: int | None = None,
        time_step: float | None = None,
    ) -> NDArray[np.floating]:
        precision, _ = self.config.resolve(integration_precision, None)
        p = self.params
        system = assemble_steady_diffusion(
            self.basis,
            p.mu,
            p.b,
            p.boundary_conditions,
            precision,
            check_finite=self.config.check_finite,
        )
        u = solve_by_thomas(system.matrix, system.rhs)
        u[0], u[-1] = p.boundary_conditions
        self.system = system
        return u


class DiffusionSolverTimeDependent:
    """Theta-scheme stepping of ``u_t - μ u_xx + b u_x = 0``.

    ``internal_state`` holds the interior values (length ``n - 2``). It is
    updated in place, and only once a step has been assembled and solved
    without error. ``steps_taken`` and the elapsed ``time`` (the sum of every
    accepted ``Δt``) advance with it.
    """

    def __init__(
        self,
        params: DiffusionParamsTimeDependent,
        mesh: MeshLike,
        config: SolverConfig | None = None,
    ) -> None:
        self.params = params
        self.basis = LinearBasis.from_mesh(mesh)
        self.config = DEFAULT_CONFIG if config is None else config
        self.method = resolve_method(params.method)
        self.system: AssembledSystem | None = None
        self.steps_taken = 0
        self.time = 0.0

        n_int = len(self.basis) - 2
        if params.initial_conditions is None:
            self.internal_state = np.zeros(n_int, dtype=float)
        else:
            ic = np.array(params.initial_conditions, dtype=float)
            if ic.shape != (n_int,):
                raise DimensionMismatchError(
                    f"initial_conditions must have length {n_int} "
                    f"(mesh interior), got {ic.shape[0]}"
                )
            self.internal_state = ic

        logger.info(
            "Time-dependent diffusion solver: n=%d mu=%g b=%g method=%s",
            len(self.basis),
            params.mu,
            params.b,
            self.method.name,
        )

    @property
    def mesh(self) -> NDArray[np.floating]:
        return self.basis.mesh

    @property
    def theta(self) -> float:
        return self.method.theta

    @property
    def state(self) -> NDArray[np.floating]:
        """Full nodal vector: boundary values around ``internal_state``."""
        left, right = self.params.boundary_conditions
        return cast(
            NDArray[np.floating],
            np.concatenate(([left], self.internal_state, [right])),
        )

    def solve(
        self,
        integration_precision: int | None = None,
        time_step: float | None = None,
    ) -> NDArray[np.floating]:
        precision, dt = self.config.resolve(integration_precision, time_step)
        if not dt > 0.0:
            raise ValueError("time_step must be > 0")

        p = self.params
        system = assemble_time_dependent_diffusion(
            self.basis,
            p.mu,
            p.b,
            p.boundary_conditions,
            self.internal_state,
            dt,
            precision,
            theta=self.theta,
            check_finite=self.config.check_finite,
        )
        u = solve_interior_by_thomas(system.matrix, system.rhs)
        u[0], u[-1] = p.boundary_conditions

        self.internal_state[:] = u[1:-1]
        self.system = system
        self.steps_taken += 1
        self.time += dt
        logger.debug(
            "Time step %d done (dt=%g, t=%g)", self.steps_taken, dt, self.time
        )
        return u


class StokesSolver1D:
    """Static pressure ``(1/ρ) p_x = f`` with the pressure fixed at the outlet.

    With a constant 1D velocity the steady convective term of Navier-Stokes
    vanishes, so :data:`NavierStokesSolver1D` solves the same equation.
    """

    def __init__(
        self,
        params: StokesParams1D,
        mesh: MeshLike,
        config: SolverConfig | None = None,
    ) -> None:
        self.params = params
        self.basis = LinearBasis.from_mesh(mesh)
        self.config = DEFAULT_CONFIG if config is None else config
        self.system: AssembledSystem | None = None
        logger.info(
            "Stokes pressure solver: n=%d rho=%g outlet=%s",
            len(self.basis),
            params.rho,
            params.outlet,
        )

    @property
    def mesh(self) -> NDArray[np.floating]:
        return self.basis.mesh

    def solve(
        self,
        integration_precision: int | None = None,
        time_step: float | None = None,
    ) -> NDArray[np.floating]:
        precision, _ = self.config.resolve(integration_precision, None)
        p = self.params
        system = assemble_stokes_pressure(
            self.basis,
            p.rho,
            p.force_function,
            p.hydrostatic_pressure,
            precision,
            outlet=p.outlet,
            check_finite=self.config.check_finite,
        )
        if p.outlet == "right":
            u = solve_by_thomas(system.matrix, system.rhs)
            u[-1] = p.hydrostatic_pressure
        else:
            # Dirichlet row first would leave a zero pivot in row 1; sweep from the inlet
            flipped = system.reversed()
            u = np.ascontiguousarray(solve_by_thomas(flipped.matrix, flipped.rhs)[::-1])
            u[0] = p.hydrostatic_pressure
        self.system = system
        return cast(NDArray[np.floating], u)


StaticPressureSolver = StokesSolver1D
NavierStokesSolver1D = StokesSolver1D

AnyParams = DiffusionParams | DiffusionParamsTimeDependent | StokesParams1D
AnySolver = DiffusionSolverTimeIndependent | DiffusionSolverTimeDependent | StokesSolver1D


def make_solver(
    params: AnyParams, mesh: MeshLike, config: SolverConfig | None = None
) -> AnySolver:
    """Build the solver matching the parameter type."""
    if isinstance(params, DiffusionParamsTimeDependent):
        return DiffusionSolverTimeDependent(params, mesh, config)
    if isinstance(params, DiffusionParams):
        return DiffusionSolverTimeIndependent(params, mesh, config)
    if isinstance(params, StokesParams1D):
        return StokesSolver1D(params, mesh, config)
    raise TypeError(f"No solver for parameters of type {type(params).__name__}")
