from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, cast

import numpy as np
from numpy.typing import NDArray

from .solvers import DiffusionSolverTimeDependent

__all__ = ["FEMSolution1D", "run_time_steps"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FEMSolution1D:
    mesh: NDArray[np.floating]  # (Nx,)
    times: NDArray[np.floating]  # (Nt,)
    u: NDArray[np.floating]  # (Nt, Nx)
    method: str

    @property
    def u_final(self) -> NDArray[np.floating]:
        return cast(NDArray[np.floating], self.u[-1])


def run_time_steps(
    solver: DiffusionSolverTimeDependent,
    n_steps: int,
    time_step: float,
    integration_precision: int | None = None,
    store: Literal["all", "final"] = "all",
) -> FEMSolution1D:
    """Advance ``solver`` by ``n_steps`` and collect the nodal values.

    With ``store="all"`` row 0 is the state before the first step and row
    ``k`` the state after step ``k``. With ``store="final"`` only the last
    state is kept (``times`` then holds a single entry).
    """
    n_steps = int(n_steps)
    if n_steps < 0:
        raise ValueError("n_steps must be >= 0")
    if store not in ("all", "final"):
        raise ValueError("store must be 'all' or 'final'")
    dt = float(time_step)
    if not dt > 0.0:
        raise ValueError("time_step must be > 0")

    Nx = int(solver.mesh.shape[0])
    t0 = solver.time

    if store == "all":
        U = np.empty((n_steps + 1, Nx), dtype=float)
        times = t0 + dt * np.arange(n_steps + 1, dtype=float)
    else:
        U = np.empty((1, Nx), dtype=float)
        times = np.array([t0 + dt * n_steps], dtype=float)
    U[0] = solver.state

    for n in range(n_steps):
        u = solver.solve(integration_precision=integration_precision, time_step=dt)
        if store == "all":
            U[n + 1] = u
        else:
            U[0] = u

    logger.debug("Ran %d steps of %s (dt=%g)", n_steps, solver.method.name, dt)
    return FEMSolution1D(
        mesh=np.array(solver.mesh, dtype=float),
        times=times,
        u=U,
        method=solver.method.name,
    )
