from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from time import perf_counter

import numpy as np
import pandas as pd

from ..config import SolverConfig
from ..fem.solvers import DiffusionSolverTimeIndependent
from ..numerics.mesh import uniform_mesh
from ..types import DiffusionParams
from .exact import exact_steady_diffusion
from .tables import add_observed_order, to_frame

__all__ = ["SteadyConvergenceRun", "run_steady_case", "steady_convergence_table"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SteadyConvergenceRun:
    n_nodes: int
    h: float
    max_abs_err: float
    runtime_ms: float


def run_steady_case(
    n_nodes: int,
    params: DiffusionParams,
    *,
    x_lb: float = 0.0,
    x_ub: float = 1.0,
    integration_precision: int = 8,
) -> SteadyConvergenceRun:
    """Solve on a uniform mesh and compare nodal values with the closed form."""
    mesh = uniform_mesh(x_lb, x_ub, n_nodes)
    solver = DiffusionSolverTimeIndependent(
        params, mesh, SolverConfig(integration_precision=integration_precision)
    )

    t0 = perf_counter()
    u = solver.solve()
    runtime_ms = 1e3 * (perf_counter() - t0)

    exact = exact_steady_diffusion(
        mesh, params.mu, params.b, params.boundary_conditions, x_lb=x_lb, x_ub=x_ub
    )
    return SteadyConvergenceRun(
        n_nodes=int(n_nodes),
        h=float((x_ub - x_lb) / (n_nodes - 1)),
        max_abs_err=float(np.max(np.abs(u - exact))),
        runtime_ms=float(runtime_ms),
    )


def steady_convergence_table(
    mesh_sizes: Sequence[int],
    mu: float,
    b: float,
    boundary_conditions,
    integration_precision: int = 8,
    *,
    x_lb: float = 0.0,
    x_ub: float = 1.0,
) -> pd.DataFrame:
    """Refinement study for the steady solver on uniform meshes.

    Columns: ``n_nodes, h, max_abs_err, runtime_ms, observed_order``; rows are
    ordered from coarsest to finest.
    """
    params = DiffusionParams(mu=mu, b=b, boundary_conditions=boundary_conditions)
    runs = []
    for n in mesh_sizes:
        run = run_steady_case(
            int(n),
            params,
            x_lb=x_lb,
            x_ub=x_ub,
            integration_precision=integration_precision,
        )
        logger.debug("n=%d max_abs_err=%.3e", run.n_nodes, run.max_abs_err)
        runs.append(run)
    return add_observed_order(to_frame(runs))
