"""Finite-element layer: hat basis, weak-form assembly and solvers.

Supported equations (1D, Dirichlet data):

    -μ u'' + b u' = 0                 (steady convection-diffusion)
    u_t - μ u_xx + b u_x = 0          (theta-scheme time stepping)
    (1/ρ) p_x = f                     (static Stokes pressure)
"""

from .assembly import (
    AssembledSystem,
    ElementIntegrals,
    assemble_steady_diffusion,
    assemble_stokes_pressure,
    assemble_time_dependent_diffusion,
    integrate_weak_forms,
    load_vector,
)
from .basis import LinearBasis, build_linear_basis, hat_function
from .methods import (
    ThetaMethod,
    available_methods,
    register_method,
    resolve_method,
    resolve_theta,
)
from .simulate import FEMSolution1D, run_time_steps
from .solvers import (
    DiffEquationSolver,
    DiffusionSolverTimeDependent,
    DiffusionSolverTimeIndependent,
    NavierStokesSolver1D,
    StaticPressureSolver,
    StokesSolver1D,
    make_solver,
)

__all__ = [
    # Basis
    "LinearBasis",
    "build_linear_basis",
    "hat_function",
    # Assembly
    "AssembledSystem",
    "ElementIntegrals",
    "integrate_weak_forms",
    "load_vector",
    "assemble_steady_diffusion",
    "assemble_time_dependent_diffusion",
    "assemble_stokes_pressure",
    # Methods / registry
    "ThetaMethod",
    "register_method",
    "available_methods",
    "resolve_method",
    "resolve_theta",
    # Solvers
    "DiffEquationSolver",
    "DiffusionSolverTimeIndependent",
    "DiffusionSolverTimeDependent",
    "StokesSolver1D",
    "StaticPressureSolver",
    "NavierStokesSolver1D",
    "make_solver",
    # Trajectories
    "FEMSolution1D",
    "run_time_steps",
]
