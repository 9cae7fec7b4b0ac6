"""
fem1d

One-dimensional finite-element engine for convection-diffusion and static
Stokes pressure problems.

The everyday API lives at the top level, so you can write, for example:

    from fem1d import DiffusionParams, DiffusionSolverTimeIndependent
"""

from .config import SolverConfig
from .exceptions import (
    DegenerateIntervalError,
    DimensionMismatchError,
    FEMError,
    MeshError,
    MeshNotOrderedError,
    MeshTooSmallError,
    NonFiniteSystemError,
    QuadratureDegreeError,
    SingularSystemError,
)
from .fem import (
    DiffEquationSolver,
    DiffusionSolverTimeDependent,
    DiffusionSolverTimeIndependent,
    FEMSolution1D,
    NavierStokesSolver1D,
    StaticPressureSolver,
    StokesSolver1D,
    make_solver,
    run_time_steps,
)
from .types import DiffusionParams, DiffusionParamsTimeDependent, StokesParams1D

__all__ = [
    # Parameters / config
    "DiffusionParams",
    "DiffusionParamsTimeDependent",
    "StokesParams1D",
    "SolverConfig",
    # Solvers
    "DiffEquationSolver",
    "DiffusionSolverTimeIndependent",
    "DiffusionSolverTimeDependent",
    "StokesSolver1D",
    "StaticPressureSolver",
    "NavierStokesSolver1D",
    "make_solver",
    "FEMSolution1D",
    "run_time_steps",
    # Errors
    "FEMError",
    "MeshError",
    "MeshTooSmallError",
    "MeshNotOrderedError",
    "DimensionMismatchError",
    "QuadratureDegreeError",
    "DegenerateIntervalError",
    "SingularSystemError",
    "NonFiniteSystemError",
]
