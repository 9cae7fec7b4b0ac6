"""Accuracy checks, tables and plots for the FEM solvers.

pandas is required here; matplotlib only when a plot is requested.
"""

from .convergence import SteadyConvergenceRun, run_steady_case, steady_convergence_table
from .exact import exact_steady_diffusion
from .plots import plot_convergence, plot_solution, plot_trajectory
from .tables import add_observed_order, to_frame

__all__ = [
    "exact_steady_diffusion",
    "SteadyConvergenceRun",
    "run_steady_case",
    "steady_convergence_table",
    "to_frame",
    "add_observed_order",
    "plot_solution",
    "plot_trajectory",
    "plot_convergence",
]
