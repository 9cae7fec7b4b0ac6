"""Matplotlib views of nodal solutions, trajectories and refinement studies.

matplotlib is imported on first use, so the solver layer never depends on it.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd

from ..fem.simulate import FEMSolution1D

if TYPE_CHECKING:
    from matplotlib.axes import Axes

__all__ = ["get_plt", "plot_solution", "plot_trajectory", "plot_convergence"]


def get_plt():
    """Import and return matplotlib.pyplot with a helpful error if missing."""
    try:
        import matplotlib.pyplot as plt
    except ModuleNotFoundError as e:
        raise ModuleNotFoundError(
            "Plotting requires matplotlib. Install it with: pip install matplotlib"
        ) from e
    return plt


def _style(ax: Axes) -> None:
    ax.grid(axis="both", alpha=0.25)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    if ax.get_legend() is not None:
        ax.get_legend().set_frame_on(True)


def _require_columns(df: pd.DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"DataFrame missing required columns: {missing}")


def plot_solution(
    mesh,
    u,
    *,
    ax: Axes | None = None,
    label: str | None = None,
    show_nodes: bool = True,
    figsize=(7, 4),
):
    """Piecewise-linear plot of a nodal vector; returns ``(fig, ax)``."""
    x = np.asarray(mesh, dtype=float)
    y = np.asarray(u, dtype=float)
    if x.shape != y.shape:
        raise ValueError(f"mesh and u must have the same shape, got {x.shape}, {y.shape}")

    if ax is None:
        plt = get_plt()
        fig, ax = plt.subplots(1, 1, figsize=figsize, constrained_layout=True)
    else:
        fig = ax.figure

    ax.plot(x, y, marker="o" if show_nodes else None, label=label)
    ax.set_xlabel("x")
    ax.set_ylabel("u")
    if label is not None:
        ax.legend()
    _style(ax)
    return fig, ax


def plot_trajectory(
    solution: FEMSolution1D,
    *,
    n_curves: int = 6,
    figsize=(7, 4),
):
    """Overlay ``n_curves`` evenly spaced snapshots of a time-stepping run."""
    Nt = int(solution.u.shape[0])
    idx = np.unique(np.linspace(0, Nt - 1, num=max(1, min(int(n_curves), Nt))).astype(int))

    plt = get_plt()
    fig, ax = plt.subplots(1, 1, figsize=figsize, constrained_layout=True)
    for k in idx:
        ax.plot(solution.mesh, solution.u[k], marker=".", label=f"t={solution.times[k]:.3g}")

    ax.set_xlabel("x")
    ax.set_ylabel("u")
    ax.set_title(f"Trajectory ({solution.method})")
    ax.legend()
    _style(ax)
    return fig, ax


def plot_convergence(
    df: pd.DataFrame,
    *,
    x_col: str = "h",
    y_col: str = "max_abs_err",
    logx: bool = True,
    logy: bool = True,
    figsize=(7, 4),
):
    _require_columns(df, [x_col, y_col])

    d = df.sort_values(x_col)
    x = d[x_col].astype(float).to_numpy()
    y = d[y_col].astype(float).to_numpy()

    plt = get_plt()
    fig, ax = plt.subplots(1, 1, figsize=figsize, constrained_layout=True)
    ax.plot(x, y, marker="o", label=y_col)
    ax.legend()

    if logx:
        ax.set_xscale("log")
    if logy:
        ax.set_yscale("log")

    ax.set_xlabel(x_col)
    ax.set_ylabel(y_col)
    ax.set_title("Steady solver: mesh refinement")
    _style(ax)
    return fig, ax
