from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, is_dataclass
from typing import Any

import numpy as np
import pandas as pd

from ..fem.simulate import FEMSolution1D

__all__ = ["to_frame", "add_observed_order"]


def _solution_frame(sol: FEMSolution1D) -> pd.DataFrame:
    Nt, Nx = sol.u.shape
    return pd.DataFrame(
        {
            "step": np.repeat(np.arange(Nt), Nx),
            "t": np.repeat(np.asarray(sol.times, dtype=float), Nx),
            "node": np.tile(np.arange(Nx), Nt),
            "x": np.tile(np.asarray(sol.mesh, dtype=float), Nt),
            "u": np.asarray(sol.u, dtype=float).ravel(),
            "method": sol.method,
        }
    )


def to_frame(items: FEMSolution1D | Sequence[object]) -> pd.DataFrame:
    """Coerce a trajectory, or a sequence of dicts / dataclasses, into a DataFrame.

    A :class:`FEMSolution1D` becomes a long table with one row per
    ``(step, node)``.
    """

    if isinstance(items, FEMSolution1D):
        return _solution_frame(items)

    rows: list[dict[str, Any]] = []
    for it in items:
        if isinstance(it, dict):
            rows.append(dict(it))
        elif is_dataclass(it) and not isinstance(it, type):
            rows.append(asdict(it))
        else:
            raise TypeError(f"Unsupported item type: {type(it)}")
    return pd.DataFrame(rows)


def add_observed_order(
    df: pd.DataFrame,
    *,
    h_col: str = "h",
    err_col: str = "max_abs_err",
    out_col: str = "observed_order",
) -> pd.DataFrame:
    """Add ``log(e_{k-1}/e_k) / log(h_{k-1}/h_k)`` between consecutive rows."""

    d = df.sort_values(h_col, ascending=False).reset_index(drop=True)
    h = d[h_col].astype(float).to_numpy()
    e = d[err_col].astype(float).to_numpy()

    order = np.full(h.shape, np.nan)
    with np.errstate(divide="ignore", invalid="ignore"):
        order[1:] = np.log(e[:-1] / e[1:]) / np.log(h[:-1] / h[1:])
    d[out_col] = order
    return d
