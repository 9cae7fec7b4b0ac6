from __future__ import annotations

import math
from typing import cast

import numpy as np
from numpy.typing import NDArray

from ..typing import ArrayLike

__all__ = ["exact_steady_diffusion"]


def exact_steady_diffusion(
    x: ArrayLike,
    mu: float,
    b: float,
    boundary_conditions,
    x_lb: float | None = None,
    x_ub: float | None = None,
) -> NDArray[np.floating]:
    """Closed-form solution of ``-μ u'' + b u' = 0`` with Dirichlet data.

    ``u(x) = L + (R - L) (exp(Pe s) - 1) / (exp(Pe S) - 1)`` with
    ``Pe = b / μ``, ``s = x - x_lb`` and ``S = x_ub - x_lb``. The domain
    defaults to ``[min(x), max(x)]``.

    For ``Pe > 0`` the ratio is rewritten with ``exp(Pe (s - S))`` so large
    Péclet numbers do not overflow.
    """
    xs = np.asarray(x, dtype=float)
    mu = float(mu)
    b = float(b)
    if mu == 0.0:
        raise ValueError("mu must be non-zero")
    left, right = (float(v) for v in boundary_conditions)

    lo = float(np.min(xs)) if x_lb is None else float(x_lb)
    hi = float(np.max(xs)) if x_ub is None else float(x_ub)
    if not hi > lo:
        raise ValueError("Need x_lb < x_ub")

    pe = b / mu
    s = pe * (xs - lo)
    S = pe * (hi - lo)

    if pe == 0.0 or abs(S) < 1e-12:
        ratio = (xs - lo) / (hi - lo)
    elif pe < 0.0:
        ratio = np.expm1(s) / math.expm1(S)
    else:
        ratio = np.exp(s - S) * np.expm1(-s) / math.expm1(-S)

    return cast(NDArray[np.floating], left + (right - left) * ratio)
