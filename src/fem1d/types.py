from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from .typing import ScalarFn

__all__ = [
    "DiffusionParams",
    "DiffusionParamsTimeDependent",
    "StokesParams1D",
]


def _check_boundary_conditions(values: Sequence[float]) -> tuple[float, float]:
    bc = tuple(float(v) for v in values)
    if len(bc) != 2:
        raise ValueError(f"boundary_conditions must hold 2 values, got {len(bc)}")
    if not all(math.isfinite(v) for v in bc):
        raise ValueError("boundary_conditions must be finite")
    return bc[0], bc[1]


def _check_finite(name: str, value: float) -> float:
    v = float(value)
    if not math.isfinite(v):
        raise ValueError(f"{name} must be finite")
    return v


@dataclass(frozen=True, slots=True)
class DiffusionParams:
    """Coefficients of the steady convection-diffusion problem.

    Solves ``-μ u'' + b u' = 0`` with Dirichlet values at both mesh ends.

    Parameters
    ----------
    mu : float
        Diffusion coefficient :math:`\\mu`.
    b : float
        Convection speed.
    boundary_conditions : tuple[float, float]
        Dirichlet values ``(left, right)``.
    """

    mu: float
    b: float
    boundary_conditions: tuple[float, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "mu", _check_finite("mu", self.mu))
        object.__setattr__(self, "b", _check_finite("b", self.b))
        object.__setattr__(
            self,
            "boundary_conditions",
            _check_boundary_conditions(self.boundary_conditions),
        )


@dataclass(frozen=True, slots=True)
class DiffusionParamsTimeDependent:
    """Coefficients of ``u_t - μ u_xx + b u_x = 0``.

    Parameters
    ----------
    mu : float
        Diffusion coefficient.
    b : float
        Convection speed.
    boundary_conditions : tuple[float, float]
        Dirichlet values ``(left, right)``, constant for the whole run.
    initial_conditions : tuple[float, ...] or None, default None
        Interior values at ``t = 0`` (length ``n - 2`` for an ``n``-node mesh).
        ``None`` means all zeros.
    method : str or float, default "explicit"
        Theta-scheme choice, either a registered name (``"explicit"``,
        ``"cn"``, ``"implicit"``, ...) or ``θ`` itself.

    Notes
    -----
    The length of ``initial_conditions`` is checked against the mesh by the
    solver, since the mesh is not part of these parameters.
    """

    mu: float
    b: float
    boundary_conditions: tuple[float, float]
    initial_conditions: tuple[float, ...] | None = None
    method: str | float = "explicit"

    def __post_init__(self) -> None:
        object.__setattr__(self, "mu", _check_finite("mu", self.mu))
        object.__setattr__(self, "b", _check_finite("b", self.b))
        object.__setattr__(
            self,
            "boundary_conditions",
            _check_boundary_conditions(self.boundary_conditions),
        )
        if self.initial_conditions is not None:
            ic = tuple(float(v) for v in self.initial_conditions)
            if not all(math.isfinite(v) for v in ic):
                raise ValueError("initial_conditions must be finite")
            object.__setattr__(self, "initial_conditions", ic)


@dataclass(frozen=True, slots=True)
class StokesParams1D:
    """Static pressure problem ``(1/ρ) p_x = f``.

    Parameters
    ----------
    rho : float
        Density, non-zero.
    hydrostatic_pressure : float
        Pressure imposed at the outlet.
    force_function : Callable[[float], float]
        Body force ``f(x)``. NumPy-vectorized callables are evaluated on whole
        arrays of quadrature points; scalar-only ones point by point.
    outlet : {"left", "right"}, default "right"
        Mesh end carrying the Dirichlet pressure.
    """

    rho: float
    hydrostatic_pressure: float
    force_function: ScalarFn
    outlet: Literal["left", "right"] = "right"

    def __post_init__(self) -> None:
        rho = _check_finite("rho", self.rho)
        if rho == 0.0:
            raise ValueError("rho must be non-zero")
        object.__setattr__(self, "rho", rho)
        object.__setattr__(
            self,
            "hydrostatic_pressure",
            _check_finite("hydrostatic_pressure", self.hydrostatic_pressure),
        )
        if not callable(self.force_function):
            raise TypeError("force_function must be callable")
        if self.outlet not in ("left", "right"):
            raise ValueError("outlet must be 'left' or 'right'")
