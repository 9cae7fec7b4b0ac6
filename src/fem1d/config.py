from __future__ import annotations

from dataclasses import dataclass

from .numerics.quadrature import check_degree

DEFAULT_INTEGRATION_PRECISION = 150
DEFAULT_TIME_STEP = 1e-3


@dataclass(frozen=True, slots=True)
class SolverConfig:
    """Numerical settings shared by every solver.

    Parameters
    ----------
    integration_precision : int, default 150
        Gauss-Legendre degree used for every interval in one assembly pass.
    time_step : float, default 1e-3
        Default ``Δt`` for time-dependent solvers. Steady solvers ignore it.
    check_finite : bool, default True
        Reject assembled systems containing NaN or inf.

    Notes
    -----
    Arguments passed to ``solve`` override these values for that call only.
    """

    integration_precision: int = DEFAULT_INTEGRATION_PRECISION
    time_step: float = DEFAULT_TIME_STEP
    check_finite: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "integration_precision", check_degree(self.integration_precision)
        )
        if not self.time_step > 0.0:
            raise ValueError("time_step must be > 0")

    def resolve(
        self,
        integration_precision: int | None = None,
        time_step: float | None = None,
    ) -> tuple[int, float]:
        """Return the per-call (precision, time_step), falling back to this config."""
        precision = (
            self.integration_precision
            if integration_precision is None
            else check_degree(integration_precision)
        )
        dt = self.time_step if time_step is None else float(time_step)
        return precision, dt


DEFAULT_CONFIG = SolverConfig()
