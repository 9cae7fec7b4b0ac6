"""Time-stepping methods and a small registry.

The time-dependent diffusion solver advances its interior state with the
theta-scheme

    (M + θ Δt S) u^{n+1} = (M - (1 - θ) Δt S) u^n + boundary terms

where ``M`` is the mass matrix and ``S = μ K + b C`` the spatial operator.
Users choose ``θ`` by name (``method="cn"``) or register their own names
without editing the solver.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

__all__ = [
    "ThetaMethod",
    "register_method",
    "available_methods",
    "resolve_method",
    "resolve_theta",
]


@dataclass(frozen=True, slots=True)
class ThetaMethod:
    """User-facing representation of the theta-scheme.

    Common choices:
    - theta=0.0: explicit Euler (mass-only left-hand side)
    - theta=0.5: Crank-Nicolson
    - theta=1.0: implicit Euler
    """

    theta: float

    def __post_init__(self) -> None:
        theta = float(self.theta)
        if not (0.0 <= theta <= 1.0):
            raise ValueError("theta must be in [0, 1]")
        object.__setattr__(self, "theta", theta)

    @property
    def name(self) -> str:
        if self.theta == 0.5:
            return "cn"
        if self.theta == 0.0:
            return "explicit"
        if self.theta == 1.0:
            return "implicit"
        return f"theta={self.theta:g}"


# -----------------------------
# Registry
# -----------------------------

MethodFactory = Callable[[], ThetaMethod]
_METHOD_REGISTRY: dict[str, MethodFactory] = {}


def register_method(
    name: str,
    factory: MethodFactory,
    *,
    overwrite: bool = False,
    aliases: tuple[str, ...] = (),
) -> None:
    """Register a method factory under one or more names.

    Parameters
    ----------
    name:
        Primary key users will pass as ``method=...``.
    factory:
        Callable returning a :class:`ThetaMethod`.
    overwrite:
        If False (default), raise if ``name`` or any alias already exists.
    aliases:
        Additional strings that should resolve to the same factory.
    """

    keys = (name, *aliases)
    for k in keys:
        kk = str(k).lower().strip()
        if not kk:
            raise ValueError("Method name/alias cannot be empty")
        if (not overwrite) and (kk in _METHOD_REGISTRY):
            raise KeyError(f"Method '{kk}' is already registered")
        _METHOD_REGISTRY[kk] = factory


def available_methods() -> list[str]:
    """Return the currently registered method keys (sorted)."""

    return sorted(_METHOD_REGISTRY.keys())


def resolve_method(method: str | float | ThetaMethod | None) -> ThetaMethod:
    """Resolve the user's method choice into a :class:`ThetaMethod`.

    Accepts a ``ThetaMethod``, a bare ``θ`` (float), a registered name, or
    ``None`` (which means ``"explicit"``).
    """

    if method is None:
        method = "explicit"

    if isinstance(method, ThetaMethod):
        return method

    if isinstance(method, int | float) and not isinstance(method, bool):
        return ThetaMethod(theta=float(method))

    key = str(method).lower().strip()
    try:
        factory = _METHOD_REGISTRY[key]
    except KeyError as e:
        raise ValueError(
            f"Unknown method '{method}'. Available: {', '.join(available_methods())}"
        ) from e
    return factory()


def resolve_theta(method: str | float | ThetaMethod | None) -> float:
    return resolve_method(method).theta


def _register_builtin_methods() -> None:
    register_method(
        "explicit",
        lambda: ThetaMethod(theta=0.0),
        overwrite=True,
        aliases=("forward-euler", "forward", "fe", "explicit-euler"),
    )
    register_method(
        "cn",
        lambda: ThetaMethod(theta=0.5),
        overwrite=True,
        aliases=("crank-nicolson", "crank_nicolson", "crank"),
    )
    register_method(
        "implicit",
        lambda: ThetaMethod(theta=1.0),
        overwrite=True,
        aliases=("backward-euler", "backward", "be", "implicit-euler"),
    )


_register_builtin_methods()
