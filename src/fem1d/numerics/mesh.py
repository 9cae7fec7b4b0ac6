# src/fem1d/numerics/mesh.py
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import cast

import numpy as np
from numpy.typing import NDArray

from ..exceptions import MeshNotOrderedError, MeshTooSmallError

__all__ = [
    "MIN_MESH_NODES",
    "SpacingPolicy",
    "MeshConfig",
    "validate_mesh",
    "build_mesh",
    "uniform_mesh",
]

MIN_MESH_NODES = 3


class SpacingPolicy(str, Enum):
    UNIFORM = "uniform"
    CLUSTERED = "clustered"


def validate_mesh(nodes: Iterable[float] | NDArray[np.floating]) -> NDArray[np.floating]:
    """
    Return the mesh as a 1D float array after checking the basis preconditions.

    Raises
    ------
    MeshTooSmallError
        Fewer than 3 nodes.
    MeshNotOrderedError
        Non-finite or not strictly increasing nodes.
    """
    x = np.array(list(nodes) if not isinstance(nodes, np.ndarray) else nodes, dtype=float)
    if x.ndim != 1:
        raise MeshNotOrderedError(f"mesh must be 1D, got shape {x.shape}")
    if x.shape[0] < MIN_MESH_NODES:
        raise MeshTooSmallError(
            f"mesh needs at least {MIN_MESH_NODES} nodes, got {x.shape[0]}"
        )
    if not np.all(np.isfinite(x)):
        raise MeshNotOrderedError("mesh nodes must be finite")
    if not np.all(np.diff(x) > 0.0):
        raise MeshNotOrderedError("mesh nodes must be strictly increasing")
    x.setflags(write=False)
    return cast(NDArray[np.floating], x)


@dataclass(frozen=True, slots=True)
class MeshConfig:
    n_nodes: int
    x_lb: float = 0.0
    x_ub: float = 1.0
    spacing: SpacingPolicy = SpacingPolicy.UNIFORM
    x_center: float | None = None
    cluster_strength: float = 2.0

    def validate(self) -> None:
        if self.n_nodes < MIN_MESH_NODES:
            raise MeshTooSmallError(f"n_nodes must be >= {MIN_MESH_NODES}")
        if not (self.x_lb < self.x_ub):
            raise ValueError("Need x_lb < x_ub")

        if self.spacing == SpacingPolicy.CLUSTERED:
            if self.x_center is None:
                raise ValueError("x_center required for clustered spacing")
            if not (self.x_lb <= self.x_center <= self.x_ub):
                raise ValueError("x_center must be within [x_lb, x_ub]")
            if self.cluster_strength <= 0:
                raise ValueError("cluster_strength must be > 0")


def _build_mesh_validated(cfg: MeshConfig) -> NDArray[np.floating]:
    if cfg.spacing == SpacingPolicy.UNIFORM:
        return np.linspace(cfg.x_lb, cfg.x_ub, cfg.n_nodes, dtype=float)

    # sinh stretching: nodes bunch up around x_center
    u = np.linspace(-1.0, 1.0, cfg.n_nodes, dtype=float)
    b = float(cfg.cluster_strength)

    raw = np.sinh(b * u)
    raw = raw / np.max(np.abs(raw))

    xc_opt = cfg.x_center
    assert xc_opt is not None
    xc = float(xc_opt)

    x = np.empty_like(raw, dtype=float)
    neg = raw <= 0.0
    pos = ~neg
    x[neg] = xc + raw[neg] * (xc - cfg.x_lb)
    x[pos] = xc + raw[pos] * (cfg.x_ub - xc)

    x[0] = cfg.x_lb
    x[-1] = cfg.x_ub
    return x


def build_mesh(cfg: MeshConfig) -> NDArray[np.floating]:
    cfg.validate()
    return validate_mesh(_build_mesh_validated(cfg))


def uniform_mesh(beg: float, end: float, n_nodes: int) -> NDArray[np.floating]:
    return build_mesh(MeshConfig(n_nodes=int(n_nodes), x_lb=float(beg), x_ub=float(end)))
