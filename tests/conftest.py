"""Pytest helpers for the fem1d library."""

from __future__ import annotations

import numpy as np
import pytest

from fem1d.config import SolverConfig


@pytest.fixture
def base_params() -> dict:
    """A small set of canonical parameters used across tests."""
    return {
        "mu": 1.0,
        "b": 1.0,
        "boundary_conditions": (0.0, 1.0),
    }


@pytest.fixture
def coarse_mesh() -> np.ndarray:
    return np.array([0.0, 0.5, 1.0])


@pytest.fixture
def fast_config() -> SolverConfig:
    """Low quadrature degree; still exact for products of linear pieces."""
    return SolverConfig(integration_precision=8)


@pytest.fixture
def make_mesh():
    """Factory fixture for strictly increasing, randomly spaced meshes."""

    def _make(rng: np.random.Generator, n: int, lo: float = 0.0, hi: float = 1.0):
        gaps = 0.2 + rng.random(n - 1)
        x = np.concatenate(([0.0], np.cumsum(gaps)))
        return lo + (hi - lo) * x / x[-1]

    return _make


@pytest.fixture
def rng():
    """Seeded RNG factory."""

    def _rng(seed: int) -> np.random.Generator:
        return np.random.default_rng(seed)

    return _rng
