import numpy as np
import pytest

from fem1d.exceptions import MeshError, MeshNotOrderedError, MeshTooSmallError
from fem1d.numerics.mesh import (
    MeshConfig,
    SpacingPolicy,
    build_mesh,
    uniform_mesh,
    validate_mesh,
)


def test_uniform_mesh() -> None:
    x = uniform_mesh(0.0, 2.0, 5)
    np.testing.assert_allclose(x, [0.0, 0.5, 1.0, 1.5, 2.0])


def test_validated_mesh_is_read_only() -> None:
    x = validate_mesh([0.0, 0.3, 1.0])
    with pytest.raises(ValueError):
        x[0] = 5.0


@pytest.mark.parametrize("center", [0.25, 0.5, 0.7])
def test_clustered_mesh_is_strictly_increasing_and_hits_bounds(center) -> None:
    cfg = MeshConfig(
        n_nodes=21,
        x_lb=0.0,
        x_ub=1.0,
        spacing=SpacingPolicy.CLUSTERED,
        x_center=center,
        cluster_strength=3.0,
    )
    x = build_mesh(cfg)
    assert x[0] == 0.0 and x[-1] == 1.0
    assert np.all(np.diff(x) > 0.0)


def test_clustered_mesh_is_finer_near_center() -> None:
    cfg = MeshConfig(
        n_nodes=41, spacing=SpacingPolicy.CLUSTERED, x_center=0.5, cluster_strength=3.0
    )
    x = build_mesh(cfg)
    h = np.diff(x)
    assert h[len(h) // 2] < h[0]


def test_mesh_config_validation() -> None:
    with pytest.raises(MeshTooSmallError):
        build_mesh(MeshConfig(n_nodes=2))
    with pytest.raises(ValueError):
        build_mesh(MeshConfig(n_nodes=5, x_lb=1.0, x_ub=0.0))
    with pytest.raises(ValueError):
        build_mesh(MeshConfig(n_nodes=5, spacing=SpacingPolicy.CLUSTERED))


def test_mesh_errors_share_a_base_class() -> None:
    for bad in ([0.0, 1.0], [0.0, np.nan, 1.0], np.zeros((2, 3))):
        with pytest.raises(MeshError):
            validate_mesh(bad)
    assert issubclass(MeshNotOrderedError, ValueError)
