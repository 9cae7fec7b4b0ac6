import numpy as np
import pytest

from fem1d import (
    DiffEquationSolver,
    DiffusionParams,
    DiffusionSolverTimeIndependent,
    MeshTooSmallError,
    SolverConfig,
)
from fem1d.diagnostics import exact_steady_diffusion


def test_three_node_reference(coarse_mesh, base_params, fast_config) -> None:
    solver = DiffusionSolverTimeIndependent(
        DiffusionParams(**base_params), coarse_mesh, fast_config
    )
    u = solver.solve()

    assert u.shape == (3,)
    assert u[0] == 0.0 and u[2] == 1.0
    assert 0.2 <= u[1] <= 0.4
    assert u[1] == pytest.approx(0.375)

    A = solver.system.matrix
    assert A[0, 0] == 1.0 and A[2, 2] == 1.0
    assert 3.9 <= A[1, 1] <= 4.1


def test_four_node_mesh(base_params, fast_config) -> None:
    solver = DiffusionSolverTimeIndependent(
        DiffusionParams(**base_params), [0.0, 0.33, 0.66, 1.0], fast_config
    )
    u = solver.solve()

    assert u[0] == 0.0
    assert u[-1] == 1.0
    assert np.all(np.diff(u) > 0.0)
    assert 0.20 <= u[1] <= 0.24
    assert 0.52 <= u[2] <= 0.56


def test_uniform_five_node_matches_discrete_closed_form(base_params, fast_config) -> None:
    mesh = np.linspace(0.0, 1.0, 5)
    u = DiffusionSolverTimeIndependent(
        DiffusionParams(**base_params), mesh, fast_config
    ).solve()

    # rows (-4.5, 8, -3.5) give u_i ∝ r**i - 1 with r = 9/7
    r = 9.0 / 7.0
    expected = (r ** np.arange(5) - 1.0) / (r**4 - 1.0)
    np.testing.assert_allclose(u, expected, atol=1e-12)
    np.testing.assert_allclose(u, [0.0, 0.16, 0.37, 0.64, 1.0], atol=0.02)


@pytest.mark.parametrize("n", [3, 4, 9, 30])
@pytest.mark.parametrize("bc", [(0.0, 1.0), (-2.0, 3.5), (4.0, 4.0)])
def test_result_length_and_boundary_values(n, bc, rng, make_mesh, fast_config) -> None:
    mesh = make_mesh(rng(n), n, lo=-1.0, hi=2.0)
    solver = DiffusionSolverTimeIndependent(
        DiffusionParams(mu=0.7, b=-0.4, boundary_conditions=bc), mesh, fast_config
    )
    u = solver.solve()

    assert u.shape == (n,)
    assert u[0] == bc[0]
    assert u[-1] == bc[1]


def test_pure_diffusion_is_linear(rng, make_mesh, fast_config) -> None:
    mesh = make_mesh(rng(4), 12)
    u = DiffusionSolverTimeIndependent(
        DiffusionParams(mu=2.0, b=0.0, boundary_conditions=(1.0, 3.0)), mesh, fast_config
    ).solve()
    np.testing.assert_allclose(u, 1.0 + 2.0 * mesh, atol=1e-12)


@pytest.mark.parametrize("mesh", [[0.0, 0.5, 1.0], [0.0, 0.1, 0.35, 0.6, 1.0]])
def test_tiny_diffusion_coefficient_still_solves(mesh, fast_config) -> None:
    x = np.asarray(mesh)
    u = DiffusionSolverTimeIndependent(
        DiffusionParams(mu=1e-15, b=0.0, boundary_conditions=(0.0, 1.0)), x, fast_config
    ).solve()
    np.testing.assert_allclose(u, x / x[-1], rtol=1e-10, atol=1e-12)


def test_refined_mesh_approaches_closed_form(fast_config) -> None:
    errs = []
    for n in (5, 17, 65):
        mesh = np.linspace(0.0, 1.0, n)
        u = DiffusionSolverTimeIndependent(
            DiffusionParams(mu=0.5, b=2.0, boundary_conditions=(0.0, 1.0)), mesh, fast_config
        ).solve()
        errs.append(np.max(np.abs(u - exact_steady_diffusion(mesh, 0.5, 2.0, (0.0, 1.0)))))
    assert errs[0] > errs[1] > errs[2]
    assert errs[2] < 1e-3


def test_time_step_is_ignored_and_solve_is_repeatable(coarse_mesh, base_params) -> None:
    solver = DiffusionSolverTimeIndependent(DiffusionParams(**base_params), coarse_mesh)
    u1 = solver.solve(integration_precision=4)
    u2 = solver.solve(integration_precision=4, time_step=123.0)
    np.testing.assert_array_equal(u1, u2)


def test_precision_override_beats_config(coarse_mesh, base_params) -> None:
    solver = DiffusionSolverTimeIndependent(
        DiffusionParams(**base_params), coarse_mesh, SolverConfig(integration_precision=2)
    )
    # degree 2 is already exact for linear * linear products
    assert solver.solve()[1] == pytest.approx(solver.solve(integration_precision=30)[1])


def test_satisfies_solver_protocol(coarse_mesh, base_params) -> None:
    solver = DiffusionSolverTimeIndependent(DiffusionParams(**base_params), coarse_mesh)
    assert isinstance(solver, DiffEquationSolver)


def test_mesh_preconditions(base_params) -> None:
    with pytest.raises(MeshTooSmallError):
        DiffusionSolverTimeIndependent(DiffusionParams(**base_params), [0.0, 1.0])


@pytest.mark.parametrize(
    "kwargs",
    [
        {"mu": 1.0, "b": 1.0, "boundary_conditions": (0.0,)},
        {"mu": 1.0, "b": 1.0, "boundary_conditions": (0.0, np.nan)},
        {"mu": np.inf, "b": 1.0, "boundary_conditions": (0.0, 1.0)},
    ],
)
def test_params_validation(kwargs) -> None:
    with pytest.raises(ValueError):
        DiffusionParams(**kwargs)
