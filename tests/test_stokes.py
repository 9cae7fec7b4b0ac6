import math

import numpy as np
import pytest

from fem1d import (
    DiffEquationSolver,
    DiffusionParams,
    DiffusionParamsTimeDependent,
    DiffusionSolverTimeDependent,
    DiffusionSolverTimeIndependent,
    NavierStokesSolver1D,
    StaticPressureSolver,
    StokesParams1D,
    StokesSolver1D,
    make_solver,
)

MESH = [0.0, 0.333, 0.666, 1.0]


def test_reference_pressure_profile(fast_config) -> None:
    params = StokesParams1D(rho=1.0, hydrostatic_pressure=1.0, force_function=lambda x: 10.0)
    p = StokesSolver1D(params, MESH, fast_config).solve()

    assert p.shape == (4,)
    assert p[-1] == 1.0
    np.testing.assert_allclose(p, [-9.0, -5.66, -2.33, 1.0], atol=0.02)
    np.testing.assert_allclose(p, 10.0 * np.asarray(MESH) - 9.0, atol=1e-12)


def test_left_outlet_integrates_from_the_other_end(fast_config) -> None:
    params = StokesParams1D(
        rho=1.0, hydrostatic_pressure=1.0, force_function=lambda x: 10.0, outlet="left"
    )
    p = StokesSolver1D(params, MESH, fast_config).solve()

    assert p[0] == 1.0
    np.testing.assert_allclose(p, 1.0 + 10.0 * np.asarray(MESH), atol=1e-12)


@pytest.mark.parametrize("rho", [1.0, 2.5, -0.5])
def test_density_scales_the_gradient(rho, fast_config) -> None:
    mesh = np.linspace(0.0, 2.0, 9)
    params = StokesParams1D(rho=rho, hydrostatic_pressure=0.0, force_function=lambda x: 3.0)
    p = StokesSolver1D(params, mesh, fast_config).solve()
    np.testing.assert_allclose(p, rho * 3.0 * (mesh - 2.0), atol=1e-12)


def test_scalar_only_force_function(fast_config) -> None:
    mesh = np.linspace(0.0, 1.0, 11)
    vec = StokesSolver1D(
        StokesParams1D(rho=1.0, hydrostatic_pressure=0.0, force_function=np.cos),
        mesh,
        fast_config,
    ).solve()
    scal = StokesSolver1D(
        StokesParams1D(rho=1.0, hydrostatic_pressure=0.0, force_function=math.cos),
        mesh,
        fast_config,
    ).solve()
    np.testing.assert_allclose(scal, vec, rtol=1e-12, atol=1e-14)
    # p' = cos -> p = sin(x) - sin(1)
    np.testing.assert_allclose(vec, np.sin(mesh) - math.sin(1.0), atol=5e-3)


def test_aliases_are_the_same_solver() -> None:
    assert StaticPressureSolver is StokesSolver1D
    assert NavierStokesSolver1D is StokesSolver1D


def test_params_validation() -> None:
    with pytest.raises(ValueError):
        StokesParams1D(rho=0.0, hydrostatic_pressure=1.0, force_function=lambda x: 1.0)
    with pytest.raises(ValueError):
        StokesParams1D(
            rho=1.0, hydrostatic_pressure=1.0, force_function=lambda x: 1.0, outlet="up"
        )
    with pytest.raises(TypeError):
        StokesParams1D(rho=1.0, hydrostatic_pressure=1.0, force_function=2.0)


def test_make_solver_dispatches_on_parameter_type(coarse_mesh) -> None:
    steady = make_solver(DiffusionParams(1.0, 1.0, (0.0, 1.0)), coarse_mesh)
    unsteady = make_solver(DiffusionParamsTimeDependent(1.0, 1.0, (0.0, 1.0)), coarse_mesh)
    stokes = make_solver(StokesParams1D(1.0, 0.0, lambda x: 1.0), coarse_mesh)

    assert type(steady) is DiffusionSolverTimeIndependent
    assert type(unsteady) is DiffusionSolverTimeDependent
    assert type(stokes) is StokesSolver1D
    for s in (steady, unsteady, stokes):
        assert isinstance(s, DiffEquationSolver)

    with pytest.raises(TypeError):
        make_solver(object(), coarse_mesh)
