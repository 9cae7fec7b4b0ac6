import numpy as np
import pandas as pd
import pytest

from fem1d import DiffusionParamsTimeDependent, DiffusionSolverTimeDependent, run_time_steps
from fem1d.diagnostics import (
    add_observed_order,
    exact_steady_diffusion,
    steady_convergence_table,
    to_frame,
)


@pytest.mark.parametrize("mu,b", [(1.0, 1.0), (0.1, 5.0), (0.05, -3.0), (1.0, 0.0), (1e-3, 2.0)])
def test_exact_solution_hits_boundary_values(mu, b) -> None:
    x = np.linspace(-1.0, 2.0, 31)
    u = exact_steady_diffusion(x, mu, b, (2.0, -1.0))
    assert u[0] == pytest.approx(2.0)
    assert u[-1] == pytest.approx(-1.0)
    assert np.all(np.isfinite(u))
    assert np.all(np.diff(u) <= 1e-12)  # monotone between the two values


def test_exact_solution_satisfies_the_ode() -> None:
    mu, b = 0.5, 2.0
    x = np.linspace(0.0, 1.0, 2001)
    u = exact_steady_diffusion(x, mu, b, (0.0, 1.0))
    h = x[1] - x[0]
    d1 = (u[2:] - u[:-2]) / (2 * h)
    d2 = (u[2:] - 2 * u[1:-1] + u[:-2]) / h**2
    np.testing.assert_allclose(-mu * d2 + b * d1, 0.0, atol=1e-4)


def test_exact_solution_rejects_zero_diffusion() -> None:
    with pytest.raises(ValueError):
        exact_steady_diffusion([0.0, 1.0], 0.0, 1.0, (0.0, 1.0))


def test_convergence_table_is_second_order() -> None:
    df = steady_convergence_table([5, 9, 17, 33, 65], 0.5, 2.0, (0.0, 1.0))

    assert list(df.columns) == ["n_nodes", "h", "max_abs_err", "runtime_ms", "observed_order"]
    assert df["n_nodes"].tolist() == [5, 9, 17, 33, 65]
    assert np.isnan(df["observed_order"].iloc[0])
    assert df["max_abs_err"].is_monotonic_decreasing
    assert df["observed_order"].iloc[-1] == pytest.approx(2.0, abs=0.2)
    assert (df["runtime_ms"] >= 0.0).all()


def test_add_observed_order_on_synthetic_data() -> None:
    df = pd.DataFrame({"h": [0.1, 0.05, 0.025], "max_abs_err": [1e-2, 2.5e-3, 6.25e-4]})
    out = add_observed_order(df)
    np.testing.assert_allclose(out["observed_order"].iloc[1:], [2.0, 2.0])


def test_to_frame_long_trajectory(coarse_mesh, fast_config) -> None:
    solver = DiffusionSolverTimeDependent(
        DiffusionParamsTimeDependent(1.0, 0.0, (1.0, 0.0)), coarse_mesh, fast_config
    )
    sol = run_time_steps(solver, n_steps=4, time_step=0.05)
    df = to_frame(sol)

    assert len(df) == 5 * 3
    assert set(df.columns) >= {"step", "t", "node", "x", "u", "method"}
    last = df[df["step"] == 4].sort_values("node")
    np.testing.assert_array_equal(last["u"].to_numpy(), sol.u_final)
    np.testing.assert_array_equal(last["x"].to_numpy(), coarse_mesh)


def test_to_frame_rows_from_dicts_and_dataclasses() -> None:
    from fem1d.diagnostics.convergence import SteadyConvergenceRun

    df = to_frame([{"a": 1}, SteadyConvergenceRun(3, 0.5, 1e-3, 0.1)])
    assert len(df) == 2
    with pytest.raises(TypeError):
        to_frame([object()])
