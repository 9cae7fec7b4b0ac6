import math

import numpy as np
import pytest

from fem1d.exceptions import QuadratureDegreeError
from fem1d.numerics.quadrature import (
    QuadratureRule,
    gauss_legendre,
    integrate,
    quad_pair,
)


@pytest.mark.parametrize("degree", [2, 3, 5, 10, 150])
def test_weights_sum_to_interval_length(degree: int) -> None:
    nodes, weights = gauss_legendre(degree)
    assert nodes.shape == weights.shape == (degree,)
    assert weights.sum() == pytest.approx(2.0, rel=1e-12)
    assert np.all(np.diff(nodes) < 0.0)  # increasing angle


@pytest.mark.parametrize("degree", [2, 3, 4, 8])
def test_exact_for_polynomials_up_to_2n_minus_1(degree: int, rng) -> None:
    g = rng(100 + degree)
    coeffs = g.normal(size=2 * degree)  # polynomial of degree 2n-1
    poly = np.polynomial.Polynomial(coeffs)
    a, b = -0.7, 2.3

    exact = poly.integ()(b) - poly.integ()(a)
    assert integrate(poly, a, b, degree) == pytest.approx(exact, rel=1e-10, abs=1e-10)


def test_quad_pair_angle_and_weight() -> None:
    nodes, weights = gauss_legendre(3)
    for i in range(1, 4):
        angle, w = quad_pair(3, i)
        assert math.cos(angle) == pytest.approx(nodes[i - 1], abs=1e-14)
        assert w == pytest.approx(weights[i - 1])
    angles = [quad_pair(3, i)[0] for i in range(1, 4)]
    assert angles == sorted(angles)


def test_two_point_rule_matches_closed_form() -> None:
    nodes, weights = gauss_legendre(2)
    np.testing.assert_allclose(sorted(nodes), [-1 / math.sqrt(3), 1 / math.sqrt(3)])
    np.testing.assert_allclose(weights, [1.0, 1.0])


@pytest.mark.parametrize("i", [0, 4, -1])
def test_quad_pair_index_out_of_range(i: int) -> None:
    with pytest.raises(IndexError):
        quad_pair(3, i)


@pytest.mark.parametrize("degree", [1, 0, -3])
def test_degree_below_two_is_rejected(degree: int) -> None:
    with pytest.raises(QuadratureDegreeError):
        gauss_legendre(degree)
    with pytest.raises(QuadratureDegreeError):
        QuadratureRule(degree)
    with pytest.raises(ValueError):
        quad_pair(degree, 1)


@pytest.mark.parametrize("degree", [2.5, 3.9, 7.000001])
def test_non_integral_degree_is_rejected(degree: float) -> None:
    with pytest.raises(QuadratureDegreeError, match="integer"):
        gauss_legendre(degree)
    with pytest.raises(QuadratureDegreeError):
        QuadratureRule(degree)


def test_rule_points_on_interval() -> None:
    rule = QuadratureRule(4)
    pts, w = rule.points_on(1.0, 3.0)
    assert np.all((pts > 1.0) & (pts < 3.0))
    assert w.sum() == pytest.approx(2.0)
    assert rule.integrate(np.sin, 0.0, math.pi) == pytest.approx(2.0, rel=1e-3)


def test_constant_callable_is_broadcast() -> None:
    assert integrate(lambda x: 2.0, 0.0, 3.0, 2) == pytest.approx(6.0)


def test_cached_arrays_are_read_only() -> None:
    nodes, _ = gauss_legendre(5)
    with pytest.raises(ValueError):
        nodes[0] = 0.0
