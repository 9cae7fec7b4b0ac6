# src/fem1d/numerics/__init__.py
"""
Numerical building blocks (advanced API).

Top-level package `fem1d` exposes the everyday solver API.
This subpackage exposes the reusable primitives the FEM layer is built from.
"""

from .mesh import (
    MIN_MESH_NODES,
    MeshConfig,
    SpacingPolicy,
    build_mesh,
    uniform_mesh,
    validate_mesh,
)
from .piecewise import PiecewisePolynomial, Polynomial
from .polynomials import (
    FirstDegreePolynomial,
    SecondDegreePolynomial,
    transformation_from_m1_p1,
    transformation_to_0_1,
)
from .quadrature import (
    MIN_QUADRATURE_DEGREE,
    QuadratureRule,
    gauss_legendre,
    integrate,
    quad_pair,
)
from .tridiag import (
    Tridiag,
    solve_by_thomas,
    solve_interior_by_thomas,
    solve_tridiag_scipy,
    solve_tridiag_thomas,
    tridiag_mv,
    tridiag_to_dense,
)

__all__ = [
    # Polynomials
    "FirstDegreePolynomial",
    "SecondDegreePolynomial",
    "transformation_to_0_1",
    "transformation_from_m1_p1",
    "Polynomial",
    "PiecewisePolynomial",
    # Mesh
    "MIN_MESH_NODES",
    "SpacingPolicy",
    "MeshConfig",
    "validate_mesh",
    "build_mesh",
    "uniform_mesh",
    # Quadrature
    "MIN_QUADRATURE_DEGREE",
    "QuadratureRule",
    "gauss_legendre",
    "quad_pair",
    "integrate",
    # Tridiagonal
    "Tridiag",
    "solve_tridiag_thomas",
    "solve_by_thomas",
    "solve_interior_by_thomas",
    "solve_tridiag_scipy",
    "tridiag_mv",
    "tridiag_to_dense",
]
