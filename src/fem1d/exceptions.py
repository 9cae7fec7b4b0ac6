"""Exception hierarchy for the finite element engine.

Every failure the engine can detect is a precondition failure found either
while building a solver or at the start of a ``solve`` call. None of them is
recovered internally; they are raised to the caller.

Most classes also derive from a builtin (``ValueError``,
``numpy.linalg.LinAlgError``, ``FloatingPointError``) so callers that only know
about the builtin keep working.
"""

from __future__ import annotations

import numpy as np


class FEMError(Exception):
    """Base class for all errors raised by :mod:`fem1d`."""


class MeshError(FEMError, ValueError):
    """Raised when a mesh violates the basis builder's preconditions."""


class MeshTooSmallError(MeshError):
    """Raised when a mesh has fewer than 3 nodes."""


class MeshNotOrderedError(MeshError):
    """Raised when mesh nodes (or breakpoints) are not strictly increasing or not finite."""


class DimensionMismatchError(FEMError, ValueError):
    """Raised when array sizes disagree.

    Examples are an initial condition whose length differs from the number of
    interior nodes, a load vector that does not match its matrix, or a
    piecewise polynomial with ``len(polynomials) != len(breakpoints) + 1``.
    """


class QuadratureDegreeError(FEMError, ValueError):
    """Raised for a Gauss-Legendre degree that is not an integer >= 2."""


class DegenerateIntervalError(FEMError, ValueError):
    """Raised when an affine interval map is requested for ``beg == end``."""


class SingularSystemError(FEMError, np.linalg.LinAlgError):
    """Raised by the Thomas algorithm on a (near-)zero pivot."""


class NonFiniteSystemError(FEMError, FloatingPointError):
    """Raised when an assembled matrix or load vector holds NaN or inf."""


__all__ = [
    "FEMError",
    "MeshError",
    "MeshTooSmallError",
    "MeshNotOrderedError",
    "DimensionMismatchError",
    "QuadratureDegreeError",
    "DegenerateIntervalError",
    "SingularSystemError",
    "NonFiniteSystemError",
]
