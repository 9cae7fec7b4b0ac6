# src/fem1d/numerics/tridiag.py
from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import numpy as np
from numpy.typing import NDArray

from ..exceptions import DimensionMismatchError, SingularSystemError

__all__ = [
    "Tridiag",
    "tridiag_mv",
    "solve_tridiag_thomas",
    "solve_by_thomas",
    "solve_interior_by_thomas",
    "solve_tridiag_scipy",
    "tridiag_to_dense",
]


@dataclass(frozen=True, slots=True)
class Tridiag:
    lower: NDArray[np.floating]
    diag: NDArray[np.floating]
    upper: NDArray[np.floating]

    def check(self) -> int:
        """
        Validate internal shapes and return M (system size).

        Supports M == 0 with empty diagonals:
          diag.shape  == (0,)
          lower.shape == (0,)
          upper.shape == (0,)
        """
        diag = np.asarray(self.diag)
        if diag.ndim != 1:
            raise DimensionMismatchError("diag must be 1D")

        M = int(diag.shape[0])

        lower = np.asarray(self.lower)
        upper = np.asarray(self.upper)

        if M == 0:
            if lower.shape != (0,) or upper.shape != (0,):
                raise DimensionMismatchError(
                    "For M==0, lower/upper must be empty (shape (0,))"
                )
            return 0

        if lower.shape != (M - 1,) or upper.shape != (M - 1,):
            raise DimensionMismatchError(f"lower/upper must have shape {(M - 1,)}")
        return M

    def mv(self, u: NDArray[np.floating]) -> NDArray[np.floating]:
        M = self.check()
        u = np.asarray(u)
        if u.shape != (M,):
            raise DimensionMismatchError(f"u must have shape {(M,)} got {u.shape}")
        return tridiag_mv(Bl=self.lower, Bd=self.diag, Bu=self.upper, u=u)

    def to_dense(self) -> NDArray[np.floating]:
        return tridiag_to_dense(self)

    @classmethod
    def from_dense(cls, matrix: NDArray[np.floating]) -> Tridiag:
        """
        Extract the three bands of a dense square matrix.

        Raises DimensionMismatchError if the matrix is not square or carries a
        non-zero entry off the tridiagonal band.
        """
        A = np.asarray(matrix, dtype=float)
        if A.ndim != 2 or A.shape[0] != A.shape[1]:
            raise DimensionMismatchError(f"matrix must be square, got shape {A.shape}")

        M = int(A.shape[0])
        diag = np.diagonal(A).copy()
        lower = np.diagonal(A, offset=-1).copy()
        upper = np.diagonal(A, offset=1).copy()

        off_band = A.copy()
        off_band[np.arange(M), np.arange(M)] = 0.0
        off_band[np.arange(1, M), np.arange(M - 1)] = 0.0
        off_band[np.arange(M - 1), np.arange(1, M)] = 0.0
        if np.any(off_band != 0.0):
            raise DimensionMismatchError("matrix has non-zero entries off the tridiagonal band")

        return cls(lower=lower, diag=diag, upper=upper)


def tridiag_mv(
    Bl: NDArray[np.floating],  # (M-1,) or (0,) if M==0
    Bd: NDArray[np.floating],  # (M,)
    Bu: NDArray[np.floating],  # (M-1,) or (0,) if M==0
    u: NDArray[np.floating],  # (M,)
) -> NDArray[np.floating]:
    """
    Compute y = T u where T is tridiagonal with diagonals (Bl,Bd,Bu),
    acting on a vector u of length M.

    Convention (for M>=2):
      y[0]   = Bd[0]*u[0] + Bu[0]*u[1]
      y[j]   = Bl[j-1]*u[j-1] + Bd[j]*u[j] + Bu[j]*u[j+1]   for 1<=j<=M-2
      y[M-1] = Bl[M-2]*u[M-2] + Bd[M-1]*u[M-1]

    For M==0: returns empty array.
    For M==1: y[0] = Bd[0]*u[0].
    """
    Bd = np.asarray(Bd, dtype=float)
    Bl = np.asarray(Bl, dtype=float)
    Bu = np.asarray(Bu, dtype=float)
    u = np.asarray(u, dtype=float)

    if Bd.ndim != 1:
        raise DimensionMismatchError("Bd must be 1D")

    M = int(Bd.shape[0])

    if u.shape != (M,):
        raise DimensionMismatchError(f"u must have shape {(M,)} got {u.shape}")

    if M == 0:
        if Bl.shape != (0,) or Bu.shape != (0,):
            raise DimensionMismatchError("For M==0, Bl,Bu must be empty (shape (0,))")
        return cast(NDArray[np.floating], Bd * u)  # empty

    if Bl.shape != (M - 1,) or Bu.shape != (M - 1,):
        raise DimensionMismatchError(
            f"Bl,Bu must have shape {(M - 1,)} got {Bl.shape}, {Bu.shape}"
        )

    y = Bd * u
    y[1:] += Bl * u[:-1]
    y[:-1] += Bu * u[1:]
    return cast(NDArray[np.floating], y)


def _pivot(value: float, scale: float, rtol: float, row: int) -> float:
    # relative to the size of the terms that formed the pivot
    if not abs(value) > rtol * abs(scale):
        raise SingularSystemError(f"Near-zero pivot at row {row}")
    return value


def solve_tridiag_thomas(
    A: Tridiag,
    rhs: NDArray[np.floating],
) -> NDArray[np.floating]:
    """
    Solve A x = rhs for tridiagonal A (Thomas algorithm, O(M)).

    Forward sweep:
      c[i] = A[i,i+1] / (A[i,i] - A[i,i-1] c[i-1])
      d[i] = (b[i] - A[i,i-1] d[i-1]) / (A[i,i] - A[i,i-1] c[i-1])
    Back substitution:
      x[i] = d[i] - c[i] x[i+1]

    Notes:
    - No pivoting. Prefer diagonally-dominant systems.
    - M == 1 is a direct division and M == 2 uses Cramer's rule.
    - Raises SingularSystemError (a np.linalg.LinAlgError) when a pivot is zero
      relative to the terms it was formed from, so the check is scale-free.
    - Inputs are never modified.
    """
    M = A.check()

    rhs = np.asarray(rhs)
    if rhs.shape != (M,):
        raise DimensionMismatchError(f"rhs must have shape {(M,)} got {rhs.shape}")

    dtype = np.result_type(A.lower, A.diag, A.upper, rhs, np.float64)
    lower = np.array(A.lower, dtype=dtype)
    diag = np.array(A.diag, dtype=dtype)
    upper = np.array(A.upper, dtype=dtype)
    rhs = np.array(rhs, dtype=dtype)

    if M == 0:
        return rhs

    rtol = 100.0 * np.finfo(dtype).eps

    if M == 1:
        return cast(NDArray[np.floating], rhs / _pivot(diag[0], diag[0], rtol, 0))

    if M == 2:
        p, q = diag[0] * diag[1], lower[0] * upper[0]
        det = _pivot(p - q, max(abs(p), abs(q)), rtol, 1)
        x = np.empty(2, dtype=dtype)
        x[0] = (diag[1] * rhs[0] - upper[0] * rhs[1]) / det
        x[1] = (diag[0] * rhs[1] - lower[0] * rhs[0]) / det
        return x

    c = np.empty(M - 1, dtype=dtype)
    d = np.empty(M, dtype=dtype)

    denom = _pivot(diag[0], diag[0], rtol, 0)
    c[0] = upper[0] / denom
    d[0] = rhs[0] / denom

    for i in range(1, M - 1):
        q = lower[i - 1] * c[i - 1]
        denom = _pivot(diag[i] - q, max(abs(diag[i]), abs(q)), rtol, i)
        c[i] = upper[i] / denom
        d[i] = (rhs[i] - lower[i - 1] * d[i - 1]) / denom

    q = lower[M - 2] * c[M - 2]
    denom = _pivot(diag[M - 1] - q, max(abs(diag[M - 1]), abs(q)), rtol, M - 1)
    d[M - 1] = (rhs[M - 1] - lower[M - 2] * d[M - 2]) / denom

    x = np.empty(M, dtype=dtype)
    x[M - 1] = d[M - 1]
    for i in range(M - 2, -1, -1):
        x[i] = d[i] - c[i] * x[i + 1]
    return x


def solve_by_thomas(
    matrix: NDArray[np.floating], b: NDArray[np.floating]
) -> NDArray[np.floating]:
    """Solve a dense-shaped, band-populated system; returns a vector of len(b)."""
    A = Tridiag.from_dense(matrix)
    b = np.asarray(b, dtype=float)
    if b.shape != (A.check(),):
        raise DimensionMismatchError(
            f"b must have shape {(A.check(),)} to match the matrix, got {b.shape}"
        )
    return solve_tridiag_thomas(A, b)


def solve_interior_by_thomas(
    matrix: NDArray[np.floating], b: NDArray[np.floating]
) -> NDArray[np.floating]:
    """
    Solve an interior-only system and pad it to full mesh length.

    Returns a vector of length len(b) + 2 whose first and last slots are zero;
    filling them with the Dirichlet values is the caller's job.
    """
    x_int = solve_by_thomas(matrix, b)
    out = np.zeros(x_int.shape[0] + 2, dtype=x_int.dtype)
    out[1:-1] = x_int
    return out


def solve_tridiag_scipy(
    lower: NDArray[np.floating],
    diag: NDArray[np.floating],
    upper: NDArray[np.floating],
    rhs: NDArray[np.floating],
) -> NDArray[np.floating]:
    """
    Solve using SciPy banded solver. SciPy is imported lazily.

    Shapes are validated via Tridiag.check().
    """
    from scipy.linalg import (
        solve_banded,  # local import to avoid import-time dependency
    )

    tri = Tridiag(np.asarray(lower), np.asarray(diag), np.asarray(upper))
    M = tri.check()

    rhs = np.asarray(rhs)
    if rhs.shape != (M,):
        raise DimensionMismatchError(f"rhs must have shape {(M,)} got {rhs.shape}")

    if M == 0:
        return cast(NDArray[np.floating], rhs.copy())

    ab = np.zeros((3, M), dtype=np.result_type(tri.lower, tri.diag, tri.upper, rhs))
    ab[0, 1:] = np.asarray(tri.upper)
    ab[1, :] = np.asarray(tri.diag)
    ab[2, :-1] = np.asarray(tri.lower)

    res = solve_banded((1, 1), ab, rhs)
    # scipy stubs often return Any; cast back to an NDArray
    return cast(NDArray[np.floating], np.asarray(res))


def tridiag_to_dense(
    lower: NDArray[np.floating] | Tridiag,
    diag: NDArray[np.floating] | None = None,
    upper: NDArray[np.floating] | None = None,
) -> NDArray[np.floating]:
    """
    Convert a tridiagonal to a dense matrix.
    Accepts either (lower, diag, upper) arrays or a Tridiag instance.
    """
    if isinstance(lower, Tridiag):
        tri = lower
        M = tri.check()
        lower = np.asarray(tri.lower)
        diag = np.asarray(tri.diag)
        upper = np.asarray(tri.upper)
    else:
        if diag is None or upper is None:
            raise ValueError("Must provide (lower, diag, upper) or a Tridiag")
        diag = np.asarray(diag)
        lower = np.asarray(lower)
        upper = np.asarray(upper)
        M = int(diag.shape[0])

    A = np.zeros((M, M), dtype=np.result_type(lower, diag, upper, np.float64))
    A[np.arange(M), np.arange(M)] = diag
    A[np.arange(1, M), np.arange(M - 1)] = lower
    A[np.arange(M - 1), np.arange(1, M)] = upper
    return A
