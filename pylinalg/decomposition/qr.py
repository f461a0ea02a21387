"""
QR decomposition using Householder reflections.

    A = QR

Q is orthogonal, R is upper triangular. Reflector i zeroes the entries
below the diagonal of column i; it acts as an identity block on the first
i rows/columns, so it is applied to the trailing rows of R and the
trailing columns of Q only.

Used by the eigen QR iteration and by qr_solve for least squares.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.linalg import solve_triangular

from pylinalg.core.exceptions import DimensionError, SingularMatrixError
from pylinalg.core.validation import check_multipliable
from pylinalg.core.compute.tolerances import MACHINE_EPSILON
from pylinalg.decomposition.householder import (
    householder_vector,
    reflect_rows,
    reflect_columns,
)
from pylinalg.matrix.matrix import Matrix
from pylinalg.matrix.vector import Vector


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        Q: Orthogonal factor (m x k where k = min(m, n))
        R: Upper triangular factor (k x n)
        rank: Numerical rank determined from R diagonal
    """
    Q: Matrix
    R: Matrix
    rank: int


def householder_qr(
    A: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Complete Householder QR on a raw array.

    Returns:
        (Q, R) with Q m×m orthogonal and R m×n upper triangular.

    Algorithm notes:
        For a square (or wide) matrix the final reflector would act on a
        1×1 block and only flip a sign, so min(m - 1, n) reflectors are
        applied.
    """
    m, n = A.shape
    R = np.array(A, dtype=np.float64, copy=True)
    Q = np.eye(m)

    for i in range(min(m - 1, n)):
        v, beta, _ = householder_vector(R[i:, i])
        if beta == 0.0:
            continue
        R[i:, i:] = reflect_rows(R[i:, i:], v, beta)
        Q[:, i:] = reflect_columns(Q[:, i:], v, beta)
        # Entries below the pivot are zero by construction
        R[i + 1:, i] = 0.0

    return Q, R


def _numerical_rank(R: NDArray[np.floating[Any]], shape: tuple[int, int]) -> int:
    diag_R = np.abs(np.diag(R))
    if len(diag_R) > 0 and np.max(diag_R) > 0:
        # Tolerance based on matrix size and machine epsilon
        tol = max(shape) * MACHINE_EPSILON * np.max(diag_R)
        return int(np.sum(diag_R > tol))
    return 0


def qr_decompose(A: ArrayLike | Matrix) -> QRResult:
    """
    Decompose a matrix into Q·R using Householder reflections.

    Args:
        A: Matrix to decompose (m x n)

    Returns:
        QRResult with reduced factors (Q is m×k, R is k×n, k = min(m, n))
        and the numerical rank
    """
    A = Matrix.from_array(A)
    m, n = A.shape
    Q, R = householder_qr(A.to_array())
    k = min(m, n)

    return QRResult(
        Q=Matrix._build(Q[:, :k]),
        R=Matrix._build(R[:k, :]),
        rank=_numerical_rank(R, A.shape),
    )


def qr_solve(
    A: ArrayLike | Matrix,
    b: ArrayLike | Vector,
    check_rank: bool = True
) -> Vector:
    """
    Solve least squares via QR decomposition.

    Solves: min_x ||b - Ax||² via QR decomposition of A.

    The solution is computed as:
        A = QR
        x = R⁻¹ Q'b

    Args:
        A: Coefficient matrix (m x n), must have m >= n
        b: Right-hand side (m,)
        check_rank: If True, raise SingularMatrixError on rank-deficient A

    Returns:
        Solution vector x (n,)

    Raises:
        DimensionMismatchError: If len(b) != m
        DimensionError: If m < n
        SingularMatrixError: If A is rank-deficient and check_rank=True
    """
    A = Matrix.from_array(A)
    b = Vector.from_array(b)
    m, n = A.shape
    check_multipliable((b.length,), A.shape, 'qr_solve')
    if m < n:
        raise DimensionError(
            f"qr_solve: need at least as many rows as columns, got shape {A.shape}"
        )

    qr_result = qr_decompose(A)

    if check_rank and qr_result.rank < n:
        raise SingularMatrixError(
            f"Coefficient matrix is rank-deficient: rank={qr_result.rank}, expected={n}.",
            matrix_name='A',
            rank=qr_result.rank,
            expected_rank=n
        )

    # Compute Q'b first, then solve the triangular system
    Qtb = qr_result.Q.to_array().T @ b.to_array()

    # R is n x n upper triangular (for reduced QR with m >= n)
    R = qr_result.R.to_array()
    x = solve_triangular(R[:n, :n], Qtb[:n], lower=False)

    return Vector._build(x)
