"""
Hessenberg decomposition.

    A = Q·H·Qᵗ

H is upper Hessenberg (zeros below the first sub-diagonal) and Q is
orthogonal. For a symmetric A, H is tridiagonal. The reduction applies
n - 2 Householder similarity transforms H ← P·H·Pᵗ, each zeroing one
column below the sub-diagonal; similarity preserves eigenvalues, which is
why the eigen QR iteration starts here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.validation import check_square
from pylinalg.core.compute.scaling import scaled_norm
from pylinalg.core.compute.tolerances import MACHINE_EPSILON
from pylinalg.decomposition.householder import (
    householder_vector,
    reflect_rows,
    reflect_columns,
)
from pylinalg.matrix.matrix import Matrix


@dataclass(frozen=True)
class HessenbergResult:
    """
    Result of Hessenberg decomposition.

    Attributes:
        Q: Orthogonal transformation matrix
        H: Upper Hessenberg matrix with A = Q·H·Qᵗ
    """
    Q: Matrix
    H: Matrix


def hessenberg_reduce(
    A: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Householder reduction of a raw square array.

    Returns:
        (Q, H) as arrays. Columns whose part below the sub-diagonal is
        already negligible are skipped.
    """
    n = A.shape[0]
    H = np.array(A, dtype=np.float64, copy=True)
    Q = np.eye(n)
    scale = scaled_norm(H)
    if scale == 0.0:
        return Q, H

    for k in range(n - 2):
        x = H[k + 1:, k]
        if scaled_norm(x[1:]) <= MACHINE_EPSILON * scale:
            H[k + 2:, k] = 0.0
            continue

        v, beta, alpha = householder_vector(x)
        # P acts on rows/columns k+1..n-1 only
        H[k + 1:, :] = reflect_rows(H[k + 1:, :], v, beta)
        H[:, k + 1:] = reflect_columns(H[:, k + 1:], v, beta)
        Q[:, k + 1:] = reflect_columns(Q[:, k + 1:], v, beta)

        H[k + 1, k] = alpha
        H[k + 2:, k] = 0.0

    return Q, H


def hessenberg_decompose(A: ArrayLike | Matrix) -> HessenbergResult:
    """
    Reduce a square matrix to upper Hessenberg form.

    1×1 and 2×2 matrices are already Hessenberg and come back unchanged
    with Q = I.

    Raises:
        NotSquareError: If the matrix is not square
    """
    A = Matrix.from_array(A)
    check_square(A.shape, 'hessenberg_decompose')

    Q, H = hessenberg_reduce(A.to_array())

    return HessenbergResult(Q=Matrix._build(Q), H=Matrix._build(H))
