"""
LU decomposition with partial pivoting.

    PA = LU

P is a permutation matrix, L is unit lower triangular and U is upper
triangular. At step k the row with the largest |a_ik| (i >= k) is swapped
into the pivot position; each swap flips the sign of the determinant.

Singular matrices decompose without error (U then has a zero on its
diagonal); only solves against a singular U raise.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.linalg import solve_triangular

from pylinalg.core.exceptions import SingularMatrixError
from pylinalg.core.validation import check_square, check_multipliable
from pylinalg.matrix.matrix import Matrix
from pylinalg.matrix.vector import Vector


def lu_factor_array(
    A: NDArray[np.floating[Any]],
    pivot_floor: float = 0.0,
) -> tuple[NDArray, NDArray, NDArray[np.intp], int]:
    """
    Doolittle LU with partial pivoting on a raw square array.

    Args:
        A: Square array
        pivot_floor: Pivots with magnitude below this are replaced by
            ±pivot_floor. Inverse iteration uses this to solve against a
            deliberately near-singular matrix; 0 leaves pivots untouched.

    Returns:
        (L, U, perm, swaps) where A[perm] = L @ U and swaps counts row
        interchanges.
    """
    n = A.shape[0]
    U = np.array(A, dtype=np.float64, copy=True)
    L = np.eye(n)
    perm = np.arange(n)
    swaps = 0

    for k in range(n):
        p = k + int(np.argmax(np.abs(U[k:, k])))
        if p != k:
            U[[k, p], :] = U[[p, k], :]
            L[[k, p], :k] = L[[p, k], :k]
            perm[[k, p]] = perm[[p, k]]
            swaps += 1

        pivot = U[k, k]
        if abs(pivot) < pivot_floor:
            pivot = pivot_floor if pivot >= 0 else -pivot_floor
            U[k, k] = pivot
        if pivot == 0.0:
            continue

        multipliers = U[k + 1:, k] / pivot
        L[k + 1:, k] = multipliers
        U[k + 1:, k:] -= np.outer(multipliers, U[k, k:])
        U[k + 1:, k] = 0.0

    return L, U, perm, swaps


def lu_solve_array(
    L: NDArray[np.floating[Any]],
    U: NDArray[np.floating[Any]],
    perm: NDArray[np.intp],
    b: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Solve LU x = b[perm] by forward then back substitution.

    Raises:
        SingularMatrixError: If U has a zero on its diagonal
    """
    diag_U = np.diag(U)
    if np.any(diag_U == 0.0):
        rank = int(np.sum(diag_U != 0.0))
        raise SingularMatrixError(
            f"Matrix is singular: {U.shape[0] - rank} zero pivot(s) in LU factorization",
            matrix_name='A',
            rank=rank,
            expected_rank=U.shape[0],
        )
    y = solve_triangular(L, b[perm], lower=True, unit_diagonal=True)
    return solve_triangular(U, y, lower=False)


@dataclass(frozen=True)
class LUResult:
    """
    Result of LU decomposition.

    Attributes:
        L: Unit lower triangular factor
        U: Upper triangular factor
        P: Permutation matrix with P·A = L·U
        swaps: Number of row interchanges performed
    """
    L: Matrix
    U: Matrix
    P: Matrix
    swaps: int

    def det(self) -> float:
        """
        │A│ = (-1)ˢ ∏ Uᵢᵢ.

        The product is accumulated as mantissa·2ᵉ so a partial product
        cannot overflow or underflow when the final value is in range.
        """
        sign = -1.0 if self.swaps % 2 else 1.0
        mantissas, exponents = np.frexp(self.U.diagonal_elements())
        mantissa, exponent = 1.0, 0
        for m, e in zip(mantissas, exponents):
            mantissa, shift = np.frexp(mantissa * m)
            exponent += int(e) + int(shift)
        return sign * float(np.ldexp(mantissa, exponent))

    def solve_array(self, b: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """Solve A·x = b for a 1-D b or for each column of a 2-D b."""
        perm = np.argmax(self.P.to_array(), axis=1)
        return lu_solve_array(self.L.to_array(), self.U.to_array(), perm, b)

    def solve(self, b: ArrayLike | Vector) -> Vector:
        """
        Solve A·x = b.

        Raises:
            DimensionMismatchError: If len(b) != n
            SingularMatrixError: If A is singular
        """
        b = Vector.from_array(b)
        check_multipliable(self.U.shape, (b.length,), 'solve')
        return Vector._build(self.solve_array(b.to_array()))


def lu_decompose(A: ArrayLike | Matrix) -> LUResult:
    """
    Decompose a square matrix into P·A = L·U with partial pivoting.

    Raises:
        NotSquareError: If the matrix is not square
    """
    A = Matrix.from_array(A)
    check_square(A.shape, 'lu_decompose')

    L, U, perm, swaps = lu_factor_array(A.to_array())
    P = np.eye(A.n)[perm]

    return LUResult(
        L=Matrix._build(L),
        U=Matrix._build(U),
        P=Matrix._build(P),
        swaps=swaps,
    )
