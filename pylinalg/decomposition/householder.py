"""
Householder reflections.

Given a column x, the reflector

             v·vᵗ
    H = I - 2 ----      v = x - α·e₁,   α = -sgn(x₀)·‖x‖₂
             vᵗv

maps x onto α·e₁. The sign of α is chosen opposite to x₀ so that
v₀ = x₀ + sgn(x₀)·‖x‖ adds two numbers of the same sign; the other choice
subtracts nearly equal quantities when x is close to a multiple of e₁.

H is symmetric, orthogonal, involutory, has determinant -1 and eigenvalues
{+1 (n-1 times), -1 (once)}. The zero vector maps to the identity.

QR and Hessenberg apply reflectors to sub-blocks with reflect_rows and
reflect_columns instead of forming H explicitly.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import ValidationError
from pylinalg.core.validation import check_array, check_finite, check_not_empty
from pylinalg.matrix.matrix import Matrix
from pylinalg.matrix.vector import Vector


def householder_vector(
    x: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], float, float]:
    """
    Reflector data for a 1-D array x.

    Returns:
        (v, beta, alpha) with H = I - beta·v·vᵗ and H·x = alpha·e₁.
        For the zero vector beta = 0, so H = I.

    x is divided by its largest magnitude before any norm is taken and v
    is rescaled the same way; H depends only on the direction of v, so
    vᵗv stays finite for inputs of any magnitude.
    """
    x = np.asarray(x, dtype=np.float64)
    peak = float(np.max(np.abs(x))) if x.size else 0.0
    if peak == 0.0:
        return np.zeros_like(x), 0.0, 0.0

    u = x / peak
    norm_u = float(np.linalg.norm(u))

    # sgn(0) is taken as +1
    sign = 1.0 if u[0] >= 0 else -1.0
    alpha = -sign * norm_u * peak

    v = u.copy()
    v[0] = u[0] + sign * norm_u  # (x₀ - α) / peak
    v = v / np.max(np.abs(v))
    vtv = float(v @ v)
    if vtv == 0.0:
        return np.zeros_like(x), 0.0, alpha

    return v, 2.0 / vtv, alpha


def reflector_matrix(
    v: NDArray[np.floating[Any]],
    beta: float,
) -> NDArray[np.floating[Any]]:
    """Dense I - beta·v·vᵗ."""
    return np.eye(v.shape[0]) - beta * np.outer(v, v)


def reflect_rows(
    A: NDArray[np.floating[Any]],
    v: NDArray[np.floating[Any]],
    beta: float,
) -> NDArray[np.floating[Any]]:
    """H·A for H = I - beta·v·vᵗ, without forming H."""
    if beta == 0.0:
        return A
    return A - beta * np.outer(v, v @ A)


def reflect_columns(
    A: NDArray[np.floating[Any]],
    v: NDArray[np.floating[Any]],
    beta: float,
) -> NDArray[np.floating[Any]]:
    """A·H for H = I - beta·v·vᵗ, without forming H."""
    if beta == 0.0:
        return A
    return A - beta * np.outer(A @ v, v)


def _as_column(x: ArrayLike | Vector | Matrix) -> NDArray[np.floating[Any]]:
    """Column 0 of a matrix, or the vector itself, as a 1-D array."""
    if isinstance(x, Vector):
        return x.to_array()
    if isinstance(x, Matrix):
        return x.to_array()[:, 0]

    data = check_array(x, 'x')
    check_not_empty(data, 'x')
    check_finite(data, 'x')
    if data.ndim == 1:
        return data
    if data.ndim == 2:
        return data[:, 0]
    raise ValidationError(f"x: expected a vector or matrix, got {data.ndim}D input")


def householder_transform(x: ArrayLike | Vector | Matrix) -> Matrix:
    """
    Householder reflector for a column vector.

    Parameters
    ----------
    x : Vector, 1-D array, or Matrix
        The target column. For an n×k matrix only column 0 is used.

    Returns
    -------
    Matrix
        n×n reflector H with H·x = (-sgn(x₀)·‖x‖, 0, ..., 0)ᵗ. The
        identity when x is the zero vector.
    """
    column = _as_column(x)
    v, beta, _ = householder_vector(column)
    if beta == 0.0:
        return Matrix.identity(column.shape[0])
    return Matrix._build(reflector_matrix(v, beta))
