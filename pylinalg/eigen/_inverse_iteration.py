"""
Eigenvectors by inverse iteration.

Given an accurate eigenvalue estimate λ, repeatedly solving

    (A - λI)·w = v,    v ← w / ‖w‖

amplifies the component of v along the eigenvector for λ by roughly
1/|λ_true - λ|, so one or two steps usually suffice. A - λI is singular
to working precision; its LU factorization floors tiny pivots at
eps·‖A‖ so every solve is well defined.

Eigenvalues that agree to CLUSTER_RTOL·‖A‖ are treated as one
eigenspace: later members are orthogonalised against earlier ones so a
repeated eigenvalue with a multi-dimensional eigenspace gets independent
vectors. A defective eigenvalue has no second direction; the
unorthogonalised vector is used then.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylinalg.core.compute.scaling import scaled_norm
from pylinalg.core.compute.tolerances import MACHINE_EPSILON
from pylinalg.decomposition.lu import lu_factor_array, lu_solve_array

# Fixed seed for the start vectors; results are reproducible across calls
START_VECTOR_SEED = 20240531


@dataclass
class InverseIterationOutcome:
    """
    Attributes:
        vectors: n×k array, column i for eigenvalue i (NaN for NaN eigenvalues)
        residuals: ‖A·vᵢ - λᵢ·vᵢ‖ per column (NaN for NaN eigenvalues)
        steps: Inverse iteration steps per column
        unconverged: Column indices that missed the residual target
    """
    vectors: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    steps: list[int] = field(default_factory=list)
    unconverged: list[int] = field(default_factory=list)


def canonical_sign(v: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """Flip v so its largest-magnitude component is positive."""
    i = int(np.argmax(np.abs(v)))
    return -v if v[i] < 0 else v


def _orthogonalize(
    w: NDArray[np.floating[Any]],
    basis: list[NDArray[np.floating[Any]]],
) -> NDArray[np.floating[Any]]:
    # Two passes of classical Gram-Schmidt; basis must be orthonormal
    for _ in range(2):
        for u in basis:
            w = w - (u @ w) * u
    return w


def _orthonormal_basis(
    vectors: list[NDArray[np.floating[Any]]],
) -> list[NDArray[np.floating[Any]]]:
    """Orthonormal basis for the span of unit vectors from one cluster."""
    basis: list[NDArray[np.floating[Any]]] = []
    for v in vectors:
        w = _orthogonalize(v, basis)
        norm_w = scaled_norm(w)
        if norm_w > 1e-8:
            basis.append(w / norm_w)
    return basis


def _refine(
    A: NDArray[np.floating[Any]],
    lam: float,
    start: NDArray[np.floating[Any]],
    basis: list[NDArray[np.floating[Any]]],
    pivot_floor: float,
    max_steps: int,
    target: float,
) -> tuple[NDArray[np.floating[Any]], float, int]:
    n = A.shape[0]
    L, U, perm, _ = lu_factor_array(A - lam * np.eye(n), pivot_floor=pivot_floor)

    v = _orthogonalize(start, basis)
    v = v / scaled_norm(v)
    residual = scaled_norm(A @ v - lam * v)
    steps = 0

    while steps < max_steps and residual > target:
        w = lu_solve_array(L, U, perm, v)
        w = _orthogonalize(w, basis)
        norm_w = scaled_norm(w)
        if norm_w == 0.0 or not np.isfinite(norm_w):
            break
        v = w / norm_w
        residual = scaled_norm(A @ v - lam * v)
        steps += 1

    return v, residual, steps


def inverse_iteration(
    A: NDArray[np.floating[Any]],
    eigenvalues: NDArray[np.floating[Any]],
    max_steps: int,
    residual_tol: float,
    cluster_rtol: float,
) -> InverseIterationOutcome:
    """
    Unit eigenvectors for each eigenvalue, columns aligned by position.

    Args:
        A: Square array
        eigenvalues: Eigenvalue estimates; NaN entries get NaN columns
        max_steps: Maximum inverse iteration steps per eigenvalue
        residual_tol: Target ‖A·v - λ·v‖ relative to ‖A‖
        cluster_rtol: Eigenvalues closer than this (relative to
            ‖A‖) share an eigenspace

    Returns:
        InverseIterationOutcome
    """
    n = A.shape[0]
    k = len(eigenvalues)
    # The zero matrix has every vector as an eigenvector; any positive scale works
    norm_A = scaled_norm(A) or 1.0
    pivot_floor = MACHINE_EPSILON * norm_A
    target = residual_tol * norm_A
    cluster_width = cluster_rtol * norm_A

    rng = np.random.default_rng(START_VECTOR_SEED)
    outcome = InverseIterationOutcome(
        vectors=np.full((n, k), np.nan),
        residuals=np.full(k, np.nan),
    )
    found: list[tuple[float, NDArray[np.floating[Any]]]] = []

    for i, lam in enumerate(eigenvalues):
        start = rng.standard_normal(n)
        if np.isnan(lam):
            outcome.steps.append(0)
            continue

        basis = _orthonormal_basis(
            [u for mu, u in found if abs(mu - lam) <= cluster_width]
        )
        if len(basis) >= n:
            basis = []

        v, residual, steps = _refine(A, lam, start, basis, pivot_floor, max_steps, target)
        if basis and residual > target:
            # Defective eigenvalue: no independent direction left
            v, residual, extra = _refine(A, lam, start, [], pivot_floor, max_steps, target)
            steps += extra

        if residual > target:
            outcome.unconverged.append(i)

        v = canonical_sign(v)
        outcome.vectors[:, i] = v
        outcome.residuals[i] = residual
        outcome.steps.append(steps)
        found.append((float(lam), v))

    return outcome
