"""
Shifted QR iteration on an upper Hessenberg matrix.

The active block B = H[lo:hi, lo:hi] is iterated until a sub-diagonal
entry becomes negligible; the block then splits in two and each half is
iterated independently. 1×1 blocks are eigenvalues, 2×2 blocks are
solved in closed form.

One step, with μ the Wilkinson shift (the eigenvalue of the trailing 2×2
closer to its last diagonal entry):

    B - μI = QR,    B ← RQ + μI

When the trailing 2×2 has a complex-conjugate pair no real single shift
can isolate it, so an explicit double-shift step is taken instead:

    M = B² - sB + tI = QR,    B ← QᵗBQ

with s, t the trace and determinant of the trailing 2×2. Every
EXCEPTIONAL_SHIFT_PERIOD iterations without deflation an ad-hoc shift
breaks cycles such as those of permutation matrices.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylinalg.core.exceptions import ConvergenceError
from pylinalg.core.compute.scaling import power_of_two_scale, scaled_norm
from pylinalg.core.compute.tolerances import (
    EXCEPTIONAL_SHIFT_PERIOD,
    MACHINE_EPSILON,
)
from pylinalg.decomposition.qr import householder_qr
from pylinalg.eigen._closed_form import eigenvalues_2x2


@dataclass
class QRIterationOutcome:
    """
    Eigenvalues found by the QR iteration, in diagonal position order.

    Attributes:
        values: Real eigenvalues; NaN in the slots of complex pairs
        pairs: Complex-conjugate pairs as (real, imag)
        iterations: Total QR steps over all blocks
        max_block_iterations: Most steps any single block needed
        blocks: Number of blocks the matrix deflated into
    """
    values: NDArray[np.floating[Any]]
    pairs: list[tuple[float, float]] = field(default_factory=list)
    iterations: int = 0
    max_block_iterations: int = 0
    blocks: int = 0


def _find_split(
    H: NDArray[np.floating[Any]],
    lo: int,
    hi: int,
    tol: float,
    floor: float,
) -> int | None:
    """Bottom-most k in (lo, hi) with a negligible H[k, k-1], else None."""
    for k in range(hi - 1, lo, -1):
        sub = abs(H[k, k - 1])
        neighbours = abs(H[k - 1, k - 1]) + abs(H[k, k])
        if sub <= tol * neighbours or sub <= floor:
            return k
    return None


def _smallest_subdiagonal(H: NDArray[np.floating[Any]], lo: int, hi: int) -> float:
    return float(np.min(np.abs(np.diag(H[lo:hi, lo:hi], k=-1))))


def _single_shift_step(
    B: NDArray[np.floating[Any]],
    mu: float,
) -> NDArray[np.floating[Any]]:
    shifted = B - mu * np.eye(B.shape[0])
    Q, R = householder_qr(shifted)
    return R @ Q + mu * np.eye(B.shape[0])


def _double_shift_step(
    B: NDArray[np.floating[Any]],
    s: float,
    t: float,
) -> NDArray[np.floating[Any]]:
    M = B @ B - s * B + t * np.eye(B.shape[0])
    Q, _ = householder_qr(M)
    return Q.T @ B @ Q


def _qr_step(B: NDArray[np.floating[Any]], iteration: int) -> NDArray[np.floating[Any]]:
    """
    One shifted QR step on an unreduced Hessenberg block of order >= 3.

    The step runs on B·2⁻ᵉ with its largest entry near 1, so the shift
    discriminant and B² stay in range, and the result is scaled back.
    """
    B, exponent = power_of_two_scale(B)
    a, b = B[-2, -2], B[-2, -1]
    c, d = B[-1, -2], B[-1, -1]

    if iteration % EXCEPTIONAL_SHIFT_PERIOD == 0:
        mu = d + 0.75 * (abs(B[-1, -2]) + abs(B[-2, -3]))
        B = _single_shift_step(B, mu)
    else:
        half_gap = (a - d) / 2.0
        disc = half_gap * half_gap + b * c
        if disc >= 0.0:
            root = np.sqrt(disc)
            mid = (a + d) / 2.0
            mu1, mu2 = mid + root, mid - root
            mu = mu1 if abs(mu1 - d) <= abs(mu2 - d) else mu2
            B = _single_shift_step(B, mu)
        else:
            B = _double_shift_step(B, a + d, a * d - b * c)

    # Restore exact Hessenberg structure
    B[np.tril_indices(B.shape[0], k=-2)] = 0.0
    return np.ldexp(B, exponent)


def qr_iteration(
    H: NDArray[np.floating[Any]],
    max_iter: int,
    tol: float,
) -> QRIterationOutcome:
    """
    Eigenvalues of an upper Hessenberg array by deflating shifted QR.

    Args:
        H: Upper Hessenberg array (not modified)
        max_iter: Maximum QR steps per unreduced block
        tol: Relative deflation tolerance

    Returns:
        QRIterationOutcome with values in diagonal position order

    Raises:
        ConvergenceError: If a block fails to deflate within max_iter steps
    """
    H = np.array(H, dtype=np.float64, copy=True)
    n = H.shape[0]
    floor = MACHINE_EPSILON * scaled_norm(H)
    outcome = QRIterationOutcome(values=np.full(n, np.nan))

    stack = [(0, n)]
    while stack:
        lo, hi = stack.pop()
        iterations = 0

        while True:
            size = hi - lo
            if size == 1:
                outcome.values[lo] = H[lo, lo]
                outcome.blocks += 1
                break

            if size == 2:
                values, pair = eigenvalues_2x2(
                    H[lo, lo], H[lo, lo + 1], H[lo + 1, lo], H[lo + 1, lo + 1]
                )
                outcome.values[lo:hi] = values
                if pair is not None:
                    outcome.pairs.append(pair)
                outcome.blocks += 1
                break

            k = _find_split(H, lo, hi, tol, floor)
            if k is not None:
                H[k, k - 1] = 0.0
                stack.append((lo, k))
                stack.append((k, hi))
                break

            if iterations >= max_iter:
                raise ConvergenceError(
                    f"QR iteration did not deflate a {size}x{size} block "
                    f"within {max_iter} iterations",
                    iterations=iterations,
                    final_change=_smallest_subdiagonal(H, lo, hi),
                    reason='max_iterations',
                    threshold=tol,
                )

            iterations += 1
            outcome.iterations += 1
            H[lo:hi, lo:hi] = _qr_step(H[lo:hi, lo:hi].copy(), iterations)

        outcome.max_block_iterations = max(outcome.max_block_iterations, iterations)

    return outcome
