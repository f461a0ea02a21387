"""
Magnitude-safe norms and power-of-two scaling.

np.linalg.norm squares its entries, so finite input above ~1e154
overflows and input below ~1e-154 underflows. Dividing by the largest
magnitude first keeps every square in [0, 1].

Scaling by a power of two changes only the floating-point exponent, so
it is exact and can be undone without rounding.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray


def scaled_norm(x: ArrayLike) -> float:
    """
    Euclidean norm of a vector (Frobenius norm of a matrix) without
    intermediate overflow or underflow.
    """
    x = np.asarray(x, dtype=np.float64)
    if x.size == 0:
        return 0.0
    peak = float(np.max(np.abs(x)))
    if peak == 0.0 or not np.isfinite(peak):
        return peak
    return peak * float(np.linalg.norm(x / peak))


def power_of_two_scale(
    A: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], int]:
    """
    Scale A by 2⁻ᵉ so its largest magnitude lies in [0.5, 1).

    Returns:
        (scaled, e) with A = scaled·2ᵉ. A zero array comes back
        unchanged with e = 0.
    """
    peak = float(np.max(np.abs(A))) if A.size else 0.0
    if peak == 0.0 or not np.isfinite(peak):
        return A, 0
    _, exponent = np.frexp(peak)
    exponent = int(exponent)
    return np.ldexp(A, -exponent), exponent
