"""
Closed-form eigenvalues for 1×1, 2×2 and 3×3 matrices.

The characteristic polynomial det(A - λI) = 0 is solved directly:

    2×2:  λ² - tr(A)·λ + det(A) = 0
    3×3:  λ³ - tr(A)·λ² + c₂·λ - det(A) = 0,  c₂ = sum of principal 2×2 minors

The input is scaled by its largest entry first so the discriminant tests
use a fixed tolerance. A complex-conjugate pair is reported through
`pairs` as (real, imag) and its two slots in `values` hold NaN.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylinalg.core.exceptions import ValidationError

# Discriminants within this of zero (after scaling) are repeated real roots
DISCRIMINANT_TOL = 1e-12


def eigenvalues_2x2(
    a: float, b: float, c: float, d: float,
) -> tuple[tuple[float, float], tuple[float, float] | None]:
    """
    Roots of λ² - (a + d)λ + (ad - bc) for the block [[a, b], [c, d]].

    Returns:
        ((λ₁, λ₂), None) for real roots, or ((nan, nan), (real, imag))
        for a complex-conjugate pair.
    """
    scale = max(abs(a), abs(b), abs(c), abs(d))
    if scale == 0.0:
        return (0.0, 0.0), None
    a, b, c, d = a / scale, b / scale, c / scale, d / scale

    mid = (a + d) / 2.0
    half_gap = (a - d) / 2.0
    disc = half_gap * half_gap + b * c

    if disc < -DISCRIMINANT_TOL:
        return (np.nan, np.nan), (mid * scale, np.sqrt(-disc) * scale)

    root = np.sqrt(max(disc, 0.0))
    # Larger-magnitude root first, smaller one from the product to avoid cancellation
    big = mid + root if mid >= 0 else mid - root
    if big == 0.0:
        return (0.0, 0.0), None
    small = (a * d - b * c) / big
    return (big * scale, small * scale), None


def _cubic_roots(
    tr: float, c2: float, det: float,
) -> tuple[list[float], tuple[float, float] | None]:
    """
    Roots of λ³ - tr·λ² + c2·λ - det via the depressed cubic t³ + pt + q.

    λ = t + tr/3. Three real roots use the trigonometric form; one real
    root uses Cardano's formula and yields a complex pair.
    """
    a = -tr
    p = c2 - a * a / 3.0
    q = 2.0 * a ** 3 / 27.0 - a * c2 / 3.0 - det
    shift = tr / 3.0

    D = q * q / 4.0 + p ** 3 / 27.0

    if D > DISCRIMINANT_TOL:
        sqrt_D = np.sqrt(D)
        u = np.cbrt(-q / 2.0 + sqrt_D)
        v = np.cbrt(-q / 2.0 - sqrt_D)
        real_root = u + v + shift
        pair = (-(u + v) / 2.0 + shift, np.sqrt(3.0) / 2.0 * abs(u - v))
        return [real_root], pair

    if abs(p) <= DISCRIMINANT_TOL:
        t = np.cbrt(-q)
        return [t + shift] * 3, None

    r = 2.0 * np.sqrt(-p / 3.0)
    arg = np.clip((3.0 * q / (2.0 * p)) * np.sqrt(-3.0 / p), -1.0, 1.0)
    theta = np.arccos(arg) / 3.0
    roots = [
        r * np.cos(theta - 2.0 * np.pi * k / 3.0) + shift
        for k in range(3)
    ]
    return roots, None


def closed_form_eigenvalues(
    A: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], list[tuple[float, float]]]:
    """
    Eigenvalues of a 1×1, 2×2 or 3×3 array from its characteristic polynomial.

    Returns:
        (values, pairs): values has length n with NaN in the slots of a
        complex pair; pairs lists each pair as (real, imag).

    Raises:
        ValidationError: If the matrix is larger than 3×3
    """
    n = A.shape[0]
    if n > 3:
        raise ValidationError(
            f"closed_form: characteristic polynomial roots need n <= 3, got n={n}"
        )

    if n == 1:
        return np.array([A[0, 0]], dtype=np.float64), []

    if n == 2:
        values, pair = eigenvalues_2x2(A[0, 0], A[0, 1], A[1, 0], A[1, 1])
        return np.array(values, dtype=np.float64), [pair] if pair else []

    scale = float(np.max(np.abs(A)))
    if scale == 0.0:
        return np.zeros(3), []
    S = A / scale

    tr = float(np.trace(S))
    c2 = (
        S[0, 0] * S[1, 1] - S[0, 1] * S[1, 0]
        + S[0, 0] * S[2, 2] - S[0, 2] * S[2, 0]
        + S[1, 1] * S[2, 2] - S[1, 2] * S[2, 1]
    )
    a, b, c = S[0]
    d, e, f = S[1]
    g, h, i = S[2]
    det = a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)

    roots, pair = _cubic_roots(tr, float(c2), float(det))
    if pair is None:
        return np.array(roots) * scale, []

    values = np.array([roots[0] * scale, np.nan, np.nan])
    return values, [(pair[0] * scale, pair[1] * scale)]
