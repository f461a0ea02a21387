"""
Tolerance tiers and iteration caps for numerical comparisons.

Defines precision expectations for the different checks the library makes:
- Matrix equality and structural predicates
- Eigen identities (Av = λv, trace, determinant, characteristic equation)
- The power property Aⁿv = λⁿv, which amplifies rounding

Used by Matrix predicates, the eigen solvers and the test suite.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Matrix.is_equal and the structural predicates (symmetric, involutory, ...)
MATRIX_EQUALITY = ToleranceTier(
    rtol=0.0,
    atol=1e-11,
    name='matrix_equality',
    description='Elementwise absolute tolerance for matrix comparisons',
)

# Eigen identities on well-conditioned input
EIGEN_AXIOMS = ToleranceTier(
    rtol=0.0,
    atol=1e-6,
    name='eigen_axioms',
    description='Av = λv, tr(A) = Σλ, det(A) = Πλ, det(A - λI) = 0',
)

# Matrix power property
EIGEN_POWER = ToleranceTier(
    rtol=0.0,
    atol=1e-5,
    name='eigen_power',
    description='Aⁿv = λⁿv for small integer n',
)

# Householder reflections are exact to a few ulps relative to ‖x‖
HOUSEHOLDER = ToleranceTier(
    rtol=1e-14,
    atol=0.0,
    name='householder',
    description='Reflector identities relative to the input norm',
)

MACHINE_EPSILON = float(np.finfo(np.float64).eps)

# QR iteration: cap per unreduced block; every EXCEPTIONAL_SHIFT_PERIOD
# iterations without deflation an ad-hoc shift replaces Wilkinson's.
DEFAULT_MAX_ITER = 100
EXCEPTIONAL_SHIFT_PERIOD = 10

# Sub-diagonal entries below DEFLATION_TOL * (|h[k-1,k-1]| + |h[k,k]|) are zero.
DEFLATION_TOL = MACHINE_EPSILON

# Inverse iteration
INVERSE_ITERATION_MAX_STEPS = 20
INVERSE_ITERATION_RESIDUAL = 1e-10

# Eigenvalues closer than CLUSTER_RTOL * ‖A‖ share an eigenspace
CLUSTER_RTOL = 1e-6


def select_tolerance(check: str) -> ToleranceTier:
    """Select the tolerance tier for a named check."""
    tiers = {
        'matrix_equality': MATRIX_EQUALITY,
        'eigen_axioms': EIGEN_AXIOMS,
        'eigen_power': EIGEN_POWER,
        'householder': HOUSEHOLDER,
    }
    try:
        return tiers[check]
    except KeyError:
        raise ValueError(
            f"Unknown tolerance check {check!r}, expected one of {sorted(tiers)}"
        ) from None
