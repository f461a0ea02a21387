"""
Shared compute infrastructure for PyLinalg.

This module provides timing utilities and numerical tolerance constants
shared across the matrix, decomposition and eigen modules.

Submodules:
    timing: Execution timing utilities
    tolerances: Tolerance tiers and iteration caps
    scaling: Overflow-safe norms and exact power-of-two scaling
"""

from pylinalg.core.compute.timing import Timer, timed
from pylinalg.core.compute.scaling import scaled_norm, power_of_two_scale
from pylinalg.core.compute.tolerances import (
    ToleranceTier,
    MATRIX_EQUALITY,
    EIGEN_AXIOMS,
    EIGEN_POWER,
    HOUSEHOLDER,
    select_tolerance,
)

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Scaling
    "scaled_norm",
    "power_of_two_scale",
    # Tolerances
    "ToleranceTier",
    "MATRIX_EQUALITY",
    "EIGEN_AXIOMS",
    "EIGEN_POWER",
    "HOUSEHOLDER",
    "select_tolerance",
]
