"""
Core infrastructure for PyLinalg.

This module provides shared abstractions and utilities used by the matrix,
decomposition and eigen submodules.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and tolerance constants
"""

from pylinalg.core.protocols import Backend
from pylinalg.core.result import Result
from pylinalg.core.exceptions import (
    PyLinalgError,
    ValidationError,
    DimensionError,
    DimensionMismatchError,
    NotSquareError,
    NumericalError,
    SingularMatrixError,
    ComplexEigenvalueError,
    ConvergenceError,
    ComplexEigenvalueWarning,
    InverseIterationWarning,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyLinalgError",
    "ValidationError",
    "DimensionError",
    "DimensionMismatchError",
    "NotSquareError",
    "NumericalError",
    "SingularMatrixError",
    "ComplexEigenvalueError",
    "ConvergenceError",
    # Warnings
    "ComplexEigenvalueWarning",
    "InverseIterationWarning",
]
