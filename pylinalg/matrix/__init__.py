"""
Dense real matrices and vectors.

Public API:
    Matrix  - immutable M×N matrix with algebra, norms and predicates
    Vector  - immutable real vector with dot product and norms
"""

from pylinalg.matrix.vector import Vector
from pylinalg.matrix.matrix import Matrix

__all__ = [
    "Matrix",
    "Vector",
]
