"""
PyLinalg: dense real linear algebra for Python.

Immutable matrix and vector types, Householder-based decompositions and
an eigen-solver built on Hessenberg reduction and shifted QR iteration.

Submodules:
    matrix: Matrix and Vector types
    decomposition: Householder, QR, LU and Hessenberg decompositions
    eigen: Eigenvalues, eigenvectors and power iteration
"""

__version__ = "0.1.0"

from pylinalg import matrix
from pylinalg import decomposition
from pylinalg import eigen
from pylinalg.matrix import Matrix, Vector

__all__ = [
    "__version__",
    "matrix",
    "decomposition",
    "eigen",
    "Matrix",
    "Vector",
]
