"""
Eigenvalues and eigenvectors of real square matrices.

Public API:
    eig(A, ...) -> EigenSolution
    eigenvalues(A, ...) -> ndarray
    eigenvectors(A, ...) -> Matrix
    power_iteration(A, ...) -> (eigenvalue, Vector)

Example:
    >>> from pylinalg.eigen import eig
    >>> solution = eig([[2, -1, 0], [-1, 2, -1], [0, -1, 2]])
    >>> print(solution.eigenvalues)
    >>> print(solution.summary())
"""

from pylinalg.eigen.design import EigenDesign
from pylinalg.eigen.solution import EigenSolution, EigenParams
from pylinalg.eigen.solvers import eig, eigenvalues, eigenvectors, power_iteration

__all__ = [
    "eig",
    "eigenvalues",
    "eigenvectors",
    "power_iteration",
    "EigenDesign",
    "EigenSolution",
    "EigenParams",
]
