"""
EigenDesign: validated input for the eigen solvers.

Wraps a square Matrix and records the structural facts the backends use
(order, symmetry). Follows the design / solution / backend split used
across the library.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.validation import check_square
from pylinalg.matrix.matrix import Matrix


@dataclass(frozen=True)
class EigenDesign:
    """
    Design for an eigen-decomposition.

    Immutable after construction.

    Construction:
        EigenDesign.from_array([[2, 0], [0, 3]])
        EigenDesign.from_array(Matrix.identity(3))
    """
    _matrix: Matrix
    _n: int
    _is_symmetric: bool

    @classmethod
    def from_array(cls, A: ArrayLike | Matrix) -> EigenDesign:
        """
        Build EigenDesign from a square matrix.

        Raises:
            ValidationError: If the input is not a finite numeric matrix
            NotSquareError: If the matrix is not square
        """
        matrix = Matrix.from_array(A)
        check_square(matrix.shape, 'eig')
        return cls(
            _matrix=matrix,
            _n=matrix.n,
            _is_symmetric=matrix.is_symmetric(),
        )

    @property
    def matrix(self) -> Matrix:
        return self._matrix

    @property
    def array(self) -> NDArray[np.floating[Any]]:
        """Writable copy of the matrix entries."""
        return self._matrix.to_array()

    @property
    def n(self) -> int:
        """Matrix order."""
        return self._n

    @property
    def is_symmetric(self) -> bool:
        return self._is_symmetric

    def __repr__(self) -> str:
        sym = ", symmetric" if self._is_symmetric else ""
        return f"EigenDesign(n={self._n}{sym})"
