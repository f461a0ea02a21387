"""
Matrix: immutable dense real matrix.

An M×N array of finite real numbers with value-producing algebra
(add, subtract, multiply, transpose, trace, determinant, ...) and
structural predicates. No operation mutates an existing Matrix; the
underlying numpy buffer is read-only.

Decompositions and eigen methods are exposed as convenience methods that
delegate to pylinalg.decomposition and pylinalg.eigen.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import ValidationError
from pylinalg.core.validation import (
    check_array,
    check_2d,
    check_finite,
    check_not_empty,
    check_square,
    check_consistent_length,
    check_same_shape,
    check_multipliable,
)
from pylinalg.core.compute.scaling import scaled_norm
from pylinalg.core.compute.tolerances import MATRIX_EQUALITY
from pylinalg.matrix.vector import Vector

if TYPE_CHECKING:
    from pylinalg.decomposition.qr import QRResult
    from pylinalg.decomposition.lu import LUResult
    from pylinalg.decomposition.hessenberg import HessenbergResult


@dataclass(frozen=True, eq=False)
class Matrix:
    """
    M×N matrix of finite reals, 0-based indices.

    Construction:
        Matrix.from_array([[1, 2], [3, 4]])
        Matrix.identity(3)
        Matrix.zero(2, 3)
        Matrix.diagonal([1, 2, 3])
        Matrix.from_columns([v1, v2])
    """
    _data: NDArray[np.floating[Any]]

    @classmethod
    def from_array(cls, rows: ArrayLike | Matrix) -> Matrix:
        """
        Build a Matrix from a 2-D array-like.

        Parameters
        ----------
        rows : array-like
            Nested sequence or numpy array of shape (m, n). Ragged rows,
            non-numeric or non-finite entries are rejected.
        """
        if isinstance(rows, Matrix):
            return rows
        data = check_array(rows, 'matrix')
        check_2d(data, 'matrix')
        return cls._build(data)

    @classmethod
    def identity(cls, n: int) -> Matrix:
        """n×n identity matrix."""
        if n < 1:
            raise ValidationError(f"identity: order must be >= 1, got {n}")
        return cls._build(np.eye(n))

    @classmethod
    def zero(cls, m: int, n: int) -> Matrix:
        """m×n zero matrix."""
        if m < 1 or n < 1:
            raise ValidationError(f"zero: dimensions must be >= 1, got ({m}, {n})")
        return cls._build(np.zeros((m, n)))

    @classmethod
    def diagonal(cls, values: ArrayLike) -> Matrix:
        """Square matrix with the given values on the diagonal."""
        return cls._build(np.diag(Vector.from_array(values).to_array()))

    @classmethod
    def from_columns(cls, columns: Sequence[ArrayLike | Vector]) -> Matrix:
        """Matrix whose j-th column is columns[j]; all columns equal length."""
        if len(columns) == 0:
            raise ValidationError("from_columns: need at least one column")
        vectors = [Vector.from_array(c) for c in columns]
        check_consistent_length(
            *[v.to_array() for v in vectors],
            names=tuple(f"columns[{j}]" for j in range(len(vectors))),
        )
        return cls._build(np.column_stack([v.to_array() for v in vectors]))

    @classmethod
    def _build(cls, data: NDArray, *, allow_nan: bool = False) -> Matrix:
        """
        Internal builder with validation.

        allow_nan admits NaN placeholders (eigenvector columns of complex
        eigenvalues); infinities are always rejected.
        """
        if data.ndim != 2:
            raise ValidationError(f"matrix: expected 2D data, got shape {data.shape}")
        check_not_empty(data, 'matrix')
        if allow_nan:
            if np.any(np.isinf(data)):
                raise ValidationError("matrix: contains infinite values")
        else:
            check_finite(data, 'matrix')
        data = np.array(data, dtype=np.float64, copy=True)
        data.flags.writeable = False
        return cls(_data=data)

    # --- Accessors ---

    @property
    def m(self) -> int:
        """Number of rows."""
        return int(self._data.shape[0])

    @property
    def n(self) -> int:
        """Number of columns."""
        return int(self._data.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return (self.m, self.n)

    def get(self, i: int, j: int) -> float:
        if not (0 <= i < self.m and 0 <= j < self.n):
            raise ValidationError(f"get: index ({i}, {j}) out of range for shape {self.shape}")
        return float(self._data[i, j])

    def get_row(self, i: int) -> Vector:
        if not 0 <= i < self.m:
            raise ValidationError(f"get_row: row {i} out of range for {self.m} rows")
        return Vector._build(self._data[i, :], allow_nan=True)

    def get_column(self, j: int) -> Vector:
        if not 0 <= j < self.n:
            raise ValidationError(f"get_column: column {j} out of range for {self.n} columns")
        return Vector._build(self._data[:, j], allow_nan=True)

    def diagonal_elements(self) -> NDArray[np.floating[Any]]:
        """Main diagonal, length min(m, n)."""
        return np.diag(self._data).copy()

    def subdiagonal_elements(self) -> NDArray[np.floating[Any]]:
        """First sub-diagonal (below the main diagonal)."""
        return np.diag(self._data, k=-1).copy()

    def superdiagonal_elements(self) -> NDArray[np.floating[Any]]:
        """First super-diagonal (above the main diagonal)."""
        return np.diag(self._data, k=1).copy()

    def to_array(self) -> NDArray[np.floating[Any]]:
        """Writable copy of the entries."""
        return self._data.copy()

    def to_list(self) -> list[list[float]]:
        return self._data.tolist()

    def __getitem__(self, index):
        return self._data[index]

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self._data.copy()
        return self._data.astype(dtype)

    # --- Algebra ---

    def add(self, B: Matrix) -> Matrix:
        """Elementwise sum; shapes must be identical."""
        B = Matrix.from_array(B)
        check_same_shape(self.shape, B.shape, 'add')
        return Matrix._build(self._data + B._data)

    def subtract(self, B: Matrix) -> Matrix:
        """Elementwise difference; shapes must be identical."""
        B = Matrix.from_array(B)
        check_same_shape(self.shape, B.shape, 'subtract')
        return Matrix._build(self._data - B._data)

    def multiply(self, B: Matrix | Vector) -> Matrix:
        """
        Matrix product A·B.

        Requires A.n == B.m; the result is A.m × B.n. A Vector operand is
        treated as an n×1 column.
        """
        if isinstance(B, Vector):
            B = B.as_column_matrix()
        B = Matrix.from_array(B)
        check_multipliable(self.shape, B.shape, 'multiply')
        return Matrix._build(self._data @ B._data)

    def vector_multiply(self, v: Vector | ArrayLike) -> Vector:
        """Matrix–vector product A·v; requires A.n == len(v)."""
        v = Vector.from_array(v)
        check_multipliable(self.shape, (v.length,), 'vector_multiply')
        return Vector._build(self._data @ v.to_array())

    def scalar_multiply(self, k: float) -> Matrix:
        return Matrix._build(self._data * float(k))

    def scalar_divide(self, k: float) -> Matrix:
        if k == 0:
            raise ValidationError("scalar_divide: division by zero")
        return Matrix._build(self._data / float(k))

    def negate(self) -> Matrix:
        return Matrix._build(-self._data)

    def transpose(self) -> Matrix:
        return Matrix._build(self._data.T)

    def power(self, k: int) -> Matrix:
        """
        Integer power Aᵏ by repeated squaring; A⁰ = I.

        Raises:
            NotSquareError: If the matrix is not square
            ValidationError: If k is negative
        """
        check_square(self.shape, 'power')
        if k < 0:
            raise ValidationError(f"power: exponent must be >= 0, got {k}")
        result = np.eye(self.n)
        base = self._data
        while k:
            if k & 1:
                result = result @ base
            base = base @ base
            k >>= 1
        return Matrix._build(result)

    def trace(self) -> float:
        """Sum of the diagonal."""
        check_square(self.shape, 'trace')
        return float(np.trace(self._data))

    def det(self) -> float:
        """
        Determinant.

        1×1, 2×2 and 3×3 use the direct formulas. Larger matrices use LU
        elimination with partial pivoting:

            │A│ = (-1)ˢ ∏ Uᵢᵢ

        where s is the number of row swaps. A singular matrix returns
        (numerically near) zero rather than raising.

        Raises:
            NotSquareError: If the matrix is not square
        """
        check_square(self.shape, 'det')
        A = self._data
        n = self.n

        if n == 1:
            return float(A[0, 0])

        if n == 2:
            return float(A[0, 0] * A[1, 1] - A[0, 1] * A[1, 0])

        if n == 3:
            a, b, c = A[0]
            d, e, f = A[1]
            g, h, i = A[2]
            return float(a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g))

        from pylinalg.decomposition.lu import lu_decompose

        return lu_decompose(self).det()

    def inverse(self) -> Matrix:
        """
        Inverse A⁻¹ via LU solves against the identity.

        Raises:
            NotSquareError: If the matrix is not square
            SingularMatrixError: If the matrix is singular
        """
        check_square(self.shape, 'inverse')
        from pylinalg.decomposition.lu import lu_decompose

        lu = lu_decompose(self)
        return Matrix._build(lu.solve_array(np.eye(self.n)))

    def solve(self, b: Vector | ArrayLike) -> Vector:
        """
        Solve the square system A·x = b.

        Raises:
            NotSquareError: If the matrix is not square
            DimensionMismatchError: If len(b) != A.m
            SingularMatrixError: If the matrix is singular
        """
        check_square(self.shape, 'solve')
        b = Vector.from_array(b)
        check_multipliable(self.shape, (b.length,), 'solve')
        from pylinalg.decomposition.lu import lu_decompose

        return Vector._build(lu_decompose(self).solve_array(b.to_array()))

    # --- Structure ---

    def submatrix(self, r1: int, c1: int, r2: int, c2: int) -> Matrix:
        """Block from (r1, c1) to (r2, c2), bounds inclusive."""
        if not (0 <= r1 <= r2 < self.m and 0 <= c1 <= c2 < self.n):
            raise ValidationError(
                f"submatrix: bounds ({r1}, {c1})-({r2}, {c2}) invalid for shape {self.shape}"
            )
        return Matrix._build(self._data[r1:r2 + 1, c1:c2 + 1])

    def insert(self, small: Matrix, i: int, j: int) -> Matrix:
        """Copy of this matrix with `small` written at row i, column j."""
        small = Matrix.from_array(small)
        if i < 0 or j < 0 or i + small.m > self.m or j + small.n > self.n:
            raise ValidationError(
                f"insert: {small.shape} block at ({i}, {j}) does not fit in {self.shape}"
            )
        data = self._data.copy()
        data[i:i + small.m, j:j + small.n] = small._data
        return Matrix._build(data)

    def augment(self, B: Matrix) -> Matrix:
        """[A | B]; row counts must agree."""
        B = Matrix.from_array(B)
        check_same_shape((self.m,), (B.m,), 'augment')
        return Matrix._build(np.hstack([self._data, B._data]))

    def augment_below(self, B: Matrix) -> Matrix:
        """[A ; B]; column counts must agree."""
        B = Matrix.from_array(B)
        check_same_shape((self.n,), (B.n,), 'augment_below')
        return Matrix._build(np.vstack([self._data, B._data]))

    # --- Norms ---

    def one_norm(self) -> float:
        """Maximum absolute column sum."""
        return float(np.max(np.sum(np.abs(self._data), axis=0)))

    def frobenius_norm(self) -> float:
        return scaled_norm(self._data)

    def infinity_norm(self) -> float:
        """Maximum absolute row sum."""
        return float(np.max(np.sum(np.abs(self._data), axis=1)))

    def max_norm(self) -> float:
        """Largest absolute entry."""
        return float(np.max(np.abs(self._data)))

    # --- Comparison and predicates ---

    def is_equal(self, B: Matrix, tol: float = MATRIX_EQUALITY.atol) -> bool:
        """Same shape and every entry within tol."""
        B = Matrix.from_array(B)
        if self.shape != B.shape:
            return False
        return bool(np.all(np.abs(self._data - B._data) <= tol))

    def is_square(self) -> bool:
        return self.m == self.n

    def is_symmetric(self, tol: float = MATRIX_EQUALITY.atol) -> bool:
        return self.is_square() and bool(np.all(np.abs(self._data - self._data.T) <= tol))

    def is_skew_symmetric(self, tol: float = MATRIX_EQUALITY.atol) -> bool:
        return self.is_square() and bool(np.all(np.abs(self._data + self._data.T) <= tol))

    def is_upper_triangular(self, tol: float = MATRIX_EQUALITY.atol) -> bool:
        return self.is_square() and bool(np.all(np.abs(np.tril(self._data, k=-1)) <= tol))

    def is_lower_triangular(self, tol: float = MATRIX_EQUALITY.atol) -> bool:
        return self.is_square() and bool(np.all(np.abs(np.triu(self._data, k=1)) <= tol))

    def is_triangular(self, tol: float = MATRIX_EQUALITY.atol) -> bool:
        return self.is_upper_triangular(tol) or self.is_lower_triangular(tol)

    def is_diagonal(self, tol: float = MATRIX_EQUALITY.atol) -> bool:
        return self.is_upper_triangular(tol) and self.is_lower_triangular(tol)

    def is_upper_hessenberg(self, tol: float = MATRIX_EQUALITY.atol) -> bool:
        """Zeros below the first sub-diagonal."""
        return self.is_square() and bool(np.all(np.abs(np.tril(self._data, k=-2)) <= tol))

    def is_tridiagonal(self, tol: float = MATRIX_EQUALITY.atol) -> bool:
        return (
            self.is_upper_hessenberg(tol)
            and bool(np.all(np.abs(np.triu(self._data, k=2)) <= tol))
        )

    def is_orthogonal(self, tol: float = MATRIX_EQUALITY.atol) -> bool:
        """AᵗA = I."""
        if not self.is_square():
            return False
        return bool(np.all(np.abs(self._data.T @ self._data - np.eye(self.n)) <= tol))

    def is_involutory(self, tol: float = MATRIX_EQUALITY.atol) -> bool:
        """A·A = I (the matrix is its own inverse)."""
        if not self.is_square():
            return False
        return bool(np.all(np.abs(self._data @ self._data - np.eye(self.n)) <= tol))

    def is_idempotent(self, tol: float = MATRIX_EQUALITY.atol) -> bool:
        """A·A = A."""
        if not self.is_square():
            return False
        return bool(np.all(np.abs(self._data @ self._data - self._data) <= tol))

    def is_singular(self, tol: float = MATRIX_EQUALITY.atol) -> bool:
        """Determinant within tol of zero."""
        return abs(self.det()) <= tol

    # --- Decompositions and eigen (delegated) ---

    def householder(self) -> Matrix:
        """Householder reflector built from column 0."""
        from pylinalg.decomposition.householder import householder_transform

        return householder_transform(self)

    def qr_decomposition(self) -> QRResult:
        from pylinalg.decomposition.qr import qr_decompose

        return qr_decompose(self)

    def lu_decomposition(self) -> LUResult:
        from pylinalg.decomposition.lu import lu_decompose

        return lu_decompose(self)

    def hessenberg_decomposition(self) -> HessenbergResult:
        from pylinalg.decomposition.hessenberg import hessenberg_decompose

        return hessenberg_decompose(self)

    def eigenvalues(self, **kwargs) -> NDArray[np.floating[Any]]:
        """Eigenvalues; keyword arguments are passed to pylinalg.eigen.eig."""
        from pylinalg.eigen.solvers import eigenvalues

        return eigenvalues(self, **kwargs)

    def eigenvectors(self, **kwargs) -> Matrix:
        """Eigenvector matrix; column i pairs with eigenvalues()[i]."""
        from pylinalg.eigen.solvers import eigenvectors

        return eigenvectors(self, **kwargs)

    # --- Operators ---

    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __neg__(self):
        return self.negate()

    def __mul__(self, k):
        if isinstance(k, (int, float, np.number)):
            return self.scalar_multiply(k)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, k):
        if isinstance(k, (int, float, np.number)):
            return self.scalar_divide(k)
        return NotImplemented

    def __matmul__(self, other):
        if isinstance(other, Vector):
            return self.vector_multiply(other)
        return self.multiply(other)

    def __repr__(self) -> str:
        rows = "\n".join(
            "[" + ", ".join(f"{x:g}" for x in row) + "]" for row in self._data
        )
        return f"Matrix({self.m}x{self.n})\n{rows}"
