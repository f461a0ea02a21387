"""
Vector: immutable dense real vector.

A thin numeric tuple type used by the Householder and eigen modules.
Every operation returns a new Vector (or a scalar / Matrix); the
underlying numpy buffer is read-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import NumericalError, ValidationError
from pylinalg.core.validation import (
    check_1d,
    check_array,
    check_finite,
    check_not_empty,
    check_same_shape,
)
from pylinalg.core.compute.scaling import scaled_norm
from pylinalg.core.compute.tolerances import MATRIX_EQUALITY

if TYPE_CHECKING:
    from pylinalg.matrix.matrix import Matrix


@dataclass(frozen=True, eq=False)
class Vector:
    """
    Ordered sequence of N finite real numbers.

    Construction:
        Vector.from_array([1, 2, 3])
        Vector.zero(3)
        Vector.basis(3, 0)
    """
    _data: NDArray[np.floating[Any]]

    @classmethod
    def from_array(cls, values: ArrayLike | Vector) -> Vector:
        """
        Build a Vector from a 1-D array-like.

        A 2-D input with a single row or a single column is flattened;
        anything else is rejected.
        """
        if isinstance(values, Vector):
            return values
        data = check_array(values, 'vector')
        if data.ndim == 2 and 1 in data.shape:
            data = data.ravel()
        check_1d(data, 'vector')
        return cls._build(data)

    @classmethod
    def zero(cls, n: int) -> Vector:
        """Zero vector of length n."""
        if n < 1:
            raise ValidationError(f"vector length must be >= 1, got {n}")
        return cls._build(np.zeros(n))

    @classmethod
    def basis(cls, n: int, i: int) -> Vector:
        """i-th standard basis vector eᵢ of length n."""
        if n < 1:
            raise ValidationError(f"vector length must be >= 1, got {n}")
        if not 0 <= i < n:
            raise ValidationError(f"basis index {i} out of range for length {n}")
        e = np.zeros(n)
        e[i] = 1.0
        return cls._build(e)

    @classmethod
    def _build(cls, data: NDArray, *, allow_nan: bool = False) -> Vector:
        """
        Internal builder with validation.

        allow_nan admits NaN placeholders (eigenvectors of complex
        eigenvalues); infinities are always rejected.
        """
        check_not_empty(data, 'vector')
        if allow_nan:
            if np.any(np.isinf(data)):
                raise ValidationError("vector: contains infinite values")
        else:
            check_finite(data, 'vector')
        data = np.array(data, dtype=np.float64, copy=True)
        data.flags.writeable = False
        return cls(_data=data)

    # --- Accessors ---

    @property
    def length(self) -> int:
        """Number of components."""
        return int(self._data.shape[0])

    def to_array(self) -> NDArray[np.floating[Any]]:
        """Writable copy of the components."""
        return self._data.copy()

    def __len__(self) -> int:
        return self.length

    def __getitem__(self, i):
        return self._data[i]

    def __iter__(self) -> Iterator[float]:
        return iter(self._data.tolist())

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self._data.copy()
        return self._data.astype(dtype)

    # --- Products and norms ---

    def dot(self, other: Vector) -> float:
        """Dot product ∑ aᵢbᵢ."""
        other = Vector.from_array(other)
        check_same_shape(self._data.shape, other._data.shape, 'dot')
        return float(self._data @ other._data)

    def norm(self) -> float:
        """Euclidean (L2) norm, computed without intermediate overflow."""
        return scaled_norm(self._data)

    def l1_norm(self) -> float:
        """Sum of absolute values."""
        return float(np.sum(np.abs(self._data)))

    def max_norm(self) -> float:
        """Largest absolute component."""
        return float(np.max(np.abs(self._data)))

    def outer(self, other: Vector) -> Matrix:
        """Outer product self·otherᵗ as a Matrix."""
        from pylinalg.matrix.matrix import Matrix

        other = Vector.from_array(other)
        return Matrix._build(np.outer(self._data, other._data))

    # --- Arithmetic ---

    def add(self, other: Vector) -> Vector:
        """Elementwise sum."""
        other = Vector.from_array(other)
        check_same_shape(self._data.shape, other._data.shape, 'add')
        return Vector._build(self._data + other._data)

    def subtract(self, other: Vector) -> Vector:
        """Elementwise difference."""
        other = Vector.from_array(other)
        check_same_shape(self._data.shape, other._data.shape, 'subtract')
        return Vector._build(self._data - other._data)

    def scalar_multiply(self, k: float) -> Vector:
        return Vector._build(self._data * float(k))

    def scalar_divide(self, k: float) -> Vector:
        if k == 0:
            raise ValidationError("scalar_divide: division by zero")
        return Vector._build(self._data / float(k))

    def negate(self) -> Vector:
        return Vector._build(-self._data)

    def normalize(self) -> Vector:
        """
        Unit vector in the same direction.

        Raises:
            NumericalError: If the vector is zero
        """
        norm = self.norm()
        if norm == 0:
            raise NumericalError("normalize: cannot normalize the zero vector")
        return Vector._build(self._data / norm)

    # --- Conversions ---

    def as_column_matrix(self) -> Matrix:
        """n×1 Matrix."""
        from pylinalg.matrix.matrix import Matrix

        return Matrix._build(self._data.reshape(-1, 1))

    def as_row_matrix(self) -> Matrix:
        """1×n Matrix."""
        from pylinalg.matrix.matrix import Matrix

        return Matrix._build(self._data.reshape(1, -1))

    # --- Comparison ---

    def is_equal(self, other: Vector, tol: float = MATRIX_EQUALITY.atol) -> bool:
        """Same length and every component within tol."""
        other = Vector.from_array(other)
        if self._data.shape != other._data.shape:
            return False
        return bool(np.all(np.abs(self._data - other._data) <= tol))

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
        return self.dot(other)

    def __repr__(self) -> str:
        return f"Vector({self._data.tolist()})"
