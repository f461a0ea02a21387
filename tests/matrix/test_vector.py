"""
Tests for the Vector type.
"""

import pytest
import numpy as np

from pylinalg.core.exceptions import (
    DimensionError,
    DimensionMismatchError,
    NumericalError,
    ValidationError,
)
from pylinalg.matrix import Matrix, Vector


class TestVectorConstruction:

    def test_from_list(self):
        v = Vector.from_array([1, 2, 3])
        assert v.length == 3
        assert len(v) == 3
        np.testing.assert_array_equal(v.to_array(), [1.0, 2.0, 3.0])

    def test_column_input_flattened(self):
        v = Vector.from_array([[1.0], [2.0]])
        assert v.length == 2

    def test_rejects_2d(self):
        with pytest.raises(DimensionError):
            Vector.from_array(np.ones((2, 2)))

    def test_rejects_empty(self):
        with pytest.raises(ValidationError):
            Vector.from_array([])

    def test_rejects_nan(self):
        with pytest.raises(ValidationError, match="NaN"):
            Vector.from_array([1.0, np.nan])

    def test_zero_and_basis(self):
        np.testing.assert_array_equal(Vector.zero(3).to_array(), [0, 0, 0])
        np.testing.assert_array_equal(Vector.basis(3, 1).to_array(), [0, 1, 0])

    def test_basis_out_of_range(self):
        with pytest.raises(ValidationError):
            Vector.basis(3, 3)

    def test_immutable(self):
        v = Vector.from_array([1.0, 2.0])
        arr = v.to_array()
        arr[0] = 99.0
        assert v[0] == 1.0
        with pytest.raises(ValueError):
            v._data[0] = 5.0


class TestVectorAlgebra:

    def test_dot(self):
        a = Vector.from_array([1, 2, 3])
        b = Vector.from_array([4, -5, 6])
        assert a.dot(b) == pytest.approx(12.0)
        assert a @ b == pytest.approx(12.0)

    def test_dot_length_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            Vector.from_array([1, 2]).dot(Vector.from_array([1, 2, 3]))

    def test_norms(self):
        v = Vector.from_array([3.0, -4.0])
        assert v.norm() == pytest.approx(5.0)
        assert v.l1_norm() == pytest.approx(7.0)
        assert v.max_norm() == pytest.approx(4.0)

    def test_norm_no_overflow(self):
        v = Vector.from_array([1e200, 1e200])
        assert v.norm() == pytest.approx(np.sqrt(2) * 1e200, rel=1e-14)

    def test_norm_no_underflow(self):
        v = Vector.from_array([3e-200, -4e-200])
        assert v.norm() == pytest.approx(5e-200, rel=1e-14)

    def test_add_subtract(self):
        a = Vector.from_array([1, 2])
        b = Vector.from_array([3, 5])
        assert (a + b).is_equal([4, 7])
        assert (b - a).is_equal([2, 3])

    def test_add_length_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            Vector.from_array([1, 2]) + Vector.from_array([1, 2, 3])

    def test_scalar_ops(self):
        v = Vector.from_array([2.0, -4.0])
        assert (3 * v).is_equal([6, -12])
        assert (v / 2).is_equal([1, -2])
        assert (-v).is_equal([-2, 4])

    def test_scalar_divide_by_zero(self):
        with pytest.raises(ValidationError):
            Vector.from_array([1.0]).scalar_divide(0)

    def test_normalize(self):
        u = Vector.from_array([0.0, 3.0, 4.0]).normalize()
        assert u.norm() == pytest.approx(1.0)
        assert u.is_equal([0.0, 0.6, 0.8])

    def test_normalize_zero_raises(self):
        with pytest.raises(NumericalError):
            Vector.zero(3).normalize()

    def test_outer(self):
        M = Vector.from_array([1, 2]).outer(Vector.from_array([3, 4, 5]))
        assert isinstance(M, Matrix)
        assert M.shape == (2, 3)
        assert M.is_equal([[3, 4, 5], [6, 8, 10]])

    def test_row_and_column_matrix(self):
        v = Vector.from_array([1, 2, 3])
        assert v.as_column_matrix().shape == (3, 1)
        assert v.as_row_matrix().shape == (1, 3)
