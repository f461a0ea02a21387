"""
Tests for eig(): eigenvalues and eigenvectors via shifted QR iteration.

Every decomposition is checked against the defining identities:
    A·v = λ·v            for each eigenpair
    det(A - λI) = 0      for each eigenvalue
    tr(A) = Σλ,  det(A) = Πλ
    Aⁿ·v = λⁿ·v          for small n
"""

import pytest
import numpy as np

from pylinalg.core.exceptions import (
    ComplexEigenvalueError,
    ComplexEigenvalueWarning,
    ConvergenceError,
    NotSquareError,
    ValidationError,
)
from pylinalg.core.compute.tolerances import EIGEN_AXIOMS, EIGEN_POWER
from pylinalg.eigen import EigenDesign, EigenSolution, eig, eigenvalues, eigenvectors
from pylinalg.matrix import Matrix


ATOL = EIGEN_AXIOMS.atol

# (matrix, eigenvalues in descending |λ| order)
KNOWN_SPECTRA = [
    ([[2, 0], [0, 3]], [3, 2]),
    ([[1, 2], [2, 1]], [3, -1]),
    ([[0, 1], [-2, -3]], [-2, -1]),
    ([[6, -1], [2, 3]], [5, 4]),
    ([[1, 0, 0], [0, 2, 0], [0, 0, 3]], [3, 2, 1]),
    ([[2, -1, 0], [-1, 2, -1], [0, -1, 2]], [2 + np.sqrt(2), 2, 2 - np.sqrt(2)]),
    ([[1, 2, 3], [0, 4, 5], [0, 0, 6]], [6, 4, 1]),
    ([[-2, -4, 2], [-2, 1, 2], [4, 2, 5]], [6, -5, 3]),
    ([[2, 0, 1], [2, 1, 2], [3, 0, 4]], [5, 1, 1]),
    ([[2, 2, -3], [2, 5, -6], [3, 6, -8]], [-3, 1, 1]),
    ([[4, 1, 0, 0], [1, 4, 1, 0], [0, 1, 4, 1], [0, 0, 1, 4]],
     [4 + 2 * np.cos(np.pi * k / 5) for k in (1, 2, 3, 4)]),
]


def _check_eigenpairs(A, solution):
    A = np.asarray(A, dtype=float)
    V = solution.eigenvector_array
    for i, lam in enumerate(solution.eigenvalues):
        v = V[:, i]
        np.testing.assert_allclose(A @ v, lam * v, atol=ATOL)
        assert np.linalg.norm(v) == pytest.approx(1.0)


# ═══════════════════════════════════════════════════════════════════════
# Known spectra
# ═══════════════════════════════════════════════════════════════════════


class TestKnownSpectra:

    @pytest.mark.parametrize("A, expected", KNOWN_SPECTRA)
    def test_eigenvalues(self, A, expected):
        np.testing.assert_allclose(eigenvalues(A), expected, atol=ATOL)

    @pytest.mark.parametrize("A, expected", KNOWN_SPECTRA)
    def test_eigenpairs(self, A, expected):
        _check_eigenpairs(A, eig(A))

    @pytest.mark.parametrize("A, expected", KNOWN_SPECTRA)
    def test_characteristic_equation(self, A, expected):
        M = Matrix.from_array(A)
        for lam in eigenvalues(M):
            shifted = M.subtract(Matrix.identity(M.n).scalar_multiply(lam))
            assert shifted.det() == pytest.approx(0.0, abs=ATOL)

    @pytest.mark.parametrize("A, expected", KNOWN_SPECTRA)
    def test_trace_and_determinant(self, A, expected):
        M = Matrix.from_array(A)
        lam = eigenvalues(M)
        assert np.sum(lam) == pytest.approx(M.trace(), abs=ATOL)
        assert np.prod(lam) == pytest.approx(M.det(), abs=ATOL)

    @pytest.mark.parametrize("A, expected", KNOWN_SPECTRA)
    def test_power_property(self, A, expected):
        A = np.asarray(A, dtype=float)
        solution = eig(A)
        V = solution.eigenvector_array
        for n in (2, 3):
            An = np.linalg.matrix_power(A, n)
            for i, lam in enumerate(solution.eigenvalues):
                np.testing.assert_allclose(
                    An @ V[:, i], lam ** n * V[:, i], atol=EIGEN_POWER.atol * max(1.0, abs(lam) ** n)
                )


# ═══════════════════════════════════════════════════════════════════════
# Eigenvector structure
# ═══════════════════════════════════════════════════════════════════════


class TestEigenvectors:

    def test_repeated_eigenvalue_gets_independent_vectors(self):
        A = [[2, 0, 1], [2, 1, 2], [3, 0, 4]]
        V = eigenvectors(A).to_array()
        assert np.linalg.matrix_rank(V) == 3

    def test_identity_vectors_span_space(self):
        V = eigenvectors(np.eye(4)).to_array()
        np.testing.assert_allclose(V.T @ V, np.eye(4), atol=1e-10)

    def test_defective_matrix_still_returns_eigenvectors(self):
        A = [[1.0, 1.0], [0.0, 1.0]]
        solution = eig(A)
        np.testing.assert_allclose(solution.eigenvalues, [1.0, 1.0], atol=ATOL)
        for v in solution.eigenvector_array.T:
            np.testing.assert_allclose(np.abs(v), [1.0, 0.0], atol=ATOL)

    def test_largest_component_positive(self, rng):
        A = rng.standard_normal((5, 5))
        A = A + A.T
        V = eigenvectors(A).to_array()
        for v in V.T:
            assert v[np.argmax(np.abs(v))] > 0

    def test_symmetric_vectors_orthonormal(self, symmetric_matrix):
        V = eigenvectors(symmetric_matrix).to_array()
        np.testing.assert_allclose(V.T @ V, np.eye(6), atol=1e-8)

    def test_pairs_match_columns(self):
        solution = eig([[2, 0], [0, 3]])
        pairs = solution.pairs()
        assert [lam for lam, _ in pairs] == pytest.approx([3.0, 2.0])
        assert pairs[0][1].is_equal([0.0, 1.0], tol=ATOL)

    def test_residuals_small(self, symmetric_matrix):
        residuals = eig(symmetric_matrix).residuals()
        assert np.all(residuals < 1e-8)

    def test_compute_vectors_false(self):
        solution = eig([[2, 0], [0, 3]], compute_vectors=False)
        assert solution.eigenvectors is None
        assert solution.residuals() is None
        assert solution.pairs() == []


# ═══════════════════════════════════════════════════════════════════════
# Larger matrices
# ═══════════════════════════════════════════════════════════════════════


class TestLargerMatrices:

    def test_symmetric_matches_numpy(self, symmetric_matrix):
        lam = eigenvalues(symmetric_matrix)
        expected = np.linalg.eigvalsh(symmetric_matrix)
        expected = expected[np.argsort(-np.abs(expected), kind='stable')]
        np.testing.assert_allclose(lam, expected, atol=1e-9)
        _check_eigenpairs(symmetric_matrix, eig(symmetric_matrix))

    def test_known_nonsymmetric_spectrum(self, known_spectrum_matrix):
        A, expected = known_spectrum_matrix
        solution = eig(A)
        np.testing.assert_allclose(solution.eigenvalues, expected, atol=1e-8)
        _check_eigenpairs(A, solution)

    def test_random_symmetric_20(self, rng):
        B = rng.standard_normal((20, 20))
        A = B + B.T
        lam = eigenvalues(A)
        np.testing.assert_allclose(np.sort(lam), np.linalg.eigvalsh(A), atol=1e-9)

    def test_one_by_one(self):
        solution = eig([[-7.5]])
        np.testing.assert_allclose(solution.eigenvalues, [-7.5])
        np.testing.assert_allclose(solution.eigenvector_array, [[1.0]])

    def test_zero_matrix(self):
        np.testing.assert_allclose(eigenvalues(np.zeros((3, 3))), [0.0, 0.0, 0.0])

    def test_triangular_needs_no_iterations(self):
        solution = eig([[1, 2, 3], [0, 4, 5], [0, 0, 6]])
        assert solution.iterations == 0
        assert solution.info['blocks'] == 2


# ═══════════════════════════════════════════════════════════════════════
# Input magnitude
# ═══════════════════════════════════════════════════════════════════════


SCALES = [1e-150, 1e-20, 1e20, 1e150]

# S·diag-block(1 ± 2i, 5)·S⁻¹
SIMILARITY = np.array([[1.0, 1.0, 0.0], [0.0, 1.0, 1.0], [1.0, 0.0, 1.0]])
COMPLEX_PAIR_MATRIX = SIMILARITY @ np.array(
    [[1.0, -2.0, 0.0], [2.0, 1.0, 0.0], [0.0, 0.0, 5.0]]
) @ np.linalg.inv(SIMILARITY)


class TestScaleInvariance:
    """eig(c·A) must give c·λ and the same eigenvectors as eig(A)."""

    @pytest.mark.parametrize("scale", SCALES)
    @pytest.mark.parametrize("method", ['qr', 'closed_form'])
    def test_real_spectrum(self, scale, method):
        A = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 10.0]])
        base = eig(A, method=method)
        scaled = eig(scale * A, method=method)
        assert scaled.n_complex == 0
        np.testing.assert_allclose(scaled.eigenvalues, scale * base.eigenvalues, rtol=1e-9)
        np.testing.assert_allclose(
            scaled.eigenvector_array, base.eigenvector_array, atol=1e-6
        )

    @pytest.mark.parametrize("scale", SCALES)
    def test_known_nonsymmetric_spectrum(self, known_spectrum_matrix, scale):
        A, expected = known_spectrum_matrix
        base = eig(A)
        scaled = eig(scale * A)
        np.testing.assert_allclose(scaled.eigenvalues, scale * expected, rtol=1e-7)
        np.testing.assert_allclose(
            scaled.eigenvector_array, base.eigenvector_array, atol=1e-6
        )

    @pytest.mark.parametrize("scale", SCALES)
    def test_complex_pair(self, scale):
        with pytest.warns(ComplexEigenvalueWarning):
            solution = eig(scale * COMPLEX_PAIR_MATRIX)
        assert solution.n_complex == 2
        assert solution.eigenvalues[0] == pytest.approx(5.0 * scale, rel=1e-9)
        real, imag = solution.complex_pairs[0]
        assert real == pytest.approx(1.0 * scale, rel=1e-9)
        assert imag == pytest.approx(2.0 * scale, rel=1e-9)

    @pytest.mark.parametrize("scale", SCALES)
    def test_random_matrix(self, rng, scale):
        A = rng.standard_normal((5, 5))
        base = eig(A)
        scaled = eig(scale * A)
        assert scaled.n_complex == base.n_complex
        np.testing.assert_allclose(scaled.eigenvalues, scale * base.eigenvalues, rtol=1e-8)
        np.testing.assert_allclose(
            np.array(scaled.complex_pairs), scale * np.array(base.complex_pairs), rtol=1e-8
        )

    def test_tiny_diagonal_vectors(self):
        solution = eig(np.diag([3e-12, 2e-12]))
        np.testing.assert_allclose(solution.eigenvalues, [3e-12, 2e-12], rtol=1e-12)
        np.testing.assert_allclose(solution.eigenvector_array, np.eye(2), atol=1e-10)


# ═══════════════════════════════════════════════════════════════════════
# Complex eigenvalues
# ═══════════════════════════════════════════════════════════════════════


class TestComplexEigenvalues:

    def test_rotation_reports_nan(self, rotation_matrix):
        with pytest.warns(ComplexEigenvalueWarning):
            solution = eig(rotation_matrix)
        assert np.all(np.isnan(solution.eigenvalues))
        assert solution.n_complex == 2
        assert solution.complex_pairs[0] == pytest.approx((0.0, 1.0))
        assert np.all(np.isnan(solution.eigenvector_array))
        assert solution.pairs() == []
        assert any("complex" in w for w in solution.warnings)

    def test_rotation_raise(self, rotation_matrix):
        with pytest.raises(ComplexEigenvalueError) as exc_info:
            eig(rotation_matrix, on_complex='raise')
        assert exc_info.value.real == pytest.approx(0.0)
        assert exc_info.value.imag == pytest.approx(1.0)

    def test_mixed_real_and_complex(self):
        A = [[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 2.0]]
        with pytest.warns(ComplexEigenvalueWarning):
            solution = eig(A)
        assert solution.eigenvalues[0] == pytest.approx(2.0)
        assert np.all(np.isnan(solution.eigenvalues[1:]))
        np.testing.assert_allclose(np.abs(solution.eigenvector_array[:, 0]), [0, 0, 1], atol=ATOL)

    def test_cyclic_permutation(self):
        """Plain QR stagnates on a permutation matrix; the exceptional shift breaks it."""
        P = [[0.0, 0.0, 1.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]]
        with pytest.warns(ComplexEigenvalueWarning):
            solution = eig(P)
        assert solution.eigenvalues[0] == pytest.approx(1.0, abs=ATOL)
        real, imag = solution.complex_pairs[0]
        assert real == pytest.approx(-0.5, abs=ATOL)
        assert imag == pytest.approx(np.sqrt(3) / 2, abs=ATOL)

    def test_invalid_policy(self):
        with pytest.raises(ValidationError):
            eig([[1.0]], on_complex='ignore')


# ═══════════════════════════════════════════════════════════════════════
# Failures and options
# ═══════════════════════════════════════════════════════════════════════


class TestFailures:

    def test_not_square(self):
        with pytest.raises(NotSquareError) as exc_info:
            eig([[1, 2, 3], [4, 5, 6]])
        assert exc_info.value.shape == (2, 3)

    def test_matrix_method_not_square(self):
        with pytest.raises(NotSquareError):
            Matrix.from_array([[1, 2, 3], [4, 5, 6]]).eigenvalues()

    def test_iteration_cap(self):
        with pytest.raises(ConvergenceError) as exc_info:
            eig([[-2, -4, 2], [-2, 1, 2], [4, 2, 5]], max_iter=0)
        assert exc_info.value.reason == 'max_iterations'
        assert exc_info.value.iterations == 0

    def test_unknown_method(self):
        with pytest.raises(ValidationError, match="method"):
            eig([[1.0]], method='jacobi')

    def test_invalid_tol(self):
        with pytest.raises(ValidationError):
            eig([[1.0]], tol=0.0)


class TestSolution:

    def test_metadata(self):
        solution = eig([[2, -1, 0], [-1, 2, -1], [0, -1, 2]])
        assert isinstance(solution, EigenSolution)
        assert solution.method == 'qr'
        assert solution.backend_name == 'cpu_qr'
        assert solution.converged is True
        assert solution.is_symmetric is True
        assert solution.iterations >= 1
        assert {'hessenberg', 'qr_iteration', 'eigenvectors'} <= set(solution.timing)

    def test_accepts_design(self):
        design = EigenDesign.from_array([[2, 0], [0, 3]])
        assert design.n == 2
        np.testing.assert_allclose(eig(design).eigenvalues, [3, 2])

    def test_eigenvalues_not_aliased(self):
        solution = eig([[2, 0], [0, 3]])
        lam = solution.eigenvalues
        lam[0] = 100.0
        assert solution.eigenvalues[0] == 3.0

    def test_summary_and_repr(self):
        solution = eig([[2, 0], [0, 3]])
        text = solution.summary()
        assert "Eigen-decomposition (qr, n=2)" in text
        assert "λ[0]" in text
        assert "method='qr'" in repr(solution)

    def test_matrix_delegates(self):
        M = Matrix.from_array([[1, 2], [2, 1]])
        np.testing.assert_allclose(M.eigenvalues(), [3, -1], atol=ATOL)
        V = M.eigenvectors()
        assert isinstance(V, Matrix)
        assert V.shape == (2, 2)


class TestBackends:

    def test_backends_satisfy_protocol(self):
        from pylinalg.core.protocols import Backend
        from pylinalg.eigen.backends import CPUClosedFormEigenBackend, CPUQREigenBackend

        assert isinstance(CPUQREigenBackend(), Backend)
        assert isinstance(CPUClosedFormEigenBackend(), Backend)

    def test_backend_solve_direct(self):
        from pylinalg.eigen.backends import CPUQREigenBackend

        result = CPUQREigenBackend(compute_vectors=False).solve(
            EigenDesign.from_array([[1, 2], [2, 1]])
        )
        assert result.backend_name == 'cpu_qr'
        assert result.params.eigenvectors is None
        np.testing.assert_allclose(result.params.eigenvalues, [3, -1], atol=ATOL)
