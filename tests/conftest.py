"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def symmetric_matrix(rng):
    """Random 6×6 symmetric matrix (real spectrum)."""
    B = rng.standard_normal((6, 6))
    return (B + B.T) / 2


@pytest.fixture
def known_spectrum_matrix(rng):
    """5×5 non-symmetric matrix S·diag(λ)·S⁻¹ with known real eigenvalues."""
    eigenvalues = np.array([7.0, -4.0, 2.5, 1.0, -0.5])
    S = rng.standard_normal((5, 5)) + 3.0 * np.eye(5)
    A = S @ np.diag(eigenvalues) @ np.linalg.inv(S)
    return A, eigenvalues


@pytest.fixture
def rotation_matrix():
    """90° rotation: eigenvalues ±i."""
    return np.array([[0.0, -1.0], [1.0, 0.0]])
