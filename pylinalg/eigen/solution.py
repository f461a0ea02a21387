"""
Eigen-decomposition solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pylinalg.core.result import Result
from pylinalg.matrix.matrix import Matrix
from pylinalg.matrix.vector import Vector

if TYPE_CHECKING:
    from pylinalg.eigen.design import EigenDesign


@dataclass(frozen=True)
class EigenParams:
    """
    Parameter payload for an eigen-decomposition.

    eigenvalues[i] pairs with column i of eigenvectors. Members of a
    complex-conjugate pair are NaN in both.
    """
    eigenvalues: NDArray[np.floating[Any]]
    eigenvectors: NDArray[np.floating[Any]] | None = None
    residuals: NDArray[np.floating[Any]] | None = None
    complex_pairs: tuple[tuple[float, float], ...] = ()


@dataclass
class EigenSolution:
    """
    User-facing eigen-decomposition results.

    Wraps Result[EigenParams] and provides convenient accessors.
    """
    _result: Result[EigenParams]
    _design: 'EigenDesign'

    # --- Eigenpairs ---

    @property
    def eigenvalues(self) -> NDArray[np.floating[Any]]:
        """Eigenvalues ordered by descending magnitude, NaN placeholders last."""
        return self._result.params.eigenvalues.copy()

    @property
    def eigenvector_array(self) -> NDArray[np.floating[Any]] | None:
        """Eigenvectors as an n×n array, or None if not computed."""
        vectors = self._result.params.eigenvectors
        return None if vectors is None else vectors.copy()

    @property
    def eigenvectors(self) -> Matrix | None:
        """Eigenvector Matrix; column i is a unit eigenvector for eigenvalues[i]."""
        vectors = self._result.params.eigenvectors
        if vectors is None:
            return None
        return Matrix._build(vectors, allow_nan=True)

    @property
    def complex_pairs(self) -> tuple[tuple[float, float], ...]:
        """Complex-conjugate pairs (real, imag) replaced by NaN placeholders."""
        return self._result.params.complex_pairs

    @property
    def n_complex(self) -> int:
        """Number of NaN placeholder eigenvalues."""
        return 2 * len(self._result.params.complex_pairs)

    def pairs(self) -> list[tuple[float, Vector]]:
        """(λᵢ, vᵢ) for every real eigenvalue with a computed eigenvector."""
        vectors = self._result.params.eigenvectors
        if vectors is None:
            return []
        return [
            (float(lam), Vector._build(vectors[:, i]))
            for i, lam in enumerate(self._result.params.eigenvalues)
            if not np.isnan(lam)
        ]

    def residuals(self) -> NDArray[np.floating[Any]] | None:
        """‖A·vᵢ - λᵢ·vᵢ‖₂ per column, or None if vectors were not computed."""
        residuals = self._result.params.residuals
        return None if residuals is None else residuals.copy()

    # --- Metadata ---

    @property
    def method(self) -> str:
        return self._result.method

    @property
    def converged(self) -> bool:
        return self._result.converged

    @property
    def iterations(self) -> int:
        """Total QR steps (0 for closed-form)."""
        return self._result.iterations

    @property
    def is_symmetric(self) -> bool:
        return self._design.is_symmetric

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Human-readable eigenvalue table."""
        lines = [
            f"Eigen-decomposition ({self.method}, n={self._design.n})",
            "=" * 50,
        ]
        residuals = self._result.params.residuals
        for i, lam in enumerate(self._result.params.eigenvalues):
            res = ""
            if residuals is not None and not np.isnan(residuals[i]):
                res = f"   residual {residuals[i]:.2e}"
            lines.append(f"  λ[{i}] = {lam: .10g}{res}")
        for real, imag in self.complex_pairs:
            lines.append(f"  complex pair: {real:.10g} ± {imag:.10g}i (reported as NaN)")
        lines.append("")
        lines.append(f"Iterations: {self.iterations}")
        if self.timing is not None:
            lines.append(f"Time: {self.timing['total_seconds']:.4f}s")
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"EigenSolution(n={self._design.n}, method={self.method!r}, "
            f"n_complex={self.n_complex})"
        )
