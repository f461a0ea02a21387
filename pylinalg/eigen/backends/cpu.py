"""
CPU eigen backends.

CPUQREigenBackend is the general-purpose solver: Hessenberg reduction
followed by deflating shifted QR iteration, with eigenvectors from
inverse iteration. CPUClosedFormEigenBackend solves the characteristic
polynomial directly for matrices up to 3×3.
"""

from typing import Any

from pylinalg.core.result import Result
from pylinalg.core.compute.timing import Timer
from pylinalg.core.compute.tolerances import DEFAULT_MAX_ITER, DEFLATION_TOL
from pylinalg.decomposition.hessenberg import hessenberg_reduce
from pylinalg.eigen._closed_form import closed_form_eigenvalues
from pylinalg.eigen._common import (
    ComplexPolicy,
    apply_complex_policy,
    build_params,
    check_complex_policy,
)
from pylinalg.eigen._qr_algorithm import qr_iteration
from pylinalg.eigen.design import EigenDesign
from pylinalg.eigen.solution import EigenParams


class CPUQREigenBackend:
    """
    CPU backend using the shifted QR algorithm.

    Implements the Backend protocol for EigenDesign -> EigenParams.
    """

    def __init__(
        self,
        max_iter: int = DEFAULT_MAX_ITER,
        tol: float = DEFLATION_TOL,
        on_complex: ComplexPolicy = 'nan',
        compute_vectors: bool = True,
    ):
        check_complex_policy(on_complex)
        self._max_iter = max_iter
        self._tol = tol
        self._on_complex = on_complex
        self._compute_vectors = compute_vectors

    @property
    def name(self) -> str:
        return 'cpu_qr'

    def solve(self, design: EigenDesign) -> Result[EigenParams]:
        """
        Eigen-decomposition via shifted QR iteration.

        Algorithm:
            1. Reduce A to upper Hessenberg form (tridiagonal if symmetric)
            2. Iterate shifted QR steps, deflating negligible sub-diagonals
            3. Order eigenvalues and compute eigenvectors by inverse iteration

        Raises:
            ConvergenceError: If a block does not deflate within max_iter steps
            ComplexEigenvalueError: If on_complex='raise' and A has a complex pair
        """
        timer = Timer().start()

        with timer.section('hessenberg'):
            _, H = hessenberg_reduce(design.array)

        with timer.section('qr_iteration'):
            outcome = qr_iteration(H, max_iter=self._max_iter, tol=self._tol)

        warnings = apply_complex_policy(outcome.pairs, self._on_complex)

        params, extra_info, vector_warnings = build_params(
            design,
            outcome.values,
            outcome.pairs,
            self._compute_vectors,
            timer,
        )

        timer.stop()

        info: dict[str, Any] = {
            'method': 'qr',
            'converged': True,
            'iterations': outcome.iterations,
            'max_block_iterations': outcome.max_block_iterations,
            'blocks': outcome.blocks,
            'max_iter': self._max_iter,
            'tol': self._tol,
            **extra_info,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=warnings + vector_warnings,
        )


class CPUClosedFormEigenBackend:
    """
    CPU backend solving the characteristic polynomial in closed form.

    Only defined for 1×1, 2×2 and 3×3 matrices.
    """

    def __init__(
        self,
        on_complex: ComplexPolicy = 'nan',
        compute_vectors: bool = True,
    ):
        check_complex_policy(on_complex)
        self._on_complex = on_complex
        self._compute_vectors = compute_vectors

    @property
    def name(self) -> str:
        return 'cpu_closed_form'

    def solve(self, design: EigenDesign) -> Result[EigenParams]:
        """
        Eigenvalues as roots of det(A - λI) = 0.

        Raises:
            ValidationError: If the matrix is larger than 3×3
            ComplexEigenvalueError: If on_complex='raise' and A has a complex pair
        """
        timer = Timer().start()

        with timer.section('characteristic_polynomial'):
            values, pairs = closed_form_eigenvalues(design.array)

        warnings = apply_complex_policy(pairs, self._on_complex)

        params, extra_info, vector_warnings = build_params(
            design, values, pairs, self._compute_vectors, timer,
        )

        timer.stop()

        info: dict[str, Any] = {
            'method': 'closed_form',
            'converged': True,
            'iterations': 0,
            **extra_info,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=warnings + vector_warnings,
        )
