"""
Solver dispatch for eigen-decomposition.

This module provides the eig() function (public API), its eigenvalues()
and eigenvectors() shortcuts, backend selection, and power iteration for
the dominant eigenpair.
"""

from typing import Literal
import numpy as np
from numpy.typing import ArrayLike

from pylinalg.core.exceptions import ConvergenceError, ValidationError
from pylinalg.core.compute.scaling import scaled_norm
from pylinalg.core.compute.tolerances import DEFAULT_MAX_ITER, DEFLATION_TOL
from pylinalg.eigen._common import ComplexPolicy
from pylinalg.eigen._inverse_iteration import canonical_sign
from pylinalg.eigen.design import EigenDesign
from pylinalg.eigen.solution import EigenSolution
from pylinalg.eigen.backends.cpu import CPUQREigenBackend, CPUClosedFormEigenBackend
from pylinalg.matrix.matrix import Matrix
from pylinalg.matrix.vector import Vector


# Type alias for method selection
MethodChoice = Literal['qr', 'closed_form']


def eig(
    A: ArrayLike | Matrix | EigenDesign,
    *,
    method: MethodChoice = 'qr',
    max_iter: int = DEFAULT_MAX_ITER,
    tol: float | None = None,
    on_complex: ComplexPolicy = 'nan',
    compute_vectors: bool = True,
) -> EigenSolution:
    """
    Eigen-decomposition of a real square matrix.

    Finds λᵢ and unit vᵢ with A·vᵢ = λᵢ·vᵢ. Eigenvalues are ordered by
    descending absolute value; eigenvector column i pairs with
    eigenvalue i.

    Args:
        A: Square matrix (array-like, Matrix, or prebuilt EigenDesign)
        method: Algorithm to use:
            - 'qr': Hessenberg reduction + shifted QR iteration (any size)
            - 'closed_form': Characteristic polynomial roots (n <= 3)
        max_iter: Maximum QR steps per unreduced block ('qr' only)
        tol: Relative deflation tolerance ('qr' only, default machine epsilon)
        on_complex: What to do with complex-conjugate eigenvalue pairs:
            - 'nan': Report both members as NaN and warn
            - 'raise': Raise ComplexEigenvalueError
        compute_vectors: Compute eigenvectors by inverse iteration

    Returns:
        EigenSolution with eigenvalues, eigenvectors and diagnostics

    Raises:
        ValidationError: If inputs are invalid
        NotSquareError: If A is not square
        ConvergenceError: If QR iteration fails to converge
        ComplexEigenvalueError: If on_complex='raise' and A has complex eigenvalues

    Example:
        >>> from pylinalg.eigen import eig
        >>> solution = eig([[2, 0], [0, 3]])
        >>> solution.eigenvalues
        array([3., 2.])
    """
    design = _ensure_design(A)
    backend_impl = _get_backend(method, max_iter, tol, on_complex, compute_vectors)
    result = backend_impl.solve(design)
    return EigenSolution(_result=result, _design=design)


def eigenvalues(A: ArrayLike | Matrix | EigenDesign, **kwargs) -> np.ndarray:
    """Eigenvalues of A, ordered by descending absolute value."""
    kwargs['compute_vectors'] = False
    return eig(A, **kwargs).eigenvalues


def eigenvectors(A: ArrayLike | Matrix | EigenDesign, **kwargs) -> Matrix:
    """Matrix of unit eigenvectors; column i pairs with eigenvalues(A)[i]."""
    kwargs['compute_vectors'] = True
    return eig(A, **kwargs).eigenvectors


def power_iteration(
    A: ArrayLike | Matrix,
    *,
    max_iter: int = 10_000,
    tol: float = 1e-12,
    seed: int = 0,
) -> tuple[float, Vector]:
    """
    Dominant eigenpair by power iteration.

    Repeats b ← A·b / ‖A·b‖ and tracks the Rayleigh quotient bᵗ·A·b until
    successive estimates agree to tol, relative to the larger of ‖A‖ and
    |μ|. Converges when a single eigenvalue strictly dominates in magnitude.

    Args:
        A: Square matrix
        max_iter: Iteration cap
        tol: Convergence tolerance on the Rayleigh quotient
        seed: Seed for the random starting vector

    Returns:
        (eigenvalue, unit eigenvector)

    Raises:
        NotSquareError: If A is not square
        ConvergenceError: If the estimate has not settled within max_iter
    """
    design = _ensure_design(A)
    M = design.array

    rng = np.random.default_rng(seed)
    b = rng.standard_normal(design.n)
    b /= np.linalg.norm(b)
    mu = float(b @ M @ b)
    scale = scaled_norm(M)

    for iteration in range(1, max_iter + 1):
        Ab = M @ b
        norm = scaled_norm(Ab)
        if norm == 0.0:
            # b lies in the null space
            return 0.0, Vector._build(canonical_sign(b))
        b = Ab / norm
        new_mu = float(b @ M @ b)
        change = abs(new_mu - mu)
        mu = new_mu
        if change <= tol * max(scale, abs(mu)):
            return mu, Vector._build(canonical_sign(b))

    raise ConvergenceError(
        f"Power iteration did not converge within {max_iter} iterations",
        iterations=max_iter,
        final_change=change if max_iter > 0 else float('nan'),
        reason='max_iterations',
        threshold=tol,
    )


def _ensure_design(A: ArrayLike | Matrix | EigenDesign) -> EigenDesign:
    if isinstance(A, EigenDesign):
        return A
    return EigenDesign.from_array(A)


def _get_backend(
    method: MethodChoice,
    max_iter: int,
    tol: float | None,
    on_complex: ComplexPolicy,
    compute_vectors: bool,
):
    """
    Select and instantiate the backend for a method.

    Raises:
        ValidationError: If the method or its parameters are invalid
    """
    if method == 'qr':
        if max_iter < 0:
            raise ValidationError(f"max_iter: must be >= 0, got {max_iter}")
        if tol is None:
            tol = DEFLATION_TOL
        elif not tol > 0:
            raise ValidationError(f"tol: must be positive, got {tol}")
        return CPUQREigenBackend(
            max_iter=max_iter,
            tol=tol,
            on_complex=on_complex,
            compute_vectors=compute_vectors,
        )

    elif method == 'closed_form':
        return CPUClosedFormEigenBackend(
            on_complex=on_complex,
            compute_vectors=compute_vectors,
        )

    else:
        raise ValidationError(
            f"method: expected 'qr' or 'closed_form', got {method!r}"
        )
