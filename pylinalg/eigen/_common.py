"""
Shared post-processing for the eigen backends.

Every backend produces eigenvalues in its own natural order; this module
applies the complex-eigenvalue policy, the output ordering and the
eigenvector computation so all methods return the same shape of result.
"""

from __future__ import annotations

import warnings
from typing import Any, Literal
import numpy as np
from numpy.typing import NDArray

from pylinalg.core.exceptions import (
    ComplexEigenvalueError,
    ComplexEigenvalueWarning,
    InverseIterationWarning,
    ValidationError,
)
from pylinalg.core.compute.timing import Timer
from pylinalg.core.compute.tolerances import (
    CLUSTER_RTOL,
    INVERSE_ITERATION_MAX_STEPS,
    INVERSE_ITERATION_RESIDUAL,
)
from pylinalg.eigen._inverse_iteration import inverse_iteration
from pylinalg.eigen.design import EigenDesign
from pylinalg.eigen.solution import EigenParams


ComplexPolicy = Literal['nan', 'raise']

_COMPLEX_POLICIES = ('nan', 'raise')


def check_complex_policy(on_complex: str) -> None:
    if on_complex not in _COMPLEX_POLICIES:
        raise ValidationError(
            f"on_complex: expected one of {_COMPLEX_POLICIES}, got {on_complex!r}"
        )


def order_eigenvalues(values: NDArray[np.floating[Any]]) -> NDArray[np.intp]:
    """Permutation sorting by descending |λ| (stable), NaN last."""
    magnitude = np.where(np.isnan(values), -np.inf, np.abs(values))
    return np.argsort(-magnitude, kind='stable')


def apply_complex_policy(
    pairs: list[tuple[float, float]],
    on_complex: ComplexPolicy,
) -> tuple[str, ...]:
    """
    Raise or warn about complex-conjugate pairs.

    Returns:
        Warning messages to record on the Result.

    Raises:
        ComplexEigenvalueError: If on_complex='raise' and pairs is non-empty
    """
    if not pairs:
        return ()

    real, imag = pairs[0]
    if on_complex == 'raise':
        raise ComplexEigenvalueError(
            f"Matrix has {len(pairs)} complex-conjugate eigenvalue pair(s), "
            f"first: {real:.6g} ± {imag:.6g}i",
            real=real,
            imag=imag,
        )

    message = (
        f"{len(pairs)} complex-conjugate eigenvalue pair(s) reported as NaN "
        f"(first: {real:.6g} ± {imag:.6g}i)"
    )
    warnings.warn(message, ComplexEigenvalueWarning, stacklevel=4)
    return (message,)


def build_params(
    design: EigenDesign,
    values: NDArray[np.floating[Any]],
    pairs: list[tuple[float, float]],
    compute_vectors: bool,
    timer: Timer,
) -> tuple[EigenParams, dict[str, Any], tuple[str, ...]]:
    """
    Order eigenvalues, compute eigenvectors and collect diagnostics.

    Returns:
        (params, info additions, warning messages)
    """
    order = order_eigenvalues(values)
    ordered = values[order]
    info: dict[str, Any] = {'n_complex': 2 * len(pairs)}
    messages: list[str] = []

    vectors = None
    residuals = None
    if compute_vectors:
        with timer.section('eigenvectors'):
            outcome = inverse_iteration(
                design.array,
                ordered,
                max_steps=INVERSE_ITERATION_MAX_STEPS,
                residual_tol=INVERSE_ITERATION_RESIDUAL,
                cluster_rtol=CLUSTER_RTOL,
            )
        vectors = outcome.vectors
        residuals = outcome.residuals
        info['inverse_iteration_steps'] = outcome.steps

        if outcome.unconverged:
            worst = float(np.nanmax(residuals[outcome.unconverged]))
            message = (
                f"Eigenvectors {outcome.unconverged} did not reach the target "
                f"residual (worst ‖Av - λv‖ = {worst:.3e})"
            )
            warnings.warn(message, InverseIterationWarning, stacklevel=4)
            messages.append(message)

    params = EigenParams(
        eigenvalues=ordered,
        eigenvectors=vectors,
        residuals=residuals,
        complex_pairs=tuple(pairs),
    )
    return params, info, tuple(messages)
