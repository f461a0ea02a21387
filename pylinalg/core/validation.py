"""
Input validation utilities for PyLinalg.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pylinalg.core.exceptions import (
    ValidationError,
    DimensionError,
    DimensionMismatchError,
    NotSquareError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating ragged rows, mixed types or
    non-numeric data) and complex input.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype

    Raises:
        ValidationError: If input cannot be converted to a real numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating ragged rows, "
            f"mixed types or non-numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: complex dtype {result.dtype}, only real matrices are supported"
        )

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number) and result.dtype != np.bool_:
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result.astype(np.float64)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        DimensionError: If array is not 1D
    """
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 2-dimensional.

    Raises:
        DimensionError: If array is not 2D
    """
    check_ndim(array, 2, name)


def check_not_empty(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify no axis of the array has length zero.

    Raises:
        ValidationError: If the array has a zero-length axis
    """
    if array.size == 0:
        raise ValidationError(
            f"{name}: must have at least one element, got shape {array.shape}"
        )


def check_square(shape: tuple[int, ...], operation: str) -> None:
    """
    Verify a matrix shape is square.

    Args:
        shape: (rows, columns) of the matrix
        operation: Operation name for error messages

    Raises:
        NotSquareError: If rows != columns
    """
    if len(shape) != 2 or shape[0] != shape[1]:
        raise NotSquareError(
            f"{operation}: requires a square matrix, got shape {shape}",
            operation=operation,
            shape=tuple(shape),
        )


def check_same_shape(
    left: tuple[int, ...],
    right: tuple[int, ...],
    operation: str,
) -> None:
    """
    Verify two operands have identical shapes (elementwise operations).

    Raises:
        DimensionMismatchError: If shapes differ
    """
    if tuple(left) != tuple(right):
        raise DimensionMismatchError(
            f"{operation}: operand shapes must match, got {left} and {right}",
            operation=operation,
            left_shape=tuple(left),
            right_shape=tuple(right),
        )


def check_multipliable(
    left: tuple[int, ...],
    right: tuple[int, ...],
    operation: str,
) -> None:
    """
    Verify inner dimensions agree for a product.

    The left operand's last axis must equal the right operand's first axis.

    Raises:
        DimensionMismatchError: If inner dimensions differ
    """
    if left[-1] != right[0]:
        raise DimensionMismatchError(
            f"{operation}: inner dimensions must agree, got {left} and {right} "
            f"({left[-1]} != {right[0]})",
            operation=operation,
            left_shape=tuple(left),
            right_shape=tuple(right),
        )


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")
