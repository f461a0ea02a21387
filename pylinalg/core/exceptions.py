"""
Exception hierarchy for PyLinalg.

All exceptions inherit from PyLinalgError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLinalgError(Exception):
    """Base exception for all PyLinalg errors."""
    pass


class ValidationError(PyLinalgError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class DimensionMismatchError(DimensionError):
    """
    Operand shapes are incompatible for a binary operation.

    Raised by add/subtract (shapes must be identical), multiply
    (inner dimensions must agree) and vector operations.

    Attributes:
        operation: Name of the operation that failed (e.g. 'multiply')
        left_shape: Shape of the left operand
        right_shape: Shape of the right operand
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        left_shape: tuple[int, ...] | None = None,
        right_shape: tuple[int, ...] | None = None
    ):
        super().__init__(message)
        self.operation = operation
        self.left_shape = left_shape
        self.right_shape = right_shape


class NotSquareError(DimensionError):
    """
    Operation requires a square matrix.

    Raised by trace, determinant, inverse and every eigen operation
    before any computation is attempted.

    Attributes:
        operation: Name of the operation that failed (e.g. 'det')
        shape: Actual (rows, columns) of the matrix
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        shape: tuple[int, int] | None = None
    ):
        super().__init__(message)
        self.operation = operation
        self.shape = shape


class NumericalError(PyLinalgError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a matrix operation requires invertibility but the matrix
    is singular or numerically rank-deficient.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically min(n, p))
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class ComplexEigenvalueError(NumericalError):
    """
    A real matrix has a complex-conjugate eigenvalue pair.

    Raised by eig(..., on_complex='raise'). With the default
    on_complex='nan' the pair is reported as NaN placeholders instead.

    Attributes:
        real: Real part of the conjugate pair
        imag: Magnitude of the imaginary part
    """

    def __init__(
        self,
        message: str,
        real: float | None = None,
        imag: float | None = None
    ):
        super().__init__(message)
        self.real = real
        self.imag = imag


class ConvergenceError(PyLinalgError):
    """
    Iterative algorithm failed to converge.

    Raised when an iterative method (shifted QR iteration, power
    iteration) fails to meet convergence criteria within the maximum
    number of iterations.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final parameter or residual change
        reason: Why convergence failed (e.g., 'max_iterations', 'diverging')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold


class ComplexEigenvalueWarning(UserWarning):
    """Complex-conjugate eigenvalues were replaced by NaN placeholders."""
    pass


class InverseIterationWarning(UserWarning):
    """An eigenvector did not reach the target residual."""
    pass
