"""
Input validation for linear systems and solver parameters.

Solvers assume a square matrix with non-zero diagonal and a compatible
right-hand side. These checks establish that contract before solving.
Critical failures raise ValidationError; risky but solvable inputs produce
warnings only.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import List
import logging

from .norms import ArrayLike, infinity_norm

logger = logging.getLogger(__name__)

# Smallest admissible |a_ii|
DIAGONAL_EPSILON = 1e-15

MAX_ITERATION_CEILING = 10000

# Heuristic: infinity norm below this is considered well conditioned
CONDITION_THRESHOLD = 100.0

LARGE_VALUE_THRESHOLD = 1000.0
SMALL_VALUE_THRESHOLD = 0.001


class ValidationError(ValueError):
    """Raised when a system or parameter violates the solver preconditions."""


@dataclass
class ValidationReport:
    """Outcome of a successful validation."""
    valid: bool
    condition_number: float
    warnings: List[str] = field(default_factory=list)

    @property
    def well_conditioned(self) -> bool:
        return is_well_conditioned(self.condition_number)


def validate_square_matrix(matrix: ArrayLike) -> bool:
    """Check that the matrix is a non-empty n x n array."""
    try:
        A = np.asarray(matrix, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Matrix must be a rectangular numeric array: {e}") from e

    if A.size == 0:
        raise ValidationError("Matrix must be non-empty")

    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise ValidationError(f"Matrix must be square (n x n), got shape {A.shape}")

    if not np.all(np.isfinite(A)):
        raise ValidationError("Matrix contains non-finite entries")

    return True


def validate_nonzero_diagonal(matrix: ArrayLike) -> bool:
    """Check |a_ii| >= DIAGONAL_EPSILON for every row."""
    diagonal = np.diag(np.asarray(matrix, dtype=np.float64))

    for i, value in enumerate(diagonal):
        if abs(value) < DIAGONAL_EPSILON:
            raise ValidationError(f"Diagonal entry A[{i}][{i}] is zero or too close to zero")

    return True


def validate_rhs(matrix: ArrayLike, rhs: ArrayLike) -> bool:
    """Check that b has one entry per matrix row."""
    try:
        b = np.asarray(rhs, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Right-hand side must be numeric: {e}") from e

    n = np.asarray(matrix).shape[0]
    if b.ndim != 1 or b.shape[0] != n:
        raise ValidationError(
            f"Right-hand side length {b.shape} does not match matrix dimension {n}"
        )

    if not np.all(np.isfinite(b)):
        raise ValidationError("Right-hand side contains non-finite entries")

    return True


def validate_parameters(tolerance: float, max_iterations: int) -> bool:
    """Check 0 < tolerance < 1 and 1 <= max_iterations <= MAX_ITERATION_CEILING."""
    if not 0 < tolerance < 1:
        raise ValidationError(f"Tolerance must lie in (0, 1), got {tolerance}")

    if (isinstance(max_iterations, bool) or not isinstance(max_iterations, (int, np.integer))
            or not 1 <= max_iterations <= MAX_ITERATION_CEILING):
        raise ValidationError(
            f"Max iterations must be an integer in [1, {MAX_ITERATION_CEILING}], "
            f"got {max_iterations!r}"
        )

    return True


def estimate_condition_number(matrix: ArrayLike) -> float:
    """Cheap conditioning indicator: the infinity norm of A."""
    return infinity_norm(matrix)


def is_well_conditioned(condition_number: float) -> bool:
    return condition_number < CONDITION_THRESHOLD


def system_warnings(matrix: ArrayLike) -> List[str]:
    """Advisory messages about entry magnitudes that may hurt accuracy."""
    A = np.abs(np.asarray(matrix, dtype=np.float64))
    warnings = []

    if A.max() > LARGE_VALUE_THRESHOLD:
        warnings.append("Matrix contains very large values; this may cause numerical instability.")

    nonzero = A[A > 0]
    if nonzero.size and nonzero.min() < SMALL_VALUE_THRESHOLD:
        warnings.append("Matrix contains very small values; this may reduce precision.")

    return warnings


def validate_system(
    matrix: ArrayLike,
    rhs: ArrayLike,
    tolerance: float,
    max_iterations: int
) -> ValidationReport:
    """
    Run every critical check in order and collect warnings.

    Args:
        matrix: Coefficient matrix A
        rhs: Right-hand side b
        tolerance: Relative-error stopping threshold
        max_iterations: Iteration cap

    Returns:
        ValidationReport with condition estimate and warnings

    Raises:
        ValidationError: On the first failed check
    """
    validate_square_matrix(matrix)
    validate_nonzero_diagonal(matrix)
    validate_rhs(matrix, rhs)
    validate_parameters(tolerance, max_iterations)

    condition_number = estimate_condition_number(matrix)
    warnings = system_warnings(matrix)

    if not is_well_conditioned(condition_number):
        logger.warning(f"Condition estimate {condition_number:.2f} exceeds {CONDITION_THRESHOLD}")
    for message in warnings:
        logger.warning(message)

    return ValidationReport(valid=True, condition_number=condition_number, warnings=warnings)
