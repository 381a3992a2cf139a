"""Vector norms, error metrics and structural matrix checks."""

import numpy as np
from typing import Union, Sequence
import logging

logger = logging.getLogger(__name__)

ArrayLike = Union[np.ndarray, Sequence[float], Sequence[Sequence[float]]]

# Tolerance used when comparing a_ij against a_ji
SYMMETRY_TOLERANCE = 1e-4


def relative_error(x_new: ArrayLike, x_old: ArrayLike) -> float:
    """
    Relative change between two consecutive iterates.

    error = ||x_new - x_old||_2 / ||x_new||_2

    A zero-norm new iterate returns 0.0, which satisfies any positive
    tolerance and stops the iteration.

    Args:
        x_new: Iterate k+1
        x_old: Iterate k

    Returns:
        Relative error in the Euclidean norm
    """
    x_new = np.asarray(x_new, dtype=np.float64)
    x_old = np.asarray(x_old, dtype=np.float64)

    denominator = np.linalg.norm(x_new)
    if denominator == 0:
        return 0.0

    return float(np.linalg.norm(x_new - x_old) / denominator)


def residual_norm(matrix: ArrayLike, x: ArrayLike, rhs: ArrayLike) -> float:
    """
    Euclidean norm of the residual ||Ax - b||_2.

    Used to check a candidate solution against the original equations;
    never used as a stopping criterion.
    """
    A = np.asarray(matrix, dtype=np.float64)
    x = np.asarray(x, dtype=np.float64)
    b = np.asarray(rhs, dtype=np.float64)

    return float(np.linalg.norm(A @ x - b))


def is_diagonally_dominant(matrix: ArrayLike) -> bool:
    """
    Check strict row-wise diagonal dominance.

    |a_ii| > sum_{j != i} |a_ij| for every row i. This is a sufficient
    condition for convergence of Jacobi and Gauss-Seidel, not a necessary one.
    """
    A = np.abs(np.asarray(matrix, dtype=np.float64))
    diagonal = np.diag(A)
    off_diagonal = A.sum(axis=1) - diagonal

    dominant = bool(np.all(diagonal > off_diagonal))
    logger.debug(f"Diagonal dominance check: {dominant}")
    return dominant


def is_symmetric(matrix: ArrayLike, tolerance: float = SYMMETRY_TOLERANCE) -> bool:
    """Check |a_ij - a_ji| <= tolerance for all i < j."""
    A = np.asarray(matrix, dtype=np.float64)
    return bool(np.all(np.abs(A - A.T) <= tolerance))


def infinity_norm(matrix: ArrayLike) -> float:
    """Maximum absolute row sum."""
    A = np.asarray(matrix, dtype=np.float64)
    if A.size == 0:
        return 0.0
    return float(np.max(np.sum(np.abs(A), axis=1)))
