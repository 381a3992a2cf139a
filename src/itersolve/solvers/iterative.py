"""Jacobi and Gauss-Seidel iterative solvers."""

import numpy as np
from typing import Optional, Sequence
import logging

from .base import RowOrderedSolver
from ..config.settings import SolverConfig

logger = logging.getLogger(__name__)


class JacobiSolver(RowOrderedSolver):
    """
    Jacobi solver.

    Update formula: x^{k+1}_i = (b_i - Σ_{j≠i} a_{ij}x^k_j) / a_{ii}

    Every component of x^{k+1} is computed from x^k alone, so the rows of a
    sweep are independent of one another and may be evaluated in any order
    or in parallel.
    """

    def __init__(
        self,
        config: Optional[SolverConfig] = None,
        verbose: bool = False,
        use_vectorized: bool = True,
        row_order: Optional[Sequence[int]] = None
    ):
        """
        Initialize Jacobi solver.

        Args:
            config: Default solver configuration
            verbose: Enable verbose output
            use_vectorized: Compute the sweep with a single matrix-vector product
            row_order: Row visit order for the explicit per-row sweep
        """
        super().__init__(config, verbose, "Jacobi", row_order)
        self.use_vectorized = use_vectorized and row_order is None

    def sweep(self, matrix: np.ndarray, rhs: np.ndarray, x_old: np.ndarray) -> np.ndarray:
        """Apply one Jacobi sweep."""
        if self.use_vectorized:
            return self._vectorized_sweep(matrix, rhs, x_old)
        return self._row_sweep(matrix, rhs, x_old)

    def _vectorized_sweep(self, matrix: np.ndarray, rhs: np.ndarray, x_old: np.ndarray) -> np.ndarray:
        """Vectorized Jacobi sweep: x_new = D^{-1}(b - (A - D)x_old)."""
        diagonal = np.diag(matrix)
        off_diagonal = matrix @ x_old - diagonal * x_old
        return (rhs - off_diagonal) / diagonal

    def _row_sweep(self, matrix: np.ndarray, rhs: np.ndarray, x_old: np.ndarray) -> np.ndarray:
        """Per-row Jacobi sweep reading only from x_old."""
        x_new = np.empty_like(x_old)

        for i in self.rows(len(rhs)):
            off_diagonal = matrix[i] @ x_old - matrix[i, i] * x_old[i]
            x_new[i] = (rhs[i] - off_diagonal) / matrix[i, i]

        return x_new


class GaussSeidelSolver(RowOrderedSolver):
    """
    Gauss-Seidel solver.

    Update formula: x^{k+1}_i = (b_i - Σ_{j<i} a_{ij}x^{k+1}_j - Σ_{j>i} a_{ij}x^k_j) / a_{ii}

    A single buffer is updated in place, so each row reads the values already
    produced earlier in the same sweep. The sweep is inherently sequential:
    changing the row order changes the iterate.
    """

    def __init__(
        self,
        config: Optional[SolverConfig] = None,
        verbose: bool = False,
        row_order: Optional[Sequence[int]] = None
    ):
        """
        Initialize Gauss-Seidel solver.

        Args:
            config: Default solver configuration
            verbose: Enable verbose output
            row_order: Row visit order (ascending when None)
        """
        super().__init__(config, verbose, "Gauss-Seidel", row_order)

    def sweep(self, matrix: np.ndarray, rhs: np.ndarray, x_old: np.ndarray) -> np.ndarray:
        """Apply one lexicographic Gauss-Seidel sweep."""
        x = x_old.copy()

        for i in self.rows(len(rhs)):
            off_diagonal = matrix[i] @ x - matrix[i, i] * x[i]
            x[i] = (rhs[i] - off_diagonal) / matrix[i, i]

        return x
