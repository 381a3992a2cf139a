"""Base classes for stationary iterative solvers."""

from abc import ABC, abstractmethod
import numpy as np
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, List, Sequence, Tuple
import logging

from ..core.norms import relative_error
from ..core.system import LinearSystem
from ..config.settings import SolverConfig
from ..utils.performance import ResourceMonitor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SolverResult:
    """
    Outcome of a single solve.

    Written once by the solver and never modified afterwards.
    """
    method: str
    solution: np.ndarray
    iterations: int
    converged: bool
    error_history: Tuple[float, ...]
    elapsed_time_ms: float = 0.0
    memory_delta_kb: float = 0.0
    tolerance: float = 0.0

    def __post_init__(self):
        solution = np.array(self.solution, dtype=np.float64, copy=True)
        solution.setflags(write=False)
        object.__setattr__(self, 'solution', solution)
        object.__setattr__(self, 'error_history', tuple(float(e) for e in self.error_history))

    @property
    def final_error(self) -> float:
        """Last recorded relative error, 0.0 for an empty history."""
        return self.error_history[-1] if self.error_history else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Plain-Python view for serialization."""
        return {
            "method": self.method,
            "solution": self.solution.tolist(),
            "iterations": self.iterations,
            "converged": self.converged,
            "error_history": list(self.error_history),
            "final_error": self.final_error,
            "elapsed_time_ms": self.elapsed_time_ms,
            "memory_delta_kb": self.memory_delta_kb,
            "tolerance": self.tolerance
        }


class ConvergenceHistory:
    """Append-only record of per-iteration relative errors."""

    def __init__(self):
        """Initialize convergence history."""
        self._errors: List[float] = []

    def record_iteration(self, error: float) -> None:
        """Record an iteration."""
        self._errors.append(float(error))

    @property
    def errors(self) -> Tuple[float, ...]:
        return tuple(self._errors)

    def __len__(self) -> int:
        return len(self._errors)


class BaseSolver(ABC):
    """
    Abstract base class for stationary iterative solvers.

    Subclasses supply a single sweep x_k -> x_{k+1}; the base class owns the
    loop, the relative-error stopping rule and the telemetry.
    """

    def __init__(
        self,
        config: Optional[SolverConfig] = None,
        verbose: bool = False,
        name: str = "BaseSolver"
    ):
        """
        Initialize base solver.

        Args:
            config: Default solver configuration (tolerance, cap, initial guess)
            verbose: Enable per-iteration progress logging
            name: Solver name for logging and reports
        """
        self.config = config if config is not None else SolverConfig()
        self.verbose = verbose
        self.name = name

        logger.info(f"Initialized {name}: max_iter={self.config.max_iterations}, "
                    f"tol={self.config.tolerance}")

    @abstractmethod
    def sweep(self, matrix: np.ndarray, rhs: np.ndarray, x_old: np.ndarray) -> np.ndarray:
        """
        Perform one full sweep.

        Args:
            matrix: Coefficient matrix A
            rhs: Right-hand side b
            x_old: Iterate k (must not be modified)

        Returns:
            Iterate k+1 as a new array
        """
        pass

    def check_convergence(self, error: float, iteration: int, tolerance: float) -> bool:
        """
        Check the relative-error stopping criterion.

        Args:
            error: Relative error of the latest sweep
            iteration: Number of sweeps completed
            tolerance: Stopping threshold

        Returns:
            True if converged
        """
        converged = error < tolerance

        if converged:
            logger.info(f"{self.name} converged in {iteration} iterations: "
                        f"error = {error:.2e}")

        return converged

    def log_iteration(self, iteration: int, error: float, max_iterations: int) -> None:
        """Log iteration information."""
        if self.verbose and iteration % max(1, max_iterations // 10) == 0:
            logger.debug(f"{self.name} iteration {iteration}: error = {error:.2e}")

    def solve(self, system: LinearSystem, config: Optional[SolverConfig] = None) -> SolverResult:
        """
        Iterate until the relative error drops below tolerance or the cap is hit.

        Reaching the cap is a normal outcome reported through
        ``SolverResult.converged``; no exception is raised for it.

        Args:
            system: Linear system to solve
            config: Per-call configuration overriding the solver default

        Returns:
            SolverResult for this run
        """
        config = config if config is not None else self.config
        config.validate(system.size)
        matrix, rhs = system.matrix, system.rhs

        history = ConvergenceHistory()
        converged = False
        iterations = config.max_iterations

        with ResourceMonitor(self.name) as monitor:
            x_old = config.resolve_initial_guess(system.size)
            x_new = x_old

            for k in range(config.max_iterations):
                x_new = self.sweep(matrix, rhs, x_old)

                error = relative_error(x_new, x_old)
                history.record_iteration(error)
                self.log_iteration(k + 1, error, config.max_iterations)

                if self.check_convergence(error, k + 1, config.tolerance):
                    converged = True
                    iterations = k + 1
                    break

                x_old = x_new

        if not converged:
            logger.warning(f"{self.name} reached max iterations ({config.max_iterations}): "
                           f"error = {history.errors[-1]:.2e}")

        return SolverResult(
            method=self.name,
            solution=x_new,
            iterations=iterations,
            converged=converged,
            error_history=history.errors,
            elapsed_time_ms=monitor.elapsed_ms,
            memory_delta_kb=monitor.memory_delta_kb,
            tolerance=config.tolerance
        )


class RowOrderedSolver(BaseSolver):
    """Base for solvers whose sweep visits rows in a configurable order."""

    def __init__(
        self,
        config: Optional[SolverConfig] = None,
        verbose: bool = False,
        name: str = "RowOrderedSolver",
        row_order: Optional[Sequence[int]] = None
    ):
        """
        Args:
            config: Default solver configuration
            verbose: Enable verbose output
            name: Solver name
            row_order: Permutation of 0..n-1 giving the row visit order
                (ascending when None)
        """
        super().__init__(config, verbose, name)
        self.row_order = None if row_order is None else tuple(int(i) for i in row_order)

    def rows(self, size: int) -> Sequence[int]:
        """Row visit order for a system with ``size`` unknowns."""
        if self.row_order is None:
            return range(size)

        if sorted(self.row_order) != list(range(size)):
            raise ValueError(f"Row order {self.row_order} is not a permutation of 0..{size - 1}")
        return self.row_order
