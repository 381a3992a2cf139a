"""
Iterative Solvers for Linear Systems

Jacobi and Gauss-Seidel solvers for Ax = b together with a side-by-side
comparison of the two methods and convergence diagnostics of their runs.
"""

# Version information
from ._version import __version__
__author__ = "Tanisha Gupta"

from .core import LinearSystem, ValidationError, validate_system
from .config import AppConfig, SolverConfig
from .solvers import JacobiSolver, GaussSeidelSolver, SolverResult
from .analysis import Comparator, ComparisonReport, ConvergenceAnalyzer, ConvergenceDiagnostics
from .applications import ComparisonRun, run_comparison, get_example_system, get_example_systems

__all__ = [
    "LinearSystem",
    "ValidationError",
    "validate_system",
    "AppConfig",
    "SolverConfig",
    "JacobiSolver",
    "GaussSeidelSolver",
    "SolverResult",
    "Comparator",
    "ComparisonReport",
    "ConvergenceAnalyzer",
    "ConvergenceDiagnostics",
    "ComparisonRun",
    "run_comparison",
    "get_example_system",
    "get_example_systems"
]
