"""Stationary iterative solvers."""

from .base import BaseSolver, SolverResult, ConvergenceHistory
from .iterative import JacobiSolver, GaussSeidelSolver

__all__ = [
    "BaseSolver",
    "SolverResult",
    "ConvergenceHistory",
    "JacobiSolver",
    "GaussSeidelSolver"
]
