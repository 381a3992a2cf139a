"""Comparison and convergence analysis of solver runs."""

from .comparison import Comparator, ComparisonReport, MethodMetrics, JACOBI, GAUSS_SEIDEL
from .convergence import (
    ConvergenceAnalyzer, ConvergenceDiagnostics, linear_convergence_rate,
    is_monotone, count_oscillations, is_stable
)

__all__ = [
    "Comparator",
    "ComparisonReport",
    "MethodMetrics",
    "ConvergenceAnalyzer",
    "ConvergenceDiagnostics",
    "linear_convergence_rate",
    "is_monotone",
    "count_oscillations",
    "is_stable",
    "JACOBI",
    "GAUSS_SEIDEL"
]
