"""Run both solvers on one system and analyze the results."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Any, Optional
import logging

from ..core.system import LinearSystem
from ..config.settings import SolverConfig
from ..solvers.base import SolverResult
from ..solvers.iterative import JacobiSolver, GaussSeidelSolver
from ..analysis.comparison import Comparator, ComparisonReport
from ..analysis.convergence import ConvergenceAnalyzer, ConvergenceDiagnostics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonRun:
    """Both solver results and the two reports derived from them."""
    system: LinearSystem
    config: SolverConfig
    jacobi: SolverResult
    gauss_seidel: SolverResult
    comparison: ComparisonReport
    diagnostics: ConvergenceDiagnostics

    def to_dict(self) -> Dict[str, Any]:
        return {
            'system': {
                'name': self.system.name,
                'matrix': self.system.matrix.tolist(),
                'rhs': self.system.rhs.tolist()
            },
            'jacobi': self.jacobi.to_dict(),
            'gauss_seidel': self.gauss_seidel.to_dict(),
            'comparison': self.comparison.to_dict(),
            'diagnostics': self.diagnostics.to_dict()
        }


def run_comparison(
    system: LinearSystem,
    config: Optional[SolverConfig] = None,
    parallel: bool = False,
    verbose: bool = False
) -> ComparisonRun:
    """
    Solve ``system`` with Jacobi and Gauss-Seidel and compare the runs.

    Args:
        system: Validated linear system
        config: Shared solver configuration (defaults when None)
        parallel: Run the two solvers on separate worker threads
        verbose: Enable per-iteration solver logging

    Returns:
        ComparisonRun with both results, the comparison and the diagnostics
    """
    config = config if config is not None else SolverConfig()
    jacobi_solver = JacobiSolver(config, verbose=verbose)
    gauss_seidel_solver = GaussSeidelSolver(config, verbose=verbose)

    if parallel:
        # The solvers share only read-only inputs
        with ThreadPoolExecutor(max_workers=2) as executor:
            jacobi_future = executor.submit(jacobi_solver.solve, system)
            gauss_seidel_future = executor.submit(gauss_seidel_solver.solve, system)
            jacobi = jacobi_future.result()
            gauss_seidel = gauss_seidel_future.result()
    else:
        jacobi = jacobi_solver.solve(system)
        gauss_seidel = gauss_seidel_solver.solve(system)

    comparison = Comparator(jacobi, gauss_seidel, system).compare()
    diagnostics = ConvergenceAnalyzer(jacobi, gauss_seidel, system, system.rhs).analyze()

    return ComparisonRun(
        system=system,
        config=config,
        jacobi=jacobi,
        gauss_seidel=gauss_seidel,
        comparison=comparison,
        diagnostics=diagnostics
    )
