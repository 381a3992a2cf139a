"""Head-to-head comparison of Jacobi and Gauss-Seidel runs."""

from dataclasses import dataclass, asdict
from typing import Dict, Any, List, Tuple
import logging

from ..core.norms import is_diagonally_dominant, is_symmetric
from ..core.system import LinearSystem
from ..solvers.base import SolverResult

logger = logging.getLogger(__name__)

JACOBI = "Jacobi"
GAUSS_SEIDEL = "Gauss-Seidel"
SIMILAR = "Similar"

# Systems larger than this get the parallelization note
PARALLEL_SIZE_THRESHOLD = 10


@dataclass(frozen=True)
class MethodMetrics:
    """Per-method figures extracted from a SolverResult."""
    converged: bool
    iterations: int
    elapsed_time_ms: float
    memory_kb: float
    final_error: float
    efficiency_score: int


@dataclass(frozen=True)
class ComparisonReport:
    """Read-only comparison of one Jacobi run and one Gauss-Seidel run."""
    jacobi: MethodMetrics
    gauss_seidel: MethodMetrics
    iteration_difference: int
    faster_by_time: str
    memory_difference_kb: float
    more_efficient: str
    recommendations: Tuple[str, ...]
    matrix_type: str

    def to_dict(self) -> Dict[str, Any]:
        report = asdict(self)
        report['recommendations'] = list(self.recommendations)
        return report


def classify_size(n: int) -> str:
    """Three-tier size bucket."""
    if n <= 5:
        return "Small (n<=5)"
    elif n <= 20:
        return "Medium (5<n<=20)"
    return "Large (n>20)"


def percentage_improvement(iterations_a: int, iterations_b: int) -> float:
    """Iterations saved by the faster method, relative to the slower one."""
    slower = max(iterations_a, iterations_b)
    if slower == 0:
        return 0.0
    return round(abs(iterations_a - iterations_b) / slower * 100, 2)


class Comparator:
    """
    Compare two completed solver runs on the same system.

    Timing and memory figures are reported but only the iteration count,
    the time and convergence feed the efficiency score.
    """

    def __init__(self, jacobi: SolverResult, gauss_seidel: SolverResult, system: LinearSystem):
        """
        Args:
            jacobi: Completed Jacobi result
            gauss_seidel: Completed Gauss-Seidel result
            system: The system both runs solved
        """
        self.jacobi = jacobi
        self.gauss_seidel = gauss_seidel
        self.system = system

    def compare(self) -> ComparisonReport:
        """Build the comparison report."""
        score_jacobi, score_gs = self.efficiency_scores()

        if score_jacobi > score_gs:
            more_efficient = JACOBI
        elif score_gs > score_jacobi:
            more_efficient = GAUSS_SEIDEL
        else:
            more_efficient = SIMILAR

        faster_by_time = (JACOBI if self.jacobi.elapsed_time_ms < self.gauss_seidel.elapsed_time_ms
                          else GAUSS_SEIDEL)

        report = ComparisonReport(
            jacobi=self._metrics(self.jacobi, score_jacobi),
            gauss_seidel=self._metrics(self.gauss_seidel, score_gs),
            iteration_difference=abs(self.jacobi.iterations - self.gauss_seidel.iterations),
            faster_by_time=faster_by_time,
            memory_difference_kb=abs(self.jacobi.memory_delta_kb - self.gauss_seidel.memory_delta_kb),
            more_efficient=more_efficient,
            recommendations=tuple(self.recommendations()),
            matrix_type=self.matrix_type()
        )

        logger.info(f"Comparison complete: more efficient = {more_efficient}, "
                    f"iterations J={self.jacobi.iterations} GS={self.gauss_seidel.iterations}")
        return report

    @staticmethod
    def _metrics(result: SolverResult, score: int) -> MethodMetrics:
        return MethodMetrics(
            converged=result.converged,
            iterations=result.iterations,
            elapsed_time_ms=result.elapsed_time_ms,
            memory_kb=result.memory_delta_kb,
            final_error=result.final_error,
            efficiency_score=score
        )

    def efficiency_scores(self) -> Tuple[int, int]:
        """
        Award one point each for fewer iterations, less time and convergence.

        Ties award no point to either side.
        """
        score_jacobi = 0
        score_gs = 0

        if self.jacobi.iterations < self.gauss_seidel.iterations:
            score_jacobi += 1
        elif self.gauss_seidel.iterations < self.jacobi.iterations:
            score_gs += 1

        if self.jacobi.elapsed_time_ms < self.gauss_seidel.elapsed_time_ms:
            score_jacobi += 1
        elif self.gauss_seidel.elapsed_time_ms < self.jacobi.elapsed_time_ms:
            score_gs += 1

        if self.jacobi.converged:
            score_jacobi += 1
        if self.gauss_seidel.converged:
            score_gs += 1

        return score_jacobi, score_gs

    def recommendations(self) -> List[str]:
        """Ordered qualitative recommendations."""
        recommendations = []

        if is_diagonally_dominant(self.system.matrix):
            recommendations.append(
                "The matrix is diagonally dominant. Both methods should converge."
            )
        else:
            recommendations.append(
                "The matrix is NOT diagonally dominant. Convergence is not guaranteed."
            )

        recommendations.extend(self._speed_verdict())

        if self.system.size > PARALLEL_SIZE_THRESHOLD:
            recommendations.append(
                f"For large matrices (n>{PARALLEL_SIZE_THRESHOLD}), Jacobi parallelizes more easily."
            )

        return recommendations

    def _speed_verdict(self) -> List[str]:
        jacobi_ok = self.jacobi.converged
        gs_ok = self.gauss_seidel.converged
        iter_j = self.jacobi.iterations
        iter_gs = self.gauss_seidel.iterations

        if jacobi_ok and gs_ok:
            improvement = percentage_improvement(iter_j, iter_gs)
            if iter_gs < iter_j:
                return [f"Gauss-Seidel converged {improvement}% faster than Jacobi.",
                        "Recommendation: use Gauss-Seidel for this type of matrix."]
            elif iter_j < iter_gs:
                return [f"Jacobi converged {improvement}% faster than Gauss-Seidel (unusual).",
                        "Recommendation: use Jacobi for this type of matrix."]
            return ["Both methods converged in the same number of iterations."]

        if not jacobi_ok and not gs_ok:
            return ["Neither method converged. Consider raising the iteration cap "
                    "or checking the matrix."]

        if gs_ok:
            return ["Only Gauss-Seidel converged.",
                    "Recommendation: use Gauss-Seidel for this system."]
        return ["Only Jacobi converged (unusual).",
                "Recommendation: use Jacobi for this system."]

    def matrix_type(self) -> str:
        """Comma-separated structural classification of the matrix."""
        matrix = self.system.matrix
        types = ["Diagonally dominant" if is_diagonally_dominant(matrix)
                 else "Not diagonally dominant"]

        if is_symmetric(matrix):
            types.append("Symmetric")

        types.append(classify_size(self.system.size))
        return ", ".join(types)
