"""Unit tests for convergence diagnostics."""

import numpy as np
import pytest
import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from itersolve.core.system import LinearSystem
from itersolve.solvers.base import SolverResult
from itersolve.analysis.convergence import (
    ConvergenceAnalyzer, linear_convergence_rate, is_monotone, count_oscillations,
    is_stable, interpret_rates, classify_iterations, NOT_AVAILABLE
)


def make_result(method, history, converged=True, solution=(1.0, 1.0)):
    return SolverResult(
        method=method,
        solution=np.array(solution),
        iterations=len(history),
        converged=converged,
        error_history=history
    )


@pytest.fixture
def system():
    return LinearSystem([[5.0, 1.0], [1.0, 3.0]], [10.0, 8.0])


class TestRateEstimate:
    """Test cases for the tail-averaged linear convergence rate."""

    def test_geometric_history(self):
        errors = [0.5 ** k for k in range(10)]
        assert linear_convergence_rate(errors) == pytest.approx(0.5)

    def test_only_tail_is_averaged(self):
        errors = [1.0]
        for factor in [0.9] * 3 + [0.5] * 5:
            errors.append(errors[-1] * factor)

        assert linear_convergence_rate(errors) == pytest.approx(0.5)

    def test_short_history(self):
        assert linear_convergence_rate([]) == 0.0
        assert linear_convergence_rate([0.3]) == 0.0

    def test_tiny_denominators_skipped(self):
        """Errors at or below the floor yield no ratio and a zero estimate."""
        assert linear_convergence_rate([1e-11, 1e-12, 1e-13]) == 0.0


class TestStability:
    """Test cases for monotonicity, oscillations and stability."""

    def test_monotone_within_band(self):
        assert is_monotone([1.0, 1.005, 0.5])
        assert not is_monotone([1.0, 1.02, 0.5])

    def test_valley_and_peak_both_count(self):
        """Falling then rising then falling is two reversals."""
        assert count_oscillations([1.0, 0.5, 0.6, 0.1]) == 2

    def test_single_valley(self):
        assert count_oscillations([1.0, 0.5, 0.6]) == 1

    def test_trailing_rise(self):
        """A reversal into a rise at the end of the history counts."""
        assert count_oscillations([1.0, 0.2, 0.8, 0.9]) == 1

    def test_repeated_reversals(self):
        assert count_oscillations([1.0, 2.0, 1.0, 2.0, 1.0]) == 3

    def test_monotone_history_has_no_oscillations(self):
        assert count_oscillations([1.0, 0.5, 0.25, 0.125]) == 0
        assert count_oscillations([1.0, 1.0, 0.5]) == 0

    def test_short_history_has_no_oscillations(self):
        assert count_oscillations([1.0, 2.0]) == 0

    def test_is_stable(self):
        assert is_stable([1.0, 0.5])
        assert not is_stable([1.0, 1.0])
        assert not is_stable([])


class TestInterpretation:
    """Test cases for qualitative wording."""

    def test_fast(self):
        assert interpret_rates(0.3, 0.2) == "Both methods converge fast. Gauss-Seidel is slightly better."

    def test_moderate(self):
        assert interpret_rates(0.6, 0.7) == "Moderate convergence. Jacobi has the edge."

    def test_slow(self):
        assert interpret_rates(0.95, 0.2).startswith("Slow convergence.")

    @pytest.mark.parametrize("iterations,expected", [
        (1, "fast"), (19, "fast"), (20, "moderate"), (99, "moderate"), (100, "slow")
    ])
    def test_classify_iterations(self, iterations, expected):
        assert classify_iterations(iterations) == expected


class TestConvergenceAnalyzer:
    """Test cases for the full diagnostics."""

    def test_relative_speed(self, system):
        jacobi = make_result("Jacobi", [0.5 ** k for k in range(20)])
        gauss_seidel = make_result("Gauss-Seidel", [0.25 ** k for k in range(10)])
        speed = ConvergenceAnalyzer(jacobi, gauss_seidel, system).relative_speed()

        assert speed.ratio == "2.0x"
        assert speed.faster == "Gauss-Seidel"
        assert speed.improvement_percent == "50.0%"

    def test_relative_speed_not_available(self, system):
        jacobi = make_result("Jacobi", [])
        gauss_seidel = make_result("Gauss-Seidel", [1.0])
        speed = ConvergenceAnalyzer(jacobi, gauss_seidel, system).relative_speed()

        assert speed.ratio == NOT_AVAILABLE
        assert speed.faster == NOT_AVAILABLE

    def test_full_diagnostics(self, system):
        jacobi = make_result("Jacobi", [0.5 ** k for k in range(10)])
        gauss_seidel = make_result("Gauss-Seidel", [0.25 ** k for k in range(50)])
        diagnostics = ConvergenceAnalyzer(jacobi, gauss_seidel, system).analyze()

        assert diagnostics.linear_rate.jacobi == pytest.approx(0.5)
        assert diagnostics.linear_rate.gauss_seidel == pytest.approx(0.25)
        assert diagnostics.spectral_radius.guarantees_convergence
        assert diagnostics.stability.jacobi.monotone
        assert diagnostics.stability.gauss_seidel.oscillations == 0
        assert diagnostics.predictions == (
            "Matrix is diagonally dominant -> convergence guaranteed",
            "Jacobi converges quickly",
            "Gauss-Seidel converges moderately",
        )

    def test_residuals_require_rhs(self, system):
        jacobi = make_result("Jacobi", [1.0, 0.1], solution=(11 / 7, 15 / 7))
        gauss_seidel = make_result("Gauss-Seidel", [1.0, 0.1], solution=(0.0, 0.0))

        assert ConvergenceAnalyzer(jacobi, gauss_seidel, system).residuals() == {}

        residuals = ConvergenceAnalyzer(jacobi, gauss_seidel, system, system.rhs).residuals()
        assert residuals["Jacobi"] == pytest.approx(0.0, abs=1e-12)
        assert residuals["Gauss-Seidel"] == pytest.approx(np.hypot(10.0, 8.0))

    def test_not_dominant_prediction(self):
        system = LinearSystem([[1, 2, 3], [4, 1, 2], [3, 4, 1]], [14, 11, 16])
        jacobi = make_result("Jacobi", [1.0] * 100, converged=False, solution=(0, 0, 0))
        gauss_seidel = make_result("Gauss-Seidel", [1.0] * 100, converged=False, solution=(0, 0, 0))
        diagnostics = ConvergenceAnalyzer(jacobi, gauss_seidel, system).analyze()

        assert diagnostics.predictions[0] == "Matrix is not diagonally dominant -> convergence NOT guaranteed"
        assert diagnostics.predictions[1] == "Jacobi converges slowly"
        assert not diagnostics.stability.jacobi.stable
        assert diagnostics.to_dict()['residuals'] == {}

    def test_diagnostics_are_read_only(self, system):
        jacobi = make_result("Jacobi", [1.0, 0.1], solution=(11 / 7, 15 / 7))
        gauss_seidel = make_result("Gauss-Seidel", [1.0, 0.1], solution=(11 / 7, 15 / 7))
        diagnostics = ConvergenceAnalyzer(jacobi, gauss_seidel, system, system.rhs).analyze()

        with pytest.raises(TypeError):
            diagnostics.residuals["Jacobi"] = 0.0
        with pytest.raises(AttributeError):
            diagnostics.predictions.append("extra")

        exported = diagnostics.to_dict()
        assert type(exported['residuals']) is dict
        exported['residuals']["Jacobi"] = -1.0
        assert diagnostics.residuals["Jacobi"] == pytest.approx(0.0, abs=1e-12)
