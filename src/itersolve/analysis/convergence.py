"""Convergence diagnostics for completed Jacobi and Gauss-Seidel runs."""

import numpy as np
from dataclasses import dataclass, asdict, field
from types import MappingProxyType
from typing import Dict, Any, List, Mapping, Optional, Sequence, Tuple
import logging

from ..core.norms import ArrayLike, is_diagonally_dominant, residual_norm
from ..core.system import LinearSystem
from ..solvers.base import SolverResult
from .comparison import JACOBI, GAUSS_SEIDEL

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"

# Ratios whose denominator is at or below this are skipped
RATE_DENOMINATOR_FLOOR = 1e-10

# Number of trailing ratios averaged for the rate estimate
RATE_WINDOW = 5

# Relative increase tolerated before a history stops counting as monotone
MONOTONE_BAND = 1.01

FAST_RATE = 0.5
MODERATE_RATE = 0.9

FAST_ITERATIONS = 20
MODERATE_ITERATIONS = 100

SPEED_WORDING = {"fast": "quickly", "moderate": "moderately", "slow": "slowly"}


def linear_convergence_rate(
    errors: Sequence[float],
    window: int = RATE_WINDOW,
    floor: float = RATE_DENOMINATOR_FLOOR
) -> float:
    """
    Estimate the asymptotic linear convergence factor of an error history.

    Computes r_k = e_k / e_{k-1} for every k whose e_{k-1} exceeds ``floor``
    and averages the last ``window`` of them; early ratios are transient and
    not representative. Returns 0.0 when there are fewer than two errors or
    no usable ratio, which makes "too fast to measure" indistinguishable
    from an exact zero rate.
    """
    if len(errors) < 2:
        return 0.0

    ratios = [errors[k] / errors[k - 1]
              for k in range(1, len(errors))
              if errors[k - 1] > floor]

    if not ratios:
        return 0.0

    return float(np.mean(ratios[-window:]))


def is_monotone(errors: Sequence[float], band: float = MONOTONE_BAND) -> bool:
    """True unless some error exceeds its predecessor by more than the band."""
    return all(errors[k] <= errors[k - 1] * band for k in range(1, len(errors)))


def count_oscillations(errors: Sequence[float]) -> int:
    """
    Count direction reversals in an error history.

    Position k counts when (e_k - e_{k-1}) and (e_{k+1} - e_k) have opposite
    signs, so both peaks and valleys are reversals. Flat steps never count.
    """
    if len(errors) < 3:
        return 0

    oscillations = 0
    for k in range(1, len(errors) - 1):
        before = errors[k] - errors[k - 1]
        after = errors[k + 1] - errors[k]
        if before * after < 0:
            oscillations += 1
    return oscillations


def is_stable(errors: Sequence[float]) -> bool:
    """Final error strictly below the first; False for an empty history."""
    if not errors:
        return False
    return errors[-1] < errors[0]


def interpret_rates(rate_jacobi: float, rate_gauss_seidel: float) -> str:
    """Qualitative reading of the two rate estimates."""
    better = JACOBI if rate_jacobi <= rate_gauss_seidel else GAUSS_SEIDEL

    if rate_jacobi < FAST_RATE and rate_gauss_seidel < FAST_RATE:
        return f"Both methods converge fast. {better} is slightly better."
    elif rate_jacobi < MODERATE_RATE and rate_gauss_seidel < MODERATE_RATE:
        return f"Moderate convergence. {better} has the edge."
    return "Slow convergence. Consider changing the parameters or the matrix."


def classify_iterations(iterations: int) -> str:
    """Three-tier speed class of an iteration count."""
    if iterations < FAST_ITERATIONS:
        return "fast"
    elif iterations < MODERATE_ITERATIONS:
        return "moderate"
    return "slow"


@dataclass(frozen=True)
class SpeedComparison:
    """Relative speed in iterations."""
    ratio: str
    faster: str
    improvement_percent: str


@dataclass(frozen=True)
class RateEstimate:
    """Tail-averaged linear convergence factors."""
    jacobi: float
    gauss_seidel: float
    interpretation: str


@dataclass(frozen=True)
class StabilityMetrics:
    """Shape of one error history."""
    monotone: bool
    oscillations: int
    stable: bool

    @classmethod
    def from_errors(cls, errors: Sequence[float]) -> 'StabilityMetrics':
        return cls(
            monotone=is_monotone(errors),
            oscillations=count_oscillations(errors),
            stable=is_stable(errors)
        )


@dataclass(frozen=True)
class StabilityReport:
    jacobi: StabilityMetrics
    gauss_seidel: StabilityMetrics


@dataclass(frozen=True)
class SpectralRadiusEstimate:
    """Spectral radius approximated by the rate estimate, not by eigenvalues."""
    jacobi: float
    gauss_seidel: float
    guarantees_convergence: bool


@dataclass(frozen=True)
class ConvergenceDiagnostics:
    """Read-only diagnostics for one Jacobi and one Gauss-Seidel run."""
    speed: SpeedComparison
    linear_rate: RateEstimate
    stability: StabilityReport
    spectral_radius: SpectralRadiusEstimate
    predictions: Tuple[str, ...]
    residuals: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'predictions', tuple(self.predictions))
        object.__setattr__(self, 'residuals', MappingProxyType(dict(self.residuals)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'speed': asdict(self.speed),
            'linear_rate': asdict(self.linear_rate),
            'stability': asdict(self.stability),
            'spectral_radius': asdict(self.spectral_radius),
            'predictions': list(self.predictions),
            'residuals': dict(self.residuals)
        }


class ConvergenceAnalyzer:
    """
    Analyze convergence behaviour of two completed solver runs.

    Provides:
    - Relative speed in iterations
    - Linear convergence rate and spectral radius estimates
    - Stability of the error histories
    - Qualitative convergence predictions
    - Residual check against the original equations (when b is given)
    """

    def __init__(
        self,
        jacobi: SolverResult,
        gauss_seidel: SolverResult,
        system: LinearSystem,
        rhs: Optional[ArrayLike] = None
    ):
        """
        Args:
            jacobi: Completed Jacobi result
            gauss_seidel: Completed Gauss-Seidel result
            system: The system both runs solved
            rhs: Right-hand side used for residuals; residuals are skipped when None
        """
        self.jacobi = jacobi
        self.gauss_seidel = gauss_seidel
        self.system = system
        self.rhs = None if rhs is None else np.asarray(rhs, dtype=np.float64)

    def analyze(self) -> ConvergenceDiagnostics:
        """Run every diagnostic."""
        diagnostics = ConvergenceDiagnostics(
            speed=self.relative_speed(),
            linear_rate=self.estimate_rates(),
            stability=self.analyze_stability(),
            spectral_radius=self.estimate_spectral_radius(),
            predictions=tuple(self.predict_convergence()),
            residuals=self.residuals()
        )

        logger.info(f"Convergence analysis: rates J={diagnostics.linear_rate.jacobi}, "
                    f"GS={diagnostics.linear_rate.gauss_seidel}")
        return diagnostics

    def relative_speed(self) -> SpeedComparison:
        iter_j = self.jacobi.iterations
        iter_gs = self.gauss_seidel.iterations

        if iter_j == 0 or iter_gs == 0:
            return SpeedComparison(NOT_AVAILABLE, NOT_AVAILABLE, NOT_AVAILABLE)

        ratio = round(iter_j / iter_gs, 2)
        improvement = round(abs(iter_j - iter_gs) / iter_j * 100, 2)

        return SpeedComparison(
            ratio=f"{ratio}x",
            faster=GAUSS_SEIDEL if iter_gs < iter_j else JACOBI,
            improvement_percent=f"{improvement}%"
        )

    def estimate_rates(self) -> RateEstimate:
        rate_j = linear_convergence_rate(self.jacobi.error_history)
        rate_gs = linear_convergence_rate(self.gauss_seidel.error_history)

        return RateEstimate(
            jacobi=round(rate_j, 4),
            gauss_seidel=round(rate_gs, 4),
            interpretation=interpret_rates(rate_j, rate_gs)
        )

    def analyze_stability(self) -> StabilityReport:
        return StabilityReport(
            jacobi=StabilityMetrics.from_errors(self.jacobi.error_history),
            gauss_seidel=StabilityMetrics.from_errors(self.gauss_seidel.error_history)
        )

    def estimate_spectral_radius(self) -> SpectralRadiusEstimate:
        """
        Approximate rho of each iteration matrix by the rate estimate.

        For large k, ||e_k|| ~ rho^k ||e_0||, so the tail ratio approaches rho.
        """
        rho_j = linear_convergence_rate(self.jacobi.error_history)
        rho_gs = linear_convergence_rate(self.gauss_seidel.error_history)

        return SpectralRadiusEstimate(
            jacobi=round(rho_j, 4),
            gauss_seidel=round(rho_gs, 4),
            guarantees_convergence=bool(rho_j < 1 and rho_gs < 1)
        )

    def predict_convergence(self) -> List[str]:
        predictions = []

        if is_diagonally_dominant(self.system.matrix):
            predictions.append("Matrix is diagonally dominant -> convergence guaranteed")
        else:
            predictions.append("Matrix is not diagonally dominant -> convergence NOT guaranteed")

        for result, label in ((self.jacobi, JACOBI), (self.gauss_seidel, GAUSS_SEIDEL)):
            speed = classify_iterations(result.iterations)
            predictions.append(f"{label} converges {SPEED_WORDING[speed]}")

        return predictions

    def residuals(self) -> Dict[str, float]:
        """||A x - b||_2 for each solution; empty when no right-hand side was given."""
        if self.rhs is None:
            return {}

        return {
            JACOBI: residual_norm(self.system.matrix, self.jacobi.solution, self.rhs),
            GAUSS_SEIDEL: residual_norm(self.system.matrix, self.gauss_seidel.solution, self.rhs)
        }
