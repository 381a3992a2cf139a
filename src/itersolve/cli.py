"""Command line entry point: compare Jacobi and Gauss-Seidel on one system."""

import argparse
import json
import sys
from typing import List, Optional
import logging

import numpy as np

from ._version import __version__, DEV_STATUS
from .config.settings import AppConfig, SolverConfig
from .core.system import LinearSystem
from .core.validation import ValidationError, validate_system
from .applications.test_problems import get_example_system, describe_example_systems
from .applications.comparison_run import ComparisonRun, run_comparison
from .utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID_INPUT = 2

DEFAULT_LOG_LEVEL = 'WARNING'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Compare Jacobi and Gauss-Seidel on a linear system'
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument('--example', default='example_1',
                        help='Key of a built-in example system (default: example_1)')
    source.add_argument('--config',
                        help='YAML or JSON file with solver settings and a system')
    parser.add_argument('--list', action='store_true',
                        help='List the built-in example systems and exit')
    parser.add_argument('--tolerance', type=float,
                        help='Relative-error stopping threshold in (0, 1)')
    parser.add_argument('--max-iterations', type=int,
                        help='Iteration cap (1..10000)')
    parser.add_argument('--parallel', action='store_true',
                        help='Run the two solvers on separate threads')
    parser.add_argument('--json', action='store_true',
                        help='Print the full results as JSON')
    parser.add_argument('--log-level',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: WARNING, or the level in --config)')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__} ({DEV_STATUS})')
    return parser


def _load_inputs(args: argparse.Namespace):
    """Resolve the system and solver settings from the command line."""
    if args.config:
        app_config = AppConfig.from_file(args.config)
        if args.log_level is None:
            app_config.setup_logging()
        if app_config.system is None:
            raise ValidationError(f"Configuration {args.config} does not define a system")
        system_config = app_config.system
        matrix, rhs, name = system_config.matrix, system_config.rhs, system_config.name
        solver_config = app_config.solver
    else:
        example = get_example_system(args.example)
        matrix, rhs, name = example.matrix, example.rhs, example.name
        solver_config = example.to_solver_config()

    tolerance = args.tolerance if args.tolerance is not None else solver_config.tolerance
    max_iterations = (args.max_iterations if args.max_iterations is not None
                      else solver_config.max_iterations)

    report = validate_system(matrix, rhs, tolerance, max_iterations)
    solver_config = SolverConfig(tolerance=tolerance, max_iterations=max_iterations,
                                 initial_guess=solver_config.initial_guess)

    return LinearSystem(np.array(matrix), np.array(rhs), name=name), solver_config, report


def format_run(run: ComparisonRun) -> str:
    """Plain-text summary of a comparison run."""
    comparison = run.comparison
    diagnostics = run.diagnostics
    lines = [
        f"System: {run.system.name or 'custom'} (n={run.system.size})",
        f"Matrix type: {comparison.matrix_type}",
        "=" * 60,
        f"{'':16s}{'Jacobi':>20s}{'Gauss-Seidel':>20s}",
        f"{'Converged':16s}{str(run.jacobi.converged):>20s}{str(run.gauss_seidel.converged):>20s}",
        f"{'Iterations':16s}{run.jacobi.iterations:>20d}{run.gauss_seidel.iterations:>20d}",
        f"{'Final error':16s}{run.jacobi.final_error:>20.3e}{run.gauss_seidel.final_error:>20.3e}",
        f"{'Time (ms)':16s}{run.jacobi.elapsed_time_ms:>20.3f}{run.gauss_seidel.elapsed_time_ms:>20.3f}",
        f"{'Rate estimate':16s}{diagnostics.linear_rate.jacobi:>20.4f}"
        f"{diagnostics.linear_rate.gauss_seidel:>20.4f}",
    ]

    if diagnostics.residuals:
        lines.append(f"{'Residual':16s}{diagnostics.residuals['Jacobi']:>20.3e}"
                     f"{diagnostics.residuals['Gauss-Seidel']:>20.3e}")

    lines.append(f"{'Solution':16s}")
    lines.append(f"  Jacobi:       {np.array2string(run.jacobi.solution, precision=6)}")
    lines.append(f"  Gauss-Seidel: {np.array2string(run.gauss_seidel.solution, precision=6)}")
    lines.append("")
    lines.append(f"More efficient: {comparison.more_efficient} "
                 f"(score {comparison.jacobi.efficiency_score} vs "
                 f"{comparison.gauss_seidel.efficiency_score})")
    lines.append(f"Speed ratio: {diagnostics.speed.ratio}, faster: {diagnostics.speed.faster}")
    lines.append(diagnostics.linear_rate.interpretation)
    lines.append("")
    lines.append("Recommendations:")
    lines.extend(f"  - {line}" for line in comparison.recommendations)
    lines.append("Predictions:")
    lines.extend(f"  - {line}" for line in diagnostics.predictions)
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Command line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level or DEFAULT_LOG_LEVEL, colored_console=sys.stderr.isatty())

    if args.list:
        for key, summary in describe_example_systems().items():
            print(f"{key}: {summary['name']} (n={summary['dimension']}) - {summary['description']}")
        return EXIT_OK

    try:
        system, solver_config, report = _load_inputs(args)
    except (ValidationError, ValueError, KeyError, FileNotFoundError) as e:
        logger.error(f"Invalid input: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    run = run_comparison(system, solver_config, parallel=args.parallel)

    if args.json:
        output = run.to_dict()
        output['validation'] = {
            'condition_number': report.condition_number,
            'well_conditioned': report.well_conditioned,
            'warnings': report.warnings
        }
        print(json.dumps(output, indent=2))
    else:
        for warning in report.warnings:
            print(f"Warning: {warning}")
        print(format_run(run))

    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
