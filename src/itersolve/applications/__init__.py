"""Example systems and end-to-end comparison runs."""

from .test_problems import (
    ExampleSystem, get_example_systems, get_example_system, describe_example_systems
)
from .comparison_run import ComparisonRun, run_comparison

__all__ = [
    "ExampleSystem",
    "get_example_systems",
    "get_example_system",
    "describe_example_systems",
    "ComparisonRun",
    "run_comparison"
]
