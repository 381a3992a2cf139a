"""Core data structures and numeric primitives."""

from .norms import (
    relative_error, residual_norm, is_diagonally_dominant, is_symmetric, infinity_norm
)
from .system import LinearSystem
from .validation import ValidationError, ValidationReport, validate_system

__all__ = [
    "relative_error",
    "residual_norm",
    "is_diagonally_dominant",
    "is_symmetric",
    "infinity_norm",
    "LinearSystem",
    "ValidationError",
    "ValidationReport",
    "validate_system"
]
