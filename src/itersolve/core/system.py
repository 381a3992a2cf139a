"""Linear system container."""

import numpy as np
from dataclasses import dataclass, field
from typing import Optional
import logging

from .norms import ArrayLike, is_diagonally_dominant, is_symmetric

logger = logging.getLogger(__name__)


def _read_only(values: ArrayLike, ndim: int, name: str) -> np.ndarray:
    """Copy values into a float64 array that cannot be written to."""
    array = np.array(values, dtype=np.float64, copy=True)
    if array.ndim != ndim:
        raise ValueError(f"{name} must be {ndim}-dimensional, got shape {array.shape}")
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class LinearSystem:
    """
    Immutable linear system Ax = b.

    The matrix is assumed square with a non-zero diagonal; see
    ``itersolve.core.validation`` for the checks that establish this.
    """
    matrix: np.ndarray
    rhs: np.ndarray
    name: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'matrix', _read_only(self.matrix, 2, "matrix"))
        object.__setattr__(self, 'rhs', _read_only(self.rhs, 1, "rhs"))

    @property
    def size(self) -> int:
        """Number of unknowns n."""
        return self.rhs.shape[0]

    @property
    def diagonal(self) -> np.ndarray:
        """Diagonal entries a_ii."""
        return np.diag(self.matrix)

    def is_diagonally_dominant(self) -> bool:
        return is_diagonally_dominant(self.matrix)

    def is_symmetric(self) -> bool:
        return is_symmetric(self.matrix)

    def __repr__(self) -> str:
        label = f"'{self.name}', " if self.name else ""
        return f"LinearSystem({label}n={self.size})"
