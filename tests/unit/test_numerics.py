"""Unit tests for norms and structural matrix checks."""

import numpy as np
import pytest
import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from itersolve.core.norms import (
    relative_error, residual_norm, is_diagonally_dominant, is_symmetric, infinity_norm
)


class TestRelativeError:
    """Test cases for the relative-error stopping metric."""

    def test_known_value(self):
        """||[3,4] - [0,0]|| / ||[3,4]|| = 1."""
        assert relative_error([3.0, 4.0], [0.0, 0.0]) == pytest.approx(1.0)

    def test_partial_change(self):
        assert relative_error([3.0, 4.0], [3.0, 3.0]) == pytest.approx(0.2)

    def test_identical_iterates(self):
        assert relative_error([1.0, 2.0], [1.0, 2.0]) == 0.0

    def test_zero_new_iterate(self):
        """A zero-norm new iterate reports 0 instead of dividing by zero."""
        assert relative_error([0.0, 0.0], [5.0, 1.0]) == 0.0


class TestResidualNorm:
    """Test cases for ||Ax - b||."""

    def test_exact_solution(self):
        matrix = [[5.0, 1.0], [1.0, 3.0]]
        assert residual_norm(matrix, [11 / 7, 15 / 7], [10.0, 8.0]) == pytest.approx(0.0, abs=1e-12)

    def test_nonzero_residual(self):
        assert residual_norm(np.eye(2), [0.0, 0.0], [3.0, 4.0]) == pytest.approx(5.0)


class TestStructureChecks:
    """Test cases for dominance and symmetry checks."""

    def test_strictly_dominant(self):
        assert is_diagonally_dominant([[10, -1, 2], [-1, 11, -1], [2, -1, 10]])

    def test_equality_is_not_strict(self):
        """|a_ii| equal to the off-diagonal sum fails strict dominance."""
        assert not is_diagonally_dominant([[2, 2], [1, 3]])

    def test_negative_diagonal_uses_absolute_value(self):
        assert is_diagonally_dominant([[-5, 1], [1, -3]])

    def test_symmetric_within_tolerance(self):
        assert is_symmetric([[1.0, 2.0], [2.00005, 1.0]])

    def test_not_symmetric(self):
        assert not is_symmetric([[1, 2, 3], [4, 1, 2], [3, 4, 1]])

    def test_infinity_norm(self):
        assert infinity_norm([[1, -2], [-3, 4]]) == 7.0
