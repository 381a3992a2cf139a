"""
Test Suite for the itersolve Iterative Solvers

Test Categories:
    - Unit tests: Individual component testing
    - Integration tests: End-to-end comparison runs and the command line
"""

import sys
from pathlib import Path

# Add src directory to path for imports
test_dir = Path(__file__).parent
src_dir = test_dir.parent / 'src'
sys.path.insert(0, str(src_dir))

# Test configuration
TEST_CONFIG = {
    'tolerance': 1e-4,
    'max_iterations': 200,
    'random_sizes': [2, 3, 5, 8, 12],
    'random_trials': 5
}


__all__ = ['TEST_CONFIG']
