"""Unit tests for configuration loading and validation."""

import json

import numpy as np
import pytest
import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from itersolve.config import settings
from itersolve.config.settings import AppConfig, SolverConfig, LoggingConfig, SystemConfig
from itersolve.core import validation


YAML_CONFIG = """\
solver:
  tolerance: 1e-4
  max_iterations: 250
  initial_guess: [0.5, 0.5]
logging:
  level: DEBUG
system:
  name: from-yaml
  matrix:
    - [5, 1]
    - [1, 3]
  rhs: [10, 8]
"""


class TestSolverConfig:
    """Test cases for solver settings."""

    def test_defaults(self):
        config = SolverConfig()

        assert config.tolerance == 1e-4
        assert config.max_iterations == 100
        assert config.initial_guess is None
        assert np.array_equal(config.resolve_initial_guess(3), np.zeros(3))

    def test_string_tolerance_coerced(self):
        assert SolverConfig(tolerance="1e-6").tolerance == 1e-6

    def test_initial_guess_stored_as_tuple(self):
        config = SolverConfig(initial_guess=np.array([1, 2]))

        assert config.initial_guess == (1.0, 2.0)
        assert np.array_equal(config.resolve_initial_guess(2), [1.0, 2.0])

    @pytest.mark.parametrize("kwargs", [
        {"tolerance": 0.0},
        {"tolerance": 1.0},
        {"max_iterations": 0},
        {"max_iterations": 20000},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            SolverConfig(**kwargs).validate()

    def test_initial_guess_size_checked(self):
        with pytest.raises(ValueError):
            SolverConfig(initial_guess=[1.0]).validate(size=2)

    def test_iteration_ceiling_shared_with_validation(self):
        ceiling = validation.MAX_ITERATION_CEILING

        assert settings.MAX_ITERATION_CEILING is ceiling
        SolverConfig(max_iterations=ceiling).validate()
        with pytest.raises(ValueError):
            SolverConfig(max_iterations=ceiling + 1).validate()
        with pytest.raises(validation.ValidationError):
            validation.validate_parameters(1e-4, ceiling + 1)


class TestAppConfig:
    """Test cases for loading and saving complete configurations."""

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "run.yaml"
        path.write_text(YAML_CONFIG)

        config = AppConfig.from_yaml(path)

        assert config.solver.tolerance == 1e-4
        assert config.solver.max_iterations == 250
        assert config.solver.initial_guess == (0.5, 0.5)
        assert config.logging.level == "DEBUG"
        assert config.system.name == "from-yaml"
        assert config.system.matrix == [[5, 1], [1, 3]]

    def test_from_file_dispatches_on_suffix(self, tmp_path):
        path = tmp_path / "run.json"
        path.write_text(json.dumps({"solver": {"tolerance": 0.001, "max_iterations": 10}}))

        config = AppConfig.from_file(path)

        assert config.solver.tolerance == 0.001
        assert config.system is None

    def test_yaml_round_trip(self, tmp_path):
        original = AppConfig(
            solver=SolverConfig(tolerance=1e-5, max_iterations=300, initial_guess=[1.0, 2.0]),
            system=SystemConfig(matrix=[[4.0, 1.0], [1.0, 3.0]], rhs=[1.0, 2.0], name="pair")
        )
        path = tmp_path / "nested" / "saved.yaml"
        original.to_yaml(path)

        loaded = AppConfig.from_yaml(path)

        assert loaded.to_dict() == original.to_dict()

    def test_json_round_trip(self, tmp_path):
        original = AppConfig(solver=SolverConfig(tolerance=1e-8, max_iterations=10000))
        path = tmp_path / "saved.json"
        original.to_json(path)

        loaded = AppConfig.from_json(path)

        assert loaded.solver == original.solver

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.from_file(tmp_path / "absent.yaml")

    def test_invalid_file_contents(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("solver:\n  tolerance: 2.0\n")

        with pytest.raises(ValueError):
            AppConfig.from_yaml(path)

    def test_unknown_key_reported_with_path(self, tmp_path):
        path = tmp_path / "typo.yaml"
        path.write_text("solver:\n  tol: 0.001\n")

        with pytest.raises(ValueError, match="typo.yaml"):
            AppConfig.from_yaml(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("solver: [unclosed\n")

        with pytest.raises(ValueError, match="Malformed YAML"):
            AppConfig.from_yaml(path)

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('{"solver": ')

        with pytest.raises(ValueError, match="Malformed JSON"):
            AppConfig.from_json(path)

    def test_non_mapping_top_level(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ValueError, match="mapping"):
            AppConfig.from_yaml(path)
        with pytest.raises(ValueError):
            AppConfig.from_dict([1, 2])

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert AppConfig.from_yaml(path).solver == SolverConfig()

    def test_empty_system_rejected(self):
        config = AppConfig(system=SystemConfig())

        with pytest.raises(ValueError):
            config.validate()

    def test_invalid_logging_level(self):
        with pytest.raises(ValueError):
            LoggingConfig(level="LOUD").validate()

    def test_defaults_and_str(self):
        config = AppConfig()

        assert config.solver == SolverConfig()
        assert str(config) == "AppConfig(tol=0.0001, max_iter=100)"
