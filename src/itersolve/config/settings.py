"""Configuration classes for solver settings."""

import json
import yaml
import numpy as np
from dataclasses import dataclass, asdict, field
from typing import Dict, Any, Optional, Tuple, Union, List
from pathlib import Path
import logging

from ..core.validation import MAX_ITERATION_CEILING

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1e-4
DEFAULT_MAX_ITERATIONS = 100


@dataclass(frozen=True)
class SolverConfig:
    """Configuration shared by the Jacobi and Gauss-Seidel solvers."""
    tolerance: float = DEFAULT_TOLERANCE
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    initial_guess: Optional[Tuple[float, ...]] = None

    def __post_init__(self):
        # PyYAML reads "1e-4" as a string
        object.__setattr__(self, 'tolerance', float(self.tolerance))
        if self.initial_guess is not None:
            guess = tuple(float(v) for v in np.ravel(self.initial_guess))
            object.__setattr__(self, 'initial_guess', guess)

    def validate(self, size: Optional[int] = None) -> None:
        """Validate solver configuration."""
        if not 0 < self.tolerance < 1:
            raise ValueError(f"Tolerance must lie in (0, 1), got {self.tolerance}")

        if (isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, int)
                or not 1 <= self.max_iterations <= MAX_ITERATION_CEILING):
            raise ValueError(
                f"Max iterations must be an integer in [1, {MAX_ITERATION_CEILING}]"
            )

        if size is not None and self.initial_guess is not None and len(self.initial_guess) != size:
            raise ValueError(
                f"Initial guess has {len(self.initial_guess)} entries, system has {size} unknowns"
            )

    def resolve_initial_guess(self, size: int) -> np.ndarray:
        """Return a fresh starting iterate; the zero vector when none was given."""
        if self.initial_guess is None:
            return np.zeros(size, dtype=np.float64)

        if len(self.initial_guess) != size:
            raise ValueError(
                f"Initial guess has {len(self.initial_guess)} entries, system has {size} unknowns"
            )
        return np.array(self.initial_guess, dtype=np.float64)


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_output: Optional[str] = None
    console_output: bool = True
    colored_console: bool = False

    def validate(self) -> None:
        """Validate logging configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if str(self.level).upper() not in valid_levels:
            raise ValueError(f"Invalid logging level: {self.level}")


@dataclass
class SystemConfig:
    """Linear system given inline in a configuration file."""
    matrix: List[List[float]] = field(default_factory=list)
    rhs: List[float] = field(default_factory=list)
    name: Optional[str] = None

    def validate(self) -> None:
        """Validate that a system was actually provided."""
        if not self.matrix or not self.rhs:
            raise ValueError("System configuration requires both 'matrix' and 'rhs'")


@dataclass
class AppConfig:
    """Complete configuration for a comparison run."""
    solver: SolverConfig = None
    logging: LoggingConfig = None
    system: Optional[SystemConfig] = None

    def __post_init__(self):
        """Initialize default configurations if not provided."""
        if self.solver is None:
            self.solver = SolverConfig()
        if self.logging is None:
            self.logging = LoggingConfig()

    def validate(self) -> None:
        """Validate complete configuration."""
        size = len(self.system.rhs) if self.system is not None else None
        self.solver.validate(size)
        self.logging.validate()
        if self.system is not None:
            self.system.validate()

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'AppConfig':
        """
        Create configuration from dictionary.

        Raises:
            ValueError: If the input is not a mapping or a section holds
                unknown keys
        """
        if not isinstance(config_dict, dict):
            raise ValueError(
                f"Configuration must be a mapping, got {type(config_dict).__name__}"
            )

        config = cls()

        try:
            if config_dict.get('solver'):
                config.solver = SolverConfig(**config_dict['solver'])

            if config_dict.get('logging'):
                config.logging = LoggingConfig(**config_dict['logging'])

            if config_dict.get('system'):
                config.system = SystemConfig(**config_dict['system'])
        except TypeError as e:
            raise ValueError(f"Invalid configuration section: {e}") from e

        return config

    @classmethod
    def _from_loaded(cls, config_dict: Any, path: Path) -> 'AppConfig':
        """Build and validate a configuration parsed from ``path``."""
        try:
            config = cls.from_dict({} if config_dict is None else config_dict)
            config.validate()
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid configuration file {path}: {e}") from e

        logger.info(f"Loaded configuration from {path}")
        return config

    @classmethod
    def from_json(cls, json_path: Union[str, Path]) -> 'AppConfig':
        """Load configuration from JSON file."""
        json_path = Path(json_path)

        if not json_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {json_path}")

        with open(json_path, 'r') as f:
            try:
                config_dict = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Malformed JSON in {json_path}: {e}") from e

        return cls._from_loaded(config_dict, json_path)

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> 'AppConfig':
        """Load configuration from YAML file."""
        yaml_path = Path(yaml_path)

        if not yaml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        with open(yaml_path, 'r') as f:
            try:
                config_dict = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Malformed YAML in {yaml_path}: {e}") from e

        return cls._from_loaded(config_dict, yaml_path)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'AppConfig':
        """Load configuration, choosing the parser from the file suffix."""
        path = Path(path)
        if path.suffix.lower() == '.json':
            return cls.from_json(path)
        return cls.from_yaml(path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        solver = asdict(self.solver)
        if solver['initial_guess'] is not None:
            solver['initial_guess'] = list(solver['initial_guess'])

        config_dict = {
            'solver': solver,
            'logging': asdict(self.logging)
        }
        if self.system is not None:
            config_dict['system'] = asdict(self.system)
        return config_dict

    def to_json(self, json_path: Union[str, Path], indent: int = 2) -> None:
        """Save configuration to JSON file."""
        json_path = Path(json_path)
        json_path.parent.mkdir(parents=True, exist_ok=True)

        with open(json_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=indent)

        logger.info(f"Saved configuration to {json_path}")

    def to_yaml(self, yaml_path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        yaml_path = Path(yaml_path)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)

        with open(yaml_path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, indent=2)

        logger.info(f"Saved configuration to {yaml_path}")

    def setup_logging(self) -> None:
        """Setup logging based on configuration."""
        from ..utils.logging_utils import setup_logging

        numeric_level = getattr(logging, self.logging.level.upper(), None)
        if not isinstance(numeric_level, int):
            raise ValueError(f'Invalid log level: {self.logging.level}')

        setup_logging(
            level=numeric_level,
            format_string=self.logging.format,
            log_file=self.logging.file_output,
            console_output=self.logging.console_output,
            colored_console=self.logging.colored_console
        )

    def __str__(self) -> str:
        """String representation of configuration."""
        system = f", system=n{len(self.system.rhs)}" if self.system is not None else ""
        return (f"AppConfig(tol={self.solver.tolerance}, "
                f"max_iter={self.solver.max_iterations}{system})")
