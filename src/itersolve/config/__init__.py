"""Configuration management for the iterative solvers."""

from .settings import AppConfig, SolverConfig, LoggingConfig, SystemConfig

__all__ = ["AppConfig", "SolverConfig", "LoggingConfig", "SystemConfig"]
