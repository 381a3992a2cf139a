"""Timing and memory measurement for solver runs."""

import time
import psutil
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class Timer:
    """Simple timer for measuring elapsed time."""

    def __init__(self, name: str = "Timer"):
        """Initialize timer."""
        self.name = name
        self.start_time = None
        self.end_time = None
        self.elapsed_time = None

    def start(self) -> 'Timer':
        """Start the timer."""
        self.start_time = time.perf_counter()
        self.end_time = None
        self.elapsed_time = None
        return self

    def stop(self) -> float:
        """Stop the timer and return elapsed time in seconds."""
        if self.start_time is None:
            raise RuntimeError("Timer not started")

        self.end_time = time.perf_counter()
        self.elapsed_time = self.end_time - self.start_time
        return self.elapsed_time

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds."""
        if self.elapsed_time is None:
            raise RuntimeError("Timer not stopped")
        return self.elapsed_time * 1000.0

    def __enter__(self) -> 'Timer':
        """Enter context manager."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager."""
        self.stop()
        logger.debug(f"{self.name}: {self.elapsed_time * 1000:.3f} ms")


def current_memory_kb(process: Optional[psutil.Process] = None) -> float:
    """Resident set size of the process in kilobytes."""
    process = process or psutil.Process()
    return process.memory_info().rss / 1024.0


class ResourceMonitor:
    """
    Measure wall time and resident-memory change around a block.

    The memory delta is process-wide and coarse (page granularity), so it is
    reported as advisory telemetry only.
    """

    def __init__(self, name: str = "ResourceMonitor"):
        self.name = name
        self.timer = Timer(name)
        self._process = psutil.Process()
        self._memory_start = 0.0
        self.elapsed_ms = 0.0
        self.memory_delta_kb = 0.0

    def __enter__(self) -> 'ResourceMonitor':
        self._memory_start = current_memory_kb(self._process)
        self.timer.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.timer.stop()
        self.elapsed_ms = self.timer.elapsed_ms
        self.memory_delta_kb = current_memory_kb(self._process) - self._memory_start
        logger.debug(f"{self.name}: {self.elapsed_ms:.3f} ms, "
                     f"memory delta {self.memory_delta_kb:.1f} KB")
