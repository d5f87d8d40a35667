"""
featkit Config - Strategy Configuration System

Two configuration sections control computation without changing function
signatures:

    - parallel: row-parallel execution of the KNN imputer
    - compute:  numeric conventions of the column statistics (ddof)

Each section has a global value and an optional per-thread override set by
``config.local(...)``. Overrides nest: leaving an inner block restores the
override of the enclosing block.
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Optional

from featkit.error import InvalidParameterError


# =============================================================================
# Strategy Enumerations
# =============================================================================

class ParallelStrategy(IntEnum):
    """
    Strategy for row-parallel execution.
    """
    AUTO = 0           # Parallel only for large matrices
    SEQUENTIAL = 1     # Force sequential execution
    PARALLEL = 2       # Force parallel execution


def _env_num_threads() -> int:
    value = os.environ.get("FEATKIT_NUM_THREADS", "")
    try:
        return max(int(value), 0)
    except ValueError:
        return 0


# =============================================================================
# Configuration Sections
# =============================================================================

@dataclass
class ParallelConfig:
    """Configuration for row-parallel imputation."""
    strategy: ParallelStrategy = ParallelStrategy.SEQUENTIAL
    num_threads: int = field(default_factory=_env_num_threads)  # 0 = auto-detect
    min_rows_per_thread: int = 256

    def resolve_workers(self) -> int:
        """Number of worker threads this configuration asks for."""
        if self.num_threads > 0:
            return self.num_threads
        return os.cpu_count() or 1

    def use_parallel(self, n_rows: int) -> bool:
        """Whether a matrix with ``n_rows`` rows runs in parallel mode."""
        if self.strategy == ParallelStrategy.SEQUENTIAL:
            return False
        if self.strategy == ParallelStrategy.PARALLEL:
            return True
        return self.resolve_workers() > 1 and n_rows >= 2 * self.min_rows_per_thread


@dataclass
class ComputeConfig:
    """Configuration for column statistics."""
    ddof: int = 1                  # 1 = sample standard deviation

    def __post_init__(self):
        if self.ddof < 0:
            raise InvalidParameterError(f"ddof must be non-negative, got {self.ddof}")


# =============================================================================
# Configuration Manager
# =============================================================================

class FeatkitConfig:
    """
    Global configuration with thread-local overrides.

    Example:
        # Global configuration
        featkit.config.parallel = ParallelConfig(strategy=ParallelStrategy.PARALLEL)

        # Local configuration (context manager)
        with featkit.config.local(compute=ComputeConfig(ddof=0)):
            scores = featkit.signal_noise_ratio(x, y)
        # Back to global config
    """

    _SECTIONS = ("parallel", "compute")

    def __init__(self):
        self._global_parallel = ParallelConfig()
        self._global_compute = ComputeConfig()
        self._local = threading.local()

    @property
    def parallel(self) -> ParallelConfig:
        """Parallel section in effect for the calling thread."""
        local = getattr(self._local, "parallel", None)
        return self._global_parallel if local is None else local

    @parallel.setter
    def parallel(self, value: ParallelConfig):
        self._global_parallel = value

    @property
    def compute(self) -> ComputeConfig:
        """Compute section in effect for the calling thread."""
        local = getattr(self._local, "compute", None)
        return self._global_compute if local is None else local

    @compute.setter
    def compute(self, value: ComputeConfig):
        self._global_compute = value

    def local(self, **kwargs) -> "_LocalConfigContext":
        """
        Create a local configuration context for the calling thread.

        Args:
            **kwargs: Section overrides (parallel, compute)

        Returns:
            Context manager

        Raises:
            TypeError: If an unknown configuration section is given.
        """
        unknown = set(kwargs) - set(self._SECTIONS)
        if unknown:
            raise TypeError(f"Unknown configuration section(s): {sorted(unknown)}")
        return _LocalConfigContext(self, kwargs)

    def _swap_local(self, values: Dict[str, Optional[object]]) -> Dict[str, Optional[object]]:
        """Install thread-local values and return the ones they replace."""
        previous = {}
        for key, value in values.items():
            previous[key] = getattr(self._local, key, None)
            setattr(self._local, key, value)
        return previous

    def reset(self):
        """Restore the default global sections.

        Also drops the calling thread's local overrides; an enclosing
        ``local()`` block still restores its own values when it exits.
        """
        self._global_parallel = ParallelConfig()
        self._global_compute = ComputeConfig()
        self._swap_local({key: None for key in self._SECTIONS})


class _LocalConfigContext:
    """Context manager for local configuration override."""

    def __init__(self, config: FeatkitConfig, overrides: Dict[str, object]):
        self._config = config
        self._overrides = overrides
        self._saved: Optional[Dict[str, Optional[object]]] = None

    def __enter__(self):
        self._saved = self._config._swap_local(self._overrides)
        return self._config

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._config._swap_local(self._saved)
        self._saved = None
        return False


# =============================================================================
# Global Instance
# =============================================================================

config = FeatkitConfig()


def get_config() -> FeatkitConfig:
    """Get the global configuration instance."""
    return config


def set_parallel(
    num_threads: int = 0,
    strategy: ParallelStrategy = ParallelStrategy.AUTO,
    min_rows_per_thread: int = 256,
):
    """
    Configure row-parallel imputation.

    Args:
        num_threads: Number of threads (0 = auto)
        strategy: Parallel strategy
        min_rows_per_thread: Row count per thread before AUTO goes parallel
    """
    config.parallel = ParallelConfig(
        strategy=strategy,
        num_threads=num_threads,
        min_rows_per_thread=min_rows_per_thread,
    )


def set_ddof(ddof: int = 1):
    """
    Set the delta degrees of freedom for standard deviations.

    Args:
        ddof: 1 for the sample standard deviation, 0 for the population one

    Raises:
        InvalidParameterError: If ddof is negative.
    """
    config.compute = ComputeConfig(ddof=ddof)


__all__ = [
    "ParallelStrategy",
    "ParallelConfig",
    "ComputeConfig",
    "FeatkitConfig",
    "config",
    "get_config",
    "set_parallel",
    "set_ddof",
]
