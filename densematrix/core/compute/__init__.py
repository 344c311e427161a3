"""
Shared compute infrastructure for densematrix.

IMPORTANT: This is NOT where matrix operations live. Those go in
densematrix.matrix. This module contains shared numeric and execution
infrastructure.

Submodules:
    precision: IEEE division and tolerance comparison
    workers: Parallel execution configuration
"""

from densematrix.core.compute.precision import (
    DEFAULT_ATOL,
    DEFAULT_RTOL,
    EPSILON_64,
    ieee_divide,
    is_close,
)
from densematrix.core.compute.workers import (
    ParallelConfig,
    cpu_count,
    resolve_config,
)

__all__ = [
    # Precision
    "DEFAULT_ATOL",
    "DEFAULT_RTOL",
    "EPSILON_64",
    "ieee_divide",
    "is_close",
    # Workers
    "ParallelConfig",
    "cpu_count",
    "resolve_config",
]
