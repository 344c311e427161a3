"""
Parallel execution configuration.

Resolves how many worker threads a parallel matrix operation may use and
how small a chunk of cells is worth handing to a worker. Resolution
order: explicit keyword arguments, then environment variables, then
defaults derived from the host.

Environment variables:
    DENSEMATRIX_MAX_WORKERS: positive integer worker count
    DENSEMATRIX_MIN_CHUNK_SIZE: positive integer cell count
"""

import logging
import os
from dataclasses import dataclass
from typing import Literal

from densematrix.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

ENV_MAX_WORKERS = 'DENSEMATRIX_MAX_WORKERS'
ENV_MIN_CHUNK_SIZE = 'DENSEMATRIX_MIN_CHUNK_SIZE'

# Cells below which splitting stops and fan-out runs inline
DEFAULT_MIN_CHUNK_SIZE = 1024


@dataclass(frozen=True)
class ParallelConfig:
    """
    Resolved parallel execution settings.

    Attributes:
        max_workers: Upper bound on worker threads (1 means run inline)
        min_chunk_size: Smallest number of cells dispatched as one task
        source: Where max_workers came from
    """
    max_workers: int
    min_chunk_size: int
    source: Literal['explicit', 'environment', 'default']

    def __str__(self) -> str:
        return (
            f"ParallelConfig(max_workers={self.max_workers}, "
            f"min_chunk_size={self.min_chunk_size}, source={self.source})"
        )

    @property
    def is_parallel(self) -> bool:
        """True if more than one worker may be used."""
        return self.max_workers > 1


def cpu_count() -> int:
    """Number of usable CPUs, at least 1."""
    if hasattr(os, 'sched_getaffinity'):
        return max(1, len(os.sched_getaffinity(0)))
    return max(1, os.cpu_count() or 1)


def _positive_int(value, name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{name}: expected a positive integer, got bool {value!r}")
    try:
        result = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name}: expected a positive integer, got {value!r}") from e
    if isinstance(value, float) and value != result:
        raise ValidationError(f"{name}: expected a positive integer, got {value!r}")
    if result < 1:
        raise ValidationError(f"{name}: must be at least 1, got {result}")
    return result


def resolve_config(
    max_workers: int | None = None,
    min_chunk_size: int | None = None,
) -> ParallelConfig:
    """
    Resolve parallel settings.

    Args:
        max_workers: Explicit worker count, or None to consult the
            environment and then the CPU count
        min_chunk_size: Explicit chunk size, or None to consult the
            environment and then DEFAULT_MIN_CHUNK_SIZE

    Returns:
        ParallelConfig

    Raises:
        ValidationError: If an explicit or environment value is not a
            positive integer
    """
    if max_workers is not None:
        workers = _positive_int(max_workers, 'max_workers')
        source = 'explicit'
    elif os.environ.get(ENV_MAX_WORKERS):
        workers = _positive_int(os.environ[ENV_MAX_WORKERS], ENV_MAX_WORKERS)
        source = 'environment'
    else:
        workers = cpu_count()
        source = 'default'

    if min_chunk_size is not None:
        chunk = _positive_int(min_chunk_size, 'min_chunk_size')
    elif os.environ.get(ENV_MIN_CHUNK_SIZE):
        chunk = _positive_int(os.environ[ENV_MIN_CHUNK_SIZE], ENV_MIN_CHUNK_SIZE)
    else:
        chunk = DEFAULT_MIN_CHUNK_SIZE

    config = ParallelConfig(max_workers=workers, min_chunk_size=chunk, source=source)
    logger.debug("resolved %s", config)
    return config
