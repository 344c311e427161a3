"""
Data-parallel fan-out over a matrix's index space.

Two strategies:
    for_each_indices_parallel: one task per contiguous row-major span of
        at least min_chunk_size cells. Used by parallel bulk set and the
        parallel apply family.
    for_each_split: recursive bisection of a SplittableRange, one task
        per leaf. Used by parallel for_each.

No locking is done. Callers guarantee that each (row, column) cell is
written by at most one task per operation. The first exception raised
by any task is re-raised on the calling thread after pending tasks are
cancelled.
"""

from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from functools import partial
from typing import Callable, TypeVar

from densematrix.core.compute.workers import resolve_config
from densematrix.core.protocols import IndexConsumer
from densematrix.matrix.spliterator import SplittableRange
from densematrix.matrix.traversal import row_major_indices

logger = logging.getLogger(__name__)

E = TypeVar('E')

# Leaves per worker when splitting, so uneven visitors still balance
_LEAVES_PER_WORKER = 4


def split_to_leaves(
    spliterator: SplittableRange[E],
    min_chunk_size: int = 1,
) -> list[SplittableRange[E]]:
    """
    Recursively split a range until every piece holds at most
    min_chunk_size elements or cannot be split further.

    Returns:
        Leaves in increasing linear-index order. Together they cover the
        original range exactly once.
    """
    leaves: list[SplittableRange[E]] = []
    stack = [spliterator]
    while stack:
        current = stack.pop()
        if current.estimate_remaining() > min_chunk_size:
            later = current.try_split()
            if later is not None:
                # earlier half is popped first
                stack.append(later)
                stack.append(current)
                continue
        leaves.append(current)
    return leaves


def _run_tasks(tasks: list[Callable[[], None]], max_workers: int, label: str) -> None:
    if max_workers <= 1 or len(tasks) <= 1:
        logger.debug("%s: running %d task(s) inline", label, len(tasks))
        for task in tasks:
            task()
        return

    workers = min(max_workers, len(tasks))
    logger.debug("%s: dispatching %d tasks to %d workers", label, len(tasks), workers)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix='densematrix') as pool:
        futures = [pool.submit(task) for task in tasks]
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        for future in pending:
            future.cancel()
        for future in futures:
            if future in done and future.exception() is not None:
                raise future.exception()


def _visit_span(consumer: IndexConsumer, width: int, start: int, stop: int) -> None:
    row, column = divmod(start, width)
    for _ in range(start, stop):
        consumer(row, column)
        column += 1
        if column == width:
            row += 1
            column = 0


def for_each_indices_parallel(
    height: int,
    width: int,
    consumer: IndexConsumer,
    *,
    max_workers: int | None = None,
    min_chunk_size: int | None = None,
) -> None:
    """
    Call consumer(row, column) once for every cell, in no particular order.

    Runs inline, in row-major order, when only one worker is configured
    or the matrix has no more than min_chunk_size cells.
    """
    config = resolve_config(max_workers, min_chunk_size)
    if not config.is_parallel or height * width <= config.min_chunk_size:
        logger.debug(
            "for_each_indices_parallel: %dx%d runs inline (%s)", height, width, config
        )
        for row, column in row_major_indices(height, width):
            consumer(row, column)
        return

    total = height * width
    span = max(config.min_chunk_size, -(-total // (config.max_workers * _LEAVES_PER_WORKER)))
    tasks = [
        partial(_visit_span, consumer, width, start, min(start + span, total))
        for start in range(0, total, span)
    ]
    _run_tasks(tasks, config.max_workers, 'for_each_indices_parallel')


def for_each_split(
    spliterator: SplittableRange[E],
    visitor: Callable[[E], object],
    *,
    max_workers: int | None = None,
    min_chunk_size: int | None = None,
) -> None:
    """
    Visit every remaining element of a range, splitting it across workers.

    Each leaf is consumed in row-major order by a single worker; there is
    no ordering between leaves.
    """
    config = resolve_config(max_workers, min_chunk_size)
    remaining = spliterator.estimate_remaining()
    if not config.is_parallel or remaining <= config.min_chunk_size:
        logger.debug("for_each_split: %d elements run inline (%s)", remaining, config)
        spliterator.for_each_remaining(visitor)
        return

    target = max(
        config.min_chunk_size,
        -(-remaining // (config.max_workers * _LEAVES_PER_WORKER)),
    )
    leaves = split_to_leaves(spliterator, target)
    tasks = [partial(leaf.for_each_remaining, visitor) for leaf in leaves]
    _run_tasks(tasks, config.max_workers, 'for_each_split')
