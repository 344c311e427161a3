"""
SplittableRange: a bisectable span of a matrix's row-major index space.

A range covers the half-open linear interval [current, fence). Consuming
it advances current; splitting it hands the later half to a new range
and shrinks this one's fence, so the caller keeps working on the earlier
half. Recursive splitting yields disjoint contiguous chunks that can be
consumed independently while each chunk stays in row-major order.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterator, TypeVar

from densematrix.core.exceptions import ValidationError
from densematrix.core.protocols import MatrixView
from densematrix.matrix._common import linear_index, to_position

E = TypeVar('E')


class SplittableRange(Generic[E]):
    """
    Contiguous, splittable sub-range of a matrix's elements.

    Args:
        matrix: Matrix whose elements are visited
        start: First linear index covered (default 0)
        fence: One past the last linear index covered
            (default height * width)

    Raises:
        ValidationError: If 0 <= start <= fence <= height * width does not hold
    """

    def __init__(
        self,
        matrix: MatrixView[E],
        start: int = 0,
        fence: int | None = None,
    ):
        size = matrix.height * matrix.width
        if fence is None:
            fence = size
        if not 0 <= start <= fence <= size:
            raise ValidationError(
                f"range [{start}, {fence}) is not within [0, {size})"
            )
        self._matrix = matrix
        self._width = matrix.width
        self._current = start
        self._fence = fence

    @property
    def matrix(self) -> MatrixView[E]:
        return self._matrix

    @property
    def current(self) -> int:
        """Linear index of the next element to visit."""
        return self._current

    @property
    def fence(self) -> int:
        """One past the last linear index of this range."""
        return self._fence

    def to_linear(self, row: int, column: int) -> int:
        return linear_index(row, column, self._width)

    def to_position(self, index: int) -> tuple[int, int]:
        return to_position(index, self._width)

    def position(self) -> tuple[int, int]:
        """(row, column) of the next element to visit."""
        return self.to_position(self._current)

    def estimate_remaining(self) -> int:
        """Number of elements not yet consumed. Exact, not an estimate."""
        return self._fence - self._current

    def try_advance(self, visitor: Callable[[E], object]) -> bool:
        """
        Visit the next element, if any.

        Returns:
            True if an element was passed to visitor, False if the range
            was already exhausted (visitor is not called)
        """
        if self._current >= self._fence:
            return False
        row, column = self.to_position(self._current)
        element = self._matrix.get(row, column)
        self._current += 1
        visitor(element)
        return True

    def for_each_remaining(self, visitor: Callable[[E], object]) -> None:
        """Visit every remaining element in row-major order."""
        while self.try_advance(visitor):
            pass

    def try_split(self) -> SplittableRange[E] | None:
        """
        Split off the later half of this range.

        The returned range covers [mid, fence) and this range shrinks to
        [current, mid). Returns None when fewer than two elements remain.
        """
        mid = (self._current + self._fence) >> 1
        if self._current < mid < self._fence:
            later = SplittableRange(self._matrix, mid, self._fence)
            self._fence = mid
            return later
        return None

    def __iter__(self) -> Iterator[E]:
        """Lazily consume the remaining elements."""
        while self._current < self._fence:
            row, column = self.to_position(self._current)
            self._current += 1
            yield self._matrix.get(row, column)

    def __repr__(self) -> str:
        return f"SplittableRange(current={self._current}, fence={self._fence})"
