"""
Canonical row-major traversal.

Every ordered bulk operation (iteration, supplier-driven bulk set,
generator-driven bulk set, sequential for_each) visits cells in exactly
the order produced by row_major_indices(): row 0 columns 0..width-1,
then row 1, and so on. Callers may rely on the Nth element of two
matrices of equal shape referring to the same position.
"""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

from densematrix.core.exceptions import ExhaustedTraversalError
from densematrix.core.protocols import MatrixView

E = TypeVar('E')


def row_major_indices(height: int, width: int) -> Iterator[tuple[int, int]]:
    """Yield every (row, column) pair of a height x width matrix in row-major order."""
    for row in range(height):
        for column in range(width):
            yield row, column


class MatrixIterator(Generic[E]):
    """
    Single-pass, row-major iterator over the elements of a matrix.

    Not restartable: once every element has been produced, next() raises
    ExhaustedTraversalError. Ask the matrix for a fresh iterator to
    traverse it again.
    """

    def __init__(self, matrix: MatrixView[E]):
        self._matrix = matrix
        self._height = matrix.height
        self._width = matrix.width
        self._row = 0
        self._column = 0
        self._visited = 0

    def __iter__(self) -> MatrixIterator[E]:
        return self

    def has_next(self) -> bool:
        """True if at least one element remains."""
        return self._row < self._height and self._column < self._width

    def __next__(self) -> E:
        if not self.has_next():
            raise ExhaustedTraversalError(
                f"traversal exhausted after {self._visited} elements",
                visited=self._visited,
            )
        element = self._matrix.get(self._row, self._column)
        self._column += 1
        if self._column >= self._width:
            self._column = 0
            self._row += 1
        self._visited += 1
        return element

    def position(self) -> tuple[int, int]:
        """(row, column) of the element the next call to next() returns."""
        return self._row, self._column

    @property
    def visited(self) -> int:
        """Number of elements produced so far."""
        return self._visited

    def __length_hint__(self) -> int:
        return self._height * self._width - self._visited
