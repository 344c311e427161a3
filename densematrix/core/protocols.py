"""
Core protocols for densematrix.

These define the structural interface that collaborators rely on.
We use Protocol (structural typing) rather than ABC (nominal typing) so
that any object exposing the accessor contract can be read by the
library: copy constructors, wrap-around operands and rendering code
only ever call height, width and get().
"""

from typing import Protocol, TypeVar, Callable, runtime_checkable

E = TypeVar('E')  # Element type
E_co = TypeVar('E_co', covariant=True)

# Visitors and operators used throughout the traversal and apply family
IndexConsumer = Callable[[int, int], None]
IndexFunction = Callable[[int, int], E]


@runtime_checkable
class MatrixView(Protocol[E_co]):
    """
    Read-only accessor contract for a dense 2D matrix.

    This is everything an external collaborator (a renderer, a
    serializer, another matrix acting as an operand) may assume. It
    must not mutate the matrix through this interface.
    """

    @property
    def height(self) -> int:
        """Number of rows (immutable, >= 1)."""
        ...

    @property
    def width(self) -> int:
        """Number of columns (immutable, >= 1)."""
        ...

    def get(self, row: int, column: int) -> E_co:
        """
        Element at (row, column).

        Raises:
            MatrixIndexError: If either index is out of range
        """
        ...
