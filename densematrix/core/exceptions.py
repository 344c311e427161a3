"""
Exception hierarchy for densematrix.

All exceptions inherit from DenseMatrixError to allow catching any
library-specific error. Where a builtin exception already names the
failure (IndexError, StopIteration) the library exception also inherits
from it, so generic Python code keeps working.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class DenseMatrixError(Exception):
    """Base exception for all densematrix errors."""
    pass


class ValidationError(DenseMatrixError):
    """
    Input validation failed.

    Raised when user-provided arguments (dimensions, literal arrays,
    operators, configuration values) fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Matrix dimensions are incompatible with the requested operation.

    Raised eagerly, before any cell is written, when a same-size
    element-wise operation or a matrix product receives an operand of the
    wrong shape.

    Attributes:
        expected: Shape the operation required, as (height, width)
        actual: Shape that was supplied, as (height, width)
    """

    def __init__(
        self,
        message: str,
        expected: tuple[int, int] | None = None,
        actual: tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class MatrixIndexError(ValidationError, IndexError):
    """
    Row or column index is outside the matrix.

    Also an IndexError, so callers written against the builtin keep working.

    Attributes:
        row: Requested row index
        column: Requested column index
        shape: Matrix shape as (height, width)
    """

    def __init__(
        self,
        message: str,
        row: int | None = None,
        column: int | None = None,
        shape: tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.row = row
        self.column = column
        self.shape = shape


class ExhaustedTraversalError(DenseMatrixError, StopIteration):
    """
    A traversal was asked for an element after visiting every cell.

    Subclasses StopIteration so that ``for`` loops and ``list()`` end
    normally on a MatrixIterator.

    Attributes:
        visited: Number of elements the traversal produced
    """

    def __init__(self, message: str, visited: int | None = None):
        super().__init__(message)
        self.visited = visited
