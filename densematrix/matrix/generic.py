"""
GenericMatrix: fixed-size dense 2D container of arbitrary elements.

Storage is a height x width numpy buffer in row-major (C) order. The
dimensions never change after construction; only cell contents do.

Bulk writes (bulk set, in-place apply) are transactional: new values
are computed into a fresh buffer, and the matrix adopts it only after
every cell was produced. If an operator raises midway, the matrix is
left exactly as it was.

The float64 specialization (densematrix.matrix.numeric.Matrix) reuses
everything here and only changes the buffer dtype, element coercion and
adds arithmetic.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

import numpy as np
from numpy.typing import NDArray

from densematrix.core.exceptions import MatrixIndexError
from densematrix.core.protocols import IndexConsumer, IndexFunction, MatrixView
from densematrix.core.validation import (
    check_callable,
    check_dimension,
    check_index,
    check_matrix_view,
    check_rectangular,
    check_same_shape,
)
from densematrix.matrix._common import wrap_position, wrapped_shape
from densematrix.matrix.parallel import for_each_indices_parallel, for_each_split
from densematrix.matrix.spliterator import SplittableRange
from densematrix.matrix.traversal import MatrixIterator, row_major_indices

E = TypeVar('E')


def _unbox(value: Any) -> Any:
    """numpy scalar -> Python scalar; anything else unchanged."""
    if isinstance(value, np.generic):
        return value.item()
    return value


class GenericMatrix(Generic[E]):
    """
    Dense height x width matrix of arbitrary elements.

    Cells start as None until set. Construct with one of:
        GenericMatrix(height, width)
        GenericMatrix.from_array(rows)
        GenericMatrix.filled(height, width, value)
        GenericMatrix.from_supplier(height, width, supplier)
        GenericMatrix.from_function(height, width, function)
        GenericMatrix.from_matrix(other)

    Not safe for unrelated concurrent calls; parallel methods are safe
    because each writes every cell exactly once.
    """

    _dtype: Any = object
    _fill_value: Any = None

    __hash__ = None  # mutable

    def __init__(self, height: int, width: int):
        self._height = check_dimension(height, 'height')
        self._width = check_dimension(width, 'width')
        self._data = self._allocate(self._height, self._width)

    # ─── storage ─────────────────────────────────────────────────────

    @classmethod
    def _allocate(cls, height: int, width: int) -> NDArray[Any]:
        return np.full((height, width), cls._fill_value, dtype=cls._dtype)

    @classmethod
    def _from_buffer(cls, buffer: NDArray[Any]) -> GenericMatrix[E]:
        matrix = cls.__new__(cls)
        matrix._height, matrix._width = buffer.shape
        matrix._data = buffer
        return matrix

    @staticmethod
    def _coerce(value: Any) -> Any:
        """Convert a value before it is stored."""
        return value

    def _read(self, row: int, column: int) -> E:
        """Unchecked element read."""
        return self._data[row, column]

    def _build(self, height: int, width: int, function: IndexFunction) -> NDArray[Any]:
        buffer = self._allocate(height, width)
        coerce = self._coerce
        for row, column in row_major_indices(height, width):
            buffer[row, column] = coerce(function(row, column))
        return buffer

    def _build_parallel(
        self,
        height: int,
        width: int,
        function: IndexFunction,
        max_workers: int | None,
        min_chunk_size: int | None,
    ) -> NDArray[Any]:
        buffer = self._allocate(height, width)
        coerce = self._coerce

        def write(row: int, column: int) -> None:
            buffer[row, column] = coerce(function(row, column))

        for_each_indices_parallel(
            height, width, write,
            max_workers=max_workers, min_chunk_size=min_chunk_size,
        )
        return buffer

    # ─── construction ────────────────────────────────────────────────

    @classmethod
    def from_array(cls, rows) -> GenericMatrix[E]:
        """
        Build a matrix from a 2D literal array.

        Parameters
        ----------
        rows : sequence of sequences or 2-D numpy array
            Row-major literal. Copied element by element, never aliased.
        """
        height, width = check_rectangular(rows, 'rows')
        if isinstance(rows, np.ndarray):
            return cls.from_function(height, width, lambda r, c: _unbox(rows[r, c]))
        return cls.from_function(height, width, lambda r, c: rows[r][c])

    @classmethod
    def filled(cls, height: int, width: int, value: E) -> GenericMatrix[E]:
        """Matrix with every cell set to value."""
        matrix = cls(height, width)
        matrix.fill(value)
        return matrix

    @classmethod
    def from_supplier(
        cls,
        height: int,
        width: int,
        supplier: Callable[[], E],
    ) -> GenericMatrix[E]:
        """Matrix filled by calling supplier() once per cell, in row-major order."""
        matrix = cls(height, width)
        matrix.set_from_supplier(supplier)
        return matrix

    @classmethod
    def from_function(
        cls,
        height: int,
        width: int,
        function: IndexFunction,
        *,
        parallel: bool = False,
        max_workers: int | None = None,
        min_chunk_size: int | None = None,
    ) -> GenericMatrix[E]:
        """
        Matrix whose (row, column) cell is function(row, column).

        Calls happen in row-major order unless parallel=True, in which
        case the order is unspecified.
        """
        matrix = cls(height, width)
        if parallel:
            matrix.set_parallel(
                function, max_workers=max_workers, min_chunk_size=min_chunk_size
            )
        else:
            matrix.set_from_function(function)
        return matrix

    @classmethod
    def from_matrix(cls, other: MatrixView[E]) -> GenericMatrix[E]:
        """Independent copy of any matrix exposing height, width and get()."""
        check_matrix_view(other, 'other')
        matrix = cls(other.height, other.width)
        matrix.set_from_matrix(other)
        return matrix

    def copy(self) -> GenericMatrix[E]:
        """
        Copy with its own storage.

        Cells of the copy reference the same element objects; mutating a
        cell of either matrix never affects the other.
        """
        return type(self).from_matrix(self)

    # ─── accessors ───────────────────────────────────────────────────

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def shape(self) -> tuple[int, int]:
        """(height, width)."""
        return self._height, self._width

    @property
    def size(self) -> int:
        """Number of cells."""
        return self._height * self._width

    def get(self, row: int, column: int) -> E:
        """
        Element at (row, column).

        Raises:
            MatrixIndexError: If row is outside [0, height) or column is
                outside [0, width). Negative indices are out of range.
        """
        row, column = check_index(row, column, self._height, self._width)
        return self._read(row, column)

    def set(self, row: int, column: int, value: E) -> E:
        """
        Replace the element at (row, column).

        Returns:
            The previous element

        Raises:
            MatrixIndexError: If either index is out of range
        """
        row, column = check_index(row, column, self._height, self._width)
        previous = self._read(row, column)
        self._data[row, column] = self._coerce(value)
        return previous

    def _split_key(self, key) -> tuple[int, int]:
        if not isinstance(key, tuple) or len(key) != 2:
            raise MatrixIndexError(
                f"expected a (row, column) pair, got {key!r}", shape=self.shape
            )
        return key

    def __getitem__(self, key) -> E:
        row, column = self._split_key(key)
        return self.get(row, column)

    def __setitem__(self, key, value: E) -> None:
        row, column = self._split_key(key)
        self.set(row, column, value)

    def to_array(self) -> NDArray[Any]:
        """Independent numpy copy of the storage."""
        return self._data.copy()

    def to_list(self) -> list[list[E]]:
        """Independent nested lists, one per row."""
        return [
            [self._read(row, column) for column in range(self._width)]
            for row in range(self._height)
        ]

    # ─── bulk set ────────────────────────────────────────────────────

    def fill(
        self,
        value: E,
        *,
        max_workers: int | None = None,
        min_chunk_size: int | None = None,
    ) -> None:
        """Set every cell to value."""
        self.set_parallel(
            lambda row, column: value,
            max_workers=max_workers, min_chunk_size=min_chunk_size,
        )

    def set_from_supplier(self, supplier: Callable[[], E]) -> None:
        """Set every cell to supplier(), called in row-major order."""
        check_callable(supplier, 'supplier')
        self._data = self._build(self._height, self._width, lambda row, column: supplier())

    def set_from_function(self, function: IndexFunction) -> None:
        """Set every cell to function(row, column), called in row-major order."""
        check_callable(function, 'function')
        self._data = self._build(self._height, self._width, function)

    def set_parallel(
        self,
        function: IndexFunction,
        *,
        max_workers: int | None = None,
        min_chunk_size: int | None = None,
    ) -> None:
        """Set every cell to function(row, column), called in unspecified order."""
        check_callable(function, 'function')
        self._data = self._build_parallel(
            self._height, self._width, function, max_workers, min_chunk_size
        )

    def set_from_matrix(
        self,
        other: MatrixView[E],
        *,
        max_workers: int | None = None,
        min_chunk_size: int | None = None,
    ) -> None:
        """
        Copy every cell of other into this matrix.

        Raises:
            DimensionError: If other has a different shape
        """
        check_matrix_view(other, 'other')
        check_same_shape(self, other, 'set_from_matrix')
        self.set_parallel(other.get, max_workers=max_workers, min_chunk_size=min_chunk_size)

    # ─── apply family ────────────────────────────────────────────────

    def _unary(self, operator: Callable[[E], E]) -> IndexFunction:
        check_callable(operator, 'operator')
        read = self._read
        return lambda row, column: operator(read(row, column))

    def _binary(
        self,
        operand: MatrixView[E],
        operator: Callable[[E, E], E],
        operation: str,
    ) -> IndexFunction:
        check_matrix_view(operand, 'operand')
        check_same_shape(self, operand, operation)
        check_callable(operator, 'operator')
        read = self._read
        get = operand.get
        return lambda row, column: operator(read(row, column), get(row, column))

    def _wrapped(
        self,
        operand: MatrixView[E],
        operator: Callable[[E, E], E],
    ) -> IndexFunction:
        check_matrix_view(operand, 'operand')
        check_callable(operator, 'operator')
        read = self._read
        get = operand.get
        height, width = self._height, self._width
        operand_height, operand_width = operand.height, operand.width

        def combine(row: int, column: int) -> E:
            left = read(*wrap_position(row, column, height, width))
            right = get(*wrap_position(row, column, operand_height, operand_width))
            return operator(left, right)

        return combine

    def apply(self, operator: Callable[[E], E]) -> None:
        """Replace every element x with operator(x), in row-major order."""
        self._data = self._build(self._height, self._width, self._unary(operator))

    def apply_with(self, operand: MatrixView[E], operator: Callable[[E, E], E]) -> None:
        """
        Replace every element x with operator(x, y), y being the operand
        element at the same position.

        Raises:
            DimensionError: If operand has a different shape
        """
        function = self._binary(operand, operator, 'apply_with')
        self._data = self._build(self._height, self._width, function)

    def apply_wrapped(self, operand: MatrixView[E], operator: Callable[[E, E], E]) -> None:
        """
        Combine with an operand of any shape, wrapping its indices.

        Cell (row, column) becomes operator(x, operand[row % operand.height,
        column % operand.width]). This matrix keeps its own dimensions.
        """
        self._data = self._build(self._height, self._width, self._wrapped(operand, operator))

    def apply_new(self, operator: Callable[[E], E]) -> GenericMatrix[E]:
        """New matrix of operator(x) for every element x."""
        return self._from_buffer(self._build(self._height, self._width, self._unary(operator)))

    def apply_new_with(
        self,
        operand: MatrixView[E],
        operator: Callable[[E, E], E],
    ) -> GenericMatrix[E]:
        """
        New matrix of operator(x, y) over positionally paired elements.

        Raises:
            DimensionError: If operand has a different shape
        """
        function = self._binary(operand, operator, 'apply_new_with')
        return self._from_buffer(self._build(self._height, self._width, function))

    def apply_new_wrapped(
        self,
        operand: MatrixView[E],
        operator: Callable[[E, E], E],
    ) -> GenericMatrix[E]:
        """
        New matrix of shape (max(heights), max(widths)) where both this
        matrix and operand wrap their indices independently.
        """
        function = self._wrapped(operand, operator)
        height, width = wrapped_shape(self.shape, (operand.height, operand.width))
        return self._from_buffer(self._build(height, width, function))

    def apply_parallel(
        self,
        operator: Callable[[E], E],
        *,
        max_workers: int | None = None,
        min_chunk_size: int | None = None,
    ) -> None:
        """Parallel form of apply(); operator calls happen in no particular order."""
        self._data = self._build_parallel(
            self._height, self._width, self._unary(operator), max_workers, min_chunk_size
        )

    def apply_with_parallel(
        self,
        operand: MatrixView[E],
        operator: Callable[[E, E], E],
        *,
        max_workers: int | None = None,
        min_chunk_size: int | None = None,
    ) -> None:
        """Parallel form of apply_with()."""
        function = self._binary(operand, operator, 'apply_with_parallel')
        self._data = self._build_parallel(
            self._height, self._width, function, max_workers, min_chunk_size
        )

    def apply_wrapped_parallel(
        self,
        operand: MatrixView[E],
        operator: Callable[[E, E], E],
        *,
        max_workers: int | None = None,
        min_chunk_size: int | None = None,
    ) -> None:
        """Parallel form of apply_wrapped()."""
        self._data = self._build_parallel(
            self._height, self._width, self._wrapped(operand, operator),
            max_workers, min_chunk_size,
        )

    def apply_new_parallel(
        self,
        operator: Callable[[E], E],
        *,
        max_workers: int | None = None,
        min_chunk_size: int | None = None,
    ) -> GenericMatrix[E]:
        """Parallel form of apply_new()."""
        return self._from_buffer(self._build_parallel(
            self._height, self._width, self._unary(operator), max_workers, min_chunk_size
        ))

    def apply_new_with_parallel(
        self,
        operand: MatrixView[E],
        operator: Callable[[E, E], E],
        *,
        max_workers: int | None = None,
        min_chunk_size: int | None = None,
    ) -> GenericMatrix[E]:
        """Parallel form of apply_new_with()."""
        function = self._binary(operand, operator, 'apply_new_with_parallel')
        return self._from_buffer(self._build_parallel(
            self._height, self._width, function, max_workers, min_chunk_size
        ))

    def apply_new_wrapped_parallel(
        self,
        operand: MatrixView[E],
        operator: Callable[[E, E], E],
        *,
        max_workers: int | None = None,
        min_chunk_size: int | None = None,
    ) -> GenericMatrix[E]:
        """Parallel form of apply_new_wrapped()."""
        function = self._wrapped(operand, operator)
        height, width = wrapped_shape(self.shape, (operand.height, operand.width))
        return self._from_buffer(self._build_parallel(
            height, width, function, max_workers, min_chunk_size
        ))

    # ─── transpose ───────────────────────────────────────────────────

    def transpose(
        self,
        *,
        max_workers: int | None = None,
        min_chunk_size: int | None = None,
    ) -> GenericMatrix[E]:
        """New width x height matrix with result[row, column] == self[column, row]."""
        read = self._read
        return self._from_buffer(self._build_parallel(
            self._width, self._height,
            lambda row, column: read(column, row),
            max_workers, min_chunk_size,
        ))

    # ─── traversal ───────────────────────────────────────────────────

    def __iter__(self) -> MatrixIterator[E]:
        return MatrixIterator(self)

    def spliterator(self) -> SplittableRange[E]:
        """SplittableRange over every element."""
        return SplittableRange(self)

    def for_each(self, action: Callable[[E], object]) -> None:
        """Call action(element) for every element in row-major order."""
        check_callable(action, 'action')
        read = self._read
        for row, column in row_major_indices(self._height, self._width):
            action(read(row, column))

    def for_each_indices(self, consumer: IndexConsumer) -> None:
        """Call consumer(row, column) for every position in row-major order."""
        check_callable(consumer, 'consumer')
        for row, column in row_major_indices(self._height, self._width):
            consumer(row, column)

    def for_each_parallel(
        self,
        action: Callable[[E], object],
        *,
        max_workers: int | None = None,
        min_chunk_size: int | None = None,
    ) -> None:
        """
        Call action(element) for every element across workers.

        The index space is bisected into contiguous chunks; each chunk is
        visited in row-major order but chunks run concurrently.
        """
        check_callable(action, 'action')
        for_each_split(
            self.spliterator(), action,
            max_workers=max_workers, min_chunk_size=min_chunk_size,
        )

    def for_each_indices_parallel(
        self,
        consumer: IndexConsumer,
        *,
        max_workers: int | None = None,
        min_chunk_size: int | None = None,
    ) -> None:
        """Call consumer(row, column) for every position, in no particular order."""
        check_callable(consumer, 'consumer')
        for_each_indices_parallel(
            self._height, self._width, consumer,
            max_workers=max_workers, min_chunk_size=min_chunk_size,
        )

    # ─── comparison and display ──────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GenericMatrix):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return all(
            self._read(row, column) == other._read(row, column)
            for row, column in row_major_indices(self._height, self._width)
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(height={self._height}, width={self._width})"

    def __str__(self) -> str:
        return "\n".join(
            "[" + ", ".join(str(element) for element in row) + "]"
            for row in self.to_list()
        )
