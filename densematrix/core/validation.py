"""
Input validation utilities for densematrix.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent coercion beyond operator.index / np.asarray
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import operator
from numbers import Real
from typing import Any, Sequence

import numpy as np

from densematrix.core.exceptions import (
    DimensionError,
    MatrixIndexError,
    ValidationError,
)
from densematrix.core.protocols import MatrixView


def check_dimension(value: Any, name: str) -> int:
    """
    Validate a matrix dimension (height or width).

    Args:
        value: Candidate dimension
        name: Parameter name for error messages

    Returns:
        The dimension as a plain int

    Raises:
        ValidationError: If value is not an integer or is less than 1
    """
    if isinstance(value, bool):
        raise ValidationError(f"{name}: expected a positive integer, got bool {value!r}")
    try:
        result = operator.index(value)
    except TypeError as e:
        raise ValidationError(
            f"{name}: expected a positive integer, got {type(value).__name__}"
        ) from e

    if result < 1:
        raise ValidationError(f"{name}: must be at least 1, got {result}")

    return result


def check_index(row: Any, column: Any, height: int, width: int) -> tuple[int, int]:
    """
    Validate a (row, column) pair against matrix bounds.

    Negative indices are rejected: there is no Python-style wrap-around.

    Returns:
        (row, column) as plain ints

    Raises:
        MatrixIndexError: If either index is not an integer or out of range
    """
    try:
        r = operator.index(row)
        c = operator.index(column)
    except TypeError as e:
        raise MatrixIndexError(
            f"indices must be integers, got ({type(row).__name__}, {type(column).__name__})",
            shape=(height, width),
        ) from e

    if not 0 <= r < height:
        raise MatrixIndexError(
            f"row {r} out of range [0, {height})",
            row=r, column=c, shape=(height, width),
        )
    if not 0 <= c < width:
        raise MatrixIndexError(
            f"column {c} out of range [0, {width})",
            row=r, column=c, shape=(height, width),
        )
    return r, c


def check_same_shape(left: MatrixView, right: MatrixView, operation: str) -> None:
    """
    Verify two matrices have identical dimensions.

    Args:
        left: Matrix the operation is invoked on
        right: Operand
        operation: Operation name for error messages

    Raises:
        DimensionError: If the shapes differ
    """
    expected = (left.height, left.width)
    actual = (right.height, right.width)
    if expected != actual:
        raise DimensionError(
            f"{operation}: operand shape {actual[0]}x{actual[1]} does not match "
            f"{expected[0]}x{expected[1]}",
            expected=expected,
            actual=actual,
        )


def check_inner_dimensions(left: MatrixView, right: MatrixView) -> None:
    """
    Verify left.width == right.height for a matrix product.

    Raises:
        DimensionError: If the inner dimensions differ
    """
    if left.width != right.height:
        raise DimensionError(
            f"matmul: inner dimensions differ ({left.height}x{left.width} @ "
            f"{right.height}x{right.width})",
            expected=(left.width, right.width),
            actual=(right.height, right.width),
        )


def check_real(value: Any, name: str) -> float:
    """
    Validate a real number destined for float64 storage.

    Strings and bytes are rejected even when they spell a number.

    Returns:
        The value as a Python float

    Raises:
        ValidationError: If value is not a numbers.Real
    """
    if not isinstance(value, Real):
        raise ValidationError(
            f"{name}: expected a real number, got {type(value).__name__} {value!r}"
        )
    return float(value)


def check_callable(function: Any, name: str) -> None:
    """
    Verify an operator, visitor or generator is callable.

    Raises:
        ValidationError: If function is not callable
    """
    if not callable(function):
        raise ValidationError(f"{name}: expected a callable, got {type(function).__name__}")


def check_matrix_view(value: Any, name: str) -> None:
    """
    Verify value satisfies the MatrixView accessor contract.

    Raises:
        ValidationError: If height, width or get() is missing
    """
    if not isinstance(value, MatrixView):
        raise ValidationError(
            f"{name}: expected a matrix exposing height, width and get(), "
            f"got {type(value).__name__}"
        )


def _is_row(value: Any) -> bool:
    if isinstance(value, (str, bytes)):
        return False
    return isinstance(value, (Sequence, np.ndarray))


def check_rectangular(rows: Any, name: str) -> tuple[int, int]:
    """
    Validate a 2D literal array and return its dimensions.

    Accepts a 2-D numpy array or a non-empty sequence of equal-length,
    non-empty row sequences.

    Returns:
        (height, width)

    Raises:
        ValidationError: If the input is empty, ragged or not two-dimensional
    """
    if isinstance(rows, np.ndarray):
        if rows.ndim != 2:
            raise ValidationError(
                f"{name}: expected 2D array, got {rows.ndim}D with shape {rows.shape}"
            )
        height, width = rows.shape
    else:
        if not _is_row(rows):
            raise ValidationError(
                f"{name}: expected a sequence of rows, got {type(rows).__name__}"
            )
        height = len(rows)
        if height == 0:
            raise ValidationError(f"{name}: needs at least 1 row, got 0")
        first = rows[0]
        if not _is_row(first):
            raise ValidationError(
                f"{name}: row 0 is {type(first).__name__}, expected a sequence"
            )
        width = len(first)
        for index, row in enumerate(rows):
            if not _is_row(row):
                raise ValidationError(
                    f"{name}: row {index} is {type(row).__name__}, expected a sequence"
                )
            if len(row) != width:
                raise ValidationError(
                    f"{name}: ragged rows (row 0 has {width} elements, "
                    f"row {index} has {len(row)})"
                )

    check_dimension(height, f"{name} height")
    check_dimension(width, f"{name} width")
    return height, width
