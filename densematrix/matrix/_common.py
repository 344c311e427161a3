"""
Index arithmetic shared by traversal, splitting and the apply family.

Row-major order is defined over the whole matrix, so every conversion
between linear indices and (row, column) pairs uses the matrix width,
never the width of a sub-range.
"""

from __future__ import annotations


def linear_index(row: int, column: int, width: int) -> int:
    """Position of (row, column) in row-major order."""
    return row * width + column


def to_position(index: int, width: int) -> tuple[int, int]:
    """Inverse of linear_index: (row, column) for a row-major position."""
    return divmod(index, width)


def wrap_position(row: int, column: int, height: int, width: int) -> tuple[int, int]:
    """
    Fold (row, column) into a height x width matrix by taking each index
    modulo the matching dimension.
    """
    return row % height, column % width


def wrapped_shape(
    left: tuple[int, int],
    right: tuple[int, int],
) -> tuple[int, int]:
    """Result shape of a max-size wrap-around combination."""
    return max(left[0], right[0]), max(left[1], right[1])
