"""
Matrix: float64 specialization of GenericMatrix with arithmetic.

Every cell holds a native double and starts at 0.0. Arithmetic is built
on the apply family and always returns a new Matrix; operands are never
mutated. Division follows IEEE-754 (x / 0 is +/-inf, 0 / 0 is NaN).
"""

from __future__ import annotations

import operator
import warnings
from numbers import Real
from typing import Any

import numpy as np
from numpy.typing import NDArray

from densematrix.core.compute.precision import DEFAULT_ATOL, DEFAULT_RTOL, ieee_divide, is_close
from densematrix.core.protocols import MatrixView
from densematrix.core.validation import (
    check_inner_dimensions,
    check_matrix_view,
    check_real,
)
from densematrix.matrix.generic import GenericMatrix


class Matrix(GenericMatrix[float]):
    """
    Dense height x width matrix of doubles.

    Operators:
        a + b, a - b      elementwise sum / difference (same shape)
        a * k, k * a      scalar multiple
        a * b             Hadamard product (same shape)
        a / k, a / b      scalar / elementwise quotient
        a @ b             matrix product
        -a                negation

    Note that multiply(b) with a matrix argument is the matrix product,
    whereas a * b is the Hadamard product.
    """

    _dtype = np.float64
    _fill_value = 0.0

    @staticmethod
    def _coerce(value: Any) -> float:
        return check_real(value, 'value')

    def _read(self, row: int, column: int) -> float:
        return float(self._data[row, column])

    # ─── arithmetic ──────────────────────────────────────────────────

    def add(self, operand: MatrixView[float]) -> Matrix:
        """Elementwise sum. Raises DimensionError on shape mismatch."""
        return self.apply_new_with(operand, operator.add)

    def subtract(self, operand: MatrixView[float]) -> Matrix:
        """Elementwise difference. Raises DimensionError on shape mismatch."""
        return self.apply_new_with(operand, operator.sub)

    def multiply(self, factor: float | MatrixView[float]) -> Matrix:
        """
        Scalar multiple, or matrix product when factor is a matrix.

        Args:
            factor: A real number, or a matrix (delegates to matmul())
        """
        if isinstance(factor, MatrixView):
            return self.matmul(factor)
        factor = check_real(factor, 'factor')
        return self.apply_new(lambda x: factor * x)

    def matmul(self, operand: MatrixView[float], *, strict: bool = True) -> Matrix:
        """
        Matrix product.

        result[row, column] = sum over k of self[row, k] * operand[k, column].

        Args:
            operand: Right-hand matrix
            strict: If True, require self.width == operand.height. If
                False, sum only over k < min(self.width, operand.height)
                and warn when the inner dimensions differ.

        Returns:
            Matrix of shape (self.height, operand.width)

        Raises:
            DimensionError: If strict and the inner dimensions differ
        """
        check_matrix_view(operand, 'operand')
        if strict:
            check_inner_dimensions(self, operand)
        elif self.width != operand.height:
            warnings.warn(
                f"matmul: inner dimensions differ ({self.height}x{self.width} @ "
                f"{operand.height}x{operand.width}); summing over the first "
                f"{min(self.width, operand.height)} terms only",
                RuntimeWarning,
                stacklevel=2,
            )

        inner = min(self.width, operand.height)
        read = self._read
        get = operand.get

        def cell(row: int, column: int) -> float:
            total = 0.0
            for k in range(inner):
                total += read(row, k) * get(k, column)
            return total

        return self._from_buffer(self._build(self.height, operand.width, cell))

    def multiply_elementwise(self, operand: MatrixView[float]) -> Matrix:
        """Hadamard product. Raises DimensionError on shape mismatch."""
        return self.apply_new_with(operand, operator.mul)

    def divide_elementwise(self, operand: MatrixView[float]) -> Matrix:
        """
        Elementwise quotient with IEEE semantics.

        Division by zero produces inf or NaN, never an exception.
        Raises DimensionError on shape mismatch.
        """
        return self.apply_new_with(operand, ieee_divide)

    def allclose(
        self,
        other: MatrixView[float],
        rtol: float = DEFAULT_RTOL,
        atol: float = DEFAULT_ATOL,
        equal_nan: bool = False,
    ) -> bool:
        """True if other has the same shape and every element is close."""
        check_matrix_view(other, 'other')
        if self.shape != (other.height, other.width):
            return False
        return bool(np.all(is_close(self._data, _as_array(other), rtol, atol, equal_nan)))

    # ─── operators ───────────────────────────────────────────────────

    def __add__(self, other: object) -> Matrix:
        if isinstance(other, MatrixView):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: object) -> Matrix:
        if isinstance(other, MatrixView):
            return self.subtract(other)
        return NotImplemented

    def __mul__(self, other: object) -> Matrix:
        if isinstance(other, MatrixView):
            return self.multiply_elementwise(other)
        if isinstance(other, Real):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, other: object) -> Matrix:
        if isinstance(other, Real):
            return self.multiply(other)
        return NotImplemented

    def __truediv__(self, other: object) -> Matrix:
        if isinstance(other, MatrixView):
            return self.divide_elementwise(other)
        if isinstance(other, Real):
            divisor = float(other)
            return self.apply_new(lambda x: ieee_divide(x, divisor))
        return NotImplemented

    def __matmul__(self, other: object) -> Matrix:
        if isinstance(other, MatrixView):
            return self.matmul(other)
        return NotImplemented

    def __neg__(self) -> Matrix:
        return self.apply_new(operator.neg)


def _as_array(matrix: MatrixView[float]) -> NDArray[np.float64]:
    if isinstance(matrix, GenericMatrix):
        return np.asarray(matrix.to_array(), dtype=np.float64)
    return np.array(
        [[matrix.get(row, column) for column in range(matrix.width)]
         for row in range(matrix.height)],
        dtype=np.float64,
    )
