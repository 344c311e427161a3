"""
Tests for the float64 Matrix and its arithmetic.

Validates:
    - Zero initialization and float coercion; non-real values rejected
    - add / subtract / scalar multiply / matrix product / Hadamard /
      elementwise division, including IEEE division by zero
    - Shape validation (DimensionError before any work)
    - matmul strict and permissive modes
    - Operator overloads and allclose
"""

import math
import warnings

import numpy as np
import pytest

from densematrix.core.exceptions import DimensionError, ValidationError
from densematrix.matrix import GenericMatrix, Matrix


# ═══════════════════════════════════════════════════════════════════════
# Storage
# ═══════════════════════════════════════════════════════════════════════


class TestStorage:

    def test_zero_initialized(self):
        matrix = Matrix(3, 2)
        assert matrix.to_list() == [[0.0, 0.0], [0.0, 0.0], [0.0, 0.0]]

    def test_values_are_python_floats(self, a22):
        assert type(a22.get(0, 0)) is float
        assert all(type(x) is float for x in a22)

    def test_set_coerces(self):
        matrix = Matrix(1, 1)
        assert matrix.set(0, 0, 3) == 0.0
        assert matrix.get(0, 0) == 3.0

    def test_set_rejects_non_numeric(self):
        matrix = Matrix(1, 1)
        with pytest.raises(ValidationError, match="'three'"):
            matrix.set(0, 0, "three")
        assert matrix.get(0, 0) == 0.0

    def test_set_rejects_numeric_string(self):
        matrix = Matrix(1, 1)
        with pytest.raises(ValidationError, match="got str '3.5'"):
            matrix.set(0, 0, "3.5")
        assert matrix.get(0, 0) == 0.0

    def test_set_rejects_none(self):
        with pytest.raises(ValidationError, match="got NoneType None"):
            Matrix(1, 1).set(0, 0, None)

    def test_from_array_rejects_string_cells(self):
        with pytest.raises(ValidationError, match="expected a real number"):
            Matrix.from_array([["1", "2"]])

    def test_fill_rejects_bytes_and_leaves_cells(self, a22):
        with pytest.raises(ValidationError):
            a22.fill(b"1")
        assert a22.to_list() == [[1.0, 2.0], [3.0, 4.0]]

    def test_to_array_dtype(self, a22):
        array = a22.to_array()
        assert array.dtype == np.float64
        np.testing.assert_array_equal(array, [[1.0, 2.0], [3.0, 4.0]])

    def test_from_numpy(self):
        matrix = Matrix.from_array(np.arange(6).reshape(2, 3))
        assert matrix.get(1, 2) == 5.0

    def test_filled(self):
        assert Matrix.filled(2, 2, 1.5).to_list() == [[1.5, 1.5], [1.5, 1.5]]

    def test_str(self, a22):
        assert str(a22) == "[1.0, 2.0]\n[3.0, 4.0]"


# ═══════════════════════════════════════════════════════════════════════
# Elementwise arithmetic
# ═══════════════════════════════════════════════════════════════════════


class TestElementwise:

    def test_add(self, a22, b22):
        assert a22.add(b22).to_list() == [[6.0, 8.0], [10.0, 12.0]]

    def test_subtract(self, a22, b22):
        assert b22.subtract(a22).to_list() == [[4.0, 4.0], [4.0, 4.0]]

    def test_scalar_multiply(self, a22):
        assert a22.multiply(2.5).to_list() == [[2.5, 5.0], [7.5, 10.0]]

    def test_scalar_multiply_rejects_non_real(self, a22):
        with pytest.raises(ValidationError, match="factor: expected a real number, got str 'x'"):
            a22.multiply("x")
        with pytest.raises(ValidationError, match="factor"):
            a22.multiply(None)

    def test_hadamard(self, a22):
        twos = Matrix.filled(2, 2, 2.0)
        assert a22.multiply_elementwise(twos).to_list() == [[2.0, 4.0], [6.0, 8.0]]

    def test_divide_elementwise_ieee(self):
        left = Matrix.from_array([[1, 0], [4, 2]])
        right = Matrix.from_array([[2, 0], [2, 1]])
        result = left.divide_elementwise(right)
        assert result.get(0, 0) == 0.5
        assert math.isnan(result.get(0, 1))
        assert result.get(1, 0) == 2.0
        assert result.get(1, 1) == 2.0

    def test_divide_by_zero_gives_infinity(self):
        result = Matrix.from_array([[1, -1]]).divide_elementwise(Matrix(1, 2))
        assert result.to_list() == [[math.inf, -math.inf]]

    def test_operands_not_mutated(self, a22, b22):
        a22.add(b22)
        a22.multiply_elementwise(b22)
        a22.multiply(3)
        assert a22.to_list() == [[1.0, 2.0], [3.0, 4.0]]
        assert b22.to_list() == [[5.0, 6.0], [7.0, 8.0]]

    @pytest.mark.parametrize("method", [
        "add", "subtract", "multiply_elementwise", "divide_elementwise",
    ])
    def test_shape_mismatch(self, a22, method):
        with pytest.raises(DimensionError) as info:
            getattr(a22, method)(Matrix(2, 3))
        assert info.value.expected == (2, 2)
        assert info.value.actual == (2, 3)

    def test_generic_operand(self, a22):
        operand = GenericMatrix.filled(2, 2, 1)
        assert a22.add(operand).to_list() == [[2.0, 3.0], [4.0, 5.0]]


# ═══════════════════════════════════════════════════════════════════════
# Matrix product
# ═══════════════════════════════════════════════════════════════════════


class TestMatmul:

    def test_square_product(self, a22, b22):
        assert a22.matmul(b22).to_list() == [[19.0, 22.0], [43.0, 50.0]]

    def test_multiply_with_matrix_is_product(self, a22, b22):
        assert a22.multiply(b22) == a22.matmul(b22)

    def test_rectangular_shape(self):
        left = Matrix.from_array([[1, 2, 3]])
        right = Matrix.from_array([[1], [2], [3]])
        assert left.matmul(right).to_list() == [[14.0]]
        outer = right.matmul(left)
        assert outer.shape == (3, 3)
        assert outer.get(2, 1) == 6.0

    def test_matches_numpy(self, rng):
        left_array = rng.standard_normal((4, 3))
        right_array = rng.standard_normal((3, 5))
        result = Matrix.from_array(left_array).matmul(Matrix.from_array(right_array))
        np.testing.assert_allclose(result.to_array(), left_array @ right_array, rtol=1e-12)

    def test_identity(self, a22):
        identity = Matrix.from_function(2, 2, lambda r, c: 1.0 if r == c else 0.0)
        assert a22.matmul(identity) == a22

    def test_strict_rejects_inner_mismatch(self, a22):
        with pytest.raises(DimensionError, match="inner dimensions"):
            a22.matmul(Matrix(3, 2))

    def test_permissive_truncates_and_warns(self, a22):
        right = Matrix.from_array([[1, 1], [1, 1], [100, 100]])
        with pytest.warns(RuntimeWarning, match="first 2 terms"):
            result = a22.matmul(right, strict=False)
        assert result.to_list() == [[3.0, 3.0], [7.0, 7.0]]

    def test_permissive_matching_dims_no_warning(self, a22, b22):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert a22.matmul(b22, strict=False).get(1, 1) == 50.0

    def test_rejects_non_matrix(self, a22):
        with pytest.raises(ValidationError):
            a22.matmul(np.eye(2))


# ═══════════════════════════════════════════════════════════════════════
# Operators
# ═══════════════════════════════════════════════════════════════════════


class TestOperators:

    def test_add_sub(self, a22, b22):
        assert (a22 + b22).to_list() == [[6.0, 8.0], [10.0, 12.0]]
        assert (b22 - a22).to_list() == [[4.0, 4.0], [4.0, 4.0]]

    def test_scalar_mul_both_sides(self, a22):
        assert (a22 * 2).to_list() == [[2.0, 4.0], [6.0, 8.0]]
        assert (2 * a22) == (a22 * 2)

    def test_star_between_matrices_is_hadamard(self, a22, b22):
        assert (a22 * b22).to_list() == [[5.0, 12.0], [21.0, 32.0]]

    def test_matmul_operator(self, a22, b22):
        assert (a22 @ b22).to_list() == [[19.0, 22.0], [43.0, 50.0]]

    def test_true_divide_scalar(self, a22):
        assert (a22 / 2).to_list() == [[0.5, 1.0], [1.5, 2.0]]

    def test_true_divide_scalar_zero(self, a22):
        assert (a22 / 0).to_list() == [[math.inf] * 2] * 2

    def test_true_divide_matrix(self, a22, b22):
        assert (b22 / a22).get(1, 1) == 2.0

    def test_negate(self, a22):
        assert (-a22).to_list() == [[-1.0, -2.0], [-3.0, -4.0]]

    def test_unsupported_operand(self, a22):
        with pytest.raises(TypeError):
            a22 + 1
        with pytest.raises(TypeError):
            a22 * "x"


# ═══════════════════════════════════════════════════════════════════════
# allclose
# ═══════════════════════════════════════════════════════════════════════


class TestAllclose:

    def test_close(self, a22):
        nudged = a22.apply_new(lambda x: x + 1e-15)
        assert a22.allclose(nudged)

    def test_not_close(self, a22, b22):
        assert not a22.allclose(b22)

    def test_shape_mismatch_is_false(self, a22):
        assert not a22.allclose(Matrix(2, 3))

    def test_nan_handling(self):
        left = Matrix.from_array([[math.nan, 1.0]])
        right = Matrix.from_array([[math.nan, 1.0]])
        assert not left.allclose(right)
        assert left.allclose(right, equal_nan=True)
