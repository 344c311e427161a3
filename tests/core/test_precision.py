"""
Tests for core/compute/precision.py.

Validates:
    - ieee_divide follows IEEE-754 for zero divisors and never raises
    - is_close tolerance semantics, infinities and NaN handling
"""

import math

import numpy as np
import pytest

from densematrix.core.compute.precision import EPSILON_64, ieee_divide, is_close


class TestIeeeDivide:

    def test_ordinary_division(self):
        assert ieee_divide(1.0, 4.0) == 0.25

    def test_returns_python_float(self):
        assert type(ieee_divide(1, 2)) is float

    def test_positive_over_zero_is_inf(self):
        assert ieee_divide(3.0, 0.0) == math.inf

    def test_negative_over_zero_is_negative_inf(self):
        assert ieee_divide(-3.0, 0.0) == -math.inf

    def test_zero_over_zero_is_nan(self):
        assert math.isnan(ieee_divide(0.0, 0.0))

    def test_no_runtime_warning(self):
        with np.errstate(all='raise'):
            assert math.isnan(ieee_divide(0.0, 0.0))


class TestIsClose:

    def test_identical(self):
        assert is_close(1.0, 1.0)

    def test_within_relative_tolerance(self):
        assert is_close(1.0 + EPSILON_64, 1.0)

    def test_outside_tolerance(self):
        assert not is_close(1.0, 1.001)

    def test_custom_tolerance(self):
        assert is_close(1.0, 1.001, rtol=1e-2)

    def test_equal_infinities(self):
        assert is_close(math.inf, math.inf)

    def test_opposite_infinities(self):
        assert not is_close(math.inf, -math.inf)

    def test_nan_not_close_by_default(self):
        assert not is_close(math.nan, math.nan)

    def test_nan_close_with_equal_nan(self):
        assert is_close(math.nan, math.nan, equal_nan=True)

    def test_array_input(self):
        result = is_close(np.array([1.0, 2.0]), np.array([1.0, 2.5]))
        np.testing.assert_array_equal(result, [True, False])

    @pytest.mark.parametrize("value", [0.0, -1.5, 1e300])
    def test_scalar_returns_bool(self, value):
        assert is_close(value, value) is True
