"""
Numerical precision constants and utilities.

Element-wise arithmetic on the float64 matrix follows IEEE-754: division
by zero yields +/-inf or NaN and never raises. Plain Python floats raise
ZeroDivisionError, so scalar division goes through numpy here.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any


# Machine epsilon for float64
EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16

# Default tolerance for numerical comparisons (relative)
DEFAULT_RTOL: float = 1e-12

# Default tolerance for considering values as zero (absolute)
DEFAULT_ATOL: float = 1e-14


def ieee_divide(numerator: float, denominator: float) -> float:
    """
    Divide two doubles with IEEE-754 semantics.

    Args:
        numerator: Dividend
        denominator: Divisor (may be zero)

    Returns:
        numerator / denominator; inf, -inf or NaN when denominator is zero
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.float64(numerator) / np.float64(denominator))


def is_close(
    a: float | NDArray[np.floating[Any]],
    b: float | NDArray[np.floating[Any]],
    rtol: float = DEFAULT_RTOL,
    atol: float = DEFAULT_ATOL,
    equal_nan: bool = False,
) -> bool | NDArray[np.bool_]:
    """
    Check if values are numerically close.

    Uses the formula: |a - b| <= atol + rtol * |b|

    Args:
        a: First value(s)
        b: Second value(s)
        rtol: Relative tolerance
        atol: Absolute tolerance
        equal_nan: Treat NaN in the same position as equal

    Returns:
        Boolean or boolean array indicating closeness
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    finite = np.isfinite(a) & np.isfinite(b)
    with np.errstate(invalid='ignore'):
        close = np.abs(a - b) <= atol + rtol * np.abs(b)
    # infinities are only close to themselves
    close = np.where(finite, close, a == b)
    if equal_nan:
        close = close | (np.isnan(a) & np.isnan(b))
    if close.ndim == 0:
        return bool(close)
    return close
