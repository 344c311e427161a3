"""
Core infrastructure for densematrix.

This module provides shared abstractions and utilities used by the
matrix implementations.

Key components:
    protocols: MatrixView accessor protocol
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Precision helpers and parallel configuration
"""

from densematrix.core.protocols import MatrixView
from densematrix.core.exceptions import (
    DenseMatrixError,
    ValidationError,
    DimensionError,
    MatrixIndexError,
    ExhaustedTraversalError,
)

__all__ = [
    # Protocols
    "MatrixView",
    # Exceptions
    "DenseMatrixError",
    "ValidationError",
    "DimensionError",
    "MatrixIndexError",
    "ExhaustedTraversalError",
]
