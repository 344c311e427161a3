"""
densematrix: dense 2D matrices with ordered and parallel traversal.

A fixed-size generic matrix container and a float64 specialization with
element-wise transforms and standard linear algebra (add, subtract,
scalar and matrix multiplication, Hadamard product, elementwise
division, transpose).

Submodules:
    matrix: GenericMatrix, Matrix and their traversal primitives
    core: Exceptions, validation, protocols, compute configuration
"""

__version__ = "0.1.0"

from densematrix.core.exceptions import (
    DenseMatrixError,
    ValidationError,
    DimensionError,
    MatrixIndexError,
    ExhaustedTraversalError,
)
from densematrix.core.protocols import MatrixView
from densematrix.matrix import (
    GenericMatrix,
    Matrix,
    MatrixIterator,
    SplittableRange,
)

__all__ = [
    "__version__",
    "GenericMatrix",
    "Matrix",
    "MatrixIterator",
    "SplittableRange",
    "MatrixView",
    "DenseMatrixError",
    "ValidationError",
    "DimensionError",
    "MatrixIndexError",
    "ExhaustedTraversalError",
]
