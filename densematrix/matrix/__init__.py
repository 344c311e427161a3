"""
Dense 2D matrices.

Provides a generic fixed-size matrix of arbitrary elements and its
float64 specialization with arithmetic, plus the traversal primitives
they share.

Usage:
    from densematrix.matrix import Matrix

    a = Matrix.from_array([[1, 2], [3, 4]])
    b = Matrix.from_array([[5, 6], [7, 8]])
    (a @ b).to_list()          # [[19.0, 22.0], [43.0, 50.0]]

    a.apply_parallel(lambda x: x * x)
"""

from densematrix.matrix.generic import GenericMatrix
from densematrix.matrix.numeric import Matrix
from densematrix.matrix.parallel import (
    for_each_indices_parallel,
    for_each_split,
    split_to_leaves,
)
from densematrix.matrix.spliterator import SplittableRange
from densematrix.matrix.traversal import MatrixIterator, row_major_indices

__all__ = [
    "GenericMatrix",
    "Matrix",
    "MatrixIterator",
    "SplittableRange",
    "row_major_indices",
    "split_to_leaves",
    "for_each_split",
    "for_each_indices_parallel",
]
