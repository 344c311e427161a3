"""
Shared fixtures for matrix tests.
"""

import pytest

from densematrix.matrix import GenericMatrix, Matrix


@pytest.fixture
def a22():
    """[[1, 2], [3, 4]] as doubles."""
    return Matrix.from_array([[1, 2], [3, 4]])


@pytest.fixture
def b22():
    """[[5, 6], [7, 8]] as doubles."""
    return Matrix.from_array([[5, 6], [7, 8]])


@pytest.fixture
def letters():
    """2x3 generic matrix of strings, 'a'..'f' in row-major order."""
    return GenericMatrix.from_array([["a", "b", "c"], ["d", "e", "f"]])


@pytest.fixture
def force_parallel():
    """Options that make every parallel method actually fan out."""
    return {"max_workers": 4, "min_chunk_size": 1}


@pytest.fixture(params=[(1, 1), (1, 7), (7, 1), (3, 4), (5, 5), (9, 13)])
def shape(request):
    """Assorted matrix shapes including degenerate rows and columns."""
    return request.param


@pytest.fixture
def indexed(shape):
    """Matrix whose cell (r, c) holds r * 100 + c."""
    height, width = shape
    return Matrix.from_function(height, width, lambda r, c: r * 100 + c)
