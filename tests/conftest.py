"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from densematrix.core.compute.workers import ENV_MAX_WORKERS, ENV_MIN_CHUNK_SIZE


@pytest.fixture(autouse=True)
def clean_parallel_env(monkeypatch):
    """Parallel settings never leak in from the developer's shell."""
    monkeypatch.delenv(ENV_MAX_WORKERS, raising=False)
    monkeypatch.delenv(ENV_MIN_CHUNK_SIZE, raising=False)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)
