"""
-------
conftest.py
-------
Shared pytest fixtures for sketchpath tests.
"""

import pytest
import matplotlib
matplotlib.use("Agg")  # ensure headless backend for CI
import matplotlib.pyplot as plt

from sketchpath.rng import RNG


# -----------------------------------------------------------------------------
# Core Matplotlib fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(scope="function")
def fig_ax():
    """
    Create and yield an isolated Matplotlib Figure/Axes pair.

    The figure is automatically closed after the test to avoid memory leaks.
    """
    fig, ax = plt.subplots(figsize=(4, 3))
    yield fig, ax
    plt.close(fig)


# -----------------------------------------------------------------------------
# RNG fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def fixed_rng():
    """Deterministic stdlib RNG."""
    return RNG(seed=123)


@pytest.fixture
def fixed_rng_numpy():
    """Deterministic NumPy RNG."""
    return RNG(seed=123, use_numpy=True)


class RecordingDrawer:
    """Drawing callable that records every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, d, attrs):
        self.calls.append((d, attrs))


@pytest.fixture
def recorder():
    return RecordingDrawer()
