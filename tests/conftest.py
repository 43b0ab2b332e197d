"""Shared fixtures and utilities for tests."""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(20080627)


@pytest.fixture
def ramp_volume():
    """4x5x6 volume with distinct values 0..119."""
    return np.arange(4 * 5 * 6, dtype=float).reshape(4, 5, 6)


def sorted_window_median(data, pos, radius):
    """Median of the clipped window around ``pos`` by sorting all its values."""
    sl = tuple(
        slice(max(0, p - r), min(s, p + r + 1))
        for p, r, s in zip(pos, radius, data.shape)
    )
    values = np.sort(data[sl], axis=None)
    n = values.size
    if n % 2:
        return values[n // 2]
    return (values[n // 2 - 1] + values[n // 2]) / 2


# Tolerances for numerical comparisons
RTOL_TIGHT = 1e-12
