"""Pytest configuration for repository-relative imports and shared fixtures."""

import os
import sys

import matplotlib
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

matplotlib.use("Agg")

from onlinefit import LinearRegression, Observation  # noqa: E402


@pytest.fixture
def scattered_observations():
    """Five points near y = 2x + 1 with unequal y uncertainties."""
    xs = [0.0, 1.0, 2.0, 3.0, 4.0]
    ys = [1.1, 2.9, 5.2, 6.8, 9.1]
    sds = [0.1, 0.2, 0.1, 0.3, 0.2]
    return [
        Observation.from_values(x, y, y_standard_deviation=sd)
        for x, y, sd in zip(xs, ys, sds)
    ]


@pytest.fixture
def weighted_engine():
    return LinearRegression(ignoring_variance_in_y=False, minimum_variance_in_y=0.1)
