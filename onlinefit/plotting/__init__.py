"""
Plotting utilities for regression snapshots.

Modules:
    fit_plots:
        Observations with error bars and the fitted line for one snapshot,
        and slope / R² traces across a snapshot history.

    style:
        Shared rcParams, axis cleaning, and multi-format save helpers.

Design Principles:
    1. No fitting in plotting code. Functions receive finished snapshots.

    2. Every figure is written as PNG, PDF and SVG unless asked otherwise.
"""

from .fit_plots import plot_history, plot_regression
from .style import set_global_style

__all__ = ["plot_regression", "plot_history", "set_global_style"]
