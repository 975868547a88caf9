"""Render regression snapshots and their history.

Functions here receive finished snapshots and only draw them; no fitting
happens in this module.
"""

from __future__ import annotations

import os
from typing import Iterable, Sequence

import matplotlib.pyplot as plt
import numpy as np

from ..data import RegressionData
from ..reporting import fit_summary_lines
from ..stats.equation import EquationKind
from .style import (
    COLORS,
    FONT_SIZES,
    OUTPUT_FORMATS,
    STYLE,
    clean_axis,
    save_figure_bundle,
    set_global_style,
)


def plot_regression(
    data: RegressionData,
    output_dir: str = "output",
    filename: str = "regression.png",
    formats: Sequence[str] = OUTPUT_FORMATS,
) -> str:
    """Draw the observations of one snapshot with their fitted line.

    Args:
        data (RegressionData): Snapshot to draw.
        output_dir (str): Directory for the figure files.
        filename (str): PNG file name; other formats share its basename.
        formats (Sequence[str]): File formats to write.

    Returns:
        str: Path to the saved PNG file.

    Raises:
        ValueError: If the snapshot has no observations.

    Note:
        Observations carry ±1 SD error bars. A sloped line is drawn across the
        padded data range, a vertical line as a full-height guide and a
        degenerate fit as a cross at its single point.
    """
    if data.is_empty:
        raise ValueError("Cannot plot a regression snapshot without observations.")

    set_global_style()
    x = np.array([obs.x for obs in data.observations], dtype=float)
    y = np.array([obs.y.value for obs in data.observations], dtype=float)
    sd = np.array([obs.y.standard_deviation for obs in data.observations], dtype=float)

    fig, ax = plt.subplots(figsize=STYLE.FIGSIZE_SINGLE)
    ax.errorbar(
        x,
        y,
        yerr=sd,
        fmt="o",
        color=COLORS["observation"],
        ecolor=COLORS["observation"],
        elinewidth=STYLE.LINEWIDTH_THIN,
        label="Observations",
    )

    eq = data.equation
    if eq is not None:
        if eq.kind is EquationKind.FINITE_SLOPE:
            span = float(x.max() - x.min())
            pad = 0.05 * span if span > 0 else 1.0
            xs = np.linspace(x.min() - pad, x.max() + pad, 200)
            ax.plot(
                xs,
                eq.slope.value * xs + eq.intercept_y.value,
                color=COLORS["fit"],
                linewidth=STYLE.LINEWIDTH,
                label="Weighted fit",
            )
        elif eq.kind is EquationKind.INFINITE_SLOPE:
            ax.axvline(
                eq.x, color=COLORS["fit"], linewidth=STYLE.LINEWIDTH, label="Vertical fit"
            )
        else:
            ax.plot(
                [eq.x],
                [eq.y],
                marker="x",
                markersize=12,
                linestyle="none",
                color=COLORS["fit"],
                label="Degenerate fit",
            )

    summary = fit_summary_lines(data)
    ax.text(
        0.02,
        0.98,
        "\n".join(summary),
        transform=ax.transAxes,
        va="top",
        ha="left",
        fontsize=FONT_SIZES["annotation"],
    )
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.legend(loc="lower right")
    clean_axis(ax, grid_axis="both")

    return save_figure_bundle(fig, os.path.join(output_dir, filename), formats)


def plot_history(
    history: Iterable[RegressionData],
    output_dir: str = "output",
    filename: str = "history.png",
    formats: Sequence[str] = OUTPUT_FORMATS,
) -> str:
    """Draw slope ± SD and R² against snapshot index.

    Snapshots without a sloped line leave gaps in both panels.

    Raises:
        ValueError: If ``history`` is empty.
    """
    snapshots = sorted(history)
    if not snapshots:
        raise ValueError("Cannot plot an empty regression history.")

    set_global_style()
    index = np.array([data.index for data in snapshots], dtype=float)
    slope = np.full(len(snapshots), np.nan)
    slope_sd = np.full(len(snapshots), np.nan)
    r2 = np.full(len(snapshots), np.nan)
    for i, data in enumerate(snapshots):
        eq = data.equation
        if eq is not None and eq.has_finite_slope:
            slope[i] = eq.slope.value
            slope_sd[i] = eq.slope.standard_deviation
        if data.r_squared is not None:
            r2[i] = data.r_squared

    fig, (ax_slope, ax_r2) = plt.subplots(
        2, 1, figsize=STYLE.FIGSIZE_TALL, sharex=True
    )
    ax_slope.plot(index, slope, color=COLORS["fit"], linewidth=STYLE.LINEWIDTH_THIN)
    ax_slope.fill_between(
        index,
        slope - slope_sd,
        slope + slope_sd,
        color=COLORS["band"],
        alpha=STYLE.ALPHA_BAND,
        linewidth=0.0,
    )
    ax_slope.set_ylabel("Slope")
    clean_axis(ax_slope)

    ax_r2.plot(index, r2, color=COLORS["r_squared"], linewidth=STYLE.LINEWIDTH_THIN)
    ax_r2.set_ylim(-0.05, 1.05)
    ax_r2.set_ylabel(r"$R^2$")
    ax_r2.set_xlabel("Snapshot index")
    clean_axis(ax_r2)

    return save_figure_bundle(fig, os.path.join(output_dir, filename), formats)
