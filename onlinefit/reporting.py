"""Render regression state as text and as tables.

The text helpers produce the short labels an interactive view shows next to
the plot (point count, selected point, line equation). The table helpers turn
snapshots into pandas DataFrames for CSV export.
"""

from __future__ import annotations

import math
from dataclasses import asdict
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from .data import RegressionData
from .observation import Observation
from .schema import HistoryColumns, ObservationColumns
from .stats.equation import EquationKind, RegressionEquation
from .stats.uncertainty import format_value_with_uncertainty

HISTORY_COLUMNS = HistoryColumns()
OBSERVATION_COLUMNS = ObservationColumns()


def format_number(value: float, decimals: int = 1) -> str:
    """Format ``value`` with a fixed number of decimals, avoiding ``-0.0``."""
    text = f"{float(value):.{decimals}f}"
    if float(text) == 0:
        text = text.lstrip("-")
    return text


def _pm(value: float, sd: float, decimals: Optional[int]) -> str:
    if decimals is None:
        return format_value_with_uncertainty(value, sd)
    return f"{format_number(value, decimals)} ± {format_number(sd, decimals)}"


def count_text(data: RegressionData) -> str:
    return f"# points: {data.number_of_observations}"


def observation_text(observation: Observation, decimals: Optional[int] = 1) -> str:
    """Return ``"(x, y ± σ)"`` for one observation."""
    x = format_number(observation.x, 1 if decimals is None else decimals)
    return f"({x}, {_pm(observation.y.value, observation.y.standard_deviation, decimals)})"


def equation_text(
    equation: Optional[RegressionEquation], decimals: Optional[int] = 1
) -> Optional[str]:
    """Return a one-line rendering of the fitted line.

    Args:
        equation: Equation to render, or ``None``.
        decimals: Fixed decimals for every number. With ``None`` each value is
            rounded to the precision its own standard deviation supports.

    Returns:
        ``"y = (a ± σa)*x + (b ± σb)"`` for sloped lines, ``"x = c"`` for
        vertical lines, ``None`` for degenerate or missing equations.
    """
    if equation is None:
        return None
    if equation.kind is EquationKind.FINITE_SLOPE:
        s = _pm(equation.slope.value, equation.slope.standard_deviation, decimals)
        b = _pm(
            equation.intercept_y.value, equation.intercept_y.standard_deviation, decimals
        )
        return f"y = ({s})*x + ({b})"
    if equation.kind is EquationKind.INFINITE_SLOPE:
        return f"x = {format_number(equation.x, 1 if decimals is None else decimals)}"
    return None


def snapshot_record(data: RegressionData) -> dict:
    """Flatten one snapshot into a row keyed by ``HistoryColumns`` labels."""
    cols = HISTORY_COLUMNS
    eq = data.equation

    def opt(value: Optional[float]) -> float:
        return np.nan if value is None else float(value)

    slope = eq.slope if eq is not None and eq.has_finite_slope else None
    intercept_y = eq.intercept_y if slope is not None else None
    return {
        cols.index: data.index,
        cols.n: data.number_of_observations,
        cols.sum_one: data.sum_one_over_variance_y,
        cols.sum_x: data.sum_x_over_variance_y,
        cols.sum_y: data.sum_y_over_variance_y,
        cols.sum_xy: data.sum_xy_over_variance_y,
        cols.sum_xx: data.sum_x_squared_over_variance_y,
        cols.sum_yy: data.sum_y_squared_over_variance_y,
        cols.mean_total_se: data.mean_total_squared_error,
        cols.mean_residual_se: opt(data.mean_squared_residual_error),
        cols.mean_regression_se: opt(data.mean_squared_regression_error),
        cols.r_squared: opt(data.r_squared),
        cols.kind: eq.kind.value if eq is not None else "",
        cols.slope: opt(slope.value if slope is not None else None),
        cols.slope_sd: opt(slope.standard_deviation if slope is not None else None),
        cols.intercept_y: opt(intercept_y.value if intercept_y is not None else None),
        cols.intercept_y_sd: opt(
            intercept_y.standard_deviation if intercept_y is not None else None
        ),
        cols.intercept_x: opt(eq.intercept_x if eq is not None else None),
    }


def history_to_dataframe(history: Iterable[RegressionData]) -> pd.DataFrame:
    """Build one row per snapshot, ordered by snapshot index."""
    rows = [snapshot_record(data) for data in sorted(history)]
    return pd.DataFrame(rows, columns=list(asdict(HISTORY_COLUMNS).values()))


def observations_to_dataframe(observations: Iterable[Observation]) -> pd.DataFrame:
    cols = OBSERVATION_COLUMNS
    rows = [
        {
            cols.x: obs.x,
            cols.y: obs.y.value,
            cols.y_variance: obs.y.variance,
            cols.y_sd: obs.y.standard_deviation,
        }
        for obs in observations
    ]
    return pd.DataFrame(rows, columns=[cols.x, cols.y, cols.y_variance, cols.y_sd])


def fit_summary_lines(data: RegressionData) -> list[str]:
    """Return human-readable summary lines for logging or a text panel."""
    lines = [count_text(data)]
    text = equation_text(data.equation)
    if text is not None:
        lines.append(text)
    elif data.equation is not None and data.equation.is_degenerate:
        x, y = data.equation.point
        lines.append(f"all points at ({format_number(x)}, {format_number(y)})")
    if data.r_squared is not None and math.isfinite(data.r_squared):
        lines.append(f"R^2 = {data.r_squared:.4f}")
    return lines
