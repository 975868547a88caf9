"""Define standardized column names for exported DataFrames."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HistoryColumns:
    """Container for standardized column labels.

    These names are used by the snapshot and observation tables produced in
    ``onlinefit.reporting`` and written by the replay pipeline.

    Attributes:
        index: Snapshot index; increases by one per processed observation.

        n: Number of observations contributing to the snapshot.

        sum_one .. sum_yy: The six weighted sums ``Σw``, ``Σwx``, ``Σwy``,
            ``Σwxy``, ``Σwx²`` and ``Σwy²`` with ``w = 1/σ²``.

        kind: Equation kind (``finite_slope``, ``infinite_slope``,
            ``degenerate``), empty when fewer than two observations
            contribute.

        slope, slope_sd, intercept_y, intercept_y_sd: Parameters of a sloped
            line with their standard deviations; NaN otherwise.

        intercept_x: Where the line crosses ``y = 0``; NaN for horizontal
            lines and degenerate fits.
    """

    index: str = "Index"
    n: str = "n"
    sum_one: str = "Sum 1/var"
    sum_x: str = "Sum x/var"
    sum_y: str = "Sum y/var"
    sum_xy: str = "Sum xy/var"
    sum_xx: str = "Sum x^2/var"
    sum_yy: str = "Sum y^2/var"
    mean_total_se: str = "Mean total squared error"
    mean_residual_se: str = "Mean squared residual error"
    mean_regression_se: str = "Mean squared regression error"
    r_squared: str = "R^2"
    kind: str = "Equation"
    slope: str = "Slope"
    slope_sd: str = "Slope SD"
    intercept_y: str = "Intercept y"
    intercept_y_sd: str = "Intercept y SD"
    intercept_x: str = "Intercept x"


@dataclass(frozen=True)
class ObservationColumns:
    x: str = "x"
    y: str = "y"
    y_variance: str = "y variance"
    y_sd: str = "y SD"
