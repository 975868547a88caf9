"""Weighted least-squares line fitting from running sufficient statistics.

This module supports:
- the per-observation weighting rule (``1/variance``, with a floor for exact
  values, or unit weights when variances are ignored),
- signed O(1) updates of the six weighted sums a straight-line fit needs,
- the case analysis turning those sums into an equation and error measures,
- a vectorised batch path used to rebuild the sums from scratch, and
- Student-t confidence half-widths for the fitted parameters.
"""

from __future__ import annotations

import importlib.util
import math
from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .equation import RegressionEquation
from .uncertainty import UncertainValue

HAVE_SCIPY = importlib.util.find_spec("scipy") is not None
if HAVE_SCIPY:
    from scipy.stats import t as student_t


def effective_variance(
    variance: float, ignoring_variance_in_y: bool, minimum_variance_in_y: float
) -> float:
    """Return the variance an observation is weighted with.

    Args:
        variance (float): The observation's own y-variance.
        ignoring_variance_in_y (bool): When true every observation gets unit
            weight.
        minimum_variance_in_y (float): Substituted for an exactly-zero variance
            so that exact observations get a large but finite weight.

    Returns:
        float: ``1.0`` when ignoring variances, otherwise ``variance`` or the
        substituted minimum.
    """
    if ignoring_variance_in_y:
        return 1.0
    if variance == 0:
        return float(minimum_variance_in_y)
    return float(variance)


def effective_variances(
    variances: Sequence[float],
    ignoring_variance_in_y: bool,
    minimum_variance_in_y: float,
) -> np.ndarray:
    """Vectorised :func:`effective_variance`."""
    var_arr = np.asarray(variances, dtype=float)
    if ignoring_variance_in_y:
        return np.ones_like(var_arr)
    return np.where(var_arr == 0, float(minimum_variance_in_y), var_arr)


def _non_negative(value: float) -> float:
    return 0.0 if value < 0 else value


class WeightedSums(NamedTuple):
    """The six variance-weighted sums determining a straight-line fit.

    ``one = Σ1/σ²``, ``x = Σx/σ²``, ``y = Σy/σ²``, ``xy = Σxy/σ²``,
    ``xx = Σx²/σ²`` and ``yy = Σy²/σ²``.
    """

    one: float = 0.0
    x: float = 0.0
    y: float = 0.0
    xy: float = 0.0
    xx: float = 0.0
    yy: float = 0.0

    def updated(
        self, x: float, y: float, variance: float, sign: float = 1.0
    ) -> "WeightedSums":
        """Return the sums with one observation added (``sign=1``) or removed.

        The three sums that cannot be negative are clamped at zero, since
        round-off in a removal may leave them slightly below it. NaN is passed
        through unchanged.
        """
        xy = x * y
        xsq = x * x
        ysq = y * y
        return WeightedSums(
            one=_non_negative(self.one + sign * (1.0 / variance)),
            x=self.x + sign * (x / variance),
            y=self.y + sign * (y / variance),
            xy=self.xy + sign * (xy / variance),
            xx=_non_negative(self.xx + sign * (xsq / variance)),
            yy=_non_negative(self.yy + sign * (ysq / variance)),
        )

    @classmethod
    def from_arrays(
        cls, x: Sequence[float], y: Sequence[float], variances: Sequence[float]
    ) -> "WeightedSums":
        """Compute the sums in one pass over whole arrays."""
        x_arr = np.asarray(x, dtype=float)
        y_arr = np.asarray(y, dtype=float)
        var_arr = np.asarray(variances, dtype=float)
        if not (len(x_arr) == len(y_arr) == len(var_arr)):
            raise ValueError("x, y and variances must have the same length.")
        if np.any(var_arr <= 0):
            raise ValueError("variances must be positive.")
        w = 1.0 / var_arr
        return cls(
            one=float(np.sum(w)),
            x=float(np.sum(x_arr * w)),
            y=float(np.sum(y_arr * w)),
            xy=float(np.sum(x_arr * y_arr * w)),
            xx=float(np.sum(x_arr**2 * w)),
            yy=float(np.sum(y_arr**2 * w)),
        )


@dataclass(frozen=True)
class LineFit:
    """Equation and goodness-of-fit measures derived from ``WeightedSums``."""

    mean_total_squared_error: float = 0.0
    mean_squared_residual_error: Optional[float] = None
    mean_squared_regression_error: Optional[float] = None
    r_squared: Optional[float] = None
    equation: Optional[RegressionEquation] = None


def fit_weighted_sums(n: int, sums: WeightedSums) -> LineFit:
    """Derive the regression line of ``n`` observations from their sums.

    Args:
        n (int): Number of observations the sums were accumulated from.
        sums (WeightedSums): Their weighted sufficient statistics.

    Returns:
        LineFit: For ``n == 0`` an empty fit; for ``n == 1`` only the total
        squared error; otherwise a degenerate, vertical or sloped equation with
        the metrics each case defines.

    Raises:
        ValueError: If ``n > 0`` but the sum of weights is not positive.

    Note:
        With ``Δ = <x²> - <x>²`` the weighted variance of x, the slope is
        ``(<xy> - <x><y>)/Δ`` and the y-intercept ``(<x²><y> - <x><xy>)/Δ``.
        The slope variance is ``4u/(n - f)`` with ``u`` the mean squared
        residual over ``Δ`` and ``f = 1`` for two observations, ``2``
        otherwise; two points fit exactly, so the usual ``n - 2`` would
        divide by zero.
    """
    if n <= 0:
        return LineFit()
    if not sums.one > 0:
        raise ValueError(
            f"Sum of weights must be positive for {n} observations, got {sums.one!r}"
        )

    mean_x = sums.x / sums.one
    mean_y = sums.y / sums.one
    mean_xy = sums.xy / sums.one
    mean_xx = sums.xx / sums.one
    mean_yy = sums.yy / sums.one

    delta = max(0.0, mean_xx - mean_x * mean_x)
    mean_total_se = max(0.0, mean_yy - mean_y * mean_y)

    if n == 1:
        return LineFit(mean_total_squared_error=mean_total_se)

    if delta == 0:
        if mean_total_se == 0:
            return LineFit(
                mean_total_squared_error=mean_total_se,
                equation=RegressionEquation.degenerate(mean_x, mean_y),
            )
        # every x is equal but the y values differ: a vertical line fits exactly
        return LineFit(
            mean_total_squared_error=mean_total_se,
            r_squared=1.0,
            equation=RegressionEquation.infinite_slope(mean_x),
        )

    a = (mean_xy - mean_x * mean_y) / delta
    b = (mean_xx * mean_y - mean_x * mean_xy) / delta

    mean_residual_se = max(0.0, mean_yy - (mean_xy * a + mean_y * b))
    mean_regression_se = max(
        0.0, (mean_xy - 2 * mean_x * mean_y) * a + (mean_y - b) * mean_y
    )

    if mean_total_se == 0:
        r_squared = 1.0  # horizontal line
    else:
        r_squared = 1.0 - mean_residual_se / mean_total_se
    r_squared = min(max(0.0, r_squared), 1.0)

    u = mean_residual_se / delta
    f = 1.0 if n == 2 else 2.0
    slope_var = max(0.0, (4.0 * u) / (n - f))
    intercept_var = slope_var * mean_xx

    equation = RegressionEquation.finite_slope(
        UncertainValue(a, slope_var), UncertainValue(b, intercept_var)
    )
    return LineFit(
        mean_total_squared_error=mean_total_se,
        mean_squared_residual_error=mean_residual_se,
        mean_squared_regression_error=mean_regression_se,
        r_squared=r_squared,
        equation=equation,
    )


def weighted_linear_regression(
    x: Sequence[float],
    y: Sequence[float],
    variances: Sequence[float] | None = None,
    ignoring_variance_in_y: bool = False,
    minimum_variance_in_y: float = 1e-10,
) -> Tuple[WeightedSums, LineFit]:
    """Fit a weighted straight line to whole arrays at once.

    Args:
        x (Sequence[float]): Independent values.
        y (Sequence[float]): Dependent values.
        variances (Sequence[float] | None): Per-point y-variances; ``None``
            means all zero.
        ignoring_variance_in_y (bool): Use unit weights.
        minimum_variance_in_y (float): Floor substituted for zero variances.

    Returns:
        tuple[WeightedSums, LineFit]: The sums and the fit derived from them,
        identical in meaning to what the incremental engine maintains.
    """
    x_arr = np.asarray(x, dtype=float)
    if variances is None:
        variances = np.zeros_like(x_arr)
    eff = effective_variances(variances, ignoring_variance_in_y, minimum_variance_in_y)
    sums = WeightedSums.from_arrays(x_arr, y, eff)
    return sums, fit_weighted_sums(int(len(x_arr)), sums)


def parameter_confidence_intervals(
    equation: RegressionEquation | None, n: int, level: float = 0.95
) -> Dict[str, float]:
    """Return Student-t confidence half-widths for slope and y-intercept.

    Degrees of freedom follow the slope-variance estimate: ``1`` for two
    observations, ``n - 2`` otherwise. Half-widths are NaN when the equation
    has no finite slope, when fewer than two observations contributed, or when
    SciPy is unavailable.
    """
    if not 0 < level < 1:
        raise ValueError("level must be between 0 and 1.")

    out = {"level": float(level), "dof": math.nan, "slope": math.nan, "intercept_y": math.nan}
    if equation is None or not equation.has_finite_slope or n < 2:
        return out

    dof = 1 if n == 2 else n - 2
    out["dof"] = float(dof)
    if HAVE_SCIPY:
        t_crit = float(student_t.ppf(0.5 + level / 2.0, dof))
        out["slope"] = t_crit * equation.slope.standard_deviation
        out["intercept_y"] = t_crit * equation.intercept_y.standard_deviation
    return out
