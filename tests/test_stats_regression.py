import math

import numpy as np
import pytest

from onlinefit.stats.equation import EquationKind
from onlinefit.stats.regression import (
    LineFit,
    WeightedSums,
    effective_variance,
    effective_variances,
    fit_weighted_sums,
    parameter_confidence_intervals,
    weighted_linear_regression,
)


def test_effective_variance_rules():
    assert effective_variance(0.0, False, 0.1) == 0.1
    assert effective_variance(2.0, False, 0.1) == 2.0
    assert effective_variance(2.0, True, 0.1) == 1.0
    np.testing.assert_array_equal(
        effective_variances([0.0, 2.0], False, 0.1), np.array([0.1, 2.0])
    )
    np.testing.assert_array_equal(effective_variances([0.0, 2.0], True, 0.1), [1.0, 1.0])


def test_signed_update_clamps_non_negative_sums():
    sums = WeightedSums().updated(1.0, 1.0, 1.0, sign=-1.0)
    assert sums.one == 0.0
    assert sums.xx == 0.0
    assert sums.yy == 0.0
    assert sums.x == -1.0


def test_add_then_remove_restores_sums():
    sums = WeightedSums().updated(2.0, 3.0, 0.5)
    sums = sums.updated(-1.0, 4.0, 2.0)
    assert sums.one == pytest.approx(2.5)
    assert sums.xy == pytest.approx(12.0 - 2.0)
    restored = sums.updated(-1.0, 4.0, 2.0, sign=-1.0)
    assert restored == pytest.approx(tuple(WeightedSums().updated(2.0, 3.0, 0.5)))


def test_from_arrays_rejects_bad_input():
    with pytest.raises(ValueError, match="same length"):
        WeightedSums.from_arrays([1.0], [1.0, 2.0], [1.0])
    with pytest.raises(ValueError, match="positive"):
        WeightedSums.from_arrays([1.0], [1.0], [0.0])


def test_fit_with_too_few_observations():
    assert fit_weighted_sums(0, WeightedSums()) == LineFit()
    single = fit_weighted_sums(1, WeightedSums().updated(3.0, 4.0, 1.0))
    assert single.equation is None
    assert single.r_squared is None
    assert single.mean_squared_residual_error is None
    assert single.mean_total_squared_error == 0.0


def test_fit_requires_positive_weight_sum():
    with pytest.raises(ValueError, match="positive"):
        fit_weighted_sums(2, WeightedSums())


def test_exact_line_recovered():
    x = np.array([0.0, 1.0, 2.0, 3.0, 4.0])
    _, fit = weighted_linear_regression(x, 2.0 * x + 1.0, ignoring_variance_in_y=True)
    eq = fit.equation
    assert eq.kind is EquationKind.FINITE_SLOPE
    assert math.isclose(eq.slope.value, 2.0)
    assert math.isclose(eq.intercept_y.value, 1.0, abs_tol=1e-12)
    assert math.isclose(fit.r_squared, 1.0)
    assert fit.mean_squared_residual_error == pytest.approx(0.0, abs=1e-12)
    assert eq.slope.variance == pytest.approx(0.0, abs=1e-12)


def test_three_point_fit_by_hand():
    # unit weights; values worked out from the weighted means
    _, fit = weighted_linear_regression([0, 1, 2], [0, 1, 3], ignoring_variance_in_y=True)
    eq = fit.equation
    assert eq.slope.value == pytest.approx(1.5)
    assert eq.intercept_y.value == pytest.approx(-1.0 / 6.0)
    assert fit.mean_total_squared_error == pytest.approx(14.0 / 9.0)
    assert fit.mean_squared_residual_error == pytest.approx(1.0 / 18.0)
    assert fit.mean_squared_regression_error == pytest.approx(1.5)
    assert fit.r_squared == pytest.approx(27.0 / 28.0)
    assert eq.slope.variance == pytest.approx(1.0 / 3.0)
    assert eq.intercept_y.variance == pytest.approx(5.0 / 9.0)


def test_two_point_fit_has_no_residual():
    _, fit = weighted_linear_regression([0.0, 2.0], [1.0, 5.0], ignoring_variance_in_y=True)
    assert fit.equation.slope.value == pytest.approx(2.0)
    assert fit.equation.slope.variance == pytest.approx(0.0, abs=1e-12)


def test_weighted_fit_matches_numpy_polyfit():
    x = np.array([0.0, 1.0, 2.0, 3.0, 4.0])
    y = np.array([1.1, 2.9, 5.2, 6.8, 9.1])
    sd = np.array([0.1, 0.2, 0.1, 0.3, 0.2])
    _, fit = weighted_linear_regression(x, y, sd**2)
    m, b = np.polyfit(x, y, 1, w=1.0 / sd)
    assert fit.equation.slope.value == pytest.approx(m)
    assert fit.equation.intercept_y.value == pytest.approx(b)


def test_unit_weight_r_squared_matches_definition():
    x = np.array([0.0, 1.0, 2.0, 3.0, 4.0, 5.0])
    y = np.array([0.3, 0.9, 2.4, 2.8, 4.4, 4.9])
    _, fit = weighted_linear_regression(x, y, ignoring_variance_in_y=True)
    m, b = np.polyfit(x, y, 1)
    sse = np.sum((y - (m * x + b)) ** 2)
    sst = np.sum((y - y.mean()) ** 2)
    assert fit.r_squared == pytest.approx(1.0 - sse / sst)


def test_vertical_and_degenerate_cases():
    _, vertical = weighted_linear_regression([5, 5], [1, 9], ignoring_variance_in_y=True)
    assert vertical.equation.kind is EquationKind.INFINITE_SLOPE
    assert vertical.equation.intercept_x == 5.0
    assert vertical.r_squared == 1.0
    assert vertical.mean_squared_residual_error is None

    _, point = weighted_linear_regression([2, 2, 2], [3, 3, 3], ignoring_variance_in_y=True)
    assert point.equation.kind is EquationKind.DEGENERATE
    assert point.equation.point == (2.0, 3.0)
    assert point.r_squared is None


def test_horizontal_line_has_unit_r_squared():
    _, fit = weighted_linear_regression([0, 1, 2], [4, 4, 4], ignoring_variance_in_y=True)
    assert fit.equation.has_zero_slope
    assert fit.r_squared == 1.0


def test_confidence_intervals():
    scipy_stats = pytest.importorskip("scipy.stats")
    _, fit = weighted_linear_regression([0, 1, 2], [0, 1, 3], ignoring_variance_in_y=True)
    ci = parameter_confidence_intervals(fit.equation, 3)
    t_crit = scipy_stats.t.ppf(0.975, 1)
    assert ci["dof"] == 1.0
    assert ci["slope"] == pytest.approx(t_crit * math.sqrt(1.0 / 3.0))
    assert ci["intercept_y"] == pytest.approx(t_crit * math.sqrt(5.0 / 9.0))


def test_confidence_intervals_undefined_without_slope():
    ci = parameter_confidence_intervals(None, 5)
    assert math.isnan(ci["slope"])
    with pytest.raises(ValueError, match="level"):
        parameter_confidence_intervals(None, 5, level=1.5)


def test_clamping_passes_nan_through():
    sums = WeightedSums().updated(float("nan"), 1.0, 1.0)
    assert math.isnan(sums.xx)
    assert sums.one == 1.0
