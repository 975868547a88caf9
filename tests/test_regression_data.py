import pytest

from onlinefit import Observation, RegressionData, RegressionEquation, UncertainValue
from onlinefit.errors import InvalidArgumentError, NegativeValueError


def test_empty_snapshot():
    data = RegressionData.empty()
    assert data.index == 0
    assert data.number_of_observations == 0
    assert data.is_empty
    assert data.equation is None
    assert data.r_squared is None
    assert data.mean_x is None
    assert tuple(data.sums) == (0.0,) * 6


@pytest.mark.parametrize(
    "field",
    [
        "sum_one_over_variance_y",
        "sum_x_squared_over_variance_y",
        "sum_y_squared_over_variance_y",
        "mean_total_squared_error",
        "mean_squared_residual_error",
        "mean_squared_regression_error",
        "r_squared",
    ],
)
def test_negative_values_rejected(field):
    with pytest.raises(NegativeValueError) as excinfo:
        RegressionData(**{field: -0.5})
    assert excinfo.value.value == -0.5


def test_signed_sums_may_be_negative():
    data = RegressionData(sum_x_over_variance_y=-3.0, sum_xy_over_variance_y=-1.0)
    assert data.sum_x_over_variance_y == -3.0


def test_r_squared_above_one_rejected():
    with pytest.raises(InvalidArgumentError, match="r_squared"):
        RegressionData(r_squared=1.5)


def test_observations_are_stored_as_tuple():
    obs = [Observation.from_values(1, 2), Observation.from_values(3, 4)]
    data = RegressionData(index=2, observations=obs, sum_one_over_variance_y=2.0)
    assert data.observations == tuple(obs)
    assert data.number_of_observations == 2
    obs.append(Observation.from_values(5, 6))
    assert data.number_of_observations == 2


def test_snapshots_order_by_index():
    snapshots = [RegressionData.empty(i) for i in (2, 0, 1)]
    assert [d.index for d in sorted(snapshots)] == [0, 1, 2]
    assert RegressionData.empty(0) < RegressionData.empty(1)


def test_weighted_means():
    data = RegressionData(
        sum_one_over_variance_y=4.0,
        sum_x_over_variance_y=2.0,
        sum_y_over_variance_y=-8.0,
    )
    assert data.mean_x == 0.5
    assert data.mean_y == -2.0


def test_approx_equal():
    obs = (Observation.from_values(0, 0), Observation.from_values(1, 1))
    eq = RegressionEquation.finite_slope(UncertainValue(1.0), UncertainValue(0.0))
    a = RegressionData(
        index=3, observations=obs, sum_one_over_variance_y=2.0, r_squared=1.0, equation=eq
    )
    b = RegressionData(
        index=5,
        observations=obs,
        sum_one_over_variance_y=2.0 + 1e-14,
        r_squared=1.0,
        equation=eq,
    )
    assert a.approx_equal(b)
    assert not a.approx_equal(RegressionData(index=3, observations=obs[:1]))
    assert not a.approx_equal(
        RegressionData(index=3, observations=obs, sum_one_over_variance_y=2.0, r_squared=1.0)
    )
