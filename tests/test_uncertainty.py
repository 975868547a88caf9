import pytest

from onlinefit.errors import NegativeStandardDeviationError, NegativeVarianceError
from onlinefit.stats.uncertainty import (
    UncertainValue,
    format_value_with_uncertainty,
)


def test_standard_deviation_derived_from_variance():
    uv = UncertainValue(2.0, 4.0)
    assert uv.value == 2.0
    assert uv.variance == 4.0
    assert uv.standard_deviation == 2.0


def test_from_standard_deviation_keeps_exact_sd():
    uv = UncertainValue.from_standard_deviation(1.0, 3.0)
    assert uv.variance == 9.0
    assert uv.standard_deviation == 3.0
    assert uv == UncertainValue(1.0, 9.0)


def test_default_is_exact_zero():
    uv = UncertainValue()
    assert (uv.value, uv.variance, uv.standard_deviation) == (0.0, 0.0, 0.0)
    assert not uv.has_variance


def test_negative_variance_rejected():
    with pytest.raises(NegativeVarianceError) as excinfo:
        UncertainValue.from_variance(1.0, -1.0)
    assert excinfo.value.value == -1.0
    assert isinstance(excinfo.value, ValueError)


def test_negative_standard_deviation_rejected():
    with pytest.raises(NegativeStandardDeviationError, match="standard deviation"):
        UncertainValue.from_standard_deviation(1.0, -0.5)


def test_equality_is_structural():
    assert UncertainValue(1.0, 0.25) == UncertainValue.from_standard_deviation(1.0, 0.5)
    assert UncertainValue(1.0, 0.25) != UncertainValue(1.0, 0.5)
    assert UncertainValue(1.0, 0.25) != UncertainValue(2.0, 0.25)


def test_integer_inputs_become_floats():
    uv = UncertainValue(3, 4)
    assert isinstance(uv.value, float)
    assert isinstance(uv.standard_deviation, float)


def test_format_keeps_two_sig_figs_for_leading_one():
    assert format_value_with_uncertainty(12.3456, 0.16) == "12.35 ± 0.16"


def test_format_zero_uncertainty_falls_back_to_significant_figures():
    assert format_value_with_uncertainty(1.23456, 0.0) == "1.23456 ± 0"


def test_format_value_with_uncertainty():
    assert format_value_with_uncertainty(4.5678, 0.03) == "4.57 ± 0.03"
    assert str(UncertainValue.from_standard_deviation(1.234, 0.3)) == "1.2 ± 0.3"


@pytest.mark.parametrize("variance", [float("nan"), -1e-300])
def test_nan_or_negative_variance_rejected(variance):
    with pytest.raises(NegativeVarianceError):
        UncertainValue(1.0, variance)


def test_nan_standard_deviation_rejected():
    with pytest.raises(NegativeStandardDeviationError):
        UncertainValue.from_standard_deviation(1.0, float("nan"))


def test_standard_deviation_is_not_an_init_argument():
    with pytest.raises(TypeError):
        UncertainValue(1.0, 4.0, 7.0)
    assert UncertainValue(1.0, 4.0) == UncertainValue.from_standard_deviation(1.0, 2.0)


def test_with_value_keeps_uncertainty():
    uv = UncertainValue.from_standard_deviation(1.0, 0.3)
    moved = uv.with_value(-2)
    assert moved.value == -2.0
    assert moved.variance == uv.variance
    assert moved.standard_deviation == 0.3
