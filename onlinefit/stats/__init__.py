"""
Numerical building blocks for online weighted linear regression.

Modules:
    uncertainty:
        ``UncertainValue`` (a value with variance and standard deviation) and
        rounding/formatting of values to their uncertainty.

    equation:
        ``RegressionEquation``, the sloped / vertical / degenerate line variant.

    regression:
        Weighting rule, the six weighted sufficient sums with signed updates,
        the case analysis producing a ``LineFit``, a vectorised batch fit, and
        parameter confidence intervals.

Design Principle:
    This subpackage knows nothing about observations, snapshots or the engine.
    It works on plain floats and arrays and can be tested on its own.
"""

from .equation import EquationKind, RegressionEquation
from .regression import (
    LineFit,
    WeightedSums,
    effective_variance,
    effective_variances,
    fit_weighted_sums,
    parameter_confidence_intervals,
    weighted_linear_regression,
)
from .uncertainty import (
    UncertainValue,
    format_value_with_uncertainty,
)

__all__ = [
    "EquationKind",
    "RegressionEquation",
    "LineFit",
    "WeightedSums",
    "effective_variance",
    "effective_variances",
    "fit_weighted_sums",
    "parameter_confidence_intervals",
    "weighted_linear_regression",
    "UncertainValue",
    "format_value_with_uncertainty",
]
