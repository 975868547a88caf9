"""
Scalar quantities with uncertainty, and rounding rules for reporting them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Tuple

from ..errors import NegativeStandardDeviationError, NegativeVarianceError


@dataclass(frozen=True)
class UncertainValue:
    """A value paired with its variance and standard deviation.

    Build instances with ``UncertainValue(value, variance)`` or with
    :meth:`from_standard_deviation`. The standard deviation is always the
    square root of the variance; a value built from a standard deviation keeps
    that exact standard deviation and stores its square as the variance.

    Raises:
        NegativeVarianceError: If ``variance`` is negative or NaN.
        NegativeStandardDeviationError: If a given standard deviation is
            negative or NaN.
    """

    value: float = 0.0
    variance: float = 0.0
    standard_deviation: float = field(init=False)

    def __post_init__(self):
        if not self.variance >= 0:
            raise NegativeVarianceError(self.variance)
        object.__setattr__(self, "value", float(self.value))
        object.__setattr__(self, "variance", float(self.variance))
        object.__setattr__(self, "standard_deviation", math.sqrt(self.variance))

    @classmethod
    def from_variance(cls, value: float, variance: float) -> "UncertainValue":
        return cls(value, variance)

    @classmethod
    def from_standard_deviation(
        cls, value: float, standard_deviation: float
    ) -> "UncertainValue":
        if not standard_deviation >= 0:
            raise NegativeStandardDeviationError(standard_deviation)
        sd = float(standard_deviation)
        out = cls(value, sd * sd)
        object.__setattr__(out, "standard_deviation", sd)
        return out

    def with_value(self, value: float) -> "UncertainValue":
        """Return a copy holding ``value`` with the same variance and SD."""
        out = UncertainValue(value, self.variance)
        object.__setattr__(out, "standard_deviation", self.standard_deviation)
        return out

    @property
    def has_variance(self) -> bool:
        return self.variance != 0

    def __str__(self) -> str:
        return format_value_with_uncertainty(self.value, self.standard_deviation)


def _round_uncertainty(u: float) -> Tuple[float, int]:
    if u <= 0 or not math.isfinite(u):
        return u, 0

    u = abs(float(u))
    exponent = math.floor(math.log10(u))
    leading = u / (10**exponent)

    sig_figs = 2 if 1.0 <= leading < 2.0 else 1
    ndigits = sig_figs - 1 - exponent

    ru = round(u, ndigits)

    if ru == 0:
        ndigits = sig_figs - exponent
        ru = round(u, ndigits)

    return float(ru), int(ndigits)


def _format_number_with_rounding(x: float, ndigits: int) -> str:
    xr = round(float(x), ndigits)
    if ndigits > 0:
        return f"{xr:.{ndigits}f}"
    return f"{xr:.0f}"


def format_value_with_uncertainty(
    value: float, uncertainty: float, unit: str = ""
) -> str:
    """Render ``value ± uncertainty`` with the value rounded to the uncertainty.

    Zero or non-finite uncertainties fall back to six significant figures.
    """
    ru, ndigits = _round_uncertainty(abs(float(uncertainty)))
    if ru == 0 or not math.isfinite(ru):
        v = f"{value:.6g}"
        u = f"{uncertainty:.6g}"
        return f"{v} ± {u} {unit}".strip()

    v_str = _format_number_with_rounding(value, ndigits)
    u_str = _format_number_with_rounding(ru, ndigits)
    return f"{v_str} ± {u_str} {unit}".strip()
