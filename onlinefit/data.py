"""Immutable snapshots of the regression state after each processed observation."""

from __future__ import annotations

import functools
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .errors import InvalidArgumentError, NegativeValueError
from .observation import Observation
from .stats.equation import RegressionEquation
from .stats.regression import LineFit, WeightedSums


@functools.total_ordering
@dataclass(frozen=True)
class RegressionData:
    """Observations, weighted sums, error measures and equation at one index.

    Snapshots are never mutated; the engine installs a new one for every
    ``add``/``remove``. They order by ``index``.

    Attributes:
        index: Position of this snapshot in the engine's sequence of states.
        observations: Contributing observations in insertion order.
        sum_one_over_variance_y: ``Σ 1/σ²``.
        sum_x_over_variance_y: ``Σ x/σ²``.
        sum_y_over_variance_y: ``Σ y/σ²``.
        sum_xy_over_variance_y: ``Σ xy/σ²``.
        sum_x_squared_over_variance_y: ``Σ x²/σ²``.
        sum_y_squared_over_variance_y: ``Σ y²/σ²``.
        mean_total_squared_error: Weighted variance of y.
        mean_squared_residual_error: Weighted mean squared distance of the
            observations from the line; ``None`` unless the line is sloped.
        mean_squared_regression_error: Weighted mean squared distance of the
            line from the mean of y; ``None`` unless the line is sloped.
        r_squared: Fraction of the y variance explained by the line.
        equation: The fitted line; ``None`` for fewer than two observations.

    Raises:
        NegativeValueError: If a sum or metric that cannot be negative is.
        InvalidArgumentError: If ``r_squared`` exceeds one.
    """

    index: int = 0
    observations: Tuple[Observation, ...] = field(default_factory=tuple)
    sum_one_over_variance_y: float = 0.0
    sum_x_over_variance_y: float = 0.0
    sum_y_over_variance_y: float = 0.0
    sum_xy_over_variance_y: float = 0.0
    sum_x_squared_over_variance_y: float = 0.0
    sum_y_squared_over_variance_y: float = 0.0
    mean_total_squared_error: float = 0.0
    mean_squared_residual_error: Optional[float] = None
    mean_squared_regression_error: Optional[float] = None
    r_squared: Optional[float] = None
    equation: Optional[RegressionEquation] = None

    def __post_init__(self):
        object.__setattr__(self, "observations", tuple(self.observations))

        required = (
            self.sum_one_over_variance_y,
            self.sum_x_squared_over_variance_y,
            self.sum_y_squared_over_variance_y,
            self.mean_total_squared_error,
        )
        optional = (
            self.mean_squared_residual_error,
            self.mean_squared_regression_error,
            self.r_squared,
        )
        for value in required + tuple(v for v in optional if v is not None):
            if not value >= 0:
                raise NegativeValueError(value)
        if self.r_squared is not None and self.r_squared > 1:
            raise InvalidArgumentError(
                self.r_squared, f"r_squared must not exceed 1, got {self.r_squared!r}"
            )

    def __lt__(self, other: "RegressionData") -> bool:
        if not isinstance(other, RegressionData):
            return NotImplemented
        return self.index < other.index

    @classmethod
    def empty(cls, index: int = 0) -> "RegressionData":
        return cls(index=index)

    @classmethod
    def from_fit(
        cls,
        index: int,
        observations: Tuple[Observation, ...],
        sums: WeightedSums,
        fit: LineFit,
    ) -> "RegressionData":
        return cls(
            index=index,
            observations=observations,
            sum_one_over_variance_y=sums.one,
            sum_x_over_variance_y=sums.x,
            sum_y_over_variance_y=sums.y,
            sum_xy_over_variance_y=sums.xy,
            sum_x_squared_over_variance_y=sums.xx,
            sum_y_squared_over_variance_y=sums.yy,
            mean_total_squared_error=fit.mean_total_squared_error,
            mean_squared_residual_error=fit.mean_squared_residual_error,
            mean_squared_regression_error=fit.mean_squared_regression_error,
            r_squared=fit.r_squared,
            equation=fit.equation,
        )

    @property
    def number_of_observations(self) -> int:
        return len(self.observations)

    @property
    def is_empty(self) -> bool:
        return not self.observations

    @property
    def sums(self) -> WeightedSums:
        return WeightedSums(
            one=self.sum_one_over_variance_y,
            x=self.sum_x_over_variance_y,
            y=self.sum_y_over_variance_y,
            xy=self.sum_xy_over_variance_y,
            xx=self.sum_x_squared_over_variance_y,
            yy=self.sum_y_squared_over_variance_y,
        )

    @property
    def mean_x(self) -> Optional[float]:
        """Weighted mean of x, or ``None`` without observations."""
        if self.sum_one_over_variance_y <= 0:
            return None
        return self.sum_x_over_variance_y / self.sum_one_over_variance_y

    @property
    def mean_y(self) -> Optional[float]:
        if self.sum_one_over_variance_y <= 0:
            return None
        return self.sum_y_over_variance_y / self.sum_one_over_variance_y

    def approx_equal(
        self, other: "RegressionData", rtol: float = 1e-9, atol: float = 1e-12
    ) -> bool:
        """Compare two snapshots with floating-point tolerance.

        Observations and the equation kind must match exactly; sums, metrics
        and equation parameters within ``rtol``/``atol``. ``index`` is ignored.
        """
        if self.observations != other.observations:
            return False

        def close(a: Optional[float], b: Optional[float]) -> bool:
            if a is None or b is None:
                return a is None and b is None
            return math.isclose(a, b, rel_tol=rtol, abs_tol=atol)

        pairs = (
            (self.sum_one_over_variance_y, other.sum_one_over_variance_y),
            (self.sum_x_over_variance_y, other.sum_x_over_variance_y),
            (self.sum_y_over_variance_y, other.sum_y_over_variance_y),
            (self.sum_xy_over_variance_y, other.sum_xy_over_variance_y),
            (self.sum_x_squared_over_variance_y, other.sum_x_squared_over_variance_y),
            (self.sum_y_squared_over_variance_y, other.sum_y_squared_over_variance_y),
            (self.mean_total_squared_error, other.mean_total_squared_error),
            (self.mean_squared_residual_error, other.mean_squared_residual_error),
            (self.mean_squared_regression_error, other.mean_squared_regression_error),
            (self.r_squared, other.r_squared),
        )
        if not all(close(a, b) for a, b in pairs):
            return False

        if self.equation is None or other.equation is None:
            return self.equation is None and other.equation is None
        return self.equation.is_close(other.equation, rtol, atol)
