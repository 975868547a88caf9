"""Define the atomic input unit of the regression: one (x, y ± σ) observation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .errors import NegativeStandardDeviationError, NegativeVarianceError
from .stats.uncertainty import UncertainValue


@dataclass(frozen=True)
class Observation:
    """An independent value ``x`` and an uncertain dependent value ``y``.

    ``y`` may be passed as a plain number, in which case it has zero variance.
    Equality is structural on ``(x, y)``, including the y-variance.
    """

    x: float
    y: UncertainValue

    def __post_init__(self):
        object.__setattr__(self, "x", float(self.x))
        if not isinstance(self.y, UncertainValue):
            object.__setattr__(self, "y", UncertainValue(self.y))

    @classmethod
    def from_values(
        cls,
        x: Union[int, float],
        y: Union[int, float],
        *,
        y_variance: float | None = None,
        y_standard_deviation: float | None = None,
    ) -> "Observation":
        """Build an observation from plain numbers.

        Args:
            x: Independent value.
            y: Dependent value.
            y_variance: Variance of ``y``; defaults to zero.
            y_standard_deviation: Standard deviation of ``y``, as an
                alternative to ``y_variance``.

        Raises:
            ValueError: If both ``y_variance`` and ``y_standard_deviation``
                are given.
            NegativeVarianceError: If ``y_variance`` is negative.
            NegativeStandardDeviationError: If ``y_standard_deviation`` is
                negative.
        """
        if y_variance is not None and y_standard_deviation is not None:
            raise ValueError("Give either y_variance or y_standard_deviation, not both.")
        if y_standard_deviation is not None:
            return cls(x, UncertainValue.from_standard_deviation(y, y_standard_deviation))
        return cls(x, UncertainValue.from_variance(y, 0.0 if y_variance is None else y_variance))

    @property
    def y_has_variance(self) -> bool:
        return self.y.variance != 0

    def with_y_variance(self, y_variance: float) -> "Observation":
        if not y_variance >= 0:
            raise NegativeVarianceError(y_variance)
        return Observation(self.x, UncertainValue.from_variance(self.y.value, y_variance))

    def with_y_standard_deviation(self, y_standard_deviation: float) -> "Observation":
        if not y_standard_deviation >= 0:
            raise NegativeStandardDeviationError(y_standard_deviation)
        return Observation(
            self.x,
            UncertainValue.from_standard_deviation(self.y.value, y_standard_deviation),
        )

    def moved_to(self, x: float, y: float) -> "Observation":
        """Return a copy at new coordinates, keeping the y-uncertainty."""
        return Observation(x, self.y.with_value(y))
