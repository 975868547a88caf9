"""Construction parameters for the regression engine."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidMinimumVarianceError

DEFAULT_MINIMUM_VARIANCE_IN_Y = 1e-10
DEFAULT_SESSION_MINIMUM_VARIANCE_IN_Y = 0.1


@dataclass(frozen=True)
class RegressionConfig:
    """Container for ``LinearRegression`` settings.

    Attributes:
        ignoring_variance_in_y: Weight every observation equally instead of by
            ``1/variance``. Fixed for the lifetime of an engine.
        minimum_variance_in_y: Variance used for observations whose own
            y-variance is exactly zero, when variances are not ignored. Must
            be strictly positive.
        keeping_history: Whether the engine starts out recording every
            snapshot. History grows without bound while enabled.
    """

    ignoring_variance_in_y: bool = False
    minimum_variance_in_y: float = DEFAULT_MINIMUM_VARIANCE_IN_Y
    keeping_history: bool = False

    def __post_init__(self):
        if not self.minimum_variance_in_y > 0:
            raise InvalidMinimumVarianceError(self.minimum_variance_in_y)
