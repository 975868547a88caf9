"""Define the exceptions raised by value types and the regression engine.

Two families are used:

- ``InvalidArgumentError`` (a ``ValueError``) for value-type constructors that
  receive a negative magnitude where only non-negative ones make sense.
- ``RegressionError`` for engine configuration and engine operations.
"""

from __future__ import annotations

from typing import Any


class InvalidArgumentError(ValueError):
    """Raised when an argument has an invalid numeric value.

    Attributes:
        value: The offending value.
    """

    label = "value"

    def __init__(self, value: float, message: str | None = None):
        self.value = value
        if message is None:
            message = f"Expected a non-negative {self.label}, got {value!r}"
        super().__init__(message)


class NegativeValueError(InvalidArgumentError):
    label = "value"


class NegativeVarianceError(InvalidArgumentError):
    label = "variance"


class NegativeStandardDeviationError(InvalidArgumentError):
    label = "standard deviation"


class RegressionError(Exception):
    """Base class for errors raised by ``LinearRegression``."""


class ConfigurationError(RegressionError, ValueError):
    """Raised when an engine cannot be built from the given configuration."""


class InvalidMinimumVarianceError(ConfigurationError):
    def __init__(self, minimum_variance: float):
        self.minimum_variance = minimum_variance
        super().__init__(
            f"minimum_variance_in_y must be > 0, got {minimum_variance!r}"
        )


class OperationError(RegressionError):
    """Raised when an engine operation cannot be carried out.

    The engine state is left untouched when this is raised.

    Attributes:
        observation: The observation the operation was called with.
    """

    def __init__(self, observation: Any, message: str):
        self.observation = observation
        super().__init__(message)


class RemoveFromEmptyCollectionError(OperationError):
    def __init__(self, observation: Any):
        super().__init__(
            observation,
            f"Cannot remove {observation!r}: no observations have been added.",
        )


class RemoveNonExistingObservationError(OperationError):
    def __init__(self, observation: Any):
        super().__init__(
            observation,
            f"Cannot remove {observation!r}: it is not among the current observations.",
        )
