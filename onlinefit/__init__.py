"""
Online (incremental) weighted linear regression.

Fits ``y = a*x + b`` to a stream of observations whose y values may carry a
variance, updating the fit in constant time per added observation and
supporting removal for moving-window use.

Modules:
    - engine: ``LinearRegression``, the incremental fitter.
    - data: ``RegressionData``, the immutable snapshot produced per update.
    - observation: ``Observation``, one (x, y ± σ) input.
    - stats: uncertain values, the equation variant and the fitting numerics.
    - session: point-and-drag editing on top of an engine.
    - reporting / plotting: text, tables and figures of snapshots.
    - replay: batch replay of CSV files from the command line.
"""

__version__ = "1.0.0"

from .config import RegressionConfig
from .data import RegressionData
from .engine import LinearRegression
from .errors import (
    ConfigurationError,
    InvalidArgumentError,
    InvalidMinimumVarianceError,
    NegativeStandardDeviationError,
    NegativeValueError,
    NegativeVarianceError,
    OperationError,
    RegressionError,
    RemoveFromEmptyCollectionError,
    RemoveNonExistingObservationError,
)
from .observation import Observation
from .session import RegressionSession
from .stats import EquationKind, RegressionEquation, UncertainValue

__all__ = [
    # Core
    "LinearRegression",
    "RegressionConfig",
    "RegressionData",
    "Observation",
    "RegressionEquation",
    "EquationKind",
    "UncertainValue",
    "RegressionSession",
    # Errors
    "InvalidArgumentError",
    "NegativeValueError",
    "NegativeVarianceError",
    "NegativeStandardDeviationError",
    "RegressionError",
    "ConfigurationError",
    "InvalidMinimumVarianceError",
    "OperationError",
    "RemoveFromEmptyCollectionError",
    "RemoveNonExistingObservationError",
]
