"""Describe a fitted straight line as one of three mutually exclusive cases."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .uncertainty import UncertainValue


class EquationKind(str, enum.Enum):
    FINITE_SLOPE = "finite_slope"
    INFINITE_SLOPE = "infinite_slope"
    DEGENERATE = "degenerate"


@dataclass(frozen=True)
class RegressionEquation:
    """Tagged variant for the regression line.

    Exactly one of the following payloads is populated, selected by ``kind``:

    - ``FINITE_SLOPE``: ``slope`` and ``intercept_y`` (both uncertain values),
      i.e. ``y = slope * x + intercept_y``.
    - ``INFINITE_SLOPE``: ``x`` holds the x-intercept of the vertical line.
    - ``DEGENERATE``: ``x`` and ``y`` hold the single point all contributing
      observations coincide at.

    Use the :meth:`finite_slope`, :meth:`infinite_slope` and
    :meth:`degenerate` constructors rather than the raw initializer.
    """

    kind: EquationKind
    slope: Optional[UncertainValue] = None
    intercept_y: Optional[UncertainValue] = None
    x: Optional[float] = None
    y: Optional[float] = None

    def __post_init__(self):
        kind = EquationKind(self.kind)
        object.__setattr__(self, "kind", kind)
        if kind is EquationKind.FINITE_SLOPE:
            ok = (
                self.slope is not None
                and self.intercept_y is not None
                and self.x is None
                and self.y is None
            )
        elif kind is EquationKind.INFINITE_SLOPE:
            ok = (
                self.x is not None
                and self.y is None
                and self.slope is None
                and self.intercept_y is None
            )
        else:
            ok = (
                self.x is not None
                and self.y is not None
                and self.slope is None
                and self.intercept_y is None
            )
        if not ok:
            raise ValueError(f"Inconsistent payload for {kind.value} equation.")
        if self.x is not None:
            object.__setattr__(self, "x", float(self.x))
        if self.y is not None:
            object.__setattr__(self, "y", float(self.y))

    @classmethod
    def finite_slope(
        cls, slope: UncertainValue, intercept_y: UncertainValue
    ) -> "RegressionEquation":
        return cls(EquationKind.FINITE_SLOPE, slope=slope, intercept_y=intercept_y)

    @classmethod
    def infinite_slope(cls, intercept_x: float) -> "RegressionEquation":
        return cls(EquationKind.INFINITE_SLOPE, x=intercept_x)

    @classmethod
    def degenerate(cls, x: float, y: float) -> "RegressionEquation":
        return cls(EquationKind.DEGENERATE, x=x, y=y)

    @property
    def is_degenerate(self) -> bool:
        return self.kind is EquationKind.DEGENERATE

    @property
    def has_finite_slope(self) -> bool:
        return self.kind is EquationKind.FINITE_SLOPE

    @property
    def has_zero_slope(self) -> bool:
        return self.has_finite_slope and self.slope.value == 0

    @property
    def intercept_x(self) -> Optional[float]:
        """Return where the line crosses ``y = 0``.

        ``None`` for horizontal lines (which never cross, or coincide with the
        axis) and for degenerate equations.
        """
        if self.kind is EquationKind.FINITE_SLOPE:
            if self.slope.value == 0:
                return None
            return -(self.intercept_y.value / self.slope.value)
        if self.kind is EquationKind.INFINITE_SLOPE:
            return self.x
        return None

    @property
    def point(self) -> Optional[Tuple[float, float]]:
        if self.kind is EquationKind.DEGENERATE:
            return (self.x, self.y)
        return None

    def evaluate(self, x: float) -> float:
        """Return the line's y value at ``x``; only defined for finite slopes."""
        if self.kind is not EquationKind.FINITE_SLOPE:
            raise ValueError(f"Cannot evaluate a {self.kind.value} equation at x.")
        return self.slope.value * float(x) + self.intercept_y.value

    def is_close(self, other: "RegressionEquation", rtol: float, atol: float) -> bool:
        if self.kind is not other.kind:
            return False

        def close(a: float, b: float) -> bool:
            return math.isclose(a, b, rel_tol=rtol, abs_tol=atol)

        if self.kind is EquationKind.FINITE_SLOPE:
            return (
                close(self.slope.value, other.slope.value)
                and close(self.slope.variance, other.slope.variance)
                and close(self.intercept_y.value, other.intercept_y.value)
                and close(self.intercept_y.variance, other.intercept_y.variance)
            )
        if self.kind is EquationKind.INFINITE_SLOPE:
            return close(self.x, other.x)
        return close(self.x, other.x) and close(self.y, other.y)
