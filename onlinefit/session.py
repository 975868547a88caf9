"""Drive a regression engine from point-and-drag style edits.

``RegressionSession`` translates the edits an interactive plot offers (tap to
add or select, drag to move, long-press to delete, pinch to change the error
bar) into ``add``/``remove`` calls on a ``LinearRegression`` and tracks which
observation is selected. Rendering is left to the caller, who re-reads
:attr:`RegressionSession.current_data` after each edit.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from .config import DEFAULT_SESSION_MINIMUM_VARIANCE_IN_Y, RegressionConfig
from .data import RegressionData
from .engine import LinearRegression
from .observation import Observation

logger = logging.getLogger(__name__)


class RegressionSession:
    """One engine plus an optional selected observation.

    Args:
        tap_tolerance (float): Distance within which a point counts as hit by
            :meth:`index_of_observation_nearest`.
        config (RegressionConfig | None): Engine settings. Defaults to honouring
            y-variances with a minimum variance of ``0.1`` and no history.
    """

    def __init__(self, tap_tolerance: float, config: RegressionConfig | None = None):
        if tap_tolerance < 0:
            raise ValueError(f"tap_tolerance must be >= 0, got {tap_tolerance!r}")
        if config is None:
            config = RegressionConfig(
                minimum_variance_in_y=DEFAULT_SESSION_MINIMUM_VARIANCE_IN_Y
            )
        self.tap_tolerance = float(tap_tolerance)
        self.regression = LinearRegression.from_config(config)
        self.selected_index: Optional[int] = None

    @property
    def current_data(self) -> RegressionData:
        return self.regression.current_data

    @property
    def observations(self) -> Tuple[Observation, ...]:
        return self.regression.current_data.observations

    @property
    def selected_observation(self) -> Optional[Observation]:
        if self.selected_index is None:
            return None
        return self.observations[self.selected_index]

    def index_of_observation_nearest(self, x: float, y: float) -> Optional[int]:
        """Return the index of the first observation hit at ``(x, y)``.

        A point is hit when ``x`` lies within the tap tolerance of it and ``y``
        within the larger of the tolerance and its y standard deviation.
        """
        for index, obs in enumerate(self.observations):
            if abs(obs.x - x) > self.tap_tolerance:
                continue
            tolerance = max(obs.y.standard_deviation, self.tap_tolerance)
            if abs(obs.y.value - y) <= tolerance:
                return index
        return None

    def is_selected(self, index: int) -> bool:
        return self.selected_index == index

    def select(self, index: int) -> Optional[Observation]:
        """Toggle the selection of the observation at ``index``.

        Returns:
            The newly selected observation, or ``None`` if ``index`` was
            already selected and has been deselected.
        """
        self._check_index(index)
        if self.selected_index == index:
            self.selected_index = None
            return None
        self.selected_index = index
        return self.observations[index]

    def add(self, observation: Observation) -> None:
        self.regression.add(observation)
        self.selected_index = len(self.observations) - 1
        logger.debug("added %r", observation)

    def remove_at(self, index: int) -> Observation:
        self._check_index(index)
        observation = self.observations[index]
        self.selected_index = None
        self.regression.remove(observation)
        logger.debug("removed %r", observation)
        return observation

    def move(self, index: int, x: float, y: float) -> Observation:
        """Move the observation at ``index`` to ``(x, y)``; it becomes selected."""
        moved = self.observations[self._check_index(index)].moved_to(x, y)
        self.remove_at(index)
        self.add(moved)
        return moved

    def set_selected_standard_deviation(
        self, standard_deviation: float
    ) -> Optional[Observation]:
        """Give the selected observation a new y standard deviation."""
        current = self.selected_observation
        if current is None:
            return None
        updated = current.with_y_standard_deviation(standard_deviation)
        self.remove_at(self.selected_index)
        self.add(updated)
        return updated

    def clear(self) -> None:
        self.regression.reset()
        self.selected_index = None
        logger.debug("session cleared")

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self.observations):
            raise IndexError(
                f"Observation index {index} out of range for {len(self.observations)} observations"
            )
        return index
