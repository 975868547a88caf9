"""Online weighted linear regression over a stream of observations.

Each ``add`` updates six weighted sums in constant time and derives the new
line from them; the full observation history is never rescanned. ``remove``
scans the current observations once to find the one to take out, so it is
linear in their number, which makes moving-window regressions possible.

Every processed observation produces a new immutable ``RegressionData``
snapshot. A reader holding a snapshot can keep using it while the engine moves
on. The engine itself is not synchronised: callers must serialise ``add``,
``remove`` and ``reset`` on one instance.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from .config import DEFAULT_MINIMUM_VARIANCE_IN_Y, RegressionConfig
from .data import RegressionData
from .errors import (
    InvalidMinimumVarianceError,
    RemoveFromEmptyCollectionError,
    RemoveNonExistingObservationError,
)
from .observation import Observation
from .stats.regression import (
    WeightedSums,
    effective_variance,
    effective_variances,
    fit_weighted_sums,
)

logger = logging.getLogger(__name__)


class LinearRegression:
    """Incremental weighted least-squares fit of ``y = a*x + b``.

    Args:
        ignoring_variance_in_y (bool): Give every observation unit weight
            instead of ``1/variance``.
        minimum_variance_in_y (float): Variance substituted for observations
            with exactly zero y-variance when variances are honoured. Must be
            positive. Defaults to ``1e-10``.
        keeping_history (bool): Record every installed snapshot in
            :attr:`history`. Can be toggled later through the attribute of
            the same name; turning it off stops recording but keeps what was
            recorded. History grows without bound while enabled.

    Raises:
        InvalidMinimumVarianceError: If ``minimum_variance_in_y <= 0``.
    """

    def __init__(
        self,
        ignoring_variance_in_y: bool,
        minimum_variance_in_y: float = DEFAULT_MINIMUM_VARIANCE_IN_Y,
        keeping_history: bool = False,
    ):
        if not minimum_variance_in_y > 0:
            raise InvalidMinimumVarianceError(minimum_variance_in_y)

        self._ignoring_variance_in_y = bool(ignoring_variance_in_y)
        self._minimum_variance_in_y = float(minimum_variance_in_y)
        self.keeping_history = bool(keeping_history)

        self._history: list[RegressionData] = []
        self._current = RegressionData.empty()

    @classmethod
    def from_config(cls, config: RegressionConfig) -> "LinearRegression":
        return cls(
            ignoring_variance_in_y=config.ignoring_variance_in_y,
            minimum_variance_in_y=config.minimum_variance_in_y,
            keeping_history=config.keeping_history,
        )

    @property
    def ignoring_variance_in_y(self) -> bool:
        return self._ignoring_variance_in_y

    @property
    def minimum_variance_in_y(self) -> float:
        return self._minimum_variance_in_y

    @property
    def current_data(self) -> RegressionData:
        return self._current

    @property
    def history(self) -> Tuple[RegressionData, ...]:
        """Snapshots installed while history-keeping was enabled, oldest first."""
        return tuple(self._history)

    def effective_variance(self, observation: Observation) -> float:
        """Return the variance ``observation`` is weighted with by this engine."""
        return effective_variance(
            observation.y.variance,
            self._ignoring_variance_in_y,
            self._minimum_variance_in_y,
        )

    def add(self, observation: Observation) -> None:
        """Append ``observation`` and refit in constant time."""
        self._process(observation, sign=1.0, index_to_remove=None)

    def remove(self, observation: Observation) -> None:
        """Remove the first current observation equal to ``observation``.

        Raises:
            RemoveFromEmptyCollectionError: If there are no observations.
            RemoveNonExistingObservationError: If no current observation is
                equal to ``observation``.
        """
        observations = self._current.observations
        if not observations:
            raise RemoveFromEmptyCollectionError(observation)

        index = next(
            (i for i, element in enumerate(observations) if element == observation),
            None,
        )
        if index is None:
            raise RemoveNonExistingObservationError(observation)

        self._process(observations[index], sign=-1.0, index_to_remove=index)

    def reset(self) -> None:
        """Drop all observations and history; configuration is kept."""
        self._current = RegressionData.empty()
        self._history = []
        logger.debug("regression reset")

    def _process(
        self, observation: Observation, sign: float, index_to_remove: Optional[int]
    ) -> None:
        current = self._current
        new_index = current.index + 1
        n = current.number_of_observations + (1 if index_to_remove is None else -1)

        if n == 0:
            self._install(RegressionData.empty(new_index))
            return

        observations = list(current.observations)
        if index_to_remove is None:
            observations.append(observation)
        else:
            del observations[index_to_remove]

        variance = self.effective_variance(observation)
        sums = current.sums.updated(observation.x, observation.y.value, variance, sign)
        if not sums.one > 0:
            logger.warning(
                "Sum of weights dropped to %r with %d observations left; "
                "recomputing sums from the retained observations",
                sums.one,
                n,
            )
            sums = self._recompute_sums(observations)

        fit = fit_weighted_sums(n, sums)
        self._install(RegressionData.from_fit(new_index, tuple(observations), sums, fit))

    def _recompute_sums(self, observations: Sequence[Observation]) -> WeightedSums:
        variances = effective_variances(
            [obs.y.variance for obs in observations],
            self._ignoring_variance_in_y,
            self._minimum_variance_in_y,
        )
        return WeightedSums.from_arrays(
            [obs.x for obs in observations],
            [obs.y.value for obs in observations],
            variances,
        )

    def _install(self, data: RegressionData) -> None:
        self._current = data
        if self.keeping_history:
            self._history.append(data)
        logger.debug(
            "snapshot %d: n=%d, equation=%s",
            data.index,
            data.number_of_observations,
            data.equation.kind.value if data.equation is not None else None,
        )
