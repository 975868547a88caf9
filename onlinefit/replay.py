"""Replay a table of observations through the online regression engine."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, List, Sequence

import pandas as pd

from .config import DEFAULT_MINIMUM_VARIANCE_IN_Y, RegressionConfig
from .engine import LinearRegression
from .observation import Observation
from .plotting import plot_history, plot_regression
from .reporting import fit_summary_lines, history_to_dataframe, observations_to_dataframe

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = Path("output") / "replay"

X_CANDIDATES: tuple[str, ...] = ("x",)
Y_CANDIDATES: tuple[str, ...] = ("y",)
SD_CANDIDATES: tuple[str, ...] = ("sd", "sigma", "dy", "y_sd", "y sd")


def _resolve_column(
    frame: pd.DataFrame,
    explicit: str | None,
    candidates: tuple[str, ...],
    label: str,
) -> str | None:
    """Resolve one input column using explicit name or canonical candidates."""
    if explicit is not None:
        if explicit not in frame.columns:
            raise ValueError(
                f"Column '{explicit}' not found for {label}. "
                f"Available columns: {list(frame.columns)}"
            )
        return explicit

    lookup = {str(col).strip().lower(): str(col) for col in frame.columns}
    for name in candidates:
        found = lookup.get(name.lower())
        if found is not None:
            return found
    return None


def _numeric_column(frame: pd.DataFrame, column: str) -> pd.Series:
    values = pd.to_numeric(frame[column], errors="coerce")
    n_missing = int(values.isna().sum())
    if n_missing:
        raise ValueError(f"Found {n_missing} rows with missing/non-numeric '{column}'.")
    return values.astype(float)


def load_observations(
    path: str | Path,
    x_col: str | None = None,
    y_col: str | None = None,
    sd_col: str | None = None,
) -> List[Observation]:
    """Read observations from a CSV file.

    Args:
        path: CSV file with one observation per row.
        x_col: Independent-value column; defaults to a column named ``x``.
        y_col: Dependent-value column; defaults to a column named ``y``.
        sd_col: Optional y standard-deviation column; defaults to the first of
            ``sd``, ``sigma``, ``dy``, ``y_sd``. Without one every observation
            has zero variance.

    Returns:
        list[Observation]: Observations in file order.

    Raises:
        ValueError: If a required column is missing or holds non-numeric
            values, or a standard deviation is negative.
    """
    frame = pd.read_csv(path)
    x_name = _resolve_column(frame, x_col, X_CANDIDATES, "x")
    y_name = _resolve_column(frame, y_col, Y_CANDIDATES, "y")
    if x_name is None or y_name is None:
        raise ValueError(
            "Could not detect x/y columns. Provide --x-col and --y-col. "
            f"Available columns: {list(frame.columns)}"
        )
    sd_name = _resolve_column(frame, sd_col, SD_CANDIDATES, "y standard deviation")

    xs = _numeric_column(frame, x_name)
    ys = _numeric_column(frame, y_name)
    sds = _numeric_column(frame, sd_name) if sd_name is not None else None

    observations = []
    for i in range(len(frame)):
        sd = float(sds.iloc[i]) if sds is not None else 0.0
        observations.append(
            Observation.from_values(
                float(xs.iloc[i]), float(ys.iloc[i]), y_standard_deviation=sd
            )
        )
    logger.info("Loaded %d observations from %s", len(observations), path)
    return observations


def replay(
    observations: Sequence[Observation],
    config: RegressionConfig | None = None,
    window: int | None = None,
) -> LinearRegression:
    """Push ``observations`` through a fresh engine, in order.

    Args:
        observations: Observations to add.
        config: Engine settings; defaults to ``RegressionConfig()``.
        window: When given, the oldest retained observation is removed every
            time more than ``window`` are held, giving a moving-window fit.

    Returns:
        LinearRegression: The engine after the last observation.
    """
    if window is not None and window < 1:
        raise ValueError(f"window must be >= 1, got {window!r}")

    engine = LinearRegression.from_config(config or RegressionConfig())
    for obs in observations:
        engine.add(obs)
        if window is not None and engine.current_data.number_of_observations > window:
            engine.remove(engine.current_data.observations[0])
    return engine


def run_replay_pipeline(
    input_path: str | Path,
    outdir: str | Path = DEFAULT_OUTPUT_DIR,
    window: int | None = None,
    ignoring_variance_in_y: bool = False,
    minimum_variance_in_y: float = DEFAULT_MINIMUM_VARIANCE_IN_Y,
    x_col: str | None = None,
    y_col: str | None = None,
    sd_col: str | None = None,
) -> dict[str, Any]:
    """Replay a CSV file and write history, observations and figures.

    Returns:
        dict: ``engine``, ``history`` (DataFrame) and the output paths
        ``history_csv``, ``observations_csv``, ``regression_png`` and
        ``history_png`` (``None`` when the final snapshot is empty).
    """
    output_dir = Path(outdir)
    output_dir.mkdir(parents=True, exist_ok=True)

    observations = load_observations(input_path, x_col=x_col, y_col=y_col, sd_col=sd_col)
    config = RegressionConfig(
        ignoring_variance_in_y=ignoring_variance_in_y,
        minimum_variance_in_y=minimum_variance_in_y,
        keeping_history=True,
    )
    engine = replay(observations, config=config, window=window)
    final = engine.current_data
    for line in fit_summary_lines(final):
        logger.info("%s", line)

    history_df = history_to_dataframe(engine.history)
    history_csv = output_dir / "history.csv"
    history_df.to_csv(history_csv, index=False)

    observations_csv = output_dir / "observations.csv"
    observations_to_dataframe(final.observations).to_csv(observations_csv, index=False)

    regression_png = None
    history_png = None
    if not final.is_empty:
        regression_png = plot_regression(final, str(output_dir), formats=("png",))
        history_png = plot_history(engine.history, str(output_dir), formats=("png",))

    return {
        "engine": engine,
        "history": history_df,
        "history_csv": str(history_csv),
        "observations_csv": str(observations_csv),
        "regression_png": regression_png,
        "history_png": history_png,
    }


def _build_arg_parser() -> argparse.ArgumentParser:
    """Build command-line parser for module execution."""
    parser = argparse.ArgumentParser(
        description="Replay observations through an online weighted linear regression."
    )
    parser.add_argument("--input", required=True, help="Path to input CSV file.")
    parser.add_argument(
        "--outdir",
        default=str(DEFAULT_OUTPUT_DIR),
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR}).",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=None,
        help="Keep only the most recent N observations (moving window).",
    )
    parser.add_argument(
        "--ignore-variance",
        action="store_true",
        help="Weight every observation equally.",
    )
    parser.add_argument(
        "--minimum-variance",
        type=float,
        default=DEFAULT_MINIMUM_VARIANCE_IN_Y,
        help="Variance used for observations without one of their own.",
    )
    parser.add_argument("--x-col", default=None, help="Explicit x column name.")
    parser.add_argument("--y-col", default=None, help="Explicit y column name.")
    parser.add_argument(
        "--sd-col", default=None, help="Explicit y standard-deviation column name."
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for the replay pipeline."""
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    result = run_replay_pipeline(
        input_path=args.input,
        outdir=args.outdir,
        window=args.window,
        ignoring_variance_in_y=args.ignore_variance,
        minimum_variance_in_y=args.minimum_variance,
        x_col=args.x_col,
        y_col=args.y_col,
        sd_col=args.sd_col,
    )
    logger.info("Wrote replay outputs to %s", args.outdir)
    logger.info("  - History table: %s", result["history_csv"])
    logger.info("  - Observations table: %s", result["observations_csv"])
    if result["regression_png"] is not None:
        logger.info("  - Regression figure: %s", result["regression_png"])
        logger.info("  - History figure: %s", result["history_png"])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
