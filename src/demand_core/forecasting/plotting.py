"""Forecast chart rendering.

Draws the actual demand series and the predicted series on one time axis
and writes a PNG artifact. Rendering uses matplotlib's non-interactive Agg
backend, so it works on headless machines.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402

from demand_core.exceptions import RenderError  # noqa: E402
from demand_core.forecasting.config import (  # noqa: E402
    CHART_DPI,
    CHART_HEIGHT,
    CHART_TITLE,
    CHART_WIDTH,
    HORIZON_STEP_SECONDS,
)
from demand_core.forecasting.types import LOWER, POINT, TIMESTAMP, UPPER, VALUE, TrainingSet  # noqa: E402

logger = logging.getLogger(__name__)

Y_RANGE_UNION = "union"
Y_RANGE_ACTUAL = "actual"


def padded_range(
    low: float, high: float, min_span: float = 1.0, relative: float = 0.05
) -> tuple[float, float]:
    """Return a plottable (low, high) pair.

    An all-equal range is widened symmetrically, by ``relative`` times the
    value's magnitude or ``min_span`` / 2, whichever is larger.

    Examples:
        >>> padded_range(10.0, 10.0)
        (9.5, 10.5)
        >>> padded_range(1.0, 3.0)
        (1.0, 3.0)
    """
    if high > low:
        return low, high
    half = max(abs(low) * relative, min_span / 2)
    return low - half, high + half


def axis_limits(
    actual_timestamps: np.ndarray,
    actual_values: np.ndarray,
    horizon: Sequence[int],
    predicted_values: np.ndarray,
    y_range: str = Y_RANGE_UNION,
) -> tuple[tuple[float, float], tuple[float, float]]:
    """Compute the x (unix seconds) and y limits of the chart.

    X spans from the first actual timestamp to the later of the last horizon
    timestamp and the last actual timestamp. Y spans the actual values, plus
    the predicted values when ``y_range`` is "union".

    Args:
        actual_timestamps: Observed timestamps (non-empty).
        actual_values: Observed values (non-empty).
        horizon: Forecast timestamps.
        predicted_values: Point forecasts aligned with ``horizon``.
        y_range: "union" (default) or "actual".

    Returns:
        ((x_min, x_max), (y_min, y_max))

    Raises:
        RenderError: If ``y_range`` is not recognized.
    """
    x_min = float(actual_timestamps[0])
    x_max = float(actual_timestamps[-1])
    if len(horizon):
        x_max = max(x_max, float(horizon[-1]))

    if y_range == Y_RANGE_ACTUAL:
        y_source = actual_values
    elif y_range == Y_RANGE_UNION:
        finite_predicted = predicted_values[np.isfinite(predicted_values)]
        y_source = np.concatenate([actual_values, finite_predicted])
    else:
        raise RenderError(f"Unknown y_range {y_range!r}; expected 'union' or 'actual'")

    y_min, y_max = float(np.min(y_source)), float(np.max(y_source))

    return (
        padded_range(x_min, x_max, min_span=2 * HORIZON_STEP_SECONDS, relative=0.0),
        padded_range(y_min, y_max),
    )


def _to_datetimes(timestamps: Sequence[float]) -> np.ndarray:
    return np.asarray(timestamps, dtype="float64").astype("int64").astype("datetime64[s]")


def render_forecast(
    training: TrainingSet,
    forecast: pd.DataFrame,
    horizon: Sequence[int],
    output_path: str | Path,
    title: str = CHART_TITLE,
    y_range: str = Y_RANGE_UNION,
    width: int = CHART_WIDTH,
    height: int = CHART_HEIGHT,
) -> Path:
    """Render actual vs. predicted demand and save it as a PNG.

    Args:
        training: Observed samples (``timestamp``, ``value``).
        forecast: Engine output (``timestamp``, ``point``, ``lower``, ``upper``),
            aligned with ``horizon``.
        horizon: Forecast timestamps.
        output_path: Where to write the image. Parent directories are created.
        title: Chart title.
        y_range: "union" sizes the y axis on both series, "actual" on the
            observed series only (predicted excursions are clipped).
        width: Canvas width in pixels.
        height: Canvas height in pixels.

    Returns:
        Path of the written image.

    Raises:
        RenderError: If inputs are empty or misaligned, or the file cannot be written.
    """
    if training.empty:
        raise RenderError("Cannot render a chart without actual values")
    if len(forecast) != len(horizon):
        raise RenderError(
            f"Forecast has {len(forecast)} points but horizon has {len(horizon)} timestamps"
        )

    actual_ts = training[TIMESTAMP].to_numpy(dtype="int64")
    actual_values = training[VALUE].to_numpy(dtype=float)
    predicted = forecast[POINT].to_numpy(dtype=float)

    (x_min, x_max), (y_min, y_max) = axis_limits(
        actual_ts, actual_values, horizon, predicted, y_range=y_range
    )

    output_path = Path(output_path)
    fig, ax = plt.subplots(figsize=(width / CHART_DPI, height / CHART_DPI), dpi=CHART_DPI)
    try:
        ax.plot(_to_datetimes(actual_ts), actual_values, color="blue", label="Actual Demand")

        horizon_dt = _to_datetimes(horizon)
        if len(horizon_dt):
            ax.plot(horizon_dt, predicted, color="red", label="Predicted Demand")

        lower = forecast[LOWER].to_numpy(dtype=float)
        upper = forecast[UPPER].to_numpy(dtype=float)
        has_bounds = np.isfinite(lower) & np.isfinite(upper)
        if len(horizon_dt) and has_bounds.any():
            ax.fill_between(
                horizon_dt,
                lower,
                upper,
                where=has_bounds,
                color="red",
                alpha=0.15,
                label="Prediction Interval",
            )

        x_left, x_right = _to_datetimes([x_min, x_max])
        ax.set_xlim(x_left, x_right)
        ax.set_ylim(y_min, y_max)
        ax.set_title(title)
        ax.set_xlabel("Time")
        ax.set_ylabel("Demand")
        ax.grid(True, alpha=0.3)
        ax.legend(loc="upper left")
        fig.autofmt_xdate()

        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, format="png")
    except OSError as e:
        raise RenderError(f"Could not write chart to {output_path}: {e}") from e
    except ValueError as e:
        raise RenderError(f"Could not render chart: {e}") from e
    finally:
        plt.close(fig)

    logger.info("Forecast saved to %s", output_path)
    return output_path
