"""Shared types for forecasting models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence, runtime_checkable

import pandas as pd

# Training set columns: unix seconds (int64) and demand value (float64)
TIMESTAMP = "timestamp"
VALUE = "value"
TRAINING_COLUMNS = [TIMESTAMP, VALUE]

# Forecast columns: one row per horizon entry
POINT = "point"
LOWER = "lower"
UPPER = "upper"
FORECAST_COLUMNS = [TIMESTAMP, POINT, LOWER, UPPER]

# A training set is a DataFrame with TRAINING_COLUMNS, in input row order
TrainingSet = pd.DataFrame


def make_training_set(timestamps: Sequence[int], values: Sequence[float]) -> TrainingSet:
    """Build a training set with the canonical column names and dtypes.

    Args:
        timestamps: Unix timestamps in seconds, in row order.
        values: Demand values aligned with ``timestamps``.

    Returns:
        DataFrame with an int64 ``timestamp`` column and a float64 ``value`` column.
    """
    frame = pd.DataFrame(
        {
            TIMESTAMP: pd.Series(timestamps, dtype="int64"),
            VALUE: pd.Series(values, dtype="float64"),
        }
    )
    return frame[TRAINING_COLUMNS]


def make_forecast_frame(
    timestamps: Sequence[int],
    points: Sequence[float],
    lower: Sequence[float] | None = None,
    upper: Sequence[float] | None = None,
) -> pd.DataFrame:
    """Build a forecast DataFrame; missing bounds become NaN columns."""
    n = len(timestamps)
    nan = [float("nan")] * n
    frame = pd.DataFrame(
        {
            TIMESTAMP: pd.Series(timestamps, dtype="int64"),
            POINT: pd.Series(points, dtype="float64"),
            LOWER: pd.Series(lower if lower is not None else nan, dtype="float64"),
            UPPER: pd.Series(upper if upper is not None else nan, dtype="float64"),
        }
    )
    return frame[FORECAST_COLUMNS]


@dataclass(frozen=True)
class ModelDebugInfo:
    """Generic container for model-specific debug information.

    This provides a standard way for forecasting engines to expose
    introspection/debug information in a consistent format.

    Attributes:
        model_name: Short identifier for the engine, e.g. "prophet", "seasonal_naive".
        version: Optional version string if engine behavior changes over time.
        data: Arbitrary engine-specific payload (dict of JSON-like values).

    """

    model_name: str
    version: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class HasDebugInfo(Protocol):
    """Protocol for engines that expose debug information.

    Example:
        def inspect_model_debug(model: HasDebugInfo) -> Optional[ModelDebugInfo]:
            return model.debug_

    """

    debug_: ModelDebugInfo | None
