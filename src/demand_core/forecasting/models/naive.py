"""Seasonal naive forecasting model.

This model forecasts by finding the equivalent slot one or more seasonal
periods back (same hour yesterday, same hour last week) and using that
historical value directly.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from demand_core.exceptions import ConfigError, PredictError
from demand_core.forecasting.config import DAILY_PERIOD_SECONDS, WEEKLY_PERIOD_SECONDS
from demand_core.forecasting.data.preparation import check_chronological
from demand_core.forecasting.models.base import (
    ForecastModel,
    Growth,
    ModelOptions,
    Seasonality,
)
from demand_core.forecasting.types import (
    TIMESTAMP,
    VALUE,
    ModelDebugInfo,
    TrainingSet,
    make_forecast_frame,
)


def find_equivalent_historical_slot(
    target: int,
    last_timestamp: int,
    observed: set[int] | dict[int, float],
    period_seconds: int,
    max_periods_back: int = 52,
) -> int | None:
    """Find the most recent observed timestamp whole periods before ``target``.

    This function steps back from ``target`` one period at a time and returns
    the first candidate that:
    1. Is on or before last_timestamp (we have data for it)
    2. Was actually observed in the training set

    Args:
        target: The timestamp we want to forecast for
        last_timestamp: The last timestamp for which we have historical data
        observed: Observed timestamps (a set, or a dict keyed by timestamp)
        period_seconds: Seasonal period length in seconds
        max_periods_back: Maximum number of periods to search back (default: 52)

    Returns:
        The equivalent historical timestamp, or None if not found within max_periods_back

    Example:
        With hourly data ending Monday 10:00 and a daily period, the target
        Tuesday 09:00 maps to Monday 09:00, Tuesday 11:00 to Sunday 11:00.

    """
    candidate = target - period_seconds

    for _ in range(max_periods_back):
        if candidate <= last_timestamp and candidate in observed:
            return candidate
        candidate -= period_seconds

    return None


class NaiveSeasonalModel(ForecastModel):
    """Naive forecasting model that repeats the last seasonal cycle.

    This model forecasts by:
    1. For each horizon timestamp, stepping back whole seasonal periods
    2. Returning the training value at the first observed equivalent slot
    3. Falling back to the last observed value when no slot is found

    The period is daily unless daily seasonality is off, then weekly. With
    both off, the model is a plain last-value forecast. No intervals are
    produced.
    """

    def __init__(self, options: ModelOptions | None = None, max_periods_back: int = 52) -> None:
        """Initialize the seasonal naive model."""
        self.max_periods_back = max_periods_back
        self.options = ModelOptions()
        self.debug_: ModelDebugInfo | None = None
        self.configure(options if options is not None else ModelOptions())

    def configure(self, options: ModelOptions) -> None:
        """Store engine options.

        Growth and seasonality mode do not apply to a naive model; only the
        seasonality toggles select the period.

        Raises:
            ConfigError: If logistic growth is requested without a cap.
        """
        if options.growth is Growth.LOGISTIC and options.cap is None:
            raise ConfigError("Logistic growth requires a cap")
        self.options = options

    @property
    def period_seconds(self) -> int | None:
        """Seasonal period used for lookups, or None for a last-value forecast."""
        if self.options.daily_seasonality is not Seasonality.OFF:
            return DAILY_PERIOD_SECONDS
        if self.options.weekly_seasonality is not Seasonality.OFF:
            return WEEKLY_PERIOD_SECONDS
        return None

    def fit(self, training: TrainingSet) -> dict:
        """Store the historical samples for use in predict.

        Args:
            training: Samples with ``timestamp`` and ``value`` columns

        Returns:
            Dictionary mapping observed timestamps to values, plus the last sample

        """
        check_chronological(training)

        values_by_ts = dict(
            zip(
                training[TIMESTAMP].astype("int64").tolist(),
                training[VALUE].astype(float).tolist(),
            )
        )
        return {
            "values": values_by_ts,
            "last_timestamp": int(training[TIMESTAMP].iloc[-1]),
            "last_value": float(training[VALUE].iloc[-1]),
        }

    def predict(self, handle: dict, horizon: Sequence[int]) -> pd.DataFrame:
        """Generate forecast using equivalent historical slots.

        Args:
            handle: Dictionary from fit()
            horizon: Future unix timestamps

        Returns:
            Forecast DataFrame with NaN lower/upper bounds

        """
        values_by_ts = handle["values"]
        last_timestamp = handle["last_timestamp"]
        period = self.period_seconds

        # Build mapping from forecast timestamp to source timestamp for debug info
        source_timestamps: dict[int, int] = {}

        points = []
        for ts in horizon:
            ts = int(ts)
            if ts <= last_timestamp:
                raise PredictError(
                    f"Horizon timestamp {ts} is not after the last training timestamp"
                )

            source = None
            if period is not None:
                source = find_equivalent_historical_slot(
                    target=ts,
                    last_timestamp=last_timestamp,
                    observed=values_by_ts,
                    period_seconds=period,
                    max_periods_back=self.max_periods_back,
                )

            if source is not None:
                value = values_by_ts[source]
                source_timestamps[ts] = source
            else:
                # Fallback: repeat the last observation
                value = handle["last_value"]
                source_timestamps[ts] = last_timestamp

            points.append(value)

        # Populate generic debug channel with model-specific payload
        self.debug_ = ModelDebugInfo(
            model_name="seasonal_naive",
            data={
                "horizon_steps": len(points),
                "period_seconds": period,
                "source_timestamps": source_timestamps,
            },
        )

        return make_forecast_frame([int(ts) for ts in horizon], points)
