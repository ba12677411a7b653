"""Log ARIMA model implementation for time series forecasting.

This module implements a seasonal ARIMA engine using SARIMAX from statsmodels.
With multiplicative seasonality the series is modeled in log space, which
turns multiplicative effects into additive ones and stabilizes variance.
"""

from __future__ import annotations

import logging
import math
import warnings
from itertools import product
from typing import Any, Sequence

import numpy as np
import pandas as pd
from statsmodels.tools.sm_exceptions import ConvergenceWarning, HessianInversionWarning
from statsmodels.tsa.statespace.sarimax import SARIMAX

from demand_core.exceptions import ConfigError, FitError, PredictError
from demand_core.forecasting.config import DAILY_PERIOD_SECONDS, WEEKLY_PERIOD_SECONDS
from demand_core.forecasting.data.preparation import check_chronological
from demand_core.forecasting.models.base import (
    ForecastModel,
    Growth,
    ModelOptions,
    Seasonality,
    SeasonalityMode,
)
from demand_core.forecasting.types import (
    TIMESTAMP,
    VALUE,
    ModelDebugInfo,
    TrainingSet,
    make_forecast_frame,
)

# Suppress frivolous warnings from statsmodels fitting
# These warnings are common during grid search when trying many parameter combinations
warnings.filterwarnings("ignore", category=ConvergenceWarning)
warnings.filterwarnings("ignore", category=HessianInversionWarning)
warnings.filterwarnings("ignore", message=".*invertible.*", category=RuntimeWarning)
warnings.filterwarnings("ignore", message=".*non-stationary.*", category=RuntimeWarning)

logger = logging.getLogger(__name__)


def sampling_step(timestamps: np.ndarray) -> int:
    """Return the typical spacing (seconds) between consecutive timestamps."""
    if len(timestamps) < 2:
        raise FitError("At least two samples are needed to infer the sampling step")
    return int(np.median(np.diff(timestamps)))


def seasonal_period(options: ModelOptions, step_seconds: int, span_seconds: int) -> int:
    """Pick the seasonal period (in samples) for SARIMAX.

    The daily cycle wins over the weekly one. AUTO enables a component only
    when the training data covers at least two full cycles.

    Returns:
        Period in samples, or 0 for a non-seasonal model.
    """
    for toggle, period_seconds in (
        (options.daily_seasonality, DAILY_PERIOD_SECONDS),
        (options.weekly_seasonality, WEEKLY_PERIOD_SECONDS),
    ):
        if toggle is Seasonality.OFF:
            continue
        if toggle is Seasonality.AUTO and span_seconds < 2 * period_seconds:
            continue
        period = period_seconds // step_seconds
        if period > 1:
            return int(period)
    return 0


class LogARIMAModel(ForecastModel):
    """Seasonal ARIMA engine with automatic order selection.

    Growth maps onto differencing: linear growth fits with one difference,
    flat growth fits a constant level. Logistic growth is not supported.
    """

    def __init__(
        self,
        options: ModelOptions | None = None,
        p_range: tuple[int, ...] = (0, 1, 2),
        q_range: tuple[int, ...] = (0, 1),
        p_seasonal_range: tuple[int, ...] = (0, 1),
        d_seasonal_range: tuple[int, ...] = (0, 1),
        q_seasonal_range: tuple[int, ...] = (0, 1),
    ):
        """Initialize LogARIMAModel with hyperparameter search ranges.

        Args:
            options: Engine options. If None, uses ModelOptions defaults.
            p_range: AR order parameter range (default: (0, 1, 2))
            q_range: MA order parameter range (default: (0, 1))
            p_seasonal_range: Seasonal AR order parameter range (default: (0, 1))
            d_seasonal_range: Seasonal differencing order parameter range (default: (0, 1))
            q_seasonal_range: Seasonal MA order parameter range (default: (0, 1))

        """
        self.p_range = p_range
        self.q_range = q_range
        self.p_seasonal_range = p_seasonal_range
        self.d_seasonal_range = d_seasonal_range
        self.q_seasonal_range = q_seasonal_range
        self.options = ModelOptions()
        self.debug_: ModelDebugInfo | None = None
        self.configure(options if options is not None else ModelOptions())

    def configure(self, options: ModelOptions) -> None:
        """Store engine options.

        Raises:
            ConfigError: If logistic growth is requested.
        """
        if options.growth is Growth.LOGISTIC:
            raise ConfigError("LogARIMAModel does not support logistic growth")
        if not 0 < options.interval_width < 1:
            raise ConfigError(f"interval_width must be in (0, 1), got {options.interval_width}")
        self.options = options

    @property
    def _log_space(self) -> bool:
        return self.options.seasonality_mode is SeasonalityMode.MULTIPLICATIVE

    def fit(self, training: TrainingSet) -> dict:
        """Fit SARIMAX over the hyperparameter grid and keep the lowest-AIC model.

        Args:
            training: Samples with ``timestamp`` and ``value`` columns

        Returns:
            Dictionary with the fitted results and the sampling grid, for predict()

        Raises:
            FitError: If timestamps are invalid or no model could be fitted

        """
        check_chronological(training)

        timestamps = training[TIMESTAMP].to_numpy(dtype="int64")
        step = sampling_step(timestamps)
        span = int(timestamps[-1] - timestamps[0])
        period = seasonal_period(self.options, step, span)

        values = training[VALUE].to_numpy(dtype=float)
        # log1p keeps zero at zero; values are positive after ingestion anyway
        endog = np.log1p(values) if self._log_space else values

        if self.options.growth is Growth.FLAT:
            d, trend = 0, "c"
        else:
            d, trend = 1, "n"

        seasonal_grid: list[tuple[int, int, int, int]] = [(0, 0, 0, 0)]
        if period:
            seasonal_grid = sorted(
                {
                    (ps, ds, qs, period) if (ps or ds or qs) else (0, 0, 0, 0)
                    for ps, ds, qs in product(
                        self.p_seasonal_range, self.d_seasonal_range, self.q_seasonal_range
                    )
                }
            )

        best_aic = np.inf
        best_model = None
        best_orders = None

        # Many combinations will fail (e.g., non-stationary, too few samples
        # for the seasonal lag), which is expected
        for p, q in product(self.p_range, self.q_range):
            for seasonal_order in seasonal_grid:
                order = (p, d, q)
                try:
                    model = SARIMAX(
                        endog,
                        order=order,
                        seasonal_order=seasonal_order,
                        trend=trend,
                        enforce_stationarity=False,
                        enforce_invertibility=False,
                    )
                    res = model.fit(disp=False)
                except Exception as e:
                    logger.debug("SARIMAX%s%s failed: %s", order, seasonal_order, e)
                    continue
                if np.isfinite(res.aic) and res.aic < best_aic:
                    best_aic = res.aic
                    best_model = res
                    best_orders = (order, seasonal_order)

        if best_model is None:
            raise FitError("No valid ARIMA model found during hyperparameter search")

        logger.debug("Selected SARIMAX%s%s (aic=%.2f)", best_orders[0], best_orders[1], best_aic)

        return {
            "result": best_model,
            "last_timestamp": int(timestamps[-1]),
            "step": step,
            "order": best_orders[0],
            "seasonal_order": best_orders[1],
            "aic": float(best_aic),
        }

    def predict(self, handle: dict, horizon: Sequence[int]) -> pd.DataFrame:
        """Forecast from the fitted model and sample it at the horizon timestamps.

        The model forecasts on its own sampling grid; each horizon timestamp is
        mapped to the grid step at or after it.

        Args:
            handle: Dictionary from fit()
            horizon: Future unix timestamps, all after the last training timestamp

        Returns:
            Forecast DataFrame, back-transformed to the original scale

        """
        horizon = [int(ts) for ts in horizon]
        if not horizon:
            return make_forecast_frame([], [])

        last = handle["last_timestamp"]
        step = handle["step"]
        offsets = [math.ceil((ts - last) / step) for ts in horizon]
        if min(offsets) < 1:
            raise PredictError("Horizon timestamps must be after the last training timestamp")

        try:
            forecast = handle["result"].get_forecast(steps=max(offsets))
            mean = np.asarray(forecast.predicted_mean, dtype=float)
            bounds = np.asarray(forecast.conf_int(alpha=1 - self.options.interval_width))
        except Exception as e:
            raise PredictError(f"ARIMA forecast failed: {e}") from e

        idx = np.array(offsets) - 1
        points, lower, upper = mean[idx], bounds[idx, 0], bounds[idx, 1]

        if self._log_space:
            # Back-transform from log space using expm1 (inverse of log1p)
            points, lower, upper = np.expm1(points), np.expm1(lower), np.expm1(upper)

        self.debug_ = ModelDebugInfo(
            model_name="arima",
            data={
                "order": handle["order"],
                "seasonal_order": handle["seasonal_order"],
                "aic": handle["aic"],
                "horizon_steps": len(horizon),
            },
        )

        return make_forecast_frame(horizon, points.tolist(), lower.tolist(), upper.tolist())
