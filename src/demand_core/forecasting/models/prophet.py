"""Prophet model implementation for time series forecasting.

This module wraps Prophet's additive regression model (piecewise trend plus
Fourier seasonalities). Prophet returns a point estimate and an uncertainty
interval for every requested timestamp.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import pandas as pd
from prophet import Prophet

from demand_core.exceptions import ConfigError, FitError, PredictError
from demand_core.forecasting.data.preparation import check_chronological
from demand_core.forecasting.models.base import ForecastModel, Growth, ModelOptions
from demand_core.forecasting.types import (
    TIMESTAMP,
    VALUE,
    ModelDebugInfo,
    TrainingSet,
    make_forecast_frame,
)

# cmdstanpy logs every optimizer start/finish at INFO
logging.getLogger("cmdstanpy").setLevel(logging.WARNING)
logging.getLogger("prophet").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def _to_ds(timestamps: Sequence[int]) -> pd.Series:
    return pd.Series(pd.to_datetime(list(timestamps), unit="s"))


class ProphetModel(ForecastModel):
    """Prophet forecasting engine.

    A fresh Prophet instance is built on every fit(), since a Prophet
    object can only be fitted once.
    """

    def __init__(self, options: ModelOptions | None = None) -> None:
        """Initialize the engine, optionally configuring it right away.

        Args:
            options: Engine options. If None, uses ModelOptions defaults.
        """
        self.options = ModelOptions()
        self.debug_: ModelDebugInfo | None = None
        self.configure(options if options is not None else ModelOptions())

    def configure(self, options: ModelOptions) -> None:
        """Validate and store engine options.

        Raises:
            ConfigError: If logistic growth is requested without a cap.
        """
        if options.growth is Growth.LOGISTIC and options.cap is None:
            raise ConfigError("Logistic growth requires a cap")
        if not 0 < options.interval_width < 1:
            raise ConfigError(f"interval_width must be in (0, 1), got {options.interval_width}")
        self.options = options

    def _build(self) -> Prophet:
        opts = self.options
        return Prophet(
            growth=opts.growth.value,
            seasonality_mode=opts.seasonality_mode.value,
            daily_seasonality=opts.daily_seasonality.value,
            weekly_seasonality=opts.weekly_seasonality.value,
            yearly_seasonality=opts.yearly_seasonality.value,
            interval_width=opts.interval_width,
        )

    def _add_saturation(self, df: pd.DataFrame) -> pd.DataFrame:
        if self.options.growth is Growth.LOGISTIC:
            df["cap"] = self.options.cap
            if self.options.floor is not None:
                df["floor"] = self.options.floor
        return df

    def fit(self, training: TrainingSet) -> Prophet:
        """Fit Prophet on the training set.

        Args:
            training: Samples with ``timestamp`` and ``value`` columns

        Returns:
            Fitted Prophet instance

        Raises:
            FitError: If timestamps are not strictly increasing or Prophet fails

        """
        check_chronological(training)

        df = pd.DataFrame(
            {
                "ds": _to_ds(training[TIMESTAMP]),
                "y": training[VALUE].to_numpy(dtype=float),
            }
        )
        df = self._add_saturation(df)

        model = self._build()
        logger.debug(
            "Fitting Prophet on %d samples (growth=%s, mode=%s)",
            len(df),
            self.options.growth.value,
            self.options.seasonality_mode.value,
        )
        try:
            model.fit(df)
        except Exception as e:
            raise FitError(f"Prophet fit failed: {e}") from e

        return model

    def predict(self, handle: Any, horizon: Sequence[int]) -> pd.DataFrame:
        """Predict with a fitted Prophet instance.

        Args:
            handle: Fitted Prophet instance (from fit() method)
            horizon: Future unix timestamps

        Returns:
            Forecast DataFrame; lower/upper come from yhat_lower/yhat_upper

        """
        horizon = [int(ts) for ts in horizon]
        if not horizon:
            return make_forecast_frame([], [])

        future = self._add_saturation(pd.DataFrame({"ds": _to_ds(horizon)}))
        try:
            prediction = handle.predict(future)
        except Exception as e:
            raise PredictError(f"Prophet predict failed: {e}") from e

        self.debug_ = ModelDebugInfo(
            model_name="prophet",
            data={
                "horizon_steps": len(horizon),
                "growth": self.options.growth.value,
                "seasonality_mode": self.options.seasonality_mode.value,
                "interval_width": self.options.interval_width,
            },
        )

        return make_forecast_frame(
            horizon,
            prediction["yhat"].tolist(),
            prediction["yhat_lower"].tolist(),
            prediction["yhat_upper"].tolist(),
        )
