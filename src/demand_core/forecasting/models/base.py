"""Base model interface for forecasting engines.

This module defines the options every engine is configured with and the
abstract base class that all engines must implement, so the pipeline can
drive Prophet, ARIMA or a naive baseline through the same calls.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

import pandas as pd

from demand_core.forecasting.types import TrainingSet


class Growth(str, Enum):
    """Trend curve of the model."""

    LINEAR = "linear"
    LOGISTIC = "logistic"
    FLAT = "flat"


class SeasonalityMode(str, Enum):
    """How seasonal effects combine with the trend."""

    ADDITIVE = "additive"
    MULTIPLICATIVE = "multiplicative"


class Seasonality(Enum):
    """Per-period seasonality toggle: let the engine decide, or force on/off."""

    AUTO = "auto"
    ON = True
    OFF = False


@dataclass
class ModelOptions:
    """Engine configuration.

    Defaults suit volatile hourly demand: a linear trend, multiplicative
    seasonality with strong daily and weekly cycles and no yearly cycle.

    Attributes:
        growth: Trend curve (default: linear).
        seasonality_mode: Additive or multiplicative seasonality (default: multiplicative).
        daily_seasonality: Daily component toggle (default: on).
        weekly_seasonality: Weekly component toggle (default: on).
        yearly_seasonality: Yearly component toggle (default: off).
        interval_width: Width of the uncertainty interval (default: 0.8).
        cap: Carrying capacity, required for logistic growth.
        floor: Saturating minimum for logistic growth.
    """

    growth: Growth = Growth.LINEAR
    seasonality_mode: SeasonalityMode = SeasonalityMode.MULTIPLICATIVE
    daily_seasonality: Seasonality = Seasonality.ON
    weekly_seasonality: Seasonality = Seasonality.ON
    yearly_seasonality: Seasonality = Seasonality.OFF
    interval_width: float = 0.8
    cap: float | None = None
    floor: float | None = None


class ForecastModel(ABC):
    """Abstract base class for forecasting engines.

    All engines must implement configure(), fit() and predict() to provide
    a consistent interface for the forecasting pipeline.
    """

    @abstractmethod
    def configure(self, options: ModelOptions) -> None:
        """Apply engine options before fitting.

        Args:
            options: Growth, seasonality and interval settings

        Raises:
            ConfigError: If the engine cannot honor the options
        """
        pass

    @abstractmethod
    def fit(self, training: TrainingSet) -> Any:
        """Fit the engine on a training set.

        Args:
            training: Samples with ``timestamp`` (unix seconds) and ``value`` columns

        Returns:
            Fitted handle (type depends on implementation), passed to predict()

        Raises:
            FitError: If fitting fails or the input is structurally invalid
        """
        pass

    @abstractmethod
    def predict(self, handle: Any, horizon: Sequence[int]) -> pd.DataFrame:
        """Predict the values at the given future timestamps.

        Args:
            handle: Fitted handle (from fit() method)
            horizon: Future unix timestamps

        Returns:
            DataFrame with columns timestamp, point, lower, upper; exactly one
            row per horizon entry, in horizon order

        Raises:
            PredictError: If prediction fails
        """
        pass
