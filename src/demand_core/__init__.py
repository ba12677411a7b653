"""Demand Core - single-series demand forecasting.

This package loads a demand time series from a headerless CSV export,
fits an additive forecasting model (Prophet by default), forecasts a
future horizon and renders actual vs. predicted demand as a PNG chart.

Module Structure:
    demand_core.forecasting: Pipeline API, engines, chart rendering and CLI
    demand_core.forecasting.data: Loading and validation of training samples
    demand_core.forecasting.models: Forecasting engines (prophet, arima, naive)
    demand_core.config: DataPaths configuration
    demand_core.exceptions: Error taxonomy

Quick Start:
    >>> from demand_core import DataPaths
    >>> from demand_core.forecasting import ForecastConfig, run_forecast
    >>>
    >>> paths = DataPaths.from_root("data", "output")
    >>> config = ForecastConfig(chart_path=paths.forecast_chart)
    >>> result = run_forecast(paths.site_data, config)
    >>> print(result.forecast.head())

Command line:
    $ demand-forecast --file data/site_data.csv --output forecast.png
"""

__version__ = "0.1.0"

from demand_core.config import DataPaths
from demand_core.exceptions import (
    ConfigError,
    DataIOError,
    DataQualityError,
    DemandCoreError,
    EmptyDatasetError,
    FitError,
    InsufficientDataError,
    ModelError,
    PredictError,
    RenderError,
    RowParseError,
)

__all__ = [
    "ConfigError",
    "DataIOError",
    "DataPaths",
    "DataQualityError",
    "DemandCoreError",
    "EmptyDatasetError",
    "FitError",
    "InsufficientDataError",
    "ModelError",
    "PredictError",
    "RenderError",
    "RowParseError",
    "__version__",
]
