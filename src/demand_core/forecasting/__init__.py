"""Demand forecasting module.

This module forecasts a single demand series (e.g. hourly EV charging energy)
read from a headerless CSV export, and renders actual vs. predicted demand.

Example:
    >>> from demand_core.forecasting import ForecastConfig, run_forecast
    >>> from demand_core.forecasting.models import NaiveSeasonalModel
    >>>
    >>> config = ForecastConfig(horizon_steps=48, chart_path="out/forecast.png")
    >>> result = run_forecast("data/site_data.csv", config)  # Prophet by default
    >>>
    >>> # Or swap the engine
    >>> result = run_forecast("data/site_data.csv", config, model=NaiveSeasonalModel())
    >>>
    >>> print(result.forecast.head())  # timestamp, point, lower, upper
    >>> print(result.chart_path)

"""

from demand_core.forecasting.api import ForecastConfig, ForecastResult, run_forecast

__all__ = ["ForecastConfig", "ForecastResult", "run_forecast"]
