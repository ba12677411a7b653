"""Example: Forecasting one week of hourly demand

This example demonstrates how to forecast the next 168 hours of charging
demand from a site export, print the predictions and render the chart.

Prerequisites:
- Put the headerless site export at data/site_data.csv
  (start time in column 1, energy in Wh in column 7)
"""

from pathlib import Path

from demand_core import DataPaths
from demand_core.forecasting import ForecastConfig, run_forecast
from demand_core.forecasting.formatters.console import format_forecast_for_console
from demand_core.forecasting.models import (
    ModelOptions,
    NaiveSeasonalModel,
    ProphetModel,
    Seasonality,
    SeasonalityMode,
)

paths = DataPaths.from_root(Path("data"), Path("output"))
paths.ensure_dirs()

# Volatile EV demand: multiplicative seasonality, daily and weekly cycles, no yearly cycle
options = ModelOptions(
    seasonality_mode=SeasonalityMode.MULTIPLICATIVE,
    daily_seasonality=Seasonality.ON,
    weekly_seasonality=Seasonality.ON,
    yearly_seasonality=Seasonality.OFF,
)
config = ForecastConfig(model_options=options, chart_path=paths.forecast_chart)

print("Running Prophet forecast...")
result = run_forecast(paths.site_data, config, model=ProphetModel())

print(format_forecast_for_console(result, with_bounds=True))
print(f"\nChart written to: {result.chart_path}")

# Baseline: repeat the last observed day
baseline_config = ForecastConfig(
    model_options=options, chart_path=paths.output_root / "forecast_naive.png"
)
baseline = run_forecast(paths.site_data, baseline_config, model=NaiveSeasonalModel())

comparison = result.forecast[["timestamp", "point"]].merge(
    baseline.forecast[["timestamp", "point"]], on="timestamp", suffixes=("_prophet", "_naive")
)
print("\nProphet vs. naive (first 24 hours):")
print(comparison.head(24))

# Save predictions
forecast_output = paths.output_root / "forecast.csv"
result.forecast.to_csv(forecast_output, index=False)
print(f"\nSaved forecast to: {forecast_output}")
