"""Output formatters for forecast results."""

from demand_core.forecasting.formatters.console import (
    format_forecast_for_console,
    format_forecast_lines,
)

__all__ = ["format_forecast_for_console", "format_forecast_lines"]
