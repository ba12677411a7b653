"""Console output formatting utilities."""

from __future__ import annotations

import math

from demand_core.forecasting.api import ForecastResult
from demand_core.forecasting.config import TIMESTAMP_FORMAT
from demand_core.forecasting.data.loaders import format_timestamp
from demand_core.forecasting.types import LOWER, POINT, TIMESTAMP, UPPER


def format_forecast_lines(result: ForecastResult, with_bounds: bool = False) -> list[str]:
    """Build one ``timestamp | predicted_value`` line per forecast point.

    Each horizon timestamp is paired with its own prediction.

    Args:
        result: ForecastResult from run_forecast()
        with_bounds: Append ``[lower, upper]`` when the engine produced an interval

    Returns:
        List of report lines, in horizon order
    """
    lines = []
    for row in result.forecast.itertuples(index=False):
        row = row._asdict()
        line = f"{format_timestamp(row[TIMESTAMP], TIMESTAMP_FORMAT)} | {row[POINT]:.2f}"
        if with_bounds and not (math.isnan(row[LOWER]) or math.isnan(row[UPPER])):
            line += f" [{row[LOWER]:.2f}, {row[UPPER]:.2f}]"
        lines.append(line)
    return lines


def format_forecast_for_console(result: ForecastResult, with_bounds: bool = False) -> str:
    """Build a human-readable report of the forecast for console output.

    Args:
        result: ForecastResult from run_forecast()
        with_bounds: Include interval bounds on each line

    Returns:
        Human-readable text string for console output
    """
    if result.forecast.empty:
        return "No forecasts available."

    lines = ["Timestamp | Predicted Demand"]
    lines.extend(format_forecast_lines(result, with_bounds=with_bounds))
    return "\n".join(lines)
