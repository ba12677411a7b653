"""CLI wrapper for the demand forecasting pipeline.

This module provides a command-line interface for running forecasts.
All core forecasting logic is in demand_core.forecasting.api.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from demand_core.config import DataPaths
from demand_core.exceptions import DemandCoreError
from demand_core.forecasting.api import ForecastConfig, ForecastResult, run_forecast
from demand_core.forecasting.config import (
    HORIZON_STEP_SECONDS,
    HORIZON_STEPS,
    MIN_SAMPLES,
    TIMESTAMP_COLUMN,
    VALUE_COLUMN,
)
from demand_core.forecasting.formatters.console import format_forecast_for_console
from demand_core.forecasting.models import MODELS, build_model
from demand_core.forecasting.plotting import Y_RANGE_ACTUAL, Y_RANGE_UNION


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the forecasting CLI."""
    default_paths = DataPaths.from_root("data")

    parser = argparse.ArgumentParser(description="Run demand forecast.")
    parser.add_argument(
        "--file",
        type=Path,
        default=default_paths.site_data,
        help=f"Path to the headerless site export (default: {default_paths.site_data})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=default_paths.forecast_chart,
        help=f"Path of the PNG chart (default: {default_paths.forecast_chart})",
    )
    parser.add_argument(
        "--no-chart",
        action="store_true",
        help="Skip rendering the chart",
    )
    parser.add_argument(
        "--model",
        type=str,
        default="prophet",
        choices=sorted(MODELS),
        help="Forecast model to use (default: prophet)",
    )
    parser.add_argument(
        "--horizon",
        type=int,
        default=HORIZON_STEPS,
        help=f"Number of future points to forecast (default: {HORIZON_STEPS})",
    )
    parser.add_argument(
        "--step",
        type=int,
        default=HORIZON_STEP_SECONDS,
        help=f"Seconds between forecast points (default: {HORIZON_STEP_SECONDS})",
    )
    parser.add_argument(
        "--min-samples",
        type=int,
        default=MIN_SAMPLES,
        help=f"Minimum accepted rows required to fit (default: {MIN_SAMPLES})",
    )
    parser.add_argument(
        "--timestamp-column",
        type=int,
        default=TIMESTAMP_COLUMN,
        help=f"Zero-based position of the timestamp field (default: {TIMESTAMP_COLUMN})",
    )
    parser.add_argument(
        "--value-column",
        type=int,
        default=VALUE_COLUMN,
        help=f"Zero-based position of the demand value field (default: {VALUE_COLUMN})",
    )
    parser.add_argument(
        "--y-range",
        choices=[Y_RANGE_UNION, Y_RANGE_ACTUAL],
        default=Y_RANGE_UNION,
        help="Size the chart's y axis on both series or on actual values only",
    )
    parser.add_argument(
        "--bounds",
        action="store_true",
        help="Print interval bounds next to each prediction",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging (DEBUG level).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point for the forecasting pipeline.

    Parses command-line arguments, runs the forecast, prints one line per
    forecast point and then writes the chart. The report is printed even when
    the chart cannot be written.

    Returns:
        Process exit status: 0 on success, 1 on any pipeline error, 130 when
        interrupted.
    """
    args = build_parser().parse_args(argv)

    # Set up logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s: %(message)s",
    )

    config = ForecastConfig(
        timestamp_column=args.timestamp_column,
        value_column=args.value_column,
        min_samples=args.min_samples,
        horizon_step_seconds=args.step,
        horizon_steps=args.horizon,
        chart_path=None if args.no_chart else args.output,
        y_range=args.y_range,
    )

    print("=" * 60)
    print("Demand Forecasting Pipeline")
    print("=" * 60)
    print(f"Input: {args.file}")
    print(f"Model: {args.model}")
    print()

    def report(result: ForecastResult) -> None:
        print(format_forecast_for_console(result, with_bounds=args.bounds))

    try:
        model = build_model(args.model, config.model_options)
        result = run_forecast(args.file, config=config, model=model, report=report)
    except DemandCoreError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130

    if result.chart_path is not None:
        print(f"\nForecast saved to {result.chart_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
