"""Public API for the demand forecasting pipeline.

This module sequences the pipeline stages: load samples, validate them, fit
the engine, build the horizon, predict, report and render the chart. Any stage
failure aborts the run and propagates unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pandas as pd

from demand_core.exceptions import PredictError
from demand_core.forecasting.config import (
    CHART_FILENAME,
    CHART_TITLE,
    DELIMITER,
    HORIZON_STEP_SECONDS,
    HORIZON_STEPS,
    MIN_SAMPLES,
    TIMESTAMP_COLUMN,
    TIMESTAMP_FORMAT,
    VALUE_COLUMN,
)
from demand_core.forecasting.data.loaders import load_training_set
from demand_core.forecasting.data.preparation import validate_training_set
from demand_core.forecasting.horizon import generate_horizon
from demand_core.forecasting.models.base import ForecastModel, ModelOptions
from demand_core.forecasting.models.prophet import ProphetModel
from demand_core.forecasting.plotting import Y_RANGE_UNION, render_forecast
from demand_core.forecasting.types import TIMESTAMP, HasDebugInfo, ModelDebugInfo, TrainingSet

logger = logging.getLogger(__name__)


@dataclass
class ForecastConfig:
    """Configuration for demand forecasting.

    Attributes:
        timestamp_column: Position of the timestamp field in the input (default: 1).
        value_column: Position of the demand value field in the input (default: 7).
        timestamp_format: Format of the timestamp field.
        delimiter: Field delimiter of the input file.
        min_samples: Minimum accepted samples before fitting (default: 30).
        horizon_step_seconds: Spacing of forecast timestamps (default: 3600).
        horizon_steps: Number of forecast timestamps (default: 168).
        model_options: Engine options (growth, seasonality, intervals).
        chart_path: Where to write the chart. If None, no chart is rendered.
        chart_title: Chart title.
        y_range: "union" sizes the chart's y axis on actual and predicted values,
            "actual" on actual values only.
    """

    timestamp_column: int = TIMESTAMP_COLUMN
    value_column: int = VALUE_COLUMN
    timestamp_format: str = TIMESTAMP_FORMAT
    delimiter: str = DELIMITER
    min_samples: int = MIN_SAMPLES
    horizon_step_seconds: int = HORIZON_STEP_SECONDS
    horizon_steps: int = HORIZON_STEPS
    model_options: ModelOptions = field(default_factory=ModelOptions)
    chart_path: Optional[Path] = Path(CHART_FILENAME)
    chart_title: str = CHART_TITLE
    y_range: str = Y_RANGE_UNION


@dataclass
class ForecastResult:
    """Result of the demand forecasting pipeline.

    Attributes:
        training: Accepted samples (columns: timestamp, value)
        horizon: Forecast timestamps (unix seconds)
        forecast: DataFrame with columns: timestamp, point, lower, upper;
            one row per horizon timestamp, in horizon order
        chart_path: Path of the rendered chart, or None when rendering was disabled
        metadata: Dictionary with additional metadata (model, sample counts, etc.)
        debug: Engine debug info, only populated when run_forecast is called
            with debug=True and the engine exposes it.
    """

    training: TrainingSet
    horizon: List[int]
    forecast: pd.DataFrame
    chart_path: Optional[Path] = None
    metadata: Dict[str, object] = field(default_factory=dict)
    debug: Optional[ModelDebugInfo] = None


def run_forecast(
    source: str | Path,
    config: Optional[ForecastConfig] = None,
    model: Optional[ForecastModel] = None,
    debug: bool = False,
    report: Optional[Callable[[ForecastResult], None]] = None,
) -> ForecastResult:
    """Run the demand forecasting pipeline on one input file.

    This function:
    - reads the input file and writes the chart (unless chart_path is None),
    - does NOT print anything or parse CLI arguments,
    - MAY log progress via the logging module.

    Args:
        source: Path to the headerless delimited input file.
        config: ForecastConfig for schema, policy and output. If None, uses defaults.
        model: Forecasting engine. If None, uses ProphetModel. The engine is
            (re)configured with config.model_options.
        debug: If True, copies the engine's debug_ into result.debug.
        report: Called with the result once predictions are verified and
            before the chart is rendered, so the forecast reaches the
            operator even when rendering fails.

    Returns:
        ForecastResult containing the training set, horizon, aligned forecast
        and chart location.

    Raises:
        DataIOError: If the input cannot be read.
        EmptyDatasetError: If no row was accepted.
        InsufficientDataError: If fewer than config.min_samples rows were accepted.
        ConfigError: If the engine rejects the options or the horizon is invalid.
        FitError: If the engine fails to fit.
        PredictError: If the engine fails or returns a misaligned forecast.
        RenderError: If the chart cannot be written.
    """
    if config is None:
        config = ForecastConfig()

    training = load_training_set(
        source,
        timestamp_column=config.timestamp_column,
        value_column=config.value_column,
        timestamp_format=config.timestamp_format,
        delimiter=config.delimiter,
    )

    validate_training_set(training, min_samples=config.min_samples)

    # Get model instance (use given engine or default to ProphetModel)
    if model is None:
        model = ProphetModel()
    model.configure(config.model_options)
    model_name = type(model).__name__

    logger.info("Fitting %s on %d samples", model_name, len(training))
    handle = model.fit(training)

    last_timestamp = int(training[TIMESTAMP].iloc[-1])
    horizon = generate_horizon(
        last_timestamp,
        step_seconds=config.horizon_step_seconds,
        count=config.horizon_steps,
    )

    logger.info(
        "Predicting %d points every %d seconds", len(horizon), config.horizon_step_seconds
    )
    forecast = model.predict(handle, horizon)

    if len(forecast) != len(horizon):
        raise PredictError(
            f"{model_name} returned {len(forecast)} predictions for {len(horizon)} horizon timestamps"
        )
    if forecast[TIMESTAMP].tolist() != horizon:
        raise PredictError(f"{model_name} returned predictions out of horizon order")

    result = ForecastResult(
        training=training,
        horizon=horizon,
        forecast=forecast,
        metadata={
            "model": model_name,
            "samples": len(training),
            "horizon_steps": len(horizon),
            "horizon_step_seconds": config.horizon_step_seconds,
            "last_timestamp": last_timestamp,
        },
        debug=model.debug_ if debug and isinstance(model, HasDebugInfo) else None,
    )

    if report is not None:
        report(result)

    if config.chart_path is not None:
        result.chart_path = render_forecast(
            training,
            forecast,
            horizon,
            config.chart_path,
            title=config.chart_title,
            y_range=config.y_range,
        )

    return result
