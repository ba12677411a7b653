"""Smoke test for forecasting API imports and end-to-end runs.

This test verifies that the forecasting API can run the whole pipeline on
synthetic hourly data: load, validate, fit, horizon, predict and render.
The Prophet and ARIMA runs fit real engines and are marked slow.
"""

import warnings

import pandas as pd
import pytest
from statsmodels.tools.sm_exceptions import ConvergenceWarning

from demand_core.exceptions import (
    ConfigError,
    EmptyDatasetError,
    FitError,
    InsufficientDataError,
    PredictError,
    RenderError,
)
from demand_core.forecasting import ForecastConfig, ForecastResult, run_forecast
from demand_core.forecasting.formatters.console import (
    format_forecast_for_console,
    format_forecast_lines,
)
from demand_core.forecasting.models import (
    ForecastModel,
    Growth,
    LogARIMAModel,
    ModelOptions,
    NaiveSeasonalModel,
    ProphetModel,
    build_model,
)
from demand_core.forecasting.types import make_forecast_frame
from test_utils import START_TS, hourly_rows, site_row, write_site_csv

warnings.filterwarnings("ignore", category=ConvergenceWarning)

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


class RecordingModel(ForecastModel):
    """Engine double that records calls and returns a constant forecast."""

    def __init__(self, drop_last: bool = False, fail_fit: bool = False) -> None:
        self.calls: list[str] = []
        self.drop_last = drop_last
        self.fail_fit = fail_fit

    def configure(self, options: ModelOptions) -> None:
        self.calls.append("configure")

    def fit(self, training: pd.DataFrame) -> object:
        self.calls.append("fit")
        if self.fail_fit:
            raise FitError("did not converge")
        return object()

    def predict(self, handle: object, horizon) -> pd.DataFrame:
        self.calls.append("predict")
        horizon = list(horizon)
        if self.drop_last:
            horizon = horizon[:-1]
        return make_forecast_frame(horizon, [1.0] * len(horizon))


def _assert_end_to_end(result: ForecastResult, chart) -> None:
    assert isinstance(result, ForecastResult)
    assert len(result.training) == 40
    assert len(result.horizon) == 168
    last = START_TS + 39 * 3600
    assert result.horizon[0] == last + 3600
    assert result.horizon[-1] == last + 168 * 3600
    assert len(result.forecast) == 168
    assert result.forecast["timestamp"].tolist() == result.horizon
    assert result.chart_path == chart
    assert chart.read_bytes()[:8] == PNG_MAGIC


def test_forecasting_smoke_naive(tmp_path) -> None:
    """Test the whole pipeline with the seasonal naive engine."""
    source = write_site_csv(tmp_path / "site.csv", hourly_rows(40))
    chart = tmp_path / "forecast.png"

    result = run_forecast(source, ForecastConfig(chart_path=chart), model=NaiveSeasonalModel())

    _assert_end_to_end(result, chart)
    assert result.metadata["model"] == "NaiveSeasonalModel"
    assert result.metadata["samples"] == 40
    assert result.debug is None


@pytest.mark.slow
def test_forecasting_smoke_prophet(tmp_path) -> None:
    """Test the whole pipeline with the default Prophet engine."""
    source = write_site_csv(tmp_path / "site.csv", hourly_rows(40))
    chart = tmp_path / "forecast.png"

    result = run_forecast(source, ForecastConfig(chart_path=chart), debug=True)

    _assert_end_to_end(result, chart)
    assert result.metadata["model"] == "ProphetModel"
    assert result.forecast["point"].notna().all()
    assert (result.forecast["lower"] <= result.forecast["upper"]).all()
    assert result.debug is not None
    assert result.debug.model_name == "prophet"


@pytest.mark.slow
def test_arima_engine_small_grid(tmp_path) -> None:
    """Test the ARIMA engine with a single-candidate grid."""
    source = write_site_csv(tmp_path / "site.csv", hourly_rows(40))
    model = LogARIMAModel(
        p_range=(1,),
        q_range=(0,),
        p_seasonal_range=(0,),
        d_seasonal_range=(0,),
        q_seasonal_range=(0,),
    )
    config = ForecastConfig(chart_path=None, horizon_steps=12)

    result = run_forecast(source, config, model=model, debug=True)

    assert len(result.forecast) == 12
    assert result.forecast["point"].notna().all()
    assert result.chart_path is None
    assert result.debug is not None
    assert result.debug.data["order"] == (1, 1, 0)


def test_pipeline_runs_stages_in_order(tmp_path) -> None:
    """Test that the engine is configured, fitted and asked to predict once."""
    source = write_site_csv(tmp_path / "site.csv", hourly_rows(30))
    model = RecordingModel()

    run_forecast(source, ForecastConfig(chart_path=None), model=model)

    assert model.calls == ["configure", "fit", "predict"]


def test_pipeline_stops_before_model_on_insufficient_data(tmp_path) -> None:
    """Test that validation failures abort before any modeling work."""
    source = write_site_csv(tmp_path / "site.csv", hourly_rows(29))
    model = RecordingModel()

    with pytest.raises(InsufficientDataError):
        run_forecast(source, ForecastConfig(chart_path=None), model=model)

    assert model.calls == []


def test_pipeline_empty_dataset(tmp_path) -> None:
    """Test that a source with zero valid rows fails with EmptyDatasetError."""
    source = write_site_csv(tmp_path / "site.csv", [site_row("2024-01-01 00:00", "0")])

    with pytest.raises(EmptyDatasetError):
        run_forecast(source, model=RecordingModel())


def test_pipeline_propagates_fit_error(tmp_path) -> None:
    """Test that engine failures surface unchanged and nothing is rendered."""
    source = write_site_csv(tmp_path / "site.csv", hourly_rows(30))
    chart = tmp_path / "forecast.png"
    model = RecordingModel(fail_fit=True)

    with pytest.raises(FitError, match="did not converge"):
        run_forecast(source, ForecastConfig(chart_path=chart), model=model)

    assert model.calls == ["configure", "fit"]
    assert not chart.exists()


def test_pipeline_rejects_misaligned_predictions(tmp_path) -> None:
    """Test that a forecast shorter than the horizon is a predict error."""
    source = write_site_csv(tmp_path / "site.csv", hourly_rows(30))

    with pytest.raises(PredictError):
        run_forecast(
            source, ForecastConfig(chart_path=None), model=RecordingModel(drop_last=True)
        )


def test_pipeline_reports_before_rendering(tmp_path) -> None:
    """Test that the report hook sees the forecast even when the chart cannot be written."""
    source = write_site_csv(tmp_path / "site.csv", hourly_rows(30))
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    reported: list[ForecastResult] = []

    with pytest.raises(RenderError):
        run_forecast(
            source,
            ForecastConfig(chart_path=blocker / "forecast.png", horizon_steps=3),
            model=RecordingModel(),
            report=reported.append,
        )

    assert len(reported) == 1
    assert reported[0].chart_path is None
    assert reported[0].forecast["point"].tolist() == [1.0, 1.0, 1.0]


def test_pipeline_debug_without_engine_debug_info(tmp_path) -> None:
    """Test that debug=True tolerates engines that expose no debug info."""
    source = write_site_csv(tmp_path / "site.csv", hourly_rows(30))

    result = run_forecast(
        source, ForecastConfig(chart_path=None), model=RecordingModel(), debug=True
    )

    assert result.debug is None
    assert list(result.training.columns) == ["timestamp", "value"]
    assert list(result.forecast.columns) == ["timestamp", "point", "lower", "upper"]


def test_pipeline_rejects_duplicate_timestamps(tmp_path) -> None:
    """Test that duplicate timestamps are rejected as a fit error."""
    rows = hourly_rows(30) + [site_row("2024-01-02 05:00", "500")]
    source = write_site_csv(tmp_path / "site.csv", rows)

    with pytest.raises(FitError, match="duplicate"):
        run_forecast(source, ForecastConfig(chart_path=None), model=NaiveSeasonalModel())


def test_console_report_pairs_horizon_with_predictions(tmp_path) -> None:
    """Test that each report line pairs a horizon timestamp with its own prediction."""
    source = write_site_csv(tmp_path / "site.csv", hourly_rows(40))
    config = ForecastConfig(chart_path=None, horizon_steps=3)

    result = run_forecast(source, config, model=RecordingModel())
    lines = format_forecast_lines(result)

    # Last sample is 2024-01-02 15:00
    assert lines == [
        "2024-01-02 16:00 | 1.00",
        "2024-01-02 17:00 | 1.00",
        "2024-01-02 18:00 | 1.00",
    ]
    report = format_forecast_for_console(result)
    assert report.splitlines()[0] == "Timestamp | Predicted Demand"
    assert len(report.splitlines()) == 4


def test_console_report_with_bounds() -> None:
    """Test that interval bounds are printed when present."""
    forecast = make_forecast_frame([START_TS], [10.0], [8.0], [12.5])
    result = ForecastResult(training=pd.DataFrame(), horizon=[START_TS], forecast=forecast)

    assert format_forecast_lines(result, with_bounds=True) == [
        "2024-01-01 00:00 | 10.00 [8.00, 12.50]"
    ]


def test_build_model_registry() -> None:
    """Test engine lookup by name."""
    assert isinstance(build_model("naive"), NaiveSeasonalModel)
    assert isinstance(build_model("prophet"), ProphetModel)
    with pytest.raises(ValueError):
        build_model("lstm")


def test_engine_option_validation() -> None:
    """Test that engines reject options they cannot honor."""
    with pytest.raises(ConfigError):
        ProphetModel(ModelOptions(growth=Growth.LOGISTIC))
    with pytest.raises(ConfigError):
        LogARIMAModel(ModelOptions(growth=Growth.LOGISTIC, cap=100.0))
    ProphetModel(ModelOptions(growth=Growth.LOGISTIC, cap=100.0))


def test_imports_work() -> None:
    """Test that forecasting API can be imported without errors."""
    assert ForecastConfig is not None
    assert ForecastResult is not None
    assert callable(run_forecast)
