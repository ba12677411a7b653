"""Forecasting engines module.

Forecasting Engine Checklist
============================

When adding a new engine, implement the ForecastModel interface and follow
these rules so the pipeline can drive it like the built-in ones:

1. Accept options in __init__ and route them through configure():
   ```python
   def __init__(self, options: ModelOptions | None = None) -> None:
       self.options = ModelOptions()
       self.debug_: ModelDebugInfo | None = None
       self.configure(options if options is not None else ModelOptions())
   ```

2. configure() raises ConfigError for options the engine cannot honor
   (e.g. LogARIMAModel rejects logistic growth).

3. fit() calls check_chronological() first, wraps engine failures in
   FitError, and returns a handle that predict() understands.

4. predict() returns make_forecast_frame(...): exactly one row per horizon
   timestamp, in horizon order. Engine failures become PredictError.

5. Optionally populate self.debug_ = ModelDebugInfo(...) in predict();
   run_forecast(debug=True) collects it into ForecastResult.debug.

Built-in engines:
- ProphetModel: see models/prophet.py (default)
- LogARIMAModel: see models/arima.py
- NaiveSeasonalModel: see models/naive.py
"""

from demand_core.forecasting.models.arima import LogARIMAModel
from demand_core.forecasting.models.base import (
    ForecastModel,
    Growth,
    ModelOptions,
    Seasonality,
    SeasonalityMode,
)
from demand_core.forecasting.models.naive import NaiveSeasonalModel
from demand_core.forecasting.models.prophet import ProphetModel

MODELS = {
    "prophet": ProphetModel,
    "arima": LogARIMAModel,
    "naive": NaiveSeasonalModel,
}


def build_model(name: str, options: ModelOptions | None = None) -> ForecastModel:
    """Instantiate a registered engine by name.

    Args:
        name: One of the keys of MODELS ("prophet", "arima", "naive").
        options: Engine options passed to the constructor.

    Raises:
        ValueError: If the name is not registered.
    """
    try:
        model_cls = MODELS[name]
    except KeyError:
        raise ValueError(f"Unknown model {name!r}. Options: {', '.join(MODELS)}") from None
    return model_cls(options)


__all__ = [
    "ForecastModel",
    "Growth",
    "LogARIMAModel",
    "MODELS",
    "ModelOptions",
    "NaiveSeasonalModel",
    "ProphetModel",
    "Seasonality",
    "SeasonalityMode",
    "build_model",
]
