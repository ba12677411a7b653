"""Tests for the seasonal naive forecast model."""

import math

import pytest

from demand_core.exceptions import ConfigError, FitError, PredictError
from demand_core.forecasting.horizon import generate_horizon
from demand_core.forecasting.models.base import Growth, ModelOptions, Seasonality
from demand_core.forecasting.models.naive import (
    NaiveSeasonalModel,
    find_equivalent_historical_slot,
)
from demand_core.forecasting.types import make_training_set
from test_utils import START_TS, hourly_training_set

HOUR = 3600
DAY = 24 * HOUR


def test_find_equivalent_historical_slot_basic() -> None:
    """Test finding the same hour on the previous day."""
    observed = {START_TS + i * HOUR for i in range(48)}
    last = START_TS + 47 * HOUR

    # Target is one hour after the last sample: same hour yesterday
    target = last + HOUR
    assert find_equivalent_historical_slot(target, last, observed, DAY) == target - DAY


def test_find_equivalent_historical_slot_steps_back_past_gaps() -> None:
    """Test that missing slots are skipped by stepping back another period."""
    observed = {START_TS + i * HOUR for i in range(72)}
    last = START_TS + 71 * HOUR
    target = last + HOUR
    observed.discard(target - DAY)

    assert find_equivalent_historical_slot(target, last, observed, DAY) == target - 2 * DAY


def test_find_equivalent_historical_slot_not_found() -> None:
    """Test when no equivalent slot is found."""
    observed = {START_TS, START_TS + HOUR}
    last = START_TS + HOUR

    # Target is far in the future
    target = last + 30 * DAY
    assert find_equivalent_historical_slot(target, last, observed, DAY, max_periods_back=2) is None


def test_naive_predict_repeats_daily_cycle() -> None:
    """Test that a 48h horizon repeats the last observed day."""
    training = hourly_training_set(72)
    model = NaiveSeasonalModel()
    handle = model.fit(training)

    last = int(training["timestamp"].iloc[-1])
    horizon = generate_horizon(last, HOUR, 48)
    forecast = model.predict(handle, horizon)

    assert forecast["timestamp"].tolist() == horizon
    values = dict(zip(training["timestamp"], training["value"]))
    for ts, point in zip(horizon, forecast["point"]):
        # Same hour of the latest observed day
        source = ts - DAY * math.ceil((ts - last) / DAY)
        assert point == values[source]
    assert forecast["lower"].isna().all()
    assert forecast["upper"].isna().all()


def test_naive_debug_info() -> None:
    """Test that predict() exposes the source timestamps."""
    training = hourly_training_set(30)
    model = NaiveSeasonalModel()
    horizon = generate_horizon(int(training["timestamp"].iloc[-1]), HOUR, 5)
    model.predict(model.fit(training), horizon)

    assert model.debug_ is not None
    assert model.debug_.model_name == "seasonal_naive"
    assert model.debug_.data["period_seconds"] == DAY
    assert list(model.debug_.data["source_timestamps"]) == horizon


def test_naive_last_value_when_seasonality_off() -> None:
    """Test that the model falls back to the last value without seasonality."""
    training = make_training_set([0, HOUR, 2 * HOUR], [5.0, 6.0, 7.0])
    options = ModelOptions(
        daily_seasonality=Seasonality.OFF,
        weekly_seasonality=Seasonality.OFF,
    )
    model = NaiveSeasonalModel(options)

    forecast = model.predict(model.fit(training), [3 * HOUR, 4 * HOUR])

    assert forecast["point"].tolist() == [7.0, 7.0]
    assert model.period_seconds is None


def test_naive_weekly_period() -> None:
    """Test that weekly seasonality is used when daily seasonality is off."""
    model = NaiveSeasonalModel(ModelOptions(daily_seasonality=Seasonality.OFF))
    assert model.period_seconds == 7 * DAY


def test_naive_rejects_past_horizon() -> None:
    """Test that horizon timestamps must follow the training set."""
    training = make_training_set([0, HOUR], [1.0, 2.0])
    model = NaiveSeasonalModel()

    with pytest.raises(PredictError):
        model.predict(model.fit(training), [HOUR])


def test_naive_rejects_unsorted_training() -> None:
    """Test that fit() enforces chronological order."""
    training = make_training_set([HOUR, 0], [1.0, 2.0])

    with pytest.raises(FitError):
        NaiveSeasonalModel().fit(training)


def test_naive_logistic_requires_cap() -> None:
    """Test option validation in configure()."""
    with pytest.raises(ConfigError):
        NaiveSeasonalModel(ModelOptions(growth=Growth.LOGISTIC))
