"""
Test cases for forecast logic in the analysis engine, including method selection, confidence-band properties of each forecasting method, seasonal overlay, backtesting, trend classification and input validation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import math
from datetime import datetime, timedelta, timezone

import pytest

from config import settings
from engine.enums import ForecastMethod, Seasonality, Trend
from engine.exceptions import InsufficientDataError, InvalidInputError
from engine.forecast import (
    ForecastOptions,
    TimeSeriesPoint,
    backtest,
    classify_trend,
    coefficient_of_variation,
    exponential_smoothing_forecast,
    forecast,
    linear_regression_forecast,
    moving_average_forecast,
    select_method,
    trend_strength,
)

START = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _series(values, step=timedelta(days=1)):
    return [TimeSeriesPoint(timestamp=START + step * i, value=v) for i, v in enumerate(values)]


def test_trend_strength_and_cv():
    assert trend_strength([1, 2, 3, 4, 5]) == pytest.approx(1.0)
    assert trend_strength([4, 4, 4, 4]) == 0.0
    assert coefficient_of_variation([5, 5, 5]) == 0.0
    assert coefficient_of_variation([-1, 1]) == math.inf


def test_select_method_branches():
    assert select_method([float(i) for i in range(1, 11)]) == ForecastMethod.linear_regression
    assert select_method([1, 10, 1, 10, 1, 10, 1, 10]) == ForecastMethod.exponential_smoothing
    assert select_method([10, 10.1, 9.9, 10, 10.1, 9.9]) == ForecastMethod.moving_average
    assert select_method([3, 3, 3, 3]) == ForecastMethod.moving_average


def test_moving_average_uses_recent_window():
    plan = moving_average_forecast([1, 2, 3, 4, 5, 6], horizon=3, confidence_level=0.95)
    assert plan.values == [5.0, 5.0, 5.0]
    assert plan.half_widths[1] == pytest.approx(plan.half_widths[0] * math.sqrt(2))
    assert plan.confidences == pytest.approx([0.95, 0.90, 0.85])


def test_point_confidence_has_floor():
    plan = moving_average_forecast([1, 2, 3, 4], horizon=20, confidence_level=0.95)
    assert min(plan.confidences) == settings.forecast_min_point_confidence


def test_linear_regression_extends_exact_line():
    values = [2.0 * i + 1 for i in range(8)]
    plan = linear_regression_forecast(values, horizon=2, confidence_level=0.95)
    assert plan.values == pytest.approx([17.0, 19.0])
    assert plan.half_widths == pytest.approx([0.0, 0.0], abs=1e-9)


def test_holt_on_constant_series_is_flat():
    plan = exponential_smoothing_forecast([7.0] * 6, horizon=4, confidence_level=0.9)
    assert plan.values == pytest.approx([7.0] * 4)
    assert plan.half_widths == pytest.approx([0.0] * 4)


@pytest.mark.parametrize("method", [
    ForecastMethod.moving_average,
    ForecastMethod.exponential_smoothing,
    ForecastMethod.linear_regression,
])
def test_bounds_contain_value_and_widen(method):
    history = _series([10, 12, 11, 14, 13, 15, 17, 16, 18, 21])
    result = forecast(history, horizon=12, options=ForecastOptions(method=method))
    widths = []
    for point in result.data.predictions:
        assert point.lower_bound <= point.value <= point.upper_bound
        widths.append(point.upper_bound - point.lower_bound)
    for earlier, later in zip(widths, widths[1:]):
        assert later >= earlier - 1e-12
    assert result.data.model == method


def test_forecast_timestamps_follow_history_spacing():
    history = _series([1, 2, 3, 4], step=timedelta(hours=1))
    predictions = forecast(history, horizon=2).data.predictions
    assert predictions[0].timestamp == history[-1].timestamp + timedelta(hours=1)
    assert predictions[1].timestamp == history[-1].timestamp + timedelta(hours=2)


def test_forecast_zero_spacing_steps_one_day():
    history = [TimeSeriesPoint(timestamp=START, value=v) for v in (1, 2, 3)]
    predictions = forecast(history, horizon=1).data.predictions
    assert predictions[0].timestamp == START + timedelta(days=1)


@pytest.mark.parametrize("count", [0, 1, 2])
def test_forecast_requires_three_points(count):
    with pytest.raises(InsufficientDataError):
        forecast(_series(list(range(count))), horizon=3)


def test_forecast_rejects_unordered_history():
    history = _series([1, 2, 3])
    history[1], history[2] = history[2], history[1]
    with pytest.raises(InvalidInputError):
        forecast(history, horizon=1)


def test_forecast_rejects_bad_horizon():
    with pytest.raises(InvalidInputError):
        forecast(_series([1, 2, 3]), horizon=0)


def test_weekly_seasonality_scales_predictions():
    history = _series([1, 2, 3, 4, 5, 6, 7] * 2)
    result = forecast(
        history,
        horizon=7,
        options=ForecastOptions(method=ForecastMethod.moving_average, seasonality=Seasonality.weekly),
    )
    data = result.data
    assert data.seasonality_applied is True
    # window mean 5, factor for position 0 is 1 / 4
    assert data.predictions[0].value == pytest.approx(1.25)
    assert data.predictions[6].value == pytest.approx(5 * 7 / 4)
    for point in data.predictions:
        assert point.lower_bound <= point.value <= point.upper_bound


def test_seasonal_bands_never_narrow():
    history = _series([float(v) for v in [2, 9, 1, 14, 3, 6, 20] * 3])
    result = forecast(
        history,
        horizon=7,
        options=ForecastOptions(method=ForecastMethod.moving_average, seasonality=Seasonality.weekly),
    )
    predictions = result.data.predictions
    assert result.data.seasonality_applied is True
    widths = [p.upper_bound - p.lower_bound for p in predictions]
    for earlier, later in zip(widths, widths[1:]):
        assert later >= earlier - 1e-12
    for point in predictions:
        assert point.lower_bound <= point.value <= point.upper_bound
        assert point.value - point.lower_bound == pytest.approx(point.upper_bound - point.value)


def test_seasonality_skipped_without_two_periods():
    history = _series([1, 2, 3, 4, 5, 6, 7, 8])
    result = forecast(history, horizon=3, options=ForecastOptions(seasonality=Seasonality.weekly))
    assert result.data.seasonality_applied is False


def test_backtest_metrics():
    assert backtest([1, 2, 3, 4]).mae == 0.0
    metrics = backtest([10, 10, 10, 10, 10, 20])
    assert metrics.mae == pytest.approx(5.0)
    assert metrics.rmse == pytest.approx(math.sqrt(50))
    assert metrics.mape == pytest.approx(25.0)


def test_classify_trend():
    assert classify_trend([1.0, 1.1, 1.2, 1.3, 1.4]) == Trend.increasing
    assert classify_trend([1.4, 1.3, 1.2, 1.1, 1.0]) == Trend.decreasing
    assert classify_trend([5, 5, 5, 5]) == Trend.stable
    assert classify_trend([100, 100.1, 100, 100.1]) == Trend.stable
    assert classify_trend([1, 2, 1, 2, 1]) == Trend.volatile
    # zero bases are skipped
    assert classify_trend([0, 0, 0]) == Trend.stable


def test_forecast_envelope_confidence():
    history = _series([float(i) for i in range(10, 20)])
    result = forecast(history, horizon=2)
    data = result.data
    expected = (
        max(0.0, 1 - data.accuracy.mape / 100) * settings.forecast_confidence_mape_weight
        + settings.forecast_trend_score_default * settings.forecast_confidence_trend_weight
    )
    assert data.trend == Trend.increasing
    assert result.confidence == pytest.approx(round(expected, 4))
