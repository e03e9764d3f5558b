"""
Time-series forecasting with automatic method selection, confidence bands, seasonal overlay, backtest accuracy and trend classification.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


from engine.forecast.evaluation import backtest, classify_trend
from engine.forecast.forecaster import forecast
from engine.forecast.methods import (
    exponential_smoothing_forecast,
    linear_regression_forecast,
    moving_average_forecast,
)
from engine.forecast.models import AccuracyMetrics, ForecastOptions, ForecastPoint, ForecastResult, TimeSeriesPoint
from engine.forecast.seasonality import apply_seasonality
from engine.forecast.selection import coefficient_of_variation, select_method, trend_strength

__all__ = [
    "forecast", "select_method", "trend_strength", "coefficient_of_variation",
    "moving_average_forecast", "exponential_smoothing_forecast", "linear_regression_forecast",
    "apply_seasonality", "backtest", "classify_trend",
    "AccuracyMetrics", "ForecastOptions", "ForecastPoint", "ForecastResult", "TimeSeriesPoint",
]
