"""
Forecast entry point: validates history, chooses a method, projects the horizon with confidence bands, overlays seasonality and attaches backtest accuracy and trend classification.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import time
from datetime import timedelta
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from config import settings
from engine.enums import ForecastMethod, Seasonality, Trend
from engine.envelope import AnalysisResult, build_result
from engine.exceptions import InsufficientDataError, InvalidInputError
from engine.forecast.evaluation import backtest, classify_trend
from engine.forecast.methods import (
    exponential_smoothing_forecast,
    linear_regression_forecast,
    moving_average_forecast,
)
from engine.forecast.models import ForecastOptions, ForecastPlan, ForecastPoint, ForecastResult, TimeSeriesPoint
from engine.forecast.seasonality import apply_seasonality
from engine.forecast.selection import select_method

log = logging.getLogger(__name__)

_METHODS: Dict[ForecastMethod, Callable[[Sequence[float], int, float], ForecastPlan]] = {
    ForecastMethod.moving_average: moving_average_forecast,
    ForecastMethod.exponential_smoothing: exponential_smoothing_forecast,
    ForecastMethod.linear_regression: linear_regression_forecast,
}


def _validate(history: Sequence[TimeSeriesPoint], horizon: int, confidence_level: float) -> None:
    if len(history) < settings.forecast_min_history:
        raise InsufficientDataError(
            f"At least {settings.forecast_min_history} data points required for forecasting, got {len(history)}"
        )
    if horizon < 1 or horizon > settings.max_horizon:
        raise InvalidInputError(f"horizon must be between 1 and {settings.max_horizon}, got {horizon}")
    if not 0.0 < confidence_level < 1.0:
        raise InvalidInputError(f"confidence_level must be in (0, 1), got {confidence_level}")
    for prev, cur in zip(history, history[1:]):
        if cur.timestamp < prev.timestamp:
            raise InvalidInputError(f"history is not chronological at {cur.timestamp.isoformat()}")


def _step(history: Sequence[TimeSeriesPoint]) -> timedelta:
    gaps = [(b.timestamp - a.timestamp).total_seconds() for a, b in zip(history, history[1:])]
    spacing = float(np.median(gaps)) if gaps else 0.0
    return timedelta(seconds=spacing) if spacing > 0 else timedelta(days=1)


def _confidence(result: ForecastResult) -> float:
    mape_score = max(0.0, 1.0 - result.accuracy.mape / 100.0)
    trend_score = (
        settings.forecast_trend_score_volatile
        if result.trend is Trend.volatile
        else settings.forecast_trend_score_default
    )
    return mape_score * settings.forecast_confidence_mape_weight + trend_score * settings.forecast_confidence_trend_weight


def forecast(
    history: Sequence[TimeSeriesPoint],
    horizon: int,
    options: Optional[ForecastOptions] = None,
) -> AnalysisResult[ForecastResult]:
    started = time.perf_counter()
    options = options or ForecastOptions()
    confidence_level = (
        options.confidence_level
        if options.confidence_level is not None
        else settings.forecast_default_confidence_level
    )
    _validate(history, horizon, confidence_level)

    values = [float(p.value) for p in history]
    method = ForecastMethod(options.method)
    if method == ForecastMethod.auto:
        method = select_method(values)
    plan = _METHODS[method](values, horizon, confidence_level)

    step = _step(history)
    last = history[-1].timestamp
    predictions: List[ForecastPoint] = [
        ForecastPoint(
            timestamp=last + step * (i + 1),
            value=value,
            lower_bound=value - width,
            upper_bound=value + width,
            confidence=conf,
        )
        for i, (value, width, conf) in enumerate(zip(plan.values, plan.half_widths, plan.confidences))
    ]

    seasonal = apply_seasonality(predictions, values, Seasonality(options.seasonality))
    result = ForecastResult(
        predictions=seasonal if seasonal is not None else predictions,
        model=method,
        accuracy=backtest(values),
        trend=classify_trend(values),
        seasonality_applied=seasonal is not None,
    )
    log.info(
        "forecast %d step(s) from %d point(s) with %s, trend %s",
        horizon, len(values), method.value, result.trend.value,
    )
    return build_result(result, _confidence(result), started)
