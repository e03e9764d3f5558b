"""
Forecasting methods: moving average over a recent window, Holt's linear exponential smoothing and ordinary least-squares regression against step index, each producing point forecasts, interval half-widths and per-step confidences.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from typing import List, Sequence

import numpy as np

from config import settings
from engine.forecast.models import ForecastPlan
from engine.forecast.selection import ols_fit
from engine.stats import z_for_confidence


def _step_confidences(confidence_level: float, horizon: int, decay: float) -> List[float]:
    floor = settings.forecast_min_point_confidence
    return [max(floor, confidence_level - decay * (h - 1)) for h in range(1, horizon + 1)]


def moving_average_forecast(values: Sequence[float], horizon: int, confidence_level: float) -> ForecastPlan:
    y = np.asarray(values, dtype=float)
    window = max(1, min(settings.forecast_ma_max_window, y.size // 2))
    recent = y[-window:]
    mean = float(recent.mean())
    std = float(recent.std())
    z = z_for_confidence(confidence_level)

    return ForecastPlan(
        values=[mean] * horizon,
        half_widths=[z * std * math.sqrt(h) for h in range(1, horizon + 1)],
        confidences=_step_confidences(confidence_level, horizon, settings.forecast_ma_confidence_decay),
    )


def exponential_smoothing_forecast(values: Sequence[float], horizon: int, confidence_level: float) -> ForecastPlan:
    alpha = settings.forecast_holt_alpha
    beta = settings.forecast_holt_beta
    y = [float(v) for v in values]

    level = y[0]
    trend = (y[-1] - y[0]) / len(y)
    squared_errors = 0.0
    for value in y:
        squared_errors += (value - (level + trend)) ** 2
        next_level = alpha * value + (1 - alpha) * (level + trend)
        trend = beta * (next_level - level) + (1 - beta) * trend
        level = next_level

    sigma = math.sqrt(squared_errors / len(y))
    z = z_for_confidence(confidence_level)
    growth = settings.forecast_holt_interval_growth

    return ForecastPlan(
        values=[level + h * trend for h in range(1, horizon + 1)],
        half_widths=[z * sigma * math.sqrt(1 + (h - 1) * growth) for h in range(1, horizon + 1)],
        confidences=_step_confidences(confidence_level, horizon, settings.forecast_holt_confidence_decay),
    )


def linear_regression_forecast(values: Sequence[float], horizon: int, confidence_level: float) -> ForecastPlan:
    y = np.asarray(values, dtype=float)
    n = y.size
    slope, intercept = ols_fit(y)
    steps = np.arange(n, dtype=float)
    x_mean = float(steps.mean())
    sxx = float(np.sum((steps - x_mean) ** 2))

    residuals = y - (intercept + slope * steps)
    dof = max(1, n - 2)
    s = math.sqrt(float(np.sum(residuals ** 2)) / dof)
    z = z_for_confidence(confidence_level)

    predicted: List[float] = []
    half_widths: List[float] = []
    for h in range(1, horizon + 1):
        x = n - 1 + h
        predicted.append(intercept + slope * x)
        leverage = 1.0 + 1.0 / n + ((x - x_mean) ** 2 / sxx if sxx > 0 else 0.0)
        half_widths.append(z * s * math.sqrt(leverage))

    return ForecastPlan(
        values=predicted,
        half_widths=half_widths,
        confidences=_step_confidences(confidence_level, horizon, settings.forecast_linreg_confidence_decay),
    )
