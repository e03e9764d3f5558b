"""
Automatic forecasting method selection from the shape of the history: a strong linear trend picks regression, high relative dispersion picks Holt smoothing, anything else falls back to a moving average.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

import numpy as np

from config import settings
from engine.enums import ForecastMethod

log = logging.getLogger(__name__)


def ols_fit(values: Sequence[float]) -> Tuple[float, float]:
    """Slope and intercept of the least-squares line against step index 0..n-1."""
    y = np.asarray(values, dtype=float)
    n = y.size
    if n < 2:
        return 0.0, float(y[0]) if n else 0.0
    x = np.arange(n, dtype=float)
    x_mean = x.mean()
    sxx = float(np.sum((x - x_mean) ** 2))
    slope = float(np.sum((x - x_mean) * (y - y.mean())) / sxx)
    return slope, float(y.mean() - slope * x_mean)


def trend_strength(values: Sequence[float]) -> float:
    """Share of variance explained by the OLS line, SSR / SST; 0 for a flat series."""
    y = np.asarray(values, dtype=float)
    if y.size < 2:
        return 0.0
    slope, intercept = ols_fit(y)
    fitted = intercept + slope * np.arange(y.size, dtype=float)
    sst = float(np.sum((y - y.mean()) ** 2))
    if sst == 0:
        return 0.0
    ssr = float(np.sum((fitted - y.mean()) ** 2))
    return min(1.0, ssr / sst)


def coefficient_of_variation(values: Sequence[float]) -> float:
    y = np.asarray(values, dtype=float)
    if y.size == 0:
        return 0.0
    std = float(y.std())
    mean = abs(float(y.mean()))
    if mean == 0:
        return float("inf") if std > 0 else 0.0
    return std / mean


def select_method(values: Sequence[float]) -> ForecastMethod:
    strength = trend_strength(values)
    if strength > settings.forecast_trend_strength_threshold:
        method = ForecastMethod.linear_regression
    elif coefficient_of_variation(values) > settings.forecast_cv_threshold:
        method = ForecastMethod.exponential_smoothing
    else:
        method = ForecastMethod.moving_average
    log.debug("selected %s (trend_strength=%.3f)", method.value, strength)
    return method
