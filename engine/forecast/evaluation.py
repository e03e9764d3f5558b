"""
Forecast evaluation: naive hold-out backtesting for accuracy metrics and classification of the historical trend.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from config import settings
from engine.enums import Trend
from engine.forecast.models import AccuracyMetrics


def backtest(values: Sequence[float]) -> AccuracyMetrics:
    y = np.asarray(values, dtype=float)
    if y.size < settings.forecast_backtest_min_length:
        return AccuracyMetrics()

    split = int(y.size * settings.forecast_backtest_train_ratio)
    naive = y[split - 1]
    test = y[split:]
    errors = np.abs(test - naive)

    nonzero = test != 0
    pct = np.zeros_like(errors)
    pct[nonzero] = errors[nonzero] / np.abs(test[nonzero])

    return AccuracyMetrics(
        mae=float(errors.mean()),
        rmse=float(math.sqrt(np.mean(errors ** 2))),
        mape=float(pct.mean() * 100.0),
    )


def classify_trend(values: Sequence[float]) -> Trend:
    y = [float(v) for v in values]
    if len(y) < 2:
        return Trend.stable

    # returns from a zero base are undefined and skipped
    returns = [(cur - prev) / prev for prev, cur in zip(y, y[1:]) if prev != 0]
    volatility = math.sqrt(sum(r * r for r in returns) / len(returns)) if returns else 0.0
    if volatility > settings.forecast_volatility_threshold:
        return Trend.volatile

    slope = (y[-1] - y[0]) / len(y)
    if slope == 0 or abs(slope) < settings.forecast_stable_slope_ratio * abs(y[0]):
        return Trend.stable
    return Trend.increasing if slope > 0 else Trend.decreasing
