"""
Data models for time-series forecasting: history points, forecast points with confidence bands, backtest accuracy, the forecast result and caller options.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from engine.enums import ForecastMethod, Seasonality, Trend


@dataclass(frozen=True)
class TimeSeriesPoint:
    timestamp: datetime
    value: float


@dataclass(frozen=True)
class ForecastPoint:
    timestamp: datetime
    value: float
    lower_bound: float
    upper_bound: float
    confidence: float


@dataclass(frozen=True)
class AccuracyMetrics:
    mae: float = 0.0
    rmse: float = 0.0
    mape: float = 0.0


@dataclass(frozen=True)
class ForecastResult:
    predictions: List[ForecastPoint]
    model: ForecastMethod
    accuracy: AccuracyMetrics
    trend: Trend
    seasonality_applied: bool = False


@dataclass(frozen=True)
class ForecastOptions:
    method: ForecastMethod = ForecastMethod.auto
    confidence_level: Optional[float] = None
    seasonality: Seasonality = Seasonality.none


@dataclass(frozen=True)
class ForecastPlan:
    """Raw projection produced by one forecasting method before timestamps are attached."""

    values: List[float] = field(default_factory=list)
    half_widths: List[float] = field(default_factory=list)
    confidences: List[float] = field(default_factory=list)
