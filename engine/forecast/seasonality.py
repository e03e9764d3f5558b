"""
Multiplicative seasonal overlay for forecasts.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

import numpy as np

from engine.enums import Seasonality
from engine.forecast.models import ForecastPoint

log = logging.getLogger(__name__)


def seasonal_factors(values: Sequence[float], period: int) -> Optional[np.ndarray]:
    """Mean of value / overall-mean per seasonal position, or None when history is too short."""
    y = np.asarray(values, dtype=float)
    if period <= 0 or y.size < 2 * period:
        return None
    overall = float(y.mean())
    if overall == 0:
        return None
    ratios = y / overall
    positions = np.arange(y.size) % period
    return np.array([ratios[positions == p].mean() for p in range(period)])


def apply_seasonality(
    predictions: List[ForecastPoint],
    history: Sequence[float],
    seasonality: Seasonality,
) -> Optional[List[ForecastPoint]]:
    """Scale each prediction by its seasonal factor.

    The interval half-width is scaled by the same factor and then carried
    forward as a running maximum, so bands stay centred on the adjusted value
    and never narrow with distance into the future.

    Returns None when the overlay is skipped, which happens silently for
    ``Seasonality.none`` or when history covers fewer than two periods.
    """
    period = seasonality.period()
    factors = seasonal_factors(history, period)
    if factors is None:
        if seasonality is not Seasonality.none:
            log.debug("seasonality %s skipped: %d point(s) for period %d", seasonality.value, len(history), period)
        return None

    start = len(history) % period
    adjusted: List[ForecastPoint] = []
    half_width = 0.0
    for i, point in enumerate(predictions):
        factor = float(factors[(start + i) % period])
        value = point.value * factor
        # widths never shrink further out, even where the factor dips
        half_width = max(half_width, (point.upper_bound - point.lower_bound) / 2.0 * abs(factor))
        adjusted.append(replace(point, value=value, lower_bound=value - half_width, upper_bound=value + half_width))
    return adjusted
