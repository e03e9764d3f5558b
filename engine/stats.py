"""
Shared statistical helpers: Pearson correlation with a neutral fallback for degenerate input, the closed-form t-distribution CDF approximation used for correlation and lagged-causality significance, and normal quantiles for forecast intervals.

The t-CDF here is a deliberate heuristic, ``1 - 0.5 * (df / (df + t^2)) ** (df / 2)``,
not the true Student's t CDF. Its accuracy at small sample sizes is unverified;
callers needing rigorous p-values must not rely on it.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from scipy.stats import norm


def t_cdf_approx(t: float, df: float) -> float:
    if df <= 0:
        return 0.5
    x = df / (df + t * t)
    return 1.0 - 0.5 * x ** (df / 2.0)


def approx_p_value(r: float, df: float) -> float:
    """Two-tailed significance of correlation ``r`` with ``df`` degrees of freedom."""
    if df <= 0 or not math.isfinite(r):
        return 1.0
    if abs(r) >= 1.0:
        return 0.0
    t = r * math.sqrt(df / (1.0 - r * r))
    p = 2.0 * (1.0 - t_cdf_approx(abs(t), df))
    return min(1.0, max(0.0, p))


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    n = min(len(x), len(y))
    if n == 0:
        return 0.0
    a = np.asarray(x[:n], dtype=float)
    b = np.asarray(y[:n], dtype=float)
    da = a - a.mean()
    db = b - b.mean()
    denom = math.sqrt(float(np.sum(da * da)) * float(np.sum(db * db)))
    if denom == 0:
        return 0.0
    return float(np.sum(da * db) / denom)


def z_for_confidence(level: float) -> float:
    level = min(max(float(level), 1e-6), 1.0 - 1e-9)
    return float(norm.ppf(0.5 + level / 2.0))
