"""
Outlier detection for multi-dimensional points using per-dimension z-scores (the default), the interquartile-range fence, or an Isolation Forest over the full feature matrix.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np
from sklearn.ensemble import IsolationForest

from config import settings
from engine.enums import OutlierMethod
from engine.points.distance import dimension_union, feature_matrix
from engine.points.models import OutlierOptions, Point


def _zscore_flags(X: np.ndarray, threshold: float) -> np.ndarray:
    mean = X.mean(axis=0)
    std = X.std(axis=0)
    usable = std > 0
    if not usable.any():
        return np.zeros(X.shape[0], dtype=bool)
    z = np.abs(X[:, usable] - mean[usable]) / std[usable]
    return np.any(z > threshold, axis=1)


def _iqr_flags(X: np.ndarray, multiplier: float) -> np.ndarray:
    q1 = np.percentile(X, 25, axis=0)
    q3 = np.percentile(X, 75, axis=0)
    spread = q3 - q1
    usable = spread > 0
    if not usable.any():
        return np.zeros(X.shape[0], dtype=bool)
    low = q1[usable] - multiplier * spread[usable]
    high = q3[usable] + multiplier * spread[usable]
    cols = X[:, usable]
    return np.any((cols < low) | (cols > high), axis=1)


def _isolation_flags(X: np.ndarray) -> np.ndarray:
    if X.shape[0] < 2:
        return np.zeros(X.shape[0], dtype=bool)
    iso = IsolationForest(
        contamination=settings.outlier_iso_contamination,
        n_estimators=settings.outlier_iso_n_estimators,
        random_state=settings.outlier_iso_random_state,
    )
    return iso.fit_predict(X) == -1


def detect_outliers(
    points: Sequence[Point],
    options: Optional[OutlierOptions] = None,
) -> List[Point]:
    options = options or OutlierOptions()
    if not points:
        return []
    X = feature_matrix(points, dimension_union(points))
    if X.shape[1] == 0:
        return []

    if options.method == OutlierMethod.iqr:
        multiplier = options.threshold if options.threshold is not None else settings.outlier_iqr_multiplier
        flags = _iqr_flags(X, multiplier)
    elif options.method == OutlierMethod.isolation_forest:
        flags = _isolation_flags(X)
    else:
        threshold = options.threshold if options.threshold is not None else settings.outlier_zscore_threshold
        flags = _zscore_flags(X, threshold)

    return [p for p, flagged in zip(points, flags) if flagged]
