"""
Enumerations for distance metrics, clustering and outlier methods, forecast methods, trends, sampling distributions and causal variable types.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum

from config import SEASONAL_PERIODS, settings


class DistanceMetric(str, Enum):
    euclidean = "euclidean"
    manhattan = "manhattan"
    cosine = "cosine"


class ClusteringMethod(str, Enum):
    kmeans = "kmeans"
    hierarchical = "hierarchical"
    dbscan = "dbscan"


class OutlierMethod(str, Enum):
    zscore = "zscore"
    iqr = "iqr"
    isolation_forest = "isolation_forest"


class ReductionMethod(str, Enum):
    # variance ranking stands in for all three; see engine.points.reduction
    pca = "pca"
    tsne = "tsne"
    umap = "umap"


class ForecastMethod(str, Enum):
    auto = "auto"
    moving_average = "moving_average"
    exponential_smoothing = "exponential_smoothing"
    linear_regression = "linear_regression"


class Seasonality(str, Enum):
    none = "none"
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    yearly = "yearly"

    def period(self) -> int:
        if self is Seasonality.none:
            return 0
        return int(settings.seasonal_periods.get(self.value, SEASONAL_PERIODS[self.value]))


class Trend(str, Enum):
    increasing = "INCREASING"
    decreasing = "DECREASING"
    stable = "STABLE"
    volatile = "VOLATILE"


class Distribution(str, Enum):
    normal = "normal"
    uniform = "uniform"
    triangular = "triangular"


class VariableType(str, Enum):
    binary = "binary"
    categorical = "categorical"
    continuous = "continuous"
