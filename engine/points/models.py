"""
Data structures for multi-dimensional point analysis: points, clusters, correlation matrices, dimension reductions and the option objects that configure an analysis run.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from engine.enums import ClusteringMethod, DistanceMetric, OutlierMethod, ReductionMethod


@dataclass(frozen=True)
class Point:
    id: str
    dimensions: Dict[str, float]
    label: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Cluster:
    cluster_id: str
    centroid: Dict[str, float]
    points: List[Point]
    cohesion: float
    separation: float
    size: int
    is_noise: bool = False


@dataclass(frozen=True)
class SignificantPair:
    dim1: str
    dim2: str
    correlation: float
    p_value: float


@dataclass
class CorrelationMatrix:
    dimensions: List[str]
    values: List[List[float]]
    significant_pairs: List[SignificantPair] = field(default_factory=list)


@dataclass(frozen=True)
class Component:
    name: str
    loadings: Dict[str, float]
    variance: float


@dataclass
class DimensionReduction:
    method: ReductionMethod
    original_dimensions: int
    reduced_dimensions: int
    explained_variance: float
    components: List[Component] = field(default_factory=list)


@dataclass(frozen=True)
class PointSummary:
    total_points: int
    dimensions: int
    optimal_clusters: int


@dataclass
class PointAnalysis:
    clusters: List[Cluster]
    correlations: CorrelationMatrix
    outliers: List[Point]
    summary: PointSummary
    dimension_reduction: Optional[DimensionReduction] = None


@dataclass(frozen=True)
class SimilarPoint:
    point: Point
    similarity: float


@dataclass(frozen=True)
class ClusteringOptions:
    method: ClusteringMethod = ClusteringMethod.kmeans
    k: Optional[int] = None
    min_cluster_size: Optional[int] = None
    distance_metric: DistanceMetric = DistanceMetric.euclidean


@dataclass(frozen=True)
class ReductionOptions:
    method: ReductionMethod = ReductionMethod.pca
    target_dimensions: Optional[int] = None


@dataclass(frozen=True)
class OutlierOptions:
    method: OutlierMethod = OutlierMethod.zscore
    threshold: Optional[float] = None


@dataclass(frozen=True)
class DimensionWeight:
    dimension: str
    weight: float
    description: Optional[str] = None


@dataclass(frozen=True)
class AnalysisOptions:
    clustering: ClusteringOptions = field(default_factory=ClusteringOptions)
    dimension_reduction: Optional[ReductionOptions] = None
    outlier_detection: OutlierOptions = field(default_factory=OutlierOptions)
    weights: List[DimensionWeight] = field(default_factory=list)
