"""
Point analyzer package: clustering, correlation structure, outlier detection, approximate dimensionality reduction and similarity search over multi-dimensional points.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.points.analyzer import analyze_points
from engine.points.clustering import cluster_points, estimate_optimal_k, kmeans
from engine.points.correlation import correlation_matrix
from engine.points.distance import find_similar, similarity
from engine.points.models import (
    AnalysisOptions,
    Cluster,
    ClusteringOptions,
    CorrelationMatrix,
    DimensionReduction,
    DimensionWeight,
    OutlierOptions,
    Point,
    PointAnalysis,
    ReductionOptions,
    SimilarPoint,
)
from engine.points.outliers import detect_outliers
from engine.points.reduction import reduce_dimensions

__all__ = [
    "analyze_points", "cluster_points", "estimate_optimal_k", "kmeans",
    "correlation_matrix", "find_similar", "similarity",
    "detect_outliers", "reduce_dimensions",
    "AnalysisOptions", "Cluster", "ClusteringOptions", "CorrelationMatrix",
    "DimensionReduction", "DimensionWeight", "OutlierOptions", "Point",
    "PointAnalysis", "ReductionOptions", "SimilarPoint",
]
