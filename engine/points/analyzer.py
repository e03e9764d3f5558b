"""
Point analyzer entry point: runs clustering, correlation, outlier detection, optional dimensionality reduction and cluster-count estimation over one point snapshot and wraps the result in the analysis envelope.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import time
from typing import Dict, List, Optional, Sequence

import numpy as np

from config import settings
from engine.envelope import AnalysisResult, build_result
from engine.exceptions import EmptyInputError
from engine.points.clustering import cluster_points, estimate_optimal_k
from engine.points.correlation import correlation_matrix
from engine.points.distance import dimension_union
from engine.points.models import AnalysisOptions, DimensionWeight, Point, PointAnalysis, PointSummary
from engine.points.outliers import detect_outliers
from engine.points.reduction import reduce_dimensions
from engine.rng import resolve_rng

log = logging.getLogger(__name__)


def _weight_map(weights: List[DimensionWeight]) -> Dict[str, float]:
    return {w.dimension: float(w.weight) for w in weights}


def _confidence(analysis: PointAnalysis) -> float:
    clusters = analysis.clusters
    cluster_quality = sum(c.cohesion for c in clusters) / len(clusters) if clusters else 0.0

    pairs = analysis.correlations.significant_pairs
    significant = sum(1 for p in pairs if p.p_value < settings.correlation_p_threshold)
    significance_share = significant / max(1, len(pairs))

    outlier_ratio = len(analysis.outliers) / max(1, analysis.summary.total_points)
    outlier_penalty = max(0.0, 1.0 - outlier_ratio * settings.points_outlier_penalty_factor)

    return (
        cluster_quality * settings.points_confidence_cohesion_weight
        + significance_share * settings.points_confidence_significance_weight
        + outlier_penalty * settings.points_confidence_outlier_weight
    )


def analyze_points(
    points: Sequence[Point],
    options: Optional[AnalysisOptions] = None,
    rng: Optional[np.random.Generator] = None,
) -> AnalysisResult[PointAnalysis]:
    started = time.perf_counter()
    if not points:
        raise EmptyInputError("No data points provided for analysis")

    options = options or AnalysisOptions()
    rng = resolve_rng(rng)
    dimensions = dimension_union(points)

    clusters = cluster_points(
        points,
        options.clustering,
        weights=_weight_map(options.weights) if options.weights else None,
        rng=rng,
    )
    correlations = correlation_matrix(points)
    outliers = detect_outliers(points, options.outlier_detection)
    reduction = (
        reduce_dimensions(points, options.dimension_reduction)
        if options.dimension_reduction is not None
        else None
    )

    analysis = PointAnalysis(
        clusters=clusters,
        correlations=correlations,
        outliers=outliers,
        dimension_reduction=reduction,
        summary=PointSummary(
            total_points=len(points),
            dimensions=len(dimensions),
            optimal_clusters=estimate_optimal_k(points, options.clustering.distance_metric, rng=rng),
        ),
    )
    log.info(
        "analyzed %d point(s) over %d dimension(s): %d cluster(s), %d outlier(s)",
        len(points), len(dimensions), len(clusters), len(outliers),
    )
    return build_result(analysis, _confidence(analysis), started)
