"""
Point analysis routes: clustering, correlation structure, outliers and similarity search over multi-dimensional points.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter

from api.requests import PointModel, PointsAnalyzeRequest, SimilarPointsRequest
from api.responses import envelope, to_payload
from api.routes.common import run_analysis
from api.routes.exception import handle_exceptions
from engine.points import (
    AnalysisOptions,
    ClusteringOptions,
    DimensionWeight,
    OutlierOptions,
    Point,
    ReductionOptions,
    analyze_points,
    find_similar,
)

router = APIRouter(tags=["Points"])


def _to_points(models: List[PointModel]) -> List[Point]:
    return [
        Point(id=p.id, dimensions=dict(p.dimensions), label=p.label, metadata=dict(p.metadata))
        for p in models
    ]


def _to_options(req: PointsAnalyzeRequest) -> AnalysisOptions:
    reduction = req.dimension_reduction
    return AnalysisOptions(
        clustering=ClusteringOptions(
            method=req.clustering.method,
            k=req.clustering.k,
            min_cluster_size=req.clustering.min_cluster_size,
            distance_metric=req.clustering.distance_metric,
        ),
        dimension_reduction=(
            ReductionOptions(method=reduction.method, target_dimensions=reduction.target_dimensions)
            if reduction is not None
            else None
        ),
        outlier_detection=OutlierOptions(
            method=req.outlier_detection.method,
            threshold=req.outlier_detection.threshold,
        ),
        weights=[
            DimensionWeight(dimension=w.dimension, weight=w.weight, description=w.description)
            for w in req.weights
        ],
    )


@router.post("/points/analyze", summary="Cluster, correlate and screen a point set for outliers")
@handle_exceptions
async def points_analyze(req: PointsAnalyzeRequest) -> Dict[str, Any]:
    result = await run_analysis(analyze_points, _to_points(req.points), _to_options(req))
    return envelope(result)


@router.post("/points/similar", summary="Nearest candidates to a target point")
@handle_exceptions
async def points_similar(req: SimilarPointsRequest) -> Dict[str, Any]:
    target = _to_points([req.target])[0]
    matches = await run_analysis(find_similar, target, _to_points(req.candidates), req.top_k)
    return {"target": req.target.id, "results": to_payload(matches)}
