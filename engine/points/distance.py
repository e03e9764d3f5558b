"""
Distance and similarity between sparse multi-dimensional points. Points may carry different dimension sets; every comparison runs over the union of keys with absent dimensions read as 0, which makes a dense zero-filled feature matrix an exact representation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import numpy as np

from config import settings
from engine.enums import DistanceMetric
from engine.points.models import Point, SimilarPoint


def dimension_union(points: Iterable[Point]) -> List[str]:
    seen: Dict[str, None] = {}
    for point in points:
        for dim in point.dimensions:
            seen.setdefault(dim, None)
    return list(seen)


def feature_matrix(
    points: Sequence[Point],
    dimensions: Sequence[str],
    weights: Optional[Mapping[str, float]] = None,
) -> np.ndarray:
    X = np.zeros((len(points), len(dimensions)), dtype=float)
    for i, point in enumerate(points):
        for j, dim in enumerate(dimensions):
            X[i, j] = float(point.dimensions.get(dim, 0.0))
    if weights:
        scale = np.array([float(weights.get(dim, 1.0)) for dim in dimensions], dtype=float)
        X = X * scale
    return X


def distances_to(X: np.ndarray, target: np.ndarray, metric: DistanceMetric = DistanceMetric.euclidean) -> np.ndarray:
    """Distance from every row of ``X`` to the vector ``target``."""
    diff = X - target
    if metric == DistanceMetric.manhattan:
        return np.sum(np.abs(diff), axis=1)
    if metric == DistanceMetric.cosine:
        norms = np.linalg.norm(X, axis=1) * np.linalg.norm(target)
        safe = np.where(norms > 0, norms, 1.0)
        # a zero vector has no direction; treat it as orthogonal to everything
        cos = np.where(norms > 0, (X @ target) / safe, 0.0)
        return 1.0 - np.clip(cos, -1.0, 1.0)
    return np.sqrt(np.sum(diff * diff, axis=1))


def distance_table(X: np.ndarray, centroids: np.ndarray, metric: DistanceMetric) -> np.ndarray:
    return np.column_stack([distances_to(X, c, metric) for c in centroids])


def distance(
    a: Mapping[str, float],
    b: Mapping[str, float],
    metric: DistanceMetric = DistanceMetric.euclidean,
) -> float:
    dims = list(dict.fromkeys([*a.keys(), *b.keys()]))
    if not dims:
        return 0.0
    va = np.array([[float(a.get(d, 0.0)) for d in dims]])
    vb = np.array([float(b.get(d, 0.0)) for d in dims])
    return float(distances_to(va, vb, metric)[0])


def similarity(a: Point, b: Point) -> float:
    return 1.0 / (1.0 + distance(a.dimensions, b.dimensions))


def find_similar(
    target: Point,
    candidates: Sequence[Point],
    top_k: int | None = None,
) -> List[SimilarPoint]:
    if top_k is None:
        top_k = settings.similarity_top_k
    scored = [
        SimilarPoint(point=c, similarity=similarity(target, c))
        for c in candidates
        if c.id != target.id
    ]
    scored.sort(key=lambda s: s.similarity, reverse=True)
    return scored[: max(0, top_k)]
