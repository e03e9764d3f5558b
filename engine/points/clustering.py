"""
Clustering logic for multi-dimensional points: k-means with k-means++ seeding (the default), plus DBSCAN and agglomerative clustering from scikit-learn, and elbow-method estimation of the cluster count.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
from sklearn.cluster import DBSCAN, AgglomerativeClustering

from config import settings
from engine.enums import ClusteringMethod, DistanceMetric
from engine.points.distance import dimension_union, distance_table, distances_to, feature_matrix
from engine.points.models import Cluster, ClusteringOptions, Point
from engine.rng import resolve_rng

log = logging.getLogger(__name__)

NOISE_LABEL = -1


def seed_centroids(
    X: np.ndarray,
    k: int,
    metric: DistanceMetric,
    rng: np.random.Generator,
) -> np.ndarray:
    """k-means++ seeding over the rows of ``X``.

    The first centroid is drawn uniformly; every later one is drawn with
    probability proportional to the squared distance from each point to its
    nearest already-chosen centroid. When every point coincides with a chosen
    centroid the draw falls back to uniform.
    """
    n = X.shape[0]
    centroids = [X[int(rng.integers(n))].copy()]
    for _ in range(1, k):
        nearest = np.min(distance_table(X, np.array(centroids), metric), axis=1)
        weights = nearest * nearest
        total = float(weights.sum())
        if total <= 0:
            idx = int(rng.integers(n))
        else:
            idx = int(np.searchsorted(np.cumsum(weights), rng.random() * total, side="right"))
            idx = min(idx, n - 1)
        centroids.append(X[idx].copy())
    return np.array(centroids)


def _lloyd(
    X: np.ndarray,
    centroids: np.ndarray,
    metric: DistanceMetric,
    max_iterations: int,
) -> Tuple[np.ndarray, np.ndarray, int]:
    assignments = np.full(X.shape[0], -1)
    rounds = 0
    for rounds in range(1, max_iterations + 1):
        updated = np.argmin(distance_table(X, centroids, metric), axis=1)
        if np.array_equal(updated, assignments):
            break
        assignments = updated
        for i in range(len(centroids)):
            members = X[assignments == i]
            if len(members):
                centroids[i] = members.mean(axis=0)
    return assignments, centroids, rounds


def _build_clusters(
    points: Sequence[Point],
    X: np.ndarray,
    labels: np.ndarray,
    dimensions: Sequence[str],
    metric: DistanceMetric,
    centroids: Optional[Dict[int, np.ndarray]] = None,
) -> List[Cluster]:
    groups: Dict[int, List[int]] = {}
    for idx, label in enumerate(labels):
        groups.setdefault(int(label), []).append(idx)

    centres: Dict[int, np.ndarray] = {}
    for label, members in groups.items():
        if centroids is not None and label in centroids:
            centres[label] = centroids[label]
        else:
            centres[label] = X[members].mean(axis=0)

    result: List[Cluster] = []
    for label in sorted(groups):
        members = groups[label]
        centre = centres[label]
        mean_distance = float(np.mean(distances_to(X[members], centre, metric)))
        others = [c for other, c in centres.items() if other != label]
        separation = (
            float(np.min(distances_to(np.array(others), centre, metric))) if others else 0.0
        )
        is_noise = label == NOISE_LABEL
        result.append(Cluster(
            cluster_id="noise" if is_noise else f"cluster-{label}",
            centroid={dim: float(v) for dim, v in zip(dimensions, centre)},
            points=[points[i] for i in members],
            cohesion=1.0 / (1.0 + mean_distance),
            separation=separation,
            size=len(members),
            is_noise=is_noise,
        ))
    return result


def kmeans(
    points: Sequence[Point],
    k: int | None = None,
    metric: DistanceMetric = DistanceMetric.euclidean,
    rng: Optional[np.random.Generator] = None,
    weights: Optional[Mapping[str, float]] = None,
    max_iterations: int | None = None,
) -> List[Cluster]:
    if k is None:
        k = settings.kmeans_default_k
    if max_iterations is None:
        max_iterations = settings.kmeans_max_iterations
    if not points:
        return []
    rng = resolve_rng(rng)
    dimensions = dimension_union(points)
    X = feature_matrix(points, dimensions, weights)
    k = max(1, min(int(k), len(points)))

    seeds = seed_centroids(X, k, metric, rng)
    assignments, centroids, rounds = _lloyd(X, seeds, metric, max_iterations)
    log.debug("k-means k=%d finished after %d round(s)", k, rounds)
    return _build_clusters(
        points, X, assignments, dimensions, metric,
        centroids={i: centroids[i] for i in range(k)},
    )


def _sklearn_labels(
    X: np.ndarray,
    options: ClusteringOptions,
) -> np.ndarray:
    metric = options.distance_metric.value
    data = X
    if options.distance_metric == DistanceMetric.cosine:
        # zero vectors are orthogonal to everything, as in distances_to
        table = distance_table(X, X, options.distance_metric)
        data = (table + table.T) / 2.0
        np.fill_diagonal(data, 0.0)
        metric = "precomputed"

    if options.method == ClusteringMethod.dbscan:
        min_samples = options.min_cluster_size if options.min_cluster_size is not None else settings.dbscan_min_samples
        min_samples = max(1, int(min_samples))
        return DBSCAN(eps=settings.dbscan_eps, min_samples=min_samples, metric=metric).fit_predict(data)

    k = options.k if options.k is not None else settings.kmeans_default_k
    n_clusters = max(1, min(int(k), X.shape[0]))
    if X.shape[0] < 2 or n_clusters == 1:
        return np.zeros(X.shape[0], dtype=int)
    return AgglomerativeClustering(
        n_clusters=n_clusters,
        metric=metric,
        linkage=settings.hierarchical_linkage,
    ).fit_predict(data)


def cluster_points(
    points: Sequence[Point],
    options: Optional[ClusteringOptions] = None,
    weights: Optional[Mapping[str, float]] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[Cluster]:
    """Cluster ``points``; every point lands in exactly one returned cluster.

    Weights scale dimensions before clustering only; members are returned
    unweighted.
    """
    options = options or ClusteringOptions()
    if not points:
        return []
    if options.method == ClusteringMethod.kmeans:
        return kmeans(points, options.k, options.distance_metric, rng=rng, weights=weights)

    dimensions = dimension_union(points)
    X = feature_matrix(points, dimensions, weights)
    labels = _sklearn_labels(X, options)
    return _build_clusters(points, X, labels, dimensions, options.distance_metric)


def inertia(X: np.ndarray, centroids: np.ndarray, metric: DistanceMetric) -> float:
    nearest = np.min(distance_table(X, centroids, metric), axis=1)
    return float(np.sum(nearest * nearest))


def estimate_optimal_k(
    points: Sequence[Point],
    metric: DistanceMetric = DistanceMetric.euclidean,
    rng: Optional[np.random.Generator] = None,
) -> int:
    """Elbow method over freshly seeded centroids for k = 1..min(10, n/2)."""
    n = len(points)
    if n < settings.elbow_min_points:
        return 1
    rng = resolve_rng(rng)
    X = feature_matrix(points, dimension_union(points))
    max_k = min(settings.elbow_max_k, n // 2)

    inertias = [inertia(X, seed_centroids(X, k, metric, rng), metric) for k in range(1, max_k + 1)]
    if len(inertias) < 3:
        # no second difference exists; keep the elbow default inside the searched range
        return max(1, min(2, max_k))

    best_k, best_curvature = 2, 0.0
    for i in range(1, len(inertias) - 1):
        curvature = abs(inertias[i - 1] - 2 * inertias[i] + inertias[i + 1])
        if curvature > best_curvature:
            best_curvature = curvature
            best_k = i + 1
    return best_k
