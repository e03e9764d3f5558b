"""
Test cases for the point analyzer: clustering, correlation structure, outlier detection, variance-ranking reduction, similarity search and the combined analysis envelope.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import numpy as np
import pytest

from config import settings
from engine.enums import ClusteringMethod, DistanceMetric, OutlierMethod
from engine.exceptions import EmptyInputError
from engine.points import (
    AnalysisOptions,
    ClusteringOptions,
    DimensionWeight,
    OutlierOptions,
    Point,
    ReductionOptions,
    analyze_points,
    cluster_points,
    correlation_matrix,
    detect_outliers,
    estimate_optimal_k,
    find_similar,
    kmeans,
    reduce_dimensions,
    similarity,
)
from engine.points.clustering import seed_centroids


def _two_groups():
    low = [Point(id=f"a{i}", dimensions={"x": 0.1 * i, "y": 0.1 * (i % 2)}) for i in range(5)]
    high = [Point(id=f"b{i}", dimensions={"x": 10 + 0.1 * i, "y": 10 - 0.1 * (i % 2)}) for i in range(5)]
    return low + high


def test_kmeans_separates_distant_groups(rng):
    points = _two_groups()
    clusters = kmeans(points, k=2, rng=rng)

    assert len(clusters) == 2
    groups = sorted(tuple(sorted({p.id[0] for p in c.points})) for c in clusters)
    assert groups == [("a",), ("b",)]
    for c in clusters:
        assert c.size == len(c.points)
        assert c.separation > 10


def test_every_point_in_exactly_one_cluster_with_bounded_cohesion(rng):
    points = _two_groups() + [Point(id="solo", dimensions={"x": 5.0})]
    clusters = cluster_points(points, ClusteringOptions(k=3), rng=rng)

    ids = [p.id for c in clusters for p in c.points]
    assert sorted(ids) == sorted(p.id for p in points)
    for c in clusters:
        assert c.points
        assert 0.0 < c.cohesion <= 1.0


def test_kmeans_clamps_k_to_point_count(rng):
    points = [Point(id="p1", dimensions={"x": 1.0}), Point(id="p2", dimensions={"x": 2.0})]
    clusters = kmeans(points, k=5, rng=rng)
    assert sum(c.size for c in clusters) == 2
    assert len(clusters) <= 2


def test_identical_points_form_single_tight_cluster(rng):
    points = [Point(id=str(i), dimensions={"x": 3.0, "y": 3.0}) for i in range(4)]
    clusters = kmeans(points, k=1, rng=rng)
    assert len(clusters) == 1
    assert clusters[0].cohesion == 1.0
    assert clusters[0].separation == 0.0
    assert clusters[0].centroid == {"x": 3.0, "y": 3.0}


def test_missing_dimensions_read_as_zero():
    a = Point(id="a", dimensions={"x": 3.0})
    b = Point(id="b", dimensions={"y": 4.0})
    assert similarity(a, b) == pytest.approx(1.0 / 6.0)


def test_cosine_and_manhattan_metrics_cluster(rng):
    points = _two_groups()
    for metric in (DistanceMetric.manhattan, DistanceMetric.cosine):
        clusters = kmeans(points, k=2, metric=metric, rng=rng)
        assert sum(c.size for c in clusters) == len(points)


def test_weights_scale_clustering_but_members_stay_raw(rng):
    points = _two_groups()
    clusters = cluster_points(points, ClusteringOptions(k=2), weights={"x": 2.0}, rng=rng)
    returned = {p.id: p for c in clusters for p in c.points}
    for original in points:
        assert returned[original.id].dimensions == original.dimensions


def test_dbscan_groups_noise_into_single_cluster():
    points = [
        Point(id="n1", dimensions={"x": 0.0, "y": 0.0}),
        Point(id="n2", dimensions={"x": 0.0, "y": 0.1}),
        Point(id="n3", dimensions={"x": 0.1, "y": 0.0}),
        Point(id="far", dimensions={"x": 50.0, "y": 50.0}),
    ]
    clusters = cluster_points(points, ClusteringOptions(method=ClusteringMethod.dbscan, min_cluster_size=2))

    noise = [c for c in clusters if c.is_noise]
    assert len(noise) == 1
    assert [p.id for p in noise[0].points] == ["far"]
    dense = [c for c in clusters if not c.is_noise]
    assert len(dense) == 1 and dense[0].size == 3


def test_hierarchical_clustering_covers_all_points():
    points = _two_groups()
    clusters = cluster_points(points, ClusteringOptions(method=ClusteringMethod.hierarchical, k=2))
    assert len(clusters) == 2
    assert sum(c.size for c in clusters) == len(points)


def test_hierarchical_cosine_accepts_zero_vectors():
    points = [
        Point(id="origin", dimensions={"x": 0.0, "y": 0.0}),
        Point(id="east", dimensions={"x": 1.0}),
        Point(id="north", dimensions={"y": 1.0}),
    ]
    options = ClusteringOptions(
        method=ClusteringMethod.hierarchical,
        k=2,
        distance_metric=DistanceMetric.cosine,
    )
    clusters = cluster_points(points, options)
    assert len(clusters) == 2
    assert sorted(p.id for c in clusters for p in c.points) == ["east", "north", "origin"]


def test_dbscan_cosine_accepts_zero_vectors():
    points = [
        Point(id="origin", dimensions={"x": 0.0, "y": 0.0}),
        Point(id="a", dimensions={"x": 1.0, "y": 0.01}),
        Point(id="b", dimensions={"x": 2.0, "y": 0.02}),
    ]
    options = ClusteringOptions(
        method=ClusteringMethod.dbscan,
        min_cluster_size=2,
        distance_metric=DistanceMetric.cosine,
    )
    clusters = cluster_points(points, options)
    assert sum(c.size for c in clusters) == 3
    noise = [c for c in clusters if c.is_noise]
    assert [p.id for p in noise[0].points] == ["origin"]


def test_correlation_matrix_symmetric_with_unit_diagonal():
    points = [
        Point(id=str(i), dimensions={"x": float(i), "y": 2.0 * i + 1, "z": 5.0, "w": float((i * 7) % 5)})
        for i in range(12)
    ]
    matrix = correlation_matrix(points)
    d = len(matrix.dimensions)
    for i in range(d):
        assert matrix.values[i][i] == 1.0
        for j in range(d):
            assert matrix.values[i][j] == matrix.values[j][i]
            assert -1.0 <= matrix.values[i][j] <= 1.0

    z = matrix.dimensions.index("z")
    x = matrix.dimensions.index("x")
    assert matrix.values[x][z] == 0.0

    top = matrix.significant_pairs[0]
    assert {top.dim1, top.dim2} == {"x", "y"}
    assert top.correlation == pytest.approx(1.0)
    assert top.p_value == pytest.approx(0.0, abs=1e-9)


def test_significant_pairs_sorted_by_strength():
    points = [
        Point(id=str(i), dimensions={"a": float(i), "b": float(i) + (i % 3), "c": -float(i)})
        for i in range(15)
    ]
    pairs = correlation_matrix(points).significant_pairs
    strengths = [abs(p.correlation) for p in pairs]
    assert strengths == sorted(strengths, reverse=True)
    assert all(abs(p.correlation) > settings.correlation_significance_cutoff for p in pairs)


def _with_spike():
    points = [Point(id=f"p{i}", dimensions={"a": 9.0 if i % 2 else 11.0, "b": 1.0}) for i in range(20)]
    points.append(Point(id="spike", dimensions={"a": 20.0, "b": 1.0}))
    return points


def test_zscore_flags_only_the_extreme_point():
    outliers = detect_outliers(_with_spike(), OutlierOptions(threshold=3.0))
    assert [p.id for p in outliers] == ["spike"]


def test_zscore_skips_zero_variance_dimensions():
    points = [Point(id=str(i), dimensions={"flat": 4.0}) for i in range(10)]
    assert detect_outliers(points) == []


def test_iqr_and_isolation_forest_flag_spike():
    points = _with_spike()
    iqr = detect_outliers(points, OutlierOptions(method=OutlierMethod.iqr))
    assert "spike" in {p.id for p in iqr}
    iso = detect_outliers(points, OutlierOptions(method=OutlierMethod.isolation_forest))
    assert "spike" in {p.id for p in iso}


def test_reduce_dimensions_ranks_by_variance():
    points = [
        Point(id=str(i), dimensions={"small": float(i % 2), "large": float(10 * i), "const": 3.0})
        for i in range(8)
    ]
    reduction = reduce_dimensions(points, ReductionOptions(target_dimensions=2))

    assert reduction.original_dimensions == 3
    assert reduction.reduced_dimensions == 2
    assert [c.name for c in reduction.components] == ["PC1", "PC2"]
    assert reduction.components[0].loadings == {"large": 1.0}
    assert reduction.components[1].loadings == {"small": 1.0}
    assert 0.0 < reduction.explained_variance <= 1.0
    assert reduction.explained_variance == pytest.approx(sum(c.variance for c in reduction.components))


def test_find_similar_excludes_target_and_sorts():
    target = Point(id="t", dimensions={"x": 0.0})
    candidates = [
        Point(id="t", dimensions={"x": 0.0}),
        Point(id="far", dimensions={"x": 9.0}),
        Point(id="near", dimensions={"x": 1.0}),
        Point(id="mid", dimensions={"x": 3.0}),
    ]
    results = find_similar(target, candidates, top_k=2)
    assert [r.point.id for r in results] == ["near", "mid"]
    assert results[0].similarity == pytest.approx(0.5)


def test_estimate_optimal_k_small_inputs(rng):
    assert estimate_optimal_k([Point(id="a", dimensions={"x": 1.0})], rng=rng) == 1
    assert estimate_optimal_k([Point(id=str(i), dimensions={"x": float(i)}) for i in range(2)], rng=rng) == 1
    four = [Point(id=str(i), dimensions={"x": float(i)}) for i in range(4)]
    assert estimate_optimal_k(four, rng=rng) == 2


def _three_groups():
    corners = [(0.0, 0.0), (10.0, 0.0), (5.0, 8.660254)]
    offsets = [(0.0, 0.0), (0.05, 0.0), (0.0, 0.05), (0.05, 0.05)]
    return [
        Point(id=f"g{g}-{i}", dimensions={"x": cx + dx, "y": cy + dy})
        for g, (cx, cy) in enumerate(corners)
        for i, (dx, dy) in enumerate(offsets)
    ]


def test_estimate_optimal_k_finds_elbow_at_three_groups():
    for seed in range(10):
        assert estimate_optimal_k(_three_groups(), rng=np.random.default_rng(seed)) == 3


def test_seed_centroids_draws_away_from_chosen_centroid():
    X = np.array([[0.0], [0.0], [0.0], [5.0]])
    for seed in range(50):
        seeds = seed_centroids(X, 2, DistanceMetric.euclidean, np.random.default_rng(seed))
        assert seeds[0][0] != seeds[1][0]


def test_explicit_zero_settings_are_honoured():
    points = [Point(id=str(i), dimensions={"a": float(i)}) for i in range(1, 10)]
    flagged = detect_outliers(points, OutlierOptions(method=OutlierMethod.iqr, threshold=0.0))
    assert [p.id for p in flagged] == ["1", "2", "8", "9"]

    reduction = reduce_dimensions(points, ReductionOptions(target_dimensions=0))
    assert reduction.reduced_dimensions == 0
    assert reduction.components == []


def test_analyze_points_empty_raises():
    with pytest.raises(EmptyInputError):
        analyze_points([])


def test_analyze_points_envelope(rng):
    points = _two_groups()
    options = AnalysisOptions(
        clustering=ClusteringOptions(k=2),
        dimension_reduction=ReductionOptions(),
        weights=[DimensionWeight(dimension="x", weight=1.5)],
    )
    result = analyze_points(points, options, rng=rng)

    assert 0.0 <= result.confidence <= 1.0
    assert result.processing_time_ms >= 0.0
    analysis = result.data
    assert analysis.summary.total_points == 10
    assert analysis.summary.dimensions == 2
    assert 1 <= analysis.summary.optimal_clusters <= 5
    assert analysis.dimension_reduction is not None
    assert sum(c.size for c in analysis.clusters) == 10
