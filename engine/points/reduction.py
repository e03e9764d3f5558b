"""
Approximate dimensionality reduction by variance ranking.

This is a simplified stand-in for PCA, not a true eigenbasis: the data is
centred, every original dimension's variance is computed, and the top-N
dimensions by variance are reported as components PC1..PCn, each loading fully
on one original dimension with an explained-variance share of its variance over
the total. The ``tsne`` and ``umap`` methods take the same path.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from config import settings
from engine.points.distance import dimension_union, feature_matrix
from engine.points.models import Component, DimensionReduction, Point, ReductionOptions


def reduce_dimensions(
    points: Sequence[Point],
    options: Optional[ReductionOptions] = None,
) -> DimensionReduction:
    options = options or ReductionOptions()
    dimensions = dimension_union(points)
    target = (
        options.target_dimensions
        if options.target_dimensions is not None
        else settings.reduction_target_dimensions
    )
    target = max(0, min(int(target), len(dimensions)))

    if not points or not dimensions:
        return DimensionReduction(
            method=options.method,
            original_dimensions=len(dimensions),
            reduced_dimensions=0,
            explained_variance=0.0,
        )

    X = feature_matrix(points, dimensions)
    centred = X - X.mean(axis=0)
    variances = np.mean(centred * centred, axis=0)
    total = float(variances.sum())

    # stable sort keeps first-seen order among equal variances
    order = np.argsort(-variances, kind="stable")[:target]
    components = [
        Component(
            name=f"PC{rank + 1}",
            loadings={dimensions[idx]: 1.0},
            variance=float(variances[idx] / total) if total > 0 else 0.0,
        )
        for rank, idx in enumerate(order)
    ]

    return DimensionReduction(
        method=options.method,
        original_dimensions=len(dimensions),
        reduced_dimensions=target,
        explained_variance=float(sum(c.variance for c in components)),
        components=components,
    )
