"""
Correlation structure across the dimensions of a point set: a symmetric Pearson matrix with unit diagonal and the list of strongly correlated dimension pairs with approximate two-tailed significance.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from config import settings
from engine.points.distance import dimension_union, feature_matrix
from engine.points.models import CorrelationMatrix, Point, SignificantPair
from engine.stats import approx_p_value


def correlation_matrix(points: Sequence[Point], cutoff: float | None = None) -> CorrelationMatrix:
    if cutoff is None:
        cutoff = settings.correlation_significance_cutoff
    dimensions = dimension_union(points)
    d = len(dimensions)
    n = len(points)
    if d == 0 or n == 0:
        return CorrelationMatrix(dimensions=dimensions, values=[[1.0] * d for _ in range(d)])

    X = feature_matrix(points, dimensions)
    centred = X - X.mean(axis=0)
    std = np.sqrt(np.mean(centred * centred, axis=0))
    cov = (centred.T @ centred) / n

    denom = np.outer(std, std)
    corr = np.divide(cov, denom, out=np.zeros_like(cov), where=denom > 0)
    corr = np.clip((corr + corr.T) / 2.0, -1.0, 1.0)
    np.fill_diagonal(corr, 1.0)

    pairs: List[SignificantPair] = []
    for i in range(d):
        for j in range(i + 1, d):
            r = float(corr[i, j])
            if abs(r) > cutoff:
                pairs.append(SignificantPair(
                    dim1=dimensions[i],
                    dim2=dimensions[j],
                    correlation=r,
                    p_value=approx_p_value(r, n - 2),
                ))
    pairs.sort(key=lambda p: abs(p.correlation), reverse=True)

    return CorrelationMatrix(
        dimensions=dimensions,
        values=corr.tolist(),
        significant_pairs=pairs,
    )
