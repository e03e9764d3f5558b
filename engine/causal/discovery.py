"""
Causal discovery by lagged cross-correlation, an approximate Granger screen: for every ordered pair of variables the cause is shifted by 1..max_lag steps against the effect, the lag with the strongest correlation is kept, and the pair becomes a relationship when it is both strong and significant. Relationships are then checked for confounders.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from config import settings
from engine.causal.graph import build_graph
from engine.causal.models import CausalGraph, CausalOptions, CausalRelationship, CausalVariable
from engine.causal.variables import infer_variable_type
from engine.envelope import AnalysisResult, build_result
from engine.exceptions import EmptyInputError, InvalidInputError
from engine.stats import approx_p_value, pearson

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaggedCorrelation:
    strength: float
    p_value: float
    lag: int


def lagged_correlation(cause: Sequence[float], effect: Sequence[float], max_lag: int) -> LaggedCorrelation:
    n = min(len(cause), len(effect))
    if n < max_lag + 2:
        return LaggedCorrelation(strength=0.0, p_value=1.0, lag=0)

    best, best_lag = 0.0, 0
    for lag in range(1, max_lag + 1):
        r = pearson(cause[: n - lag], effect[lag:n])
        if abs(r) > abs(best):
            best, best_lag = r, lag

    return LaggedCorrelation(strength=best, p_value=approx_p_value(best, n - best_lag - 2), lag=best_lag)


def find_confounders(source: str, target: str, series: Mapping[str, Sequence[float]]) -> List[str]:
    threshold = settings.causal_confounder_threshold
    found: List[str] = []
    for candidate, values in series.items():
        if candidate in (source, target):
            continue
        if abs(pearson(values, series[source])) > threshold and abs(pearson(values, series[target])) > threshold:
            found.append(candidate)
    return found


def describe_mechanism(source: str, target: str, strength: float) -> str:
    direction = "positively" if strength > 0 else "negatively"
    magnitude = abs(strength)
    if magnitude > settings.causal_mechanism_strong:
        degree = "strongly"
    elif magnitude > settings.causal_mechanism_moderate:
        degree = "moderately"
    else:
        degree = "weakly"
    return f"{source} {degree} {direction} influences {target}"


def _graph_confidence(relationships: List[CausalRelationship]) -> float:
    if not relationships:
        return settings.causal_empty_graph_confidence
    mean_conf = sum(r.confidence for r in relationships) / len(relationships)
    confounded = sum(1 for r in relationships if r.is_confounded) / len(relationships)
    return max(settings.causal_min_graph_confidence, mean_conf - confounded * settings.causal_confounded_penalty)


def discover_causal_graph(
    series: Mapping[str, Sequence[float]],
    options: Optional[CausalOptions] = None,
) -> AnalysisResult[CausalGraph]:
    started = time.perf_counter()
    if not series:
        raise EmptyInputError("No variables provided for causal discovery")

    options = options or CausalOptions()
    significance = (
        options.significance_level
        if options.significance_level is not None
        else settings.causal_significance_level
    )
    max_lag = options.max_lag if options.max_lag is not None else settings.causal_max_lag
    if max_lag < 1:
        raise InvalidInputError(f"max_lag must be at least 1, got {max_lag}")

    data: Dict[str, List[float]] = {name: [float(v) for v in values] for name, values in series.items()}
    variables = [
        CausalVariable(name=name, type=infer_variable_type(values), values=values)
        for name, values in data.items()
    ]

    precision = settings.causal_round_precision
    relationships: List[CausalRelationship] = []
    for source in data:
        for target in data:
            if source == target:
                continue
            found = lagged_correlation(data[source], data[target], max_lag)
            if abs(found.strength) <= settings.causal_min_strength or found.p_value >= significance:
                continue
            confounders = find_confounders(source, target, data) if options.include_confounders else []
            relationships.append(CausalRelationship(
                source=source,
                target=target,
                strength=round(found.strength, precision),
                confidence=round(1.0 - found.p_value, precision),
                mechanism=describe_mechanism(source, target, found.strength),
                is_confounded=bool(confounders),
                confounders=confounders,
                lag=found.lag,
            ))
            log.debug("%s -> %s strength=%.3f lag=%d p=%.4f", source, target, found.strength, found.lag, found.p_value)

    graph = build_graph(variables, relationships)
    log.info("discovered %d relationship(s) among %d variable(s)", len(relationships), len(variables))
    return build_result(graph, _graph_confidence(relationships), started)
