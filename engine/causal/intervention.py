"""
What-if reasoning over a discovered causal graph: propagating a hypothetical value of one variable downstream (intervention), replaying an alternate multi-variable scenario against an observed outcome (counterfactual), and ranking the upstream causes of a target.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import time
from typing import Dict, List, Mapping, Optional, Sequence

from config import settings
from engine.causal.graph import GraphIndex
from engine.causal.models import (
    CausalGraph,
    CounterfactualAnalysis,
    Intervention,
    InterventionAnalysis,
    InterventionEffect,
    RootCauseCandidate,
    SideEffect,
)
from engine.envelope import AnalysisResult, build_result
from engine.exceptions import InvalidInputError

log = logging.getLogger(__name__)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _relative_change(new: float, old: float) -> float:
    return (new - old) / old if old != 0 else 0.0


def _percent_change(after: float, before: float) -> float:
    return (after - before) / before * 100.0 if before != 0 else 0.0


def analyze_intervention(
    graph: CausalGraph,
    variable: str,
    value: float,
    data: Optional[Mapping[str, Sequence[float]]] = None,
) -> AnalysisResult[InterventionAnalysis]:
    started = time.perf_counter()
    index = GraphIndex(graph)
    if variable not in index:
        raise InvalidInputError(f"unknown variable {variable!r}")

    observed: Dict[str, Sequence[float]] = {v.name: v.values for v in graph.variables}
    if data:
        observed.update(data)

    change = _relative_change(float(value), _mean(observed.get(variable, [])))
    effects: List[InterventionEffect] = []
    side_effects: List[SideEffect] = []
    for name, strength in index.path_strengths(variable).items():
        if name not in observed:
            continue
        before = _mean(observed[name])
        after = before * (1.0 + strength * change)
        percent = _percent_change(after, before)

        direct = index.direct(variable, name)
        if direct is not None:
            effects.append(InterventionEffect(
                variable=name,
                before_intervention=before,
                after_intervention=after,
                change_percent=percent,
                confidence=direct.confidence,
            ))
        else:
            side_effects.append(SideEffect(variable=name, effect=percent, is_positive=percent > 0))

    confidence = (
        sum(e.confidence for e in effects) / len(effects)
        if effects
        else settings.causal_default_edge_confidence
    )
    log.info("intervention on %s reaches %d direct and %d indirect variable(s)", variable, len(effects), len(side_effects))
    return build_result(
        InterventionAnalysis(
            intervention=Intervention(variable=variable, value=float(value)),
            effects=effects,
            side_effects=side_effects,
        ),
        confidence,
        started,
    )


def _explain(scenario: Mapping[str, float], difference: Mapping[str, float]) -> str:
    changes = ", ".join(f"{name} = {value:g}" for name, value in scenario.items())
    notable = sorted(
        ((name, delta) for name, delta in difference.items() if abs(delta) > settings.causal_explanation_min_delta),
        key=lambda item: abs(item[1]),
        reverse=True,
    )[: settings.causal_explanation_max_effects]
    if notable:
        effects = ", ".join(f"{name} would change by {delta:+.2f}" for name, delta in notable)
    else:
        effects = "no significant changes would occur"
    return f"If {changes}, then {effects}."


def analyze_counterfactual(
    graph: CausalGraph,
    actual_outcome: Mapping[str, float],
    scenario: Mapping[str, float],
) -> AnalysisResult[CounterfactualAnalysis]:
    started = time.perf_counter()
    if not scenario:
        raise InvalidInputError("Counterfactual scenario must name at least one variable")

    index = GraphIndex(graph)
    outcome: Dict[str, float] = {k: float(v) for k, v in actual_outcome.items()}
    # later variables build on outcomes already moved by earlier ones
    for name, new_value in scenario.items():
        change = _relative_change(float(new_value), float(actual_outcome.get(name, 0.0)))
        for affected, strength in index.path_strengths(name).items():
            if affected in outcome:
                outcome[affected] = outcome[affected] * (1.0 + strength * change)
        outcome[name] = float(new_value)

    difference = {k: outcome.get(k, 0.0) - float(v) for k, v in actual_outcome.items()}
    result = CounterfactualAnalysis(
        actual_outcome=dict(actual_outcome),
        counterfactual_scenario=dict(scenario),
        counterfactual_outcome=outcome,
        difference=difference,
        explanation=_explain(scenario, difference),
    )
    return build_result(result, settings.causal_counterfactual_confidence, started)


def rank_root_causes(graph: CausalGraph, target: str) -> List[RootCauseCandidate]:
    index = GraphIndex(graph)
    candidates: List[RootCauseCandidate] = []
    for name in index.upstream(target):
        direct = index.direct(name, target)
        candidates.append(RootCauseCandidate(
            variable=name,
            contribution=index.path_strengths(name).get(target, 0.0),
            confidence=direct.confidence if direct is not None else settings.causal_default_edge_confidence,
            mechanism=direct.mechanism if direct is not None and direct.mechanism else "Unknown mechanism",
        ))
    return sorted(candidates, key=lambda c: abs(c.contribution), reverse=True)
