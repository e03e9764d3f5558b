"""
Causal inference routes: graph discovery from variable series, intervention and counterfactual what-if analysis, and root-cause ranking.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

from api.requests import (
    CausalDiscoveryRequest,
    CausalGraphModel,
    CounterfactualRequest,
    InterventionRequest,
    RootCauseRequest,
)
from api.responses import envelope, to_payload
from api.routes.common import run_analysis
from api.routes.exception import handle_exceptions
from engine.causal import (
    CausalGraph,
    CausalOptions,
    CausalRelationship,
    CausalVariable,
    analyze_counterfactual,
    analyze_intervention,
    build_graph,
    discover_causal_graph,
    infer_variable_type,
    rank_root_causes,
)

router = APIRouter(tags=["Causal"])


def _to_graph(model: CausalGraphModel) -> CausalGraph:
    variables = [
        CausalVariable(
            name=v.name,
            type=v.type if v.type is not None else infer_variable_type(v.values),
            values=list(v.values),
        )
        for v in model.variables
    ]
    relationships = [
        CausalRelationship(
            source=r.source,
            target=r.target,
            strength=r.strength,
            confidence=r.confidence,
            mechanism=r.mechanism,
            is_confounded=r.is_confounded,
            confounders=list(r.confounders),
            lag=r.lag,
        )
        for r in model.relationships
    ]
    return build_graph(variables, relationships)


@router.post("/causal/discover", summary="Discover a causal graph from per-variable series")
@handle_exceptions
async def causal_discover(req: CausalDiscoveryRequest) -> Dict[str, Any]:
    options = CausalOptions(
        significance_level=req.significance_level,
        max_lag=req.max_lag,
        include_confounders=req.include_confounders,
    )
    result = await run_analysis(discover_causal_graph, req.series, options)
    return envelope(result)


@router.post("/causal/intervention", summary="Propagate a hypothetical value through the causal graph")
@handle_exceptions
async def causal_intervention(req: InterventionRequest) -> Dict[str, Any]:
    result = await run_analysis(analyze_intervention, _to_graph(req.graph), req.variable, req.value, req.data)
    return envelope(result)


@router.post("/causal/counterfactual", summary="Replay an alternate scenario against an observed outcome")
@handle_exceptions
async def causal_counterfactual(req: CounterfactualRequest) -> Dict[str, Any]:
    result = await run_analysis(
        analyze_counterfactual,
        _to_graph(req.graph),
        dict(req.actual_outcome),
        dict(req.scenario),
    )
    return envelope(result)


@router.post("/causal/root-causes", summary="Rank upstream causes of a target variable")
@handle_exceptions
async def causal_root_causes(req: RootCauseRequest) -> Dict[str, Any]:
    candidates = await run_analysis(rank_root_causes, _to_graph(req.graph), req.target)
    return {"target": req.target, "root_causes": to_payload(candidates)}
