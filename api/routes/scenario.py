"""
Scenario routes for Monte Carlo simulation over declared input variables.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Query

from api.requests import ScenarioRequest
from api.responses import envelope
from api.routes.common import run_analysis
from api.routes.exception import handle_exceptions
from engine.scenario import ScenarioVariable, simulate_scenario

router = APIRouter(tags=["Scenario"])


def _coerce_query_value(value: Any, cast: Any) -> Any:
    # Allow direct unit-test invocation without FastAPI Query parsing.
    raw = value.default if hasattr(value, "default") else value
    return cast(raw)


@router.post("/scenario/simulate", summary="Monte Carlo simulation with outcome statistics and tail risk")
@handle_exceptions
async def scenario_simulate(
    req: ScenarioRequest,
    include_scenarios: bool = Query(default=True),
) -> Dict[str, Any]:
    include_scenarios = _coerce_query_value(include_scenarios, bool)
    variables = [
        ScenarioVariable(
            name=v.name,
            base_value=v.base_value,
            min_value=v.min_value,
            max_value=v.max_value,
            distribution=v.distribution,
        )
        for v in req.variables
    ]
    result = await run_analysis(
        simulate_scenario,
        variables,
        req.iterations,
        list(req.output_metrics),
        req.correlations,
    )
    payload = envelope(result)
    if not include_scenarios:
        payload["data"]["scenarios"] = []
    return payload
