"""
API scenario route tests for simulation payloads and the include_scenarios switch.
"""

import pytest
from pydantic import ValidationError

from api.requests import ScenarioRequest, ScenarioVariableModel
from api.routes import scenario as scenario_route
from engine.enums import Distribution


def _request(**overrides):
    body = dict(
        variables=[
            ScenarioVariableModel(name="price", base_value=10, min_value=8, max_value=12, distribution=Distribution.normal),
            ScenarioVariableModel(name="units", base_value=100, min_value=50, max_value=150),
        ],
        iterations=200,
        output_metrics=["revenue"],
    )
    body.update(overrides)
    return ScenarioRequest(**body)


@pytest.mark.asyncio
async def test_scenario_route_returns_statistics_and_risk():
    res = await scenario_route.scenario_simulate(_request())
    data = res["data"]

    assert len(data["scenarios"]) == 200
    assert data["scenarios"][0]["id"] == "scenario-0"
    pct = data["statistics"]["percentiles"]["revenue"]
    assert pct["p10"] <= pct["p50"] <= pct["p90"]
    assert set(data["risk_metrics"]) == {"value_at_risk", "conditional_var", "max_drawdown"}
    assert res["confidence"] == pytest.approx(0.85)


@pytest.mark.asyncio
async def test_scenario_route_can_omit_scenarios():
    res = await scenario_route.scenario_simulate(_request(), include_scenarios=False)
    assert res["data"]["scenarios"] == []
    assert "revenue" in res["data"]["statistics"]["mean"]


def test_scenario_request_requires_metrics_and_variables():
    with pytest.raises(ValidationError):
        _request(output_metrics=[])
    with pytest.raises(ValidationError):
        _request(variables=[])
    with pytest.raises(ValidationError):
        _request(iterations=0)
