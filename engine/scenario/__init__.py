"""
Monte Carlo scenario simulation over declared input variables.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


from engine.scenario.models import (
    Percentiles,
    RiskMetrics,
    Scenario,
    ScenarioStatistics,
    ScenarioVariable,
    SimulationResult,
)
from engine.scenario.simulation import simulate_scenario

__all__ = [
    "simulate_scenario",
    "Percentiles", "RiskMetrics", "Scenario", "ScenarioStatistics", "ScenarioVariable", "SimulationResult",
]
